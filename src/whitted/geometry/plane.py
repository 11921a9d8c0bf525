"""Infinite plane primitive with ray-plane intersection.

A plane is stored as a unit normal n and a signed offset d; points p on the
plane satisfy dot(n, p) = d. Scene input gives the plane as the equation
a*x + b*y + c*z + w = 0, which plane_from_equation() converts by normalizing
(a, b, c) and scaling the offset to match.

Intersection solves dot(n, origin + t * dir) = d for t:

    t = (d - dot(n, origin)) / dot(n, dir)

Rays with |dot(n, dir)| below PARALLEL_EPSILON are treated as parallel and
miss; hits behind the origin (t < 0) are rejected.

The shading normal is always -n, whatever side the ray arrives from. All
planes therefore shade as if lit from the -n side.
"""

import math

import taichi as ti
import taichi.math as tm

from src.whitted.errors import SceneConfigurationError
from src.whitted.geometry.sphere import HitRecord, make_miss

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3

PARALLEL_EPSILON = 1e-6


class DegeneratePlaneError(SceneConfigurationError):
    """Raised when a plane is built from a zero-length normal."""


@ti.dataclass
class Plane:
    """An infinite plane dot(normal, p) = offset.

    Attributes:
        normal: Unit plane normal (vec3).
        offset: Signed distance of the plane from the origin along normal.
    """

    normal: vec3
    offset: ti.f32


def plane_from_equation(
    a: float, b: float, c: float, w: float
) -> tuple[tuple[float, float, float], float]:
    """Convert a*x + b*y + c*z + w = 0 into (unit normal, offset).

    This runs on the host when the scene is built, so a zero normal is a
    configuration error rather than a per-ray condition.

    Returns:
        Tuple of (normal, offset) with dot(normal, p) = offset on the plane.

    Raises:
        DegeneratePlaneError: If (a, b, c) is the zero vector.
    """
    norm = math.sqrt(a * a + b * b + c * c)
    if norm == 0.0:
        raise DegeneratePlaneError("Plane normal is zero vector")
    return (a / norm, b / norm, c / norm), -w / norm


@ti.func
def hit_plane(ray_origin: vec3, ray_direction: vec3, plane: Plane) -> HitRecord:
    """Test for ray-plane intersection.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The direction vector of the ray.
        plane: The plane to test intersection against.

    Returns:
        A HitRecord; hit == 0 for parallel rays and hits behind the origin.
    """
    result = make_miss()
    denom = tm.dot(plane.normal, ray_direction)

    if ti.abs(denom) >= PARALLEL_EPSILON:
        t = (plane.offset - tm.dot(plane.normal, ray_origin)) / denom
        if t >= 0.0:
            result = HitRecord(hit=1, t=t, point=ray_origin + t * ray_direction)

    return result


@ti.func
def plane_normal(plane: Plane) -> vec3:
    """Shading normal of the plane (the negated stored normal)."""
    return -plane.normal


@ti.func
def make_plane(normal: vec3, offset: ti.f32) -> Plane:
    return Plane(normal=normal, offset=offset)
