"""Sphere primitive with geometric ray-sphere intersection.

The intersection uses the geometric (projection) method rather than the
quadratic formula:

1. Project the vector from the ray origin to the sphere center onto the
   unit ray direction.
2. Compute the squared perpendicular distance from the center to the ray
   line. If it exceeds radius^2 the ray misses.
3. Otherwise the half chord gives both roots. The nearer root is returned
   when it is non-negative, else the farther root, so a ray starting inside
   the sphere reports its exit point.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.whitted.geometry.sphere import Sphere, hit_sphere
    >>> sphere = Sphere(center=ti.math.vec3(0, 0, -1), radius=0.5)
    >>> # Use hit_sphere within a Taichi kernel
"""

import taichi as ti
import taichi.math as tm

from src.whitted.core.ray import normalize

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3


@ti.dataclass
class Sphere:
    """A sphere defined by center point and radius.

    Attributes:
        center: The center point of the sphere (vec3).
        radius: The radius of the sphere (positive float).
    """

    center: vec3
    radius: ti.f32


@ti.dataclass
class HitRecord:
    """Result of a single primitive intersection test.

    Attributes:
        hit: 1 if the ray intersected the primitive, 0 otherwise.
        t: Ray parameter of the intersection. Only valid if hit == 1.
        point: The intersection point. Only valid if hit == 1.
    """

    hit: ti.i32
    t: ti.f32
    point: vec3


@ti.func
def make_miss() -> HitRecord:
    """Create a HitRecord indicating no intersection."""
    return HitRecord(hit=0, t=0.0, point=vec3(0.0, 0.0, 0.0))


@ti.func
def hit_sphere(ray_origin: vec3, ray_direction: vec3, sphere: Sphere) -> HitRecord:
    """Test for ray-sphere intersection.

    The direction is normalized internally, so t is the Euclidean distance
    from the ray origin to the returned point.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The direction vector of the ray (need not be normalized).
        sphere: The sphere to test intersection against.

    Returns:
        A HitRecord for the nearest intersection with t >= 0.
    """
    direction = normalize(ray_direction)
    to_center = sphere.center - ray_origin

    # Projection of the center onto the ray line
    proj = tm.dot(direction, to_center)
    dist_sq = tm.dot(to_center, to_center) - proj * proj
    rad_sq = sphere.radius * sphere.radius

    result = make_miss()
    if dist_sq <= rad_sq:
        half_chord = ti.sqrt(rad_sq - dist_sq)
        t_near = proj - half_chord
        t_far = proj + half_chord

        if t_near >= 0.0:
            result = HitRecord(hit=1, t=t_near, point=ray_origin + t_near * direction)
        elif t_far >= 0.0:
            result = HitRecord(hit=1, t=t_far, point=ray_origin + t_far * direction)

    return result


@ti.func
def sphere_normal(sphere: Sphere, point: vec3) -> vec3:
    """Outward unit normal of the sphere at a surface point."""
    return normalize(point - sphere.center)


@ti.func
def make_sphere(center: vec3, radius: ti.f32) -> Sphere:
    return Sphere(center=center, radius=radius)
