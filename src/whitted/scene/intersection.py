"""Scene-level primitive storage and intersection queries.

Primitives live in a single table of Taichi fields (structure of arrays) in
load order. Each row carries a kind tag (sphere or plane) and the geometric
data for that kind, plus the surface material, base color and shininess.
Iterating rows in order gives deterministic tie-breaking: on an exact
distance tie the earlier primitive wins.

Queries:
    nearest_hit: closest primitive beyond SELF_HIT_EPSILON (primary and
        secondary rays)
    is_occluded: boolean shadow probe toward a light
    intersect_primitive: single-primitive test used to find the exit point
        of a refracted ray on the same object

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.whitted.scene.intersection import add_sphere, add_plane, clear_scene
    >>> clear_scene()
    >>> add_sphere((0, 0, -1), 0.5, material=0, color=(1, 0, 0), shininess=10.0)
    >>> add_plane((0, -1, 0), 1.0, material=0, color=(1, 1, 1), shininess=0.0)
    >>> # Use nearest_hit within a Taichi kernel
"""

from enum import IntEnum

import taichi as ti
import taichi.math as tm

from src.whitted.geometry.plane import Plane, hit_plane, plane_normal
from src.whitted.geometry.sphere import HitRecord, Sphere, hit_sphere, make_miss, sphere_normal

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3


class PrimitiveKind(IntEnum):
    """Tag stored per primitive row."""

    SPHERE = 0
    PLANE = 1


# Hits at or below this distance from the ray origin are ignored
SELF_HIT_EPSILON = 1e-3

# Shadow probes start this far along the light direction
SHADOW_EPSILON = 1e-2


@ti.dataclass
class SceneHitRecord:
    """Record of a ray-scene intersection.

    Attributes:
        hit: 1 if any primitive was hit, 0 on a miss.
        distance: Distance from the ray origin to the hit point.
        point: The hit point. Only valid if hit == 1.
        index: Row of the hit primitive. -1 on a miss.
    """

    hit: ti.i32
    distance: ti.f32
    point: vec3
    index: ti.i32


# Maximum number of primitives supported in the scene
MAX_PRIMITIVES = 1024

# Primitive storage: Structure of Arrays layout
# prim_vectors holds the sphere center or the unit plane normal
# prim_scalars holds the sphere radius or the plane offset
prim_kinds = ti.field(dtype=ti.i32, shape=MAX_PRIMITIVES)
prim_vectors = ti.Vector.field(3, dtype=ti.f32, shape=MAX_PRIMITIVES)
prim_scalars = ti.field(dtype=ti.f32, shape=MAX_PRIMITIVES)
prim_materials = ti.field(dtype=ti.i32, shape=MAX_PRIMITIVES)
prim_colors = ti.Vector.field(3, dtype=ti.f32, shape=MAX_PRIMITIVES)
prim_shininess = ti.field(dtype=ti.f32, shape=MAX_PRIMITIVES)
num_primitives = ti.field(dtype=ti.i32, shape=())


def clear_scene() -> None:
    """Clear all primitives from the scene.

    Resets the primitive count to zero. The field data is overwritten when
    new primitives are added.
    """
    num_primitives[None] = 0


def _add_primitive(
    kind: PrimitiveKind,
    vector: vec3,
    scalar: float,
    material: int,
    color: tuple[float, float, float],
    shininess: float,
) -> int:
    idx = num_primitives[None]
    if idx >= MAX_PRIMITIVES:
        raise RuntimeError(f"Maximum number of primitives ({MAX_PRIMITIVES}) exceeded")
    prim_kinds[idx] = int(kind)
    prim_vectors[idx] = [vector[0], vector[1], vector[2]]
    prim_scalars[idx] = scalar
    prim_materials[idx] = material
    prim_colors[idx] = [color[0], color[1], color[2]]
    prim_shininess[idx] = shininess
    num_primitives[None] = idx + 1
    return idx


def add_sphere(
    center: vec3,
    radius: float,
    material: int = 0,
    color: tuple[float, float, float] = (0.0, 0.0, 0.0),
    shininess: float = 0.0,
) -> int:
    """Add a sphere to the scene.

    Args:
        center: The center point of the sphere.
        radius: The radius of the sphere (should be positive).
        material: The MaterialType value of the surface.
        color: Base color (RGB).
        shininess: Phong exponent.

    Returns:
        The row index of the added sphere.

    Raises:
        RuntimeError: If the maximum number of primitives is exceeded.
    """
    return _add_primitive(PrimitiveKind.SPHERE, center, radius, material, color, shininess)


def add_plane(
    normal: vec3,
    offset: float,
    material: int = 0,
    color: tuple[float, float, float] = (0.0, 0.0, 0.0),
    shininess: float = 0.0,
) -> int:
    """Add a plane dot(normal, p) = offset to the scene.

    Args:
        normal: Unit plane normal.
        offset: Signed plane offset along the normal.
        material: The MaterialType value of the surface.
        color: Base color (RGB).
        shininess: Phong exponent.

    Returns:
        The row index of the added plane.

    Raises:
        RuntimeError: If the maximum number of primitives is exceeded.
    """
    return _add_primitive(PrimitiveKind.PLANE, normal, offset, material, color, shininess)


def get_primitive_count() -> int:
    """Get the number of primitives in the scene."""
    return int(num_primitives[None])


# =============================================================================
# Per-primitive dispatch
# =============================================================================


@ti.func
def intersect_primitive(index: ti.i32, ray_origin: vec3, ray_direction: vec3) -> HitRecord:
    """Intersect a ray with one primitive row, dispatching on its kind."""
    rec = make_miss()
    if prim_kinds[index] == int(PrimitiveKind.SPHERE):
        sphere = Sphere(center=prim_vectors[index], radius=prim_scalars[index])
        rec = hit_sphere(ray_origin, ray_direction, sphere)
    else:
        plane = Plane(normal=prim_vectors[index], offset=prim_scalars[index])
        rec = hit_plane(ray_origin, ray_direction, plane)
    return rec


@ti.func
def primitive_normal(index: ti.i32, point: vec3) -> vec3:
    """Shading normal of a primitive row at a surface point."""
    n = vec3(0.0, 0.0, 0.0)
    if prim_kinds[index] == int(PrimitiveKind.SPHERE):
        sphere = Sphere(center=prim_vectors[index], radius=prim_scalars[index])
        n = sphere_normal(sphere, point)
    else:
        plane = Plane(normal=prim_vectors[index], offset=prim_scalars[index])
        n = plane_normal(plane)
    return n


@ti.func
def is_plane(index: ti.i32) -> ti.i32:
    return prim_kinds[index] == int(PrimitiveKind.PLANE)


@ti.func
def get_material(index: ti.i32) -> ti.i32:
    return prim_materials[index]


@ti.func
def get_color(index: ti.i32) -> vec3:
    return prim_colors[index]


@ti.func
def get_shininess(index: ti.i32) -> ti.f32:
    return prim_shininess[index]


# =============================================================================
# Scene queries
# =============================================================================


@ti.func
def _make_miss_record() -> SceneHitRecord:
    """Create a SceneHitRecord indicating no intersection."""
    return SceneHitRecord(hit=0, distance=0.0, point=vec3(0.0, 0.0, 0.0), index=-1)


@ti.func
def nearest_hit(ray_origin: vec3, ray_direction: vec3) -> SceneHitRecord:
    """Find the closest primitive hit along a ray.

    Hits within SELF_HIT_EPSILON of the origin are discarded so secondary
    rays do not re-hit the surface they start on. Candidates are compared
    with strict less-than, so the first primitive in load order wins ties.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The direction vector of the ray.

    Returns:
        A SceneHitRecord; hit == 0 if nothing was hit.
    """
    result = _make_miss_record()
    closest = 0.0

    for i in range(num_primitives[None]):
        rec = intersect_primitive(i, ray_origin, ray_direction)
        if rec.hit == 1:
            distance = tm.length(rec.point - ray_origin)
            if distance > SELF_HIT_EPSILON and (result.hit == 0 or distance < closest):
                closest = distance
                result = SceneHitRecord(hit=1, distance=distance, point=rec.point, index=i)

    return result


@ti.func
def is_occluded(point: vec3, light_direction: vec3, light_distance: ti.f32) -> ti.i32:
    """Shadow probe from a surface point toward a light.

    The probe starts SHADOW_EPSILON along light_direction to leave the
    originating surface. Any primitive hit closer to point than
    light_distance occludes the light.

    Args:
        point: The surface point being lit.
        light_direction: Unit direction from point toward the light.
        light_distance: Distance to the light (very large for directional).

    Returns:
        1 if the light is blocked, 0 otherwise.
    """
    occluded = 0
    probe_origin = point + light_direction * SHADOW_EPSILON

    for i in range(num_primitives[None]):
        if occluded == 0:
            rec = intersect_primitive(i, probe_origin, light_direction)
            if rec.hit == 1:
                if tm.length(rec.point - point) < light_distance:
                    occluded = 1

    return occluded
