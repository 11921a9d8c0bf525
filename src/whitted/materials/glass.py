"""Glass (refractive) material.

A glass hit bends the ray twice: once entering the object (air to glass)
and once leaving it (glass to air). The exit point is found by intersecting
the internal ray with the same primitive only. Whenever Snell's law has no
solution (total internal reflection, detected as a near-zero refracted
vector) the reflected direction is used instead.

Glass never receives ambient or diffuse light. Its color is the color seen
along the transmitted ray plus a Phong highlight summed over all lights that
reach the entry point.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.whitted.materials.glass import transmit_glass, glass_highlight
    >>> # Use within a Taichi kernel:
    >>> # found, origin, direction = transmit_glass(index, hit_point, incident_dir)
    >>> # highlight = glass_highlight(index, hit_point, ray_origin)
"""

import taichi as ti
import taichi.math as tm

from src.whitted.core.ray import near_zero, normalize, reflect, refract
from src.whitted.lights.sources import get_light_color, light_direction_at, num_lights
from src.whitted.materials.standard import phong_specular
from src.whitted.scene.intersection import (
    get_shininess,
    intersect_primitive,
    is_occluded,
    primitive_normal,
)

# Type alias for 3D vectors
vec3 = tm.vec3

# Indices of refraction
AIR_IOR = 1.0
GLASS_IOR = 1.5

# Refracted vectors shorter than this are treated as total internal reflection
DEGENERATE_LENGTH = 0.01

# Offset of internal and exit ray origins along their directions
GLASS_EPSILON = 1e-2


@ti.func
def _refract_or_reflect(incident: vec3, normal: vec3, eta: ti.f32) -> vec3:
    direction = refract(incident, normal, eta)
    if near_zero(direction, DEGENERATE_LENGTH):
        direction = reflect(incident, normal)
    return normalize(direction)


@ti.func
def transmit_glass(index: ti.i32, point: vec3, incident_direction: vec3):
    """Refract a ray into a glass primitive and back out of it.

    Args:
        index: Row of the hit primitive.
        point: The entry hit point.
        incident_direction: Direction of the incoming ray.

    Returns:
        A tuple (found, origin, direction) where:
        - found: 1 if the ray left the object, 0 if no exit point exists.
        - origin: Origin of the outgoing ray. Only valid if found == 1.
        - direction: Direction of the outgoing ray. Only valid if found == 1.
    """
    incident = normalize(incident_direction)
    normal = primitive_normal(index, point)

    # Entering: air -> glass
    inside = _refract_or_reflect(incident, normal, AIR_IOR / GLASS_IOR)
    exit_rec = intersect_primitive(index, point + inside * GLASS_EPSILON, inside)

    found = 0
    origin = vec3(0.0, 0.0, 0.0)
    direction = vec3(0.0, 0.0, 0.0)

    if exit_rec.hit == 1:
        # Leaving: glass -> air, normal flipped to face the internal ray
        exit_normal = -primitive_normal(index, exit_rec.point)
        direction = _refract_or_reflect(inside, exit_normal, GLASS_IOR / AIR_IOR)
        origin = exit_rec.point + direction * GLASS_EPSILON
        found = 1

    return found, origin, direction


@ti.func
def glass_highlight(index: ti.i32, point: vec3, view_origin: vec3) -> vec3:
    """Phong highlight on a glass surface summed over unoccluded lights.

    Args:
        index: Row of the hit primitive.
        point: The entry hit point.
        view_origin: Origin of the ray that hit the surface.

    Returns:
        The specular contribution (RGB).
    """
    normal = normalize(primitive_normal(index, point))
    view_direction = normalize(view_origin - point)
    shininess = get_shininess(index)

    highlight = vec3(0.0, 0.0, 0.0)
    for j in range(num_lights[None]):
        light_direction, light_distance, usable = light_direction_at(j, point)
        if usable == 1:
            if is_occluded(point, light_direction, light_distance) == 0:
                highlight += phong_specular(
                    normal, light_direction, view_direction, shininess, get_light_color(j)
                )

    return highlight
