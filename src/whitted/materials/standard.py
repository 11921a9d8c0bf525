"""Standard (opaque) material: local illumination.

The color of a standard surface at a hit point is:

    color = base * ambient
          + sum over lights L not rejected and not occluded:
                max(N . L, 0) * base * checker * light_color        (diffuse)
              + max(R . V, 0)^shininess * SPECULAR_TINT * light_color (specular)

where R = reflect(-L, N) and V points from the hit point back toward the ray
origin. The checkerboard factor applies to planes only and modulates the
diffuse term alone; ambient and specular always use the unmodified color.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.whitted.materials.standard import shade_standard
    >>> # Use within a Taichi kernel:
    >>> # color = shade_standard(primitive_index, hit_point, ray_origin)
"""

import taichi as ti
import taichi.math as tm

from src.whitted.core.ray import normalize, reflect
from src.whitted.lights.sources import (
    get_ambient_color,
    get_light_color,
    light_direction_at,
    num_lights,
)
from src.whitted.scene.intersection import (
    get_color,
    get_shininess,
    is_occluded,
    is_plane,
    primitive_normal,
)

# Type alias for 3D vectors
vec3 = tm.vec3

# Checkerboard tile edge length in world units
TILE_SIZE = 0.5

# Multiplier applied to the base color on dark tiles
DARK_TILE_FACTOR = 0.5

# Fixed specular highlight color
SPECULAR_TINT = vec3(0.7, 0.7, 0.7)


@ti.func
def _tile_index(coord: ti.f32) -> ti.f32:
    # Negative coordinates use the mirrored formula so the tile at 0 is not doubled
    index = 0.0
    if coord < 0.0:
        index = ti.floor((0.5 - coord) / TILE_SIZE)
    else:
        index = ti.floor(coord / TILE_SIZE)
    return index


@ti.func
def checker_factor(point: vec3) -> ti.f32:
    """Checkerboard multiplier for a point on a plane.

    The x and y tile indices are summed and reduced modulo 2; odd sums are
    dark tiles.

    Args:
        point: World-space hit point.

    Returns:
        DARK_TILE_FACTOR on dark tiles, 1.0 otherwise.
    """
    total = _tile_index(point.x) + _tile_index(point.y)
    parity = (total * 0.5 - ti.floor(total * 0.5)) * 2.0
    factor = 1.0
    if parity > 0.5:
        factor = DARK_TILE_FACTOR
    return factor


@ti.func
def surface_checker_factor(index: ti.i32, point: vec3) -> ti.f32:
    """Checkerboard multiplier for a primitive; always 1.0 for non-planes."""
    factor = 1.0
    if is_plane(index):
        factor = checker_factor(point)
    return factor


@ti.func
def lambert_diffuse(
    normal: vec3, light_direction: vec3, base_color: vec3, checker: ti.f32, light_color: vec3
) -> vec3:
    """Lambertian diffuse term for one light."""
    n_dot_l = tm.max(tm.dot(normal, light_direction), 0.0)
    return n_dot_l * base_color * checker * light_color


@ti.func
def phong_specular(
    normal: vec3, light_direction: vec3, view_direction: vec3, shininess: ti.f32, light_color: vec3
) -> vec3:
    """Phong specular term for one light.

    Args:
        normal: Unit surface normal.
        light_direction: Unit vector from the point toward the light.
        view_direction: Unit vector from the point toward the viewer.
        shininess: Phong exponent of the surface.
        light_color: Light color (RGB).

    Returns:
        The specular contribution (RGB).
    """
    reflected = normalize(reflect(-light_direction, normal))
    r_dot_v = tm.max(tm.dot(reflected, view_direction), 0.0)
    return (r_dot_v**shininess) * SPECULAR_TINT * light_color


@ti.func
def shade_standard(index: ti.i32, point: vec3, view_origin: vec3) -> vec3:
    """Local illumination of a standard surface at a hit point.

    Args:
        index: Row of the hit primitive.
        point: The hit point.
        view_origin: Origin of the ray that hit the surface.

    Returns:
        The unclamped surface color (RGB).
    """
    base_color = get_color(index)
    shininess = get_shininess(index)
    normal = normalize(primitive_normal(index, point))
    view_direction = normalize(view_origin - point)
    checker = surface_checker_factor(index, point)

    color = base_color * get_ambient_color()

    for j in range(num_lights[None]):
        light_direction, light_distance, usable = light_direction_at(j, point)
        if usable == 1:
            if is_occluded(point, light_direction, light_distance) == 0:
                light_color = get_light_color(j)
                color += lambert_diffuse(normal, light_direction, base_color, checker, light_color)
                color += phong_specular(
                    normal, light_direction, view_direction, shininess, light_color
                )

    return color
