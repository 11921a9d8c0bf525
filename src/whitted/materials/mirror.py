"""Mirror (perfect specular) material.

A mirror contributes no local shading. The incoming direction is reflected
about the surface normal,

    R = I - 2(I . N)N

and the new ray starts slightly along R so it leaves the surface. The
mirror's color is whatever the reflected ray sees.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.whitted.materials.mirror import scatter_mirror
    >>> # Use within a Taichi kernel:
    >>> # origin, direction = scatter_mirror(index, hit_point, incident_dir)
"""

import taichi as ti
import taichi.math as tm

from src.whitted.core.ray import reflect
from src.whitted.scene.intersection import primitive_normal

# Type alias for 3D vectors
vec3 = tm.vec3

# Offset of the reflected ray origin along the reflected direction
REFLECT_EPSILON = 1e-3


@ti.func
def scatter_mirror(index: ti.i32, point: vec3, incident_direction: vec3):
    """Build the reflected ray leaving a mirror surface.

    Args:
        index: Row of the hit primitive.
        point: The hit point.
        incident_direction: Direction of the incoming ray.

    Returns:
        A tuple (origin, direction) of the reflected ray.
    """
    normal = primitive_normal(index, point)
    direction = reflect(incident_direction, normal)
    origin = point + direction * REFLECT_EPSILON
    return origin, direction
