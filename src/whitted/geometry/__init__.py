"""Geometry module for shape primitives.

Components:
    sphere: Sphere primitive with geometric ray-sphere intersection
    plane: Infinite plane primitive with fixed (-n) shading normal

All intersection routines are Taichi functions (@ti.func). Each returns a
HitRecord whose hit field is 0 on a miss; there is no sentinel point.

Ray-object intersection follows the pattern:
    record = hit_shape(ray_origin, ray_direction, shape)
"""

from .plane import (
    DegeneratePlaneError,
    Plane,
    hit_plane,
    make_plane,
    plane_from_equation,
    plane_normal,
)
from .sphere import HitRecord, Sphere, hit_sphere, make_miss, make_sphere, sphere_normal

__all__ = [
    "HitRecord",
    "make_miss",
    "Sphere",
    "hit_sphere",
    "make_sphere",
    "sphere_normal",
    "Plane",
    "hit_plane",
    "make_plane",
    "plane_from_equation",
    "plane_normal",
    "DegeneratePlaneError",
]
