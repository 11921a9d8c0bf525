"""Core rendering module.

Components:
    ray: Ray data structure and vector utilities
    tracer: Depth-bounded Whitted tracer, render target and render kernel

The tracer resolves the nearest hit for each ray and dispatches on the
surface material: standard surfaces are shaded locally, mirrors spawn a
reflected ray and glass spawns a refracted ray through the object. Chains
stop after MAX_DEPTH bounces.

All per-ray operations use Taichi functions; the per-pixel loop is a single
Taichi kernel.
"""

from .ray import (
    Ray,
    dot,
    length,
    make_ray,
    near_zero,
    normalize,
    ray_at,
    reflect,
    refract,
    vec3,
)

# Note: tracer is NOT imported here to avoid circular imports.
# Import directly from src.whitted.core.tracer when needed.

__all__ = [
    "Ray",
    "ray_at",
    "make_ray",
    "vec3",
    "length",
    "dot",
    "normalize",
    "reflect",
    "refract",
    "near_zero",
]
