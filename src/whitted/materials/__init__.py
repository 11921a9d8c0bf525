"""Materials module for surface responses.

Components:
    standard: Opaque surfaces shaded with ambient + Lambert + Phong and a
        checkerboard pattern on planes
    mirror: Perfect reflection, no local shading
    glass: Two-interface refraction with a Phong highlight

Every primitive carries exactly one material tag (see
src.whitted.scene.manager.MaterialType). The tracer dispatches on it:

    standard -> local color, path ends
    mirror   -> reflected ray continues the path
    glass    -> highlight is added, transmitted ray continues the path

All material functions are Taichi functions for use inside the render kernel.
"""

from .glass import (
    AIR_IOR,
    GLASS_IOR,
    glass_highlight,
    transmit_glass,
)
from .mirror import REFLECT_EPSILON, scatter_mirror
from .standard import (
    SPECULAR_TINT,
    TILE_SIZE,
    checker_factor,
    lambert_diffuse,
    phong_specular,
    shade_standard,
    surface_checker_factor,
)

__all__ = [
    # Standard material
    "shade_standard",
    "checker_factor",
    "surface_checker_factor",
    "lambert_diffuse",
    "phong_specular",
    "SPECULAR_TINT",
    "TILE_SIZE",
    # Mirror material
    "scatter_mirror",
    "REFLECT_EPSILON",
    # Glass material
    "transmit_glass",
    "glass_highlight",
    "AIR_IOR",
    "GLASS_IOR",
]
