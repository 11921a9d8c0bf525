"""Camera module for viewport setup and primary ray generation.

Components:
    viewport: Eye/forward/up viewport camera

Camera responsibilities:
    - Normalize the forward and up vectors and derive the right vector
    - Derive the viewport width from the aspect ratio when not given
    - Map pixel coordinates to world-space primary rays

Ray generation runs inside the render kernel, one ray per pixel center.
"""

from .viewport import (
    ResolvedViewport,
    Viewport,
    ViewportFrame,
    generate_pixel_ray,
    generate_ray,
    make_frame,
    viewport_center,
)

__all__ = [
    "Viewport",
    "ResolvedViewport",
    "ViewportFrame",
    "make_frame",
    "generate_ray",
    "generate_pixel_ray",
    "viewport_center",
]
