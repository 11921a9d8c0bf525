"""Viewport camera for primary ray generation.

The camera is an eye point looking along a forward vector at a flat
viewport placed focal_length away. The viewport is spanned by the right and
up vectors and measures viewport_width x viewport_height world units.

For pixel coordinates (px, py) in an image of width x height:

    center = eye + forward * focal_length
    u = px / width - 0.5          (left to right)
    v = 0.5 - py / height         (row 0 is the top)
    point = center + right * (u * viewport_width) + up * (v * viewport_height)
    ray = (eye, normalize(point - eye))

Pixel coordinates are floats; the render kernel passes pixel centers.

Camera state is an explicit value. Viewport (host-side configuration) is
resolved once per render into a ViewportFrame that is handed to the kernel;
nothing survives from one render to the next.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.whitted.camera.viewport import Viewport
    >>> viewport = Viewport(eye=(0.0, 0.0, 1.0), forward=(0.0, 0.0, -1.0))
    >>> frame = viewport.resolve(800, 800)
    >>> # Pass frame.as_kernel_args() to a kernel and call generate_ray there
"""

from dataclasses import dataclass

import numpy as np
import taichi as ti
import taichi.math as tm

from src.whitted.core.ray import Ray, make_ray, normalize
from src.whitted.errors import SceneConfigurationError

vec3 = tm.vec3


def _unit(values, name: str) -> np.ndarray:
    v = np.asarray(values, dtype=np.float64)
    norm = np.linalg.norm(v)
    if norm == 0.0:
        raise SceneConfigurationError(f"Camera {name} vector is zero")
    return v / norm


# =============================================================================
# Camera Data Structures
# =============================================================================


@dataclass
class Viewport:
    """Camera configuration as given by the scene.

    Attributes:
        eye: Eye position in world space.
        forward: View direction (need not be unit length).
        up: Up direction (need not be unit length).
        focal_length: Distance from the eye to the viewport plane.
        viewport_width: Viewport width in world units; 0 derives it from
            viewport_height and the image aspect ratio.
        viewport_height: Viewport height in world units.
    """

    eye: tuple[float, float, float] = (0.0, 0.0, 1.0)
    forward: tuple[float, float, float] = (0.0, 0.0, -1.0)
    up: tuple[float, float, float] = (0.0, 1.0, 0.0)
    focal_length: float = 1.0
    viewport_width: float = 2.0
    viewport_height: float = 2.0

    def resolve(self, width: int, height: int) -> "ResolvedViewport":
        """Build the orthonormal camera frame for an image size.

        Args:
            width: Image width in pixels.
            height: Image height in pixels.

        Returns:
            The resolved camera frame.

        Raises:
            SceneConfigurationError: If forward or up is zero, or they are
                parallel so no right vector exists.
        """
        forward = _unit(self.forward, "forward")
        up = _unit(self.up, "up")
        right = _unit(np.cross(forward, up), "right (forward x up)")

        viewport_width = self.viewport_width
        if viewport_width == 0.0:
            viewport_width = self.viewport_height * (width / height)

        return ResolvedViewport(
            eye=tuple(float(c) for c in self.eye),
            forward=tuple(float(c) for c in forward),
            up=tuple(float(c) for c in up),
            right=tuple(float(c) for c in right),
            focal_length=float(self.focal_length),
            viewport_width=float(viewport_width),
            viewport_height=float(self.viewport_height),
        )


@dataclass(frozen=True)
class ResolvedViewport:
    """Host-side copy of a resolved camera frame."""

    eye: tuple[float, float, float]
    forward: tuple[float, float, float]
    up: tuple[float, float, float]
    right: tuple[float, float, float]
    focal_length: float
    viewport_width: float
    viewport_height: float

    def as_kernel_args(self) -> tuple:
        """Arguments in the order expected by kernels taking a frame."""
        return (
            vec3(*self.eye),
            vec3(*self.forward),
            vec3(*self.up),
            vec3(*self.right),
            self.focal_length,
            self.viewport_width,
            self.viewport_height,
        )


@ti.dataclass
class ViewportFrame:
    """Resolved camera frame inside Taichi scope.

    Attributes:
        eye: Eye position.
        forward: Unit view direction.
        up: Unit up direction.
        right: Unit right direction, normalize(cross(forward, up)).
        focal_length: Distance from the eye to the viewport plane.
        viewport_width: Viewport width in world units.
        viewport_height: Viewport height in world units.
    """

    eye: vec3
    forward: vec3
    up: vec3
    right: vec3
    focal_length: ti.f32
    viewport_width: ti.f32
    viewport_height: ti.f32


@ti.func
def make_frame(
    eye: vec3,
    forward: vec3,
    up: vec3,
    right: vec3,
    focal_length: ti.f32,
    viewport_width: ti.f32,
    viewport_height: ti.f32,
) -> ViewportFrame:
    return ViewportFrame(
        eye=eye,
        forward=forward,
        up=up,
        right=right,
        focal_length=focal_length,
        viewport_width=viewport_width,
        viewport_height=viewport_height,
    )


# =============================================================================
# Ray Generation (Taichi-compatible)
# =============================================================================


@ti.func
def viewport_center(frame: ViewportFrame) -> vec3:
    return frame.eye + frame.forward * frame.focal_length


@ti.func
def generate_ray(
    frame: ViewportFrame, pixel_x: ti.f32, pixel_y: ti.f32, width: ti.i32, height: ti.i32
) -> Ray:
    """Generate the primary ray through image coordinates (pixel_x, pixel_y).

    Args:
        frame: The resolved camera frame.
        pixel_x: Horizontal pixel coordinate (0 = left edge).
        pixel_y: Vertical pixel coordinate (0 = top edge).
        width: Image width in pixels.
        height: Image height in pixels.

    Returns:
        A Ray from the eye through the matching viewport point.
    """
    u = pixel_x / ti.cast(width, ti.f32) - 0.5
    v = 0.5 - pixel_y / ti.cast(height, ti.f32)

    point = (
        viewport_center(frame)
        + frame.right * (u * frame.viewport_width)
        + frame.up * (v * frame.viewport_height)
    )
    return make_ray(frame.eye, normalize(point - frame.eye))


@ti.func
def generate_pixel_ray(
    frame: ViewportFrame, x: ti.i32, y: ti.i32, width: ti.i32, height: ti.i32
) -> Ray:
    """Generate the primary ray through the center of pixel (x, y)."""
    return generate_ray(frame, ti.cast(x, ti.f32) + 0.5, ti.cast(y, ti.f32) + 0.5, width, height)
