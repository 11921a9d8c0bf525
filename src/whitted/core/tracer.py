"""Depth-bounded Whitted ray tracer.

This module implements the render kernel. For every pixel one primary ray is
traced; at each hit the surface material decides what happens next:

    standard -> ambient + diffuse + specular at the hit point, path ends
    mirror   -> the reflected ray continues the path
    glass    -> a specular highlight is added and the ray refracted through
                the object continues the path (zero if it never exits)
    miss     -> black, path ends

Every branch adds its local term to the result of the next ray, so the
recursion is written as a loop that accumulates color. Depths 0 to MAX_DEPTH
are evaluated; a path still bouncing after that contributes black.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.whitted.core.tracer import render
    >>> from src.whitted.scene.loader import load_scene
    >>> scene, viewport = load_scene("scene1.txt")
    >>> image = render(scene, viewport, 800, 800)  # (800, 800, 3) float32
"""

import logging
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

from src.whitted.camera.viewport import generate_pixel_ray, make_frame
from src.whitted.materials.glass import glass_highlight, transmit_glass
from src.whitted.materials.mirror import scatter_mirror
from src.whitted.materials.standard import shade_standard
from src.whitted.scene.intersection import get_material, nearest_hit
from src.whitted.scene.manager import MaterialType

if TYPE_CHECKING:
    from src.whitted.camera.viewport import Viewport
    from src.whitted.scene.manager import Scene

logger = logging.getLogger(__name__)

# Type alias for 3D vectors
vec3 = tm.vec3

# =============================================================================
# Rendering Constants
# =============================================================================

# Deepest bounce that is still evaluated (depths 0..MAX_DEPTH)
MAX_DEPTH = 5

# =============================================================================
# Render Target (Image Buffer)
# =============================================================================

# Maximum supported image dimensions (preallocated to avoid kernel recompilation)
MAX_IMAGE_WIDTH = 2048
MAX_IMAGE_HEIGHT = 2048

# Image dimensions (actual active size)
_image_width = ti.field(dtype=ti.i32, shape=())
_image_height = ti.field(dtype=ti.i32, shape=())

# Color buffer indexed [x, y] with y = 0 at the top row
_color_buffer = ti.Vector.field(3, dtype=ti.f32, shape=(MAX_IMAGE_WIDTH, MAX_IMAGE_HEIGHT))

# Flag to track if render target is initialized
_render_target_initialized = ti.field(dtype=ti.i32, shape=())

# Scratch fields for single-ray traces
_probe_color = ti.Vector.field(3, dtype=ti.f32, shape=())
_probe_segments = ti.field(dtype=ti.i32, shape=())
_probe_truncated = ti.field(dtype=ti.i32, shape=())


def setup_render_target(width: int, height: int) -> None:
    """Initialize the render target buffer.

    Sets the active image dimensions and clears the buffer.

    Args:
        width: Image width in pixels (max MAX_IMAGE_WIDTH).
        height: Image height in pixels (max MAX_IMAGE_HEIGHT).

    Raises:
        ValueError: If dimensions are not positive or exceed the maximum.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
    if width > MAX_IMAGE_WIDTH or height > MAX_IMAGE_HEIGHT:
        raise ValueError(
            f"Image dimensions ({width}x{height}) exceed maximum supported "
            f"({MAX_IMAGE_WIDTH}x{MAX_IMAGE_HEIGHT})"
        )

    _image_width[None] = width
    _image_height[None] = height
    _render_target_initialized[None] = 1

    clear_render_target()


def clear_render_target() -> None:
    """Clear the render target buffer to black."""
    _color_buffer.fill(0.0)


def get_image_dimensions() -> tuple[int, int]:
    """Get the current render target dimensions.

    Returns:
        Tuple of (width, height).
    """
    return int(_image_width[None]), int(_image_height[None])


def _check_render_target_initialized() -> None:
    """Check if render target is initialized and raise if not."""
    if _render_target_initialized[None] == 0:
        raise RuntimeError("Render target not set up. Call setup_render_target() first.")


# =============================================================================
# Tracing Core
# =============================================================================


@ti.func
def trace_ray(ray_origin: vec3, ray_direction: vec3):
    """Trace one ray through the scene.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The direction of the ray.

    Returns:
        A tuple (color, segments, truncated) where:
        - color: The unclamped color seen along the ray (RGB).
        - segments: Number of depths evaluated (1 for a direct hit or miss).
        - truncated: 1 if the path was still bouncing past MAX_DEPTH.
    """
    origin = ray_origin
    direction = ray_direction
    color = vec3(0.0, 0.0, 0.0)
    segments = 0

    # Active flag for path continuation
    active = 1

    for _depth in range(MAX_DEPTH + 1):
        if active == 1:
            segments += 1
            rec = nearest_hit(origin, direction)

            if rec.hit == 0:
                # Background is black
                active = 0
            else:
                material = get_material(rec.index)

                if material == int(MaterialType.MIRROR):
                    reflected_origin, reflected_direction = scatter_mirror(
                        rec.index, rec.point, direction
                    )
                    origin = reflected_origin
                    direction = reflected_direction

                elif material == int(MaterialType.GLASS):
                    color += glass_highlight(rec.index, rec.point, origin)
                    found, exit_origin, exit_direction = transmit_glass(
                        rec.index, rec.point, direction
                    )
                    if found == 1:
                        origin = exit_origin
                        direction = exit_direction
                    else:
                        active = 0

                else:
                    color += shade_standard(rec.index, rec.point, origin)
                    active = 0

    return color, segments, active


# =============================================================================
# Rendering Kernels
# =============================================================================


@ti.kernel
def _render_kernel(
    width: ti.i32,
    height: ti.i32,
    eye: vec3,
    forward: vec3,
    up: vec3,
    right: vec3,
    focal_length: ti.f32,
    viewport_width: ti.f32,
    viewport_height: ti.f32,
):
    """Trace one ray through the center of every pixel."""
    for x, y in ti.ndrange(width, height):
        frame = make_frame(eye, forward, up, right, focal_length, viewport_width, viewport_height)
        ray = generate_pixel_ray(frame, x, y, width, height)
        color, segments, truncated = trace_ray(ray.origin, ray.direction)
        _color_buffer[x, y] = color


@ti.kernel
def _trace_probe_kernel(origin: vec3, direction: vec3):
    color, segments, truncated = trace_ray(origin, direction)
    _probe_color[None] = color
    _probe_segments[None] = segments
    _probe_truncated[None] = truncated


@ti.kernel
def _render_pixel_kernel(
    pixel_x: ti.i32,
    pixel_y: ti.i32,
    width: ti.i32,
    height: ti.i32,
    eye: vec3,
    forward: vec3,
    up: vec3,
    right: vec3,
    focal_length: ti.f32,
    viewport_width: ti.f32,
    viewport_height: ti.f32,
):
    frame = make_frame(eye, forward, up, right, focal_length, viewport_width, viewport_height)
    ray = generate_pixel_ray(frame, pixel_x, pixel_y, width, height)
    color, segments, truncated = trace_ray(ray.origin, ray.direction)
    _probe_color[None] = color
    _probe_segments[None] = segments
    _probe_truncated[None] = truncated


# =============================================================================
# Public Rendering API
# =============================================================================


@dataclass(frozen=True)
class TraceResult:
    """Outcome of tracing a single ray from Python.

    Attributes:
        color: Unclamped RGB color.
        segments: Number of depths evaluated.
        truncated: True if the path hit the depth limit.
    """

    color: tuple[float, float, float]
    segments: int
    truncated: bool


def trace_single_ray(
    origin: tuple[float, float, float], direction: tuple[float, float, float]
) -> TraceResult:
    """Trace one ray against the committed scene.

    This is a Python-callable function for testing and debugging. For
    images, use render() which processes all pixels in parallel.
    """
    _trace_probe_kernel(vec3(*origin), vec3(*direction))
    return _read_probe()


def render_pixel(viewport: "Viewport", x: int, y: int, width: int, height: int) -> TraceResult:
    """Trace the primary ray through the center of pixel (x, y).

    Uses the committed scene; the render target is not touched.

    Args:
        viewport: The camera configuration.
        x: Pixel column (0 = left).
        y: Pixel row (0 = top).
        width: Image width in pixels.
        height: Image height in pixels.
    """
    frame = viewport.resolve(width, height)
    _render_pixel_kernel(x, y, width, height, *frame.as_kernel_args())
    return _read_probe()


def _read_probe() -> TraceResult:
    c = _probe_color[None]
    return TraceResult(
        color=(float(c[0]), float(c[1]), float(c[2])),
        segments=int(_probe_segments[None]),
        truncated=bool(_probe_truncated[None]),
    )


def render_committed(viewport: "Viewport") -> None:
    """Render the already committed scene into the render target.

    Raises:
        RuntimeError: If render target has not been set up.
    """
    _check_render_target_initialized()

    width, height = get_image_dimensions()
    frame = viewport.resolve(width, height)
    _render_kernel(width, height, *frame.as_kernel_args())


def render(
    scene: "Scene", viewport: "Viewport", width: int, height: int
) -> npt.NDArray[np.float32]:
    """Render a scene to a float image.

    Commits the scene to the primitive and light tables, resets the render
    target and traces one ray per pixel.

    Args:
        scene: The scene to render.
        viewport: The camera configuration.
        width: Image width in pixels.
        height: Image height in pixels.

    Returns:
        The image as an array of shape (height, width, 3) clamped to [0, 1].
    """
    setup_render_target(width, height)
    scene.commit()

    start_time = time.perf_counter()
    render_committed(viewport)
    ti.sync()
    logger.info(
        "Rendered %dx%d (%d primitives, %d lights) in %.2fs",
        width,
        height,
        len(scene.primitives),
        len(scene.lights),
        time.perf_counter() - start_time,
    )

    return get_image_numpy()


def get_image_numpy() -> npt.NDArray[np.float32]:
    """Get the rendered image as a NumPy array.

    Returns the color buffer with values clamped to [0, 1]. The array shape
    is (height, width, 3) with row 0 at the top of the image.

    Raises:
        RuntimeError: If render target has not been set up.
    """
    _check_render_target_initialized()

    width, height = get_image_dimensions()

    # Get raw image data (full buffer) and extract active region
    full_image = _color_buffer.to_numpy()
    image = full_image[:width, :height, :]

    # Transpose from (width, height, 3) to (height, width, 3)
    image = np.transpose(image, (1, 0, 2))

    return np.clip(image, 0.0, 1.0).astype(np.float32)
