"""Image export utilities for rendered images.

The tracer produces linear float colors that may exceed 1. For output each
channel is clamped to [0, 1] and quantized with round(255 * c). No gamma or
tone mapping is applied.

Supported formats:
    - Raw row-major RGB bytes (3 bytes per pixel)
    - PNG (8-bit RGB via Pillow)

Example:
    >>> from src.whitted.core.tracer import render
    >>> from src.whitted.preview.export import save_png
    >>>
    >>> image = render(scene, viewport, 800, 800)
    >>> save_png(image, "results/scene1.png")
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage


def image_to_uint8(image: npt.NDArray[np.floating]) -> npt.NDArray[np.uint8]:
    """Convert a float image to 8-bit channels.

    Args:
        image: Image array of shape (H, W, 3) in linear color.

    Returns:
        Array of shape (H, W, 3) with dtype uint8, round(255 * clamp(c, 0, 1)).

    Raises:
        ValueError: If the image is not (H, W, 3).
    """
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError(f"Expected an (H, W, 3) image, got shape {image.shape}")

    clamped = np.clip(image.astype(np.float64), 0.0, 1.0)
    # floor(x + 0.5) rounds halves up, matching round() on non-negative values
    return np.floor(clamped * 255.0 + 0.5).astype(np.uint8)


def pixel_bytes(image: npt.NDArray[np.floating]) -> bytes:
    """Encode an image as a row-major RGB byte buffer.

    Row 0 is the top of the image; each pixel is three bytes (R, G, B).
    """
    return image_to_uint8(image).tobytes()


def save_png(image: npt.NDArray[np.floating], filepath: str | Path) -> Path:
    """Save a float image as an 8-bit RGB PNG.

    Parent directories are created as needed.

    Args:
        image: Image array of shape (H, W, 3) in linear color.
        filepath: Output file path (should end in .png).

    Returns:
        The path that was written.
    """
    path = Path(filepath)
    path.parent.mkdir(parents=True, exist_ok=True)

    pil_image = PILImage.fromarray(image_to_uint8(image))
    pil_image.save(path)
    return path
