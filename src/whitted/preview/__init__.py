"""Preview module for image output.

Components:
    export: Float image to RGB bytes, uint8 arrays and PNG files

Example:
    >>> from src.whitted.preview import save_png
    >>> save_png(image, "output.png")
"""

from src.whitted.preview.export import image_to_uint8, pixel_bytes, save_png

__all__ = [
    "image_to_uint8",
    "pixel_bytes",
    "save_png",
]
