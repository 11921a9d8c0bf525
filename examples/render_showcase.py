#!/usr/bin/env python3
"""Render a showcase scene built with the Scene API.

The scene has a checkered floor, a mirror sphere, a glass sphere and a
colored standard sphere, lit by a directional light and a spot light.
Scene files in examples/scenes/ can be rendered with the whitted-render
command instead.

Usage:
    python -m examples.render_showcase [options]

Options:
    --width WIDTH       Image width in pixels (default: 800)
    --height HEIGHT     Image height in pixels (default: 600)
    --output OUTPUT     Output file path (default: showcase.png)
    --arch {cpu,gpu}    Taichi backend (default: cpu)

Example:
    python -m examples.render_showcase --width 400 --height 300
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import taichi as ti

logger = logging.getLogger("examples.render_showcase")


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render the showcase scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=800,
        help="Image width in pixels (default: 800)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=600,
        help="Image height in pixels (default: 600)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="showcase.png",
        help="Output file path (default: showcase.png)",
    )
    parser.add_argument(
        "--arch",
        choices=("cpu", "gpu"),
        default="cpu",
        help="Taichi backend (default: cpu)",
    )
    return parser.parse_args()


def build_showcase_scene():
    """Create the showcase scene and its camera.

    Returns:
        Tuple of (scene, viewport).
    """
    # Lazy imports to allow Taichi initialization first
    from src.whitted.camera.viewport import Viewport
    from src.whitted.scene.manager import MaterialType, Scene

    scene = Scene()
    scene.set_ambient((0.1, 0.1, 0.15))

    # Floor y = -1; the stored normal points down so the shading normal faces up
    scene.add_plane((0.0, -1.0, 0.0), 1.0, color=(0.8, 0.8, 0.8), shininess=10.0)

    scene.add_sphere((-1.1, -0.3, -2.5), 0.7, MaterialType.MIRROR, color=(1.0, 1.0, 1.0))
    scene.add_sphere(
        (0.3, -0.5, -1.2), 0.5, MaterialType.GLASS, color=(1.0, 1.0, 1.0), shininess=60.0
    )
    scene.add_sphere((1.2, -0.2, -3.0), 0.8, color=(0.9, 0.3, 0.2), shininess=25.0)

    scene.add_directional_light((-0.5, -1.0, -0.7), color=(0.6, 0.6, 0.6))
    scene.add_spot_light(
        (0.0, -1.0, -0.3), position=(0.5, 3.0, -1.5), cutoff=0.85, color=(0.5, 0.5, 0.4)
    )

    viewport = Viewport(
        eye=(0.0, 0.4, 2.0),
        forward=(0.0, -0.15, -1.0),
        up=(0.0, 1.0, 0.0),
        focal_length=1.0,
        viewport_width=0.0,
        viewport_height=1.2,
    )
    return scene, viewport


def render_showcase(width: int = 800, height: int = 600, output_path: str = "showcase.png") -> Path:
    """Render the showcase scene and save it as a PNG.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        output_path: Output file path (PNG).

    Returns:
        Path to the saved image file.
    """
    from src.whitted.core.tracer import render
    from src.whitted.preview.export import save_png

    scene, viewport = build_showcase_scene()
    image = render(scene, viewport, width, height)
    return save_png(image, output_path)


def main() -> int:
    """Main entry point."""
    args = parse_args()
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    ti.init(arch=ti.gpu if args.arch == "gpu" else ti.cpu)

    try:
        output = render_showcase(args.width, args.height, args.output)
    except (OSError, ValueError) as e:
        logger.error("Render failed: %s", e)
        return 1

    logger.info("Saved to: %s", output.absolute())
    return 0


if __name__ == "__main__":
    sys.exit(main())
