"""Render a batch of scene files to PNG images.

Each scene is rendered with freshly loaded scene and camera state; nothing
carries over between scenes. A scene that cannot be read or is misconfigured
is logged and skipped, and the batch continues with the next one.

Usage:
    whitted-render [options] SCENE [SCENE ...]

Options:
    --width WIDTH         Image width in pixels (default: 800)
    --height HEIGHT       Image height in pixels (default: 800)
    --output-dir DIR      Directory for output images (default: results)
    --arch {cpu,gpu}      Taichi backend (default: cpu)
    --verbose             Log debug messages
    --quiet               Only log warnings and errors

Example:
    whitted-render res/scene1.txt res/scene2.txt --width 400 --height 400
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path

import taichi as ti

from src.whitted.errors import SceneConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_WIDTH = 800
DEFAULT_HEIGHT = 800
DEFAULT_OUTPUT_DIR = "results"


@dataclass
class BatchSettings:
    """Settings shared by every scene in a batch.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        output_dir: Directory the PNG files are written to.
    """

    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    output_dir: Path = Path(DEFAULT_OUTPUT_DIR)


@dataclass
class BatchResult:
    """Outcome of rendering one scene file.

    Attributes:
        scene: The scene file path.
        output: The written image, or None if the scene was skipped.
        error: Why the scene was skipped, or None on success.
    """

    scene: Path
    output: Path | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def output_path_for(scene_path: str | Path, output_dir: str | Path) -> Path:
    """Map a scene file to its image path: output_dir/<stem>.png."""
    return Path(output_dir) / f"{Path(scene_path).stem}.png"


def render_scene_file(
    scene_path: str | Path,
    output_dir: str | Path = DEFAULT_OUTPUT_DIR,
    width: int = DEFAULT_WIDTH,
    height: int = DEFAULT_HEIGHT,
) -> Path:
    """Load, render and save one scene file.

    Args:
        scene_path: Path to the scene file.
        output_dir: Directory for the output PNG.
        width: Image width in pixels.
        height: Image height in pixels.

    Returns:
        Path to the saved image file.

    Raises:
        OSError: If the scene file cannot be read or the image cannot be written.
        SceneConfigurationError: If the scene is malformed.
    """
    # Lazy imports so Taichi fields are created after ti.init()
    from src.whitted.core.tracer import render
    from src.whitted.preview.export import save_png
    from src.whitted.scene.loader import load_scene

    scene, viewport = load_scene(scene_path)
    image = render(scene, viewport, width, height)
    return save_png(image, output_path_for(scene_path, output_dir))


def render_batch(
    scene_paths: Iterable[str | Path], settings: BatchSettings | None = None
) -> list[BatchResult]:
    """Render several scene files, skipping the ones that fail.

    Args:
        scene_paths: Scene files in render order.
        settings: Output size and directory; defaults to BatchSettings().

    Returns:
        One BatchResult per scene, in the same order.
    """
    settings = settings or BatchSettings()
    results: list[BatchResult] = []

    for scene_path in scene_paths:
        path = Path(scene_path)
        logger.info("Processing: %s", path)
        try:
            output = render_scene_file(path, settings.output_dir, settings.width, settings.height)
        except (OSError, SceneConfigurationError) as e:
            logger.error("Skipping %s: %s", path, e)
            results.append(BatchResult(scene=path, error=str(e)))
            continue

        logger.info("Saved: %s", output)
        results.append(BatchResult(scene=path, output=output))

    return results


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render scene files with the Whitted ray caster.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "scenes",
        nargs="+",
        help="Scene files to render",
    )
    parser.add_argument(
        "--width",
        type=int,
        default=DEFAULT_WIDTH,
        help=f"Image width in pixels (default: {DEFAULT_WIDTH})",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=DEFAULT_HEIGHT,
        help=f"Image height in pixels (default: {DEFAULT_HEIGHT})",
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default=DEFAULT_OUTPUT_DIR,
        help=f"Directory for output images (default: {DEFAULT_OUTPUT_DIR})",
    )
    parser.add_argument(
        "--arch",
        choices=("cpu", "gpu"),
        default="cpu",
        help="Taichi backend (default: cpu)",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "--verbose",
        action="store_true",
        help="Log debug messages",
    )
    verbosity.add_argument(
        "--quiet",
        action="store_true",
        help="Only log warnings and errors",
    )
    return parser.parse_args(argv)


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Configure root logging for command-line use."""
    level = logging.INFO
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    configure_logging(verbose=args.verbose, quiet=args.quiet)

    ti.init(arch=ti.gpu if args.arch == "gpu" else ti.cpu)

    settings = BatchSettings(
        width=args.width,
        height=args.height,
        output_dir=Path(args.output_dir),
    )
    results = render_batch(args.scenes, settings)

    failed = [r for r in results if not r.ok]
    logger.info("Rendered %d of %d scene(s)", len(results) - len(failed), len(results))
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
