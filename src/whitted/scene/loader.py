"""Scene-file loader.

A scene file is plain text with one command per line: a single-letter
command followed by whitespace-separated numbers. Blank lines and lines
starting with '#' are skipped; unknown commands are ignored.

    e x y z [focal]   eye position, optional focal length
    u x y z [h]       up vector, optional viewport height
    f x y z [w]       forward vector, optional viewport width (0 = from aspect)
    a r g b [_]       ambient color
    d x y z k         light direction; k == 0 directional, otherwise spot
    p x y z c         position and cutoff cosine of the next unpositioned spot
    i r g b [_]       color of the next light without a color
    o|r|t x y z w     standard|mirror|glass object:
                        w > 0   sphere centered at (x, y, z) with radius w
                        w <= 0  plane x*X + y*Y + z*Z + w = 0
    c r g b n         color and shininess of the next object without a color

Directives that configure "the next" light or object apply to the first
matching entity in load order, so they may arrive in any order relative to
each other.

Example:
    >>> from src.whitted.scene.loader import load_scene
    >>> scene, viewport = load_scene("res/scene1.txt")
    >>> len(scene.primitives)
    3
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from src.whitted.camera.viewport import Viewport
from src.whitted.errors import SceneParseError
from src.whitted.geometry.plane import plane_from_equation
from src.whitted.scene.manager import MaterialType, Scene

logger = logging.getLogger(__name__)

OBJECT_MATERIALS = {
    "o": MaterialType.STANDARD,
    "r": MaterialType.MIRROR,
    "t": MaterialType.GLASS,
}

# Minimum number of values each command needs
REQUIRED_VALUES = {
    "e": 3,
    "u": 3,
    "f": 3,
    "a": 3,
    "d": 4,
    "p": 4,
    "i": 3,
    "o": 4,
    "r": 4,
    "t": 4,
    "c": 4,
}


def _apply_command(
    command: str, values: list[float], scene: Scene, viewport: Viewport
) -> None:
    if command == "e":
        viewport.eye = (values[0], values[1], values[2])
        if len(values) > 3:
            viewport.focal_length = values[3]

    elif command == "u":
        viewport.up = (values[0], values[1], values[2])
        if len(values) > 3:
            viewport.viewport_height = values[3]

    elif command == "f":
        viewport.forward = (values[0], values[1], values[2])
        if len(values) > 3:
            viewport.viewport_width = values[3]

    elif command == "a":
        scene.set_ambient(values[:3])

    elif command == "d":
        if values[3] == 0.0:
            scene.add_directional_light(values[:3])
        else:
            scene.add_spot_light(values[:3])

    elif command == "p":
        scene.position_next_spot(values[:3], values[3])

    elif command == "i":
        scene.color_next_light(values[:3])

    elif command in OBJECT_MATERIALS:
        material = OBJECT_MATERIALS[command]
        if values[3] > 0.0:
            scene.add_sphere(values[:3], values[3], material)
        else:
            normal, offset = plane_from_equation(values[0], values[1], values[2], values[3])
            scene.add_plane(normal, offset, material)

    elif command == "c":
        scene.color_next_primitive(values[:3], values[3])


def parse_scene(lines: Iterable[str], source: str = "<string>") -> tuple[Scene, Viewport]:
    """Build a scene and camera from scene-file lines.

    Args:
        lines: The lines of the scene file.
        source: Name used in error messages.

    Returns:
        Tuple of (scene, viewport). The viewport starts from its defaults
        and is updated by e/u/f commands.

    Raises:
        SceneParseError: If a line has non-numeric values or too few values.
        SceneConfigurationError: If an object is degenerate (zero plane normal).
    """
    scene = Scene()
    viewport = Viewport()

    for line_number, raw_line in enumerate(lines, start=1):
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue

        command, *tokens = line.split()
        if len(command) != 1 or command not in REQUIRED_VALUES:
            logger.debug("%s:%d: ignoring unknown command %r", source, line_number, command)
            continue

        try:
            values = [float(token) for token in tokens]
        except ValueError as e:
            raise SceneParseError(str(e), source, line_number) from e

        needed = REQUIRED_VALUES[command]
        if len(values) < needed:
            raise SceneParseError(
                f"command '{command}' needs {needed} values, got {len(values)}",
                source,
                line_number,
            )

        try:
            _apply_command(command, values, scene, viewport)
        except SceneParseError:
            raise
        except ValueError as e:
            raise SceneParseError(str(e), source, line_number) from e

    return scene, viewport


def load_scene(path: str | Path) -> tuple[Scene, Viewport]:
    """Read a scene file.

    Args:
        path: Path to the scene file.

    Returns:
        Tuple of (scene, viewport).

    Raises:
        OSError: If the file cannot be read.
        SceneParseError: If the file contents are malformed or not UTF-8.
    """
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as f:
            scene, viewport = parse_scene(f, source=str(path))
    except UnicodeDecodeError as e:
        raise SceneParseError(f"not a UTF-8 text file ({e.reason})", str(path), 0) from e

    logger.info(
        "Loaded %s: %d primitive(s), %d light(s)",
        path,
        len(scene.primitives),
        len(scene.lights),
    )
    return scene, viewport
