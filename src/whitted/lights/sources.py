"""Light source storage and per-point light queries.

The scene holds one ambient color plus an ordered table of positional and
directional lights:

- Directional lights shine along a fixed unit direction from infinitely far
  away. Seen from a surface point the light lies along -direction at
  unbounded distance.
- Spot lights sit at a position and shine along a unit axis. Points whose
  angle from the axis exceeds the cutoff (cosine) receive nothing.

A spot light is only usable once both its position and cutoff have been
configured. This is tracked with an explicit valid flag per row; an invalid
spot light contributes nothing.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.whitted.lights.sources import add_directional_light, set_ambient
    >>> set_ambient((0.1, 0.1, 0.1))
    >>> add_directional_light((0.0, -1.0, 0.0), (1.0, 1.0, 1.0))
"""

import math
from enum import IntEnum

import taichi as ti
import taichi.math as tm

from src.whitted.core.ray import normalize

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3


class LightKind(IntEnum):
    """Tag stored per light row.

    The scene's single ambient color lives in its own field, not in the table.
    """

    DIRECTIONAL = 1
    SPOT = 2


# Distance reported for directional lights
UNBOUNDED_DISTANCE = 1e30

# Maximum number of lights supported in the scene
MAX_LIGHTS = 256

# Light storage: Structure of Arrays layout
light_kinds = ti.field(dtype=ti.i32, shape=MAX_LIGHTS)
light_directions = ti.Vector.field(3, dtype=ti.f32, shape=MAX_LIGHTS)
light_positions = ti.Vector.field(3, dtype=ti.f32, shape=MAX_LIGHTS)
light_cutoffs = ti.field(dtype=ti.f32, shape=MAX_LIGHTS)
light_colors = ti.Vector.field(3, dtype=ti.f32, shape=MAX_LIGHTS)
light_valid = ti.field(dtype=ti.i32, shape=MAX_LIGHTS)
num_lights = ti.field(dtype=ti.i32, shape=())

# Scene-wide ambient color
ambient_color = ti.Vector.field(3, dtype=ti.f32, shape=())


def _unit(v: tuple[float, float, float]) -> tuple[float, float, float]:
    n = math.sqrt(v[0] * v[0] + v[1] * v[1] + v[2] * v[2])
    if n == 0.0:
        return (0.0, 0.0, 0.0)
    return (v[0] / n, v[1] / n, v[2] / n)


def clear_lights() -> None:
    """Remove all lights and reset the ambient color to black."""
    num_lights[None] = 0
    ambient_color[None] = [0.0, 0.0, 0.0]


def set_ambient(color: tuple[float, float, float]) -> None:
    """Set the scene-wide ambient color."""
    ambient_color[None] = [color[0], color[1], color[2]]


def get_ambient() -> tuple[float, float, float]:
    c = ambient_color[None]
    return (float(c[0]), float(c[1]), float(c[2]))


def _add_light(
    kind: LightKind,
    direction: tuple[float, float, float],
    position: tuple[float, float, float],
    cutoff: float,
    color: tuple[float, float, float],
    valid: bool,
) -> int:
    idx = num_lights[None]
    if idx >= MAX_LIGHTS:
        raise RuntimeError(f"Maximum number of lights ({MAX_LIGHTS}) exceeded")
    light_kinds[idx] = int(kind)
    light_directions[idx] = list(_unit(direction))
    light_positions[idx] = [position[0], position[1], position[2]]
    light_cutoffs[idx] = cutoff
    light_colors[idx] = [color[0], color[1], color[2]]
    light_valid[idx] = 1 if valid else 0
    num_lights[None] = idx + 1
    return idx


def add_directional_light(
    direction: tuple[float, float, float],
    color: tuple[float, float, float] = (0.0, 0.0, 0.0),
) -> int:
    """Add a directional light.

    Args:
        direction: Direction the light travels in (normalized on storage).
        color: Light color (RGB).

    Returns:
        The row index of the added light.

    Raises:
        RuntimeError: If the maximum number of lights is exceeded.
    """
    return _add_light(LightKind.DIRECTIONAL, direction, (0.0, 0.0, 0.0), 0.0, color, True)


def add_spot_light(
    direction: tuple[float, float, float],
    position: tuple[float, float, float] | None = None,
    cutoff: float | None = None,
    color: tuple[float, float, float] = (0.0, 0.0, 0.0),
) -> int:
    """Add a spot light.

    The light is stored as invalid (contributes nothing) unless both
    position and cutoff are given.

    Args:
        direction: Cone axis (normalized on storage).
        position: Light position, or None if not configured.
        cutoff: Cosine of the cone half-angle, or None if not configured.
        color: Light color (RGB).

    Returns:
        The row index of the added light.

    Raises:
        RuntimeError: If the maximum number of lights is exceeded.
    """
    valid = position is not None and cutoff is not None
    return _add_light(
        LightKind.SPOT,
        direction,
        position if position is not None else (0.0, 0.0, 0.0),
        cutoff if cutoff is not None else -1.0,
        color,
        valid,
    )


def get_light_count() -> int:
    """Get the number of lights in the table (ambient excluded)."""
    return int(num_lights[None])


# =============================================================================
# Per-point light queries (Taichi-compatible)
# =============================================================================


@ti.func
def get_light_color(index: ti.i32) -> vec3:
    return light_colors[index]


@ti.func
def get_ambient_color() -> vec3:
    return ambient_color[None]


@ti.func
def light_direction_at(index: ti.i32, point: vec3):
    """Resolve the direction and distance to a light from a surface point.

    Spot lights are rejected here (before any shadow probe) when invalid or
    when the point lies outside the cone.

    Args:
        index: Row of the light.
        point: The surface point being lit.

    Returns:
        A tuple (direction, distance, usable) where:
        - direction: Unit vector from point toward the light.
        - distance: Distance to the light (UNBOUNDED_DISTANCE if directional).
        - usable: 1 if the light can reach the point, 0 otherwise.
    """
    direction = vec3(0.0, 0.0, 0.0)
    distance = UNBOUNDED_DISTANCE
    usable = 0

    if light_kinds[index] == int(LightKind.DIRECTIONAL):
        direction = -light_directions[index]
        usable = 1
    elif light_kinds[index] == int(LightKind.SPOT) and light_valid[index] == 1:
        to_light = light_positions[index] - point
        distance = tm.length(to_light)
        direction = normalize(to_light)
        cos_angle = tm.dot(-direction, light_directions[index])
        if cos_angle >= light_cutoffs[index]:
            usable = 1

    return direction, distance, usable
