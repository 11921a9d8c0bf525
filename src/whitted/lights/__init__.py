"""Lights module for ambient, directional and spot light sources.

Components:
    sources: Light table storage and per-point direction/distance/cone queries

Lights are stored in Taichi fields in load order. The ambient color is a
single scene-wide value applied once per shaded point; every other light is
evaluated per point with its own shadow probe.
"""

from .sources import (
    MAX_LIGHTS,
    UNBOUNDED_DISTANCE,
    LightKind,
    add_directional_light,
    add_spot_light,
    clear_lights,
    get_ambient,
    get_ambient_color,
    get_light_color,
    get_light_count,
    light_direction_at,
    num_lights,
    set_ambient,
)

__all__ = [
    "LightKind",
    "MAX_LIGHTS",
    "UNBOUNDED_DISTANCE",
    "add_directional_light",
    "add_spot_light",
    "clear_lights",
    "set_ambient",
    "get_ambient",
    "get_ambient_color",
    "get_light_color",
    "get_light_count",
    "light_direction_at",
    "num_lights",
]
