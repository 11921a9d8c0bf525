"""Scene module for scene storage, queries and loading.

Components:
    intersection: Primitive table, nearest-hit and shadow queries
    manager: Host-side Scene model committed to the Taichi tables per render
    loader: Scene-file parser producing a Scene and a Viewport

Scene data is organized for kernel access:
    - One primitive table in load order (kind tag + geometry + surface)
    - Light table and ambient color in src.whitted.lights
    - Tables are rewritten by Scene.commit() and read-only while rendering
"""

from .intersection import (
    MAX_PRIMITIVES,
    SELF_HIT_EPSILON,
    SHADOW_EPSILON,
    PrimitiveKind,
    SceneHitRecord,
    add_plane,
    add_sphere,
    clear_scene,
    get_primitive_count,
    intersect_primitive,
    is_occluded,
    nearest_hit,
    primitive_normal,
)
from .loader import load_scene, parse_scene
from .manager import (
    AmbientLight,
    DirectionalLight,
    LightInfo,
    MaterialType,
    PlaneInfo,
    PrimitiveInfo,
    Scene,
    SphereInfo,
    SpotLight,
)

__all__ = [
    # Intersection module
    "PrimitiveKind",
    "SceneHitRecord",
    "add_sphere",
    "add_plane",
    "clear_scene",
    "get_primitive_count",
    "intersect_primitive",
    "primitive_normal",
    "nearest_hit",
    "is_occluded",
    "MAX_PRIMITIVES",
    "SELF_HIT_EPSILON",
    "SHADOW_EPSILON",
    # Manager module
    "Scene",
    "MaterialType",
    "SphereInfo",
    "PlaneInfo",
    "PrimitiveInfo",
    "AmbientLight",
    "DirectionalLight",
    "SpotLight",
    "LightInfo",
    # Loader module
    "load_scene",
    "parse_scene",
]
