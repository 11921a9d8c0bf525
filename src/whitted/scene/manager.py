"""Host-side scene model.

This module provides the Scene class, an in-memory description of one
render: the ambient color, an ordered list of lights and an ordered list of
primitives. It tolerates partially configured entities:

- A primitive whose color was never set renders with black and shininess 0.
- A light whose color was never set has color black.
- A spot light without a position or cutoff is stored as invalid and
  contributes nothing.

Scene.commit() writes the whole model into the Taichi primitive and light
tables, replacing whatever a previous scene left there. It is called once per
render; the tables are read-only while the kernel runs.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.whitted.scene.manager import MaterialType, Scene
    >>> scene = Scene()
    >>> scene.set_ambient((0.1, 0.1, 0.1))
    >>> scene.add_sphere((0, 0, -2), 1.0, color=(0.8, 0.2, 0.2), shininess=10.0)
    >>> scene.add_sphere((2, 0, -3), 1.0, MaterialType.MIRROR)
    >>> scene.add_directional_light((0, -1, -1), color=(0.7, 0.7, 0.7))
    >>> scene.commit()
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Union

from src.whitted.errors import SceneConfigurationError
from src.whitted.geometry.plane import plane_from_equation
from src.whitted.lights.sources import (
    MAX_LIGHTS,
    add_directional_light,
    add_spot_light,
    clear_lights,
    set_ambient,
)
from src.whitted.scene.intersection import (
    MAX_PRIMITIVES,
    add_plane,
    add_sphere,
    clear_scene,
)

logger = logging.getLogger(__name__)

Vec3 = tuple[float, float, float]

BLACK: Vec3 = (0.0, 0.0, 0.0)


class MaterialType(IntEnum):
    """Surface material tags.

    Used for material dispatch in the tracer.
    """

    STANDARD = 0
    MIRROR = 1
    GLASS = 2


def _as_vec3(values) -> Vec3:
    x, y, z = values
    return (float(x), float(y), float(z))


def _unit(values) -> Vec3:
    x, y, z = _as_vec3(values)
    n = math.sqrt(x * x + y * y + z * z)
    if n == 0.0:
        return (0.0, 0.0, 0.0)
    return (x / n, y / n, z / n)


@dataclass
class SphereInfo:
    """A sphere in the scene.

    Attributes:
        center: The center of the sphere.
        radius: The radius of the sphere (positive).
        material: The surface material.
        color: Base color, or None if not configured yet.
        shininess: Phong exponent.
    """

    center: Vec3
    radius: float
    material: MaterialType = MaterialType.STANDARD
    color: Vec3 | None = None
    shininess: float = 0.0

    @property
    def color_set(self) -> bool:
        return self.color is not None


@dataclass
class PlaneInfo:
    """A plane dot(normal, p) = offset in the scene.

    Attributes:
        normal: Unit plane normal.
        offset: Signed plane offset along the normal.
        material: The surface material.
        color: Base color, or None if not configured yet.
        shininess: Phong exponent.
    """

    normal: Vec3
    offset: float
    material: MaterialType = MaterialType.STANDARD
    color: Vec3 | None = None
    shininess: float = 0.0

    @property
    def color_set(self) -> bool:
        return self.color is not None


PrimitiveInfo = Union[SphereInfo, PlaneInfo]


@dataclass
class AmbientLight:
    """The scene-wide ambient term."""

    color: Vec3 = BLACK


@dataclass
class DirectionalLight:
    """A light infinitely far away shining along direction.

    The direction is normalized on construction.
    """

    direction: Vec3
    color: Vec3 | None = None

    def __post_init__(self) -> None:
        self.direction = _unit(self.direction)

    @property
    def color_set(self) -> bool:
        return self.color is not None


@dataclass
class SpotLight:
    """A positioned light shining along a cone axis.

    Attributes:
        direction: Unit cone axis (normalized on construction).
        position: Light position, or None if not configured yet.
        cutoff: Cosine of the cone half-angle, or None if not configured yet.
        color: Light color, or None if not configured yet.
    """

    direction: Vec3
    position: Vec3 | None = None
    cutoff: float | None = None
    color: Vec3 | None = None

    def __post_init__(self) -> None:
        self.direction = _unit(self.direction)

    @property
    def color_set(self) -> bool:
        return self.color is not None

    @property
    def is_configured(self) -> bool:
        """True once both position and cutoff are set."""
        return self.position is not None and self.cutoff is not None


LightInfo = Union[DirectionalLight, SpotLight]


@dataclass
class Scene:
    """Everything one render needs apart from the camera.

    Attributes:
        ambient: The ambient light.
        lights: Directional and spot lights in load order.
        primitives: Spheres and planes in load order.
    """

    ambient: AmbientLight = field(default_factory=AmbientLight)
    lights: list[LightInfo] = field(default_factory=list)
    primitives: list[PrimitiveInfo] = field(default_factory=list)

    # -------------------------------------------------------------------------
    # Building
    # -------------------------------------------------------------------------

    def set_ambient(self, color) -> AmbientLight:
        self.ambient = AmbientLight(_as_vec3(color))
        return self.ambient

    def add_sphere(
        self,
        center,
        radius: float,
        material: MaterialType = MaterialType.STANDARD,
        color=None,
        shininess: float = 0.0,
    ) -> SphereInfo:
        """Add a sphere.

        Raises:
            SceneConfigurationError: If radius is not positive or the
                primitive table is full.
        """
        if radius <= 0.0:
            raise SceneConfigurationError(f"Sphere radius must be positive, got {radius}")
        self._check_primitive_capacity()
        sphere = SphereInfo(
            center=_as_vec3(center),
            radius=float(radius),
            material=MaterialType(material),
            color=_as_vec3(color) if color is not None else None,
            shininess=float(shininess),
        )
        self.primitives.append(sphere)
        return sphere

    def add_plane(
        self,
        normal,
        offset: float,
        material: MaterialType = MaterialType.STANDARD,
        color=None,
        shininess: float = 0.0,
    ) -> PlaneInfo:
        """Add the plane dot(normal, p) = offset.

        The normal need not be unit length; normal and offset are scaled
        together.

        Raises:
            DegeneratePlaneError: If normal is the zero vector.
            SceneConfigurationError: If the primitive table is full.
        """
        a, b, c = _as_vec3(normal)
        unit_normal, unit_offset = plane_from_equation(a, b, c, -float(offset))
        self._check_primitive_capacity()
        plane = PlaneInfo(
            normal=unit_normal,
            offset=unit_offset,
            material=MaterialType(material),
            color=_as_vec3(color) if color is not None else None,
            shininess=float(shininess),
        )
        self.primitives.append(plane)
        return plane

    def add_directional_light(self, direction, color=None) -> DirectionalLight:
        self._check_light_capacity()
        light = DirectionalLight(
            direction=_as_vec3(direction),
            color=_as_vec3(color) if color is not None else None,
        )
        self.lights.append(light)
        return light

    def add_spot_light(
        self, direction, position=None, cutoff: float | None = None, color=None
    ) -> SpotLight:
        self._check_light_capacity()
        light = SpotLight(
            direction=_as_vec3(direction),
            position=_as_vec3(position) if position is not None else None,
            cutoff=float(cutoff) if cutoff is not None else None,
            color=_as_vec3(color) if color is not None else None,
        )
        self.lights.append(light)
        return light

    def _check_primitive_capacity(self) -> None:
        if len(self.primitives) >= MAX_PRIMITIVES:
            raise SceneConfigurationError(
                f"Maximum number of primitives ({MAX_PRIMITIVES}) exceeded"
            )

    def _check_light_capacity(self) -> None:
        if len(self.lights) >= MAX_LIGHTS:
            raise SceneConfigurationError(f"Maximum number of lights ({MAX_LIGHTS}) exceeded")

    # -------------------------------------------------------------------------
    # Deferred configuration (first unconfigured entity receives the value)
    # -------------------------------------------------------------------------

    def color_next_primitive(self, color, shininess: float) -> PrimitiveInfo | None:
        """Set color and shininess on the first primitive without a color.

        Returns:
            The primitive that was configured, or None if every primitive
            already has a color.
        """
        for primitive in self.primitives:
            if not primitive.color_set:
                primitive.color = _as_vec3(color)
                primitive.shininess = float(shininess)
                return primitive
        logger.debug("Color %s ignored: no unconfigured primitive", color)
        return None

    def color_next_light(self, color) -> LightInfo | None:
        """Set the color of the first light without a color.

        Returns:
            The light that was configured, or None if none was waiting.
        """
        for light in self.lights:
            if not light.color_set:
                light.color = _as_vec3(color)
                return light
        logger.debug("Light color %s ignored: no unconfigured light", color)
        return None

    def position_next_spot(self, position, cutoff: float) -> SpotLight | None:
        """Set position and cutoff on the first spot light without a cutoff.

        Returns:
            The spot light that was configured, or None if none was waiting.
        """
        for light in self.lights:
            if isinstance(light, SpotLight) and light.cutoff is None:
                light.position = _as_vec3(position)
                light.cutoff = float(cutoff)
                return light
        logger.debug("Spot position %s ignored: no unpositioned spot light", position)
        return None

    # -------------------------------------------------------------------------
    # Upload
    # -------------------------------------------------------------------------

    def commit(self) -> None:
        """Write the scene into the Taichi primitive and light tables.

        Previous table contents are discarded. Unset colors are written as
        black.
        """
        clear_scene()
        clear_lights()
        set_ambient(self.ambient.color)

        for primitive in self.primitives:
            color = primitive.color if primitive.color is not None else BLACK
            if isinstance(primitive, SphereInfo):
                add_sphere(
                    primitive.center,
                    primitive.radius,
                    int(primitive.material),
                    color,
                    primitive.shininess,
                )
            else:
                add_plane(
                    primitive.normal,
                    primitive.offset,
                    int(primitive.material),
                    color,
                    primitive.shininess,
                )

        unusable = 0
        for light in self.lights:
            color = light.color if light.color is not None else BLACK
            if isinstance(light, DirectionalLight):
                add_directional_light(light.direction, color)
            else:
                if not light.is_configured:
                    unusable += 1
                add_spot_light(light.direction, light.position, light.cutoff, color)

        if unusable:
            logger.warning("%d spot light(s) without position or cutoff will not emit", unusable)
        logger.debug(
            "Committed scene: %d primitive(s), %d light(s)",
            len(self.primitives),
            len(self.lights),
        )

    def clear(self) -> None:
        """Remove all lights and primitives and reset the ambient color."""
        self.ambient = AmbientLight()
        self.lights.clear()
        self.primitives.clear()
