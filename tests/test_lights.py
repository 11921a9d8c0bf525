"""Unit tests for light storage and per-point light queries.

Tests cover:
- Ambient color storage
- Directional lights (direction reversed, unbounded distance)
- Spot lights inside and outside their cone
- Spot lights that were never positioned
"""

import math

import pytest
import taichi as ti


def _query(index, point):
    from src.whitted.lights.sources import light_direction_at, vec3

    direction = ti.Vector.field(3, dtype=ti.f32, shape=())
    distance = ti.field(dtype=ti.f32, shape=())
    usable = ti.field(dtype=ti.i32, shape=())

    @ti.kernel
    def test_kernel(i: ti.i32, p: vec3):
        d, dist, ok = light_direction_at(i, p)
        direction[None] = d
        distance[None] = dist
        usable[None] = ok

    test_kernel(index, vec3(*point))
    return direction[None], distance[None], usable[None]


class TestLightStorage:
    """Tests for the light table."""

    def test_ambient_round_trip(self):
        from src.whitted.lights.sources import get_ambient, set_ambient

        set_ambient((0.1, 0.2, 0.3))
        assert get_ambient() == pytest.approx((0.1, 0.2, 0.3))

    def test_clear_lights_resets_ambient(self):
        from src.whitted.lights.sources import (
            add_directional_light,
            clear_lights,
            get_ambient,
            get_light_count,
            set_ambient,
        )

        set_ambient((0.5, 0.5, 0.5))
        add_directional_light((0.0, -1.0, 0.0), (1.0, 1.0, 1.0))
        assert get_light_count() == 1

        clear_lights()
        assert get_light_count() == 0
        assert get_ambient() == pytest.approx((0.0, 0.0, 0.0))

    def test_direction_is_stored_normalized(self):
        from src.whitted.lights.sources import add_directional_light, light_directions

        idx = add_directional_light((0.0, -3.0, 4.0))
        d = light_directions[idx]
        assert abs(d[1] + 0.6) < 1e-6
        assert abs(d[2] - 0.8) < 1e-6


class TestDirectionalLight:
    """Tests for directional light queries."""

    def test_points_against_travel_direction(self):
        from src.whitted.lights.sources import UNBOUNDED_DISTANCE, add_directional_light

        idx = add_directional_light((0.0, -2.0, 0.0), (1.0, 1.0, 1.0))
        d, dist, usable = _query(idx, (5.0, 0.0, -3.0))

        assert usable == 1
        assert abs(d[0]) < 1e-6
        assert abs(d[1] - 1.0) < 1e-6
        assert abs(d[2]) < 1e-6
        assert dist == pytest.approx(UNBOUNDED_DISTANCE, rel=1e-3)


class TestSpotLight:
    """Tests for spot light queries."""

    def test_inside_cone(self):
        from src.whitted.lights.sources import add_spot_light

        idx = add_spot_light((0.0, -1.0, 0.0), position=(0.0, 4.0, 0.0), cutoff=0.9)
        d, dist, usable = _query(idx, (0.0, 0.0, 0.0))

        assert usable == 1
        assert abs(d[1] - 1.0) < 1e-6
        assert abs(dist - 4.0) < 1e-5

    def test_outside_cone_is_rejected(self):
        from src.whitted.lights.sources import add_spot_light

        # 45 degrees off-axis against a cutoff of cos(30 degrees)
        idx = add_spot_light(
            (0.0, -1.0, 0.0), position=(0.0, 4.0, 0.0), cutoff=math.cos(math.radians(30.0))
        )
        _, _, usable = _query(idx, (4.0, 0.0, 0.0))
        assert usable == 0

    def test_cone_edge_is_inclusive(self):
        from src.whitted.lights.sources import add_spot_light

        idx = add_spot_light((0.0, -1.0, 0.0), position=(0.0, 1.0, 0.0), cutoff=0.5)
        # cos_angle = 1 / sqrt(1 + 1) ~= 0.707 >= 0.5
        _, _, usable = _query(idx, (1.0, 0.0, 0.0))
        assert usable == 1

    def test_unpositioned_spot_is_unusable(self):
        from src.whitted.lights.sources import add_spot_light, light_valid

        idx = add_spot_light((0.0, -1.0, 0.0), color=(1.0, 1.0, 1.0))
        assert light_valid[idx] == 0
        _, _, usable = _query(idx, (0.0, 0.0, 0.0))
        assert usable == 0

    def test_spot_without_cutoff_is_unusable(self):
        from src.whitted.lights.sources import add_spot_light

        idx = add_spot_light((0.0, -1.0, 0.0), position=(0.0, 4.0, 0.0))
        _, _, usable = _query(idx, (0.0, 0.0, 0.0))
        assert usable == 0
