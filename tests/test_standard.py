"""Unit tests for the standard (opaque) material.

Tests cover:
- Checkerboard periodicity and the mirrored tiles for negative coordinates
- Checker applied to planes only
- Lambert and Phong terms
- Ambient, diffuse and specular contributions with and without shadows
"""

import math

import taichi as ti


def _checker(point):
    from src.whitted.materials.standard import checker_factor, vec3

    result = ti.field(dtype=ti.f32, shape=())

    @ti.kernel
    def test_kernel(p: vec3):
        result[None] = checker_factor(p)

    test_kernel(vec3(*point))
    return result[None]


def _shade(index, point, view_origin):
    from src.whitted.materials.standard import shade_standard, vec3

    result = ti.Vector.field(3, dtype=ti.f32, shape=())

    @ti.kernel
    def test_kernel(i: ti.i32, p: vec3, v: vec3):
        result[None] = shade_standard(i, p, v)

    test_kernel(index, vec3(*point), vec3(*view_origin))
    c = result[None]
    return float(c[0]), float(c[1]), float(c[2])


class TestCheckerboard:
    """Tests for checker_factor."""

    def test_origin_tile_is_light(self):
        assert _checker((0.25, 0.25, 0.0)) == 1.0

    def test_adjacent_tiles_alternate(self):
        assert _checker((0.75, 0.25, 0.0)) == 0.5
        assert _checker((0.25, 0.75, 0.0)) == 0.5
        assert _checker((0.75, 0.75, 0.0)) == 1.0

    def test_period_is_one_unit(self):
        for x, y in [(0.1, 0.3), (0.6, 0.2), (0.7, 0.9), (1.3, 0.4)]:
            assert _checker((x, y, 0.0)) == _checker((x + 1.0, y, 0.0))
            assert _checker((x, y, 0.0)) == _checker((x, y + 1.0, 0.0))

    def test_z_is_ignored(self):
        assert _checker((0.25, 0.25, 0.0)) == _checker((0.25, 0.25, 7.3))

    def test_negative_coordinates_use_mirrored_tiles(self):
        # floor((0.5 - (-0.25)) / 0.5) = 1, so the tile just left of 0 is dark
        assert _checker((-0.25, 0.25, 0.0)) == 0.5
        assert _checker((-0.75, 0.25, 0.0)) == 1.0
        assert _checker((-1.25, 0.25, 0.0)) == 0.5

    def test_spheres_are_never_checkered(self):
        from src.whitted.materials.standard import surface_checker_factor, vec3
        from src.whitted.scene.intersection import add_sphere

        idx = add_sphere((0.0, 0.0, 0.0), 1.0)
        result = ti.field(dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel(i: ti.i32):
            result[None] = surface_checker_factor(i, vec3(0.75, 0.25, 0.0))

        test_kernel(idx)
        assert result[None] == 1.0


class TestLightingTerms:
    """Tests for lambert_diffuse and phong_specular."""

    def test_lambert_clamps_backfacing_light(self):
        from src.whitted.materials.standard import lambert_diffuse, vec3

        result = ti.Vector.field(3, dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = lambert_diffuse(
                vec3(0.0, 1.0, 0.0),
                vec3(0.0, -1.0, 0.0),
                vec3(1.0, 1.0, 1.0),
                1.0,
                vec3(1.0, 1.0, 1.0),
            )

        test_kernel()
        c = result[None]
        assert c[0] == 0.0 and c[1] == 0.0 and c[2] == 0.0

    def test_lambert_cosine_falloff(self):
        from src.whitted.materials.standard import lambert_diffuse, vec3

        result = ti.Vector.field(3, dtype=ti.f32, shape=())
        s = math.sqrt(0.5)

        @ti.kernel
        def test_kernel():
            result[None] = lambert_diffuse(
                vec3(0.0, 1.0, 0.0),
                vec3(s, s, 0.0),
                vec3(1.0, 0.5, 0.25),
                0.5,
                vec3(1.0, 1.0, 1.0),
            )

        test_kernel()
        c = result[None]
        assert abs(c[0] - s * 0.5) < 1e-5
        assert abs(c[1] - s * 0.25) < 1e-5
        assert abs(c[2] - s * 0.125) < 1e-5

    def test_phong_peak_uses_fixed_tint(self):
        """Viewer on the mirror direction sees 0.7 * light color."""
        from src.whitted.materials.standard import phong_specular, vec3

        result = ti.Vector.field(3, dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = phong_specular(
                vec3(0.0, 1.0, 0.0),
                vec3(0.0, 1.0, 0.0),
                vec3(0.0, 1.0, 0.0),
                50.0,
                vec3(1.0, 0.5, 0.0),
            )

        test_kernel()
        c = result[None]
        assert abs(c[0] - 0.7) < 1e-5
        assert abs(c[1] - 0.35) < 1e-5
        assert abs(c[2]) < 1e-6


class TestShadeStandard:
    """Tests for shade_standard against the committed tables."""

    def test_ambient_only(self):
        from src.whitted.lights.sources import set_ambient
        from src.whitted.scene.intersection import add_sphere

        idx = add_sphere((0.0, 0.0, -2.0), 1.0, color=(0.8, 0.4, 0.2))
        set_ambient((0.5, 0.5, 0.5))

        c = _shade(idx, (0.0, 0.0, -1.0), (0.0, 0.0, 0.0))
        assert abs(c[0] - 0.4) < 1e-5
        assert abs(c[1] - 0.2) < 1e-5
        assert abs(c[2] - 0.1) < 1e-5

    def test_floor_diffuse_on_dark_tile_and_shadow(self):
        """A floor point lit from above, then with a blocker over it."""
        from src.whitted.lights.sources import add_directional_light, set_ambient
        from src.whitted.scene.intersection import add_plane, add_sphere

        # Plane -y = 1 (y = -1); its shading normal -n is +y
        floor = add_plane((0.0, -1.0, 0.0), 1.0, color=(1.0, 1.0, 1.0), shininess=100.0)
        set_ambient((0.1, 0.1, 0.1))
        add_directional_light((0.0, -1.0, 0.0), (1.0, 1.0, 1.0))

        # x = 0.25, y = -1 lands on a dark tile (factor 0.5); viewer far off
        # to the side so the highlight is negligible
        point = (0.25, -1.0, 0.25)
        view = (5.0, -1.0, 0.25)
        c = _shade(floor, point, view)
        for channel in c:
            assert abs(channel - 0.6) < 1e-4

        add_sphere((0.25, 1.0, 0.25), 0.5)
        c = _shade(floor, point, view)
        for channel in c:
            assert abs(channel - 0.1) < 1e-5

    def test_specular_highlight_undimmed_by_checker(self):
        from src.whitted.lights.sources import add_directional_light
        from src.whitted.scene.intersection import add_plane

        floor = add_plane((0.0, -1.0, 0.0), 1.0, color=(0.0, 0.0, 0.0), shininess=10.0)
        add_directional_light((0.0, -1.0, 0.0), (1.0, 1.0, 1.0))

        # Viewer straight above a dark tile sees the full highlight
        c = _shade(floor, (0.25, -1.0, 0.25), (0.25, 3.0, 0.25))
        for channel in c:
            assert abs(channel - 0.7) < 1e-4

    def test_spot_outside_cone_contributes_nothing(self):
        from src.whitted.lights.sources import add_spot_light
        from src.whitted.scene.intersection import add_sphere

        idx = add_sphere((0.0, 0.0, 0.0), 1.0, color=(1.0, 1.0, 1.0), shininess=10.0)
        add_spot_light(
            (0.0, -1.0, 0.0), position=(10.0, 10.0, 0.0), cutoff=0.99, color=(1.0, 1.0, 1.0)
        )

        c = _shade(idx, (0.0, 1.0, 0.0), (0.0, 5.0, 0.0))
        assert c == (0.0, 0.0, 0.0)
