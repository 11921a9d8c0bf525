"""Unit tests for the mirror material."""

import math

import taichi as ti


def _scatter(index, point, incident):
    from src.whitted.materials.mirror import scatter_mirror, vec3

    origin = ti.Vector.field(3, dtype=ti.f32, shape=())
    direction = ti.Vector.field(3, dtype=ti.f32, shape=())

    @ti.kernel
    def test_kernel(i: ti.i32, p: vec3, d: vec3):
        o, r = scatter_mirror(i, p, d)
        origin[None] = o
        direction[None] = r

    test_kernel(index, vec3(*point), vec3(*incident))
    return origin[None], direction[None]


class TestScatterMirror:
    """Tests for scatter_mirror."""

    def test_head_on_reflection_reverses_ray(self):
        from src.whitted.materials.mirror import REFLECT_EPSILON
        from src.whitted.scene.intersection import add_sphere

        idx = add_sphere((0.0, 0.0, 0.0), 1.0, material=1)
        o, d = _scatter(idx, (0.0, 0.0, 1.0), (0.0, 0.0, -1.0))

        assert abs(d[2] - 1.0) < 1e-6
        assert abs(o[2] - (1.0 + REFLECT_EPSILON)) < 1e-6

    def test_plane_reflection_either_normal_sign(self):
        """Reflection does not depend on which way the plane normal points."""
        from src.whitted.scene.intersection import add_plane

        idx = add_plane((0.0, 1.0, 0.0), -1.0, material=1)
        s = math.sqrt(0.5)
        _, d = _scatter(idx, (0.0, -1.0, 0.0), (s, -s, 0.0))

        assert abs(d[0] - s) < 1e-6
        assert abs(d[1] - s) < 1e-6
        assert abs(d[2]) < 1e-6

    def test_origin_leaves_surface(self):
        from src.whitted.scene.intersection import add_sphere

        idx = add_sphere((0.0, 0.0, 0.0), 1.0, material=1)
        s = math.sqrt(0.5)
        o, _ = _scatter(idx, (0.0, 0.0, 1.0), (s, 0.0, -s))

        assert math.sqrt(o[0] ** 2 + o[1] ** 2 + o[2] ** 2) > 1.0
