"""Tests for the depth-bounded tracer and the render entry points.

Tests cover:
- Misses are black
- Standard surfaces end the path after one segment
- Mirror chains are cut off after MAX_DEPTH bounces
- Glass transmits what lies behind it and adds no ambient term
- render() image layout (row 0 at the top)
- render_pixel() agrees with the rendered image
- Render target validation
"""

import pytest


def _scene():
    from src.whitted.scene.manager import Scene

    return Scene()


class TestTraceRay:
    """Tests for trace_ray through trace_single_ray."""

    def test_miss_is_black(self):
        from src.whitted.core.tracer import trace_single_ray

        scene = _scene()
        scene.set_ambient((1.0, 1.0, 1.0))
        scene.commit()

        result = trace_single_ray((0.0, 0.0, 0.0), (0.0, 0.0, -1.0))
        assert result.color == (0.0, 0.0, 0.0)
        assert result.segments == 1
        assert not result.truncated

    def test_standard_hit_is_single_segment(self):
        from src.whitted.core.tracer import trace_single_ray

        scene = _scene()
        scene.set_ambient((0.5, 0.5, 0.5))
        scene.add_sphere((0.0, 0.0, -2.0), 1.0, color=(0.8, 0.4, 0.2))
        scene.commit()

        result = trace_single_ray((0.0, 0.0, 0.0), (0.0, 0.0, -1.0))
        assert result.color == pytest.approx((0.4, 0.2, 0.1), abs=1e-5)
        assert result.segments == 1
        assert not result.truncated

    def test_facing_mirrors_hit_depth_limit(self):
        """Two mirrors facing each other bounce until the depth cap."""
        from src.whitted.core.tracer import MAX_DEPTH, trace_single_ray
        from src.whitted.scene.manager import MaterialType

        scene = _scene()
        scene.set_ambient((1.0, 1.0, 1.0))
        scene.add_sphere((0.0, 0.0, -3.0), 1.0, MaterialType.MIRROR)
        scene.add_sphere((0.0, 0.0, 3.0), 1.0, MaterialType.MIRROR)
        scene.commit()

        result = trace_single_ray((0.0, 0.0, 0.0), (0.0, 0.0, -1.0))
        assert result.segments == MAX_DEPTH + 1
        assert result.truncated
        assert result.color == (0.0, 0.0, 0.0)

    def test_mirror_shows_reflected_surface(self):
        from src.whitted.core.tracer import trace_single_ray
        from src.whitted.scene.manager import MaterialType

        scene = _scene()
        scene.set_ambient((1.0, 1.0, 1.0))
        scene.add_sphere((0.0, 0.0, -3.0), 1.0, MaterialType.MIRROR, color=(1.0, 1.0, 1.0))
        scene.add_sphere((0.0, 0.0, 3.0), 1.0, color=(0.2, 0.6, 0.4))
        scene.commit()

        result = trace_single_ray((0.0, 0.0, 0.0), (0.0, 0.0, -1.0))
        assert result.color == pytest.approx((0.2, 0.6, 0.4), abs=1e-5)
        assert result.segments == 2

    def test_glass_transmits_without_ambient(self):
        from src.whitted.core.tracer import trace_single_ray
        from src.whitted.scene.manager import MaterialType

        scene = _scene()
        scene.set_ambient((0.5, 0.5, 0.5))
        scene.add_sphere((0.0, 0.0, -3.0), 1.0, MaterialType.GLASS, color=(1.0, 0.0, 0.0))
        # Back wall z = -6
        scene.add_plane((0.0, 0.0, 1.0), -6.0, color=(1.0, 1.0, 1.0))
        scene.commit()

        result = trace_single_ray((0.0, 0.0, 0.0), (0.0, 0.0, -1.0))
        assert result.color == pytest.approx((0.5, 0.5, 0.5), abs=1e-4)
        assert result.segments == 2

    def test_glass_with_nothing_behind_is_black(self):
        from src.whitted.core.tracer import trace_single_ray
        from src.whitted.scene.manager import MaterialType

        scene = _scene()
        scene.set_ambient((1.0, 1.0, 1.0))
        scene.add_sphere((0.0, 0.0, -3.0), 1.0, MaterialType.GLASS, color=(1.0, 1.0, 1.0))
        scene.commit()

        result = trace_single_ray((0.0, 0.0, 0.0), (0.0, 0.0, -1.0))
        assert result.color == (0.0, 0.0, 0.0)


class TestRender:
    """Tests for render() and render_pixel()."""

    def test_image_shape_and_range(self):
        from src.whitted.camera.viewport import Viewport
        from src.whitted.core.tracer import render

        scene = _scene()
        scene.set_ambient((3.0, 3.0, 3.0))
        scene.add_sphere((0.0, 0.0, -2.0), 1.0, color=(1.0, 1.0, 1.0))

        image = render(scene, Viewport(), 48, 32)
        assert image.shape == (32, 48, 3)
        assert image.min() >= 0.0
        assert image.max() <= 1.0

    def test_center_hits_sphere_corners_miss(self):
        from src.whitted.camera.viewport import Viewport
        from src.whitted.core.tracer import render

        scene = _scene()
        scene.set_ambient((0.5, 0.5, 0.5))
        scene.add_sphere((0.0, 0.0, -2.0), 1.0, color=(0.8, 0.4, 0.2))

        image = render(scene, Viewport(), 32, 32)
        assert tuple(image[16, 16]) == pytest.approx((0.4, 0.2, 0.1), abs=1e-5)
        assert tuple(image[0, 0]) == (0.0, 0.0, 0.0)
        assert tuple(image[31, 31]) == (0.0, 0.0, 0.0)

    def test_ambient_only_disk_is_flat(self):
        """Without lights every visible sphere pixel is base * ambient."""
        from src.whitted.camera.viewport import Viewport
        from src.whitted.core.tracer import render

        scene = _scene()
        scene.set_ambient((0.5, 0.5, 0.5))
        scene.add_sphere((0.0, 0.0, -2.0), 1.0, color=(0.8, 0.4, 0.2), shininess=30.0)

        image = render(scene, Viewport(), 32, 32)
        disk = image[image.sum(axis=2) > 0.0]
        assert len(disk) > 0
        assert tuple(disk.min(axis=0)) == pytest.approx((0.4, 0.2, 0.1), abs=1e-5)
        assert tuple(disk.max(axis=0)) == pytest.approx((0.4, 0.2, 0.1), abs=1e-5)

    def test_row_zero_is_top(self):
        from src.whitted.camera.viewport import Viewport
        from src.whitted.core.tracer import render

        scene = _scene()
        scene.set_ambient((1.0, 1.0, 1.0))
        scene.add_sphere((0.0, 1.5, -2.0), 0.5, color=(1.0, 0.0, 0.0))

        image = render(scene, Viewport(), 32, 32)
        assert tuple(image[8, 16]) == pytest.approx((1.0, 0.0, 0.0), abs=1e-5)
        assert tuple(image[24, 16]) == (0.0, 0.0, 0.0)

    def test_render_pixel_matches_image(self):
        from src.whitted.camera.viewport import Viewport
        from src.whitted.core.tracer import render, render_pixel

        scene = _scene()
        scene.set_ambient((0.5, 0.5, 0.5))
        scene.add_sphere((0.0, 0.0, -2.0), 1.0, color=(0.8, 0.4, 0.2))
        viewport = Viewport()

        image = render(scene, viewport, 16, 16)
        result = render_pixel(viewport, 8, 8, 16, 16)
        assert result.color == pytest.approx(tuple(image[8, 8]), abs=1e-5)

    def test_previous_scene_does_not_leak(self):
        from src.whitted.camera.viewport import Viewport
        from src.whitted.core.tracer import render

        first = _scene()
        first.set_ambient((1.0, 1.0, 1.0))
        first.add_sphere((0.0, 0.0, -2.0), 1.0, color=(1.0, 1.0, 1.0))
        render(first, Viewport(), 8, 8)

        image = render(_scene(), Viewport(), 8, 8)
        assert image.max() == 0.0


class TestRenderTarget:
    """Tests for render target validation."""

    def test_rejects_non_positive_size(self):
        from src.whitted.core.tracer import setup_render_target

        with pytest.raises(ValueError):
            setup_render_target(0, 10)

    def test_rejects_oversized_image(self):
        from src.whitted.core.tracer import MAX_IMAGE_WIDTH, setup_render_target

        with pytest.raises(ValueError):
            setup_render_target(MAX_IMAGE_WIDTH + 1, 10)

    def test_dimensions_are_recorded(self):
        from src.whitted.core.tracer import get_image_dimensions, setup_render_target

        setup_render_target(64, 48)
        assert get_image_dimensions() == (64, 48)
