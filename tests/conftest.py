"""Pytest configuration for ray caster tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which can cause
    segmentation faults due to Taichi runtime conflicts.
    """
    ti.init(arch=ti.cpu, random_seed=42)
    yield


@pytest.fixture(autouse=True)
def clear_all_scene_data():
    """Clear primitive, light and image data before and after each test."""
    # Import here so the Taichi fields are created after ti.init()
    from src.whitted.core.tracer import clear_render_target
    from src.whitted.lights.sources import clear_lights
    from src.whitted.scene.intersection import clear_scene

    def _clear_all():
        clear_scene()
        clear_lights()
        clear_render_target()

    _clear_all()

    yield

    _clear_all()
