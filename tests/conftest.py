"""Pytest configuration for tracer tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which can cause
    segmentation faults due to Taichi runtime conflicts. Debug mode turns
    the assertions in Taichi functions (unit-length directions, positive
    refractive index, stack bound) into TaichiAssertionError.
    """
    ti.init(arch=ti.cpu, debug=True, random_seed=42)
    yield
    # Note: We don't call ti.reset() here as it can cause issues
    # with subsequent tests if any cleanup happens after


@pytest.fixture(autouse=True)
def clear_all_scene_data():
    """Clear scene data before and after each test.

    This ensures tests are isolated from each other.
    """
    # Import here to avoid circular imports and ensure Taichi is initialized
    from src.tinytracer.materials.phong import clear_phong_materials
    from src.tinytracer.scene.intersection import clear_scene

    def _clear_all():
        clear_scene()
        clear_phong_materials()

        # Also reset the integrator render target if it exists
        try:
            from src.tinytracer.core.integrator import reset_render_target

            reset_render_target()
        except (ImportError, RuntimeError):
            # Integrator not importable or fields not materialized yet
            pass

    _clear_all()

    yield

    _clear_all()


@pytest.fixture
def gray():
    """The default background color."""
    from src.tinytracer.scene.model import NAMED_COLORS

    return NAMED_COLORS["gray"]
