"""Pytest configuration for raycaster tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls, which would
    discard every field declared by modules already imported.
    """
    ti.init(arch=ti.cpu, random_seed=42)
    yield


@pytest.fixture(autouse=True)
def clear_all_scene_data():
    """Clear scene data before and after each test.

    This ensures tests are isolated from each other.
    """
    # Import here so the fields are declared after ti.init()
    from raycaster.materials.dielectric import clear_dielectric_materials
    from raycaster.materials.lambertian import clear_lambertian_materials
    from raycaster.materials.metal import clear_metal_materials
    from raycaster.scene.manager import _clear_material_tracking
    from raycaster.scene.world import clear_world

    def _clear_all():
        clear_world()
        clear_lambertian_materials()
        clear_metal_materials()
        clear_dielectric_materials()
        _clear_material_tracking()

        try:
            from raycaster.core.integrator import clear_render_target

            clear_render_target()
        except (ImportError, RuntimeError):
            # Render target fields not usable yet
            pass

    _clear_all()

    yield

    _clear_all()
