"""Pytest configuration for whitted tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls, which would
    invalidate every field declared at module import time.
    """
    ti.init(arch=ti.cpu, random_seed=42)
    yield


@pytest.fixture(autouse=True)
def clear_scene_data():
    """Clear the scene tables before and after each test.

    This ensures tests are isolated from each other.
    """
    # Import here so the fields are created after ti.init()
    from whitted.scene.intersection import clear_scene

    clear_scene()
    yield
    clear_scene()


@pytest.fixture
def matte_material():
    """Diffuse-only material (the ivory colour with only kd set)."""
    from whitted.materials.material import Material

    return Material(
        refractive_index=1.0,
        color=(0.4, 0.4, 0.3),
        albedo=(1.0, 0.0, 0.0, 0.0),
        specular_exponent=50,
    )


@pytest.fixture
def mirror_material():
    """Perfect mirror: reflective weight 1, nothing else."""
    from whitted.materials.material import Material

    return Material(
        refractive_index=1.0,
        color=(1.0, 1.0, 1.0),
        albedo=(0.0, 0.0, 1.0, 0.0),
        specular_exponent=1,
    )


@pytest.fixture
def clear_material():
    """Fully transmissive material with index 1 (rays pass straight through)."""
    from whitted.materials.material import Material

    return Material(
        refractive_index=1.0,
        color=(1.0, 1.0, 1.0),
        albedo=(0.0, 0.0, 0.0, 1.0),
        specular_exponent=1,
    )
