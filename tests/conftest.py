"""Pytest configuration for sdfmarch tests.

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


@pytest.fixture(scope="session")
def sphere_scene():
    """Unit sphere at (0, 0, 3), in front of a camera at the origin."""
    from sdfmarch.scene.presets import create_single_sphere_scene

    return create_single_sphere_scene()


@pytest.fixture(scope="session")
def origin_sphere_scene():
    """Unit sphere centered at the world origin."""
    from sdfmarch.scene.presets import create_single_sphere_scene

    return create_single_sphere_scene(center=(0.0, 0.0, 0.0), radius=1.0)
