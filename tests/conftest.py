"""Pytest configuration and shared fixtures."""

import sys
from pathlib import Path

import pytest

# The packages live directly under src/.
src_root = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_root))

from camera.camera import Camera  # noqa: E402
from core.vector import Vector3  # noqa: E402
from geometry.plane import Plane  # noqa: E402
from geometry.scene import Scene  # noqa: E402
from geometry.sphere import Sphere  # noqa: E402


@pytest.fixture
def red():
    return Vector3(255, 0, 0)


@pytest.fixture
def single_sphere_scene(red):
    """Radius-50 sphere 160 units in front of an eye at (0, 0, 10)."""
    return Scene([Sphere(Vector3(0, 0, -150), 50.0, red)])


@pytest.fixture
def front_camera():
    return Camera(Vector3(0, 0, 10), 64, 64)


@pytest.fixture
def floor_plane():
    """Plane y = 0 facing up."""
    return Plane(Vector3(0, 1, 0), 0.0, Vector3(255, 255, 255))
