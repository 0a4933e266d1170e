# camera/camera.py
from typing import Optional

from core.matrix import Matrix4
from core.ray import Ray
from core.vector import Vector3

class Camera:
    """
    Pinhole camera at a fixed eye point. Pixel (x, y) maps to the view-space
    direction (x - W/2, H/2 - y, -D), normalized and then rotated about the
    horizontal axis by `pitch` radians.
    """
    def __init__(self, eye: Vector3, width: int, height: int,
                 pitch: float = 0.0, view_plane_dist: Optional[float] = None):
        if width <= 0 or height <= 0:
            raise ValueError(f"image size must be positive, got {width}x{height}")
        if view_plane_dist is None:
            view_plane_dist = float(width)
        if view_plane_dist <= 0:
            raise ValueError(f"view_plane_dist must be positive, got {view_plane_dist}")

        self.eye = eye
        self.width = int(width)
        self.height = int(height)
        self.pitch = pitch
        self.view_plane_dist = float(view_plane_dist)
        self.rotation = Matrix4.x_rotation(pitch)

    def view_direction(self, x: float, y: float) -> Vector3:
        """Unrotated, normalized direction through pixel (x, y)."""
        return Vector3(
            x - self.width / 2.0,
            self.height / 2.0 - y,
            -self.view_plane_dist,
        ).normalize()

    def ray_direction(self, x: float, y: float) -> Vector3:
        return self.view_direction(x, y) * self.rotation

    def get_ray(self, x: float, y: float) -> Ray:
        return Ray(self.eye, self.ray_direction(x, y))

    def __repr__(self) -> str:
        return (f"Camera(eye={self.eye!r}, size={self.width}x{self.height}, "
                f"pitch={self.pitch}, view_plane_dist={self.view_plane_dist})")
