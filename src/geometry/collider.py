# geometry/collider.py
from typing import Optional

from core.ray import Ray
from core.vector import Vector3

class Hit:
    """
    Records details of a ray-object intersection.
    """
    __slots__ = ("point", "normal", "distance")

    def __init__(self, point: Vector3, normal: Vector3, distance: float):
        self.point = point        # Intersection point
        self.normal = normal      # Unit outward surface normal
        self.distance = distance  # Distance from the ray origin

    def __repr__(self) -> str:
        return f"Hit(point={self.point!r}, normal={self.normal!r}, distance={self.distance})"

class Collider:
    """
    Abstract base for scene objects that can be hit by a ray. Each object
    carries a surface color (0..255 per channel) and a reflectivity in [0, 1].
    """
    def __init__(self, color: Vector3, reflectivity: float):
        if not 0.0 <= reflectivity <= 1.0:
            raise ValueError(f"reflectivity must be in [0, 1], got {reflectivity}")
        self._color = color
        self._reflectivity = float(reflectivity)

    def intersect(self, origin: Vector3, direction: Vector3) -> Optional[Hit]:
        raise NotImplementedError("intersect() must be implemented by subclasses.")

    def color(self) -> Vector3:
        return self._color

    def reflectivity(self) -> float:
        return self._reflectivity

    def is_degenerate(self) -> bool:
        """
        True when the geometry can never be hit (zero radius, zero normal, ...).
        """
        return False

    @staticmethod
    def _hit_at(ray: Ray, t: float, normal: Vector3) -> Hit:
        point = ray.at(t)
        return Hit(point, normal, (point - ray.origin).magnitude())
