# geometry/sphere.py
import math
from typing import Optional

from core.ray import Ray
from core.vector import Vector3
from geometry.collider import Collider, Hit

class Sphere(Collider):
    """
    Represents a sphere defined by its center and radius.
    """
    def __init__(self, center: Vector3, radius: float, color: Vector3, reflectivity: float = 0.0):
        super().__init__(color, reflectivity)
        self.center = center
        self.radius = float(radius)

    def is_degenerate(self) -> bool:
        return not self.radius > 0.0

    def intersect(self, origin: Vector3, direction: Vector3) -> Optional[Hit]:
        if self.is_degenerate():
            return None

        # Project the center onto the ray. A negative projection is rejected
        # outright, so rays starting inside a sphere whose center lies behind
        # them report no hit.
        l = self.center - origin
        tca = l.dot(direction)
        if tca < 0:
            return None

        d2 = l.dot(l) - tca * tca
        r2 = self.radius * self.radius
        if d2 > r2:
            return None

        thc = math.sqrt(r2 - d2)
        t0 = tca - thc
        t1 = tca + thc
        if t0 > t1:
            t0, t1 = t1, t0

        if t0 < 0:
            t0 = t1
            if t0 < 0:
                return None

        ray = Ray(origin, direction)
        normal = (ray.at(t0) - self.center).normalize()
        return self._hit_at(ray, t0, normal)

    def __repr__(self) -> str:
        return f"Sphere(center={self.center!r}, radius={self.radius})"
