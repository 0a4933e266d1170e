# geometry/plane.py
import sys
from typing import Optional

from core.ray import Ray
from core.vector import Vector3
from geometry.collider import Collider, Hit

# Rays closer to parallel than this are treated as misses.
EPSILON = sys.float_info.epsilon

class Plane(Collider):
    """
    An infinite one-sided plane: the points p with dot(p, normal) == offset.
    The normal is normalized on construction, so offset is a signed distance
    from the origin. Only rays travelling against the normal can hit it.
    """
    def __init__(self, normal: Vector3, offset: float, color: Vector3, reflectivity: float = 0.0):
        super().__init__(color, reflectivity)
        self.normal = normal.normalize()
        self.offset = float(offset)

    def is_degenerate(self) -> bool:
        return self.normal.magnitude() == 0

    def intersect(self, origin: Vector3, direction: Vector3) -> Optional[Hit]:
        facing = -self.normal
        denom = facing.dot(direction)
        if denom <= EPSILON:
            return None

        p0l0 = self.normal * self.offset - origin
        t = p0l0.dot(facing) / denom
        if t < 0:
            return None

        return self._hit_at(Ray(origin, direction), t, self.normal)

    def __repr__(self) -> str:
        return f"Plane(normal={self.normal!r}, offset={self.offset})"
