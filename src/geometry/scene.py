# geometry/scene.py
from typing import Iterable, Iterator, Optional, Tuple

from loguru import logger

from core.ray import Ray
from geometry.collider import Collider, Hit

class Collision:
    """
    The nearest hit of a ray together with the object that produced it.
    """
    __slots__ = ("hit", "object")

    def __init__(self, hit: Hit, obj: Collider):
        self.hit = hit
        self.object = obj

    def __repr__(self) -> str:
        return f"Collision({self.hit!r}, {self.object!r})"

class Scene:
    """
    An ordered, immutable collection of colliders. Objects are scanned
    linearly; iteration order is stable and decides distance ties.
    """
    def __init__(self, objects: Iterable[Collider] = ()):
        self._objects: Tuple[Collider, ...] = tuple(objects)
        for index, obj in enumerate(self._objects):
            if obj.is_degenerate():
                logger.warning(f"Object {index} ({obj!r}) is degenerate and will never be hit")
        logger.debug(f"Scene built with {len(self._objects)} objects")

    @property
    def objects(self) -> Tuple[Collider, ...]:
        return self._objects

    def __len__(self) -> int:
        return len(self._objects)

    def __iter__(self) -> Iterator[Collider]:
        return iter(self._objects)

    def nearest_hit(self, ray: Ray) -> Optional[Collision]:
        """
        Returns the closest intersection along the ray, or None.
        """
        closest = None
        for obj in self._objects:
            hit = obj.intersect(ray.origin, ray.direction)
            if hit is None:
                continue
            # Strict comparison keeps the first object on ties.
            if closest is None or hit.distance < closest.hit.distance:
                closest = Collision(hit, obj)
        return closest

    def occluded(self, ray: Ray) -> bool:
        """
        True if the ray hits any object at all, regardless of distance.
        """
        return any(obj.intersect(ray.origin, ray.direction) is not None
                   for obj in self._objects)
