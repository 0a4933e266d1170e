from geometry.collider import Collider, Hit
from geometry.plane import Plane
from geometry.scene import Collision, Scene
from geometry.sphere import Sphere

__all__ = ["Collider", "Collision", "Hit", "Plane", "Scene", "Sphere"]
