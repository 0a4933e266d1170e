# core/utils.py
import random

from core.vector import Vector3

BLACK = Vector3(0.0, 0.0, 0.0)
WHITE = Vector3(255.0, 255.0, 255.0)

def reflect(i: Vector3, n: Vector3) -> Vector3:
    """
    Mirrors i about the normal n: 2 (i . n) n - i.
    Applying it twice with the same unit normal gives back i.
    """
    return n * (2.0 * i.dot(n)) - i

def random_jitter(rng: random.Random, amount: float) -> Vector3:
    """
    Returns a vector with each component uniform in [-amount, amount].
    """
    return Vector3(rng.uniform(-amount, amount),
                   rng.uniform(-amount, amount),
                   rng.uniform(-amount, amount))

def clamp(value: float, lo: float = 0.0, hi: float = 255.0) -> float:
    return min(hi, max(lo, value))

def clamp_color(color: Vector3) -> Vector3:
    """
    Clamps each channel to the displayable [0, 255] range.
    """
    return Vector3(clamp(color.x), clamp(color.y), clamp(color.z))
