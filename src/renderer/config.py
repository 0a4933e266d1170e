# renderer/config.py
from dataclasses import dataclass, field
from enum import Enum

from core.vector import Vector3

class ShadowMode(Enum):
    NONE = "none"    # every hit is fully lit
    HARD = "hard"    # one shadow ray, lit or not
    SOFT = "soft"    # jittered shadow rays, fractional light

class ReflectionMode(Enum):
    VIEW = "view"    # recurse along the mirrored view ray
    LIGHT = "light"  # recurse along the reflected light vector

@dataclass(frozen=True)
class RenderConfig:
    """
    Lighting and shading constants shared by every pixel of a render.
    """
    light_point: Vector3 = field(default_factory=lambda: Vector3(-50.0, 50.0, 90.0))
    light_power: float = 1.0
    attenuation: bool = False
    shadow_mode: ShadowMode = ShadowMode.HARD
    shadow_samples: int = 9
    shadow_jitter: float = 0.02
    shininess: float = 10.0
    specular_weight: float = 0.5
    max_depth: int = 1
    reflection_mode: ReflectionMode = ReflectionMode.VIEW
    seed: int = 0

    def __post_init__(self):
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be >= 0, got {self.max_depth}")
        if self.shadow_samples < 1:
            raise ValueError(f"shadow_samples must be >= 1, got {self.shadow_samples}")
        if self.shadow_jitter < 0:
            raise ValueError(f"shadow_jitter must be >= 0, got {self.shadow_jitter}")
        if self.shininess < 0:
            raise ValueError(f"shininess must be >= 0, got {self.shininess}")
        if self.specular_weight < 0:
            raise ValueError(f"specular_weight must be >= 0, got {self.specular_weight}")
        if self.light_power < 0:
            raise ValueError(f"light_power must be >= 0, got {self.light_power}")
        # Accept the plain string spellings used on the command line.
        if not isinstance(self.shadow_mode, ShadowMode):
            object.__setattr__(self, "shadow_mode", ShadowMode(self.shadow_mode))
        if not isinstance(self.reflection_mode, ReflectionMode):
            object.__setattr__(self, "reflection_mode", ReflectionMode(self.reflection_mode))
