# renderer/shading.py
import random
from typing import Optional

from core.ray import Ray
from core.utils import BLACK, WHITE, clamp_color, random_jitter, reflect
from core.vector import Vector3
from geometry.scene import Collision, Scene
from renderer.config import ReflectionMode, RenderConfig, ShadowMode

class Shader:
    """
    Recursive Whitted-style shading against a single point light.

    A shader owns its random source (used only for soft-shadow jitter), so
    each worker needs its own instance.
    """
    def __init__(self, config: RenderConfig, rng: Optional[random.Random] = None):
        self.config = config
        self.rng = rng if rng is not None else random.Random(config.seed)

    def blocked_count(self, scene: Scene, point: Vector3, light_dir: Vector3) -> int:
        """
        Casts `shadow_samples` jittered rays toward the light and counts the
        ones that hit something.
        """
        cfg = self.config
        blocked = 0
        for _ in range(cfg.shadow_samples):
            direction = (light_dir + random_jitter(self.rng, cfg.shadow_jitter)).normalize()
            if scene.occluded(Ray(point, direction)):
                blocked += 1
        return blocked

    def light_factor(self, scene: Scene, point: Vector3, light_dir: Vector3) -> float:
        """
        Fraction of the light reaching `point`: 0 is full shadow, 1 fully lit.
        """
        mode = self.config.shadow_mode
        if mode is ShadowMode.NONE:
            return 1.0
        if mode is ShadowMode.HARD:
            return 0.0 if scene.occluded(Ray(point, light_dir)) else 1.0
        return 1.0 - self.blocked_count(scene, point, light_dir) / self.config.shadow_samples

    def light_intensity(self, point: Vector3) -> float:
        cfg = self.config
        intensity = cfg.light_power
        if cfg.attenuation:
            distance = (point - cfg.light_point).magnitude()
            if distance > 0:
                intensity /= distance
        return intensity

    def local_color(self, collision: Collision, ray_dir: Vector3,
                    light_dir: Vector3, intensity: float) -> Vector3:
        """
        Diffuse plus white specular highlight, before reflection blending.
        """
        cfg = self.config
        normal = collision.hit.normal
        diffuse = collision.object.color() * (intensity * max(0.0, normal.dot(light_dir)))
        reflection = reflect(light_dir, normal)
        specular = intensity * max(0.0, reflection.dot(-ray_dir)) ** cfg.shininess
        return diffuse + WHITE * (specular * cfg.specular_weight)

    def bounce_direction(self, ray_dir: Vector3, light_dir: Vector3, normal: Vector3) -> Vector3:
        if self.config.reflection_mode is ReflectionMode.LIGHT:
            return reflect(light_dir, normal)
        return reflect(-ray_dir, normal)

    def shade(self, scene: Scene, origin: Vector3, ray_dir: Vector3, depth: int = 0) -> Vector3:
        """
        Color seen along the ray, each channel clamped to [0, 255].
        Returns black past `max_depth` bounces or when nothing is hit.
        """
        cfg = self.config
        if depth > cfg.max_depth:
            return BLACK

        collision = scene.nearest_hit(Ray(origin, ray_dir))
        if collision is None:
            return BLACK

        point = collision.hit.point
        normal = collision.hit.normal
        light_dir = (cfg.light_point - point).normalize()

        intensity = self.light_intensity(point) * self.light_factor(scene, point, light_dir)
        color = self.local_color(collision, ray_dir, light_dir, intensity)

        reflectivity = collision.object.reflectivity()
        if reflectivity > 0:
            bounce = self.bounce_direction(ray_dir, light_dir, normal)
            reflected = self.shade(scene, point, bounce, depth + 1)
            color = color * (1.0 - reflectivity) + reflected * reflectivity
        return clamp_color(color)
