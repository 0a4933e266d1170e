# renderer/raytracer.py
import random
import time
from concurrent.futures import ProcessPoolExecutor
from typing import List

import numpy as np
from loguru import logger

from camera.camera import Camera
from geometry.scene import Scene
from renderer.config import ReflectionMode, RenderConfig, ShadowMode
from renderer.framebuffer import Framebuffer
from renderer.kernels import SHADOW_HARD, SHADOW_NONE, SHADOW_SOFT, render_kernel
from renderer.scene_data import pack_scene
from renderer.shading import Shader

BACKENDS = ("python", "numba")

_SHADOW_CODES = {
    ShadowMode.NONE: SHADOW_NONE,
    ShadowMode.HARD: SHADOW_HARD,
    ShadowMode.SOFT: SHADOW_SOFT,
}

# Per-process state for the python back-end's worker pool.
_worker_state = None

def _init_worker(scene: Scene, camera: Camera, config: RenderConfig):
    global _worker_state
    _worker_state = (scene, camera, config)

def render_row(scene: Scene, camera: Camera, config: RenderConfig, y: int) -> List[List[float]]:
    """
    Shades one image row. The row gets its own random source seeded from
    (seed, y), so the output does not depend on which worker runs it.
    """
    shader = Shader(config, random.Random(f"{config.seed}:{y}"))
    row = []
    for x in range(camera.width):
        color = shader.shade(scene, camera.eye, camera.ray_direction(x, y))
        row.append([color.x, color.y, color.z])
    return row

def _render_row_in_worker(y: int) -> List[List[float]]:
    scene, camera, config = _worker_state
    return render_row(scene, camera, config, y)

class Renderer:
    """
    Renders a scene through a camera into a Framebuffer.

    backend="python" runs the object-model Shader, fanned out over rows with
    a process pool when workers > 1. backend="numba" flattens the scene and
    runs the compiled kernel, parallel over rows.
    """
    def __init__(self, config: RenderConfig = None, backend: str = "python", workers: int = 1):
        if backend not in BACKENDS:
            raise ValueError(f"unknown backend {backend!r}, expected one of {BACKENDS}")
        if workers < 1:
            raise ValueError(f"workers must be >= 1, got {workers}")
        if backend == "numba" and workers > 1:
            logger.warning(f"workers={workers} is ignored by the numba backend, which threads rows itself")
        self.config = config if config is not None else RenderConfig()
        self.backend = backend
        self.workers = workers

    def render(self, scene: Scene, camera: Camera) -> Framebuffer:
        logger.info(f"Rendering {camera.width}x{camera.height} with {len(scene)} objects "
                    f"(backend={self.backend}, shadows={self.config.shadow_mode.value})")
        start_time = time.perf_counter()
        if self.backend == "numba":
            colors = self._render_numba(scene, camera)
        else:
            colors = self._render_python(scene, camera)
        fb = Framebuffer.from_array(colors)
        logger.info(f"Rendering time: {time.perf_counter() - start_time:.3f}s")
        return fb

    def _render_python(self, scene: Scene, camera: Camera) -> np.ndarray:
        rows = range(camera.height)
        if self.workers == 1:
            results = [render_row(scene, camera, self.config, y) for y in rows]
        else:
            with ProcessPoolExecutor(max_workers=self.workers,
                                     initializer=_init_worker,
                                     initargs=(scene, camera, self.config)) as pool:
                # map() yields in submission order, so rows stay in place.
                results = list(pool.map(_render_row_in_worker, rows,
                                        chunksize=max(1, camera.height // (self.workers * 4))))
        return np.array(results, dtype=np.float64).reshape(camera.height, camera.width, 3)

    def _render_numba(self, scene: Scene, camera: Camera) -> np.ndarray:
        cfg = self.config
        arrays = pack_scene(scene)
        output = np.zeros((camera.height, camera.width, 3), dtype=np.float64)
        render_kernel(
            camera.width, camera.height,
            camera.eye.to_array(), np.array(camera.rotation.values),
            camera.view_plane_dist,
            arrays.kinds, arrays.params, arrays.colors, arrays.reflectivity,
            cfg.light_point.to_array(), float(cfg.light_power), bool(cfg.attenuation),
            _SHADOW_CODES[cfg.shadow_mode], int(cfg.shadow_samples), float(cfg.shadow_jitter),
            float(cfg.shininess), float(cfg.specular_weight),
            cfg.reflection_mode is ReflectionMode.VIEW, int(cfg.max_depth), int(cfg.seed),
            output,
        )
        return output
