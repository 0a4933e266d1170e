# renderer/scene_data.py
from typing import NamedTuple

import numpy as np
from loguru import logger

from geometry.plane import Plane
from geometry.scene import Scene
from geometry.sphere import Sphere

# Object kind tags understood by the kernels.
KIND_SPHERE = 0
KIND_PLANE = 1

class SceneArrays(NamedTuple):
    kinds: np.ndarray         # int64[n]
    params: np.ndarray        # float64[n, 4]: sphere (cx, cy, cz, r), plane (nx, ny, nz, offset)
    colors: np.ndarray        # float64[n, 3]
    reflectivity: np.ndarray  # float64[n]

def pack_scene(scene: Scene) -> SceneArrays:
    """
    Flattens the scene into plain arrays so the compiled kernels can scan it.
    Object order is preserved, which keeps nearest-hit ties identical to the
    object-model renderer.
    """
    n = len(scene)
    kinds = np.zeros(n, dtype=np.int64)
    params = np.zeros((n, 4), dtype=np.float64)
    colors = np.zeros((n, 3), dtype=np.float64)
    reflectivity = np.zeros(n, dtype=np.float64)

    for idx, obj in enumerate(scene):
        if isinstance(obj, Sphere):
            kinds[idx] = KIND_SPHERE
            params[idx] = [obj.center.x, obj.center.y, obj.center.z, obj.radius]
        elif isinstance(obj, Plane):
            kinds[idx] = KIND_PLANE
            params[idx] = [obj.normal.x, obj.normal.y, obj.normal.z, obj.offset]
        else:
            raise TypeError(f"Object {idx} has no kernel representation: {obj!r}")
        colors[idx] = obj.color().to_array()
        reflectivity[idx] = obj.reflectivity()

    logger.debug(f"Packed {int((kinds == KIND_SPHERE).sum())} spheres and "
                 f"{int((kinds == KIND_PLANE).sum())} planes")
    return SceneArrays(kinds, params, colors, reflectivity)
