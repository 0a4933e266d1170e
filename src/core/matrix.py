# core/matrix.py
import math

import numpy as np

from core.vector import Vector3

class Matrix4:
    """
    4x4 affine transform stored row-major. Vectors are treated as row
    vectors, so a transform reads `v * M`. Only the rotation block is
    meaningful for the directions this renderer feeds through it.
    """
    def __init__(self, values):
        self.values = np.array(values, dtype=np.float64)
        if self.values.shape != (4, 4):
            raise ValueError(f"Matrix4 expects a 4x4 array, got shape {self.values.shape}")
        self.values.setflags(write=False)

    @staticmethod
    def x_rotation(angle: float) -> "Matrix4":
        """
        Rotation about the X axis by `angle` radians.
        """
        c = math.cos(angle)
        s = math.sin(angle)
        return Matrix4([
            [1.0, 0.0, 0.0, 0.0],
            [0.0,   c,   s, 0.0],
            [0.0,  -s,   c, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ])

    def transform(self, v: Vector3) -> Vector3:
        # Direction transform: w = 0, so translation never applies.
        row = np.array([v.x, v.y, v.z, 0.0], dtype=np.float64)
        out = row @ self.values
        return Vector3(out[0], out[1], out[2])

    def __rmul__(self, other):
        if isinstance(other, Vector3):
            return self.transform(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"Matrix4({self.values.tolist()})"
