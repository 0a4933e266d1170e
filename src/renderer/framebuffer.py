# renderer/framebuffer.py
import numpy as np
from PIL import Image

from core.vector import Vector3

class Framebuffer:
    """
    Height x width x 3 array of 8-bit RGB pixels. Incoming float colors are
    clamped to [0, 255] and truncated toward zero.
    """
    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.pixels = np.zeros((height, width, 3), dtype=np.uint8)

    @staticmethod
    def to_bytes(colors) -> np.ndarray:
        return np.clip(np.asarray(colors, dtype=np.float64), 0.0, 255.0).astype(np.uint8)

    @classmethod
    def from_array(cls, colors: np.ndarray) -> "Framebuffer":
        height, width = colors.shape[:2]
        fb = cls(width, height)
        fb.pixels[...] = cls.to_bytes(colors)
        return fb

    def set_pixel(self, x: int, y: int, color: Vector3):
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} framebuffer")
        self.pixels[y, x] = self.to_bytes([color.x, color.y, color.z])

    def get_pixel(self, x: int, y: int):
        r, g, b = self.pixels[y, x]
        return int(r), int(g), int(b)

    def to_image(self) -> Image.Image:
        # uint8 (h, w, 3) is read as RGB.
        return Image.fromarray(self.pixels)

    def save(self, path):
        self.to_image().save(path)
