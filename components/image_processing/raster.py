from __future__ import annotations

import numpy as np
from PIL import Image

from utils.data_structures import Pixel


class Raster:
    """Read-only grid of pixels backed by a ``(height, width, channels)`` uint8 array.

    Three channels mean an opaque RGB raster, four channels carry alpha.
    The raster keeps a frozen copy of the data it is given.
    """

    def __init__(self, pixels: np.ndarray):
        pixels = np.asarray(pixels)
        if pixels.ndim != 3 or pixels.shape[2] not in (3, 4):
            raise ValueError(f"Expected a (height, width, 3|4) array, got shape {pixels.shape}")
        if pixels.shape[0] < 1 or pixels.shape[1] < 1:
            raise ValueError("Raster width and height must be at least 1")
        if pixels.dtype != np.uint8:
            if not np.issubdtype(pixels.dtype, np.integer) or pixels.min() < 0 or pixels.max() > 255:
                raise ValueError("Pixel values must be integers in 0-255")
        pixels = np.array(pixels, dtype=np.uint8)
        pixels.setflags(write=False)
        self._pixels = pixels

    @classmethod
    def filled(cls, width: int, height: int, pixel: Pixel, with_alpha: bool = False) -> Raster:
        channels = (*pixel.rgb, pixel.alpha) if with_alpha else pixel.rgb
        return cls(np.full((height, width, len(channels)), channels, dtype=np.uint8))

    @classmethod
    def from_pixels(cls, rows: list[list[Pixel]], with_alpha: bool = False) -> Raster:
        if with_alpha:
            data = [[(*p.rgb, p.alpha) for p in row] for row in rows]
        else:
            data = [[p.rgb for p in row] for row in rows]
        return cls(np.array(data, dtype=np.uint8))

    @classmethod
    def from_image(cls, image: Image.Image, with_alpha: bool = False) -> Raster:
        return cls(np.array(image.convert('RGBA' if with_alpha else 'RGB')))

    @property
    def pixels(self) -> np.ndarray:
        return self._pixels

    @property
    def width(self) -> int:
        return self._pixels.shape[1]

    @property
    def height(self) -> int:
        return self._pixels.shape[0]

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height

    @property
    def has_alpha(self) -> bool:
        return self._pixels.shape[2] == 4

    def pixel(self, x: int, y: int) -> Pixel:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"({x}, {y}) is outside a {self.width}x{self.height} raster")
        values = [int(v) for v in self._pixels[y, x]]
        return Pixel(*values)

    def to_image(self) -> Image.Image:
        return Image.fromarray(np.array(self._pixels[..., :3]))

    def __eq__(self, other):
        if not isinstance(other, Raster):
            return NotImplemented
        return self._pixels.shape == other._pixels.shape and bool(np.array_equal(self._pixels, other._pixels))

    def __repr__(self):
        return f"Raster({self.width}x{self.height}, alpha={self.has_alpha})"
