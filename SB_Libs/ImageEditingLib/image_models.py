"""
Image data models for SnapBook.

This module defines the pixel container shared by the decoder, the filters,
the strip compositor and the page renderer.

Classes:
    PixelBuffer: Width, height and a contiguous RGBA sample array (value type)

Type Aliases:
    RgbaColor: A tuple of 4 integers representing RGBA color values (0-255)

Functions:
    argb_to_rgba: Unpack a 0xAARRGGBB integer into an RgbaColor
    rgba_to_argb: Pack an RgbaColor into a 0xAARRGGBB integer
"""

from dataclasses import dataclass
from typing import Any, Sequence, Tuple

import numpy as np

from SB_Libs.pillow_compat import Image

RgbaColor = Tuple[int, int, int, int]


def argb_to_rgba(color: int) -> RgbaColor:
    color = int(color) & 0xFFFFFFFF
    return (
        (color >> 16) & 0xFF,
        (color >> 8) & 0xFF,
        color & 0xFF,
        (color >> 24) & 0xFF,
    )


def rgba_to_argb(color: RgbaColor) -> int:
    r, g, b, a = (int(channel) & 0xFF for channel in color)
    return (a << 24) | (r << 16) | (g << 8) | b


@dataclass(eq=False)
class PixelBuffer:
    """
    An RGBA pixel buffer with value semantics.

    ``pixels`` is a ``(height, width, 4)`` uint8 array. The constructor takes a
    private copy of whatever it is given, so two buffers never share samples
    unless one is handed off explicitly.
    """
    width: int
    height: int
    pixels: Any

    def __post_init__(self) -> None:
        self.width = int(self.width)
        self.height = int(self.height)
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Buffer dimensions must be non-negative, got {self.width}x{self.height}")

        expected = (self.height, self.width, 4)
        pixels = np.array(self.pixels, dtype=np.uint8, copy=True)
        if pixels.size == 0 and (self.width == 0 or self.height == 0):
            pixels = np.zeros(expected, dtype=np.uint8)
        if pixels.shape != expected:
            raise ValueError(f"Pixel array shape {pixels.shape} does not match {expected}")
        self.pixels = np.ascontiguousarray(pixels)

    @classmethod
    def blank(cls, width: int, height: int, color: RgbaColor = (0, 0, 0, 255)) -> "PixelBuffer":
        pixels = np.empty((int(height), int(width), 4), dtype=np.uint8)
        pixels[...] = np.asarray(color, dtype=np.uint8)
        return cls(width, height, pixels)

    @classmethod
    def from_image(cls, image: Any) -> "PixelBuffer":
        """Build a buffer from a Pillow image (converted to RGBA)."""
        if image.mode != "RGBA":
            image = image.convert("RGBA")
        width, height = image.size
        return cls(width, height, np.asarray(image, dtype=np.uint8))

    @classmethod
    def from_packed(cls, width: int, height: int, values: Sequence[int]) -> "PixelBuffer":
        """Build a buffer from packed 0xAARRGGBB integers in row-major order."""
        packed = np.asarray(values, dtype=np.uint32).reshape(int(height), int(width))
        pixels = np.stack(
            [
                (packed >> 16) & 0xFF,
                (packed >> 8) & 0xFF,
                packed & 0xFF,
                (packed >> 24) & 0xFF,
            ],
            axis=-1,
        ).astype(np.uint8)
        return cls(width, height, pixels)

    def packed(self) -> np.ndarray:
        """Return the samples as a flat array of packed 0xAARRGGBB integers."""
        channels = self.pixels.astype(np.uint32)
        packed = (
            (channels[..., 3] << 24)
            | (channels[..., 0] << 16)
            | (channels[..., 1] << 8)
            | channels[..., 2]
        )
        return packed.reshape(-1)

    def to_image(self) -> Any:
        """Return a new Pillow RGBA image holding a copy of the samples."""
        return Image.fromarray(self.pixels.copy())

    def copy(self) -> "PixelBuffer":
        return PixelBuffer(self.width, self.height, self.pixels)

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    @property
    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    def pixel(self, x: int, y: int) -> RgbaColor:
        r, g, b, a = (int(v) for v in self.pixels[y, x])
        return r, g, b, a

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return (
            self.width == other.width
            and self.height == other.height
            and np.array_equal(self.pixels, other.pixels)
        )

    def __repr__(self) -> str:
        return f"PixelBuffer(width={self.width}, height={self.height})"
