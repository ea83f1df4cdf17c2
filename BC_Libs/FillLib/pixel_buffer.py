"""
Pixel buffer for Brush Color.

A PixelBuffer holds the live RGBA raster that the user is coloring plus a
pristine copy captured when the image was loaded. The live raster is a numpy
``uint8`` array of shape ``(height, width, 4)``; its flat byte view is the
row-major, interleaved (R, G, B, A) sequence of ``width * height * 4`` bytes.

Classes:
    PixelBuffer: Live raster plus read-only original

Type Aliases:
    RgbaColor: A tuple of 4 integers representing RGBA color values (0-255)
"""

from typing import Any, Tuple

import numpy as np
from PIL import Image

RgbaColor = Tuple[int, int, int, int]


def _as_rgba_array(pixels: Any) -> np.ndarray:
    array = np.array(pixels, dtype=np.uint8, copy=True)
    if array.ndim != 3 or array.shape[2] != 4:
        raise ValueError(f"Expected pixel array of shape (height, width, 4), got {array.shape}")
    if array.shape[0] == 0 or array.shape[1] == 0:
        raise ValueError(f"Pixel array must not be empty, got {array.shape}")
    return array


class PixelBuffer:
    """
    Mutable RGBA raster with an immutable original.

    The original is captured once at construction (or supplied explicitly)
    and flagged read-only, so it keeps the same dimensions as the live
    pixels for the lifetime of the buffer.

    Example:
        >>> buffer = PixelBuffer.blank(10, 10)
        >>> buffer.set_pixel(2, 3, (255, 0, 0, 255))
        >>> buffer.get_pixel(2, 3)
        (255, 0, 0, 255)
        >>> buffer.get_original_pixel(2, 3)
        (255, 255, 255, 255)
    """

    def __init__(self, pixels: Any, original: Any = None) -> None:
        self.pixels = _as_rgba_array(pixels)

        if original is None:
            original_array = self.pixels.copy()
        else:
            original_array = _as_rgba_array(original)
            if original_array.shape != self.pixels.shape:
                raise ValueError(
                    f"Original shape {original_array.shape} does not match "
                    f"pixel shape {self.pixels.shape}"
                )

        original_array.setflags(write=False)
        self._original = original_array

    @classmethod
    def from_image(cls, image: Any) -> "PixelBuffer":
        """Create a buffer from a PIL Image (converted to RGBA)."""
        if not hasattr(image, "mode") or not hasattr(image, "convert"):
            raise TypeError(f"Expected PIL Image, got {type(image)}")
        if image.mode != "RGBA":
            image = image.convert("RGBA")
        return cls(np.asarray(image, dtype=np.uint8))

    @classmethod
    def from_bytes(cls, data: bytes, width: int, height: int) -> "PixelBuffer":
        """Create a buffer from interleaved row-major RGBA bytes."""
        if width <= 0 or height <= 0:
            raise ValueError(f"width and height must be > 0, got {width}x{height}")
        expected = width * height * 4
        if len(data) != expected:
            raise ValueError(f"Expected {expected} bytes for {width}x{height} RGBA, got {len(data)}")
        array = np.frombuffer(bytes(data), dtype=np.uint8).reshape(height, width, 4)
        return cls(array)

    @classmethod
    def blank(cls, width: int, height: int, color: RgbaColor = (255, 255, 255, 255)) -> "PixelBuffer":
        """Create a buffer filled with a single color."""
        if width <= 0 or height <= 0:
            raise ValueError(f"width and height must be > 0, got {width}x{height}")
        array = np.empty((height, width, 4), dtype=np.uint8)
        array[:, :] = color
        return cls(array)

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    @property
    def original(self) -> np.ndarray:
        """Read-only pristine pixels captured at load time."""
        return self._original

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get_pixel(self, x: int, y: int) -> RgbaColor:
        r, g, b, a = self.pixels[y, x]
        return int(r), int(g), int(b), int(a)

    def get_original_pixel(self, x: int, y: int) -> RgbaColor:
        r, g, b, a = self._original[y, x]
        return int(r), int(g), int(b), int(a)

    def set_pixel(self, x: int, y: int, color: RgbaColor) -> None:
        self.pixels[y, x] = color

    def snapshot(self) -> np.ndarray:
        """Return a deep copy of the live pixels."""
        return self.pixels.copy()

    def restore(self, snapshot: np.ndarray) -> None:
        """
        Copy a snapshot back into the live pixels.

        The live array is updated in place so existing references to
        ``pixels`` stay valid.

        Raises:
            ValueError: If the snapshot shape differs from the buffer shape
        """
        if snapshot.shape != self.pixels.shape:
            raise ValueError(
                f"Snapshot shape {snapshot.shape} does not match buffer shape {self.pixels.shape}"
            )
        np.copyto(self.pixels, snapshot)

    def reset_to_original(self) -> None:
        np.copyto(self.pixels, self._original)

    def to_bytes(self) -> bytes:
        return self.pixels.tobytes()

    def to_image(self) -> Any:
        """Return the live pixels as a new PIL Image (RGBA mode)."""
        return Image.fromarray(self.pixels.copy())

    def __repr__(self) -> str:
        return f"PixelBuffer(width={self.width}, height={self.height})"
