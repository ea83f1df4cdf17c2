from dataclasses import dataclass
from typing import Sequence, Union

import numpy as np
from PIL import ImageColor

from BC_Libs.constants import FILL_ALPHA, FILL_TOLERANCE, MATCH_TOLERANCE, OUTLINE_THRESHOLD
from BC_Libs.FillLib.pixel_buffer import RgbaColor

ColorInput = Union[str, Sequence[int]]


def is_outline(r: int, g: int, b: int, threshold: int = OUTLINE_THRESHOLD) -> bool:
    """True when every color channel is below the outline threshold."""
    return r < threshold and g < threshold and b < threshold


def matches(p1: Sequence[int], p2: Sequence[int], tolerance: int) -> bool:
    """
    Per-channel tolerance match on R, G, B and A.

    Each channel is compared independently, so two pixels match only when
    no single channel differs by more than ``tolerance``.
    """
    return (
        abs(int(p1[0]) - int(p2[0])) <= tolerance
        and abs(int(p1[1]) - int(p2[1])) <= tolerance
        and abs(int(p1[2]) - int(p2[2])) <= tolerance
        and abs(int(p1[3]) - int(p2[3])) <= tolerance
    )


def hex_to_rgba(color: ColorInput, alpha: int = FILL_ALPHA) -> RgbaColor:
    """
    Convert a hex-like color or an RGB(A) tuple to an RGBA tuple.

    Strings are parsed with Pillow's ImageColor, so "#FF0000", "#f00" and
    named colors are all accepted. Any alpha in the input is replaced by
    ``alpha``.

    Raises:
        ValueError: If the color cannot be parsed or a channel is out of range
    """
    if isinstance(color, str):
        rgb = ImageColor.getrgb(color.strip())
        r, g, b = rgb[0], rgb[1], rgb[2]
    else:
        values = [int(value) for value in color]
        if len(values) not in (3, 4):
            raise ValueError(f"Expected 3 or 4 color channels, got {len(values)}")
        r, g, b = values[0], values[1], values[2]

    for channel in (r, g, b, alpha):
        if channel < 0 or channel > 255:
            raise ValueError(f"Color channel out of range 0-255: {channel}")

    return int(r), int(g), int(b), int(alpha)


@dataclass(frozen=True)
class RegionClassifier:
    outline_threshold: int = OUTLINE_THRESHOLD
    fill_tolerance: int = FILL_TOLERANCE
    match_tolerance: int = MATCH_TOLERANCE

    def __post_init__(self) -> None:
        for name in ("outline_threshold", "fill_tolerance", "match_tolerance"):
            value = getattr(self, name)
            if value < 0 or value > 255:
                raise ValueError(f"{name} must be 0-255, got {value}")

    def is_outline(self, pixel: Sequence[int]) -> bool:
        return is_outline(int(pixel[0]), int(pixel[1]), int(pixel[2]), self.outline_threshold)

    def already_matches(self, pixel: Sequence[int], reference: Sequence[int]) -> bool:
        return matches(pixel, reference, self.match_tolerance)

    def outline_mask(self, pixels: np.ndarray) -> np.ndarray:
        """Boolean (height, width) mask of outline pixels."""
        return np.all(pixels[:, :, :3] < self.outline_threshold, axis=2)

    def fillable_mask(self, pixels: np.ndarray, target: RgbaColor) -> np.ndarray:
        """
        Boolean (height, width) mask of pixels a flood from ``target`` may enter.

        A pixel is fillable when it is not outline and matches ``target``
        within ``fill_tolerance`` on every channel. Connectivity is not
        considered here.
        """
        difference = np.abs(pixels.astype(np.int16) - np.array(target, dtype=np.int16))
        within = np.all(difference <= self.fill_tolerance, axis=2)
        return within & ~self.outline_mask(pixels)
