"""
Tap coordinate mapping for Brush Color.

Converts an interaction point in display coordinates into buffer pixel
coordinates. The displayed canvas may be scaled to fit its container, and the
buffer may be allocated at a multiple of the logical image size for high
density displays.

Classes:
    DisplayRect: On-screen bounding rectangle of the displayed canvas
    CoordinateMapper: Display point to buffer pixel mapping

Functions:
    js_round: Round halves toward positive infinity
    fit_to_container: Largest aspect-preserving display size for a container
"""

import math
from dataclasses import dataclass
from typing import Optional, Tuple

from BC_Libs.constants import DEFAULT_DEVICE_PIXEL_RATIO


def js_round(value: float) -> int:
    """Round to the nearest integer with halves going up (2.5 -> 3, -2.5 -> -2)."""
    floor = math.floor(value)
    return int(floor) + (1 if value - floor >= 0.5 else 0)


@dataclass(frozen=True)
class DisplayRect:
    """On-screen rectangle of the displayed canvas.

    Attributes:
        left: X of the rectangle's left edge in display coordinates
        top: Y of the rectangle's top edge in display coordinates
        width: Displayed width (display units, not pixels of the buffer)
        height: Displayed height
    """
    left: float
    top: float
    width: float
    height: float


@dataclass(frozen=True)
class CoordinateMapper:
    """
    Maps display points to image and buffer pixel coordinates.

    Results are never clamped. A point outside the displayed canvas maps to
    an out-of-range pixel, which the fill engine rejects as a no-op.

    Attributes:
        image_width: Logical (unscaled) image width
        image_height: Logical (unscaled) image height
        device_pixel_ratio: Buffer pixels per logical pixel
    """
    image_width: int
    image_height: int
    device_pixel_ratio: float = DEFAULT_DEVICE_PIXEL_RATIO

    def __post_init__(self) -> None:
        if self.image_width <= 0 or self.image_height <= 0:
            raise ValueError(
                f"image size must be > 0, got {self.image_width}x{self.image_height}"
            )
        if self.device_pixel_ratio <= 0:
            raise ValueError(f"device_pixel_ratio must be > 0, got {self.device_pixel_ratio}")

    def to_image(self, event_x: float, event_y: float, rect: DisplayRect) -> Tuple[int, int]:
        """Map a display point to logical image coordinates."""
        if rect.width <= 0 or rect.height <= 0:
            raise ValueError(f"Display rect must have a positive size, got {rect.width}x{rect.height}")

        local_x = event_x - rect.left
        local_y = event_y - rect.top
        image_x = js_round(local_x * self.image_width / rect.width)
        image_y = js_round(local_y * self.image_height / rect.height)
        return image_x, image_y

    def to_buffer(self, event_x: float, event_y: float, rect: DisplayRect) -> Tuple[int, int]:
        """Map a display point to buffer pixel coordinates."""
        image_x, image_y = self.to_image(event_x, event_y, rect)
        return (
            js_round(image_x * self.device_pixel_ratio),
            js_round(image_y * self.device_pixel_ratio),
        )


def fit_to_container(
    image_width: int,
    image_height: int,
    container_width: int,
    container_height: int,
) -> Optional[Tuple[int, int]]:
    """
    Compute the largest display size that fits the container.

    Returns:
        (width, height) preserving the image aspect ratio, or None when the
        container or image has a zero dimension (not laid out yet)
    """
    if container_width <= 0 or container_height <= 0 or image_width <= 0 or image_height <= 0:
        return None

    scale = min(container_width / image_width, container_height / image_height)
    return js_round(image_width * scale), js_round(image_height * scale)
