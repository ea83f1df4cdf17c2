"""
Region fill engine for Brush Color.

Implements the bucket fill and the region eraser as an iterative scanline
flood fill over a PixelBuffer. Outline pixels (dark line art) are never
entered, so fills stop at the drawing's lines.

Classes:
    FillResult: Outcome of a fill or erase request
    FillEngine: Scanline flood fill and erase

Type Aliases:
    FillOutcome: Literal outcome names reported in FillResult
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Literal, Optional

from BC_Libs.FillLib.history_manager import HistoryManager
from BC_Libs.FillLib.pixel_buffer import PixelBuffer, RgbaColor
from BC_Libs.FillLib.region_classifier import ColorInput, RegionClassifier, hex_to_rgba

logger = logging.getLogger(__name__)

FillOutcome = Literal["filled", "erased", "out_of_bounds", "outline", "already_matching", "no_image"]

# Writes one scanline run: (buffer, y, left, right) with right inclusive
SpanWriter = Callable[[PixelBuffer, int, int, int], None]


@dataclass(frozen=True)
class FillResult:
    """Outcome of a fill or erase request.

    Attributes:
        outcome: What happened. Only 'filled' and 'erased' mutate the buffer.
        pixels_changed: Number of pixels written
    """
    outcome: FillOutcome
    pixels_changed: int = 0

    @property
    def changed(self) -> bool:
        return self.outcome in ("filled", "erased")

    def __bool__(self) -> bool:
        return self.changed


class FillEngine:
    """
    Scanline flood fill and erase over a PixelBuffer.

    Both operations share the same guards and traversal:

    1. Out-of-range coordinates are a no-op.
    2. An outline pixel under the tap is a no-op.
    3. A target that already matches the requested result (within the
       classifier's match tolerance) is a no-op.
    4. Otherwise the current pixels are pushed onto the history, and every
       non-outline pixel 4-connected to the tap that matches the tapped
       pixel within the fill tolerance is rewritten.

    Fill writes a single opaque color. Erase writes each pixel's own
    original value back.
    """

    def __init__(self, classifier: Optional[RegionClassifier] = None) -> None:
        self.classifier = classifier or RegionClassifier()

    def fill(
        self,
        buffer: PixelBuffer,
        x: int,
        y: int,
        color: ColorInput,
        history: Optional[HistoryManager] = None,
    ) -> FillResult:
        """
        Flood the region under (x, y) with an opaque color.

        Args:
            buffer: Buffer to mutate in place
            x: Buffer pixel column
            y: Buffer pixel row
            color: Hex string ("#RRGGBB") or RGB(A) tuple; alpha is forced to 255
            history: Optional history that receives a snapshot before mutation

        Returns:
            FillResult describing the outcome

        Raises:
            ValueError: If the color cannot be parsed
        """
        fill_color = hex_to_rgba(color)

        rejected = self._check_target(buffer, x, y)
        if rejected is not None:
            return rejected

        target = buffer.get_pixel(x, y)
        if self.classifier.already_matches(target, fill_color):
            return FillResult("already_matching")

        if history is not None:
            history.push(buffer.snapshot())

        def write_color(buf: PixelBuffer, row: int, left: int, right: int) -> None:
            buf.pixels[row, left:right + 1] = fill_color

        changed = self._scanline_fill(buffer, x, y, target, write_color)
        logger.debug(f"Filled {changed} pixels from ({x}, {y}) with {fill_color}")
        return FillResult("filled", changed)

    def erase(
        self,
        buffer: PixelBuffer,
        x: int,
        y: int,
        history: Optional[HistoryManager] = None,
    ) -> FillResult:
        """
        Restore the region under (x, y) to the buffer's original pixels.

        Every restored pixel takes back its own original RGBA, so regions
        that were shaded unevenly in the source image come back unchanged.
        """
        rejected = self._check_target(buffer, x, y)
        if rejected is not None:
            return rejected

        target = buffer.get_pixel(x, y)
        if self.classifier.already_matches(target, buffer.get_original_pixel(x, y)):
            return FillResult("already_matching")

        if history is not None:
            history.push(buffer.snapshot())

        def write_original(buf: PixelBuffer, row: int, left: int, right: int) -> None:
            buf.pixels[row, left:right + 1] = buf.original[row, left:right + 1]

        changed = self._scanline_fill(buffer, x, y, target, write_original)
        logger.debug(f"Erased {changed} pixels from ({x}, {y})")
        return FillResult("erased", changed)

    def _check_target(self, buffer: PixelBuffer, x: int, y: int) -> Optional[FillResult]:
        if not buffer.in_bounds(x, y):
            return FillResult("out_of_bounds")
        if self.classifier.is_outline(buffer.get_pixel(x, y)):
            return FillResult("outline")
        return None

    def _scanline_fill(
        self,
        buffer: PixelBuffer,
        start_x: int,
        start_y: int,
        target: RgbaColor,
        write_span: SpanWriter,
    ) -> int:
        """
        Iterative scanline flood from (start_x, start_y).

        ``open_rows[y][x]`` is 1 while a pixel is fillable and not yet
        claimed. Eligibility is computed from the pixels as they are before
        any write: a pixel is claimed (set to 0) before it is written, so it
        is never re-examined or written twice.
        """
        width = buffer.width
        height = buffer.height
        mask = self.classifier.fillable_mask(buffer.pixels, target)
        open_rows: List[bytearray] = [bytearray(row.tobytes()) for row in mask.view("uint8")]

        open_rows[start_y][start_x] = 0
        stack = [(start_x, start_y)]
        changed = 0

        while stack:
            seed_x, seed_y = stack.pop()
            row = open_rows[seed_y]

            left = seed_x
            while left > 0 and row[left - 1]:
                left -= 1
                row[left] = 0

            right = seed_x
            while right < width - 1 and row[right + 1]:
                right += 1
                row[right] = 0

            write_span(buffer, seed_y, left, right)
            changed += right - left + 1

            for next_y in (seed_y - 1, seed_y + 1):
                if next_y < 0 or next_y >= height:
                    continue
                next_row = open_rows[next_y]
                scan_x = left
                while scan_x <= right:
                    if not next_row[scan_x]:
                        scan_x += 1
                        continue
                    # One seed per open run; the rest of the run is claimed when the seed expands
                    next_row[scan_x] = 0
                    stack.append((scan_x, next_y))
                    scan_x += 1
                    while scan_x <= right and next_row[scan_x]:
                        scan_x += 1

        return changed
