"""
Coloring session for Brush Color.

A ColoringSession owns everything one coloring screen needs: the loaded
pixel buffer, the undo history, the palette state (current color and eraser
toggle) and the fill engine. Every operation that touches the buffer runs
under the session lock, so callers using worker threads are serialized and a
second tap cannot start while one is in flight.

Classes:
    ColoringSession: Load, tap, undo, reset and export for one picture
"""

import logging
import threading
from pathlib import Path
from typing import Optional, Tuple, Union

from BC_Libs.constants import MODE_ERASE, MODE_FILL
from BC_Libs.FillLib.coordinate_mapper import CoordinateMapper, DisplayRect
from BC_Libs.FillLib.fill_engine import FillEngine, FillResult
from BC_Libs.FillLib.history_manager import HistoryManager
from BC_Libs.FillLib.pixel_buffer import PixelBuffer
from BC_Libs.FillLib.region_classifier import ColorInput, hex_to_rgba
from BC_Libs.SessionLib.image_export import export_png_bytes, save_buffer
from BC_Libs.SessionLib.image_loader import LoadedImage, load_image, prepare_image
from BC_Libs.SessionLib.session_config import ColoringConfig

logger = logging.getLogger(__name__)

Point = Tuple[float, float]


class ColoringSession:
    """
    State and operations for coloring one picture.

    Example:
        >>> session = ColoringSession()
        >>> session.load_new_image(PixelBuffer.blank(10, 10))
        >>> session.tap_pixel(5, 5, "fill", "#FF0000").changed
        True
        >>> session.undo()
        True
    """

    def __init__(self, config: Optional[ColoringConfig] = None) -> None:
        self.config = config or ColoringConfig()
        self.engine = FillEngine(self.config.build_classifier())
        self.history = HistoryManager(self.config.max_undo_states)

        self.buffer: Optional[PixelBuffer] = None
        self.image_width = 0
        self.image_height = 0
        self.device_pixel_ratio = self.config.device_pixel_ratio
        self.source_path: Optional[Path] = None

        self.current_color = self.config.default_color
        self.eraser_enabled = False

        self._lock = threading.Lock()
        self._busy = False

    @property
    def has_image(self) -> bool:
        return self.buffer is not None

    @property
    def is_busy(self) -> bool:
        return self._busy

    @property
    def current_mode(self) -> str:
        return MODE_ERASE if self.eraser_enabled else MODE_FILL

    def select_color(self, color: ColorInput) -> None:
        """Choose a fill color; selecting a color turns the eraser off."""
        r, g, b, _ = hex_to_rgba(color)
        self.current_color = f"#{r:02X}{g:02X}{b:02X}"
        self.eraser_enabled = False

    def toggle_eraser(self) -> bool:
        self.eraser_enabled = not self.eraser_enabled
        return self.eraser_enabled

    def load_new_image(
        self,
        buffer: PixelBuffer,
        image_width: Optional[int] = None,
        image_height: Optional[int] = None,
        device_pixel_ratio: Optional[float] = None,
        source_path: Optional[Path] = None,
    ) -> None:
        """
        Replace the buffer with a freshly loaded one and clear the history.

        The buffer's original pixels are re-captured from its current pixels
        so the new picture starts pristine. Logical dimensions default to the
        buffer size divided by the device pixel ratio.
        """
        ratio = float(device_pixel_ratio) if device_pixel_ratio is not None else self.config.device_pixel_ratio
        if ratio <= 0:
            raise ValueError(f"device_pixel_ratio must be > 0, got {ratio}")

        with self._lock:
            self.buffer = PixelBuffer(buffer.pixels)
            self.device_pixel_ratio = ratio
            self.image_width = int(image_width) if image_width else max(1, int(buffer.width / ratio))
            self.image_height = int(image_height) if image_height else max(1, int(buffer.height / ratio))
            self.source_path = source_path
            self.history.clear()

        logger.info(
            f"Loaded picture {self.image_width}x{self.image_height} "
            f"(buffer {self.buffer.width}x{self.buffer.height})"
        )

    def load_loaded_image(self, loaded: LoadedImage) -> None:
        self.load_new_image(
            loaded.buffer,
            loaded.image_width,
            loaded.image_height,
            loaded.device_pixel_ratio,
            loaded.source_path,
        )

    def load_image_file(self, file_path: Union[str, Path], device_pixel_ratio: Optional[float] = None) -> None:
        """
        Load a picture from disk.

        Raises:
            FileNotFoundError: If the file does not exist
            OSError: If the file cannot be decoded
        """
        ratio = device_pixel_ratio if device_pixel_ratio is not None else self.config.device_pixel_ratio
        loaded = load_image(Path(file_path), ratio, self.config.max_image_size)
        self.load_loaded_image(loaded)

    def load_pil_image(self, image, device_pixel_ratio: Optional[float] = None) -> None:
        ratio = device_pixel_ratio if device_pixel_ratio is not None else self.config.device_pixel_ratio
        self.load_loaded_image(prepare_image(image, ratio, self.config.max_image_size))

    def coordinate_mapper(self) -> Optional[CoordinateMapper]:
        if self.buffer is None:
            return None
        return CoordinateMapper(self.image_width, self.image_height, self.device_pixel_ratio)

    def handle_tap(
        self,
        point: Point,
        rect: DisplayRect,
        mode: Optional[str] = None,
        color: Optional[ColorInput] = None,
    ) -> FillResult:
        """
        Fill or erase the region under a display-space tap.

        The tap is mapped against the picture that is loaded when the lock is
        taken, and the same picture receives the fill.

        Args:
            point: (x, y) of the tap in display coordinates
            rect: On-screen rectangle of the displayed picture
            mode: 'fill' or 'erase'; defaults to the session's current mode
            color: Fill color; defaults to the session's current color

        Returns:
            FillResult; truthy only when the picture changed
        """
        mode = self._resolve_mode(mode)

        with self._lock:
            mapper = self.coordinate_mapper()
            if mapper is None:
                return FillResult("no_image")
            x, y = mapper.to_buffer(point[0], point[1], rect)
            return self._apply_tap(x, y, mode, color)

    def tap_pixel(
        self,
        x: int,
        y: int,
        mode: Optional[str] = None,
        color: Optional[ColorInput] = None,
    ) -> FillResult:
        """Fill or erase the region under a buffer pixel."""
        mode = self._resolve_mode(mode)

        with self._lock:
            return self._apply_tap(x, y, mode, color)

    def _resolve_mode(self, mode: Optional[str]) -> str:
        mode = mode or self.current_mode
        if mode not in (MODE_FILL, MODE_ERASE):
            raise ValueError(f"Unknown tap mode: {mode}")
        return mode

    def _apply_tap(self, x: int, y: int, mode: str, color: Optional[ColorInput]) -> FillResult:
        # Caller holds self._lock
        if self.buffer is None:
            return FillResult("no_image")

        self._busy = True
        try:
            if mode == MODE_ERASE:
                result = self.engine.erase(self.buffer, x, y, self.history)
            else:
                fill_color = color if color is not None else self.current_color
                result = self.engine.fill(self.buffer, x, y, fill_color, self.history)
        finally:
            self._busy = False

        if not result.changed:
            logger.debug(f"Tap at ({x}, {y}) in {mode} mode was a no-op: {result.outcome}")
        return result

    def undo(self) -> bool:
        """Restore the state before the last fill or erase. Returns False when nothing to undo."""
        with self._lock:
            if self.buffer is None:
                return False
            snapshot = self.history.pop()
            if snapshot is None:
                return False
            self.buffer.restore(snapshot)

        logger.debug(f"Undo restored snapshot, {len(self.history)} remaining")
        return True

    def reset(self) -> bool:
        """Restore the original picture verbatim and clear the history."""
        with self._lock:
            if self.buffer is None:
                return False
            self.buffer.reset_to_original()
            self.history.clear()

        logger.info("Picture reset to original")
        return True

    def close(self) -> None:
        """Discard the picture and its history."""
        with self._lock:
            self.buffer = None
            self.image_width = 0
            self.image_height = 0
            self.source_path = None
            self.history.clear()

    def export_png(self, output_path: Optional[Path] = None) -> Union[bytes, Path]:
        """
        Export the current picture as PNG.

        Returns:
            PNG bytes when no path is given, otherwise the written path

        Raises:
            RuntimeError: If no picture is loaded
            OSError: If the file cannot be written
        """
        with self._lock:
            if self.buffer is None:
                raise RuntimeError("No picture loaded to export")
            if output_path is None:
                return export_png_bytes(self.buffer)
            return save_buffer(self.buffer, Path(output_path))
