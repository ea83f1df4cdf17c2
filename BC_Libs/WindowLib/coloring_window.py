import logging
from functools import partial
from pathlib import Path
from typing import Optional

from PyQt5.QtCore import QRectF, Qt, QTimer, pyqtSignal
from PyQt5.QtGui import QColor, QImage, QPainter
from PyQt5.QtWidgets import (
    QColorDialog,
    QFileDialog,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from BC_Libs.constants import (
    DEFAULT_WINDOW_HEIGHT,
    DEFAULT_WINDOW_WIDTH,
    WORKING_INDICATOR_DELAY_MS,
)
from BC_Libs.FillLib.coordinate_mapper import DisplayRect, fit_to_container
from BC_Libs.SessionLib.coloring_session import ColoringSession
from BC_Libs.SessionLib.image_export import default_export_name
from BC_Libs.SessionLib.image_loader import image_file_filter

logger = logging.getLogger(__name__)


class ColoringCanvas(QWidget):
    """Draws the session's buffer fitted into the widget and reports taps."""

    tapped = pyqtSignal(float, float, object)

    def __init__(self, session: ColoringSession, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.session = session
        self.setMinimumSize(400, 400)
        self._image: Optional[QImage] = None

    def refresh(self) -> None:
        buffer = self.session.buffer
        if buffer is None:
            self._image = None
        else:
            data = buffer.to_bytes()
            self._image = QImage(data, buffer.width, buffer.height, buffer.width * 4, QImage.Format_RGBA8888).copy()
        self.update()

    def display_rect(self) -> Optional[DisplayRect]:
        if self.session.buffer is None:
            return None

        fitted = fit_to_container(
            self.session.image_width,
            self.session.image_height,
            self.width(),
            self.height(),
        )
        if fitted is None:
            return None

        display_width, display_height = fitted
        left = (self.width() - display_width) / 2
        top = (self.height() - display_height) / 2
        return DisplayRect(left, top, display_width, display_height)

    def paintEvent(self, event) -> None:
        painter = QPainter(self)
        painter.fillRect(self.rect(), QColor("#f1f3f5"))

        rect = self.display_rect()
        if self._image is not None and rect is not None:
            painter.setRenderHint(QPainter.SmoothPixmapTransform, True)
            painter.drawImage(QRectF(rect.left, rect.top, rect.width, rect.height), self._image)
        else:
            painter.setPen(QColor("#868e96"))
            painter.drawText(self.rect(), Qt.AlignCenter, "Load a picture to start coloring")

        painter.end()

    def mousePressEvent(self, event) -> None:
        rect = self.display_rect()
        if rect is None or event.button() != Qt.LeftButton:
            return
        self.tapped.emit(float(event.x()), float(event.y()), rect)


class ColoringWindow(QMainWindow):
    def __init__(self, session: Optional[ColoringSession] = None) -> None:
        super().__init__()
        self.setWindowTitle("Brush Color")
        self.resize(DEFAULT_WINDOW_WIDTH, DEFAULT_WINDOW_HEIGHT)

        self.session = session or ColoringSession()
        self._tap_pending = False

        self._build_ui()
        self._connect_signals()
        self._update_controls()

    def _build_ui(self) -> None:
        central = QWidget(self)
        self.setCentralWidget(central)

        root = QHBoxLayout(central)
        controls_col = QVBoxLayout()

        self.btn_load_image = QPushButton("Load Picture")
        self.btn_custom_color = QPushButton("Custom Color")
        self.btn_eraser = QPushButton("Eraser")
        self.btn_eraser.setCheckable(True)
        self.btn_undo = QPushButton("Undo")
        self.btn_save = QPushButton("Save")
        self.btn_reset = QPushButton("Start Over")
        self.btn_close = QPushButton("Close Picture")

        self.label_current_color = QLabel()
        self.label_working = QLabel("Working...")
        self.label_working.setVisible(False)

        palette_grid = QGridLayout()
        self.palette_buttons = []
        for index, color in enumerate(self.session.config.palette):
            button = QPushButton()
            button.setFixedSize(40, 40)
            button.setStyleSheet(f"background-color: {color}; border: 1px solid #888;")
            button.setToolTip(color)
            button.clicked.connect(lambda checked=False, value=color: self.select_color(value))
            palette_grid.addWidget(button, index // 3, index % 3)
            self.palette_buttons.append(button)

        controls_col.addWidget(self.btn_load_image)
        controls_col.addWidget(QLabel("Colors"))
        controls_col.addLayout(palette_grid)
        controls_col.addWidget(self.btn_custom_color)
        controls_col.addWidget(self.label_current_color)
        controls_col.addWidget(self.btn_eraser)
        controls_col.addWidget(self.btn_undo)
        controls_col.addWidget(self.btn_save)
        controls_col.addWidget(self.btn_reset)
        controls_col.addWidget(self.btn_close)
        controls_col.addStretch(1)
        controls_col.addWidget(self.label_working)

        self.canvas = ColoringCanvas(self.session, central)

        root.addLayout(controls_col, stretch=0)
        root.addWidget(self.canvas, stretch=1)

    def _connect_signals(self) -> None:
        self.btn_load_image.clicked.connect(self.load_picture)
        self.btn_custom_color.clicked.connect(self.pick_custom_color)
        self.btn_eraser.clicked.connect(self.toggle_eraser)
        self.btn_undo.clicked.connect(self.undo)
        self.btn_save.clicked.connect(self.save_picture)
        self.btn_reset.clicked.connect(self.confirm_reset)
        self.btn_close.clicked.connect(self.close_picture)
        self.canvas.tapped.connect(self.on_canvas_tapped)

    def _update_controls(self) -> None:
        has_image = self.session.has_image
        self.btn_undo.setEnabled(has_image and self.session.history.can_undo)
        self.btn_save.setEnabled(has_image)
        self.btn_reset.setEnabled(has_image)
        self.btn_close.setEnabled(has_image)
        self.btn_eraser.setChecked(self.session.eraser_enabled)

        if self.session.eraser_enabled:
            self.label_current_color.setText("Eraser on")
        else:
            self.label_current_color.setText(f"Color: {self.session.current_color}")

    def load_picture(self) -> None:
        file_path, _ = QFileDialog.getOpenFileName(self, "Select Picture", "", image_file_filter())
        if file_path:
            self.open_picture(Path(file_path))

    def open_picture(self, file_path: Path) -> bool:
        ratio = self.devicePixelRatioF() or 1.0
        try:
            self.session.load_image_file(file_path, ratio)
        except OSError as exc:
            logger.warning(f"Could not load {file_path}: {exc}")
            QMessageBox.warning(self, "Could not load picture", "Could not load image. Please try another.")
            return False

        self.canvas.refresh()
        self._update_controls()
        return True

    def select_color(self, color: str) -> None:
        self.session.select_color(color)
        self._update_controls()

    def pick_custom_color(self) -> None:
        color = QColorDialog.getColor(parent=self, title="Pick a color")
        if not color.isValid():
            return
        self.select_color(color.name())

    def toggle_eraser(self) -> None:
        self.session.toggle_eraser()
        self._update_controls()

    def on_canvas_tapped(self, x: float, y: float, rect: DisplayRect) -> None:
        if self._tap_pending or self.session.is_busy:
            return

        self._tap_pending = True
        self.label_working.setVisible(True)
        # Let the indicator paint before the fill blocks the event loop
        QTimer.singleShot(WORKING_INDICATOR_DELAY_MS, partial(self._run_tap, x, y, rect))

    def _run_tap(self, x: float, y: float, rect: DisplayRect) -> None:
        try:
            result = self.session.handle_tap((x, y), rect)
            if result.changed:
                self.canvas.refresh()
        finally:
            self._tap_pending = False
            self.label_working.setVisible(False)
            self._update_controls()

    def undo(self) -> None:
        if self.session.undo():
            self.canvas.refresh()
        self._update_controls()

    def confirm_reset(self) -> None:
        answer = QMessageBox.question(
            self,
            "Start Over",
            "Clear all colors and start over?",
            QMessageBox.Yes | QMessageBox.No,
            QMessageBox.No,
        )
        if answer != QMessageBox.Yes:
            return

        if self.session.reset():
            self.canvas.refresh()
        self._update_controls()

    def save_picture(self) -> None:
        if not self.session.has_image:
            return

        save_path, _ = QFileDialog.getSaveFileName(
            self,
            "Save Picture",
            default_export_name(self.session.source_path),
            "PNG Images (*.png)",
        )
        if not save_path:
            return

        try:
            self.session.export_png(Path(save_path))
        except OSError as exc:
            QMessageBox.warning(self, "Save failed", str(exc))
            return

        QMessageBox.information(self, "Saved", f"Picture saved to {save_path}")

    def close_picture(self) -> None:
        self.session.close()
        self.canvas.refresh()
        self._update_controls()
