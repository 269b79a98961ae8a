from typing import Optional

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QColor, QImage, QMouseEvent, QPainter, QPen, QPixmap
from PySide6.QtWidgets import QLabel, QPushButton, QSizePolicy

from fractals.base import IterationRule


# ---------- Canvas ----------
class FractalCanvas(QLabel):
    """
    Shows the latest frame at 1:1 and draws the zoom indicator: a rectangle
    1/zoom_factor the size of the canvas, centred on the mouse.
    Clicking asks for a zoom there; Ctrl+click zooms out.
    """
    # (x, y, zoom_in)
    zoom_requested = Signal(float, float, bool)

    INDICATOR_COLOR = QColor(255, 255, 255)

    def __init__(self, zoom_factor: float = 2.0, indicator_thickness: int = 5, parent=None):
        super().__init__(parent)
        self.zoom_factor = float(zoom_factor)
        self.indicator_thickness = int(indicator_thickness)
        self._mouse_pos = None
        self._image: Optional[QImage] = None
        self.setMouseTracking(True)
        self.setAlignment(Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignTop)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        self.setMinimumSize(64, 64)
        self.setStyleSheet("background-color: black;")

    def set_frame(self, image: QImage) -> None:
        self._image = image
        self.update()

    def indicator_size(self):
        return int(self.width() / self.zoom_factor), int(self.height() / self.zoom_factor)

    def paintEvent(self, event):
        painter = QPainter(self)
        if self._image is not None and not self._image.isNull():
            painter.drawPixmap(0, 0, QPixmap.fromImage(self._image))
        if self._mouse_pos is not None:
            iw, ih = self.indicator_size()
            mx, my = self._mouse_pos
            painter.setPen(QPen(self.INDICATOR_COLOR, 1))
            for i in range(self.indicator_thickness):
                painter.drawRect(mx - iw // 2 - i, my - ih // 2 - i, iw + 2 * i, ih + 2 * i)
        painter.end()

    def mouseMoveEvent(self, event: QMouseEvent):
        pos = event.position().toPoint()
        self._mouse_pos = (pos.x(), pos.y())
        self.update()

    def leaveEvent(self, event):
        self._mouse_pos = None
        self.update()
        super().leaveEvent(event)

    def mouseReleaseEvent(self, event: QMouseEvent):
        if event.button() != Qt.MouseButton.LeftButton:
            return
        pos = event.position()
        zoom_in = not bool(event.modifiers() & Qt.KeyboardModifier.ControlModifier)
        self.zoom_requested.emit(float(pos.x()), float(pos.y()), zoom_in)


# ---------- Fractal selection ----------
class FractalButton(QPushButton):
    """
    Selects one fractal. Only the button for the fractal on screen is disabled.
    """
    selected = Signal(str)

    def __init__(self, fractal: IterationRule, parent=None):
        super().__init__(fractal.display_name(), parent)
        self.fractal = fractal
        self.setToolTip(fractal.formula_text())
        self.clicked.connect(lambda: self.selected.emit(self.fractal.display_name()))

    def update_enabled(self, current_name: str) -> None:
        self.setEnabled(self.fractal.display_name() != current_name)
