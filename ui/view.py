import sys
from datetime import datetime

from PySide6.QtCore import Qt, QTimer
from PySide6.QtGui import QImage, QTextCursor
from PySide6.QtWidgets import (
    QApplication, QMainWindow, QLabel, QVBoxLayout, QWidget, QComboBox,
    QDockWidget, QFormLayout, QScrollArea, QPlainTextEdit
)

from adapters.qt_render_bridge import QtRenderBridge
from api.render_api import RenderAPI
from coloring.palettes import palettes, DEFAULT_PALETTE
from fractals.base import ViewerSettings
from fractals.registry import list_fractals, default_fractal
from rendering.service import IterationService
from utils.enums import EvaluatorMode
from ui.view_components import FractalCanvas, FractalButton


# =============================================================================
# Main Window
# =============================================================================
class FractalViewer(QMainWindow):
    # ---------- Construction & UI wiring ----------
    def __init__(self, settings: ViewerSettings = None, fractal_name: str = None):
        super().__init__()
        self.setWindowTitle("Fractal Drawer")
        self.settings = settings or ViewerSettings()

        # Service + Qt bridge
        fractal = default_fractal()
        for rule in list_fractals():
            if rule.display_name() == fractal_name:
                fractal = rule
        self.service = IterationService(self.settings, fractal=fractal)
        self.api = RenderAPI(self.service)
        self.bridge = QtRenderBridge(self.api, parent=self)
        self.bridge.image_updated.connect(self.update_image)
        self.bridge.log_text.connect(self.log)

        self.canvas = FractalCanvas(self.settings.zoom_factor,
                                    self.settings.indicator_thickness, parent=self)
        self.canvas.zoom_requested.connect(self.zoom_at)
        self.status_label = QLabel("Iteration: 0")
        self.status_label.setStyleSheet("color: #AAB; padding: 2px;")

        self.fractal_buttons = []
        self._build_ui()
        self._update_buttons()
        self.resize(self.settings.width + 320, self.settings.height + 160)

    def _build_ui(self):
        # ----- Central layout -----
        layout = QVBoxLayout()
        layout.setContentsMargins(8, 8, 8, 8)
        layout.addWidget(self.canvas, stretch=1)
        layout.addWidget(self.status_label)

        container = QWidget()
        container.setLayout(layout)
        self.setCentralWidget(container)

        # ----- Side dock: fractal choice -----
        choice_dock = QDockWidget("Fractals", self)
        choice_dock.setFeatures(QDockWidget.DockWidgetFeature.NoDockWidgetFeatures)
        scroll = QScrollArea()
        scroll.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        scroll.setWidgetResizable(True)
        buttons = QWidget()
        buttons_layout = QVBoxLayout(buttons)
        for rule in list_fractals():
            button = FractalButton(rule)
            button.selected.connect(self.select_fractal)
            buttons_layout.addWidget(button)
            self.fractal_buttons.append(button)
        buttons_layout.addStretch(1)
        scroll.setWidget(buttons)
        choice_dock.setWidget(scroll)
        self.addDockWidget(Qt.DockWidgetArea.LeftDockWidgetArea, choice_dock)

        # ----- Side dock: settings -----
        settings_dock = QDockWidget("Settings", self)
        settings_dock.setFeatures(QDockWidget.DockWidgetFeature.NoDockWidgetFeatures)
        form_widget = QWidget()
        form = QFormLayout(form_widget)

        self.evaluator_input = QComboBox()
        self.evaluator_input.addItems([m.name for m in EvaluatorMode])
        self.evaluator_input.setCurrentText(self.settings.evaluator.name)
        self.evaluator_input.currentTextChanged.connect(
            lambda name: self.api.configure().evaluator(EvaluatorMode[name]).apply())
        form.addRow("Evaluator: ", self.evaluator_input)

        self.palette_input = QComboBox()
        self.palette_input.addItems(list(palettes.keys()))
        self.palette_input.setCurrentText(DEFAULT_PALETTE)
        self.palette_input.currentTextChanged.connect(self.service.set_palette)
        form.addRow("Palette: ", self.palette_input)

        self.spacing_input = QComboBox()
        self.spacing_input.addItems(["1", "2", "4", "8"])
        self.spacing_input.setCurrentText(str(self.settings.sample_spacing))
        self.spacing_input.currentTextChanged.connect(
            lambda text: self.api.configure().spacing(int(text)).apply())
        form.addRow("Sample spacing: ", self.spacing_input)

        self.log_view = QPlainTextEdit()
        self.log_view.setReadOnly(True)
        self.log_view.setMaximumBlockCount(2000)
        form.addRow(self.log_view)

        settings_dock.setWidget(form_widget)
        self.addDockWidget(Qt.DockWidgetArea.RightDockWidgetArea, settings_dock)

    # ---------- Actions ----------
    def start(self):
        self.api.start()

    def select_fractal(self, name: str):
        self.api.select_fractal(name)
        self._update_buttons()

    def zoom_at(self, x: float, y: float, zoom_in: bool):
        self.api.zoom_at(x, y, zoom_in)

    def _update_buttons(self):
        current = self.service.fractal.display_name()
        for button in self.fractal_buttons:
            button.update_enabled(current)

    # ---------- Service callbacks ----------
    def update_image(self, image: QImage, frame_w: int, frame_h: int, seq: int, iteration: int):
        # Frames queued from a replaced view are dropped
        if seq != self.service.seq:
            return
        self.canvas.set_frame(image)
        self.status_label.setText(f"{self.service.fractal.formula_text()}   Iteration: {iteration}")

    def log(self, msg: str):
        timestamp = datetime.now().strftime("%H:%M:%S.%f")[:-3]
        self.log_view.appendPlainText(f"[{timestamp}] {msg}")
        self.log_view.moveCursor(QTextCursor.MoveOperation.End)

    # ---------- Qt events ----------
    def resizeEvent(self, event):
        super().resizeEvent(event)
        # Rebuild the grid for the new canvas size once resizing settles
        if not hasattr(self, "resize_timer"):
            self.resize_timer = QTimer(self)
            self.resize_timer.setSingleShot(True)
            self.resize_timer.timeout.connect(self._apply_canvas_size)
        self.resize_timer.start(250)

    def _apply_canvas_size(self):
        w, h = self.canvas.width(), self.canvas.height()
        if (w, h) != (self.settings.width, self.settings.height):
            self.api.set_image_size(w, h)

    def closeEvent(self, event):
        self.service.shutdown()
        event.accept()


# =============================================================================
# Entrypoint
# =============================================================================
if __name__ == "__main__":
    app = QApplication(sys.argv)
    viewer = FractalViewer()
    viewer.show()
    viewer.start()
    sys.exit(app.exec())
