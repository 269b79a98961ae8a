from PySide6.QtCore import QObject, Signal
from PySide6.QtGui import QImage

from api.render_api import RenderAPI
from utils.image_helpers import ndarray_to_qimage
from rendering.events import FrameEvent, LogEvent


class QtRenderBridge(QObject):
    """
    Thin adapter that converts service events to Qt signals for the UI.
    Frames arrive on the worker thread; queued signal delivery moves them to
    the GUI thread.
    """
    # (frame, frame_w, frame_h, seq, iteration)
    image_updated = Signal(QImage, int, int, int, int)
    log_text = Signal(str)

    def __init__(self, api: RenderAPI, parent=None):
        super().__init__(parent)
        self.api = api

        # Subscribe to API events with conversions
        self.api.on_frame(self._on_frame)
        self.api.on_log(self._on_log)

    # --------- Conversions ---------------------
    def _on_frame(self, evt: FrameEvent) -> None:
        qimg = ndarray_to_qimage(evt.data)
        self.image_updated.emit(qimg, int(evt.width), int(evt.height),
                                int(evt.seq), int(evt.iteration))

    def _on_log(self, evt: LogEvent) -> None:
        prefix = f"[{evt.level}] " if evt.level else ""
        self.log_text.emit(prefix + evt.message)
