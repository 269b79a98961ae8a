from typing import Optional

from fractals.registry import get_fractal
from rendering.evaluators.base import GridSnapshot
from rendering.service import IterationService
from utils.enums import EvaluatorMode


class ViewConfigBuilder:
    """
    Builder for configuring the iteration service.
    """
    def __init__(self, service: IterationService):
        self.service = service
        self._size: Optional[tuple] = None
        self._spacing: Optional[int] = None
        self._zoom_factor: Optional[float] = None
        self._evaluator: Optional[EvaluatorMode] = None
        self._palette: Optional[str] = None
        self._fractal: Optional[str] = None

    def size(self, width: int, height: int) -> 'ViewConfigBuilder':
        self._size = (int(width), int(height))
        return self

    def spacing(self, value: int) -> 'ViewConfigBuilder':
        self._spacing = value
        return self

    def zoom_factor(self, value: float) -> 'ViewConfigBuilder':
        self._zoom_factor = value
        return self

    def evaluator(self, mode: EvaluatorMode) -> 'ViewConfigBuilder':
        self._evaluator = mode
        return self

    def palette(self, name: str) -> 'ViewConfigBuilder':
        self._palette = name
        return self

    def fractal(self, name: str) -> 'ViewConfigBuilder':
        self._fractal = name
        return self

    def apply(self) -> None:
        settings = self.service.settings
        if self._zoom_factor:
            if self._zoom_factor <= 1:
                raise ValueError("zoom factor must be greater than 1")
            settings.zoom_factor = float(self._zoom_factor)
        if self._palette:
            self.service.set_palette(self._palette)
        if self._spacing:
            settings.sample_spacing = int(self._spacing)
        if self._evaluator:
            settings.evaluator = self._evaluator

        # Every structural change ends in exactly one view rebuild
        if self._fractal:
            if self._size:
                settings.width, settings.height = self._size
            self.service.set_fractal(get_fractal(self._fractal))
        elif self._size:
            self.service.set_image_size(*self._size)
        elif self._spacing or self._evaluator:
            mapping = self.service.mapping
            self.service.set_view(mapping.center, mapping.diameter)


class RenderAPI:
    """
    Facade for controlling the live iteration and managing callbacks.
    """
    def __init__(self, service: IterationService):
        self.service: IterationService = service

    # ---------- Callbacks --------------------------------
    def on_frame(self, cb): self.service.on_frame = cb
    def on_log(self, cb): self.service.on_log = cb

    # ----------- Facade methods --------------------------
    def set_view(self, center, diameter: float) -> None:
        """
        Replaces the view, restarting iteration from scratch.

        Args:
            center: Plane coordinate at the middle of the canvas.
            diameter (float): Plane distance spanned by the shorter canvas side.
        """
        self.service.set_view(center, diameter)

    def zoom_at(self, x: float, y: float, zoom_in: bool = True) -> None:
        """
        Zooms around a canvas pixel by the configured zoom factor.

        Args:
            x (float): Canvas x coordinate in pixels.
            y (float): Canvas y coordinate in pixels.
            zoom_in (bool): False zooms out instead.
        """
        self.service.zoom_at(x, y, zoom_in)

    def select_fractal(self, name: str) -> None:
        """
        Switches to a registered fractal at its default view.

        Args:
            name (str): Display name from the fractal registry.
        """
        self.service.set_fractal(get_fractal(name))

    def set_image_size(self, width: int, height: int) -> None:
        self.service.set_image_size(width, height)

    def configure(self) -> ViewConfigBuilder:
        """
        Configures the service with a fluent builder pattern.

        Returns:
            ViewConfigBuilder: A builder object for configuring view settings.
        """
        return ViewConfigBuilder(self.service)

    def latest_snapshot(self) -> Optional[GridSnapshot]:
        return self.service.last_snapshot

    def start(self) -> None:
        """
        Starts the background iteration worker.
        """
        self.service.start()

    def stop(self) -> None:
        """
        Stops the background worker and waits for it to finish its pass.
        """
        self.service.stop()
