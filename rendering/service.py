from __future__ import annotations
import logging
import threading
import time
import numpy as np
from typing import Callable, Optional

# Fractal imports
from complexmath.number import Complex
from fractals.base import IterationRule, ViewerSettings
from fractals.registry import default_fractal

# Coloring imports
from coloring.palettes import palettes, DEFAULT_PALETTE
from coloring.escape_bands import EscapeBandColoring, expand_to_pixels
from coloring.base import ColoringStrategy

# Rendering imports
from rendering.evaluators.base import GridEvaluator, GridSnapshot
from rendering.evaluators.factory import create_evaluator
from rendering.events import FrameEvent, LogEvent

# Utils imports
from utils.coords import ViewportMapping
from utils.enums import EvaluatorMode

logger = logging.getLogger(__name__)


class IterationService:
    """
    UI-facing facade that owns:
      - the current fractal, viewport mapping and evaluator (one "view"),
      - the background worker that advances the evaluator forever,
      - colouring of each pass into a published frame,
      - event dispatch (frame/log).

    Readers never touch the grid: after each pass the worker takes a
    snapshot, colours it and hands the finished frame to on_frame. Replacing
    the view stops and joins the worker before the old grid is dropped.
    """

    def __init__(
        self,
        settings: Optional[ViewerSettings] = None,
        fractal: Optional[IterationRule] = None,
        palette: str = DEFAULT_PALETTE,
        max_iterations: Optional[int] = None,
    ) -> None:
        # ----- Config -----
        self.settings = settings or ViewerSettings()
        self.max_iterations = max_iterations
        self.palette = np.array(palettes[palette], dtype=np.uint8)
        self.coloring: ColoringStrategy = EscapeBandColoring(self.settings.iterations_per_color)

        # ----- View -----
        self.fractal = fractal or default_fractal()
        self.mapping: Optional[ViewportMapping] = None
        self.evaluator: Optional[GridEvaluator] = None
        self.last_snapshot: Optional[GridSnapshot] = None

        # ----- Threading -----
        self._worker_thread: Optional[threading.Thread] = None
        self._stop_flag = threading.Event()
        self._lock = threading.RLock()
        self._seq = 0
        self._running = False

        # Callbacks
        self.on_frame: Optional[Callable[[FrameEvent], None]] = None
        self.on_log: Optional[Callable[[LogEvent], None]] = None

        self._reset_view(self.fractal.initial_view_center(),
                         self.fractal.initial_view_diameter())

    # ---------------------------------------------------------------------
    # Configuration
    # ---------------------------------------------------------------------

    @property
    def seq(self) -> int:
        return self._seq

    @property
    def is_running(self) -> bool:
        return self._worker_thread is not None and self._worker_thread.is_alive()

    def set_palette(self, name: str) -> None:
        self.palette = np.array(palettes[name], dtype=np.uint8)

    def set_coloring_strategy(self, strategy: ColoringStrategy) -> None:
        self.coloring = strategy

    def set_evaluator_mode(self, mode: EvaluatorMode) -> None:
        with self._lock:
            self.settings.evaluator = mode
            self._replace_view(self.mapping.center, self.mapping.diameter)

    def set_fractal(self, fractal: IterationRule) -> None:
        """Switch fractal and jump to its default view."""
        with self._lock:
            self.fractal = fractal
            self._replace_view(fractal.initial_view_center(),
                               fractal.initial_view_diameter())

    def set_view(self, center, diameter: float) -> None:
        with self._lock:
            self._replace_view(Complex.coerce(center), diameter)

    def zoom_at(self, x: float, y: float, zoom_in: bool = True) -> None:
        """Re-centre on canvas pixel (x, y) and zoom by the configured factor."""
        with self._lock:
            zoomed = self.mapping.zoomed(x, y, zoom_in, self.settings.zoom_factor)
            self._replace_view(zoomed.center, zoomed.diameter)

    def set_image_size(self, width: int, height: int) -> None:
        with self._lock:
            self.settings.width, self.settings.height = int(width), int(height)
            self._replace_view(self.mapping.center, self.mapping.diameter)

    # ---------------------------------------------------------------------
    # Lifecycle
    # ---------------------------------------------------------------------

    def start(self) -> None:
        with self._lock:
            self._stop_worker()
            self._running = True
            self._start_worker()

    def stop(self) -> None:
        with self._lock:
            self._running = False
            self._stop_worker()

    def shutdown(self) -> None:
        """Stop the worker and drop the grid."""
        self.stop()
        self.evaluator = None
        self.last_snapshot = None

    def _start_worker(self) -> None:
        self._stop_flag.clear()
        self._worker_thread = threading.Thread(target=self._run,
                                               args=(self.evaluator, self._seq),
                                               name=f"iteration-worker-{self._seq}",
                                               daemon=True)
        self._worker_thread.start()

    def _stop_worker(self) -> None:
        self._stop_flag.set()
        worker = self._worker_thread
        if worker is not None and worker is not threading.current_thread():
            # Bounded: the worker checks the flag before every pass
            worker.join()
        self._worker_thread = None

    def _replace_view(self, center: Complex, diameter: float) -> None:
        was_running = self._running
        self._stop_worker()
        self._reset_view(center, diameter)
        if was_running:
            self._start_worker()

    def _reset_view(self, center: Complex, diameter: float) -> None:
        st = self.settings
        mapping = ViewportMapping.create(center, diameter, st.width, st.height, st.sample_spacing)
        self._seq += 1
        self.mapping = mapping
        self.evaluator = create_evaluator(self.fractal, mapping, st.evaluator)
        self.last_snapshot = None
        self._log(f"View {self._seq}: {self.fractal.display_name()} "
                  f"center={mapping.center} diameter={mapping.diameter:.6g} "
                  f"grid={mapping.rows}x{mapping.cols} "
                  f"evaluator={type(self.evaluator).__name__}")

    # ---------------------------------------------------------------------
    # Worker routine
    # ---------------------------------------------------------------------

    def _run(self, evaluator: GridEvaluator, seq: int) -> None:
        st = self.settings
        mapping = evaluator.mapping
        t0 = time.perf_counter()
        try:
            while not self._stop_flag.is_set():
                if self.max_iterations is not None and evaluator.iteration >= self.max_iterations:
                    break
                evaluator.advance()
                snapshot = evaluator.snapshot()
                self.last_snapshot = snapshot
                self._publish(snapshot, mapping, seq)

                if st.log_every and snapshot.iteration % st.log_every == 0:
                    elapsed = time.perf_counter() - t0
                    counts = snapshot.counts()
                    self._log(f"Iteration {snapshot.iteration} in {elapsed:.3f}s: "
                              + ", ".join(f"{s.name.lower()}={n}" for s, n in counts.items()))
        except Exception as e:
            logger.exception("Iteration worker for view %d failed", seq)
            if self.on_log:
                self.on_log(LogEvent(f"[IterationService] Worker error: {e}", level="error"))

    def _publish(self, snapshot: GridSnapshot, mapping: ViewportMapping, seq: int) -> None:
        if self.on_frame is None:
            return
        cells = self.coloring.apply(snapshot, self.palette)
        rgb = expand_to_pixels(cells, mapping.spacing, mapping.width, mapping.height)
        self.on_frame(FrameEvent(rgb, mapping.width, mapping.height, seq, snapshot.iteration))

    def _log(self, message: str) -> None:
        logger.info(message)
        if self.on_log:
            self.on_log(LogEvent(message, level=None))
