from dataclasses import dataclass
from abc import ABC, abstractmethod

from complexmath.number import Complex
from utils.enums import EvaluatorMode


@dataclass
class ViewerSettings:
    """
    Presentational settings for the live viewer.
    Width and Height are the canvas size in pixels.
    Sample_spacing is the number of pixels covered by one grid cell.
    Zoom_factor is applied on click (inverted with Ctrl held).
    Iterations_per_color controls how fast the escape bands cycle.
    """
    width: int = 800
    height: int = 800
    sample_spacing: int = 1
    zoom_factor: float = 2.0
    indicator_thickness: int = 5
    iterations_per_color: int = 2
    evaluator: EvaluatorMode = EvaluatorMode.AUTO
    log_every: int = 50


class IterationRule(ABC):
    """
    An abstract base class for escape-time fractal definitions.

    Rules whose step ignores the starting position can be evaluated by the
    deduplicating evaluator; those set ``depends_on_position = False``.
    """
    depends_on_position: bool = True

    @abstractmethod
    def start(self, position: Complex) -> Complex:
        ...

    @abstractmethod
    def step(self, value: Complex, position: Complex) -> Complex:
        ...

    @abstractmethod
    def diverges(self, value: Complex, iteration: int) -> bool:
        ...

    @abstractmethod
    def initial_view_center(self) -> Complex:
        ...

    @abstractmethod
    def initial_view_diameter(self) -> float:
        ...

    @abstractmethod
    def display_name(self) -> str:
        ...

    @abstractmethod
    def formula_text(self) -> str:
        ...
