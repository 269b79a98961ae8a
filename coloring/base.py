from abc import ABC, abstractmethod
import numpy as np

from rendering.evaluators.base import GridSnapshot

class ColoringStrategy(ABC):
    @abstractmethod
    def apply(self, snapshot: GridSnapshot, palette: np.ndarray) -> np.ndarray:
        ...
