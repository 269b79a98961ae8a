import numpy as np

from coloring.base import ColoringStrategy
from rendering.evaluators.base import GridSnapshot

CONVERGE_COLOR = (0, 0, 0)
UNCERTAIN_COLOR = (50, 50, 50)


class EscapeBandColoring(ColoringStrategy):
    """
    Diverged cells cycle through the palette, moving one entry every
    ``iterations_per_color`` iterations. Converged cells are black and cells
    that are still being iterated are dark grey.
    """

    def __init__(self, iterations_per_color: int = 2,
                 converge_color=CONVERGE_COLOR,
                 uncertain_color=UNCERTAIN_COLOR):
        if iterations_per_color <= 0:
            raise ValueError("iterations_per_color must be positive")
        self.iterations_per_color = int(iterations_per_color)
        self.converge_color = np.array(converge_color, dtype=np.uint8)
        self.uncertain_color = np.array(uncertain_color, dtype=np.uint8)

    def apply(self, snapshot: GridSnapshot, palette: np.ndarray) -> np.ndarray:
        h, w = snapshot.shape
        rgb = np.empty((h, w, 3), dtype=np.uint8)
        rgb[:] = self.uncertain_color
        rgb[snapshot.converged] = self.converge_color

        diverged = snapshot.diverged
        if np.any(diverged):
            pal = np.asarray(palette, dtype=np.uint8)
            band = (snapshot.escape[diverged] // self.iterations_per_color) % len(pal)
            rgb[diverged] = pal[band]
        return rgb


def expand_to_pixels(rgb: np.ndarray, spacing: int, width: int, height: int) -> np.ndarray:
    """Blow a per-cell image up to the canvas size, one spacing x spacing block per cell."""
    if spacing > 1:
        rgb = np.repeat(np.repeat(rgb, spacing, axis=0), spacing, axis=1)
    return np.ascontiguousarray(rgb[:height, :width])
