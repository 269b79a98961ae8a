from __future__ import annotations

import numpy as np

from rendering.evaluators.base import GridEvaluator
from utils.enums import CellStatus


class NaiveGridEvaluator(GridEvaluator):
    """
    Steps every unresolved cell's own trajectory each pass, with no sharing
    between cells. Works for any rule, including ones whose step depends on
    the starting position, and serves as the reference result for the
    deduplicating evaluator.
    """

    def advance(self) -> None:
        iteration = self.iteration + 1
        for idx in np.flatnonzero(self.status == CellStatus.ACTIVE).tolist():
            self._step_cell(idx, iteration)
        self.iteration = iteration
