from __future__ import annotations

import logging

from rendering.evaluators.base import CELL_ERRORS
from rendering.evaluators.dedup import ForwardingGridEvaluator
from utils.enums import CellStatus

logger = logging.getLogger(__name__)


class GridMergingEvaluator(ForwardingGridEvaluator):
    """
    Merges trajectories at grid resolution.

    An ACTIVE cell steps its value and maps it back onto the grid. Off the
    grid, the divergence test decides between DIVERGED and another pass.
    On the grid, the cell gives up its own trajectory in favour of the
    landing cell's chain end:
      - a resolved chain end hands over its resolution,
      - a chain end equal to the cell itself closes a cycle (CONVERGED),
      - anything else becomes the cell's forwarding target (LINKED).

    Two values in the same grid cell are treated as the same trajectory, so
    results are an approximation at the grid's resolution and can differ
    from the naive evaluator near the set's boundary. In exchange most of
    the grid is linked or resolved after the first pass.
    """

    def _diverges(self, idx: int, iteration: int) -> bool:
        try:
            return self.rule.diverges(self.values[idx], iteration)
        except CELL_ERRORS as e:
            logger.debug("Divergence test failed for cell %d at iteration %d: %s",
                         idx, iteration, e)
            return True

    def _advance_active(self, idx: int, iteration: int) -> None:
        value = self._step_cell(idx, iteration, test_divergence=False)
        if value is None:
            return

        cell = self.mapping.plane_to_index(value)
        if cell is None:
            if self._diverges(idx, iteration):
                self._resolve(idx, CellStatus.DIVERGED, iteration)
            return

        end = self.chain_end(cell)
        if CellStatus(int(self.status[end])).resolved:
            self._copy_resolution(idx, end, iteration)
        elif end == idx:
            self._resolve(idx, CellStatus.CONVERGED, iteration)
        else:
            self._link(idx, end, iteration)
