from __future__ import annotations

import logging
from abc import abstractmethod
from typing import List, Optional

import numpy as np

from complexmath.number import Complex
from fractals.base import IterationRule
from rendering.evaluators.base import GridEvaluator
from utils.coords import ViewportMapping
from utils.enums import CellStatus

logger = logging.getLogger(__name__)


class ForwardingGridEvaluator(GridEvaluator):
    """
    Shared machinery for evaluators that let cells hand their trajectory
    over to another cell.

    A LINKED cell holds a forwarding reference, stored as a cell index,
    towards the cell that keeps stepping on its behalf (the chain end).
    References are followed with path compression, union-find style, and a
    LINKED cell copies its chain end's resolution once there is one.
    Subclasses decide what happens to an ACTIVE cell in _advance_active().
    """

    def __init__(self, rule: IterationRule, mapping: ViewportMapping) -> None:
        if rule.depends_on_position:
            logger.warning("%s depends on the starting position; shared "
                           "trajectories will be wrong", rule.display_name())
        super().__init__(rule, mapping)

    def _allocate(self, n: int) -> None:
        super()._allocate(n)
        self.target = np.arange(n, dtype=np.int64)

    # ---- Forwarding references -----------------------------------------

    def chain_end(self, idx: int) -> int:
        """Follow forwarding references to the chain end, compressing the path."""
        end = idx
        while self.status[end] == CellStatus.LINKED:
            end = int(self.target[end])
        while idx != end:
            nxt = int(self.target[idx])
            self.target[idx] = end
            idx = nxt
        return end

    def _link(self, idx: int, end: int, iteration: int) -> None:
        self.status[idx] = CellStatus.LINKED
        self.target[idx] = end
        self.updated[idx] = iteration

    def _copy_resolution(self, idx: int, end: int, iteration: int) -> None:
        self.status[idx] = self.status[end]
        self.escape[idx] = self.escape[end]
        self.target[idx] = idx
        self.updated[idx] = iteration

    def _pull_resolution(self, idx: int, iteration: int) -> None:
        end = self.chain_end(idx)
        if CellStatus(int(self.status[end])).resolved:
            self._copy_resolution(idx, end, iteration)

    # ---- Passes ------------------------------------------------------------

    @abstractmethod
    def _advance_active(self, idx: int, iteration: int) -> None:
        ...

    def advance(self) -> None:
        iteration = self.iteration + 1
        for idx in np.flatnonzero(self.status <= CellStatus.LINKED).tolist():
            status = self.status[idx]
            if status == CellStatus.ACTIVE:
                self._advance_active(idx, iteration)
            elif status == CellStatus.LINKED:
                self._pull_resolution(idx, iteration)
        self.iteration = iteration

    def _refresh(self, idx: int) -> None:
        if self.status[idx] == CellStatus.LINKED:
            self._pull_resolution(idx, self.iteration)

    def _refresh_all(self) -> None:
        for idx in np.flatnonzero(self.status == CellStatus.LINKED).tolist():
            self._pull_resolution(idx, self.iteration)

    def linked_count(self) -> int:
        return int(np.count_nonzero(self.status == CellStatus.LINKED))


class DeduplicatingGridEvaluator(ForwardingGridEvaluator):
    """
    Evaluator for rules whose step ignores the starting position.

    Such a rule gives two trajectories identical futures as soon as they hold
    the same value at the same iteration, so only one of them (the chain
    end) keeps stepping and the others become LINKED to it.

    Every grid cell keeps a landing register: the last
    (cell, iteration, value) whose trajectory landed on it through the
    inverse viewport transform. A trajectory landing on a register with an
    equal value either
      - joins that trajectory (same iteration),
      - inherits its resolution (chain end already converged), or
      - has met itself again (chain end is the cell itself): the orbit is
        periodic and the cell is CONVERGED.

    Merging only on equal values at equal iterations keeps every cell's
    classification identical to the naive evaluator's. Cycle detection
    assumes the rule's divergence test does not change its verdict for the
    same value at a later iteration.

    Trajectories that leave the grid without diverging stay ACTIVE and are
    tested again on every later pass.
    """

    def _allocate(self, n: int) -> None:
        super()._allocate(n)
        self.landing_cell = np.full(n, -1, dtype=np.int64)
        self.landing_iteration = np.full(n, -1, dtype=np.int32)
        self.landing_value: List[Optional[Complex]] = [None] * n

    def _start_cell(self, idx: int) -> Optional[Complex]:
        value = super()._start_cell(idx)
        if value is not None:
            self._land(idx, value, 0)
        return value

    def _land(self, idx: int, value: Complex, iteration: int) -> None:
        cell = self.mapping.plane_to_index(value)
        if cell is None:
            return

        owner = int(self.landing_cell[cell])
        if owner >= 0 and self.landing_value[cell] == value:
            end = self.chain_end(owner)
            if end == idx:
                self._resolve(idx, CellStatus.CONVERGED, iteration)
                return
            if self.status[end] == CellStatus.CONVERGED:
                self._copy_resolution(idx, end, iteration)
                return
            # A register written this pass names a cell that is still ACTIVE
            if self.landing_iteration[cell] == iteration:
                self._link(idx, end, iteration)
                return

        self.landing_cell[cell] = idx
        self.landing_iteration[cell] = iteration
        self.landing_value[cell] = value

    def _advance_active(self, idx: int, iteration: int) -> None:
        value = self._step_cell(idx, iteration)
        if value is not None:
            self._land(idx, value, iteration)
