from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import numpy as np

from complexmath.number import Complex
from fractals.base import IterationRule
from utils.coords import ViewportMapping
from utils.enums import CellStatus

logger = logging.getLogger(__name__)

# Failures that resolve a single cell instead of aborting the pass
CELL_ERRORS = (ArithmeticError, ValueError)


@dataclass(frozen=True)
class CellState:
    """Read-only view of one grid cell."""
    row: int
    col: int
    position: Complex
    value: Optional[Complex]
    status: CellStatus
    target: Optional[Tuple[int, int]]
    updated: int
    escape: Optional[int]


@dataclass(frozen=True)
class GridSnapshot:
    """
    Classification of every cell after one pass.
    Status holds CellStatus codes (rows x cols, int8).
    Escape holds the divergence iteration, -1 where the cell has not diverged.
    """
    iteration: int
    status: np.ndarray
    escape: np.ndarray

    @property
    def shape(self) -> Tuple[int, int]:
        return self.status.shape

    @property
    def diverged(self) -> np.ndarray:
        return self.status == CellStatus.DIVERGED

    @property
    def converged(self) -> np.ndarray:
        return self.status == CellStatus.CONVERGED

    @property
    def unresolved(self) -> np.ndarray:
        return self.status <= CellStatus.LINKED

    def counts(self) -> Dict[CellStatus, int]:
        hist = np.bincount(self.status.ravel(), minlength=len(CellStatus))
        return {s: int(hist[s]) for s in CellStatus}


class GridEvaluator(ABC):
    """
    Base class for incremental escape-time evaluators.

    Cells live in flat arrays indexed by ``row * cols + col``. Each call to
    advance() runs one global iteration; the first pass is iteration 1.
    Evaluators are not thread-safe: one thread advances, others read
    published snapshots.
    """

    def __init__(self, rule: IterationRule, mapping: ViewportMapping) -> None:
        self.rule = rule
        self.mapping = mapping
        self.iteration = 0

        n = mapping.size
        self.positions: List[Complex] = [
            mapping.cell_position(row, col)
            for row in range(mapping.rows)
            for col in range(mapping.cols)
        ]
        self._allocate(n)
        for idx in range(n):
            self._start_cell(idx)

    # ---- Grid geometry -------------------------------------------------

    @property
    def rows(self) -> int:
        return self.mapping.rows

    @property
    def cols(self) -> int:
        return self.mapping.cols

    def _index(self, row: int, col: int) -> int:
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise IndexError(f"cell ({row}, {col}) outside {self.rows}x{self.cols} grid")
        return row * self.cols + col

    # ---- Cell lifecycle ------------------------------------------------

    def _allocate(self, n: int) -> None:
        self.values: List[Optional[Complex]] = [None] * n
        self.status = np.full(n, CellStatus.ACTIVE, dtype=np.int8)
        self.escape = np.full(n, -1, dtype=np.int32)
        self.updated = np.zeros(n, dtype=np.int32)

    def _start_cell(self, idx: int) -> Optional[Complex]:
        try:
            value = self.rule.start(self.positions[idx])
        except CELL_ERRORS as e:
            logger.debug("start() failed for cell %d: %s", idx, e)
            self._resolve(idx, CellStatus.DIVERGED, 0)
            return None
        self.values[idx] = value
        return value

    def _step_cell(self, idx: int, iteration: int,
                   test_divergence: bool = True) -> Optional[Complex]:
        """
        Advance one cell's own trajectory. Returns the new value, or None
        when the cell resolved as diverged during this step.
        """
        try:
            value = self.rule.step(self.values[idx], self.positions[idx])
            diverged = test_divergence and self.rule.diverges(value, iteration)
        except CELL_ERRORS as e:
            logger.debug("Cell %d failed at iteration %d: %s", idx, iteration, e)
            self._resolve(idx, CellStatus.DIVERGED, iteration)
            return None

        self.values[idx] = value
        self.updated[idx] = iteration
        if diverged:
            self._resolve(idx, CellStatus.DIVERGED, iteration)
            return None
        return value

    def _resolve(self, idx: int, status: CellStatus, iteration: int) -> None:
        self.status[idx] = status
        self.updated[idx] = iteration
        if status == CellStatus.DIVERGED:
            self.escape[idx] = iteration

    def _refresh(self, idx: int) -> None:
        """Bring a cell's classification up to date before it is read."""

    def _refresh_all(self) -> None:
        """Bring every cell's classification up to date before a snapshot."""

    # ---- Public API ----------------------------------------------------

    @abstractmethod
    def advance(self) -> None:
        ...

    def run(self, iterations: int) -> GridSnapshot:
        for _ in range(iterations):
            self.advance()
        return self.snapshot()

    def snapshot(self) -> GridSnapshot:
        self._refresh_all()
        shape = (self.rows, self.cols)
        return GridSnapshot(iteration=self.iteration,
                            status=self.status.reshape(shape).copy(),
                            escape=self.escape.reshape(shape).copy())

    def cell(self, row: int, col: int) -> CellState:
        idx = self._index(row, col)
        self._refresh(idx)
        status = CellStatus(int(self.status[idx]))
        target = None
        if status == CellStatus.LINKED:
            t = int(self.target[idx])
            target = divmod(t, self.cols)
        return CellState(row=row, col=col,
                         position=self.positions[idx],
                         value=self.values[idx],
                         status=status,
                         target=target,
                         updated=int(self.updated[idx]),
                         escape=int(self.escape[idx]) if status == CellStatus.DIVERGED else None)

    def active_count(self) -> int:
        return int(np.count_nonzero(self.status == CellStatus.ACTIVE))
