import math

import numpy as np
import pytest

from complexmath.arithmetic import ZERO
from complexmath.number import Complex
from fractals.mandelbrot import MandelbrotSet
from rendering.evaluators.naive import NaiveGridEvaluator
from utils.enums import CellStatus

from rules import QuadraticJulia, FragileRule


def test_fresh_grid_is_all_active(small_grid):
    evaluator = NaiveGridEvaluator(MandelbrotSet(), small_grid)
    snap = evaluator.snapshot()
    assert snap.iteration == 0
    assert snap.shape == (4, 4)
    assert snap.unresolved.all()
    assert (snap.escape == -1).all()
    assert evaluator.active_count() == 16


def test_mandelbrot_classification(small_grid):
    evaluator = NaiveGridEvaluator(MandelbrotSet(), small_grid)
    snap = evaluator.run(10)
    assert snap.iteration == 10

    # -2 - 2i escapes on the first step
    corner = evaluator.cell(0, 0)
    assert corner.status == CellStatus.DIVERGED
    assert corner.escape == 1
    assert corner.position == Complex(-2.0, -2.0)

    # 0 and -2 are bounded orbits
    assert evaluator.cell(2, 2).status == CellStatus.ACTIVE
    assert evaluator.cell(2, 2).value == ZERO
    assert evaluator.cell(2, 0).status == CellStatus.ACTIVE
    assert evaluator.cell(2, 2).escape is None


def test_diverged_cells_are_frozen(small_grid):
    evaluator = NaiveGridEvaluator(QuadraticJulia(Complex(1.0, 0.0)), small_grid)
    evaluator.advance()
    first = evaluator.snapshot()
    evaluator.run(5)
    later = evaluator.snapshot()
    assert np.array_equal(first.escape[first.diverged], later.escape[first.diverged])
    assert later.diverged[first.diverged].all()


def test_escape_iterations_match_direct_orbit(small_grid):
    k = Complex(-0.5, 0.25)
    evaluator = NaiveGridEvaluator(QuadraticJulia(k), small_grid)
    snap = evaluator.run(25)

    for row in range(small_grid.rows):
        for col in range(small_grid.cols):
            z = complex(small_grid.cell_position(row, col))
            expected = -1
            for n in range(1, 26):
                z = z * z + complex(k)
                if math.hypot(z.real, z.imag) > 2:
                    expected = n
                    break
            assert snap.escape[row, col] == expected


def test_failing_cells_diverge_without_stopping_the_pass(small_grid):
    evaluator = NaiveGridEvaluator(FragileRule(Complex(0.0, 0.0)), small_grid)
    snap = evaluator.run(3)
    # Negative real parts fail on the first step; the rest keep going
    assert (snap.escape[:, :2] == 1).all()
    assert evaluator.cell(2, 2).status == CellStatus.ACTIVE
    assert evaluator.cell(2, 3).status == CellStatus.ACTIVE
    assert snap.iteration == 3


def test_start_failure_diverges_at_zero(small_grid):
    class BadStart(QuadraticJulia):
        def start(self, position):
            if position.re == 1.0:
                raise ValueError("no start")
            return position

    evaluator = NaiveGridEvaluator(BadStart(ZERO), small_grid)
    assert evaluator.cell(0, 3).status == CellStatus.DIVERGED
    assert evaluator.cell(0, 3).escape == 0
    assert evaluator.cell(0, 2).status == CellStatus.ACTIVE


def test_cell_out_of_range(small_grid):
    evaluator = NaiveGridEvaluator(MandelbrotSet(), small_grid)
    with pytest.raises(IndexError):
        evaluator.cell(4, 0)
    with pytest.raises(IndexError):
        evaluator.cell(0, -1)


def test_snapshot_is_detached(small_grid):
    evaluator = NaiveGridEvaluator(MandelbrotSet(), small_grid)
    snap = evaluator.snapshot()
    evaluator.run(3)
    assert snap.iteration == 0
    assert snap.unresolved.all()


def test_counts(small_grid):
    evaluator = NaiveGridEvaluator(MandelbrotSet(), small_grid)
    counts = evaluator.run(10).counts()
    assert sum(counts.values()) == 16
    assert counts[CellStatus.LINKED] == 0
    assert counts[CellStatus.CONVERGED] == 0
