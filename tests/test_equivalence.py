import numpy as np
import pytest

from complexmath.arithmetic import ZERO
from complexmath.number import Complex
from fractals.julia import JuliaSet
from fractals.registry import list_fractals
from rendering.evaluators.dedup import DeduplicatingGridEvaluator
from rendering.evaluators.naive import NaiveGridEvaluator
from utils.coords import ViewportMapping
from utils.enums import CellStatus

from rules import QuadraticJulia, ShiftRule


def assert_same_classification(rule, mapping, iterations):
    naive = NaiveGridEvaluator(rule, mapping).run(iterations)
    dedup_evaluator = DeduplicatingGridEvaluator(rule, mapping)
    dedup = dedup_evaluator.run(iterations)

    assert np.array_equal(naive.diverged, dedup.diverged)
    assert np.array_equal(naive.escape, dedup.escape)
    # Converged cells are bounded orbits the naive evaluator is still iterating
    assert not naive.diverged[dedup.converged].any()
    return dedup_evaluator


@pytest.mark.parametrize("k", [
    ZERO,
    Complex(-1.0, 0.0),
    Complex(0.25, 0.0),
    Complex(-0.8, 0.156),
    Complex(0.0, 1.0),
    Complex(-0.5, 0.5),
])
def test_small_julia_grid(small_grid, k):
    assert_same_classification(QuadraticJulia(k), small_grid, 20)


@pytest.mark.parametrize("k", [ZERO, Complex(-1.0, 0.0), Complex(-0.75, 0.0)])
def test_integer_lattice_with_many_merges(unit_grid, k):
    evaluator = assert_same_classification(QuadraticJulia(k), unit_grid, 30)
    counts = evaluator.snapshot().counts()
    assert counts[CellStatus.LINKED] + counts[CellStatus.CONVERGED] > 0


def test_larger_grid_with_spacing():
    mapping = ViewportMapping.create(Complex(-0.25, 0.0), 3.0, 48, 32, spacing=2)
    assert_same_classification(QuadraticJulia(Complex(-0.4, 0.6)), mapping, 40)


def test_off_grid_retry_agrees(small_grid):
    assert_same_classification(ShiftRule(1.5, radius=20.0), small_grid, 30)


@pytest.mark.parametrize("rule", [r for r in list_fractals() if not r.depends_on_position],
                         ids=lambda r: r.display_name())
def test_registered_julia_sets(rule):
    mapping = ViewportMapping.create(rule.initial_view_center(),
                                     rule.initial_view_diameter(), 24, 24)
    assert_same_classification(rule, mapping, 25)


def test_higher_power_julia(unit_grid):
    assert_same_classification(JuliaSet(Complex(-0.5, 0.0), power=3), unit_grid, 15)
