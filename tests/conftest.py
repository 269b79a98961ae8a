import pytest

from complexmath.arithmetic import ZERO
from utils.coords import ViewportMapping


@pytest.fixture
def unit_grid():
    """8x8 grid over [-4, 3] x [-4, 3]; cell (row, col) samples (col - 4) + (row - 4)i."""
    return ViewportMapping.create(ZERO, 8.0, 8, 8)


@pytest.fixture
def small_grid():
    """4x4 grid over [-2, 1] x [-2, 1]."""
    return ViewportMapping.create(ZERO, 4.0, 4, 4)
