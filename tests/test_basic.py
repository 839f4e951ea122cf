"""Basic tests for the cellery package."""

import cellery
from cellery import CellState, Grid


def test_grid_creation():
    """Test basic grid creation and cell operations."""
    grid = Grid([[0, 0, 0], [0, 0, 0]])
    assert grid.height == 2
    assert grid.width == 3
    assert grid.get(0, 0) is CellState.DEAD

    grid.revive(1, 2)
    assert grid.get(1, 2) is CellState.ALIVE
    assert grid.living_count() == 1


def test_version():
    """Test the package exposes a version."""
    assert cellery.__version__ == "0.1.0"


def test_blinker_counts():
    """Test neighborhood counts around a blinker."""
    grid = Grid(
        [
            [0, 0, 0, 0, 0],
            [0, 0, 1, 0, 0],
            [0, 0, 1, 0, 0],
            [0, 0, 1, 0, 0],
            [0, 0, 0, 0, 0],
        ]
    )

    assert grid.moore(2, 2) == 2
    assert grid.moore(2, 1) == 3
    assert grid.moore(2, 3) == 3
    assert grid.moore(0, 0) == 0
    assert grid.von_neumann(2, 2, 1) == 2
    assert grid.moore_counts()[2, 1] == 3
