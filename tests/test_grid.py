import numpy as np
import pytest

from blockfit.engine import Grid, format_grid

from conftest import grid_with


def test_new_grid_is_empty_and_square():
    grid = Grid(10)
    assert grid.cells.shape == (10, 10)
    assert grid.is_empty()
    assert not grid.is_full()
    assert grid.filled_count() == 0


def test_is_inside_bounds():
    grid = Grid(4)
    assert grid.is_inside(0, 0)
    assert grid.is_inside(3, 3)
    assert not grid.is_inside(-1, 0)
    assert not grid.is_inside(0, 4)
    assert not grid.is_inside(100, -100)


def test_from_rows_keeps_tags():
    grid = Grid.from_rows([["red", None], [None, (1, 2, 3)]])
    assert grid.size == 2
    assert grid[0, 0] == "red"
    assert grid[1, 1] == (1, 2, 3)
    assert grid.is_filled(0, 0)
    assert not grid.is_filled(0, 1)
    np.testing.assert_array_equal(grid.occupancy(), [[True, False], [False, True]])


def test_rejects_non_square_cells():
    with pytest.raises(ValueError):
        Grid(2, [[None, None]])
    with pytest.raises(ValueError):
        Grid(0)


def test_copy_is_independent():
    grid = grid_with([(0, 0)])
    clone = grid.copy()
    clone.cells[5, 5] = "y"
    assert grid[5, 5] is None
    assert clone[5, 5] == "y"
    assert grid != clone
    assert grid == grid_with([(0, 0)])


def test_full_grid():
    grid = grid_with([(r, c) for r in range(3) for c in range(3)], size=3)
    assert grid.is_full()
    assert grid.get_filled_ratio() == 1.0


def test_format_grid():
    grid = grid_with([(0, 1)], size=2)
    assert format_grid(grid) == "·█\n··"
