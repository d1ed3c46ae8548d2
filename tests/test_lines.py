import pytest

from blockfit.engine import as_shape, can_place, clear_lines, find_cleared_lines, place, resolve_lines

from conftest import grid_with


def test_row_completed_by_single_cell():
    grid = grid_with([(0, c) for c in range(9)] + [(5, 5)])
    single = as_shape([[1]])
    assert can_place(grid, single, (0, 9))
    placed = place(grid, single, (0, 9), "red")
    result = find_cleared_lines(placed)
    assert result.rows == (0,)
    assert result.cols == ()
    assert result.lines_cleared == 1

    cleared = clear_lines(placed, result.rows, result.cols)
    assert all(cleared[0, c] is None for c in range(10))
    assert cleared[5, 5] == "x"
    assert cleared.filled_count() == 1
    assert placed.filled_count() == 11


def test_column_detection():
    grid = grid_with([(r, 3) for r in range(10)])
    assert find_cleared_lines(grid) == ((), (3,))


def test_cross_clear_shares_corner_cell():
    cells = [(4, c) for c in range(10)] + [(r, 7) for r in range(10)] + [(0, 0)]
    grid = grid_with(cells)
    result = find_cleared_lines(grid)
    assert result.rows == (4,)
    assert result.cols == (7,)
    cleared = clear_lines(grid, result.rows, result.cols)
    assert cleared.filled_count() == 1
    assert cleared[0, 0] == "x"


def test_indices_are_ascending():
    cells = [(r, c) for r in (8, 1, 5) for c in range(10)]
    assert find_cleared_lines(grid_with(cells)).rows == (1, 5, 8)


def test_clear_with_no_indices_is_identity():
    grid = grid_with([(1, 1), (2, 2), (9, 0)])
    assert clear_lines(grid, [], []) == grid


def test_clear_order_does_not_matter():
    grid = grid_with([(r, c) for r in range(10) for c in range(10) if (r + c) % 3])
    a = clear_lines(grid, [2, 7], [1, 4])
    b = clear_lines(grid, [7, 2], [4, 1])
    c = clear_lines(clear_lines(grid, [], [1, 4]), [2, 7], [])
    assert a == b == c


def test_clear_leaves_other_cells_and_input_alone():
    grid = grid_with([(0, 0), (3, 3), (3, 9)])
    before = grid.to_rows()
    cleared = clear_lines(grid, [3], [])
    assert grid.to_rows() == before
    assert cleared[0, 0] == "x"
    assert cleared[3, 3] is None and cleared[3, 9] is None


@pytest.mark.parametrize("rows,cols", [([10], []), ([], [-1])])
def test_clear_rejects_out_of_range(rows, cols):
    with pytest.raises(IndexError):
        clear_lines(grid_with([]), rows, cols)


def test_resolve_lines():
    grid = grid_with([(r, 0) for r in range(10)] + [(2, 2)])
    resolved, result = resolve_lines(grid)
    assert result.cols == (0,)
    assert resolved.filled_count() == 1

    untouched, nothing = resolve_lines(resolved)
    assert nothing.is_empty
    assert untouched == resolved
