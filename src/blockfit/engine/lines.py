from __future__ import annotations

from typing import Iterable, NamedTuple, Tuple

import numpy as np

from .grid import Grid


class LineClearResult(NamedTuple):
    """Indices of full rows and columns, ascending."""

    rows: Tuple[int, ...]
    cols: Tuple[int, ...]

    @property
    def lines_cleared(self) -> int:
        return len(self.rows) + len(self.cols)

    @property
    def is_empty(self) -> bool:
        return not self.rows and not self.cols


def find_cleared_lines(grid: Grid) -> LineClearResult:
    occ = grid.occupancy()
    rows = tuple(int(i) for i in np.flatnonzero(occ.all(axis=1)))
    cols = tuple(int(i) for i in np.flatnonzero(occ.all(axis=0)))
    return LineClearResult(rows, cols)


def _checked_indices(indices: Iterable[int], size: int, axis: str) -> list[int]:
    out = []
    for i in indices:
        i = int(i)
        if not 0 <= i < size:
            raise IndexError(f"{axis} index {i} out of range for grid size {size}")
        out.append(i)
    return out


def clear_lines(grid: Grid, rows: Iterable[int], cols: Iterable[int]) -> Grid:
    """Empty the given rows and columns on a copy of `grid`.

    Both sets are applied to the same pre-clear board, so a cell shared by a
    cleared row and a cleared column is emptied once.
    """
    row_idx = _checked_indices(rows, grid.size, "row")
    col_idx = _checked_indices(cols, grid.size, "column")
    new_grid = grid.copy()
    if row_idx:
        new_grid.cells[row_idx, :] = None
    if col_idx:
        new_grid.cells[:, col_idx] = None
    return new_grid


def resolve_lines(grid: Grid) -> Tuple[Grid, LineClearResult]:
    """Detect full lines and clear them in one step."""
    result = find_cleared_lines(grid)
    if result.is_empty:
        return grid, result
    return clear_lines(grid, result.rows, result.cols), result
