from __future__ import annotations

from typing import Any, Tuple

from .grid import Grid
from .shapes import Shape, shape_cells


def can_place(grid: Grid, shape: Shape, anchor: Tuple[int, int]) -> bool:
    """Check if `shape` fits with its top-left corner at `anchor` (row, col).

    Every filled shape cell must land inside the board on an empty cell.
    Anchors far off the board are fine; bounds are tested before the grid
    is indexed.
    """
    row, col = anchor
    for dr, dc in shape_cells(shape):
        r, c = row + dr, col + dc
        if not grid.is_inside(r, c):
            return False
        if grid.cells[r, c] is not None:
            return False
    return True


def place(grid: Grid, shape: Shape, anchor: Tuple[int, int], tag: Any) -> Grid:
    """Return a copy of `grid` with the shape's filled cells set to `tag`.

    Assumes the position was already validated with `can_place`: occupied
    cells under the shape are overwritten without complaint. A filled cell
    that lands off the board raises IndexError.
    """
    row, col = anchor
    new_grid = grid.copy()
    for dr, dc in shape_cells(shape):
        r, c = row + dr, col + dc
        if not grid.is_inside(r, c):
            raise IndexError(f"cell ({r}, {c}) is outside the {grid.size}x{grid.size} grid")
        new_grid.cells[r, c] = tag
    return new_grid
