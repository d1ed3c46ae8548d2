from __future__ import annotations

from typing import Any, Iterable, List, NamedTuple, Optional, Sequence

import numpy as np


class Position(NamedTuple):
    """Anchor of a shape's bounding box on the grid (top-left cell)."""

    row: int
    col: int


_is_filled = np.frompyfunc(lambda v: v is not None, 1, 1)


class Grid:
    """Square board of fill tags.

    ``None`` marks an empty cell; any other value is an opaque fill tag
    (a colour string in the reference palette). The size never changes after
    construction. Engine operations never write to a grid they are given,
    they return a new one, so callers may keep old grids around for undo.
    """

    def __init__(self, size: int = 10, cells: Optional[Sequence[Sequence[Any]]] = None) -> None:
        self.size = int(size)
        if self.size <= 0:
            raise ValueError(f"grid size must be positive, got {size}")
        self.cells = np.full((self.size, self.size), None, dtype=object)
        if cells is not None:
            rows = list(cells)
            if len(rows) != self.size or any(len(row) != self.size for row in rows):
                raise ValueError(f"expected a {self.size}x{self.size} cell matrix")
            # Element-wise so tuple tags (e.g. RGB) are not broadcast into a new axis
            for r, row in enumerate(rows):
                for c, value in enumerate(row):
                    self.cells[r, c] = value

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Any]]) -> "Grid":
        return cls(len(rows), rows)

    def is_inside(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def is_filled(self, row: int, col: int) -> bool:
        return self.cells[row, col] is not None

    def __getitem__(self, pos: Iterable[int]) -> Any:
        row, col = pos
        return self.cells[row, col]

    def occupancy(self) -> np.ndarray:
        """Boolean mask, True where a cell holds a tag."""
        return _is_filled(self.cells).astype(bool)

    def filled_count(self) -> int:
        return int(np.count_nonzero(self.occupancy()))

    def is_full(self) -> bool:
        return self.filled_count() == self.size * self.size

    def is_empty(self) -> bool:
        return self.filled_count() == 0

    def get_filled_ratio(self) -> float:
        return self.filled_count() / float(self.size * self.size)

    def copy(self) -> "Grid":
        new_grid = Grid(self.size)
        new_grid.cells = self.cells.copy()
        return new_grid

    def to_rows(self) -> List[List[Any]]:
        return self.cells.tolist()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self.size == other.size and self.to_rows() == other.to_rows()

    def __repr__(self) -> str:
        return f"Grid(size={self.size}, filled={self.filled_count()})"


def format_grid(grid: Grid) -> str:
    """Text dump of the board, one line per row."""
    occ = grid.occupancy()
    return "\n".join("".join("█" if cell else "·" for cell in row) for row in occ)
