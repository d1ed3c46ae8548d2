from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, List, Optional, Sequence, Tuple

import numpy as np


Shape = np.ndarray


def as_shape(matrix: Sequence[Sequence[int]] | np.ndarray) -> Shape:
    """Validate a 0/1 matrix and return it as a read-only int8 array.

    Raises ValueError for anything that is not a rectangular, non-empty
    matrix of zeros and ones with at least one filled cell.
    """
    try:
        arr = np.asarray(matrix)
    except (TypeError, ValueError, OverflowError) as exc:
        raise ValueError(f"shape must be a rectangular 0/1 matrix: {exc}") from exc
    if arr.ndim != 2 or arr.shape[0] == 0 or arr.shape[1] == 0:
        raise ValueError(f"shape must be a non-empty 2D matrix, got shape {arr.shape}")
    if not (np.issubdtype(arr.dtype, np.integer) or arr.dtype == np.bool_):
        raise ValueError(f"shape cells must be integers, got dtype {arr.dtype}")
    if not np.isin(arr, (0, 1)).all():
        raise ValueError("shape cells must be 0 or 1")
    arr = arr.astype(np.int8)
    if not arr.any():
        raise ValueError("shape must contain at least one filled cell")
    arr.setflags(write=False)
    return arr


def rotate_cw(shape: Shape) -> Shape:
    """Rotate 90 degrees clockwise; returns a new matrix."""
    rotated = np.ascontiguousarray(np.rot90(shape, 1, axes=(1, 0)))
    rotated.setflags(write=False)
    return rotated


def shape_cells(shape: Shape) -> List[Tuple[int, int]]:
    """(row, col) offsets of filled cells, row-major."""
    return [(int(r), int(c)) for r, c in np.argwhere(shape)]


def cell_count(shape: Shape) -> int:
    return int(np.count_nonzero(shape))


def shapes_equal(a: Shape, b: Shape) -> bool:
    return a.shape == b.shape and bool(np.array_equal(a, b))


SINGLE_CELL: Shape = as_shape([[1]])


@dataclass(frozen=True, eq=False)
class Piece:
    """A shape instance offered to the player, stamped with a fill tag."""

    id: str
    shape: Shape
    tag: Any
    tier: Optional[str] = None

    @property
    def cell_count(self) -> int:
        return cell_count(self.shape)

    def rotated(self) -> "Piece":
        return replace(self, shape=rotate_cw(self.shape))

    def cells_at(self, row: int, col: int) -> List[Tuple[int, int]]:
        return [(row + dr, col + dc) for dr, dc in shape_cells(self.shape)]

    def __repr__(self) -> str:
        return f"Piece(id={self.id!r}, shape={self.shape.tolist()}, tag={self.tag!r}, tier={self.tier!r})"


def format_shape(shape: Shape) -> str:
    return "\n".join("".join("█" if cell else "·" for cell in row) for row in shape)
