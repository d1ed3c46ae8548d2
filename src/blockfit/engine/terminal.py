from __future__ import annotations

from typing import Iterator, Sequence, Union

from .grid import Grid, Position
from .placement import can_place
from .shapes import Piece, Shape


ShapeLike = Union[Shape, Piece]


def _shape_of(item: ShapeLike) -> Shape:
    return item.shape if isinstance(item, Piece) else item


def valid_placements(grid: Grid, shape: ShapeLike) -> Iterator[Position]:
    """Yield every legal anchor for `shape`, scanning rows then columns."""
    matrix = _shape_of(shape)
    for row in range(grid.size):
        for col in range(grid.size):
            if can_place(grid, matrix, (row, col)):
                yield Position(row, col)


def has_valid_placement(grid: Grid, shape: ShapeLike) -> bool:
    return next(valid_placements(grid, shape), None) is not None


def is_terminal(grid: Grid, shapes: Sequence[ShapeLike]) -> bool:
    """True when none of `shapes` fits anywhere on the grid.

    An empty collection is not terminal: it means the hand is waiting to be
    refilled, which is the host's business.
    """
    if len(shapes) == 0:
        return False
    return not any(has_valid_placement(grid, shape) for shape in shapes)
