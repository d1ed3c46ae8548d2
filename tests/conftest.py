from __future__ import annotations

import random
from typing import Iterable, Tuple

import pytest

from blockfit.engine import Grid, Piece, as_shape


def grid_with(cells: Iterable[Tuple[int, int]], size: int = 10, tag: str = "x") -> Grid:
    rows = [[None] * size for _ in range(size)]
    for r, c in cells:
        rows[r][c] = tag
    return Grid(size, rows)


def make_piece(matrix, tag: str = "#fff", piece_id: str = "p") -> Piece:
    return Piece(id=piece_id, shape=as_shape(matrix), tag=tag)


@pytest.fixture
def empty_grid() -> Grid:
    return Grid(10)


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)
