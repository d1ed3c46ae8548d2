import numpy as np
import pytest

from blockfit.engine import Piece, as_shape, cell_count, rotate_cw, shape_cells
from blockfit.engine.catalog import COMPLEX_SHAPES, MEDIUM_SHAPES, SIMPLE_SHAPES


@pytest.mark.parametrize(
    "bad",
    [[], [[]], [[0, 0]], [[1, 2]], [[1], [1, 1]], [1, 1], [[1.7, 0.2]], [[1.0]], [[300]], [["1"]]],
)
def test_as_shape_rejects_malformed(bad):
    with pytest.raises(ValueError):
        as_shape(bad)


def test_as_shape_accepts_bool_and_wide_ints():
    assert as_shape([[True, False], [True, True]]).tolist() == [[1, 0], [1, 1]]
    wide = as_shape(np.array([[0, 1]], dtype=np.int64))
    assert wide.dtype == np.int8
    assert wide.tolist() == [[0, 1]]


def test_as_shape_is_read_only():
    shape = as_shape([[1, 0], [1, 1]])
    assert shape.dtype == np.int8
    with pytest.raises(ValueError):
        shape[0, 1] = 1


def test_rotate_clockwise():
    shape = as_shape([[1, 1, 1], [1, 0, 0]])
    rotated = rotate_cw(shape)
    assert rotated.tolist() == [[1, 1], [0, 1], [0, 1]]
    assert shape.tolist() == [[1, 1, 1], [1, 0, 0]]


@pytest.mark.parametrize("shape", SIMPLE_SHAPES + MEDIUM_SHAPES + COMPLEX_SHAPES)
def test_rotation_is_four_cycle(shape):
    turned = shape
    for _ in range(4):
        turned = rotate_cw(turned)
    assert turned.shape == shape.shape
    np.testing.assert_array_equal(turned, shape)


def test_shape_cells_row_major():
    shape = as_shape([[0, 1], [1, 1]])
    assert shape_cells(shape) == [(0, 1), (1, 0), (1, 1)]
    assert cell_count(shape) == 3


def test_piece_rotation_keeps_identity():
    piece = Piece(id="a", shape=as_shape([[1, 1]]), tag="red", tier="simple")
    rotated = piece.rotated()
    assert rotated.id == "a"
    assert rotated.tag == "red"
    assert rotated.shape.tolist() == [[1], [1]]
    assert piece.shape.tolist() == [[1, 1]]
    assert rotated.cells_at(2, 3) == [(2, 3), (3, 3)]
