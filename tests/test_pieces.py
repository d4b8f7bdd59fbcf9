import numpy as np
import pytest

from falling_blocks.game import BASE_SHAPES, PIECE_COLORS, Piece, TetrominoType, rotate_cw


def test_catalog_has_seven_trimmed_shapes():
    assert set(BASE_SHAPES) == set(TetrominoType)
    for shape in BASE_SHAPES.values():
        # Trimmed to the bounding box: no empty outer rows or columns
        assert shape[0].any() and shape[-1].any()
        assert shape[:, 0].any() and shape[:, -1].any()
        assert int(shape.sum()) == 4


def test_catalog_is_read_only():
    with pytest.raises(ValueError):
        BASE_SHAPES[TetrominoType.T][0, 0] = True


def test_each_kind_has_a_color():
    assert PIECE_COLORS[TetrominoType.I] == "cyan"
    assert PIECE_COLORS[TetrominoType.Z] == "red"
    assert Piece.new(TetrominoType.O).color == int(TetrominoType.O)
    assert Piece.new(TetrominoType.O).color_name == "yellow"


def test_rotate_cw_reads_columns_bottom_to_top():
    j = BASE_SHAPES[TetrominoType.J]
    expected = np.array([[1, 1], [1, 0], [1, 0]], dtype=bool)
    assert np.array_equal(rotate_cw(j), expected)


def test_rotate_cw_turns_i_upright():
    assert rotate_cw(BASE_SHAPES[TetrominoType.I]).shape == (4, 1)


@pytest.mark.parametrize("kind", list(TetrominoType))
def test_four_rotations_return_to_start(kind):
    piece = Piece.new(kind)
    spun = piece.rotated().rotated().rotated().rotated()
    assert np.array_equal(spun.shape, piece.shape)


def test_cells_are_offset_by_anchor():
    piece = Piece.new(TetrominoType.O).at(4, 18)
    assert sorted(piece.cells()) == [(4, 18), (4, 19), (5, 18), (5, 19)]


def test_moved_returns_new_piece():
    piece = Piece.new(TetrominoType.T)
    moved = piece.moved(1, 2)
    assert (piece.x, piece.y) == (0, 0)
    assert (moved.x, moved.y) == (1, 2)
    assert moved.width == 3 and moved.height == 2


def test_rotated_piece_is_not_equal_to_original():
    piece = Piece.new(TetrominoType.I).at(3, 0)
    assert piece.rotated() != piece
    assert piece.rotated().rotated().rotated().rotated() == piece
    assert hash(piece.at(3, 0)) == hash(piece)
