import dataclasses
import random

import numpy as np
import pytest

from block_blast.game import (
    BlockBlastError,
    Piece,
    PieceColor,
    PieceType,
    UnknownPieceError,
    create_random,
    filled_cells,
)
from block_blast.game.pieces import CATALOG, PALETTE


def test_catalog_has_every_type():
    assert len(PieceType) == 18
    assert set(CATALOG) == set(PieceType)


@pytest.mark.parametrize("kind", list(PieceType))
def test_shapes_have_no_empty_border(kind):
    shape = Piece(kind).shape
    assert np.all(shape.any(axis=1))
    assert np.all(shape.any(axis=0))


def test_color_families():
    assert Piece.from_name("line3h").color == PieceColor.CYAN
    assert Piece.from_name("square3").color == PieceColor.YELLOW
    assert Piece.from_name("l_shape2").color == PieceColor.ORANGE
    assert Piece.from_name("t_shape4").color == PieceColor.PURPLE
    assert Piece.from_name("z_shape1").color == PieceColor.RED
    assert Piece.from_name("s_shape2").color == PieceColor.GREEN
    assert PALETTE[PieceColor.CYAN] == "#00D4FF"


def test_dimensions():
    piece = Piece.from_name("line4v")
    assert (piece.rows, piece.cols) == (4, 1)
    assert Piece.from_name("square3").size == 9


def test_filled_cells_row_major():
    piece = Piece.from_name("t_shape3")  # .#. / ###
    assert filled_cells(piece) == [(0, 1), (1, 0), (1, 1), (1, 2)]
    assert piece.filled_cells() == filled_cells(piece)
    assert piece.cells_at(2, 3) == [(2, 4), (3, 3), (3, 4), (3, 5)]


def test_unknown_piece_name():
    with pytest.raises(UnknownPieceError) as excinfo:
        Piece.from_name("pentomino")
    assert isinstance(excinfo.value, KeyError)
    assert isinstance(excinfo.value, BlockBlastError)
    assert "pentomino" in str(excinfo.value)


def test_unknown_piece_index():
    with pytest.raises(UnknownPieceError):
        Piece(99)


def test_piece_is_immutable():
    piece = Piece.from_name("square2")
    with pytest.raises(dataclasses.FrozenInstanceError):
        piece.kind = PieceType.SQUARE3
    with pytest.raises(ValueError):
        piece.shape[0, 0] = 0


def test_pieces_compare_by_type():
    assert Piece.from_name("z_shape2") == Piece(PieceType.Z_SHAPE2)
    assert Piece.from_name("z_shape2") != Piece.from_name("s_shape2")
    assert len({Piece(PieceType.LINE3H), Piece(PieceType.LINE3H)}) == 1


def test_create_random_is_seedable():
    a = [create_random(random.Random(7)).kind for _ in range(5)]
    b = [create_random(random.Random(7)).kind for _ in range(5)]
    assert a == b


def test_create_random_covers_catalog():
    rng = random.Random(0)
    seen = {create_random(rng).kind for _ in range(2000)}
    assert seen == set(PieceType)


@pytest.mark.parametrize("name,kind", [
    ("lShape1", PieceType.L_SHAPE1),
    ("tShape2", PieceType.T_SHAPE2),
    ("zShape1", PieceType.Z_SHAPE1),
    ("line4v", PieceType.LINE4V),
])
def test_from_name_accepts_camel_case(name, kind):
    assert Piece.from_name(name) == Piece(kind)
