import random

from block_blast.game import GameGrid, Piece, Tray, oracle


def make_tray(*names):
    tray = Tray(3, random.Random(0))
    tray.slots = [None if n is None else Piece.from_name(n) for n in names]
    return tray


def test_empty_board_has_moves(grid):
    assert oracle.evaluate(grid, make_tray("square3", "line4h", "t_shape1"))
    assert not oracle.is_game_over(grid, make_tray("square3", "line4h", "t_shape1"))


def test_single_hole_blocks_multi_cell_pieces(grid):
    grid.grid[:] = 1
    grid.grid[5, 5] = 0
    tray = make_tray("line3h", "square2", "t_shape1")
    assert oracle.evaluate(grid, tray) is False
    assert oracle.is_game_over(grid, tray)


def test_search_covers_every_anchor(grid):
    # The only gap is in the bottom-right corner, far from the origin.
    grid.grid[:] = 1
    grid.grid[7, 5:8] = 0
    assert oracle.piece_fits_anywhere(grid, Piece.from_name("line3h"))
    assert not oracle.piece_fits_anywhere(grid, Piece.from_name("line3v"))
    assert oracle.evaluate(grid, make_tray("line3v", None, "line3h"))
    assert not oracle.evaluate(grid, make_tray("line3v", "square2", None))


def test_empty_slots_are_skipped(grid, diagonal_board):
    grid.grid[:] = diagonal_board
    grid.grid[0, 3:6] = 0
    assert oracle.evaluate(grid, make_tray(None, None, "line3h"))
    assert not oracle.evaluate(grid, make_tray(None, None, "square2"))


def test_fully_depleted_tray_has_no_move(grid):
    assert not oracle.evaluate(grid, make_tray(None, None, None))


def test_larger_grid():
    big = GameGrid(10)
    big.grid[:] = 1
    big.grid[9, 6:10] = 0
    assert oracle.piece_fits_anywhere(big, Piece.from_name("line4h"))
