from block_blast.game import GameGrid, Piece
from block_blast.game.display import format_score, print_piece, render_grid, render_piece


def test_render_piece():
    assert render_piece(Piece.from_name("t_shape1")) == "███\n·█·"


def test_render_grid():
    grid = GameGrid(3)
    grid.grid[1, :] = 2
    assert render_grid(grid) == "···\n███\n···"
    assert render_grid(grid.grid) == render_grid(grid)


def test_print_piece(capsys):
    print_piece(Piece.from_name("line3v"))
    assert capsys.readouterr().out == "█\n█\n█\n"


def test_format_score():
    assert format_score(0) == "0"
    assert format_score(1234567) == "1,234,567"
