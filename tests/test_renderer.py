import numpy as np
import pygame

from block_blast.game import Piece
from block_blast.visualization.renderer import EMPTY_CELL, Renderer


def make_renderer():
    surface = pygame.Surface((400, 400))
    return Renderer(surface, grid_size=8, cell_size=40, margin=20)


def test_pixel_to_cell():
    renderer = make_renderer()
    assert renderer.pixel_to_cell(20, 20) == (0, 0)
    assert renderer.pixel_to_cell(20 + 40 * 3 + 5, 20 + 40 * 2 + 39) == (2, 3)
    assert renderer.pixel_to_cell(5, 5) == (-1, -1)


def test_draw_board_uses_piece_colors():
    renderer = make_renderer()
    grid = np.zeros((8, 8), dtype=np.int8)
    grid[0, 1] = Piece.from_name("z_shape1").color
    renderer.draw_board(grid)
    assert tuple(renderer.screen.get_at((25, 25)))[:3] == EMPTY_CELL
    assert tuple(renderer.screen.get_at((65, 25)))[:3] == (0xFF, 0x52, 0x52)


def test_draw_does_not_touch_game_state(game):
    renderer = make_renderer()
    before = game.board_snapshot()
    renderer.draw_board(game.board_snapshot())
    renderer.draw_tray(game.tray_snapshot(), selected=0)
    piece = game.tray_snapshot()[0]
    renderer.draw_ghost(piece, 7, 7, game.can_place(piece, 7, 7))
    assert np.array_equal(game.board_snapshot(), before)
