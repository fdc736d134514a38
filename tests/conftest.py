from __future__ import annotations

import numpy as np
import pytest

from block_blast.game import BlockBlastGame, GameConfig, GameGrid, Piece


@pytest.fixture
def grid() -> GameGrid:
    return GameGrid(8)


@pytest.fixture
def game() -> BlockBlastGame:
    return BlockBlastGame(GameConfig(random_seed=1234))


@pytest.fixture
def set_tray():
    """Replace the tray contents of a game with named pieces (None for empty)."""

    def _set(game: BlockBlastGame, *names):
        game.session.tray.slots = [None if n is None else Piece.from_name(n) for n in names]

    return _set


@pytest.fixture
def diagonal_board() -> np.ndarray:
    """Full board with only the main diagonal empty: no line is complete."""
    cells = np.ones((8, 8), dtype=np.int8)
    np.fill_diagonal(cells, 0)
    return cells
