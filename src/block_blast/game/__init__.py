"""Game module for Block Blast.

Exports the core game engine and supporting classes:
- Piece, PieceType, PieceColor: Piece catalog and random piece creation
- GameGrid: 8x8 occupancy grid, placement legality and line clearing
- Tray: Three-slot holder for pending pieces
- ScoringRules: Placement points and quadratic combo bonus
- BlockBlastGame, GameSession: Placement orchestration and session state
"""

from . import oracle
from .core import (
    BlockBlastGame,
    GameConfig,
    GameEvent,
    GameSession,
    Phase,
    PlacementOutcome,
    RejectReason,
    attempt_placement,
)
from .errors import BlockBlastError, EmptySlotError, UnknownPieceError
from .grid import GameGrid
from .pieces import PALETTE, Piece, PieceColor, PieceType, create_random, filled_cells
from .rules import ScoringRules
from .tray import Tray

__all__ = [
    "oracle",
    "BlockBlastGame",
    "GameConfig",
    "GameEvent",
    "GameSession",
    "Phase",
    "PlacementOutcome",
    "RejectReason",
    "attempt_placement",
    "BlockBlastError",
    "EmptySlotError",
    "UnknownPieceError",
    "GameGrid",
    "PALETTE",
    "Piece",
    "PieceColor",
    "PieceType",
    "create_random",
    "filled_cells",
    "ScoringRules",
    "Tray",
]
