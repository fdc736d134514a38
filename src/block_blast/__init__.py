"""Block Blast: an 8x8 block placement puzzle engine."""

from .game import BlockBlastGame, GameConfig, PlacementOutcome, Piece, ScoringRules

__all__ = ["BlockBlastGame", "GameConfig", "PlacementOutcome", "Piece", "ScoringRules"]

__version__ = "0.1.0"
