from __future__ import annotations

import logging
import random
import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple

import numpy as np

from . import oracle
from .grid import Cell, GameGrid
from .pieces import Piece
from .rules import ScoringRules
from .tray import Tray


logger = logging.getLogger(__name__)


@dataclass
class GameConfig:
    grid_size: int = 8
    tray_size: int = 3
    random_seed: Optional[int] = None


class Phase(str, Enum):
    NEW_SESSION = "new_session"
    PIECE_PLACED = "piece_placed"
    LINES_DETECTED = "lines_detected"
    LINES_CLEARED = "lines_cleared"
    TRAY_REFILLED = "tray_refilled"
    GAME_OVER = "game_over"


class RejectReason(str, Enum):
    GAME_OVER = "game_over"
    BUSY = "busy"
    INVALID_SLOT = "invalid_slot"
    EMPTY_SLOT = "empty_slot"
    PIECE_MISMATCH = "piece_mismatch"
    ILLEGAL_PLACEMENT = "illegal_placement"


@dataclass
class GameSession:
    grid: GameGrid
    tray: Tray
    score: int = 0
    game_over: bool = False
    lines_cleared_total: int = 0
    pieces_placed: int = 0
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    @classmethod
    def new(cls, config: Optional[GameConfig] = None, rng: Optional[random.Random] = None) -> "GameSession":
        config = config or GameConfig()
        tray = Tray(config.tray_size, rng)
        tray.generate()
        return cls(grid=GameGrid(config.grid_size), tray=tray)


@dataclass(frozen=True)
class GameEvent:
    phase: Phase
    session: GameSession
    payload: Dict[str, Any] = field(default_factory=dict)


Listener = Callable[[GameEvent], None]


@dataclass(frozen=True)
class PlacementOutcome:
    committed: bool
    points_awarded: int = 0
    placement_points: int = 0
    line_bonus: int = 0
    cells_placed: Tuple[Cell, ...] = ()
    lines_cleared: int = 0
    rows: Tuple[int, ...] = ()
    cols: Tuple[int, ...] = ()
    cleared_cells: Tuple[Cell, ...] = ()
    refilled: bool = False
    terminal: bool = False
    reason: Optional[RejectReason] = None

    @classmethod
    def rejected(cls, reason: RejectReason, terminal: bool = False) -> "PlacementOutcome":
        return cls(committed=False, terminal=terminal, reason=reason)


def _check_request(session: GameSession, piece: Piece, row: int, col: int, slot: int) -> Optional[RejectReason]:
    if session.game_over:
        return RejectReason.GAME_OVER
    if not 0 <= slot < len(session.tray):
        return RejectReason.INVALID_SLOT
    held = session.tray[slot]
    if held is None:
        return RejectReason.EMPTY_SLOT
    if held != piece:
        return RejectReason.PIECE_MISMATCH
    if not session.grid.can_place(piece, row, col):
        return RejectReason.ILLEGAL_PLACEMENT
    return None


def attempt_placement(
    session: GameSession,
    piece: Piece,
    row: int,
    col: int,
    slot: int,
    rules: Optional[ScoringRules] = None,
    listener: Optional[Listener] = None,
) -> PlacementOutcome:
    """Place ``piece`` from tray ``slot`` with its top-left at (row, col).

    Invalid requests are returned as rejected outcomes and leave the session
    untouched. Once the piece is committed, the remaining phases run in a fixed
    order: score the placement, vacate the slot, detect and clear complete
    lines, award the combo bonus, refill an empty tray, then check whether any
    move is left. ``listener`` is called between phases and may block to pace
    animations; a placement requested while another one is still running is
    rejected as busy.
    """
    rules = rules or ScoringRules()

    if not session.lock.acquire(blocking=False):
        logger.debug("Rejected placement into slot %s: another placement is in flight", slot)
        return PlacementOutcome.rejected(RejectReason.BUSY, terminal=session.game_over)
    try:
        reason = _check_request(session, piece, row, col, slot)
        if reason is not None:
            logger.debug("Rejected %s at (%d, %d) from slot %s: %s", piece.name, row, col, slot, reason.value)
            return PlacementOutcome.rejected(reason, terminal=session.game_over)
        return _commit(session, piece, row, col, slot, rules, listener)
    finally:
        session.lock.release()


def _commit(
    session: GameSession,
    piece: Piece,
    row: int,
    col: int,
    slot: int,
    rules: ScoringRules,
    listener: Optional[Listener],
) -> PlacementOutcome:
    def emit(phase: Phase, **payload: Any) -> None:
        if listener is None:
            return
        try:
            listener(GameEvent(phase, session, payload))
        except Exception:
            logger.exception("Listener failed during %s; continuing placement", phase.value)

    grid = session.grid
    placed = grid.place(piece, row, col)
    placement_points = rules.placement_score(len(placed))
    session.score += placement_points
    session.tray.remove_at(slot)
    session.pieces_placed += 1
    emit(Phase.PIECE_PLACED, piece=piece, slot=slot, cells=placed, points=placement_points)

    rows = grid.find_complete_rows()
    cols = grid.find_complete_cols()
    total = len(rows) + len(cols)
    cleared: List[Cell] = []
    bonus = 0
    if total:
        cleared = grid.cells_to_clear(rows, cols)
        emit(Phase.LINES_DETECTED, rows=rows, cols=cols, cells=cleared)
        grid.clear(cleared)
        bonus = rules.line_bonus(total)
        session.score += bonus
        session.lines_cleared_total += total
        emit(Phase.LINES_CLEARED, rows=rows, cols=cols, cells=cleared, bonus=bonus)
        logger.debug("Cleared %d line(s) (rows=%s, cols=%s) for %d bonus", total, rows, cols, bonus)

    refilled = session.tray.refill_if_depleted()
    if refilled:
        emit(Phase.TRAY_REFILLED, pieces=list(session.tray))

    if not oracle.evaluate(grid, session.tray):
        session.game_over = True
        logger.info("Game over with final score %d after %d pieces", session.score, session.pieces_placed)
        emit(Phase.GAME_OVER, final_score=session.score)

    return PlacementOutcome(
        committed=True,
        points_awarded=placement_points + bonus,
        placement_points=placement_points,
        line_bonus=bonus,
        cells_placed=tuple(placed),
        lines_cleared=total,
        rows=tuple(rows),
        cols=tuple(cols),
        cleared_cells=tuple(cleared),
        refilled=refilled,
        terminal=session.game_over,
    )


class BlockBlastGame:
    """Owns one ``GameSession`` at a time and fans engine events out to listeners."""

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        on_game_over: Optional[Callable[[int], Any]] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.rng = random.Random(self.config.random_seed)
        self.on_game_over = on_game_over
        self._listeners: List[Listener] = []
        self.session = GameSession.new(self.config, self.rng)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _dispatch(self, event: GameEvent) -> None:
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception("Listener %r failed on %s", listener, event.phase.value)

    def start_new_session(self, seed: Optional[int] = None) -> GameSession:
        if seed is not None:
            self.rng.seed(seed)
        self.session = GameSession.new(self.config, self.rng)
        logger.info("Started new session")
        self._dispatch(GameEvent(Phase.NEW_SESSION, self.session, {"pieces": list(self.session.tray)}))
        return self.session

    def attempt_placement(self, piece: Piece, row: int, col: int, slot: int) -> PlacementOutcome:
        session = self.session
        outcome = attempt_placement(session, piece, row, col, slot, self.rules, self._dispatch)
        if outcome.committed and outcome.terminal and self.on_game_over is not None:
            try:
                self.on_game_over(session.score)
            except Exception:
                logger.exception("Final score sink failed for score %d", session.score)
        return outcome

    def place_from_slot(self, slot: int, row: int, col: int) -> PlacementOutcome:
        """Convenience wrapper that places whatever piece ``slot`` currently holds."""
        session = self.session
        if session.game_over:
            reason = RejectReason.GAME_OVER
        elif not 0 <= slot < len(session.tray):
            reason = RejectReason.INVALID_SLOT
        elif session.tray[slot] is None:
            reason = RejectReason.EMPTY_SLOT
        else:
            return self.attempt_placement(session.tray[slot], row, col, slot)
        return PlacementOutcome.rejected(reason, terminal=session.game_over)

    # Read-only queries

    def can_place(self, piece: Piece, row: int, col: int) -> bool:
        return self.session.grid.can_place(piece, row, col)

    def board_snapshot(self) -> np.ndarray:
        return self.session.grid.clone_state()

    def tray_snapshot(self) -> List[Optional[Piece]]:
        return list(self.session.tray)

    @property
    def grid(self) -> GameGrid:
        return self.session.grid

    @property
    def score(self) -> int:
        return self.session.score

    @property
    def game_over(self) -> bool:
        return self.session.game_over

    def get_valid_actions(self) -> List[Tuple[int, int, int]]:
        """List of (slot, row, col) placements that would be accepted."""
        actions: List[Tuple[int, int, int]] = []
        if self.session.game_over:
            return actions
        for slot, piece in self.session.tray.pieces():
            for row, col in self.session.grid.valid_anchors(piece):
                actions.append((slot, row, col))
        return actions

    def get_state(self) -> dict:
        return {
            "grid": self.board_snapshot(),
            "tray": [None if p is None else p.name for p in self.session.tray],
            "pieces_remaining": self.session.tray.remaining,
            "score": self.session.score,
            "lines_cleared_total": self.session.lines_cleared_total,
            "pieces_placed": self.session.pieces_placed,
            "game_over": self.session.game_over,
            "filled_ratio": self.session.grid.get_filled_ratio(),
        }

    def get_game_stats(self) -> dict:
        placed = self.session.pieces_placed
        return {
            "final_score": self.session.score,
            "pieces_placed": placed,
            "lines_cleared": self.session.lines_cleared_total,
            "final_fill_ratio": self.session.grid.get_filled_ratio(),
            "avg_score_per_piece": self.session.score / max(1, placed),
            "avg_lines_per_piece": self.session.lines_cleared_total / max(1, placed),
        }
