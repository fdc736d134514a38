from __future__ import annotations

import argparse
import logging
import random
from typing import List, Optional

from block_blast.game import BlockBlastGame, GameConfig, GameEvent, Phase
from block_blast.game.display import format_score, print_grid, print_piece
from block_blast.persistence import HighScoreStore


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="block-blast", description="Play Block Blast with a random agent in the terminal.")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--max-moves", type=int, default=500)
    p.add_argument("--highscore", type=str, default=None, help="Path of the high score file")
    p.add_argument("--quiet", action="store_true", help="Only print the final summary")
    p.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p


def _print_event(event: GameEvent) -> None:
    if event.phase == Phase.LINES_CLEARED:
        lines = len(event.payload["rows"]) + len(event.payload["cols"])
        label = {2: "Double!", 3: "Triple!"}.get(lines, "MEGA!" if lines >= 4 else "")
        print(f"  cleared {lines} line(s) +{format_score(event.payload['bonus'])} {label}".rstrip())
    elif event.phase == Phase.TRAY_REFILLED:
        print("  tray refilled: " + ", ".join(p.name for p in event.payload["pieces"]))


def run_game_demo(seed: Optional[int] = None, max_moves: int = 500, quiet: bool = False,
                  store: Optional[HighScoreStore] = None) -> dict:
    game = BlockBlastGame(GameConfig(random_seed=seed),
                          on_game_over=store.record_final_score if store is not None else None)
    if not quiet:
        game.subscribe(_print_event)
        print("=== Block Blast Demo ===")
        print("Initial tray: " + ", ".join(p.name for p in game.tray_snapshot() if p is not None))
    chooser = random.Random(seed)
    for move in range(max_moves):
        actions: List = game.get_valid_actions()
        if not actions:
            break
        slot, row, col = chooser.choice(actions)
        piece = game.session.tray[slot]
        outcome = game.attempt_placement(piece, row, col, slot)
        if not quiet:
            print(f"\nMove {move + 1}: {piece.name} from slot {slot} at ({row}, {col}) "
                  f"+{format_score(outcome.points_awarded)}")
            print_piece(piece)
            print()
            print_grid(game.grid)
            print(f"Score: {format_score(game.score)}")
        if outcome.terminal:
            break
    stats = game.get_game_stats()
    print(f"\nFinal score: {format_score(stats['final_score'])} "
          f"({stats['pieces_placed']} pieces, {stats['lines_cleared']} lines)")
    if store is not None:
        print(f"Best score: {format_score(store.load())}")
    return stats


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        level=getattr(logging, args.log_level),
    )
    store = HighScoreStore(args.highscore) if args.highscore else None
    run_game_demo(seed=args.seed, max_moves=args.max_moves, quiet=args.quiet, store=store)


if __name__ == "__main__":  # pragma: no cover
    main()
