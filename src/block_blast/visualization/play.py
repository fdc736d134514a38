from __future__ import annotations

import argparse
import logging

import pygame

from block_blast.game import BlockBlastGame, GameConfig
from block_blast.game.display import format_score
from block_blast.persistence import HighScoreStore
from .renderer import Renderer

logger = logging.getLogger(__name__)


KEY_TO_SLOT = {
    pygame.K_1: 0,
    pygame.K_2: 1,
    pygame.K_3: 2,
    pygame.K_KP1: 0,
    pygame.K_KP2: 1,
    pygame.K_KP3: 2,
}


def run(seed: int | None = None, highscore_path: str | None = None) -> None:
    store = HighScoreStore(highscore_path)
    game = BlockBlastGame(GameConfig(random_seed=seed), on_game_over=store.record_final_score)
    best = store.load()

    pygame.init()
    try:
        cell_size = 40
        margin = 20
        board_px = game.config.grid_size * cell_size
        screen = pygame.display.set_mode((margin * 3 + board_px + 6 * cell_size, margin * 2 + board_px))
        pygame.display.set_caption("Block Blast")
        font = pygame.font.SysFont(None, 24)
        renderer = Renderer(screen, game.config.grid_size, cell_size, margin)
        game.subscribe(renderer.on_event)

        selected = 0
        running = True
        clock = pygame.time.Clock()
        while running:
            row, col = renderer.pixel_to_cell(*pygame.mouse.get_pos())
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key in KEY_TO_SLOT:
                        selected = KEY_TO_SLOT[event.key]
                    elif event.key == pygame.K_n:
                        best = max(best, store.load())
                        game.start_new_session()
                        selected = 0
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    outcome = game.place_from_slot(selected, row, col)
                    if outcome.committed:
                        pieces = game.session.tray.pieces()
                        selected = pieces[0][0] if pieces else 0
                        if outcome.terminal:
                            best = max(best, store.load())

            renderer.draw_board(game.board_snapshot())
            piece = game.session.tray[selected]
            if piece is not None and not game.game_over:
                renderer.draw_ghost(piece, row, col, game.can_place(piece, row, col))
            renderer.draw_tray(game.tray_snapshot(), selected)
            renderer.draw_text(font, [
                f"Score: {format_score(game.score)}",
                f"Best: {format_score(max(best, game.score))}",
                "Select: 1/2/3",
                "Place: Left click",
                "New game: N",
            ], margin + cell_size * 8)
            if game.game_over:
                over = font.render("Game Over - Press N for a new game", True, (255, 100, 100))
                screen.blit(over, (margin, 2))

            pygame.display.flip()
            clock.tick(60)
    finally:
        pygame.quit()


def main() -> None:
    p = argparse.ArgumentParser()
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--highscore", type=str, default=None)
    args = p.parse_args()
    logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s", level=logging.INFO)
    run(args.seed, args.highscore)


if __name__ == "__main__":  # pragma: no cover
    main()
