from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from block_blast.game import BlockBlastGame, GameConfig, PieceColor, PieceType, ScoringRules
from block_blast.game.pieces import PALETTE


def _compute_action_mask(game: BlockBlastGame) -> np.ndarray:
    size = game.config.grid_size
    k = game.config.tray_size
    mask = np.zeros((k, size, size), dtype=np.bool_)
    for slot, row, col in game.get_valid_actions():
        mask[slot, row, col] = True
    return mask


def _hex_to_rgb(value: str) -> Tuple[int, int, int]:
    value = value.lstrip("#")
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)


class BlockBlastEnv(gym.Env):
    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(self, config: Optional[GameConfig] = None, rules: Optional[ScoringRules] = None,
                 render_mode: Optional[str] = None,
                 reward_weights: Optional[Dict[str, float]] = None,
                 invalid_action_penalty: float = -0.1,
                 step_penalty: float = 0.0,
                 terminal_penalty: float = 0.0,
                 max_episode_steps: int = 10000) -> None:
        super().__init__()
        self.game = BlockBlastGame(config, rules)
        self.render_mode = render_mode
        self.max_episode_steps = int(max_episode_steps)

        # Reward shaping parameters
        self.invalid_action_penalty = float(invalid_action_penalty)
        self.step_penalty = float(step_penalty)
        self.terminal_penalty = float(terminal_penalty)
        self.reward_weights: Dict[str, float] = {
            "cells": 0.05,     # reward per cell placed
            "lines": 10.0,     # reward per line cleared
            "lines_sq": 5.0,   # extra for combos (quadratic)
        }
        if reward_weights:
            self.reward_weights.update({k: float(v) for k, v in reward_weights.items()})

        size = self.game.config.grid_size
        k = self.game.config.tray_size

        # Observation space: grid (0/1) and tray pieces (catalog index, -1 for empty)
        self.observation_space = spaces.Dict(
            {
                "grid": spaces.Box(low=0, high=1, shape=(size, size), dtype=np.int8),
                "pieces": spaces.Box(low=-1, high=len(PieceType) - 1, shape=(k,), dtype=np.int8),
                "pieces_remaining": spaces.Discrete(k + 1),
            }
        )

        # Action: (slot, row, col)
        self.action_space = spaces.MultiDiscrete((k, size, size))

        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        k = self.game.config.tray_size
        grid = (self.game.board_snapshot() != 0).astype(np.int8)
        pieces = np.full((k,), -1, dtype=np.int8)
        for slot, piece in self.game.session.tray.pieces():
            pieces[slot] = int(piece.kind)
        return {
            "grid": grid,
            "pieces": pieces,
            "pieces_remaining": self.game.session.tray.remaining,
        }

    def _get_info(self) -> Dict[str, Any]:
        return {
            "action_mask": _compute_action_mask(self.game),
            "score": self.game.score,
            "steps": self._steps,
        }

    def get_action_mask(self) -> np.ndarray:
        return _compute_action_mask(self.game)

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        self.game.start_new_session(seed)
        self._steps = 0
        obs = self._get_obs()
        return obs, self._get_info()

    def step(self, action):
        slot, row, col = map(int, action)

        outcome = self.game.place_from_slot(slot, row, col)

        reward_components: Dict[str, float] = {}
        if outcome.committed:
            lines = outcome.lines_cleared
            reward_components["cells"] = self.reward_weights["cells"] * float(len(outcome.cells_placed))
            reward_components["lines"] = self.reward_weights["lines"] * float(lines)
            reward_components["lines_sq"] = self.reward_weights["lines_sq"] * float(lines * lines)
        else:
            reward_components["invalid"] = self.invalid_action_penalty

        reward_components["step"] = self.step_penalty
        terminated = bool(self.game.game_over)
        self._steps += 1
        truncated = self._steps >= self.max_episode_steps and not terminated
        if terminated:
            reward_components["terminal"] = self.terminal_penalty

        reward = float(sum(reward_components.values()))

        obs = self._get_obs()
        info = self._get_info()
        info["reward_components"] = reward_components
        info["engine_score_delta"] = float(outcome.points_awarded)
        info["rejected"] = None if outcome.committed else outcome.reason.value
        return obs, reward, terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            return None
        grid = self.game.board_snapshot()
        cell = 12
        h, w = grid.shape
        img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
        for y in range(h):
            for x in range(w):
                v = int(grid[y, x])
                color = _hex_to_rgb(PALETTE[PieceColor(v)]) if v else (30, 30, 36)
                img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color
        return img

    def close(self) -> None:
        pass
