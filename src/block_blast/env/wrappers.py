from __future__ import annotations

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .block_blast_env import _compute_action_mask


class FlattenDiscreteActionWrapper(gym.ActionWrapper):
    """Flattens MultiDiscrete (slot, row, col) -> Discrete(N) for PPO.

    Also exposes `get_action_mask()` returning a 1D boolean mask of shape (N,).
    Order: slot, row, col (C-order flattening).
    """

    def __init__(self, env: gym.Env):
        super().__init__(env)
        assert isinstance(env.action_space, spaces.MultiDiscrete)
        k, size_r, size_c = map(int, env.action_space.nvec)
        assert size_r == size_c, "Expected square grid"
        self.k = k
        self.size = size_r
        self.n = int(k * self.size * self.size)
        self.action_space = spaces.Discrete(self.n)

    def _unflatten(self, idx: int) -> tuple[int, int, int]:
        col = idx % self.size
        idx //= self.size
        row = idx % self.size
        slot = idx // self.size
        return int(slot), int(row), int(col)

    def action(self, action: int):  # type: ignore[override]
        return np.array(self._unflatten(int(action)), dtype=np.int64)

    def get_action_mask(self) -> np.ndarray:
        return _compute_action_mask(self.env.unwrapped.game).reshape(-1)


class ResampleInvalidActionWrapper(gym.Wrapper):
    """If a sampled action is invalid, resample uniformly among valid ones.

    Useful when training with vanilla PPO (no action masking).
    """

    def step(self, action):  # type: ignore[override]
        if isinstance(self.action_space, spaces.Discrete) and hasattr(self.env, "get_action_mask"):
            mask = self.get_action_mask()
            if 0 <= int(action) < mask.shape[0] and not bool(mask[int(action)]):
                valid_idxs = np.flatnonzero(mask)
                if valid_idxs.size > 0:
                    action = int(self.np_random.choice(valid_idxs))
        return self.env.step(action)

    def get_action_mask(self) -> np.ndarray:
        if hasattr(self.env, "get_action_mask"):
            return getattr(self.env, "get_action_mask")()
        raise AttributeError("Underlying env does not provide get_action_mask")
