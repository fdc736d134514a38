from __future__ import annotations

import argparse
import logging

import gymnasium as gym
import numpy as np

import block_blast.env  # noqa: F401  (registers BlockBlast-8x8-v0)

logger = logging.getLogger(__name__)


def run_random(episodes: int = 5, seed: int | None = None) -> list[int]:
    """Play masked-random episodes and return the final engine score of each."""
    env = gym.make("BlockBlast-8x8-v0")
    rng = np.random.default_rng(seed)
    scores: list[int] = []
    try:
        for episode in range(episodes):
            obs, info = env.reset(seed=None if seed is None else seed + episode)
            done = False
            total_reward = 0.0
            while not done:
                valid = np.argwhere(info["action_mask"])
                if valid.size == 0:
                    break
                action = valid[rng.integers(len(valid))]
                obs, reward, terminated, truncated, info = env.step(action)
                total_reward += float(reward)
                done = terminated or truncated
            scores.append(int(info["score"]))
            logger.info("Episode %d: score %d, reward %.2f", episode, info["score"], total_reward)
    finally:
        env.close()
    return scores


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser()
    p.add_argument("--episodes", type=int, default=5)
    p.add_argument("--seed", type=int, default=None)
    return p


def main() -> None:
    args = build_parser().parse_args()
    logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s", level=logging.INFO)
    scores = run_random(args.episodes, args.seed)
    print(f"Random agent mean score: {np.mean(scores):.1f} over {len(scores)} episodes")


if __name__ == "__main__":  # pragma: no cover
    main()
