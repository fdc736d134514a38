from __future__ import annotations

import argparse
import logging
import os

import gymnasium as gym

# Ensure envs are registered
import block_blast.env  # noqa: F401
from block_blast.env.wrappers import FlattenDiscreteActionWrapper, ResampleInvalidActionWrapper

logger = logging.getLogger(__name__)

ENV_ID = "BlockBlast-8x8-v0"


def make_env(seed: int | None = None, resample: bool = True) -> gym.Env:
    env = FlattenDiscreteActionWrapper(gym.make(ENV_ID))
    # Resample invalid actions for vanilla PPO; also forwards get_action_mask
    if resample:
        env = ResampleInvalidActionWrapper(env)
    if seed is not None:
        env.reset(seed=seed)
    return env


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser()
    p.add_argument("--algo", choices=["ppo", "maskable"], default="maskable")
    p.add_argument("--timesteps", type=int, default=200_000)
    p.add_argument("--logdir", type=str, default="./logs/ppo")
    p.add_argument("--save_path", type=str, default="./models/ppo_blockblast.zip")
    p.add_argument("--n_envs", type=int, default=4)
    return p


def main() -> None:
    args = build_parser().parse_args()
    logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s", level=logging.INFO)

    from stable_baselines3.common.vec_env import SubprocVecEnv, VecMonitor

    if args.algo == "maskable":
        from sb3_contrib import MaskablePPO as Algo
        from sb3_contrib.common.wrappers import ActionMasker

        def make_env_idx(i: int):
            def thunk():
                return ActionMasker(make_env(resample=False), lambda e: e.get_action_mask())
            return thunk
    else:
        from stable_baselines3 import PPO as Algo

        def make_env_idx(i: int):
            def thunk():
                return make_env()
            return thunk

    vec_env = VecMonitor(SubprocVecEnv([make_env_idx(i) for i in range(args.n_envs)]))
    model = Algo(policy="MultiInputPolicy", env=vec_env, verbose=1, tensorboard_log=args.logdir)

    logger.info("Training %s for %d timesteps on %d envs", args.algo, args.timesteps, args.n_envs)
    os.makedirs(os.path.dirname(args.save_path) or ".", exist_ok=True)
    model.learn(total_timesteps=args.timesteps)
    model.save(args.save_path)
    logger.info("Saved model to %s", args.save_path)


if __name__ == "__main__":  # pragma: no cover
    main()
