from __future__ import annotations

import argparse
from typing import Optional

import gymnasium as gym

import tetris_engine.env  # noqa: F401


def run_random(steps: int = 2000, seed: Optional[int] = None) -> float:
    env = gym.make("Tetris-10x20-v0")
    obs, info = env.reset(seed=seed)
    env.action_space.seed(seed)
    total_reward = 0.0
    episodes = 0
    for _ in range(steps):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += float(reward)
        if terminated or truncated:
            episodes += 1
            obs, info = env.reset()
    env.close()
    print(f"Random agent total reward: {total_reward:.2f} over {episodes} finished episode(s)")
    return total_reward


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser()
    p.add_argument("--steps", type=int, default=2000)
    p.add_argument("--seed", type=int, default=None)
    return p


def main() -> None:
    args = build_parser().parse_args()
    run_random(args.steps, args.seed)


if __name__ == "__main__":  # pragma: no cover
    main()
