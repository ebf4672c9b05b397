from __future__ import annotations

import argparse

import pygame

from tetris_engine.rl.train_ppo import make_env
from tetris_engine.visualization.renderer import Renderer


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser()
    p.add_argument("--model", type=str, required=True)
    p.add_argument("--steps", type=int, default=500)
    p.add_argument("--ticks_per_step", type=int, default=1)
    p.add_argument("--fps", type=int, default=10)
    return p


def main() -> None:
    args = build_parser().parse_args()
    from stable_baselines3 import PPO

    env = make_env(args.ticks_per_step)
    model = PPO.load(args.model, device="auto")

    game = env.unwrapped.game
    renderer = Renderer(cell_size=24)

    pygame.init()
    try:
        screen = pygame.display.set_mode(renderer.window_size(game.width, game.height))
        pygame.display.set_caption("Tetris - Agent Eval")
        clock = pygame.time.Clock()

        obs, info = env.reset()
        total_reward = 0.0
        steps = 0
        while steps < args.steps:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    return
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    return

            action, _ = model.predict(obs, deterministic=True)
            obs, reward, terminated, truncated, info = env.step(action)
            total_reward += float(reward)
            steps += 1
            if terminated or truncated:
                print(f"episode finished: score {info['score']} lines {info['lines_cleared_total']}")
                obs, info = env.reset()

            game = env.unwrapped.game
            renderer.draw(screen, game.get_state(), score=game.score,
                          playing=game.is_playing, game_over=game.game_over,
                          position=game.position)
            clock.tick(args.fps)
        print(f"step {steps}/{args.steps}  reward {total_reward:.1f}")
    finally:
        env.close()
        pygame.quit()


if __name__ == "__main__":  # pragma: no cover
    main()
