from __future__ import annotations

import argparse
import logging
from typing import Dict, Optional

import pygame

from tetris_engine.game import GameConfig, GameDriver, GameEngine
from .renderer import Renderer


KEY_NAMES: Dict[int, str] = {
    pygame.K_LEFT: "left",
    pygame.K_RIGHT: "right",
    pygame.K_DOWN: "down",
    pygame.K_UP: "up",
}

RESTART_KEYS = (pygame.K_RETURN, pygame.K_r)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser()
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--tick_ms", type=int, default=1000)
    p.add_argument("--cell_size", type=int, default=28)
    p.add_argument("--fps", type=int, default=60)
    p.add_argument("--log_level", type=str, default="INFO")
    return p


def run(argv: Optional[list] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="[TETRIS] %(asctime)s - %(message)s")

    pygame.init()
    try:
        clock = pygame.time.Clock()
        engine = GameEngine(GameConfig(random_seed=args.seed, tick_ms=args.tick_ms))
        renderer = Renderer(cell_size=args.cell_size)
        screen = pygame.display.set_mode(renderer.window_size(engine.width, engine.height))
        pygame.display.set_caption("Tetris")

        with GameDriver(engine) as driver:
            running = True
            while running:
                # Input handling
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        running = False
                    elif event.type == pygame.KEYDOWN:
                        if event.key == pygame.K_ESCAPE:
                            running = False
                        elif event.key in RESTART_KEYS:
                            driver.start()
                        else:
                            key = KEY_NAMES.get(event.key)
                            if key is not None:
                                driver.press(key)

                # Gravity
                driver.advance(clock.tick(args.fps))

                renderer.draw(
                    screen,
                    engine.get_state(),
                    score=engine.score,
                    playing=engine.is_playing,
                    game_over=engine.game_over,
                    position=engine.position,
                )
    finally:
        pygame.quit()


if __name__ == "__main__":  # pragma: no cover
    run()
