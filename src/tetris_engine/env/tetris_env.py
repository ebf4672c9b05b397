from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from tetris_engine.game import Command, GameConfig, GameEngine, TetrominoType


class TetrisEnv(gym.Env):
    """Headless driver exposing the engine as a gymnasium environment.

    Each step applies one `Command` and then lets gravity run for
    `ticks_per_step` ticks. The observation is the board with the falling
    piece overlaid as negative kind values.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None,
                 ticks_per_step: int = 1,
                 line_reward_scale: float = 0.01,
                 step_reward: float = 0.0,
                 terminal_penalty: float = -1.0,
                 max_episode_steps: int = 5000) -> None:
        super().__init__()
        self.game = GameEngine(config)
        self.render_mode = render_mode
        self.ticks_per_step = int(ticks_per_step)
        self.line_reward_scale = float(line_reward_scale)
        self.step_reward = float(step_reward)
        self.terminal_penalty = float(terminal_penalty)
        self.max_episode_steps = int(max_episode_steps)

        kinds = len(TetrominoType)
        self.observation_space = spaces.Box(
            low=-kinds, high=kinds, shape=(self.game.height, self.game.width), dtype=np.int8
        )
        self.action_space = spaces.Discrete(len(Command))

        self._steps = 0

    def _get_obs(self) -> np.ndarray:
        return self.game.get_state()

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self.game.score,
            "lines_cleared_total": self.game.lines_cleared_total,
            "steps": self._steps,
            "piece_present": self.game.current_piece is not None,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[np.ndarray, Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is not None:
            self.game.seed(seed)
        self.game.start()
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action):
        command = Command(int(action))
        score_before = self.game.score

        self.game.on_command(command)
        for _ in range(self.ticks_per_step):
            if not self.game.is_playing:
                break
            self.game.tick()

        self._steps += 1
        terminated = bool(self.game.game_over)
        truncated = self._steps >= self.max_episode_steps and not terminated

        reward = self.line_reward_scale * float(self.game.score - score_before) + self.step_reward
        if terminated:
            reward += self.terminal_penalty

        return self._get_obs(), float(reward), terminated, truncated, self._get_info()

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            return None
        state = self.game.get_state()
        cell = 12
        h, w = state.shape
        img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
        for y in range(h):
            for x in range(w):
                v = int(state[y, x])
                if v > 0:
                    color = (70, 200, 120)
                elif v < 0:
                    color = (230, 200, 60)
                else:
                    color = (30, 30, 36)
                img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color
        return img

    def close(self) -> None:
        pass
