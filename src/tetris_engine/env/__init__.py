"""Gymnasium environments for the Tetris engine."""

from __future__ import annotations

from gymnasium.envs.registration import register

from .tetris_env import TetrisEnv

# Register default 10x20 environment
register(
    id="Tetris-10x20-v0",
    entry_point="tetris_engine.env.tetris_env:TetrisEnv",
)

__all__ = ["TetrisEnv"]
