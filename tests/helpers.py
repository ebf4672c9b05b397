from __future__ import annotations

import numpy as np

from tetris_engine.game import GameConfig, GameEngine, TetrominoType


class FixedRng:
    """Stands in for random.Random; hands out the given kinds in order, then repeats the last."""

    def __init__(self, *kinds: TetrominoType) -> None:
        self.kinds = list(kinds)

    def choice(self, seq):
        if len(self.kinds) > 1:
            return self.kinds.pop(0)
        return self.kinds[0]


def make_engine(*kinds: TetrominoType, width: int = 10, height: int = 20) -> GameEngine:
    return GameEngine(GameConfig(width=width, height=height), rng=FixedRng(*kinds))


def piece_cells(engine: GameEngine) -> set:
    if engine.current_piece is None:
        return set()
    return set(engine.current_piece.cells())


def occupied(board) -> set:
    ys, xs = np.nonzero(board)
    return {(int(x), int(y)) for x, y in zip(xs, ys)}
