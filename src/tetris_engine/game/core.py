from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional

import numpy as np

from .grid import GameGrid
from .pieces import Piece, Position, Shape, TetrominoType
from .rules import ScoringRules


logger = logging.getLogger(__name__)


class Command(IntEnum):
    LEFT = 0
    RIGHT = 1
    DOWN = 2
    ROTATE = 3
    NONE = 4


@dataclass
class GameConfig:
    width: int = 10
    height: int = 20
    random_seed: Optional[int] = None
    spawn_y: int = 0
    tick_ms: int = 1000


class GameEngine:
    """Single-threaded state machine for one falling-block game.

    Nothing happens until `start()`. Afterwards the caller advances time with
    `tick()` and applies player input with `move`, `drop`, `rotate` or
    `on_command`. Every call runs to completion; illegal moves are rejected by
    returning False and calls made while not playing are no-ops.
    """

    def __init__(self, config: Optional[GameConfig] = None, rules: Optional[ScoringRules] = None,
                 rng: Optional[random.Random] = None) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.rng = rng if rng is not None else random.Random(self.config.random_seed)
        self.grid = GameGrid(self.config.width, self.config.height)
        self._score = 0
        self.lines_cleared_total = 0
        self._playing = False
        self._game_over = False
        self.current_piece: Optional[Piece] = None

    # -- read accessors -------------------------------------------------

    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height

    @property
    def score(self) -> int:
        return self._score

    @property
    def is_playing(self) -> bool:
        return self._playing

    @property
    def game_over(self) -> bool:
        return self._game_over

    @property
    def board(self) -> np.ndarray:
        return self.grid.clone_state()

    @property
    def piece(self) -> Optional[Shape]:
        return None if self.current_piece is None else self.current_piece.shape

    @property
    def position(self) -> Optional[Position]:
        return None if self.current_piece is None else self.current_piece.position

    def get_state(self) -> np.ndarray:
        # Overlay current piece on a copy of the grid for rendering
        state = self.grid.clone_state()
        if self.current_piece is not None:
            for x, y in self.current_piece.cells():
                if self.grid.is_inside(x, y):
                    # Use negative to indicate falling piece overlay
                    state[y, x] = -int(self.current_piece.kind)
        return state

    # -- lifecycle ------------------------------------------------------

    def seed(self, seed: Optional[int]) -> None:
        self.rng = random.Random(seed)

    def start(self) -> None:
        self.grid.reset()
        self._score = 0
        self.lines_cleared_total = 0
        self._game_over = False
        self._playing = True
        self.current_piece = None
        logger.info("game started on a %dx%d board", self.width, self.height)
        self._advance_piece()

    def _advance_piece(self) -> None:
        # Clear before spawning so the new piece sees the compacted board
        if self._playing and self.current_piece is None:
            self.clear_lines()
            self.spawn_piece()

    # -- rules ----------------------------------------------------------

    def collides(self, shape: Shape, position: Position) -> bool:
        return self.grid.collides(shape, position[0], position[1])

    def spawn_piece(self) -> None:
        if not self._playing:
            return
        kind = self.rng.choice(list(TetrominoType))
        piece = Piece.of(kind)
        piece = piece.moved(self.width // 2 - piece.width // 2, self.config.spawn_y)
        position = piece.position
        if self.collides(piece.shape, position):
            self._game_over = True
            self._playing = False
            self.current_piece = None
            logger.info("game over: %s cannot spawn at %s, final score %d", kind.name, tuple(position), self._score)
            return
        self.current_piece = piece
        logger.debug("spawned %s at %s", kind.name, tuple(position))

    def merge_to_board(self) -> None:
        if self.current_piece is None:
            return
        x, y = self.current_piece.position
        self.grid.merge(self.current_piece.shape, x, y)
        self.current_piece = None

    def clear_lines(self) -> int:
        lines = self.grid.clear_full_lines()
        if lines:
            self.lines_cleared_total += lines
            self._score += self.rules.score_for_lines(lines)
            logger.debug("cleared %d line(s), score %d", lines, self._score)
        return lines

    # -- commands -------------------------------------------------------

    def move(self, dx: int, dy: int) -> bool:
        if not self._playing or self.current_piece is None:
            return False
        candidate = self.current_piece.moved(dx, dy)
        # Only a fresh spawn may sit above the top row
        if dy < 0 and candidate.position.y < 0:
            return False
        if not self.collides(candidate.shape, candidate.position):
            self.current_piece = candidate
            return True
        if dy > 0:
            self.merge_to_board()
            self._advance_piece()
        return False

    def drop(self) -> bool:
        return self.move(0, 1)

    def rotate(self) -> bool:
        if not self._playing or self.current_piece is None:
            return False
        rotated = self.current_piece.rotated()
        if self.collides(rotated.shape, rotated.position):
            return False
        self.current_piece = rotated
        return True

    def tick(self) -> None:
        self.drop()

    def on_command(self, command: Command) -> bool:
        if command == Command.LEFT:
            return self.move(-1, 0)
        if command == Command.RIGHT:
            return self.move(1, 0)
        if command == Command.DOWN:
            return self.drop()
        if command == Command.ROTATE:
            return self.rotate()
        return False
