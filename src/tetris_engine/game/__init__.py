"""Game module for the Tetris engine.

Exports the core game engine and supporting classes:
- GameGrid: Board representation, collision and line clearing
- Piece: Falling tetromino with position and rotation
- TetrominoType: Enum of available piece types
- ScoringRules: Flat per-line scoring
- GameEngine: Game state machine
- GameDriver: Tick schedule and input ownership for an engine
"""

from .grid import GameGrid
from .pieces import BASE_SHAPES, Piece, Position, TetrominoType, make_shape, rotate_cw
from .rules import ScoringRules
from .core import Command, GameConfig, GameEngine
from .driver import DEFAULT_BINDINGS, GameDriver, InputSubscription, TickSchedule

__all__ = [
    "GameGrid",
    "BASE_SHAPES",
    "Piece",
    "Position",
    "TetrominoType",
    "make_shape",
    "rotate_cw",
    "ScoringRules",
    "Command",
    "GameConfig",
    "GameEngine",
    "GameDriver",
    "InputSubscription",
    "TickSchedule",
    "DEFAULT_BINDINGS",
]
