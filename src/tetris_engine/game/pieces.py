from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import List, NamedTuple, Tuple

import numpy as np


class TetrominoType(IntEnum):
    I = 1
    O = 2
    T = 3
    J = 4
    L = 5
    Z = 6
    S = 7


Shape = np.ndarray


class Position(NamedTuple):
    x: int
    y: int


def _freeze(shape: Shape) -> Shape:
    frozen = np.array(shape, dtype=np.int8, copy=True)
    frozen.flags.writeable = False
    return frozen


def make_shape(rows, value: int = 1) -> Shape:
    """Build a read-only shape from nested lists; occupied cells take `value`."""
    mask = np.array(rows, dtype=np.int8) != 0
    return _freeze(mask.astype(np.int8) * np.int8(value))


def rotate_cw(shape: Shape) -> Shape:
    # Column i of the result (top to bottom) is row i of the source, right to left
    return _freeze(np.rot90(shape, 1, axes=(1, 0)))


BASE_SHAPES = {
    TetrominoType.I: make_shape([[1, 1, 1, 1]], TetrominoType.I),
    TetrominoType.O: make_shape([[1, 1], [1, 1]], TetrominoType.O),
    TetrominoType.T: make_shape([[1, 1, 1], [0, 1, 0]], TetrominoType.T),
    TetrominoType.J: make_shape([[1, 1, 1], [1, 0, 0]], TetrominoType.J),
    TetrominoType.L: make_shape([[1, 1, 1], [0, 0, 1]], TetrominoType.L),
    TetrominoType.Z: make_shape([[1, 1, 0], [0, 1, 1]], TetrominoType.Z),
    TetrominoType.S: make_shape([[0, 1, 1], [1, 1, 0]], TetrominoType.S),
}


def occupied_cells(shape: Shape, origin_x: int, origin_y: int) -> List[Tuple[int, int]]:
    h, w = shape.shape
    cells: List[Tuple[int, int]] = []
    for dy in range(h):
        for dx in range(w):
            if shape[dy, dx]:
                cells.append((origin_x + dx, origin_y + dy))
    return cells


@dataclass(frozen=True, eq=False)
class Piece:
    """The falling piece: a shape in its current rotation plus its board position."""

    kind: TetrominoType
    shape: Shape
    position: Position

    @classmethod
    def of(cls, kind: TetrominoType, x: int = 0, y: int = 0) -> "Piece":
        return cls(kind, BASE_SHAPES[kind], Position(x, y))

    @property
    def width(self) -> int:
        return int(self.shape.shape[1])

    def moved(self, dx: int, dy: int) -> "Piece":
        return Piece(self.kind, self.shape, Position(self.position.x + dx, self.position.y + dy))

    def rotated(self) -> "Piece":
        return Piece(self.kind, rotate_cw(self.shape), self.position)

    def cells(self) -> List[Tuple[int, int]]:
        return occupied_cells(self.shape, self.position.x, self.position.y)
