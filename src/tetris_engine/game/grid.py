from __future__ import annotations

from typing import Iterable, Tuple

import numpy as np

from .pieces import Shape, occupied_cells


Coordinate = Tuple[int, int]


class GameGrid:
    """Fixed-size board of settled cells.

    The grid uses 0 for empty cells and positive integers for filled cells.
    Integer values correspond to tetromino indices for optional coloring.
    Row 0 is the top. The backing array is replaced, never edited in place,
    so copies handed out earlier stay valid.
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = int(width)
        self.height = int(height)
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    def reset(self) -> None:
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def blocked(self, cells: Iterable[Coordinate]) -> bool:
        # Cells above the top row only have to respect the side walls
        for x, y in cells:
            if x < 0 or x >= self.width or y >= self.height:
                return True
            if y >= 0 and self.grid[y, x] != 0:
                return True
        return False

    def collides(self, shape: Shape, x: int, y: int) -> bool:
        return self.blocked(occupied_cells(shape, x, y))

    def merge(self, shape: Shape, x: int, y: int) -> None:
        merged = self.grid.copy()
        for bx, by in occupied_cells(shape, x, y):
            if self.is_inside(bx, by):
                merged[by, bx] = shape[by - y, bx - x]
        self.grid = merged

    def full_rows(self) -> np.ndarray:
        return np.where(np.all(self.grid != 0, axis=1))[0]

    def clear_full_lines(self) -> int:
        """Drop full rows, pad with empty rows on top, return how many went."""
        full = self.full_rows()
        if full.size == 0:
            return 0
        kept = np.delete(self.grid, full, axis=0)
        cleared = self.height - kept.shape[0]
        new_rows = np.zeros((cleared, self.width), dtype=np.int8)
        self.grid = np.vstack((new_rows, kept))
        return cleared

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()
