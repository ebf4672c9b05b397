import unittest

import numpy as np

from helpers import occupied
from tetris_engine.game import BASE_SHAPES, GameGrid, TetrominoType, make_shape


class GridCollisionTests(unittest.TestCase):
    def setUp(self):
        self.grid = GameGrid(10, 20)
        self.bar = BASE_SHAPES[TetrominoType.I]

    def test_walls_and_floor(self):
        self.assertFalse(self.grid.collides(self.bar, 0, 0))
        self.assertFalse(self.grid.collides(self.bar, 6, 19))
        self.assertTrue(self.grid.collides(self.bar, -1, 0))
        self.assertTrue(self.grid.collides(self.bar, 7, 0))
        self.assertTrue(self.grid.collides(self.bar, 0, 20))

    def test_above_top_only_checks_side_walls(self):
        self.assertFalse(self.grid.collides(self.bar, 3, -1))
        self.assertFalse(self.grid.collides(self.bar, 3, -5))
        self.assertTrue(self.grid.collides(self.bar, -1, -1))
        self.assertTrue(self.grid.collides(self.bar, 7, -3))

    def test_occupied_cells_block(self):
        self.grid.grid[10, 5] = 3
        self.assertTrue(self.grid.collides(self.bar, 3, 10))
        self.assertFalse(self.grid.collides(self.bar, 3, 9))
        # Empty cells of the shape do not collide
        t = make_shape([[1, 1, 1], [0, 1, 0]])
        self.grid.grid[9, 4] = 1
        self.assertFalse(self.grid.collides(t, 4, 8))


class GridMergeAndClearTests(unittest.TestCase):
    def test_merge_conserves_cells_and_replaces_array(self):
        grid = GameGrid(10, 20)
        grid.grid[19, :5] = 2
        before = occupied(grid.grid)
        old = grid.grid
        shape = BASE_SHAPES[TetrominoType.T]
        grid.merge(shape, 4, 17)
        expected = before | {(4, 17), (5, 17), (6, 17), (5, 18)}
        self.assertEqual(occupied(grid.grid), expected)
        self.assertIsNot(grid.grid, old)
        self.assertEqual(int(grid.grid[17, 4]), int(TetrominoType.T))
        self.assertEqual(int(np.count_nonzero(old)), 5)

    def test_clear_k_full_rows(self):
        grid = GameGrid(4, 6)
        grid.grid[:] = np.array([
            [0, 0, 0, 0],
            [1, 0, 0, 0],
            [1, 1, 1, 1],
            [0, 2, 0, 0],
            [3, 3, 3, 3],
            [0, 0, 4, 0],
        ], dtype=np.int8)
        cleared = grid.clear_full_lines()
        self.assertEqual(cleared, 2)
        expected = np.array([
            [0, 0, 0, 0],
            [0, 0, 0, 0],
            [0, 0, 0, 0],
            [1, 0, 0, 0],
            [0, 2, 0, 0],
            [0, 0, 4, 0],
        ], dtype=np.int8)
        np.testing.assert_array_equal(grid.grid, expected)
        self.assertEqual(grid.grid.shape, (6, 4))

    def test_clear_without_full_rows(self):
        grid = GameGrid(4, 4)
        grid.grid[3, :3] = 1
        before = grid.clone_state()
        self.assertEqual(grid.clear_full_lines(), 0)
        np.testing.assert_array_equal(grid.grid, before)

    def test_clear_every_row(self):
        grid = GameGrid(3, 3)
        grid.grid[:] = 1
        self.assertEqual(grid.clear_full_lines(), 3)
        self.assertFalse(grid.grid.any())

    def test_reset_and_full_rows(self):
        grid = GameGrid(3, 3)
        grid.grid[1, :] = 5
        np.testing.assert_array_equal(grid.full_rows(), [1])
        grid.reset()
        self.assertFalse(grid.grid.any())


if __name__ == "__main__":
    unittest.main()
