"""Tests for the Grid module."""

import numpy as np
import pytest

from pocket_arcade.grid import CellType, Grid


class TestGridInit:
    def test_default_size(self):
        grid = Grid()
        assert grid.size == 20
        assert grid.cells.shape == (20, 20)

    def test_minimum_size_enforced(self):
        with pytest.raises(ValueError, match="at least 4"):
            Grid(size=3)

    def test_all_cells_start_empty(self):
        grid = Grid(size=5)
        assert np.all(grid.cells == CellType.EMPTY)


class TestGridOperations:
    def test_set_and_get_use_xy(self):
        grid = Grid(size=5)
        grid.set(3, 1, CellType.SNAKE)
        assert grid.get(3, 1) == CellType.SNAKE
        # Backing array is indexed [y, x].
        assert grid.cells[1, 3] == CellType.SNAKE
        assert grid.get(1, 3) == CellType.EMPTY

    def test_clear(self):
        grid = Grid(size=5)
        grid.set(0, 0, CellType.SNAKE)
        grid.set(1, 1, CellType.FOOD)
        grid.clear()
        assert np.all(grid.cells == CellType.EMPTY)

    def test_in_bounds(self):
        grid = Grid(size=5)
        assert grid.in_bounds(0, 0)
        assert grid.in_bounds(4, 4)
        assert not grid.in_bounds(-1, 0)
        assert not grid.in_bounds(0, 5)
        assert not grid.in_bounds(5, 0)

    def test_empty_cells(self):
        grid = Grid(size=4)
        assert len(grid.empty_cells()) == 16
        grid.set(0, 0, CellType.SNAKE)
        grid.set(2, 1, CellType.FOOD)
        empty = grid.empty_cells()
        assert len(empty) == 14
        assert (0, 0) not in empty
        assert (2, 1) not in empty
        assert (1, 2) in empty

    def test_empty_cells_row_major(self):
        grid = Grid(size=4)
        assert grid.empty_cells()[:5] == [(0, 0), (1, 0), (2, 0), (3, 0), (0, 1)]

