"""Food placement for the snake game."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pocket_arcade.grid import Cell, CellType
from pocket_arcade.rng import RandomSource, draw_index

if TYPE_CHECKING:
    from pocket_arcade.grid import Grid

logger = logging.getLogger(__name__)


class FoodSpawner:
    """Keeps the single food item on a free board cell.

    Placement draws from the list of empty cells, so it terminates on every
    board; a full board simply yields no food.
    """

    def __init__(self, grid: Grid, rng: RandomSource) -> None:
        self.grid = grid
        self.rng = rng
        self.position: Cell | None = None

    def spawn(self) -> Cell | None:
        """Move the food to a uniformly random empty cell.

        Returns the new position, or ``None`` when no cell is free.
        """
        self.remove()
        empty = self.grid.empty_cells()
        if not empty:
            logger.info("No empty cells left for food placement.")
            return None
        return self.place(empty[draw_index(self.rng, len(empty))])

    def place(self, cell: Cell) -> Cell:
        """Put the food on a specific empty cell."""
        x, y = cell
        if cell != self.position and self.grid.get(x, y) != CellType.EMPTY:
            raise ValueError(f"Cell {cell} is not empty.")
        self.remove()
        self.grid.set(x, y, CellType.FOOD)
        self.position = cell
        return cell

    def remove(self) -> None:
        """Take the food off the board, if any."""
        if self.position is None:
            return
        x, y = self.position
        if self.grid.get(x, y) == CellType.FOOD:
            self.grid.set(x, y, CellType.EMPTY)
        self.position = None
