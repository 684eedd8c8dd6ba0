"""Square board for the snake game."""

from __future__ import annotations

import enum

import numpy as np

Cell = tuple[int, int]


class CellType(enum.IntEnum):
    """Integer codes stored in the board array."""

    EMPTY = 0
    SNAKE = 1
    FOOD = 2


class Grid:
    """NumPy-backed ``size × size`` board.

    Cells are addressed as ``(x, y)`` with the origin at the top-left corner.
    The backing array is indexed ``[y, x]`` so rows stay rows.
    """

    def __init__(self, size: int = 20) -> None:
        if size < 4:
            raise ValueError("Grid size must be at least 4.")
        self.size = size
        self.cells = np.zeros((size, size), dtype=np.int8)

    def clear(self) -> None:
        """Reset all cells to empty."""
        self.cells[:] = CellType.EMPTY

    def in_bounds(self, x: int, y: int) -> bool:
        """Check whether a coordinate lies on the board."""
        return 0 <= x < self.size and 0 <= y < self.size

    def get(self, x: int, y: int) -> CellType:
        return CellType(self.cells[y, x])

    def set(self, x: int, y: int, cell_type: CellType) -> None:
        self.cells[y, x] = cell_type

    def empty_cells(self) -> list[Cell]:
        """Return every empty cell in row-major order."""
        ys, xs = np.where(self.cells == CellType.EMPTY)
        return list(zip(xs.tolist(), ys.tolist(), strict=True))
