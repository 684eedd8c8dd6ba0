"""Snake body and heading."""

from __future__ import annotations

import enum
from collections import deque

from pocket_arcade.grid import Cell


class Direction(enum.Enum):
    """Cardinal headings with ``(dx, dy)`` values; ``y`` grows downwards."""

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def opposite(self) -> Direction:
        return _OPPOSITES[self]

    @classmethod
    def parse(cls, name: str) -> Direction:
        """Look up a direction by case-insensitive name."""
        try:
            return cls[name.upper()]
        except KeyError:
            raise ValueError(f"Unknown direction: {name!r}.") from None


# Pairs that would cause an instant 180° reversal.
_OPPOSITES: dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


class Snake:
    """A snake stored as a deque of ``(x, y)`` cells.

    The head is ``body[0]``; the tail is ``body[-1]``.
    """

    def __init__(
        self,
        start: Cell,
        direction: Direction = Direction.RIGHT,
        length: int = 1,
    ) -> None:
        if length < 1:
            raise ValueError("Snake length must be at least 1.")
        dx, dy = direction.value
        x, y = start
        self.body: deque[Cell] = deque(
            (x - dx * i, y - dy * i) for i in range(length)
        )
        self.direction = direction

    @property
    def head(self) -> Cell:
        return self.body[0]

    def next_head(self) -> Cell:
        """Compute the next head position without moving."""
        dx, dy = self.direction.value
        x, y = self.head
        return x + dx, y + dy

    def advance(self, grow: bool = False) -> Cell | None:
        """Move one cell forward.

        Returns the vacated tail cell, or ``None`` if the snake grew.
        """
        self.body.appendleft(self.next_head())
        if grow:
            return None
        return self.body.pop()

    def occupies(self, cell: Cell) -> bool:
        return cell in self.body

    def to_dict(self) -> dict:
        return {
            "body": [list(seg) for seg in self.body],
            "direction": self.direction.name.lower(),
        }
