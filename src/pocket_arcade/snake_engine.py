"""Tick-driven snake game engine composing grid, snake and food logic."""

from __future__ import annotations

import enum
import logging

from pocket_arcade.base import EngineBase
from pocket_arcade.commands import ChangeDirection, Command, StartGame
from pocket_arcade.config import SnakeConfig
from pocket_arcade.events import FoodEaten, GameOver, TickApplied
from pocket_arcade.food import FoodSpawner
from pocket_arcade.grid import Cell, CellType, Grid
from pocket_arcade.rng import RandomSource, make_rng
from pocket_arcade.scheduler import Scheduler
from pocket_arcade.snake import Direction, Snake

logger = logging.getLogger(__name__)


class SnakePhase(enum.Enum):
    NOT_STARTED = "not_started"
    RUNNING = "running"
    GAME_OVER = "game_over"


class SnakeGameEngine(EngineBase):
    """Single-snake engine advanced one :meth:`tick` at a time.

    While running, the engine keeps a tick timer armed on its scheduler at
    the current ``tick_interval_ms``; each eaten food shortens the interval
    for the following ticks. :meth:`tick` may also be called directly.
    """

    def __init__(
        self,
        config: SnakeConfig | None = None,
        scheduler: Scheduler | None = None,
        rng: RandomSource | None = None,
    ) -> None:
        super().__init__(scheduler)
        self.config = config or SnakeConfig()
        self.rng: RandomSource = rng if rng is not None else make_rng(self.config.seed)
        self.grid = Grid(self.config.grid_size)
        self.snake = Snake(self.config.effective_start)
        self.food_spawner = FoodSpawner(self.grid, self.rng)
        self._paint_snake()

        self.phase = SnakePhase.NOT_STARTED
        self.pending_direction: Direction | None = None
        self.score = 0
        self.high_score = 0
        self.tick_interval_ms = self.config.initial_tick_ms
        self.tick_count = 0
        self.won = False

    @property
    def direction(self) -> Direction:
        return self.snake.direction

    @property
    def snake_body(self) -> tuple[Cell, ...]:
        return tuple(self.snake.body)

    @property
    def food(self) -> Cell | None:
        return self.food_spawner.position

    # --- commands ----------------------------------------------------------

    def start(self) -> None:
        """Reset the board and start ticking."""
        if self.closed:
            return
        self._cancel_pending()
        self.grid.clear()
        self.food_spawner.position = None
        self.snake = Snake(self.config.effective_start, Direction.RIGHT)
        self._paint_snake()
        self.food_spawner.spawn()

        self.pending_direction = None
        self.score = 0
        self.tick_interval_ms = self.config.initial_tick_ms
        self.tick_count = 0
        self.won = False
        self.phase = SnakePhase.RUNNING
        logger.info("Snake game started at %s.", self.snake.head)
        self._arm_tick()

    def set_direction(self, direction: Direction) -> None:
        """Queue a turn for the next tick, ignoring 180° reversals.

        Reversal is judged against the heading the snake is moving in, so a
        later turn before the same tick replaces the queued one safely.
        """
        if self.closed or self.phase != SnakePhase.RUNNING:
            return
        if direction == self.snake.direction.opposite:
            logger.debug("Ignored reversal to %s.", direction.name)
            return
        self.pending_direction = direction

    def tick(self) -> None:
        """Advance the snake by one cell."""
        if self.closed or self.phase != SnakePhase.RUNNING:
            return

        if self.pending_direction is not None:
            self.snake.direction = self.pending_direction
            self.pending_direction = None

        nx, ny = self.snake.next_head()

        # --- wall check, then body check (tail included) ---
        if not self.grid.in_bounds(nx, ny):
            self._end_game(won=False)
            return
        if self.grid.get(nx, ny) == CellType.SNAKE:
            self._end_game(won=False)
            return

        ate = (nx, ny) == self.food_spawner.position
        if ate:
            self.food_spawner.remove()

        vacated = self.snake.advance(grow=ate)
        self.grid.set(nx, ny, CellType.SNAKE)
        if vacated is not None:
            self.grid.set(vacated[0], vacated[1], CellType.EMPTY)
        self.tick_count += 1

        if ate:
            self.score += 1
            self.tick_interval_ms = max(
                self.config.min_tick_ms,
                self.tick_interval_ms - self.config.tick_decrement_ms,
            )
            food = self.food_spawner.spawn()
            if not self._emit(FoodEaten(
                new_score=self.score,
                new_interval_ms=self.tick_interval_ms,
                food=food,
            )):
                return

        if not self._emit(TickApplied(snake_body=self.snake_body, food=self.food)):
            return

        if ate and self.food is None:
            # The snake covers the whole board.
            self._end_game(won=True)

    # --- internals ---------------------------------------------------------

    def _arm_tick(self) -> None:
        self._schedule(self.tick_interval_ms, self._on_tick_timer)

    def _on_tick_timer(self) -> None:
        generation = self._generation
        self.tick()
        # A game ended or restarted during the tick arms its own timer.
        if generation == self._generation and self.phase == SnakePhase.RUNNING:
            self._arm_tick()

    def _end_game(self, won: bool) -> None:
        self._cancel_pending()
        self.phase = SnakePhase.GAME_OVER
        self.won = won
        self.high_score = max(self.score, self.high_score)
        logger.info(
            "Snake game over after %d ticks with score %d (won=%s).",
            self.tick_count, self.score, won,
        )
        self._emit(GameOver(
            final_score=self.score, high_score=self.high_score, won=won,
        ))

    def _paint_snake(self) -> None:
        for x, y in self.snake.body:
            self.grid.set(x, y, CellType.SNAKE)

    def _dispatch(self, command: Command) -> None:
        if isinstance(command, StartGame):
            self.start()
        elif isinstance(command, ChangeDirection):
            self.set_direction(command.direction)
        else:
            raise TypeError(f"{type(command).__name__} is not a snake game command.")

    def get_state(self) -> dict:
        """Return the full, serializable game state."""
        return {
            "game": "snake",
            "phase": self.phase.value,
            "snake": self.snake.to_dict()["body"],
            "direction": self.direction.name.lower(),
            "pending_direction": (
                self.pending_direction.name.lower()
                if self.pending_direction else None
            ),
            "food": list(self.food) if self.food else None,
            "score": self.score,
            "high_score": self.high_score,
            "tick_interval_ms": self.tick_interval_ms,
            "tick": self.tick_count,
            "grid_size": self.grid.size,
            "won": self.won,
        }
