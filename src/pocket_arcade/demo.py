"""Headless autopilot runs on a virtual clock."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from pocket_arcade.config import SequenceConfig, SnakeConfig
from pocket_arcade.scheduler import ManualScheduler
from pocket_arcade.sequence_engine import SequenceGameEngine, SequencePhase
from pocket_arcade.snake import Direction
from pocket_arcade.snake_engine import SnakeGameEngine, SnakePhase

logger = logging.getLogger(__name__)


@dataclass
class DemoResult:
    """Outcome of one autopilot game."""

    game: str
    score: int
    high_score: int
    steps: int
    elapsed_ms: float
    won: bool = False

    def summary(self) -> str:
        return (
            f"{self.game}: score={self.score} high_score={self.high_score} "
            f"steps={self.steps} elapsed={self.elapsed_ms / 1000:.1f}s "
            f"won={self.won}"
        )


def _step_to_next_timer(scheduler: ManualScheduler) -> bool:
    due = scheduler.next_due()
    if due is None:
        return False
    scheduler.advance(due - scheduler.now_ms)
    return True


def choose_direction(engine: SnakeGameEngine) -> Direction:
    """Greedy pick: the safe heading that gets closest to the food."""
    current = engine.direction
    hx, hy = engine.snake.head
    food = engine.food

    best: tuple[int, Direction] | None = None
    for direction in Direction:
        if direction == current.opposite:
            continue
        dx, dy = direction.value
        nx, ny = hx + dx, hy + dy
        if not engine.grid.in_bounds(nx, ny) or engine.snake.occupies((nx, ny)):
            continue
        distance = abs(food[0] - nx) + abs(food[1] - ny) if food else 0
        if best is None or distance < best[0]:
            best = (distance, direction)
    return best[1] if best else current


def run_snake_demo(
    config: SnakeConfig | None = None, max_ticks: int = 1_000,
) -> DemoResult:
    """Play snake with the greedy autopilot until it dies or *max_ticks*."""
    scheduler = ManualScheduler()
    engine = SnakeGameEngine(config, scheduler=scheduler)
    engine.start()
    while engine.phase == SnakePhase.RUNNING and engine.tick_count < max_ticks:
        engine.set_direction(choose_direction(engine))
        if not _step_to_next_timer(scheduler):
            break
    result = DemoResult(
        game="snake",
        score=engine.score,
        high_score=max(engine.high_score, engine.score),
        steps=engine.tick_count,
        elapsed_ms=scheduler.now_ms,
        won=engine.won,
    )
    engine.close()
    return result


def run_sequence_demo(
    config: SequenceConfig | None = None, rounds: int = 10,
) -> DemoResult:
    """Replay the pattern perfectly for *rounds* rounds, then miss once."""
    scheduler = ManualScheduler()
    engine = SequenceGameEngine(config, scheduler=scheduler)
    engine.start()
    alphabet = engine.config.alphabet_size
    while True:
        while engine.phase != SequencePhase.AWAITING_INPUT:
            if not _step_to_next_timer(scheduler):
                raise RuntimeError("Sequence playback stalled.")
        if engine.score >= rounds:
            if alphabet > 1:
                expected = engine.sequence[0]
                engine.submit_symbol((expected + 1) % alphabet)
            break
        for symbol in engine.sequence:
            engine.submit_symbol(symbol)

    result = DemoResult(
        game="sequence",
        score=engine.score,
        high_score=max(engine.high_score, engine.score),
        steps=len(engine.sequence),
        elapsed_ms=scheduler.now_ms,
    )
    engine.close()
    logger.info("Sequence demo finished: %s", result.summary())
    return result
