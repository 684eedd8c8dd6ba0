"""Tunable constants for both games."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SequenceConfig:
    """Timing and alphabet for the sequence-memory game.

    Playback waits ``lead_in_ms`` before the first symbol and ``gap_ms``
    before each later one; every symbol stays lit for ``lit_ms``.
    """

    alphabet_size: int = 4
    lead_in_ms: int = 500
    lit_ms: int = 300
    gap_ms: int = 500
    success_delay_ms: int = 1000
    failure_delay_ms: int = 1000
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.alphabet_size < 1:
            raise ValueError("alphabet_size must be at least 1.")
        for name in (
            "lead_in_ms", "lit_ms", "gap_ms",
            "success_delay_ms", "failure_delay_ms",
        ):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative.")


@dataclass(frozen=True)
class SnakeConfig:
    """Board and speed settings for the snake game."""

    grid_size: int = 20
    initial_tick_ms: int = 150
    tick_decrement_ms: int = 5
    min_tick_ms: int = 50
    start_cell: tuple[int, int] | None = None
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.grid_size < 4:
            raise ValueError("grid_size must be at least 4.")
        if self.min_tick_ms < 1:
            raise ValueError("min_tick_ms must be at least 1.")
        if self.initial_tick_ms < self.min_tick_ms:
            raise ValueError("initial_tick_ms must be >= min_tick_ms.")
        if self.tick_decrement_ms < 0:
            raise ValueError("tick_decrement_ms must be non-negative.")
        if self.start_cell is not None:
            x, y = self.start_cell
            if not (0 <= x < self.grid_size and 0 <= y < self.grid_size):
                raise ValueError("start_cell must lie inside the grid.")

    @property
    def effective_start(self) -> tuple[int, int]:
        if self.start_cell is not None:
            return self.start_cell
        return self.grid_size // 2, self.grid_size // 2


@dataclass(frozen=True)
class ArcadeConfig:
    """Configuration for both engines, with JSON round-tripping."""

    sequence: SequenceConfig = field(default_factory=SequenceConfig)
    snake: SnakeConfig = field(default_factory=SnakeConfig)

    def to_dict(self) -> dict:
        return asdict(self)

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def from_dict(cls, raw: dict) -> ArcadeConfig:
        snake_data = dict(raw.get("snake", {}))
        if snake_data.get("start_cell") is not None:
            snake_data["start_cell"] = tuple(snake_data["start_cell"])
        return cls(
            sequence=SequenceConfig(**raw.get("sequence", {})),
            snake=SnakeConfig(**snake_data),
        )

    @classmethod
    def load(cls, path: str | Path) -> ArcadeConfig:
        """Load config from a JSON file."""
        return cls.from_dict(json.loads(Path(path).read_text()))
