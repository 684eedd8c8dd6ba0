"""Pocket Arcade: rule engines for the sequence-memory and snake games."""

from pocket_arcade.commands import ChangeDirection, StartGame, SubmitSymbol
from pocket_arcade.config import ArcadeConfig, SequenceConfig, SnakeConfig
from pocket_arcade.events import EventBus
from pocket_arcade.grid import Grid
from pocket_arcade.scheduler import AsyncioScheduler, ManualScheduler, TimerHandle
from pocket_arcade.sequence_engine import SequenceGameEngine, SequencePhase
from pocket_arcade.snake import Direction, Snake
from pocket_arcade.snake_engine import SnakeGameEngine, SnakePhase

__all__ = [
    "ArcadeConfig",
    "AsyncioScheduler",
    "ChangeDirection",
    "Direction",
    "EventBus",
    "Grid",
    "ManualScheduler",
    "SequenceConfig",
    "SequenceGameEngine",
    "SequencePhase",
    "Snake",
    "SnakeConfig",
    "SnakeGameEngine",
    "SnakePhase",
    "StartGame",
    "SubmitSymbol",
    "TimerHandle",
]
