"""Shared test helpers."""

from __future__ import annotations

import pytest

from pocket_arcade.scheduler import ManualScheduler, TimerHandle


class ScriptedRandom:
    """Random source that replays a fixed list of draws.

    Once the script runs out it keeps returning *fallback*.
    """

    def __init__(self, values: list[int], fallback: int = 0) -> None:
        self.values = list(values)
        self.fallback = fallback
        self.calls: list[tuple[int, int]] = []

    def integers(self, low: int, high: int) -> int:
        self.calls.append((low, high))
        value = self.values.pop(0) if self.values else self.fallback
        if not low <= value < high:
            raise ValueError(f"Scripted value {value} outside [{low}, {high}).")
        return value


class LateScheduler:
    """Scheduler that ignores cancellation.

    Every callback is kept in :attr:`callbacks` and only runs when a test
    calls it, which lets a test deliver a timer after the engine cancelled it.
    """

    def __init__(self) -> None:
        self.callbacks: list = []

    def schedule(self, delay_ms: float, callback) -> TimerHandle:
        self.callbacks.append(callback)
        return TimerHandle(callback, due_ms=delay_ms)


@pytest.fixture()
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture()
def scripted():
    """Factory for :class:`ScriptedRandom` sources."""
    return ScriptedRandom


@pytest.fixture()
def late_scheduler() -> LateScheduler:
    return LateScheduler()
