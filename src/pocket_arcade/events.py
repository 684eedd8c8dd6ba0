"""Engine notifications and the synchronous bus that delivers them."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, fields
from typing import ClassVar

from pocket_arcade.grid import Cell

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Event:
    """Base class for everything an engine emits."""

    name: ClassVar[str] = "event"

    def to_dict(self) -> dict:
        """Serialize to a JSON-friendly dict tagged with the event name."""
        payload: dict = {"name": self.name}
        for f in fields(self):
            payload[f.name] = _jsonable(getattr(self, f.name))
        return payload


def _jsonable(value):
    if isinstance(value, tuple):
        return [_jsonable(v) for v in value]
    return value


# --- sequence game ---------------------------------------------------------


@dataclass(frozen=True)
class GameRestarted(Event):
    name: ClassVar[str] = "game_restarted"


@dataclass(frozen=True)
class SymbolLit(Event):
    name: ClassVar[str] = "symbol_lit"

    symbol_id: int
    lit_ms: int


@dataclass(frozen=True)
class SymbolUnlit(Event):
    name: ClassVar[str] = "symbol_unlit"

    symbol_id: int


@dataclass(frozen=True)
class SymbolPressed(Event):
    """An accepted player press, emitted before it is judged."""

    name: ClassVar[str] = "symbol_pressed"

    symbol_id: int


@dataclass(frozen=True)
class PlaybackFinished(Event):
    name: ClassVar[str] = "playback_finished"

    length: int


@dataclass(frozen=True)
class RoundFailed(Event):
    name: ClassVar[str] = "round_failed"

    score: int
    high_score: int


@dataclass(frozen=True)
class RoundAdvanced(Event):
    name: ClassVar[str] = "round_advanced"

    new_score: int


# --- snake game ------------------------------------------------------------


@dataclass(frozen=True)
class FoodEaten(Event):
    name: ClassVar[str] = "food_eaten"

    new_score: int
    new_interval_ms: int
    food: Cell | None


@dataclass(frozen=True)
class GameOver(Event):
    name: ClassVar[str] = "game_over"

    final_score: int
    high_score: int
    won: bool = False


@dataclass(frozen=True)
class TickApplied(Event):
    name: ClassVar[str] = "tick_applied"

    snake_body: tuple[Cell, ...]
    food: Cell | None


EventHandler = Callable[[Event], None]


@dataclass(frozen=True, eq=False)
class Subscription:
    """A handler registered for one event class, or for all events."""

    handler: EventHandler
    event_type: type[Event] | None = None

    def matches(self, event: Event) -> bool:
        return self.event_type is None or isinstance(event, self.event_type)


class EventBus:
    """Deterministic synchronous event bus.

    - dispatch order is subscription order
    - handler failures propagate to the publisher
    """

    def __init__(self) -> None:
        self._subscriptions: list[Subscription] = []

    def subscribe(
        self,
        handler: EventHandler,
        event_type: type[Event] | None = None,
    ) -> Subscription:
        sub = Subscription(handler=handler, event_type=event_type)
        self._subscriptions.append(sub)
        return sub

    def unsubscribe(self, subscription: Subscription) -> None:
        if subscription in self._subscriptions:
            self._subscriptions.remove(subscription)

    def clear(self) -> None:
        self._subscriptions.clear()

    def publish(self, event: Event) -> None:
        # Snapshot so handlers may unsubscribe while being dispatched.
        subscribers = [s for s in self._subscriptions if s.matches(event)]
        logger.debug("Publishing %s to %d handler(s).", event.name, len(subscribers))
        for sub in subscribers:
            sub.handler(event)

    def __len__(self) -> int:
        return len(self._subscriptions)
