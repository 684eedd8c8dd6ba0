"""Tests for events and the EventBus."""

import json

import pytest

from pocket_arcade.events import (
    EventBus,
    FoodEaten,
    GameOver,
    GameRestarted,
    SymbolLit,
    TickApplied,
)


class TestEventSerialization:
    def test_to_dict_includes_name(self):
        assert SymbolLit(symbol_id=2, lit_ms=300).to_dict() == {
            "name": "symbol_lit", "symbol_id": 2, "lit_ms": 300,
        }

    def test_cells_become_lists(self):
        event = TickApplied(snake_body=((1, 2), (0, 2)), food=(5, 5))
        d = event.to_dict()
        assert d["snake_body"] == [[1, 2], [0, 2]]
        assert d["food"] == [5, 5]
        json.dumps(d)

    def test_missing_food_serializes(self):
        d = FoodEaten(new_score=3, new_interval_ms=135, food=None).to_dict()
        assert d["food"] is None

    def test_events_are_frozen(self):
        event = GameOver(final_score=1, high_score=2)
        with pytest.raises(AttributeError):
            event.final_score = 5


class TestEventBus:
    def test_dispatch_in_subscription_order(self):
        bus = EventBus()
        calls = []
        bus.subscribe(lambda e: calls.append("a"))
        bus.subscribe(lambda e: calls.append("b"))
        bus.publish(GameRestarted())
        assert calls == ["a", "b"]

    def test_typed_subscription_filters(self):
        bus = EventBus()
        lit = []
        bus.subscribe(lit.append, SymbolLit)
        bus.publish(GameRestarted())
        bus.publish(SymbolLit(symbol_id=0, lit_ms=300))
        assert lit == [SymbolLit(symbol_id=0, lit_ms=300)]

    def test_unsubscribe(self):
        bus = EventBus()
        calls = []
        sub = bus.subscribe(calls.append)
        bus.unsubscribe(sub)
        bus.publish(GameRestarted())
        assert calls == []
        assert len(bus) == 0

    def test_same_handler_twice_unsubscribes_one(self):
        bus = EventBus()
        calls = []
        first = bus.subscribe(calls.append)
        bus.subscribe(calls.append)
        bus.unsubscribe(first)
        bus.publish(GameRestarted())
        assert len(calls) == 1

    def test_handler_errors_propagate(self):
        bus = EventBus()

        def boom(event):
            raise RuntimeError("handler failed")

        bus.subscribe(boom)
        with pytest.raises(RuntimeError, match="handler failed"):
            bus.publish(GameRestarted())
