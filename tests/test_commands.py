"""Tests for command parsing."""

import pytest

from pocket_arcade.commands import (
    ChangeDirection,
    StartGame,
    SubmitSymbol,
    parse_command,
)
from pocket_arcade.snake import Direction


class TestParseCommand:
    def test_start(self):
        assert parse_command({"command": "start"}) == StartGame()

    def test_submit(self):
        assert parse_command({"command": "submit", "symbol": 2}) == SubmitSymbol(2)

    def test_direction_case_insensitive(self):
        assert parse_command({"command": "direction", "direction": "UP"}) == (
            ChangeDirection(Direction.UP)
        )

    @pytest.mark.parametrize("message", [
        {},
        {"command": 1},
        {"command": "jump"},
        {"command": "submit"},
        {"command": "submit", "symbol": "2"},
        {"command": "submit", "symbol": True},
        {"command": "direction"},
        {"command": "direction", "direction": "north"},
    ])
    def test_malformed_returns_none(self, message):
        assert parse_command(message) is None
