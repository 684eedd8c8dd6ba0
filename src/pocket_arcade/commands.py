"""Input commands accepted by the engines' ``apply`` method."""

from __future__ import annotations

from dataclasses import dataclass

from pocket_arcade.snake import Direction


@dataclass(frozen=True)
class Command:
    """Base class for engine commands."""


@dataclass(frozen=True)
class StartGame(Command):
    """Start a fresh game, discarding any game in progress."""


@dataclass(frozen=True)
class SubmitSymbol(Command):
    symbol_id: int


@dataclass(frozen=True)
class ChangeDirection(Command):
    direction: Direction


def parse_command(message: dict) -> Command | None:
    """Build a command from a client message, or ``None`` if malformed.

    Accepted shapes::

        {"command": "start"}
        {"command": "submit", "symbol": 2}
        {"command": "direction", "direction": "up"}
    """
    kind = message.get("command")
    if not isinstance(kind, str):
        return None
    kind = kind.lower()
    if kind == "start":
        return StartGame()
    if kind == "submit":
        symbol = message.get("symbol")
        # bool is an int subclass; a JSON true is not a tile.
        if isinstance(symbol, bool) or not isinstance(symbol, int):
            return None
        return SubmitSymbol(symbol)
    if kind == "direction":
        name = message.get("direction")
        if not isinstance(name, str):
            return None
        try:
            return ChangeDirection(Direction.parse(name))
        except ValueError:
            return None
    return None
