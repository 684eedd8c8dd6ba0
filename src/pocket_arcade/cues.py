"""Audio cue hints for presentation adapters.

Engines emit events whether or not sound is muted; an adapter looks up the
cue for each event and decides itself whether to play it.
"""

from __future__ import annotations

from dataclasses import dataclass

from pocket_arcade.events import Event, FoodEaten, GameOver, SymbolLit, SymbolPressed

TILE_BASE_HZ = 200.0
TILE_STEP_HZ = 100.0
FOOD_HZ = 400.0
GAME_OVER_HZ = 150.0
TONE_MS = 300


@dataclass(frozen=True)
class Cue:
    frequency_hz: float
    duration_ms: int = TONE_MS

    def to_dict(self) -> dict:
        return {"frequency_hz": self.frequency_hz, "duration_ms": self.duration_ms}


def tile_tone(symbol_id: int) -> float:
    """Pitch for a tile: each symbol sounds one step above the previous."""
    return TILE_BASE_HZ + TILE_STEP_HZ * symbol_id


def cue_for(event: Event) -> Cue | None:
    """Return the tone an event should sound, if any."""
    if isinstance(event, (SymbolLit, SymbolPressed)):
        return Cue(tile_tone(event.symbol_id))
    if isinstance(event, FoodEaten):
        return Cue(FOOD_HZ)
    if isinstance(event, GameOver):
        return Cue(GAME_OVER_HZ)
    return None
