"""Sequence-memory game: watch the pattern, then repeat it."""

from __future__ import annotations

import enum
import logging

from pocket_arcade.base import EngineBase
from pocket_arcade.commands import Command, StartGame, SubmitSymbol
from pocket_arcade.config import SequenceConfig
from pocket_arcade.events import (
    GameRestarted,
    PlaybackFinished,
    RoundAdvanced,
    RoundFailed,
    SymbolLit,
    SymbolPressed,
    SymbolUnlit,
)
from pocket_arcade.rng import RandomSource, draw_index, make_rng
from pocket_arcade.scheduler import Scheduler

logger = logging.getLogger(__name__)


class SequencePhase(enum.Enum):
    IDLE = "idle"
    PLAYING_BACK = "playing_back"
    AWAITING_INPUT = "awaiting_input"
    FAILED = "failed"


class SequenceGameEngine(EngineBase):
    """Rule engine for the sequence-memory game.

    The engine demonstrates ``sequence`` one symbol at a time through
    :class:`SymbolLit` / :class:`SymbolUnlit` events, then waits for the
    player to repeat it with :meth:`submit_symbol`. A full correct replay
    scores a point and extends the sequence by one symbol; a wrong symbol
    fails the round and, after ``failure_delay_ms``, starts a new game.

    Commands that arrive in the wrong phase are ignored.
    """

    def __init__(
        self,
        config: SequenceConfig | None = None,
        scheduler: Scheduler | None = None,
        rng: RandomSource | None = None,
    ) -> None:
        super().__init__(scheduler)
        self.config = config or SequenceConfig()
        self.rng: RandomSource = rng if rng is not None else make_rng(self.config.seed)
        self.phase = SequencePhase.IDLE
        self._sequence: list[int] = []
        self._player_input: list[int] = []
        self.score = 0
        self.high_score = 0

    @property
    def sequence(self) -> tuple[int, ...]:
        return tuple(self._sequence)

    @property
    def player_input(self) -> tuple[int, ...]:
        return tuple(self._player_input)

    # --- commands ----------------------------------------------------------

    def start(self) -> None:
        """Begin a fresh game with a single random symbol."""
        if self.closed:
            return
        self._cancel_pending()
        self._sequence = [self._random_symbol()]
        self._player_input = []
        self.score = 0
        logger.info("Sequence game started.")
        if self._emit(GameRestarted()):
            self._begin_playback()

    def submit_symbol(self, symbol_id: int) -> None:
        """Record one player press and judge it against the sequence."""
        if self.closed or self.phase != SequencePhase.AWAITING_INPUT:
            logger.debug("Ignored symbol %s during %s.", symbol_id, self.phase.value)
            return
        if not 0 <= symbol_id < self.config.alphabet_size:
            logger.debug("Ignored out-of-range symbol %s.", symbol_id)
            return

        self._player_input.append(symbol_id)
        if not self._emit(SymbolPressed(symbol_id)):
            return
        position = len(self._player_input) - 1

        if symbol_id != self._sequence[position]:
            self._fail()
        elif len(self._player_input) == len(self._sequence):
            self._advance()

    # --- transitions -------------------------------------------------------

    def _fail(self) -> None:
        self.phase = SequencePhase.FAILED
        self.high_score = max(self.score, self.high_score)
        logger.info(
            "Round failed at length %d with score %d.",
            len(self._sequence), self.score,
        )
        # Armed before the event so a handler that restarts the game cancels it.
        self._schedule(self.config.failure_delay_ms, self.start)
        self._emit(RoundFailed(score=self.score, high_score=self.high_score))

    def _advance(self) -> None:
        self.score += 1
        self._player_input = []
        # Hold input off until the extended sequence has been shown.
        self.phase = SequencePhase.PLAYING_BACK
        self._schedule(self.config.success_delay_ms, self._extend)
        self._emit(RoundAdvanced(new_score=self.score))

    def _extend(self) -> None:
        self._sequence.append(self._random_symbol())
        self._begin_playback()

    def _begin_playback(self) -> None:
        self.phase = SequencePhase.PLAYING_BACK
        self._schedule(self.config.lead_in_ms, lambda: self._light(0))

    def _light(self, index: int) -> None:
        symbol = self._sequence[index]
        if self._emit(SymbolLit(symbol_id=symbol, lit_ms=self.config.lit_ms)):
            self._schedule(self.config.lit_ms, lambda: self._unlight(index))

    def _unlight(self, index: int) -> None:
        if not self._emit(SymbolUnlit(symbol_id=self._sequence[index])):
            return
        if index + 1 < len(self._sequence):
            self._schedule(self.config.gap_ms, lambda: self._light(index + 1))
            return
        self.phase = SequencePhase.AWAITING_INPUT
        self._emit(PlaybackFinished(length=len(self._sequence)))

    def _random_symbol(self) -> int:
        return draw_index(self.rng, self.config.alphabet_size)

    # --- interface ---------------------------------------------------------

    def _dispatch(self, command: Command) -> None:
        if isinstance(command, StartGame):
            self.start()
        elif isinstance(command, SubmitSymbol):
            self.submit_symbol(command.symbol_id)
        else:
            raise TypeError(
                f"{type(command).__name__} is not a sequence game command."
            )

    def get_state(self) -> dict:
        """Return a serializable snapshot of the game."""
        return {
            "game": "sequence",
            "phase": self.phase.value,
            "sequence": list(self._sequence),
            "player_input": list(self._player_input),
            "score": self.score,
            "high_score": self.high_score,
            "alphabet_size": self.config.alphabet_size,
        }
