"""Plumbing shared by both engines: timers, events and command application."""

from __future__ import annotations

import logging

from pocket_arcade.commands import Command
from pocket_arcade.events import Event, EventBus
from pocket_arcade.scheduler import Callback, ManualScheduler, Scheduler, TimerHandle

logger = logging.getLogger(__name__)


class EngineBase:
    """Owns the scheduler handles and event bus of one engine instance.

    Every delayed step goes through :meth:`_schedule`, which remembers the
    handle and tags the callback with the current game generation.
    :meth:`_cancel_pending` cancels the handles and bumps the generation, so
    a callback from an earlier game is dropped even if a scheduler fires it
    late.
    """

    def __init__(self, scheduler: Scheduler | None = None) -> None:
        self.scheduler: Scheduler = (
            scheduler if scheduler is not None else ManualScheduler()
        )
        self.events = EventBus()
        self.closed = False
        self._handles: set[TimerHandle] = set()
        self._generation = 0
        self._outbox: list[Event] | None = None

    @property
    def pending_timers(self) -> int:
        return len(self._handles)

    def apply(self, command: Command) -> tuple[dict, list[Event]]:
        """Run *command* and return the new state plus the events it emitted."""
        outbox: list[Event] = []
        self._outbox = outbox
        try:
            self._dispatch(command)
        finally:
            self._outbox = None
        return self.get_state(), outbox

    def close(self) -> None:
        """Cancel all outstanding timers and stop accepting commands."""
        if self.closed:
            return
        self._cancel_pending()
        self.closed = True
        self.events.clear()
        logger.info("%s closed.", type(self).__name__)

    def get_state(self) -> dict:
        raise NotImplementedError

    def _dispatch(self, command: Command) -> None:
        raise NotImplementedError

    def _emit(self, event: Event) -> bool:
        """Publish *event*.

        Returns ``False`` when a handler restarted or closed the engine, in
        which case the caller must not continue with the old game's work.
        """
        generation = self._generation
        if self._outbox is not None:
            self._outbox.append(event)
        self.events.publish(event)
        return generation == self._generation and not self.closed

    def _schedule(self, delay_ms: float, callback: Callback) -> TimerHandle:
        generation = self._generation
        handle: TimerHandle | None = None

        def run() -> None:
            self._handles.discard(handle)
            if self.closed or generation != self._generation:
                logger.debug("Dropped stale timer from generation %d.", generation)
                return
            callback()

        handle = self.scheduler.schedule(delay_ms, run)
        self._handles.add(handle)
        return handle

    def _cancel_pending(self) -> None:
        for handle in list(self._handles):
            handle.cancel()
        self._handles.clear()
        self._generation += 1
