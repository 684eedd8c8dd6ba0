"""Timer abstraction driving playback steps and snake ticks.

Engines never sleep. They ask a :class:`Scheduler` to call them back after a
delay and keep the returned :class:`TimerHandle` so a restart can cancel work
left over from the previous game.
"""

from __future__ import annotations

import asyncio
import heapq
import itertools
import logging
from collections.abc import Callable
from typing import Protocol

logger = logging.getLogger(__name__)

Callback = Callable[[], None]


class TimerHandle:
    """Cancellation handle for one scheduled callback."""

    __slots__ = ("_callback", "_cancelled", "_on_cancel", "due_ms")

    def __init__(
        self,
        callback: Callback,
        due_ms: float = 0.0,
        on_cancel: Callback | None = None,
    ) -> None:
        self._callback: Callback | None = callback
        self._cancelled = False
        self._on_cancel = on_cancel
        self.due_ms = due_ms

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        """Prevent the callback from running. Safe to call repeatedly."""
        if self._cancelled:
            return
        self._cancelled = True
        self._callback = None
        if self._on_cancel is not None:
            self._on_cancel()
            self._on_cancel = None

    def _run(self) -> None:
        callback = self._callback
        self._callback = None
        if callback is not None and not self._cancelled:
            callback()


class Scheduler(Protocol):
    """Anything that can run a callback after ``delay_ms`` milliseconds."""

    def schedule(self, delay_ms: float, callback: Callback) -> TimerHandle: ...


class ManualScheduler:
    """Deterministic scheduler with a virtual millisecond clock.

    Nothing runs until :meth:`advance` or :meth:`run_until_idle` is called.
    Due callbacks fire one at a time in due order, ties broken by the order
    they were scheduled; callbacks may schedule further work, which fires in
    the same call if it falls due within the advanced window.
    """

    def __init__(self) -> None:
        self.now_ms = 0.0
        self._queue: list[tuple[float, int, TimerHandle]] = []
        self._counter = itertools.count()

    def schedule(self, delay_ms: float, callback: Callback) -> TimerHandle:
        if delay_ms < 0:
            raise ValueError("delay_ms must be non-negative.")
        handle = TimerHandle(callback, due_ms=self.now_ms + delay_ms)
        heapq.heappush(self._queue, (handle.due_ms, next(self._counter), handle))
        return handle

    @property
    def pending(self) -> int:
        """Number of scheduled callbacks that have not been cancelled."""
        return sum(1 for _, _, h in self._queue if not h.cancelled)

    def next_due(self) -> float | None:
        self._drop_cancelled()
        return self._queue[0][0] if self._queue else None

    def advance(self, ms: float) -> int:
        """Move the clock forward by *ms*, firing everything that falls due.

        Returns the number of callbacks run.
        """
        if ms < 0:
            raise ValueError("Cannot move the clock backwards.")
        target = self.now_ms + ms
        fired = 0
        while True:
            due = self.next_due()
            if due is None or due > target:
                break
            _, _, handle = heapq.heappop(self._queue)
            self.now_ms = due
            handle._run()
            fired += 1
        self.now_ms = target
        return fired

    def run_until_idle(self, max_callbacks: int = 10_000) -> int:
        """Fire callbacks until the queue is empty.

        Raises ``RuntimeError`` if work keeps rescheduling itself past
        *max_callbacks*, which is what a running snake game does.
        """
        fired = 0
        while (due := self.next_due()) is not None:
            if fired >= max_callbacks:
                raise RuntimeError(
                    f"Scheduler still busy after {max_callbacks} callbacks."
                )
            fired += self.advance(due - self.now_ms)
        return fired

    def _drop_cancelled(self) -> None:
        while self._queue and self._queue[0][2].cancelled:
            heapq.heappop(self._queue)


class AsyncioScheduler:
    """Scheduler backed by :meth:`asyncio.AbstractEventLoop.call_later`.

    Callbacks run on the event loop thread, so a tick or playback step never
    interleaves with a command handled by the same loop.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def schedule(self, delay_ms: float, callback: Callback) -> TimerHandle:
        if delay_ms < 0:
            raise ValueError("delay_ms must be non-negative.")
        handle = TimerHandle(callback, due_ms=self.loop.time() * 1000.0 + delay_ms)
        timer = self.loop.call_later(delay_ms / 1000.0, self._fire, handle)
        # Cancelling our handle must also drop the loop timer.
        handle._on_cancel = timer.cancel
        return handle

    @staticmethod
    def _fire(handle: TimerHandle) -> None:
        try:
            handle._run()
        except Exception:
            logger.exception("Scheduled callback failed.")
