"""Deterministic virtual-time scheduler."""

from __future__ import annotations

import heapq
import itertools
from collections.abc import Callable

from gambit.game.interfaces import IScheduler, ScheduledCall


class _ManualCall(ScheduledCall):
    __slots__ = ("_callback", "_cancelled", "_done", "due_ms")

    def __init__(self, due_ms: int, callback: Callable[[], None]) -> None:
        self.due_ms = due_ms
        self._callback = callback
        self._cancelled = False
        self._done = False

    def cancel(self) -> None:
        if not self._done:
            self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def done(self) -> bool:
        return self._done

    def run(self) -> None:
        self._done = True
        self._callback()


class ManualScheduler(IScheduler):
    """Scheduler driven by an explicit clock.

    Nothing runs until the owner calls :meth:`advance` or
    :meth:`run_pending`. Callbacks fire in due-time order, ties in
    submission order. Suited to headless use and tests.
    """

    __slots__ = ("_now_ms", "_queue", "_counter")

    def __init__(self) -> None:
        self._now_ms = 0
        self._queue: list[tuple[int, int, _ManualCall]] = []
        self._counter = itertools.count()

    @property
    def now_ms(self) -> int:
        return self._now_ms

    @property
    def pending_count(self) -> int:
        return sum(1 for _, _, call in self._queue if call.pending)

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> ScheduledCall:
        if delay_ms < 0:
            raise ValueError("delay_ms must be >= 0")
        call = _ManualCall(self._now_ms + delay_ms, callback)
        heapq.heappush(self._queue, (call.due_ms, next(self._counter), call))
        return call

    def advance(self, ms: int) -> int:
        """Move the clock forward *ms* and run what became due.

        Callbacks scheduled while advancing also run if they fall due
        within the window. Returns the number of callbacks run.
        """
        if ms < 0:
            raise ValueError("Cannot move the clock backwards")
        deadline = self._now_ms + ms
        ran = 0
        while self._queue and self._queue[0][0] <= deadline:
            due_ms, _, call = heapq.heappop(self._queue)
            if not call.pending:
                continue
            self._now_ms = due_ms
            call.run()
            ran += 1
        self._now_ms = deadline
        return ran

    def run_pending(self) -> int:
        """Run every pending callback, including ones they schedule."""
        ran = 0
        while self._queue:
            due_ms = self._queue[0][0]
            ran += self.advance(max(0, due_ms - self._now_ms))
        return ran
