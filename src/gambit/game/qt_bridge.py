"""Qt bridge: run scheduled game callbacks on the Qt event loop."""

from __future__ import annotations

from collections.abc import Callable

from PyQt6.QtCore import QObject, QTimer

from gambit.game.interfaces import IScheduler, ScheduledCall


class _QtCall(ScheduledCall):
    def __init__(
        self,
        delay_ms: int,
        callback: Callable[[], None],
        on_finished: Callable[[_QtCall], None],
        parent: QObject | None,
    ) -> None:
        self._callback = callback
        self._on_finished = on_finished
        self._cancelled = False
        self._done = False
        self._timer = QTimer(parent)
        self._timer.setSingleShot(True)
        self._timer.timeout.connect(self._fire)
        self._timer.start(delay_ms)

    def _fire(self) -> None:
        if self._cancelled or self._done:
            return
        self._done = True
        self._release()
        self._callback()

    def cancel(self) -> None:
        if self._done or self._cancelled:
            return
        self._cancelled = True
        self._timer.stop()
        self._release()

    def _release(self) -> None:
        self._timer.deleteLater()
        self._on_finished(self)

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def done(self) -> bool:
        return self._done


class QtScheduler(IScheduler):
    """Scheduler backed by single-shot ``QTimer`` objects.

    Callbacks run on the thread that owns the Qt event loop, which keeps
    the game controller single-threaded. Requires a running
    ``QApplication``.
    """

    __slots__ = ("_parent", "_live")

    def __init__(self, parent: QObject | None = None) -> None:
        self._parent = parent
        # Holds timers alive until they fire or are cancelled.
        self._live: set[_QtCall] = set()

    @property
    def pending_count(self) -> int:
        return len(self._live)

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> ScheduledCall:
        if delay_ms < 0:
            raise ValueError("delay_ms must be >= 0")
        call = _QtCall(delay_ms, callback, self._live.discard, self._parent)
        self._live.add(call)
        return call
