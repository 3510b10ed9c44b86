"""Tests for the Qt event-loop scheduler."""

from __future__ import annotations

import pytest
from PyQt6.QtTest import QTest

from gambit.core.enums import Color
from gambit.game.controller import GameController
from gambit.game.interfaces import Difficulty, GameMode
from gambit.game.qt_bridge import QtScheduler
from gambit.game.settings import GameSettings


@pytest.mark.usefixtures("qapp")
class TestQtScheduler:
    def test_callback_runs_on_event_loop(self) -> None:
        scheduler = QtScheduler()
        calls: list[str] = []
        call = scheduler.call_later(10, lambda: calls.append("fired"))
        assert calls == []
        assert scheduler.pending_count == 1

        QTest.qWait(100)
        assert calls == ["fired"]
        assert call.done
        assert scheduler.pending_count == 0

    def test_cancel(self) -> None:
        scheduler = QtScheduler()
        calls: list[str] = []
        call = scheduler.call_later(10, lambda: calls.append("fired"))
        call.cancel()
        QTest.qWait(50)
        assert calls == []
        assert call.cancelled
        assert scheduler.pending_count == 0

    def test_dropped_handle_still_fires(self) -> None:
        scheduler = QtScheduler()
        calls: list[int] = []
        for i in range(3):
            scheduler.call_later(5 * i, lambda i=i: calls.append(i))
        QTest.qWait(100)
        assert calls == [0, 1, 2]

    def test_negative_delay_rejected(self) -> None:
        with pytest.raises(ValueError):
            QtScheduler().call_later(-1, lambda: None)

    def test_drives_engine_turn(self) -> None:
        ctrl = GameController(QtScheduler())
        settings = GameSettings(
            GameMode.PVE,
            ai_color=Color.WHITE,
            difficulty=Difficulty.EASY,
            ai_move_delay_ms=0,
        )
        ctrl.start_game(settings)
        assert ctrl.is_thinking
        QTest.qWait(2000)
        assert ctrl.move_count == 1
        assert ctrl.side_to_move == Color.BLACK
