"""Tests for GameSettings and game-layer enums."""

import pytest

from gambit.core.enums import Color
from gambit.game.interfaces import Difficulty, GameMode, GameState
from gambit.game.settings import GameSettings


class TestGameSettings:
    def test_defaults(self) -> None:
        settings = GameSettings()
        assert settings.mode == GameMode.PVP
        assert settings.ai_color is None
        assert settings.difficulty == Difficulty.MEDIUM
        assert settings.ai_move_delay_ms == 500
        assert settings.result_delay_ms == 2000
        assert settings.ai_time_limit_ms == 3000

    def test_vs_engine(self) -> None:
        settings = GameSettings.vs_engine(Color.WHITE, Difficulty.HARD)
        assert settings.mode == GameMode.PVE
        assert settings.ai_color == Color.BLACK
        assert settings.is_engine_side(Color.BLACK)
        assert not settings.is_engine_side(Color.WHITE)

    def test_pvp_has_no_engine_side(self) -> None:
        settings = GameSettings()
        assert not any(settings.is_engine_side(c) for c in Color)

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"mode": GameMode.PVE},
            {"mode": GameMode.PVP, "ai_color": Color.BLACK},
            {"ai_move_delay_ms": -1},
            {"result_delay_ms": -10},
            {"ai_time_limit_ms": 0},
        ],
    )
    def test_invalid(self, kwargs: dict[str, object]) -> None:
        with pytest.raises(ValueError):
            GameSettings(**kwargs)  # type: ignore[arg-type]

    def test_frozen(self) -> None:
        with pytest.raises(AttributeError):
            GameSettings().difficulty = Difficulty.EASY  # type: ignore[misc]


class TestEnums:
    def test_difficulty_depths(self) -> None:
        assert [d.depth for d in Difficulty] == [2, 4, 5]

    def test_state_accepts_moves(self) -> None:
        assert GameState.PLAYING.accepts_moves
        assert GameState.CHECK.accepts_moves
        assert not GameState.MENU.accepts_moves
        assert not GameState.CHECKMATE.accepts_moves
        assert not GameState.RESULT.accepts_moves

    def test_terminal_states(self) -> None:
        terminal = {s for s in GameState if s.is_terminal}
        assert terminal == {GameState.CHECKMATE, GameState.STALEMATE}
