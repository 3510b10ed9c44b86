"""Concrete player implementations."""

from __future__ import annotations

from typing import TYPE_CHECKING

from gambit.core.enums import Color
from gambit.game.interfaces import Difficulty, IPlayer

if TYPE_CHECKING:
    from gambit.core.move import Move
    from gambit.core.position import Position
    from gambit.engine.search import IEngine


class HumanPlayer(IPlayer):
    """A human participant — moves come from the input layer."""

    __slots__ = ("_color", "_name")

    def __init__(self, color: Color, name: str = "") -> None:
        self._color = color
        self._name = name or f"Player ({color})"

    @property
    def color(self) -> Color:
        return self._color

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_human(self) -> bool:
        return True


class EnginePlayer(IPlayer):
    """An automated participant that asks a search engine for its moves.

    Args:
        color: Side the engine plays.
        engine: Searcher used to pick moves.
        difficulty: Search depth preset.
        name: Display name.
        time_limit_ms: Search budget per move, or ``None`` for no limit.
    """

    __slots__ = ("_color", "_engine", "_difficulty", "_name", "_time_limit_ms")

    def __init__(
        self,
        color: Color,
        engine: IEngine,
        difficulty: Difficulty = Difficulty.MEDIUM,
        name: str = "Engine",
        time_limit_ms: int | None = None,
    ) -> None:
        self._color = color
        self._engine = engine
        self._difficulty = difficulty
        self._name = name
        self._time_limit_ms = time_limit_ms

    @property
    def color(self) -> Color:
        return self._color

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_human(self) -> bool:
        return False

    @property
    def difficulty(self) -> Difficulty:
        return self._difficulty

    @property
    def time_limit_ms(self) -> int | None:
        return self._time_limit_ms

    def choose_move(self, position: Position) -> Move | None:
        """Best move for this side in *position*, or ``None`` if it has none."""
        return self._engine.best_move(
            position,
            self._color,
            self._difficulty.depth,
            time_limit_ms=self._time_limit_ms,
        )
