"""Shared engine search models and protocol."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from gambit.core.enums import Color
    from gambit.core.move import Move
    from gambit.core.position import Position

MoveSource = Callable[["Position"], list["Move"]]
"""Legal-move enumeration for the side to move of a position."""


@dataclass(slots=True, frozen=True)
class SearchResult:
    """Result produced by the engine search.

    ``score`` is from the searching side's point of view.
    """

    best_move: Move | None
    score: int
    depth: int
    nodes: int


class IEngine(Protocol):
    """Protocol for chess engines used by the game layer."""

    def search(
        self,
        position: Position,
        side: Color,
        depth: int,
        time_limit_ms: int | None = None,
    ) -> SearchResult: ...

    def best_move(
        self,
        position: Position,
        side: Color,
        depth: int,
        time_limit_ms: int | None = None,
    ) -> Move | None: ...
