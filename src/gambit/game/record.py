"""Move history and the turn-phase states of a game."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TypeAlias

from gambit.core.enums import Color
from gambit.core.move import Move
from gambit.core.piece import Piece
from gambit.core.types import Square


@dataclass
class GameRecord:
    """Executed moves in chronological order, plus the pieces they took."""

    moves: list[Move] = field(default_factory=list)
    captured: list[Piece] = field(default_factory=list)

    def append(self, move: Move) -> None:
        self.moves.append(move)
        if move.captured is not None:
            self.captured.append(move.captured)

    def clear(self) -> None:
        self.moves.clear()
        self.captured.clear()

    @property
    def move_count(self) -> int:
        """Number of half-moves played."""
        return len(self.moves)

    @property
    def last_move(self) -> Move | None:
        return self.moves[-1] if self.moves else None

    def captured_by(self, color: Color) -> list[Piece]:
        """Pieces *color* has taken from the opponent."""
        return [p for p in self.captured if p.color != color]


# ── Turn phases ──────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class AwaitingMove:
    """*side* may select a piece and move it."""

    side: Color


@dataclass(frozen=True, slots=True)
class AwaitingPromotion:
    """*side*'s pawn stands on the last rank at *square*.

    The turn is not over: the side does not switch, check is not evaluated
    and *move* is not recorded until a piece type is chosen.
    """

    side: Color
    square: Square
    move: Move


TurnPhase: TypeAlias = AwaitingMove | AwaitingPromotion
