"""High-level chess rules: check, checkmate, stalemate classification."""

from __future__ import annotations

from typing import TYPE_CHECKING

from gambit.core.enums import Color, GameStatus
from gambit.core.move_generator import MoveGenerator

if TYPE_CHECKING:
    from gambit.core.position import Position


class Rules:
    """Static rule-checker that operates on a :class:`Position`.

    Only checkmate and stalemate end a game; repetition and move-count
    draws are not tracked.
    """

    @staticmethod
    def is_in_check(position: Position) -> bool:
        gen = MoveGenerator(position)
        return gen.is_in_check(position.side_to_move)

    @staticmethod
    def is_checkmate(position: Position) -> bool:
        if not Rules.is_in_check(position):
            return False
        return not MoveGenerator(position).has_legal_moves()

    @staticmethod
    def is_stalemate(position: Position) -> bool:
        if Rules.is_in_check(position):
            return False
        return not MoveGenerator(position).has_legal_moves()

    @staticmethod
    def status(position: Position) -> GameStatus:
        """Classify the position for the side to move."""
        gen = MoveGenerator(position)
        in_check = gen.is_in_check(position.side_to_move)
        has_moves = gen.has_legal_moves()

        if in_check:
            return GameStatus.CHECK if has_moves else GameStatus.CHECKMATE
        if not has_moves:
            return GameStatus.STALEMATE
        return GameStatus.ONGOING

    @staticmethod
    def winner(position: Position) -> Color | None:
        """Checkmating side, or ``None`` when nobody has won."""
        if Rules.is_checkmate(position):
            return position.side_to_move.opposite
        return None
