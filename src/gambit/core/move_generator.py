"""Legal and pseudo-legal move generation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from gambit.core.attacks import (
    BISHOP_RAYS,
    KING_TARGETS,
    KNIGHT_TARGETS,
    QUEEN_RAYS,
    ROOK_RAYS,
    is_in_check,
    is_square_attacked,
    pin_lines,
)
from gambit.core.enums import Color, MoveFlag, PieceType
from gambit.core.move import Move
from gambit.core.piece import Piece
from gambit.core.types import Square

if TYPE_CHECKING:
    from gambit.core.position import Position

_SLIDER_RAYS = {
    PieceType.BISHOP: BISHOP_RAYS,
    PieceType.ROOK: ROOK_RAYS,
    PieceType.QUEEN: QUEEN_RAYS,
}


@dataclass(slots=True, frozen=True)
class _KingSafety:
    """What one side's king is exposed to before any move is played."""

    king_sq: Square
    opponent: Color
    in_check: bool
    pins: dict[Square, frozenset[Square]]


class MoveGenerator:
    """Generates moves for the pieces of a given :class:`Position`.

    The position passed in is never modified. Check filtering settles most
    moves from the pin lines around the king. Only en passant, and moves
    made while in check, are played out on a scratch copy.
    """

    __slots__ = ("_pos", "_board")

    def __init__(self, position: Position) -> None:
        self._pos = position
        self._board = position.board

    # -- Per-piece API --------------------------------------------------------

    def pseudo_legal_moves(self, sq: Square) -> list[Move]:
        """Moves obeying the movement rules of the piece on *sq*."""
        piece = self._board[sq]
        if piece is None:
            return []

        moves: list[Move] = []
        piece_type = piece.piece_type
        if piece_type == PieceType.PAWN:
            self._gen_pawn(sq, piece, moves)
        elif piece_type == PieceType.KNIGHT:
            self._gen_steps(sq, piece.color, KNIGHT_TARGETS[sq.row * 8 + sq.col], moves)
        elif piece_type == PieceType.KING:
            self._gen_steps(sq, piece.color, KING_TARGETS[sq.row * 8 + sq.col], moves)
            self._gen_castling(sq, piece, moves)
        else:
            self._gen_sliding(
                sq, piece.color, _SLIDER_RAYS[piece_type][sq.row * 8 + sq.col], moves
            )
        return moves

    def legal_moves(self, sq: Square) -> list[Move]:
        """Pseudo-legal moves of the piece on *sq* that keep its king safe."""
        piece = self._board[sq]
        if piece is None:
            return []
        safety = self._king_safety(piece.color)
        return [m for m in self.pseudo_legal_moves(sq) if self._is_safe(m, safety)]

    def legal_destinations(self, sq: Square) -> list[Square]:
        return [m.to_sq for m in self.legal_moves(sq)]

    # -- Whole-side API -------------------------------------------------------

    def generate_pseudo_legal_moves(self, color: Color | None = None) -> list[Move]:
        """All pseudo-legal moves for *color* (default: side to move)."""
        if color is None:
            color = self._pos.side_to_move
        moves: list[Move] = []
        for sq, _piece in self._board.pieces(color):
            moves.extend(self.pseudo_legal_moves(sq))
        return moves

    def generate_legal_moves(self, color: Color | None = None) -> list[Move]:
        """All strictly legal moves for *color*, in board order."""
        if color is None:
            color = self._pos.side_to_move
        safety = self._king_safety(color)
        return [
            m
            for m in self.generate_pseudo_legal_moves(color)
            if self._is_safe(m, safety)
        ]

    def has_legal_moves(self, color: Color | None = None) -> bool:
        if color is None:
            color = self._pos.side_to_move
        safety = self._king_safety(color)
        for sq, _piece in self._board.pieces(color):
            for move in self.pseudo_legal_moves(sq):
                if self._is_safe(move, safety):
                    return True
        return False

    def leaves_king_in_check(self, move: Move) -> bool:
        """Would playing *move* leave the mover's own king attacked?

        Always plays the move out on a scratch copy of the position.
        """
        piece = self._board[move.from_sq]
        if piece is None:
            raise ValueError(f"No piece on {move.from_sq}")
        scratch = self._pos.copy()
        scratch.apply_move(move)
        return is_in_check(scratch.board, piece.color)

    # -- Check filtering (private) --------------------------------------------

    def _king_safety(self, color: Color) -> _KingSafety:
        king_sq = self._board.king_square(color)
        opponent = color.opposite
        return _KingSafety(
            king_sq,
            opponent,
            is_square_attacked(self._board, king_sq, opponent),
            pin_lines(self._board, color),
        )

    def _is_safe(self, move: Move, safety: _KingSafety) -> bool:
        if move.from_sq == safety.king_sq:
            # The king itself must not shadow a slider ray it steps along.
            return not is_square_attacked(
                self._board, move.to_sq, safety.opponent, ignore=move.from_sq
            )
        if safety.in_check or move.flag == MoveFlag.EN_PASSANT:
            return not self.leaves_king_in_check(move)
        line = safety.pins.get(move.from_sq)
        return line is None or move.to_sq in line

    # -- Attack detection (delegates) -----------------------------------------

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked by the opponent?"""
        return is_in_check(self._board, color)

    def is_square_attacked(self, sq: Square, by_color: Color) -> bool:
        return is_square_attacked(self._board, sq, by_color)

    # -- Piece-specific generators (private) ----------------------------------

    def _gen_pawn(self, sq: Square, pawn: Piece, moves: list[Move]) -> None:
        board = self._board
        color = pawn.color
        step = color.forward
        row = sq.row + step
        if not 0 <= row < 8:
            return
        last_row = color.opposite.back_rank
        start_row = color.back_rank + step
        flag = MoveFlag.PROMOTION if row == last_row else MoveFlag.NORMAL

        one_step = Square(row, sq.col)
        if board[one_step] is None:
            moves.append(Move(sq, one_step, flag))
            if sq.row == start_row and not pawn.has_moved:
                two_step = Square(row + step, sq.col)
                if board[two_step] is None:
                    moves.append(Move(sq, two_step, MoveFlag.DOUBLE_PAWN))

        for col in (sq.col - 1, sq.col + 1):
            if not 0 <= col < 8:
                continue
            cap_sq = Square(row, col)
            target = board[cap_sq]
            if target is not None:
                if target.color != color:
                    moves.append(Move(sq, cap_sq, flag, captured=target))
            elif cap_sq == self._pos.en_passant:
                victim = board[Square(sq.row, col)]
                if (
                    victim is not None
                    and victim.color != color
                    and victim.piece_type == PieceType.PAWN
                ):
                    moves.append(Move(sq, cap_sq, MoveFlag.EN_PASSANT, captured=victim))

    def _gen_steps(
        self,
        sq: Square,
        color: Color,
        targets: tuple[Square, ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        for to_sq in targets:
            target = board[to_sq]
            if target is None:
                moves.append(Move(sq, to_sq))
            elif target.color != color:
                moves.append(Move(sq, to_sq, captured=target))

    def _gen_sliding(
        self,
        sq: Square,
        color: Color,
        rays: tuple[tuple[Square, ...], ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        for ray in rays:
            for to_sq in ray:
                target = board[to_sq]
                if target is None:
                    moves.append(Move(sq, to_sq))
                    continue
                if target.color != color:
                    moves.append(Move(sq, to_sq, captured=target))
                break

    def _gen_castling(self, king_sq: Square, king: Piece, moves: list[Move]) -> None:
        if king.has_moved:
            return
        color = king.color
        row = king_sq.row
        opponent = color.opposite
        if self.is_in_check(color):
            return

        # rook col, squares that must be empty, square the king crosses, dest col
        for rook_col, between, crossed, dest_col, flag in (
            (7, (5, 6), (5,), 6, MoveFlag.CASTLE_KINGSIDE),
            (0, (1, 2, 3), (3,), 2, MoveFlag.CASTLE_QUEENSIDE),
        ):
            rook = self._board[Square(row, rook_col)]
            if (
                rook is None
                or rook.piece_type != PieceType.ROOK
                or rook.color != color
                or rook.has_moved
            ):
                continue
            if any(self._board[Square(row, c)] is not None for c in between):
                continue
            if any(
                is_square_attacked(self._board, Square(row, c), opponent)
                for c in crossed
            ):
                continue
            moves.append(Move(king_sq, Square(row, dest_col), flag))
