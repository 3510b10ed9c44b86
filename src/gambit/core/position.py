"""Position — board plus side to move and en-passant target."""

from __future__ import annotations

from gambit.core.board import Board
from gambit.core.enums import Color, MoveFlag, PieceType
from gambit.core.move import Move
from gambit.core.piece import Piece
from gambit.core.types import Square


class Position:
    """Game-relevant state needed to generate and apply moves.

    Positions are never unwound: callers that want to explore a
    continuation take a :meth:`copy` and throw it away afterwards.
    """

    __slots__ = ("board", "side_to_move", "en_passant", "fullmove_number")

    def __init__(
        self,
        board: Board | None = None,
        side_to_move: Color = Color.WHITE,
        en_passant: Square | None = None,
        fullmove_number: int = 1,
    ) -> None:
        self.board = board if board is not None else Board.initial()
        self.side_to_move = side_to_move
        self.en_passant = en_passant
        self.fullmove_number = fullmove_number

    # ── Core move operations ─────────────────────────────────────────────

    def make_move(self, move: Move) -> Piece | None:
        """Apply *move* and hand the turn to the opponent."""
        captured = self.apply_move(move)
        self.pass_turn()
        return captured

    def apply_move(self, move: Move) -> Piece | None:
        """Apply the board side effects of *move* without switching sides.

        Returns the captured piece, if any. A promotion move without a
        chosen piece type leaves the pawn on the last rank; finish it with
        :meth:`promote`.
        """
        board = self.board
        piece = board[move.from_sq]
        if piece is None:
            raise ValueError(f"No piece on {move.from_sq}")

        capture_sq = move.to_sq
        # En passant: the captured pawn sits beside the mover, not on to_sq
        if move.flag == MoveFlag.EN_PASSANT:
            capture_sq = Square(move.from_sq.row, move.to_sq.col)
        captured = board[capture_sq]
        if captured is not None:
            board[capture_sq] = None

        # Lift piece from origin and place it (handle promotion)
        board[move.from_sq] = None
        placed = piece.moved()
        if move.flag == MoveFlag.PROMOTION and move.promotion is not None:
            placed = piece.promoted(move.promotion)
        board[move.to_sq] = placed

        # Slide the rook for castling
        if move.flag == MoveFlag.CASTLE_KINGSIDE:
            self._slide_rook(move.from_sq.row, 7, 5)
        elif move.flag == MoveFlag.CASTLE_QUEENSIDE:
            self._slide_rook(move.from_sq.row, 0, 3)

        # En passant target for the opponent
        self.en_passant = None
        if move.flag == MoveFlag.DOUBLE_PAWN:
            self.en_passant = Square(
                (move.from_sq.row + move.to_sq.row) // 2, move.from_sq.col
            )
        return captured

    def promote(self, sq: Square, piece_type: PieceType) -> None:
        """Replace the pawn on *sq* with *piece_type*."""
        pawn = self.board[sq]
        if pawn is None or pawn.piece_type != PieceType.PAWN:
            raise ValueError(f"No pawn to promote on {sq}")
        self.board[sq] = pawn.promoted(piece_type)

    def pass_turn(self) -> None:
        if self.side_to_move == Color.BLACK:
            self.fullmove_number += 1
        self.side_to_move = self.side_to_move.opposite

    def _slide_rook(self, row: int, from_col: int, to_col: int) -> None:
        rook_from = Square(row, from_col)
        rook = self.board[rook_from]
        assert rook is not None, f"Castling without a rook on {rook_from}"
        self.board[rook_from] = None
        self.board[Square(row, to_col)] = rook.moved()

    # ── Utilities ────────────────────────────────────────────────────────

    def copy(self) -> Position:
        """Deep value copy; mutating it never touches this position."""
        return Position(
            board=self.board.copy(),
            side_to_move=self.side_to_move,
            en_passant=self.en_passant,
            fullmove_number=self.fullmove_number,
        )

    def __repr__(self) -> str:
        return (
            f"Position(side_to_move={self.side_to_move!s}, "
            f"en_passant={self.en_passant!s})\n{self.board!r}"
        )
