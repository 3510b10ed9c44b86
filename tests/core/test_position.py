"""Tests for Position move application."""

import pytest

from gambit.core.enums import Color, MoveFlag, PieceType
from gambit.core.move import Move
from gambit.core.notation import position_from_fen
from gambit.core.piece import Piece
from gambit.core.position import Position
from gambit.core.types import (
    A1, A7, A8, C1, D1, D5, D6, E1, E2, E3, E4, E5, E7, F1, F3, G1, H1,
)


class TestBasicMoves:
    def test_double_push_sets_en_passant(self) -> None:
        pos = Position()
        pos.make_move(Move(E2, E4, MoveFlag.DOUBLE_PAWN))
        assert pos.en_passant == E3
        assert pos.side_to_move == Color.BLACK
        assert pos.board[E2] is None
        assert pos.board[E4] == Piece(Color.WHITE, PieceType.PAWN, has_moved=True)

    def test_en_passant_cleared_next_move(self) -> None:
        pos = Position()
        pos.make_move(Move(E2, E4, MoveFlag.DOUBLE_PAWN))
        pos.make_move(Move(E7, E5, MoveFlag.DOUBLE_PAWN))
        assert pos.en_passant is not None
        pos.make_move(Move(G1, F3))
        assert pos.en_passant is None

    def test_fullmove_after_black(self) -> None:
        pos = Position()
        pos.make_move(Move(E2, E4, MoveFlag.DOUBLE_PAWN))
        assert pos.fullmove_number == 1
        pos.make_move(Move(E7, E5, MoveFlag.DOUBLE_PAWN))
        assert pos.fullmove_number == 2

    def test_apply_move_keeps_side(self) -> None:
        pos = Position()
        pos.apply_move(Move(E2, E4, MoveFlag.DOUBLE_PAWN))
        assert pos.side_to_move == Color.WHITE
        pos.pass_turn()
        assert pos.side_to_move == Color.BLACK

    def test_empty_origin_raises(self) -> None:
        with pytest.raises(ValueError):
            Position().apply_move(Move(E4, E5))


class TestCaptures:
    def test_capture_returns_piece(self) -> None:
        pos = position_from_fen("4k3/8/8/3p4/4P3/8/8/4K3 w - - 0 1")
        captured = pos.make_move(Move(E4, D5))
        assert captured is not None
        assert captured.color == Color.BLACK
        assert pos.board[D5] == Piece(Color.WHITE, PieceType.PAWN, has_moved=True)

    def test_en_passant_removes_victim(self) -> None:
        pos = position_from_fen("4k3/8/8/3pP3/8/8/8/4K3 w - d6 0 1")
        captured = pos.make_move(Move(E5, D6, MoveFlag.EN_PASSANT))
        assert captured == Piece(Color.BLACK, PieceType.PAWN, has_moved=True)
        assert pos.board[D5] is None
        assert pos.board[D6] is not None and pos.board[D6].color == Color.WHITE


class TestCastling:
    FEN = "r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1"

    def test_kingside_slides_rook(self) -> None:
        pos = position_from_fen(self.FEN)
        pos.make_move(Move(E1, G1, MoveFlag.CASTLE_KINGSIDE))
        assert pos.board[G1] == Piece(Color.WHITE, PieceType.KING, has_moved=True)
        assert pos.board[F1] == Piece(Color.WHITE, PieceType.ROOK, has_moved=True)
        assert pos.board[H1] is None
        assert pos.board[E1] is None

    def test_queenside_slides_rook(self) -> None:
        pos = position_from_fen(self.FEN)
        pos.make_move(Move(E1, C1, MoveFlag.CASTLE_QUEENSIDE))
        assert pos.board[C1] is not None and pos.board[C1].piece_type == PieceType.KING
        assert pos.board[D1] == Piece(Color.WHITE, PieceType.ROOK, has_moved=True)
        assert pos.board[A1] is None


class TestPromotion:
    FEN = "4k3/P7/8/8/8/8/8/4K3 w - - 0 1"

    def test_promotion_with_choice(self) -> None:
        pos = position_from_fen(self.FEN)
        pos.make_move(Move(A7, A8, MoveFlag.PROMOTION, promotion=PieceType.ROOK))
        assert pos.board[A8] == Piece(Color.WHITE, PieceType.ROOK, has_moved=True)

    def test_promotion_deferred(self) -> None:
        pos = position_from_fen(self.FEN)
        pos.apply_move(Move(A7, A8, MoveFlag.PROMOTION))
        pawn = pos.board[A8]
        assert pawn is not None and pawn.piece_type == PieceType.PAWN
        pos.promote(A8, PieceType.KNIGHT)
        assert pos.board[A8] == Piece(Color.WHITE, PieceType.KNIGHT, has_moved=True)

    def test_promote_without_pawn(self) -> None:
        pos = position_from_fen(self.FEN)
        with pytest.raises(ValueError):
            pos.promote(E1, PieceType.QUEEN)


class TestCopy:
    def test_copy_is_independent(self) -> None:
        pos = Position()
        clone = pos.copy()
        clone.make_move(Move(E2, E4, MoveFlag.DOUBLE_PAWN))
        assert pos.board[E2] is not None
        assert pos.side_to_move == Color.WHITE
        assert pos.en_passant is None
