"""Tests for check, checkmate and stalemate classification."""

from gambit.core.enums import Color, GameStatus, MoveFlag
from gambit.core.move import Move
from gambit.core.notation import position_from_fen
from gambit.core.position import Position
from gambit.core.rules import Rules
from gambit.core.types import parse_square

FOOLS_MATE = "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3"
STALEMATE = "7k/5Q2/6K1/8/8/8/8/8 b - - 0 1"


class TestStatus:
    def test_start_is_ongoing(self) -> None:
        assert Rules.status(Position()) == GameStatus.ONGOING

    def test_check(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/8/4R2K b - - 0 1")
        assert Rules.is_in_check(pos)
        assert not Rules.is_checkmate(pos)
        assert Rules.status(pos) == GameStatus.CHECK

    def test_fools_mate(self) -> None:
        pos = position_from_fen(FOOLS_MATE)
        assert Rules.is_checkmate(pos)
        assert not Rules.is_stalemate(pos)
        assert Rules.status(pos) == GameStatus.CHECKMATE
        assert Rules.winner(pos) == Color.BLACK

    def test_stalemate(self) -> None:
        pos = position_from_fen(STALEMATE)
        assert Rules.is_stalemate(pos)
        assert not Rules.is_checkmate(pos)
        assert Rules.status(pos) == GameStatus.STALEMATE
        assert Rules.winner(pos) is None

    def test_back_rank_mate(self) -> None:
        pos = position_from_fen("6k1/5ppp/8/8/8/8/8/R5K1 w - - 0 1")
        pos.make_move(Move(parse_square("a1"), parse_square("a8")))
        assert Rules.status(pos) == GameStatus.CHECKMATE
        assert Rules.winner(pos) == Color.WHITE

    def test_played_fools_mate(self) -> None:
        pos = Position()
        for uci, flag in (
            ("f2f3", MoveFlag.NORMAL),
            ("e7e5", MoveFlag.DOUBLE_PAWN),
            ("g2g4", MoveFlag.DOUBLE_PAWN),
            ("d8h4", MoveFlag.NORMAL),
        ):
            pos.make_move(Move(parse_square(uci[:2]), parse_square(uci[2:]), flag))
        assert Rules.status(pos) == GameStatus.CHECKMATE
