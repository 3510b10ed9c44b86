"""Tests for attack patterns and square-attack detection."""

from gambit.core.attacks import (
    attack_pattern,
    attacked_squares,
    is_in_check,
    is_square_attacked,
    pawn_attacks,
    pin_lines,
)
from gambit.core.board import Board
from gambit.core.enums import Color
from gambit.core.notation import position_from_fen
from gambit.core.types import (
    A1, A3, B1, C3, D3, D4, D5, E2, E3, E4, E6, E8, F3, H1, H8,
    parse_square,
)


class TestPawnAttacks:
    def test_white_pawn(self) -> None:
        assert pawn_attacks(E2, Color.WHITE) == [D3, F3]

    def test_black_pawn(self) -> None:
        assert set(pawn_attacks(E6, Color.BLACK)) == {D5, parse_square("f5")}

    def test_edge_file(self) -> None:
        assert pawn_attacks(parse_square("a2"), Color.WHITE) == [parse_square("b3")]


class TestAttackPattern:
    def test_knight_from_corner(self) -> None:
        board = Board.initial()
        assert set(attack_pattern(board, B1)) == {A3, C3, parse_square("d2")}

    def test_slider_stops_at_first_piece(self) -> None:
        board = position_from_fen("7k/8/8/8/8/8/P7/R6K w - - 0 1").board
        # a2 pawn blocks the file; the rank runs to the king on h1.
        assert set(attack_pattern(board, A1)) == {
            parse_square("a2"),
            *(parse_square(f"{f}1") for f in "bcdefgh"),
        }

    def test_empty_square(self) -> None:
        assert attack_pattern(Board(), D4) == []

    def test_attacked_squares_start(self) -> None:
        attacked = attacked_squares(Board.initial(), Color.WHITE)
        assert E3 in attacked
        assert E4 not in attacked


class TestIsSquareAttacked:
    def test_start_position(self) -> None:
        board = Board.initial()
        assert is_square_attacked(board, E3, Color.WHITE)
        assert not is_square_attacked(board, E4, Color.WHITE)
        assert is_square_attacked(board, E6, Color.BLACK)
        assert not is_square_attacked(board, E3, Color.BLACK)

    def test_matches_attack_patterns(self) -> None:
        board = position_from_fen(
            "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1"
        ).board
        for color in Color:
            attacked = attacked_squares(board, color)
            for row in range(8):
                for col in range(8):
                    sq = parse_square("abcdefgh"[col] + str(8 - row))
                    assert is_square_attacked(board, sq, color) == (sq in attacked)

    def test_blocked_diagonal(self) -> None:
        board = position_from_fen("7k/8/8/8/8/2P5/8/B6K w - - 0 1").board
        assert not is_square_attacked(board, H8, Color.WHITE)
        assert is_square_attacked(board, parse_square("b2"), Color.WHITE)


class TestCheck:
    def test_rook_check(self) -> None:
        board = position_from_fen("4k3/8/8/8/8/8/8/4R2K b - - 0 1").board
        assert is_in_check(board, Color.BLACK)
        assert not is_in_check(board, Color.WHITE)

    def test_no_check_at_start(self) -> None:
        board = Board.initial()
        assert not is_in_check(board, Color.WHITE)
        assert not is_in_check(board, Color.BLACK)
        assert board[E8] is not None and board[H1] is not None

    def test_ignored_square_lets_ray_through(self) -> None:
        board = position_from_fen("4k3/8/8/8/8/8/8/r3K3 w - - 0 1").board
        f1 = parse_square("f1")
        assert not is_square_attacked(board, f1, Color.BLACK)
        assert is_square_attacked(board, f1, Color.BLACK, ignore=parse_square("e1"))


class TestPinLines:
    def test_no_pins_at_start(self) -> None:
        assert pin_lines(Board.initial(), Color.WHITE) == {}

    def test_rook_pin(self) -> None:
        board = position_from_fen("4r1k1/8/8/8/8/8/4N3/4K3 w - - 0 1").board
        pins = pin_lines(board, Color.WHITE)
        assert set(pins) == {E2}
        assert pins[E2] == {parse_square(f"e{rank}") for rank in range(2, 9)}

    def test_two_shields_are_not_pinned(self) -> None:
        board = position_from_fen("4r1k1/8/8/8/8/4N3/4N3/4K3 w - - 0 1").board
        assert pin_lines(board, Color.WHITE) == {}

    def test_wrong_slider_does_not_pin(self) -> None:
        board = position_from_fen("4b1k1/8/8/8/8/8/4N3/4K3 w - - 0 1").board
        assert pin_lines(board, Color.WHITE) == {}

    def test_diagonal_pin(self) -> None:
        board = position_from_fen("6k1/8/8/q7/8/8/3P4/4K3 w - - 0 1").board
        assert set(pin_lines(board, Color.WHITE)) == {parse_square("d2")}
