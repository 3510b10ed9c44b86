"""Static evaluation of a position.

Scores are in centipawns with a white-positive convention: each term is
summed per side and Black's total is subtracted from White's.

Terms:

* material
* piece-square tables (White's view, row 0 = rank 8; Black mirrored)
* king safety (pawn shield, open files, castled king), skipped in endgames
* mobility (legal move count per side)
* center control (central 4 and the surrounding ring of 12)
* pawn structure (doubled pawns, passed pawns)
"""

from __future__ import annotations

from dataclasses import dataclass

from gambit.core.board import Board
from gambit.core.enums import Color, PieceType
from gambit.core.move_generator import MoveGenerator
from gambit.core.position import Position
from gambit.core.types import Square

PIECE_VALUES: dict[PieceType, int] = {
    PieceType.PAWN: 100,
    PieceType.KNIGHT: 320,
    PieceType.BISHOP: 330,
    PieceType.ROOK: 500,
    PieceType.QUEEN: 900,
    PieceType.KING: 20_000,
}

MOBILITY_WEIGHT = 4
CENTER_PAWN_BONUS = 20
CENTER_PIECE_BONUS = 15
RING_PAWN_BONUS = 10
RING_PIECE_BONUS = 5
DOUBLED_PAWN_PENALTY = 20
PASSED_PAWN_BONUS_PER_STEP = 12
SHIELD_NEAR_BONUS = 10
SHIELD_FAR_BONUS = 5
OPEN_FILE_PENALTY = 20
CASTLED_KING_BONUS = 30

# fmt: off
PAWN_TABLE = (
    (0,   0,   0,   0,   0,   0,   0,   0),
    (50,  50,  50,  50,  50,  50,  50,  50),
    (10,  10,  20,  30,  30,  20,  10,  10),
    (5,   5,   10,  25,  25,  10,  5,   5),
    (0,   0,   0,   20,  20,  0,   0,   0),
    (5,   -5,  -10, 0,   0,   -10, -5,  5),
    (5,   10,  10,  -20, -20, 10,  10,  5),
    (0,   0,   0,   0,   0,   0,   0,   0),
)

KNIGHT_TABLE = (
    (-50, -40, -30, -30, -30, -30, -40, -50),
    (-40, -20, 0,   0,   0,   0,   -20, -40),
    (-30, 0,   10,  15,  15,  10,  0,   -30),
    (-30, 5,   15,  20,  20,  15,  5,   -30),
    (-30, 0,   15,  20,  20,  15,  0,   -30),
    (-30, 5,   10,  15,  15,  10,  5,   -30),
    (-40, -20, 0,   5,   5,   0,   -20, -40),
    (-50, -40, -30, -30, -30, -30, -40, -50),
)

BISHOP_TABLE = (
    (-20, -10, -10, -10, -10, -10, -10, -20),
    (-10, 0,   0,   0,   0,   0,   0,   -10),
    (-10, 0,   5,   10,  10,  5,   0,   -10),
    (-10, 5,   5,   10,  10,  5,   5,   -10),
    (-10, 0,   10,  10,  10,  10,  0,   -10),
    (-10, 10,  10,  10,  10,  10,  10,  -10),
    (-10, 5,   0,   0,   0,   0,   5,   -10),
    (-20, -10, -10, -10, -10, -10, -10, -20),
)

ROOK_TABLE = (
    (0,   0,   0,   0,   0,   0,   0,   0),
    (5,   10,  10,  10,  10,  10,  10,  5),
    (-5,  0,   0,   0,   0,   0,   0,   -5),
    (-5,  0,   0,   0,   0,   0,   0,   -5),
    (-5,  0,   0,   0,   0,   0,   0,   -5),
    (-5,  0,   0,   0,   0,   0,   0,   -5),
    (-5,  0,   0,   0,   0,   0,   0,   -5),
    (0,   0,   0,   5,   5,   0,   0,   0),
)

QUEEN_TABLE = (
    (-20, -10, -10, -5,  -5,  -10, -10, -20),
    (-10, 0,   0,   0,   0,   0,   0,   -10),
    (-10, 0,   5,   5,   5,   5,   0,   -10),
    (-5,  0,   5,   5,   5,   5,   0,   -5),
    (0,   0,   5,   5,   5,   5,   0,   -5),
    (-10, 5,   5,   5,   5,   5,   0,   -10),
    (-10, 0,   5,   0,   0,   0,   0,   -10),
    (-20, -10, -10, -5,  -5,  -10, -10, -20),
)

KING_MIDDLEGAME_TABLE = (
    (-30, -40, -40, -50, -50, -40, -40, -30),
    (-30, -40, -40, -50, -50, -40, -40, -30),
    (-30, -40, -40, -50, -50, -40, -40, -30),
    (-30, -40, -40, -50, -50, -40, -40, -30),
    (-20, -30, -30, -40, -40, -30, -30, -20),
    (-10, -20, -20, -20, -20, -20, -20, -10),
    (20,  20,  0,   0,   0,   0,   20,  20),
    (20,  30,  10,  0,   0,   10,  30,  20),
)

KING_ENDGAME_TABLE = (
    (-50, -40, -30, -20, -20, -30, -40, -50),
    (-30, -20, -10, 0,   0,   -10, -20, -30),
    (-30, -10, 20,  30,  30,  20,  -10, -30),
    (-30, -10, 30,  40,  40,  30,  -10, -30),
    (-30, -10, 30,  40,  40,  30,  -10, -30),
    (-30, -10, 20,  30,  30,  20,  -10, -30),
    (-30, -30, 0,   0,   0,   0,   -30, -30),
    (-50, -30, -30, -30, -30, -30, -30, -50),
)
# fmt: on

_PIECE_TABLES: dict[PieceType, tuple[tuple[int, ...], ...]] = {
    PieceType.PAWN: PAWN_TABLE,
    PieceType.KNIGHT: KNIGHT_TABLE,
    PieceType.BISHOP: BISHOP_TABLE,
    PieceType.ROOK: ROOK_TABLE,
    PieceType.QUEEN: QUEEN_TABLE,
    PieceType.KING: KING_MIDDLEGAME_TABLE,
}

_CENTER: frozenset[Square] = frozenset(
    Square(row, col) for row in (3, 4) for col in (3, 4)
)
_RING: frozenset[Square] = (
    frozenset(Square(row, col) for row in range(2, 6) for col in range(2, 6))
    - _CENTER
)


@dataclass(slots=True)
class SideScore:
    """Per-term evaluation for one side."""

    material: int = 0
    positional: int = 0
    king_safety: int = 0
    mobility: int = 0
    center: int = 0
    pawn_structure: int = 0

    @property
    def total(self) -> int:
        return (
            self.material
            + self.positional
            + self.king_safety
            + self.mobility
            + self.center
            + self.pawn_structure
        )


# -- Individual terms --------------------------------------------------------


def piece_square_bonus(
    piece_type: PieceType, color: Color, sq: Square, endgame: bool = False
) -> int:
    """Positional bonus of *color*'s *piece_type* standing on *sq*."""
    table = _PIECE_TABLES[piece_type]
    if endgame and piece_type == PieceType.KING:
        table = KING_ENDGAME_TABLE
    row = sq.row if color == Color.WHITE else 7 - sq.row
    return table[row][sq.col]


def is_endgame(board: Board) -> bool:
    """No queens left, or both queens on with at most two minor pieces."""
    white_queens = board.count(Color.WHITE, PieceType.QUEEN)
    black_queens = board.count(Color.BLACK, PieceType.QUEEN)
    if white_queens + black_queens == 0:
        return True
    if not (white_queens and black_queens):
        return False
    minors = sum(
        board.count(color, piece_type)
        for color in Color
        for piece_type in (PieceType.KNIGHT, PieceType.BISHOP)
    )
    return minors <= 2


def king_safety(board: Board, color: Color) -> int:
    """Pawn shield, open-file and castled-king terms for *color*'s king."""
    king_sq = board.king_square(color)
    step = color.forward
    own_pawn_cols = {
        sq.col for sq in board.squares_of(color, PieceType.PAWN)
    }
    score = 0
    for col in (king_sq.col - 1, king_sq.col, king_sq.col + 1):
        if not 0 <= col < 8:
            continue
        if col not in own_pawn_cols:
            score -= OPEN_FILE_PENALTY
            continue
        for distance, bonus in ((1, SHIELD_NEAR_BONUS), (2, SHIELD_FAR_BONUS)):
            row = king_sq.row + step * distance
            if not 0 <= row < 8:
                break
            piece = board[Square(row, col)]
            if (
                piece is not None
                and piece.color == color
                and piece.piece_type == PieceType.PAWN
            ):
                score += bonus

    if king_sq.row == color.back_rank and (king_sq.col <= 2 or king_sq.col >= 6):
        score += CASTLED_KING_BONUS
    return score


def center_control(board: Board, color: Color) -> int:
    score = 0
    for sq, piece in board.pieces(color):
        is_pawn = piece.piece_type == PieceType.PAWN
        if sq in _CENTER:
            score += CENTER_PAWN_BONUS if is_pawn else CENTER_PIECE_BONUS
        elif sq in _RING:
            score += RING_PAWN_BONUS if is_pawn else RING_PIECE_BONUS
    return score


def pawn_structure(board: Board, color: Color) -> int:
    """Doubled-pawn penalty plus passed-pawn bonus for *color*."""
    pawns = board.squares_of(color, PieceType.PAWN)
    enemy_pawns = board.squares_of(color.opposite, PieceType.PAWN)

    per_file = [0] * 8
    for sq in pawns:
        per_file[sq.col] += 1
    score = -DOUBLED_PAWN_PENALTY * sum(n - 1 for n in per_file if n > 1)

    last_row = color.opposite.back_rank
    for sq in pawns:
        blocked = any(
            abs(enemy.col - sq.col) <= 1 and _is_ahead(enemy, sq, color)
            for enemy in enemy_pawns
        )
        if not blocked:
            distance = abs(last_row - sq.row)
            score += PASSED_PAWN_BONUS_PER_STEP * (7 - distance)
    return score


def _is_ahead(other: Square, sq: Square, color: Color) -> bool:
    """Does *other* lie further up the board than *sq*, from *color*'s view?"""
    return (other.row - sq.row) * color.forward > 0


# -- Evaluator -----------------------------------------------------------------


class Evaluator:
    """Combines all evaluation terms into one white-positive score."""

    __slots__ = ("mobility_weight",)

    def __init__(self, mobility_weight: int = MOBILITY_WEIGHT) -> None:
        self.mobility_weight = mobility_weight

    def evaluate(self, position: Position) -> int:
        endgame = is_endgame(position.board)
        white = self.side_score(position, Color.WHITE, endgame)
        black = self.side_score(position, Color.BLACK, endgame)
        return white.total - black.total

    def side_score(
        self, position: Position, color: Color, endgame: bool | None = None
    ) -> SideScore:
        board = position.board
        if endgame is None:
            endgame = is_endgame(board)
        score = SideScore()

        for sq, piece in board.pieces(color):
            score.material += PIECE_VALUES[piece.piece_type]
            score.positional += piece_square_bonus(
                piece.piece_type, color, sq, endgame
            )

        if not endgame:
            score.king_safety = king_safety(board, color)
        if self.mobility_weight:
            legal = MoveGenerator(position).generate_legal_moves(color)
            score.mobility = self.mobility_weight * len(legal)
        score.center = center_control(board, color)
        score.pawn_structure = pawn_structure(board, color)
        return score
