"""Attack detection: which squares a side attacks, and check tests.

Attack patterns differ from move lists: pawns attack both forward
diagonals even when empty, and a king attacks all of its neighbours even
where stepping there would be illegal.
"""

from __future__ import annotations

from gambit.core.board import Board
from gambit.core.enums import Color, PieceType
from gambit.core.types import ALL_SQUARES, Square

KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = ROOK_DIRS + BISHOP_DIRS


# -- Precomputed lookup tables (indexed by row * 8 + col) -------------------


def _index(sq: Square) -> int:
    return sq[0] * 8 + sq[1]


def _build_targets(
    offsets: tuple[tuple[int, int], ...],
) -> tuple[tuple[Square, ...], ...]:
    targets: list[tuple[Square, ...]] = []
    for sq in ALL_SQUARES:
        jumps: list[Square] = []
        for dr, dc in offsets:
            r = sq.row + dr
            c = sq.col + dc
            if 0 <= r < 8 and 0 <= c < 8:
                jumps.append(Square(r, c))
        targets.append(tuple(jumps))
    return tuple(targets)


def _build_rays(
    directions: tuple[tuple[int, int], ...],
) -> tuple[tuple[tuple[Square, ...], ...], ...]:
    rays_per_square: list[tuple[tuple[Square, ...], ...]] = []
    for sq in ALL_SQUARES:
        square_rays: list[tuple[Square, ...]] = []
        for dr, dc in directions:
            r = sq.row + dr
            c = sq.col + dc
            ray: list[Square] = []
            while 0 <= r < 8 and 0 <= c < 8:
                ray.append(Square(r, c))
                r += dr
                c += dc
            square_rays.append(tuple(ray))
        rays_per_square.append(tuple(square_rays))
    return tuple(rays_per_square)


KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
KING_TARGETS = _build_targets(KING_OFFSETS)
BISHOP_RAYS = _build_rays(BISHOP_DIRS)
ROOK_RAYS = _build_rays(ROOK_DIRS)
QUEEN_RAYS = _build_rays(QUEEN_DIRS)

_SLIDER_RAYS = {
    PieceType.BISHOP: BISHOP_RAYS,
    PieceType.ROOK: ROOK_RAYS,
    PieceType.QUEEN: QUEEN_RAYS,
}
_DIAGONAL_ATTACKERS = (PieceType.BISHOP, PieceType.QUEEN)
_STRAIGHT_ATTACKERS = (PieceType.ROOK, PieceType.QUEEN)


def pawn_attacks(sq: Square, color: Color) -> list[Square]:
    """The (at most two) diagonal squares a *color* pawn on *sq* attacks."""
    row = sq.row + color.forward
    if not 0 <= row < 8:
        return []
    return [Square(row, col) for col in (sq.col - 1, sq.col + 1) if 0 <= col < 8]


def attack_pattern(board: Board, sq: Square) -> list[Square]:
    """Squares attacked by the piece standing on *sq*.

    Slider rays stop at (and include) the first occupied square of
    either colour.
    """
    piece = board[sq]
    if piece is None:
        return []

    piece_type = piece.piece_type
    if piece_type == PieceType.PAWN:
        return pawn_attacks(sq, piece.color)
    if piece_type == PieceType.KNIGHT:
        return list(KNIGHT_TARGETS[_index(sq)])
    if piece_type == PieceType.KING:
        return list(KING_TARGETS[_index(sq)])

    attacked: list[Square] = []
    for ray in _SLIDER_RAYS[piece_type][_index(sq)]:
        for to_sq in ray:
            attacked.append(to_sq)
            if board[to_sq] is not None:
                break
    return attacked


def attacked_squares(board: Board, by_color: Color) -> set[Square]:
    """Union of the attack patterns of every *by_color* piece."""
    attacked: set[Square] = set()
    for sq, _piece in board.pieces(by_color):
        attacked.update(attack_pattern(board, sq))
    return attacked


def is_square_attacked(
    board: Board,
    sq: Square,
    by_color: Color,
    ignore: Square | None = None,
) -> bool:
    """Is *sq* attacked by any piece of *by_color*?

    Looks outward from *sq* for each attacker kind, which is equivalent to
    testing membership in every enemy attack pattern. Slider rays pass
    through *ignore* as if it were empty, which lets a king test a step
    away from a checking slider without lifting itself off the board.
    """
    idx = _index(sq)

    # A by_color pawn attacking sq stands one step "behind" it.
    pawn_row = sq[0] - by_color.forward
    if 0 <= pawn_row < 8:
        for col in (sq[1] - 1, sq[1] + 1):
            if 0 <= col < 8:
                piece = board[Square(pawn_row, col)]
                if (
                    piece is not None
                    and piece.color == by_color
                    and piece.piece_type == PieceType.PAWN
                ):
                    return True

    for from_sq in KNIGHT_TARGETS[idx]:
        piece = board[from_sq]
        if (
            piece is not None
            and piece.color == by_color
            and piece.piece_type == PieceType.KNIGHT
        ):
            return True

    for from_sq in KING_TARGETS[idx]:
        piece = board[from_sq]
        if (
            piece is not None
            and piece.color == by_color
            and piece.piece_type == PieceType.KING
        ):
            return True

    for rays, attackers in (
        (BISHOP_RAYS[idx], _DIAGONAL_ATTACKERS),
        (ROOK_RAYS[idx], _STRAIGHT_ATTACKERS),
    ):
        for ray in rays:
            for to_sq in ray:
                if to_sq == ignore:
                    continue
                piece = board[to_sq]
                if piece is None:
                    continue
                if piece.color == by_color and piece.piece_type in attackers:
                    return True
                break

    return False


def is_in_check(board: Board, color: Color) -> bool:
    """Is *color*'s king attacked by the opponent?"""
    return is_square_attacked(board, board.king_square(color), color.opposite)


def pin_lines(board: Board, color: Color) -> dict[Square, frozenset[Square]]:
    """Pieces of *color* pinned against their own king.

    Maps each pinned square to the squares it may still move to: the line
    between the king and the pinning slider, the slider's square included.
    """
    king_sq = board.king_square(color)
    idx = _index(king_sq)
    pins: dict[Square, frozenset[Square]] = {}
    for rays, attackers in (
        (BISHOP_RAYS[idx], _DIAGONAL_ATTACKERS),
        (ROOK_RAYS[idx], _STRAIGHT_ATTACKERS),
    ):
        for ray in rays:
            shield: Square | None = None
            for i, to_sq in enumerate(ray):
                piece = board[to_sq]
                if piece is None:
                    continue
                if piece.color == color:
                    if shield is not None:
                        break
                    shield = to_sq
                    continue
                if shield is not None and piece.piece_type in attackers:
                    pins[shield] = frozenset(ray[: i + 1])
                break
    return pins
