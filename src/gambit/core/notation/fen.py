"""FEN parsing and serialization.

Positions carry per-piece ``has_moved`` flags instead of castling rights,
so the castling field is translated in both directions: a king or corner
rook is "unmoved" exactly when a matching right is present.
"""

from __future__ import annotations

from gambit.core.board import Board
from gambit.core.enums import Color, PieceType
from gambit.core.piece import Piece
from gambit.core.position import Position
from gambit.core.types import Square, parse_square, square_name

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

# castling letter -> (color, rook col)
_CASTLING_RIGHTS: dict[str, tuple[Color, int]] = {
    "K": (Color.WHITE, 7),
    "Q": (Color.WHITE, 0),
    "k": (Color.BLACK, 7),
    "q": (Color.BLACK, 0),
}
_KING_COL = 4


def position_from_fen(fen: str) -> Position:
    """Parse a FEN string into a :class:`Position`."""
    parts = fen.split()
    if not (4 <= len(parts) <= 6):
        raise ValueError(f"Invalid FEN (need 4-6 fields): {fen!r}")

    placement, side_part, castling_part, ep_part = parts[:4]

    # 1. Side to move
    if side_part == "w":
        side = Color.WHITE
    elif side_part == "b":
        side = Color.BLACK
    else:
        raise ValueError(f"Invalid FEN side-to-move field: {side_part!r}")

    # 2. Castling
    rights: set[tuple[Color, int]] = set()
    if castling_part != "-":
        for ch in castling_part:
            right = _CASTLING_RIGHTS.get(ch)
            if right is None or right in rights:
                raise ValueError(f"Invalid FEN castling field: {castling_part!r}")
            rights.add(right)

    # 3. Piece placement
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise ValueError(f"Invalid FEN board (must contain 8 ranks): {fen!r}")
    board = Board()
    for row, rank_text in enumerate(ranks):
        col = 0
        for ch in rank_text:
            if ch.isdigit():
                step = int(ch)
                if not (1 <= step <= 8):
                    raise ValueError(f"Invalid FEN digit {ch!r}: {fen!r}")
                col += step
            else:
                if col >= 8:
                    raise ValueError(f"Invalid FEN rank width: {fen!r}")
                piece = Piece.from_char(ch)
                board[Square(row, col)] = Piece(
                    piece.color,
                    piece.piece_type,
                    _infer_has_moved(piece, Square(row, col), rights),
                )
                col += 1
            if col > 8:
                raise ValueError(f"Invalid FEN rank width: {fen!r}")
        if col != 8:
            raise ValueError(f"Invalid FEN rank width: {fen!r}")

    # 4. En passant
    ep: Square | None = None
    if ep_part != "-":
        ep = parse_square(ep_part)
        expected_row = 2 if side == Color.WHITE else 5
        if ep.row != expected_row:
            raise ValueError(
                f"Invalid FEN en-passant square for side-to-move: {ep_part!r}"
            )

    # 5–6. Clocks (optional; the halfmove clock is not tracked)
    if len(parts) > 4 and int(parts[4]) < 0:
        raise ValueError(f"Invalid FEN halfmove clock: {parts[4]!r}")

    if len(parts) > 5:
        fullmove = int(parts[5])
        if fullmove < 1:
            raise ValueError(f"Invalid FEN fullmove number: {parts[5]!r}")
    else:
        fullmove = 1

    return Position(board, side, ep, fullmove)


def _infer_has_moved(
    piece: Piece, sq: Square, rights: set[tuple[Color, int]]
) -> bool:
    color = piece.color
    home_row = color.back_rank
    if piece.piece_type == PieceType.PAWN:
        return sq.row != home_row + color.forward
    if piece.piece_type == PieceType.KING:
        if sq != (home_row, _KING_COL):
            return True
        return not any(c == color for c, _col in rights)
    if piece.piece_type == PieceType.ROOK:
        return sq.row != home_row or (color, sq.col) not in rights
    return False


def position_to_fen(pos: Position) -> str:
    """Serialise a :class:`Position` to FEN."""
    board = pos.board

    # 1. Board
    rows: list[str] = []
    for row in range(8):
        empty = 0
        text = ""
        for col in range(8):
            piece = board[Square(row, col)]
            if piece is None:
                empty += 1
            else:
                if empty:
                    text += str(empty)
                    empty = 0
                text += str(piece)
        if empty:
            text += str(empty)
        rows.append(text)
    board_str = "/".join(rows)

    # 2. Side
    side_str = "w" if pos.side_to_move == Color.WHITE else "b"

    # 3. Castling
    castling_str = ""
    for letter, (color, rook_col) in _CASTLING_RIGHTS.items():
        home_row = color.back_rank
        king = board[Square(home_row, _KING_COL)]
        rook = board[Square(home_row, rook_col)]
        if king == Piece(color, PieceType.KING) and rook == Piece(
            color, PieceType.ROOK
        ):
            castling_str += letter
    if not castling_str:
        castling_str = "-"

    # 4. En passant
    ep_str = square_name(pos.en_passant) if pos.en_passant is not None else "-"

    return f"{board_str} {side_str} {castling_str} {ep_str} 0 {pos.fullmove_number}"
