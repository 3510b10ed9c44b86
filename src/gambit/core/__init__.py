"""Core domain layer — pure chess logic with zero external dependencies.

Quick start::

    from gambit.core import Position, MoveGenerator, parse_square

    pos = Position()
    gen = MoveGenerator(pos)
    for move in gen.legal_moves(parse_square("e2")):
        print(move)
"""

from gambit.core.attacks import (
    attack_pattern,
    attacked_squares,
    is_in_check,
    is_square_attacked,
    pin_lines,
)
from gambit.core.board import Board
from gambit.core.enums import PROMOTION_TYPES, Color, GameStatus, MoveFlag, PieceType
from gambit.core.move import Move
from gambit.core.move_generator import MoveGenerator
from gambit.core.notation import STARTING_FEN, position_from_fen, position_to_fen
from gambit.core.piece import Piece
from gambit.core.position import Position
from gambit.core.rules import Rules
from gambit.core.types import (
    Square,
    is_valid_square,
    make_square,
    parse_square,
    square_name,
)

__all__ = [
    # Enums
    "Color",
    "GameStatus",
    "MoveFlag",
    "PROMOTION_TYPES",
    "PieceType",
    # Types / helpers
    "Square",
    "is_valid_square",
    "make_square",
    "parse_square",
    "square_name",
    # Domain objects
    "Board",
    "Move",
    "MoveGenerator",
    "Piece",
    "Position",
    "Rules",
    # Attacks
    "attack_pattern",
    "attacked_squares",
    "is_in_check",
    "is_square_attacked",
    "pin_lines",
    # Notation
    "STARTING_FEN",
    "position_from_fen",
    "position_to_fen",
]
