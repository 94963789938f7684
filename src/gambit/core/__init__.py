"""Core domain layer — pure chess logic with zero external dependencies.

Quick start::

    from gambit.core import Position, Rules, parse_square

    pos = Position.initial()
    for move in Rules.legal_moves(pos, parse_square("e2")):
        print(move)
"""

from gambit.core.board import Board
from gambit.core.enums import Color, PieceType
from gambit.core.errors import ChessError, FormatError, IllegalMoveError
from gambit.core.move import Move
from gambit.core.move_generator import MoveGenerator
from gambit.core.notation import (
    STARTING_FEN,
    format_move,
    move_to_san,
    parse_san,
    position_from_fen,
    position_to_fen,
)
from gambit.core.piece import Piece
from gambit.core.position import Position
from gambit.core.rules import Rules
from gambit.core.types import (
    Square,
    file_of,
    make_square,
    parse_square,
    rank_of,
    square_name,
)

__all__ = [
    # Enums
    "Color",
    "PieceType",
    # Errors
    "ChessError",
    "FormatError",
    "IllegalMoveError",
    # Types / helpers
    "Square",
    "file_of",
    "make_square",
    "parse_square",
    "rank_of",
    "square_name",
    # Domain objects
    "Board",
    "Move",
    "MoveGenerator",
    "Piece",
    "Position",
    "Rules",
    # Notation
    "STARTING_FEN",
    "format_move",
    "move_to_san",
    "parse_san",
    "position_from_fen",
    "position_to_fen",
]
