"""Notation package: FEN and short algebraic notation."""

from gambit.core.notation.fen import STARTING_FEN, position_from_fen, position_to_fen
from gambit.core.notation.san import (
    format_move,
    move_to_san,
    parse_san,
    strip_decorations,
)

__all__ = [
    "STARTING_FEN",
    "position_from_fen",
    "position_to_fen",
    "format_move",
    "move_to_san",
    "parse_san",
    "strip_decorations",
]
