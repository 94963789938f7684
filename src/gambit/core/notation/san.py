"""Short algebraic notation: rendering and approximate parsing.

The notation produced here never disambiguates (two knights reaching the same
square both render as ``N<dest>``) and never carries check suffixes.
"""

from __future__ import annotations

import re

from gambit.core.enums import PieceType
from gambit.core.errors import IllegalMoveError
from gambit.core.move import Move
from gambit.core.move_generator import MoveGenerator
from gambit.core.piece import Piece
from gambit.core.position import Position
from gambit.core.types import file_of, square_name

_DECORATIONS = re.compile(r"[+#!?]")


def strip_decorations(text: str) -> str:
    """Remove check, mate and annotation marks anywhere in *text*."""
    return _DECORATIONS.sub("", text)


def format_move(move: Move, piece: Piece, captured: Piece | None) -> str:
    """Render *move* of *piece*, e.g. ``e4``, ``exd5``, ``Nf3``, ``Qxf7``."""
    dest = square_name(move.to_sq)
    if piece.piece_type == PieceType.PAWN:
        if captured is not None:
            return f"{chr(ord('a') + file_of(move.from_sq))}x{dest}"
        return dest

    capture = "x" if captured is not None else ""
    return f"{piece.letter}{capture}{dest}"


def move_to_san(position: Position, move: Move) -> str:
    """Convert *move* to notation given the *position* before the move."""
    board = position.board
    piece = board[move.from_sq]
    if piece is None:
        raise IllegalMoveError(f"No piece on {square_name(move.from_sq)}")
    return format_move(move, piece, board[move.to_sq])


def parse_san(position: Position, san: str) -> Move | None:
    """Find the legal move of the side to move described by *san*.

    Pieces are visited in scan order and the first legal move whose rendered
    notation contains the cleaned text (or whose destination equals it) wins.
    This is deliberately loose: ``"d4"`` resolves to ``Nd4`` when a knight
    on f3 is visited before the d2 pawn.  Returns ``None`` when nothing
    matches, which includes every castling string.
    """
    clean = strip_decorations(san)
    if not clean:
        return None

    board = position.board
    gen = MoveGenerator(position)
    for sq in board.all_pieces(position.side_to_move):
        piece = board[sq]
        assert piece is not None
        for move in gen.legal_moves(sq):
            dest = square_name(move.to_sq)
            if clean in format_move(move, piece, board[move.to_sq]) or dest == clean:
                return move
    return None
