"""High-level rule facade: legal moves, check, move application."""

from __future__ import annotations

from typing import TYPE_CHECKING

from gambit.core.enums import Color
from gambit.core.move_generator import MoveGenerator
from gambit.core.notation.san import move_to_san

if TYPE_CHECKING:
    from gambit.core.move import Move
    from gambit.core.position import Position
    from gambit.core.types import Square


class Rules:
    """Static rule-checker that operates on a :class:`Position`.

    Product policy: no castling, no en passant, no draw or stalemate
    detection.  The only legality gate is the self-check filter.
    """

    @staticmethod
    def legal_moves(position: Position, sq: Square) -> list[Move]:
        return MoveGenerator(position).legal_moves(sq)

    @staticmethod
    def all_legal_moves(position: Position) -> list[Move]:
        return MoveGenerator(position).all_legal_moves()

    @staticmethod
    def is_in_check(position: Position, color: Color | None = None) -> bool:
        """Whether *color* (default: side to move) has its king attacked."""
        if color is None:
            color = position.side_to_move
        return MoveGenerator(position).is_in_check(color)

    @staticmethod
    def is_square_attacked(position: Position, sq: Square, by_color: Color) -> bool:
        return MoveGenerator(position).is_square_attacked(sq, by_color)

    @staticmethod
    def has_legal_move(position: Position) -> bool:
        return MoveGenerator(position).has_legal_move()

    @staticmethod
    def apply_move(position: Position, move: Move) -> tuple[Position, str]:
        """Return the successor position and the notation of *move*.

        Raises :class:`~gambit.core.errors.IllegalMoveError` when the origin
        square is empty.  Recording the notation is the caller's job.
        """
        san = move_to_san(position, move)
        return position.make_move(move), san
