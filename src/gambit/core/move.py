"""Move value object."""

from __future__ import annotations

from dataclasses import dataclass

from gambit.core.enums import PieceType
from gambit.core.types import Square, square_name


@dataclass(frozen=True, slots=True)
class Move:
    """A candidate piece relocation.

    Produced by the move generator and consumed by :meth:`Position.make_move`.
    A ``Move`` built by hand carries no legality guarantee; only moves
    returned by :class:`~gambit.core.move_generator.MoveGenerator` have passed
    the self-check filter.
    """

    from_sq: Square
    to_sq: Square
    piece_type: PieceType = PieceType.PAWN
    is_capture: bool = False

    def __str__(self) -> str:
        return f"{square_name(self.from_sq)}{square_name(self.to_sq)}"
