"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass

from gambit.core.enums import Color, PieceType
from gambit.core.errors import FormatError

# Kind letters in PieceType order; FEN uses uppercase for White.
_LETTERS = "PNBRQK"
_BY_LETTER: dict[str, PieceType] = {
    letter: PieceType(index) for index, letter in enumerate(_LETTERS, start=1)
}


@dataclass(frozen=True, slots=True)
class Piece:
    """A coloured piece kind; compared and hashed by value."""

    color: Color
    piece_type: PieceType

    @property
    def letter(self) -> str:
        """Uppercase kind letter used in notation, the same for both colours."""
        return _LETTERS[self.piece_type - 1]

    def __str__(self) -> str:
        """Position-text character: ``N`` for a white knight, ``n`` for black."""
        return self.letter if self.color == Color.WHITE else self.letter.lower()

    @classmethod
    def from_char(cls, char: str) -> Piece:
        ptype = _BY_LETTER.get(char.upper()) if len(char) == 1 else None
        if ptype is None:
            raise FormatError(f"Invalid piece character: {char!r}")
        return cls(Color.WHITE if char.isupper() else Color.BLACK, ptype)
