"""Opening corpus data models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, auto

from gambit.core.enums import Color


@dataclass(frozen=True, slots=True)
class OpeningLine:
    """A named, ECO-coded sequence of moves in short algebraic notation."""

    name: str
    code: str
    moves: tuple[str, ...]
    description: str = ""

    def __len__(self) -> int:
        return len(self.moves)

    def __str__(self) -> str:
        return f"{self.name} ({self.code})"


@dataclass(frozen=True, slots=True)
class OpeningBook:
    """Two read-only pools of lines.

    ``white`` holds the lines of White's repertoire (played by an automated
    White against a trainee with the black pieces), ``black`` the defences of
    Black's repertoire.
    """

    white: tuple[OpeningLine, ...] = ()
    black: tuple[OpeningLine, ...] = ()

    def lines_for(self, color: Color) -> tuple[OpeningLine, ...]:
        """Pool whose repertoire side is *color*."""
        return self.white if color == Color.WHITE else self.black

    def find_line(self, name: str) -> OpeningLine | None:
        """First line named *name* in either pool."""
        for line in self.white + self.black:
            if line.name == name:
                return line
        return None

    def __len__(self) -> int:
        return len(self.white) + len(self.black)


@dataclass(frozen=True, slots=True)
class ActiveLineState:
    """The line believed to be in progress and the index of its next move."""

    line: OpeningLine | None = None
    next_index: int = 0

    @property
    def is_exhausted(self) -> bool:
        return self.line is None or self.next_index >= len(self.line.moves)

    @property
    def expected_move(self) -> str | None:
        """Raw book entry expected next, or ``None`` past the end of the line."""
        if self.is_exhausted:
            return None
        assert self.line is not None
        return self.line.moves[self.next_index]


class MatchKind(IntEnum):
    """How a trainee move relates to the active line."""

    MATCHED = auto()
    REMATCHED = auto()
    BEYOND_BOOK = auto()
    DEVIATED = auto()


@dataclass(frozen=True, slots=True)
class TrackResult:
    """Verdict on one trainee move.

    ``expected`` is only set for :attr:`MatchKind.DEVIATED` and
    :attr:`MatchKind.MATCHED`; ``line`` is the active line after the verdict.
    """

    kind: MatchKind
    played: str
    expected: str | None = None
    line: OpeningLine | None = None

    @property
    def in_theory(self) -> bool:
        return self.kind in (MatchKind.MATCHED, MatchKind.REMATCHED)
