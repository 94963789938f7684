"""OpeningTracker — which book line is being played, and is the trainee on it?"""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence
from typing import Protocol, TypeVar

from gambit.core.enums import Color
from gambit.openings.matching import (
    expected_notation,
    line_follows_history,
    moves_match,
)
from gambit.openings.models import (
    ActiveLineState,
    MatchKind,
    OpeningBook,
    OpeningLine,
    TrackResult,
)

_LOGGER = logging.getLogger(__name__)

_T = TypeVar("_T")


class RandomSource(Protocol):
    """The part of :class:`random.Random` the trainer draws from."""

    def choice(self, seq: Sequence[_T]) -> _T: ...


class OpeningTracker:
    """Selects the opponent's line and checks trainee moves against it.

    The tracker only reads the book.  Whenever the trainee leaves the active
    line it looks for another line of the same pool that agrees with the
    whole game so far; the active state is replaced, never edited.

    Args:
        book: Corpus to draw lines from.
        trainee_color: Side the human plays; lines come from the other pool.
        rng: Random source for line selection (``random.Random()`` if omitted).
    """

    __slots__ = ("_book", "_trainee", "_rng", "_state")

    def __init__(
        self,
        book: OpeningBook,
        trainee_color: Color,
        rng: RandomSource | None = None,
    ) -> None:
        self._book = book
        self._trainee = trainee_color
        self._rng: RandomSource = rng if rng is not None else random.Random()
        self._state = ActiveLineState()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> ActiveLineState:
        return self._state

    @property
    def line(self) -> OpeningLine | None:
        return self._state.line

    @property
    def trainee_color(self) -> Color:
        return self._trainee

    @property
    def opponent_color(self) -> Color:
        return self._trainee.opposite

    @property
    def pool(self) -> tuple[OpeningLine, ...]:
        return self._book.lines_for(self.opponent_color)

    def expected_move(self) -> str | None:
        return self._state.expected_move

    # ── Selection ────────────────────────────────────────────────────────

    def select_opening_line(self) -> OpeningLine | None:
        """Pick the line for an opponent who moves first."""
        return self._activate(self._pick(self.pool), 0)

    def select_reply_line(self, first_move: str) -> OpeningLine | None:
        """Pick the opponent's line once the trainee's first move is known.

        Lines whose first move lands where *first_move* did are preferred;
        with none available any line of the pool will do.
        """
        pool = self.pool
        candidates = tuple(
            line
            for line in pool
            if line.moves and moves_match(line.moves[0], first_move)
        )
        if not candidates:
            _LOGGER.debug("No line starts like %r, using the whole pool", first_move)
            candidates = pool
        return self._activate(self._pick(candidates), 1)

    # ── Validation ───────────────────────────────────────────────────────

    def validate(self, history: Sequence[str]) -> TrackResult:
        """Judge the last entry of *history*, a trainee move.

        The book move at the same index is replayed from the initial
        position and compared by destination square; an entry that cannot
        be replayed never matches.  On a mismatch the first line of the
        pool that reproduces the whole history takes over.  A deviation
        reports the replayed notation, or the raw entry when there is none.
        """
        if not history:
            raise ValueError("validate() needs at least one move")

        k = len(history) - 1
        played = history[k]
        line = self._state.line
        if line is None or k >= len(line.moves):
            return TrackResult(MatchKind.BEYOND_BOOK, played, line=line)

        expected = expected_notation(line.moves, k)
        if expected is not None and moves_match(played, expected):
            self._state = ActiveLineState(line, k + 1)
            return TrackResult(MatchKind.MATCHED, played, expected, line)

        alternate = self.find_alternate(history)
        if alternate is not None:
            _LOGGER.debug("%r left %s, continuing with %s", played, line, alternate)
            self._state = ActiveLineState(alternate, k + 1)
            return TrackResult(MatchKind.REMATCHED, played, line=alternate)

        _LOGGER.debug("%r left %s and no other line follows", played, line)
        if expected is None:
            expected = line.moves[k]
        return TrackResult(MatchKind.DEVIATED, played, expected, line)

    def find_alternate(self, history: Sequence[str]) -> OpeningLine | None:
        """First pool line, in corpus order, that continues past *history*."""
        for line in self.pool:
            if line_follows_history(line.moves, history):
                return line
        return None

    def advance(self) -> None:
        """Account for the opponent having played the expected book move."""
        state = self._state
        self._state = ActiveLineState(state.line, state.next_index + 1)

    # ── Internal ─────────────────────────────────────────────────────────

    def _pick(self, lines: Sequence[OpeningLine]) -> OpeningLine | None:
        if not lines:
            _LOGGER.warning("No %s lines in the opening book", self.opponent_color)
            return None
        return self._rng.choice(lines)

    def _activate(
        self, line: OpeningLine | None, next_index: int
    ) -> OpeningLine | None:
        self._state = ActiveLineState(line, next_index)
        if line is not None:
            _LOGGER.debug("Active line: %s", line)
        return line
