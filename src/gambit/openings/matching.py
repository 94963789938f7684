"""Destination-square comparison of notation strings.

Opening lines are compared with played moves by where the piece lands, not by
the exact text.  ``Bxd7`` and ``Qd7`` are the same move here, and check marks
never matter.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence

from gambit.core.errors import IllegalMoveError
from gambit.core.notation import strip_decorations
from gambit.core.session import GameSession

_LOGGER = logging.getLogger(__name__)

_CASTLING = frozenset({"O-O", "O-O-O"})
_TRAILING_SQUARE = re.compile(r"([a-h][1-8])$")


def destination_of(notation: str) -> str | None:
    """Landing square of *notation*, ``O-O``/``O-O-O`` literally, else ``None``."""
    cleaned = strip_decorations(notation)
    if cleaned in _CASTLING:
        return cleaned
    match = _TRAILING_SQUARE.search(cleaned)
    return match.group(1) if match else None


def moves_match(first: str, second: str) -> bool:
    """Whether two notations land on the same (known) square."""
    dest = destination_of(first)
    return dest is not None and dest == destination_of(second)


def replay_line(moves: Sequence[str], count: int) -> GameSession:
    """Fresh session with the first *count* book moves played.

    Entries that do not resolve to a legal move are skipped, so the replayed
    history can be shorter than *count*.
    """
    session = GameSession()
    for san in moves[:count]:
        try:
            session.play_san(san)
        except IllegalMoveError:
            _LOGGER.debug("Skipping unplayable book move %r during replay", san)
    return session


def expected_notation(moves: Sequence[str], index: int) -> str | None:
    """Notation the book move at *index* produces after replaying its prefix.

    ``None`` when the entry cannot be played on the replayed position.
    """
    session = replay_line(moves, index)
    try:
        return session.play_san(moves[index])
    except IllegalMoveError:
        return None


def line_follows_history(moves: Sequence[str], history: Sequence[str]) -> bool:
    """Whether *moves* reproduce every entry of *history* by destination.

    The line is replayed from the initial position; an entry that cannot be
    played disqualifies it.
    """
    if len(moves) < len(history):
        return False
    session = GameSession()
    for san, played in zip(moves, history):
        try:
            replayed = session.play_san(san)
        except IllegalMoveError:
            return False
        if not moves_match(played, replayed):
            return False
    return True
