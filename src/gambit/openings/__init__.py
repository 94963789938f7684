"""Opening corpus and the tracker that follows a game through it.

Quick start::

    from gambit.core import Color
    from gambit.openings import OpeningTracker, load_opening_book

    tracker = OpeningTracker(load_opening_book(), trainee_color=Color.BLACK)
    line = tracker.select_opening_line()
"""

from gambit.openings.catalog import book_from_dict, load_opening_book
from gambit.openings.matching import (
    destination_of,
    expected_notation,
    line_follows_history,
    moves_match,
    replay_line,
)
from gambit.openings.models import (
    ActiveLineState,
    MatchKind,
    OpeningBook,
    OpeningLine,
    TrackResult,
)
from gambit.openings.tracker import OpeningTracker, RandomSource

__all__ = [
    # Models
    "ActiveLineState",
    "MatchKind",
    "OpeningBook",
    "OpeningLine",
    "TrackResult",
    # Loading
    "book_from_dict",
    "load_opening_book",
    # Matching
    "destination_of",
    "expected_notation",
    "line_follows_history",
    "moves_match",
    "replay_line",
    # Tracking
    "OpeningTracker",
    "RandomSource",
]
