"""Exceptions raised by the board engine."""

from __future__ import annotations


class ChessError(Exception):
    """Base class for engine errors."""


class FormatError(ChessError, ValueError):
    """Malformed position text or opening corpus."""


class IllegalMoveError(ChessError, ValueError):
    """A move that the current position does not allow.

    Always a local rejection: the caller is expected to pick another move.
    """
