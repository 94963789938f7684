"""GameSession — a position plus its append-only notation history."""

from __future__ import annotations

import math

from gambit.core.enums import Color
from gambit.core.errors import IllegalMoveError
from gambit.core.move import Move
from gambit.core.move_generator import MoveGenerator
from gambit.core.notation import parse_san, position_to_fen
from gambit.core.position import Position
from gambit.core.rules import Rules
from gambit.core.types import Square, square_name


class GameSession:
    """Committed state of one game.

    Every applied move appends exactly one notation string to the history;
    the history is never truncated.  :meth:`copy` gives an independent
    session for speculative play.
    """

    __slots__ = ("_position", "_history")

    def __init__(self, position: Position | None = None) -> None:
        self._position = position if position is not None else Position.initial()
        self._history: list[str] = []

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def position(self) -> Position:
        return self._position

    @property
    def history(self) -> tuple[str, ...]:
        return tuple(self._history)

    @property
    def side_to_move(self) -> Color:
        return self._position.side_to_move

    @property
    def ply_count(self) -> int:
        """Number of half-moves played."""
        return len(self._history)

    @property
    def move_count(self) -> int:
        """Full moves started so far, i.e. ``ceil(plies / 2)``."""
        return math.ceil(len(self._history) / 2)

    @property
    def fen(self) -> str:
        return position_to_fen(self._position)

    # ── Queries ──────────────────────────────────────────────────────────

    def legal_moves(self, sq: Square) -> list[Move]:
        return MoveGenerator(self._position).legal_moves(sq)

    def all_legal_moves(self) -> list[Move]:
        return MoveGenerator(self._position).all_legal_moves()

    def is_in_check(self, color: Color | None = None) -> bool:
        return Rules.is_in_check(self._position, color)

    # ── Move application ─────────────────────────────────────────────────

    def apply(self, move: Move) -> str:
        """Apply a legal *move*, record and return its notation.

        The move is matched against the legal moves of its origin square by
        squares only, so a hand-built ``Move(from_sq, to_sq)`` is accepted.
        """
        legal = self._find_legal(move.from_sq, move.to_sq)
        self._position, san = Rules.apply_move(self._position, legal)
        self._history.append(san)
        return san

    def play(self, from_sq: Square, to_sq: Square) -> str:
        """Apply the move between two squares."""
        return self.apply(Move(from_sq, to_sq))

    def play_san(self, san: str) -> str:
        """Apply the move that *san* resolves to (see :func:`parse_san`)."""
        move = parse_san(self._position, san)
        if move is None:
            raise IllegalMoveError(f"No legal move matches {san!r}")
        return self.apply(move)

    def try_move(self, from_sq: Square, to_sq: Square) -> str | None:
        """Play a move only if it is legal; ``None`` leaves the session as is."""
        trial = self.copy()
        try:
            san = trial.play(from_sq, to_sq)
        except IllegalMoveError:
            return None
        self._position = trial._position
        self._history = trial._history
        return san

    def copy(self) -> GameSession:
        """Independent session with the same position and history."""
        clone = GameSession(self._position)
        clone._history = self._history.copy()
        return clone

    # ── Internal ─────────────────────────────────────────────────────────

    def _find_legal(self, from_sq: Square, to_sq: Square) -> Move:
        piece = self._position.board[from_sq]
        if piece is None:
            raise IllegalMoveError(f"No piece on {square_name(from_sq)}")
        if piece.color != self._position.side_to_move:
            raise IllegalMoveError(
                f"Piece on {square_name(from_sq)} belongs to {piece.color}, "
                f"{self._position.side_to_move} to move"
            )
        for move in self.legal_moves(from_sq):
            if move.to_sq == to_sq:
                return move
        raise IllegalMoveError(
            f"Illegal move: {square_name(from_sq)}{square_name(to_sq)}"
        )

    def __repr__(self) -> str:
        return f"GameSession(fen={self.fen!r}, plies={self.ply_count})"
