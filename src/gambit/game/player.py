"""Concrete player implementations."""

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING

from gambit.core.enums import Color
from gambit.core.notation import parse_san
from gambit.core.rules import Rules
from gambit.game.interfaces import IPlayer

if TYPE_CHECKING:
    from gambit.core.move import Move
    from gambit.core.position import Position
    from gambit.openings.tracker import RandomSource

_LOGGER = logging.getLogger(__name__)


class HumanPlayer(IPlayer):
    """The trainee — moves come from the UI via ``controller.submit()``."""

    __slots__ = ("_color", "_name")

    def __init__(self, color: Color, name: str = "") -> None:
        self._color = color
        self._name = name or f"Player ({color})"

    @property
    def color(self) -> Color:
        return self._color

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_human(self) -> bool:
        return True


class BookPlayer(IPlayer):
    """The automated opponent.

    It plays the book move it is handed when that move resolves on the
    board, and otherwise a uniformly random legal move.

    Args:
        color: Side the opponent plays.
        name: Display name.
        rng: Random source for fallback moves.
    """

    __slots__ = ("_color", "_name", "_rng")

    def __init__(
        self,
        color: Color,
        name: str = "Book",
        rng: RandomSource | None = None,
    ) -> None:
        self._color = color
        self._name = name
        self._rng: RandomSource = rng if rng is not None else random.Random()

    @property
    def color(self) -> Color:
        return self._color

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_human(self) -> bool:
        return False

    def choose_move(
        self, position: Position, book_move: str | None = None
    ) -> Move | None:
        """Resolve the reply on *position*; ``None`` if there is no legal move."""
        if book_move is not None:
            move = parse_san(position, book_move)
            if move is not None:
                return move
            _LOGGER.warning("Book move %r is not playable here", book_move)
        return self.fallback_move(position)

    def fallback_move(self, position: Position) -> Move | None:
        moves = Rules.all_legal_moves(position)
        if not moves:
            return None
        move = self._rng.choice(moves)
        _LOGGER.debug("Fallback move %s", move)
        return move
