"""Abstract interfaces and value types for the training layer."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import IntEnum, auto
from typing import TYPE_CHECKING

from gambit.core.enums import Color

if TYPE_CHECKING:
    from gambit.openings.models import OpeningLine


# ── Session FSM states ───────────────────────────────────────────────────────


class GamePhase(IntEnum):
    """Finite-state-machine states for a training session."""

    NOT_STARTED = auto()
    AWAITING_MOVE = auto()  # trainee to move
    THINKING = auto()  # opponent reply pending
    GAME_OVER = auto()


class TrainingOutcome(IntEnum):
    """How a session ended."""

    IN_PROGRESS = auto()
    SUCCESS = auto()
    FAILURE = auto()
    SKIP = auto()


@dataclass(slots=True, frozen=True)
class TrainingResult:
    """Final verdict of a session.

    ``attempted`` and ``expected`` are only filled in on failure: the
    trainee's notation and the book's notation for the same ply.
    """

    outcome: TrainingOutcome
    attempted: str | None = None
    expected: str | None = None
    line: OpeningLine | None = None
    moves_played: int = 0

    @property
    def is_success(self) -> bool:
        return self.outcome == TrainingOutcome.SUCCESS


# ── Abstract interfaces ─────────────────────────────────────────────────────


class IPlayer(ABC):
    """Interface for a session participant (trainee or book opponent)."""

    @property
    @abstractmethod
    def color(self) -> Color: ...

    @property
    @abstractmethod
    def name(self) -> str: ...

    @property
    @abstractmethod
    def is_human(self) -> bool: ...
