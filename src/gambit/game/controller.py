"""TrainingController — the central orchestrator of an opening drill.

Coordinates: GameSession, OpeningTracker, the book opponent.
Emits events via simple callbacks so the UI / tests can subscribe.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable
from dataclasses import dataclass, field

from gambit.core.enums import Color
from gambit.core.errors import IllegalMoveError
from gambit.core.move import Move
from gambit.core.session import GameSession
from gambit.core.types import Square
from gambit.game.interfaces import (
    GamePhase,
    TrainingOutcome,
    TrainingResult,
)
from gambit.game.player import BookPlayer, HumanPlayer
from gambit.game.settings import TrainerSettings
from gambit.openings.catalog import load_opening_book
from gambit.openings.models import MatchKind, OpeningBook, OpeningLine
from gambit.openings.tracker import OpeningTracker, RandomSource

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[str, GameSession], None]  # notation, session
LineCallback = Callable[[OpeningLine | None], None]
PhaseCallback = Callable[[GamePhase], None]
FinishedCallback = Callable[[TrainingResult], None]

Scheduler = Callable[[int, Callable[[], None]], None]  # delay_ms, callback


def run_immediately(delay_ms: int, callback: Callable[[], None]) -> None:
    """Default scheduler: ignore the delay and run *callback* now."""
    callback()


@dataclass
class TrainingEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_line_changed: list[LineCallback] = field(default_factory=list)
    on_phase_changed: list[PhaseCallback] = field(default_factory=list)
    on_finished: list[FinishedCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class TrainingController:
    """Runs one drill at a time: the trainee plays one colour, the book the
    other, and every trainee move is checked against the opening corpus.

    Opponent replies go through *scheduler* so a UI can show them after a
    short pause.  Callbacks queued for an earlier session are dropped when
    they finally run.

    Args:
        book: Opening corpus (``settings.book_path`` or the bundled one if
            omitted).
        settings: Budget and delays.
        rng: Random source shared by line selection and fallback moves.
        scheduler: ``(delay_ms, callback) -> None``.
    """

    __slots__ = (
        "_settings",
        "_book",
        "_rng",
        "_scheduler",
        "_session",
        "_tracker",
        "_trainee",
        "_opponent",
        "_phase",
        "_result",
        "_generation",
        "events",
    )

    def __init__(
        self,
        book: OpeningBook | None = None,
        settings: TrainerSettings | None = None,
        rng: RandomSource | None = None,
        scheduler: Scheduler | None = None,
    ) -> None:
        self._settings = settings if settings is not None else TrainerSettings()
        self._book = (
            book if book is not None else load_opening_book(self._settings.book_path)
        )
        self._rng: RandomSource = rng if rng is not None else random.Random()
        self._scheduler: Scheduler = (
            scheduler if scheduler is not None else run_immediately
        )
        self._session = GameSession()
        self._tracker = OpeningTracker(self._book, Color.WHITE, self._rng)
        self._trainee = HumanPlayer(Color.WHITE)
        self._opponent = BookPlayer(Color.BLACK, rng=self._rng)
        self._phase = GamePhase.NOT_STARTED
        self._result: TrainingResult | None = None
        self._generation = 0
        self.events = TrainingEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def settings(self) -> TrainerSettings:
        return self._settings

    @property
    def book(self) -> OpeningBook:
        return self._book

    @property
    def session(self) -> GameSession:
        return self._session

    @property
    def tracker(self) -> OpeningTracker:
        return self._tracker

    @property
    def phase(self) -> GamePhase:
        return self._phase

    @property
    def result(self) -> TrainingResult | None:
        return self._result

    @property
    def outcome(self) -> TrainingOutcome:
        if self._result is None:
            return TrainingOutcome.IN_PROGRESS
        return self._result.outcome

    @property
    def trainee(self) -> HumanPlayer:
        return self._trainee

    @property
    def opponent(self) -> BookPlayer:
        return self._opponent

    @property
    def current_line(self) -> OpeningLine | None:
        return self._tracker.line

    @property
    def is_trainee_turn(self) -> bool:
        return self._phase == GamePhase.AWAITING_MOVE

    # ── Session lifecycle ────────────────────────────────────────────────

    def new_game(self, trainee_color: Color) -> None:
        """Start a fresh drill with the trainee playing *trainee_color*.

        When the book moves first, its line is chosen now and the opening
        move is scheduled after ``settings.opening_delay_ms``.
        """
        self._generation += 1
        self._session = GameSession()
        self._tracker = OpeningTracker(self._book, trainee_color, self._rng)
        self._trainee = HumanPlayer(trainee_color)
        self._opponent = BookPlayer(trainee_color.opposite, rng=self._rng)
        self._result = None
        _LOGGER.info("New drill, trainee plays %s", trainee_color)

        if trainee_color == Color.WHITE:
            self._emit_line(None)
            self._set_phase(GamePhase.AWAITING_MOVE)
            return

        self._emit_line(self._tracker.select_opening_line())
        self._set_phase(GamePhase.THINKING)
        self._schedule_reply(self._settings.opening_delay_ms, from_book=True)

    def skip(self) -> None:
        """Abandon the running drill."""
        if self._phase in (GamePhase.NOT_STARTED, GamePhase.GAME_OVER):
            return
        self._generation += 1
        self._finish(TrainingOutcome.SKIP)

    # ── Trainee input ────────────────────────────────────────────────────

    def legal_moves(self, sq: Square) -> list[Move]:
        """Moves the trainee may make from *sq* right now."""
        if self._phase != GamePhase.AWAITING_MOVE:
            return []
        return self._session.legal_moves(sq)

    def submit(self, from_sq: Square, to_sq: Square) -> bool:
        """Submit the trainee move between two squares."""
        return self.submit_move(Move(from_sq, to_sq))

    def submit_move(self, move: Move) -> bool:
        """Submit a trainee move. Returns True if legal and applied."""
        if self._phase != GamePhase.AWAITING_MOVE:
            return False
        if self._session.side_to_move != self._trainee.color:
            return False

        try:
            san = self._session.apply(move)
        except IllegalMoveError as exc:
            _LOGGER.debug("Rejected trainee move %s: %s", move, exc)
            return False
        self._emit_move(san)

        history = self._session.history
        if self._trainee.color == Color.WHITE and len(history) == 1:
            self._emit_line(self._tracker.select_reply_line(san))
            self._await_reply(from_book=True)
            return True

        verdict = self._tracker.validate(history)
        if verdict.kind == MatchKind.DEVIATED:
            self._finish(
                TrainingOutcome.FAILURE,
                attempted=verdict.played,
                expected=verdict.expected,
            )
        elif verdict.kind == MatchKind.REMATCHED:
            self._emit_line(verdict.line)
            self._await_reply(from_book=True)
        elif self._budget_reached():
            self._finish(TrainingOutcome.SUCCESS)
        else:
            self._await_reply(from_book=verdict.kind == MatchKind.MATCHED)
        return True

    # ── Opponent replies ─────────────────────────────────────────────────

    def _await_reply(self, *, from_book: bool) -> None:
        self._set_phase(GamePhase.THINKING)
        self._schedule_reply(self._settings.reply_delay_ms, from_book=from_book)

    def _schedule_reply(self, delay_ms: int, *, from_book: bool) -> None:
        generation = self._generation

        def reply() -> None:
            if generation != self._generation or self._phase != GamePhase.THINKING:
                _LOGGER.debug("Dropping stale opponent reply")
                return
            self._play_reply(from_book)

        self._scheduler(delay_ms, reply)

    def _play_reply(self, from_book: bool) -> None:
        book_move: str | None = None
        if from_book and self._tracker.line is not None:
            book_move = self._tracker.expected_move()
            if book_move is None:
                _LOGGER.info("Reached the end of %s", self._tracker.line)
                self._finish(TrainingOutcome.SUCCESS)
                return

        move = self._opponent.choose_move(self._session.position, book_move)
        if move is None:
            self._finish(TrainingOutcome.SUCCESS)
            return

        san = self._session.apply(move)
        if book_move is not None:
            self._tracker.advance()
        self._emit_move(san)

        if self._budget_reached() or not self._session.all_legal_moves():
            self._finish(TrainingOutcome.SUCCESS)
            return
        self._set_phase(GamePhase.AWAITING_MOVE)

    # ── Internal helpers ─────────────────────────────────────────────────

    def _budget_reached(self) -> bool:
        return self._session.move_count >= self._settings.move_budget

    def _finish(
        self,
        outcome: TrainingOutcome,
        attempted: str | None = None,
        expected: str | None = None,
    ) -> None:
        self._result = TrainingResult(
            outcome,
            attempted,
            expected,
            self._tracker.line,
            self._session.move_count,
        )
        _LOGGER.info(
            "Drill finished: %s after %d moves",
            outcome.name,
            self._result.moves_played,
        )
        self._set_phase(GamePhase.GAME_OVER)
        for cb in self.events.on_finished:
            cb(self._result)

    def _set_phase(self, phase: GamePhase) -> None:
        self._phase = phase
        for cb in self.events.on_phase_changed:
            cb(phase)

    def _emit_move(self, san: str) -> None:
        for cb in self.events.on_move:
            cb(san, self._session)

    def _emit_line(self, line: OpeningLine | None) -> None:
        for cb in self.events.on_line_changed:
            cb(line)
