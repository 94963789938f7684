"""Qt bridge that drives a training controller from the Qt event loop.

Requires the optional ``qt`` extra (PyQt6).
"""

from __future__ import annotations

from collections.abc import Callable

from PyQt6.QtCore import QObject, QTimer, pyqtSignal, pyqtSlot

from gambit.core.enums import Color
from gambit.core.session import GameSession
from gambit.game.controller import TrainingController
from gambit.game.interfaces import GamePhase, TrainingResult
from gambit.game.settings import TrainerSettings
from gambit.openings.models import OpeningBook, OpeningLine
from gambit.openings.tracker import RandomSource


class TrainerBridge(QObject):
    """Owns a :class:`TrainingController` and re-emits its events as signals.

    Opponent replies are delayed with ``QTimer.singleShot``; a zero delay
    plays them synchronously.
    """

    move_played = pyqtSignal(str, object)  # notation, session
    line_changed = pyqtSignal(object)  # OpeningLine | None
    phase_changed = pyqtSignal(int)  # GamePhase
    finished = pyqtSignal(object)  # TrainingResult

    def __init__(
        self,
        book: OpeningBook | None = None,
        settings: TrainerSettings | None = None,
        rng: RandomSource | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._controller = TrainingController(
            book=book,
            settings=settings,
            rng=rng,
            scheduler=self._schedule,
        )
        events = self._controller.events
        events.on_move.append(self._relay_move)
        events.on_line_changed.append(self._relay_line)
        events.on_phase_changed.append(self._relay_phase)
        events.on_finished.append(self._relay_finished)

    @property
    def controller(self) -> TrainingController:
        return self._controller

    # ── Slots ────────────────────────────────────────────────────────────

    @pyqtSlot(int)
    def new_game(self, trainee_color: int) -> None:
        """Start a drill; *trainee_color* is a :class:`Color` value."""
        self._controller.new_game(Color(trainee_color))

    @pyqtSlot(int, int, result=bool)
    def submit(self, from_sq: int, to_sq: int) -> bool:
        return self._controller.submit(from_sq, to_sq)

    @pyqtSlot()
    def skip(self) -> None:
        self._controller.skip()

    # ── Internal ─────────────────────────────────────────────────────────

    def _schedule(self, delay_ms: int, callback: Callable[[], None]) -> None:
        if delay_ms <= 0:
            callback()
            return
        QTimer.singleShot(delay_ms, callback)

    def _relay_move(self, notation: str, session: GameSession) -> None:
        self.move_played.emit(notation, session)

    def _relay_line(self, line: OpeningLine | None) -> None:
        self.line_changed.emit(line)

    def _relay_phase(self, phase: GamePhase) -> None:
        self.phase_changed.emit(int(phase))

    def _relay_finished(self, result: TrainingResult) -> None:
        self.finished.emit(result)
