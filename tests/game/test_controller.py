"""Tests for TrainingController — the drill orchestrator."""

from __future__ import annotations

import json
import logging

from gambit.core.enums import Color
from gambit.core.session import GameSession
from gambit.core.types import (
    B8, C5, C6, C7, E2, E3, E4, E5, E7, F3, F6, G1, G8,
)
from gambit.game.controller import TrainingController
from gambit.game.interfaces import GamePhase, TrainingOutcome, TrainingResult
from gambit.game.settings import TrainerSettings
from gambit.openings import OpeningBook, OpeningLine, load_opening_book

ITALIAN = OpeningLine(
    "Italian Game",
    "C50",
    ("e4", "e5", "Nf3", "Nc6", "Bc4", "Bc5", "c3", "Nf6", "d4", "exd4"),
)
RUY = OpeningLine(
    "Ruy López (Spanish Opening)",
    "C60",
    ("e4", "e5", "Nf3", "Nc6", "Bb5", "a6", "Ba4", "Nf6"),
)
BERLIN = OpeningLine(
    "Ruy López, Berlin Defence",
    "C65",
    ("e4", "e5", "Nf3", "Nc6", "Bb5", "Nf6", "d3", "Bc5"),
)
SCHOLAR = OpeningLine(
    "Scholar's Mate Trap", "C20", ("e4", "e5", "Bc4", "Nc6", "Qh5", "Nf6", "Qxf7")
)
SHORT = OpeningLine("Short", "X00", ("e4", "e5"))
THREE = OpeningLine("Three", "X01", ("e4", "e5", "Nf3"))


def _controller(
    *white_lines: OpeningLine,
    rng,
    scheduler=None,
    move_budget: int = 10,
) -> TrainingController:
    return TrainingController(
        book=OpeningBook(white=white_lines),
        settings=TrainerSettings(move_budget=move_budget),
        rng=rng,
        scheduler=scheduler,
    )


class TestConstruction:
    def test_defaults(self) -> None:
        ctrl = TrainingController()
        assert ctrl.book is load_opening_book()
        assert ctrl.settings == TrainerSettings()
        assert ctrl.phase == GamePhase.NOT_STARTED
        assert ctrl.outcome == TrainingOutcome.IN_PROGRESS
        assert ctrl.result is None

    def test_book_path_from_settings(self, tmp_path) -> None:
        path = tmp_path / "book.json"
        path.write_text(
            json.dumps({"white": [{"name": "Solo", "moves": ["d4"]}], "black": []}),
            encoding="utf-8",
        )
        ctrl = TrainingController(settings=TrainerSettings(book_path=path))
        assert [line.name for line in ctrl.book.white] == ["Solo"]

    def test_nothing_playable_before_start(self, rng) -> None:
        ctrl = _controller(ITALIAN, rng=rng)
        assert ctrl.legal_moves(E2) == []
        assert not ctrl.submit(E2, E4)


class TestNewGame:
    def test_trainee_white_waits(self, rng) -> None:
        ctrl = _controller(ITALIAN, rng=rng)
        phases: list[GamePhase] = []
        ctrl.events.on_phase_changed.append(phases.append)
        ctrl.new_game(Color.WHITE)
        assert ctrl.phase == GamePhase.AWAITING_MOVE
        assert ctrl.session.history == ()
        assert ctrl.current_line is None
        assert phases == [GamePhase.AWAITING_MOVE]
        assert rng.calls == 0

    def test_trainee_black_book_opens(self, rng) -> None:
        ctrl = _controller(ITALIAN, rng=rng)
        lines: list[OpeningLine | None] = []
        phases: list[GamePhase] = []
        ctrl.events.on_line_changed.append(lines.append)
        ctrl.events.on_phase_changed.append(phases.append)
        ctrl.new_game(Color.BLACK)
        assert ctrl.session.history == ("e4",)
        assert ctrl.current_line == ITALIAN
        assert lines == [ITALIAN]
        assert phases == [GamePhase.THINKING, GamePhase.AWAITING_MOVE]
        assert ctrl.tracker.state.next_index == 1
        assert ctrl.is_trainee_turn

    def test_players(self, rng) -> None:
        ctrl = _controller(ITALIAN, rng=rng)
        ctrl.new_game(Color.BLACK)
        assert ctrl.trainee.color == Color.BLACK
        assert ctrl.trainee.is_human
        assert ctrl.opponent.color == Color.WHITE
        assert not ctrl.opponent.is_human

    def test_opening_move_is_delayed(self, rng, scheduler) -> None:
        ctrl = _controller(ITALIAN, rng=rng, scheduler=scheduler)
        ctrl.new_game(Color.BLACK)
        assert ctrl.phase == GamePhase.THINKING
        assert [delay for delay, _ in scheduler.pending] == [500]
        assert ctrl.session.history == ()
        assert not ctrl.submit(E7, E5)

        scheduler.run_all()
        assert ctrl.session.history == ("e4",)
        assert ctrl.phase == GamePhase.AWAITING_MOVE

    def test_reply_uses_reply_delay(self, rng, scheduler) -> None:
        ctrl = _controller(ITALIAN, rng=rng, scheduler=scheduler)
        ctrl.new_game(Color.BLACK)
        scheduler.run_all()
        assert ctrl.submit(E7, E5)
        assert [delay for delay, _ in scheduler.pending] == [300]
        scheduler.run_all()
        assert ctrl.session.history == ("e4", "e5", "Nf3")

    def test_restart_drops_pending_reply(self, rng, scheduler) -> None:
        ctrl = _controller(ITALIAN, rng=rng, scheduler=scheduler)
        ctrl.new_game(Color.BLACK)
        ctrl.new_game(Color.WHITE)
        scheduler.run_all()
        assert ctrl.session.history == ()
        assert ctrl.phase == GamePhase.AWAITING_MOVE


class TestSubmit:
    def test_illegal_move_rejected(self, rng) -> None:
        ctrl = _controller(ITALIAN, rng=rng)
        ctrl.new_game(Color.WHITE)
        assert not ctrl.submit(E2, E5)
        assert ctrl.session.history == ()
        assert ctrl.phase == GamePhase.AWAITING_MOVE

    def test_opponent_piece_rejected(self, rng) -> None:
        ctrl = _controller(ITALIAN, rng=rng)
        ctrl.new_game(Color.WHITE)
        assert not ctrl.submit(E7, E5)
        assert ctrl.legal_moves(E7) == []

    def test_legal_moves_for_trainee(self, rng) -> None:
        ctrl = _controller(ITALIAN, rng=rng)
        ctrl.new_game(Color.WHITE)
        assert [m.to_sq for m in ctrl.legal_moves(E2)] == [E3, E4]

    def test_move_events(self, rng) -> None:
        ctrl = _controller(ITALIAN, rng=rng)
        seen: list[tuple[str, int]] = []

        def on_move(san: str, session: GameSession) -> None:
            seen.append((san, session.ply_count))

        ctrl.events.on_move.append(on_move)
        ctrl.new_game(Color.BLACK)
        ctrl.submit(E7, E5)
        assert seen == [("e4", 1), ("e5", 2), ("Nf3", 3)]

    def test_first_white_move_picks_reply_line(self, book, rng) -> None:
        ctrl = TrainingController(book=book, rng=rng)
        lines: list[OpeningLine | None] = []
        ctrl.events.on_line_changed.append(lines.append)
        ctrl.new_game(Color.WHITE)
        assert ctrl.submit(E2, E4)
        assert ctrl.current_line is not None
        assert ctrl.current_line.name == "Sicilian Defense"
        assert lines[-1] == ctrl.current_line
        assert ctrl.session.history == ("e4", "c5")

    def test_matching_moves_continue_the_line(self, rng) -> None:
        ctrl = _controller(ITALIAN, rng=rng)
        ctrl.new_game(Color.BLACK)
        assert ctrl.submit(E7, E5)
        assert ctrl.submit(B8, C6)
        assert ctrl.session.history == ("e4", "e5", "Nf3", "Nc6", "Bc4")
        assert ctrl.outcome == TrainingOutcome.IN_PROGRESS


class TestOutcomes:
    def test_budget_reached_after_reply(self, rng) -> None:
        ctrl = _controller(ITALIAN, rng=rng, move_budget=3)
        results: list[TrainingResult] = []
        ctrl.events.on_finished.append(results.append)
        ctrl.new_game(Color.BLACK)
        ctrl.submit(E7, E5)
        ctrl.submit(B8, C6)
        assert ctrl.outcome == TrainingOutcome.SUCCESS
        assert ctrl.phase == GamePhase.GAME_OVER
        assert ctrl.session.history[-1] == "Bc4"
        assert results == [ctrl.result]
        assert ctrl.result is not None
        assert ctrl.result.moves_played == 3
        assert ctrl.result.line == ITALIAN
        assert ctrl.result.is_success

    def test_budget_reached_on_trainee_move(self, book, rng) -> None:
        ctrl = TrainingController(
            book=book, settings=TrainerSettings(move_budget=2), rng=rng
        )
        ctrl.new_game(Color.WHITE)
        ctrl.submit(E2, E4)
        ctrl.submit(G1, F3)
        assert ctrl.outcome == TrainingOutcome.SUCCESS
        assert ctrl.session.history == ("e4", "c5", "Nf3")

    def test_default_budget_of_ten_moves(self, rng) -> None:
        # Without any book the opponent shuffles Nb8-a6 then Ra8-b8-a8.
        ctrl = TrainingController(book=OpeningBook(), rng=rng)
        ctrl.new_game(Color.WHITE)
        for i in range(10):
            assert ctrl.outcome == TrainingOutcome.IN_PROGRESS
            ok = ctrl.submit(G1, F3) if i % 2 == 0 else ctrl.submit(F3, G1)
            assert ok
        assert ctrl.outcome == TrainingOutcome.SUCCESS
        assert ctrl.session.ply_count == 19
        assert ctrl.session.history[1:6:2] == ("Na6", "Rb8", "Ra8")
        assert ctrl.result is not None
        assert ctrl.result.moves_played == 10

    def test_deviation_fails(self, rng) -> None:
        ctrl = _controller(ITALIAN, RUY, rng=rng)
        ctrl.new_game(Color.BLACK)
        assert ctrl.submit(C7, C5)
        assert ctrl.outcome == TrainingOutcome.FAILURE
        result = ctrl.result
        assert result is not None
        assert result.attempted == "c5"
        assert result.expected == "e5"
        assert result.line == ITALIAN
        assert result.moves_played == 1
        assert not result.is_success
        assert not ctrl.submit(E2, E4)

    def test_rematch_keeps_training(self, rng) -> None:
        ctrl = _controller(RUY, BERLIN, rng=rng)
        lines: list[OpeningLine | None] = []
        ctrl.events.on_line_changed.append(lines.append)
        ctrl.new_game(Color.BLACK)
        ctrl.submit(E7, E5)
        ctrl.submit(B8, C6)
        assert ctrl.submit(G8, F6)
        assert lines == [RUY, BERLIN]
        assert ctrl.current_line == BERLIN
        assert ctrl.outcome == TrainingOutcome.IN_PROGRESS
        # The book's "d3" resolves to the first piece reaching d3: the b5 bishop.
        assert ctrl.session.history[-1] == "Bd3"
        assert ctrl.tracker.state.next_index == 7

    def test_book_exhausted_is_success(self, rng) -> None:
        ctrl = _controller(SHORT, rng=rng)
        ctrl.new_game(Color.BLACK)
        ctrl.submit(E7, E5)
        assert ctrl.outcome == TrainingOutcome.SUCCESS
        assert ctrl.session.history == ("e4", "e5")

    def test_beyond_book_fallback(self, rng) -> None:
        ctrl = _controller(THREE, rng=rng)
        ctrl.new_game(Color.BLACK)
        ctrl.submit(E7, E5)
        ctrl.submit(B8, C6)
        assert ctrl.outcome == TrainingOutcome.IN_PROGRESS
        assert ctrl.phase == GamePhase.AWAITING_MOVE
        # First legal move in scan order: the f3 knight takes on e5.
        assert ctrl.session.history[-1] == "Nxe5"

    def test_unplayable_book_reply_falls_back(self, rng, caplog) -> None:
        castles = OpeningLine("Castles", "X02", ("e4", "e5", "O-O", "Nc6", "Bc4"))
        ctrl = _controller(castles, rng=rng)
        ctrl.new_game(Color.BLACK)
        with caplog.at_level(logging.WARNING, logger="gambit.game.player"):
            ctrl.submit(E7, E5)
        assert "not playable" in caplog.text
        assert ctrl.session.history == ("e4", "e5", "a3")
        assert ctrl.tracker.state.next_index == 3
        assert ctrl.tracker.expected_move() == "Nc6"
        assert ctrl.phase == GamePhase.AWAITING_MOVE

        # The replayed line no longer reaches Nc6 once castling is skipped.
        ctrl.submit(B8, C6)
        assert ctrl.outcome == TrainingOutcome.FAILURE
        assert ctrl.result is not None
        assert ctrl.result.attempted == "Nc6"
        assert ctrl.result.expected == "Nc6"

    def test_no_reply_possible_is_success(self, rng) -> None:
        ctrl = _controller(SCHOLAR, rng=rng)
        ctrl.new_game(Color.BLACK)
        ctrl.submit(E7, E5)
        ctrl.submit(B8, C6)
        ctrl.submit(G8, F6)
        assert ctrl.session.history[-1] == "Qxf7"
        assert ctrl.session.is_in_check()
        assert ctrl.outcome == TrainingOutcome.SUCCESS
        assert ctrl.result is not None
        assert ctrl.result.moves_played == 4


class TestSkip:
    def test_skip(self, rng) -> None:
        ctrl = _controller(ITALIAN, rng=rng)
        results: list[TrainingResult] = []
        ctrl.events.on_finished.append(results.append)
        ctrl.new_game(Color.WHITE)
        ctrl.skip()
        ctrl.skip()
        assert ctrl.outcome == TrainingOutcome.SKIP
        assert ctrl.phase == GamePhase.GAME_OVER
        assert len(results) == 1
        assert not ctrl.submit(E2, E4)

    def test_skip_before_start_is_ignored(self, rng) -> None:
        ctrl = _controller(ITALIAN, rng=rng)
        ctrl.skip()
        assert ctrl.result is None

    def test_skip_drops_pending_reply(self, rng, scheduler) -> None:
        ctrl = _controller(ITALIAN, rng=rng, scheduler=scheduler)
        ctrl.new_game(Color.BLACK)
        ctrl.skip()
        scheduler.run_all()
        assert ctrl.session.history == ()
        assert ctrl.outcome == TrainingOutcome.SKIP

    def test_new_game_after_finish(self, rng) -> None:
        ctrl = _controller(SHORT, rng=rng)
        ctrl.new_game(Color.BLACK)
        ctrl.submit(E7, E5)
        ctrl.new_game(Color.BLACK)
        assert ctrl.result is None
        assert ctrl.session.history == ("e4",)
