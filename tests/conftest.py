"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from typing import TypeVar

import pytest

from gambit.openings import OpeningBook, load_opening_book

_T = TypeVar("_T")


class FirstChoice:
    """Deterministic stand-in for ``random.Random``: always the first item."""

    def __init__(self) -> None:
        self.calls = 0

    def choice(self, seq: Sequence[_T]) -> _T:
        self.calls += 1
        return seq[0]


class ManualScheduler:
    """Collects scheduled callbacks so a test decides when they run."""

    def __init__(self) -> None:
        self.pending: list[tuple[int, Callable[[], None]]] = []

    def __call__(self, delay_ms: int, callback: Callable[[], None]) -> None:
        self.pending.append((delay_ms, callback))

    def run_all(self) -> None:
        while self.pending:
            _, callback = self.pending.pop(0)
            callback()


@pytest.fixture
def rng() -> FirstChoice:
    return FirstChoice()


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture(scope="session")
def book() -> OpeningBook:
    """The corpus bundled with the package."""
    return load_opening_book()


@pytest.fixture(scope="session")
def qapp() -> Iterator[object]:
    """Provide a singleton QCoreApplication for Qt tests."""
    from PyQt6.QtCore import QCoreApplication

    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication([])
    yield app
