"""Trainer configuration."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(slots=True, frozen=True)
class TrainerSettings:
    """Knobs for one training controller.

    ``move_budget`` is counted in full moves (``ceil(plies / 2)``).  The two
    delays only affect when the opponent's move is shown, never which move
    it is.
    """

    move_budget: int = 10
    opening_delay_ms: int = 500
    reply_delay_ms: int = 300
    book_path: Path | None = None

    def __post_init__(self) -> None:
        if self.move_budget < 1:
            raise ValueError(f"move_budget must be positive, got {self.move_budget}")
        if self.opening_delay_ms < 0 or self.reply_delay_ms < 0:
            raise ValueError("Delays must not be negative")
