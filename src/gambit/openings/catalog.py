"""Loading the opening corpus from JSON.

The corpus is a single object with two arrays::

    {"white": [{"name": ..., "code": ..., "moves": [...], "description": ...}],
     "black": [...]}

A malformed document raises :class:`~gambit.core.errors.FormatError`.  A
well-formed entry without any moves is skipped with a warning.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from functools import lru_cache
from pathlib import Path
from typing import Any

from gambit.core.errors import FormatError
from gambit.openings.models import OpeningBook, OpeningLine
from gambit.runtime_assets import default_book_path

_LOGGER = logging.getLogger(__name__)

_POOLS = ("white", "black")


def load_opening_book(path: str | Path | None = None) -> OpeningBook:
    """Read a corpus file; *path* defaults to the bundled ``openings.json``.

    The bundled corpus is parsed once and shared.
    """
    if path is None:
        return _default_book()
    return _read_book(Path(path))


def book_from_dict(data: Any) -> OpeningBook:
    """Build an :class:`OpeningBook` from already-decoded JSON."""
    if not isinstance(data, Mapping):
        raise FormatError("Opening corpus must be a JSON object")
    unknown = set(data) - set(_POOLS)
    if unknown:
        _LOGGER.warning("Ignoring unknown corpus keys: %s", ", ".join(sorted(unknown)))
    white, black = (_parse_pool(data.get(key, []), key) for key in _POOLS)
    return OpeningBook(white=white, black=black)


# ── Internal ─────────────────────────────────────────────────────────────────


@lru_cache(maxsize=1)
def _default_book() -> OpeningBook:
    return _read_book(default_book_path())


def _read_book(path: Path) -> OpeningBook:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise FormatError(f"Cannot read opening corpus {path}: {exc}") from exc
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise FormatError(f"Invalid JSON in {path}: {exc}") from exc
    book = book_from_dict(data)
    _LOGGER.debug(
        "Loaded %d white and %d black lines from %s",
        len(book.white),
        len(book.black),
        path,
    )
    return book


def _parse_pool(entries: Any, pool: str) -> tuple[OpeningLine, ...]:
    if not isinstance(entries, list):
        raise FormatError(f"Corpus pool {pool!r} must be an array")
    lines: list[OpeningLine] = []
    for index, entry in enumerate(entries):
        line = _parse_line(entry, f"{pool}[{index}]")
        if line is not None:
            lines.append(line)
    return tuple(lines)


def _parse_line(entry: Any, where: str) -> OpeningLine | None:
    if not isinstance(entry, Mapping):
        raise FormatError(f"{where}: opening entry must be an object")

    name = entry.get("name")
    if not isinstance(name, str) or not name:
        raise FormatError(f"{where}: missing opening name")

    moves = entry.get("moves")
    if not isinstance(moves, list) or not all(isinstance(m, str) for m in moves):
        raise FormatError(f"{where}: 'moves' must be an array of strings")
    if not moves:
        _LOGGER.warning("Skipping %s (%s): no moves", where, name)
        return None

    code = entry.get("code", "")
    description = entry.get("description", "")
    if not isinstance(code, str) or not isinstance(description, str):
        raise FormatError(f"{where}: 'code' and 'description' must be strings")

    return OpeningLine(name, code, tuple(moves), description)
