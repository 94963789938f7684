"""FEN parsing and serialization."""

from __future__ import annotations

from gambit.core.board import Board
from gambit.core.enums import Color
from gambit.core.errors import FormatError
from gambit.core.piece import Piece
from gambit.core.position import Position
from gambit.core.types import Square, make_square, parse_square, square_name

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_CASTLING_CHARS = frozenset("KQkq")


def position_from_fen(fen: str) -> Position:
    """Parse a FEN string into a :class:`Position`.

    The castling and en-passant fields are kept as given; they are checked
    for shape only.
    """
    parts = fen.split()
    if not (4 <= len(parts) <= 6):
        raise FormatError(f"Invalid FEN (need 4-6 fields): {fen!r}")

    placement, side_part, castling_part, ep_part = parts[:4]

    # 1. Piece placement
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise FormatError(f"Invalid FEN board (must contain 8 ranks): {fen!r}")
    squares: list[Piece | None] = [None] * 64
    for rank_idx, rank_text in enumerate(ranks):
        rank = 7 - rank_idx
        file = 0
        for ch in rank_text:
            if ch.isdigit():
                step = int(ch)
                if not (1 <= step <= 8):
                    raise FormatError(f"Invalid FEN digit {ch!r}: {fen!r}")
                file += step
            else:
                if file >= 8:
                    raise FormatError(f"Invalid FEN rank width: {fen!r}")
                squares[make_square(file, rank)] = Piece.from_char(ch)
                file += 1
            if file > 8:
                raise FormatError(f"Invalid FEN rank width: {fen!r}")
        if file != 8:
            raise FormatError(f"Invalid FEN rank width: {fen!r}")

    # 2. Side to move
    if side_part == "w":
        side = Color.WHITE
    elif side_part == "b":
        side = Color.BLACK
    else:
        raise FormatError(f"Invalid FEN side-to-move field: {side_part!r}")

    # 3. Castling (verbatim)
    if castling_part != "-" and not set(castling_part) <= _CASTLING_CHARS:
        raise FormatError(f"Invalid FEN castling field: {castling_part!r}")

    # 4. En passant
    ep: Square | None = None
    if ep_part != "-":
        try:
            ep = parse_square(ep_part)
        except ValueError:
            raise FormatError(f"Invalid FEN en-passant square: {ep_part!r}") from None

    # 5–6. Clocks (optional)
    halfmove = _parse_counter(parts[4], "halfmove clock", 0) if len(parts) > 4 else 0
    fullmove = _parse_counter(parts[5], "fullmove number", 1) if len(parts) > 5 else 1

    return Position(Board(tuple(squares)), side, castling_part, ep, halfmove, fullmove)


def position_to_fen(pos: Position) -> str:
    """Serialise a :class:`Position` to FEN."""
    # 1. Board
    rows: list[str] = []
    for rank in range(7, -1, -1):
        empty = 0
        row = ""
        for file in range(8):
            piece = pos.board[make_square(file, rank)]
            if piece is None:
                empty += 1
            else:
                if empty:
                    row += str(empty)
                    empty = 0
                row += str(piece)
        if empty:
            row += str(empty)
        rows.append(row)
    board_str = "/".join(rows)

    # 2. Side
    side_str = "w" if pos.side_to_move == Color.WHITE else "b"

    # 3–4. Castling / en passant
    castling_str = pos.castling or "-"
    ep_str = square_name(pos.en_passant) if pos.en_passant is not None else "-"

    return f"{board_str} {side_str} {castling_str} {ep_str} {pos.halfmove_clock} {pos.fullmove_number}"


def _parse_counter(text: str, label: str, minimum: int) -> int:
    try:
        value = int(text)
    except ValueError:
        raise FormatError(f"Invalid FEN {label}: {text!r}") from None
    if value < minimum:
        raise FormatError(f"Invalid FEN {label}: {text!r}")
    return value
