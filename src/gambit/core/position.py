"""Position — complete game state (board + metadata) as a value snapshot."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from gambit.core.board import Board
from gambit.core.enums import Color, PieceType
from gambit.core.errors import IllegalMoveError
from gambit.core.move import Move
from gambit.core.piece import Piece
from gambit.core.types import Square, rank_of, square_name


@dataclass(frozen=True, slots=True)
class Position:
    """Full chess position: board + side to move + castling + en passant + clocks.

    Positions are immutable; :meth:`make_move` returns the successor position.
    The castling string and en-passant target are carried verbatim for
    serialisation only: move generation ignores them.
    """

    board: Board = field(default_factory=Board.initial)
    side_to_move: Color = Color.WHITE
    castling: str = "KQkq"
    en_passant: Square | None = None
    halfmove_clock: int = 0
    fullmove_number: int = 1

    # ── Core move operation ──────────────────────────────────────────────

    def make_move(self, move: Move) -> Position:
        """Position after relocating the piece on ``move.from_sq``.

        No legality check happens here beyond the origin being occupied.
        Pawns reaching the last rank always become queens.  The castling
        string, en-passant target and halfmove clock are left untouched.
        """
        piece = self.board[move.from_sq]
        if piece is None:
            raise IllegalMoveError(f"No piece on {square_name(move.from_sq)}")

        placed = piece
        if piece.piece_type == PieceType.PAWN and rank_of(move.to_sq) in (0, 7):
            placed = Piece(piece.color, PieceType.QUEEN)

        board = self.board.replace({move.from_sq: None, move.to_sq: placed})

        fullmove = self.fullmove_number
        if self.side_to_move == Color.BLACK:
            fullmove += 1

        return replace(
            self,
            board=board,
            side_to_move=self.side_to_move.opposite,
            fullmove_number=fullmove,
        )

    # ── Utilities ────────────────────────────────────────────────────────

    def piece_at(self, sq: Square) -> Piece | None:
        return self.board[sq]

    @classmethod
    def initial(cls) -> Position:
        """Standard starting position, White to move."""
        return cls()
