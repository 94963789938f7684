"""Legal move generation + attack detection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from gambit.core.enums import Color, PieceType
from gambit.core.move import Move
from gambit.core.types import Square, is_on_board, make_square

if TYPE_CHECKING:
    from gambit.core.position import Position


# Offsets are (file delta, rank delta), listed from the rank-8 side of the
# board downwards.  Generation order is observable through notation parsing.

KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, 2),
    (1, 2),
    (-2, 1),
    (2, 1),
    (-2, -1),
    (2, -1),
    (-1, -2),
    (1, -2),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, 1),
    (0, 1),
    (1, 1),
    (-1, 0),
    (1, 0),
    (-1, -1),
    (0, -1),
    (1, -1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, 1), (1, 1), (-1, -1), (1, -1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((0, 1), (0, -1), (-1, 0), (1, 0))
QUEEN_DIRS: tuple[tuple[int, int], ...] = KING_OFFSETS

_HOME_RANK: tuple[int, int] = (1, 6)  # indexed by Color


# -- Precomputed lookup tables ---------------------------------------------


def _build_targets(
    offsets: tuple[tuple[int, int], ...],
) -> tuple[tuple[Square, ...], ...]:
    targets: list[tuple[Square, ...]] = []
    for sq in range(64):
        file_idx = sq & 7
        rank_idx = sq >> 3
        moves: list[Square] = []
        for df, dr in offsets:
            af = file_idx + df
            ar = rank_idx + dr
            if is_on_board(af, ar):
                moves.append(make_square(af, ar))
        targets.append(tuple(moves))
    return tuple(targets)


def _build_pawn_attackers() -> tuple[tuple[tuple[Square, ...], ...], ...]:
    """[color][sq] -> squares from which a pawn of *color* attacks *sq*."""
    per_color: list[tuple[tuple[Square, ...], ...]] = []
    for color in (Color.WHITE, Color.BLACK):
        behind = -color.forward
        per_color.append(_build_targets(((-1, behind), (1, behind))))
    return tuple(per_color)


def _build_rays(
    directions: tuple[tuple[int, int], ...],
) -> tuple[tuple[tuple[Square, ...], ...], ...]:
    rays_per_square: list[tuple[tuple[Square, ...], ...]] = []
    for sq in range(64):
        file_idx = sq & 7
        rank_idx = sq >> 3
        square_rays: list[tuple[Square, ...]] = []
        for df, dr in directions:
            af = file_idx + df
            ar = rank_idx + dr
            ray: list[Square] = []
            while is_on_board(af, ar):
                ray.append(make_square(af, ar))
                af += df
                ar += dr
            square_rays.append(tuple(ray))
        rays_per_square.append(tuple(square_rays))
    return tuple(rays_per_square)


_KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
_KING_TARGETS = _build_targets(KING_OFFSETS)
_PAWN_ATTACKERS = _build_pawn_attackers()

_BISHOP_RAYS = _build_rays(BISHOP_DIRS)
_ROOK_RAYS = _build_rays(ROOK_DIRS)
_QUEEN_RAYS = _build_rays(QUEEN_DIRS)

_SLIDER_RAYS: dict[PieceType, tuple[tuple[tuple[Square, ...], ...], ...]] = {
    PieceType.BISHOP: _BISHOP_RAYS,
    PieceType.ROOK: _ROOK_RAYS,
    PieceType.QUEEN: _QUEEN_RAYS,
}
_DIAGONAL_ATTACKERS = (PieceType.BISHOP, PieceType.QUEEN)
_ORTHOGONAL_ATTACKERS = (PieceType.ROOK, PieceType.QUEEN)


class MoveGenerator:
    """Generates legal moves for a given :class:`Position`.

    The position is never modified: every candidate is tried on a scratch
    successor and kept only if the mover's king is not attacked afterwards.
    Castling and en passant are not generated.
    """

    __slots__ = ("_pos", "_board")

    def __init__(self, position: Position) -> None:
        self._pos = position
        self._board = position.board

    # -- Public API ---------------------------------------------------------

    def legal_moves(self, sq: Square) -> list[Move]:
        """Legal moves of the piece on *sq*.

        Empty if *sq* is empty or holds a piece of the side not to move.
        """
        piece = self._board[sq]
        if piece is None or piece.color != self._pos.side_to_move:
            return []
        return [m for m in self.candidate_moves(sq) if self._keeps_king_safe(m)]

    def all_legal_moves(self) -> list[Move]:
        """Legal moves of every piece of the side to move, in scan order."""
        moves: list[Move] = []
        for sq in self._board.all_pieces(self._pos.side_to_move):
            moves.extend(self.legal_moves(sq))
        return moves

    def has_legal_move(self) -> bool:
        """Whether the side to move can move at all."""
        for sq in self._board.all_pieces(self._pos.side_to_move):
            if self.legal_moves(sq):
                return True
        return False

    def candidate_moves(self, sq: Square) -> list[Move]:
        """Geometric reach of the piece on *sq* (self-check not filtered)."""
        piece = self._board[sq]
        if piece is None:
            return []

        moves: list[Move] = []
        color = piece.color
        ptype = piece.piece_type
        if ptype == PieceType.PAWN:
            self._gen_pawn(sq, color, moves)
        elif ptype == PieceType.KNIGHT:
            self._gen_jumps(sq, color, ptype, _KNIGHT_TARGETS[sq], moves)
        elif ptype == PieceType.KING:
            self._gen_jumps(sq, color, ptype, _KING_TARGETS[sq], moves)
        else:
            self._gen_sliding(sq, color, ptype, _SLIDER_RAYS[ptype][sq], moves)
        return moves

    # -- Attack detection (public) -----------------------------------------

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked by the opponent?

        A side without a king is never in check.
        """
        king_sq = self._board.king_square(color)
        if king_sq is None:
            return False
        return self.is_square_attacked(king_sq, color.opposite)

    def is_square_attacked(self, sq: Square, by_color: Color) -> bool:
        """Is *sq* attacked by any piece of *by_color*?"""
        board = self._board

        for from_sq in _PAWN_ATTACKERS[int(by_color)][sq]:
            piece = board[from_sq]
            if (
                piece is not None
                and piece.color == by_color
                and piece.piece_type == PieceType.PAWN
            ):
                return True

        for from_sq in _KNIGHT_TARGETS[sq]:
            piece = board[from_sq]
            if (
                piece is not None
                and piece.color == by_color
                and piece.piece_type == PieceType.KNIGHT
            ):
                return True

        for from_sq in _KING_TARGETS[sq]:
            piece = board[from_sq]
            if (
                piece is not None
                and piece.color == by_color
                and piece.piece_type == PieceType.KING
            ):
                return True

        if self._ray_attack(_BISHOP_RAYS[sq], by_color, _DIAGONAL_ATTACKERS):
            return True
        return self._ray_attack(_ROOK_RAYS[sq], by_color, _ORTHOGONAL_ATTACKERS)

    # -- Internals ----------------------------------------------------------

    def _ray_attack(
        self,
        rays: tuple[tuple[Square, ...], ...],
        by_color: Color,
        attackers: tuple[PieceType, ...],
    ) -> bool:
        board = self._board
        for ray in rays:
            for to_sq in ray:
                piece = board[to_sq]
                if piece is None:
                    continue
                if piece.color == by_color and piece.piece_type in attackers:
                    return True
                break
        return False

    def _keeps_king_safe(self, move: Move) -> bool:
        mover = self._board[move.from_sq]
        assert mover is not None
        after = self._pos.make_move(move)
        return not MoveGenerator(after).is_in_check(mover.color)

    # -- Piece-specific generators (private) -------------------------------

    def _gen_pawn(self, sq: Square, color: Color, moves: list[Move]) -> None:
        board = self._board
        file_idx = sq & 7
        rank_idx = sq >> 3
        forward = color.forward
        next_rank = rank_idx + forward
        if not 0 <= next_rank < 8:
            return

        one_step = make_square(file_idx, next_rank)
        if board.is_empty(one_step):
            moves.append(Move(sq, one_step, PieceType.PAWN))
            if rank_idx == _HOME_RANK[int(color)]:
                two_step = make_square(file_idx, next_rank + forward)
                if board.is_empty(two_step):
                    moves.append(Move(sq, two_step, PieceType.PAWN))

        for df in (-1, 1):
            cap_file = file_idx + df
            if not 0 <= cap_file < 8:
                continue
            cap_sq = make_square(cap_file, next_rank)
            target = board[cap_sq]
            if target is not None and target.color != color:
                moves.append(Move(sq, cap_sq, PieceType.PAWN, is_capture=True))

    def _gen_jumps(
        self,
        sq: Square,
        color: Color,
        ptype: PieceType,
        targets: tuple[Square, ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        for to_sq in targets:
            target = board[to_sq]
            if target is None:
                moves.append(Move(sq, to_sq, ptype))
            elif target.color != color:
                moves.append(Move(sq, to_sq, ptype, is_capture=True))

    def _gen_sliding(
        self,
        sq: Square,
        color: Color,
        ptype: PieceType,
        rays: tuple[tuple[Square, ...], ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        for ray in rays:
            for to_sq in ray:
                target = board[to_sq]
                if target is None:
                    moves.append(Move(sq, to_sq, ptype))
                    continue
                if target.color != color:
                    moves.append(Move(sq, to_sq, ptype, is_capture=True))
                break
