"""Attack detection — which squares a piece threatens.

Threats are deliberately distinct from moves: a pawn threatens its two
forward diagonals whether or not anything stands there, and never the
square straight ahead. Ownership of the target square is ignored, so a
defended piece counts as attacked.
"""

from __future__ import annotations

from gambit.core.board import Board
from gambit.core.enums import Color, PieceType
from gambit.core.piece import Piece
from gambit.core.types import Square, col_of, row_of

KNIGHT_OFFSETS: frozenset[tuple[int, int]] = frozenset(
    {(-2, -1), (-2, 1), (-1, -2), (-1, 2), (1, -2), (1, 2), (2, -1), (2, 1)}
)


def pawn_direction(color: Color) -> int:
    """Row step of a forward pawn move (white moves towards row 0)."""
    return -1 if color == Color.WHITE else 1


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def is_path_clear(board: Board, from_sq: Square, to_sq: Square) -> bool:
    """Every square strictly between two aligned squares is empty."""
    d_row = _sign(row_of(to_sq) - row_of(from_sq))
    d_col = _sign(col_of(to_sq) - col_of(from_sq))
    step = d_row * 8 + d_col
    sq = from_sq + step
    while sq != to_sq:
        if not board.is_empty(sq):
            return False
        sq += step
    return True


def threatens(board: Board, piece: Piece, from_sq: Square, to_sq: Square) -> bool:
    """Would *piece* standing on *from_sq* attack *to_sq*?"""
    if from_sq == to_sq:
        return False

    d_row = row_of(to_sq) - row_of(from_sq)
    d_col = col_of(to_sq) - col_of(from_sq)
    kind = piece.piece_type

    if kind == PieceType.PAWN:
        return d_row == pawn_direction(piece.color) and abs(d_col) == 1
    if kind == PieceType.KNIGHT:
        return (d_row, d_col) in KNIGHT_OFFSETS
    if kind == PieceType.KING:
        return abs(d_row) <= 1 and abs(d_col) <= 1
    if kind == PieceType.BISHOP:
        aligned = abs(d_row) == abs(d_col)
    elif kind == PieceType.ROOK:
        aligned = d_row == 0 or d_col == 0
    elif kind == PieceType.QUEEN:
        aligned = d_row == 0 or d_col == 0 or abs(d_row) == abs(d_col)
    else:
        raise ValueError(f"Unknown piece type: {kind!r}")
    return aligned and is_path_clear(board, from_sq, to_sq)


def is_square_attacked(board: Board, sq: Square, by_color: Color) -> bool:
    """Is *sq* attacked by any piece of *by_color*?"""
    for from_sq, piece in board.occupied():
        if piece.color == by_color and threatens(board, piece, from_sq, sq):
            return True
    return False
