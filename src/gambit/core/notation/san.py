"""SAN-style move labels.

Labels carry the piece letter (none for pawns), a capture marker, the
destination square, a promotion suffix, castling tokens and check / mate
suffixes. Two identical pieces able to reach the same square are NOT
disambiguated: ``Nd2`` may stand for either knight.
"""

from __future__ import annotations

from gambit.core.enums import MoveFlag, PieceType
from gambit.core.move import Move
from gambit.core.position import Position
from gambit.core.rules import Rules
from gambit.core.types import FILES, file_of, square_name

def move_to_san(position: Position, move: Move) -> str:
    """Label a legal *move* given the *position* before the move."""
    board = position.board
    piece = board[move.from_sq]
    if piece is None:
        raise ValueError(f"No piece on {square_name(move.from_sq)}")

    if move.flag == MoveFlag.CASTLE_KINGSIDE:
        san = "O-O"
    elif move.flag == MoveFlag.CASTLE_QUEENSIDE:
        san = "O-O-O"
    else:
        is_capture = board[move.to_sq] is not None or move.flag == MoveFlag.EN_PASSANT
        if piece.piece_type == PieceType.PAWN:
            san = FILES[file_of(move.from_sq)] if is_capture else ""
        else:
            san = piece.piece_type.letter
        if is_capture:
            san += "x"
        san += square_name(move.to_sq)
        if move.is_promotion and move.promotion is not None:
            san += "=" + move.promotion.letter

    # Check / checkmate suffix
    position.make_move(move)
    try:
        if Rules.is_in_check(position):
            san += "+" if Rules.has_legal_move(position) else "#"
    finally:
        position.unmake_move(move)

    return san
