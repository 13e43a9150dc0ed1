"""Move legality: per-piece movement rules, castling, en passant, king safety."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import TYPE_CHECKING

from gambit.core.attacks import is_square_attacked, pawn_direction, threatens
from gambit.core.enums import PROMOTION_TYPES, CastlingRights, Color, MoveFlag, PieceType
from gambit.core.move import Move
from gambit.core.piece import Piece
from gambit.core.position import en_passant_victim
from gambit.core.types import Square, col_of, make_square, rank_of, row_of

if TYPE_CHECKING:
    from gambit.core.position import Position

_LOGGER = logging.getLogger(__name__)

# Row a pawn starts on, and the row it promotes on.
_PAWN_HOME_ROW: dict[Color, int] = {Color.WHITE: 6, Color.BLACK: 1}
_PAWN_LAST_ROW: dict[Color, int] = {Color.WHITE: 0, Color.BLACK: 7}

_KING_HOME: dict[Color, Square] = {
    Color.WHITE: make_square(4, 0),
    Color.BLACK: make_square(4, 7),
}


class MoveValidator:
    """Decides whether a piece may go from one square to another.

    Two levels are exposed:

    * :meth:`can_move_to`: movement rules of the piece itself, capture
      ownership, castling conditions, and "a king may not step onto an
      attacked square".
    * :meth:`is_legal`: additionally requires that the mover's own king is
      not left attacked once the move is played (pins, ignored checks).

    The validator never mutates the wrapped position; simulations run on a
    copy.
    """

    __slots__ = ("_pos", "_board")

    def __init__(self, position: Position) -> None:
        self._pos = position
        self._board = position.board

    # -- Public API ---------------------------------------------------------

    def can_move_to(self, piece: Piece, from_sq: Square, to_sq: Square) -> bool:
        """Movement-rule legality of *piece* going *from_sq* → *to_sq*."""
        if from_sq == to_sq:
            return False

        target = self._board[to_sq]
        if target is not None:
            if target.color == piece.color:
                return False
            # Kings are never captured.
            if target.piece_type == PieceType.KING:
                return False

        kind = piece.piece_type
        if kind == PieceType.PAWN:
            return self._pawn_can_move(piece, from_sq, to_sq)
        if kind == PieceType.KING:
            return self._king_can_move(piece, from_sq, to_sq)
        if kind in (PieceType.KNIGHT, PieceType.BISHOP, PieceType.ROOK, PieceType.QUEEN):
            return threatens(self._board, piece, from_sq, to_sq)
        raise ValueError(f"Unknown piece type: {kind!r}")

    def is_legal(self, piece: Piece, from_sq: Square, to_sq: Square) -> bool:
        """Fully legal: movement rules plus own king safe after the move."""
        if not self.can_move_to(piece, from_sq, to_sq):
            return False

        sim = self._pos.copy()
        sim.board[from_sq] = piece
        sim.make_move(self._classify(piece, from_sq, to_sq, PieceType.QUEEN))
        king_sq = sim.board.king_square(piece.color)
        return not is_square_attacked(sim.board, king_sq, piece.color.opposite)

    def legal_destinations(self, from_sq: Square) -> list[Square]:
        """Every square the piece on *from_sq* may legally move to."""
        piece = self._board[from_sq]
        if piece is None:
            return []
        return [to_sq for to_sq in range(64) if self.is_legal(piece, from_sq, to_sq)]

    def generate_legal_moves(self) -> list[Move]:
        """All strictly legal moves for the side to move."""
        return list(self._iter_legal_moves())

    def needs_promotion(self, from_sq: Square, to_sq: Square) -> bool:
        """Does the piece on *from_sq* reach its promotion rank on *to_sq*?"""
        piece = self._board[from_sq]
        return (
            piece is not None
            and piece.piece_type == PieceType.PAWN
            and row_of(to_sq) == _PAWN_LAST_ROW[piece.color]
        )

    def make_move_for(
        self,
        from_sq: Square,
        to_sq: Square,
        promotion: PieceType | None = None,
    ) -> Move:
        """Build the :class:`Move` (with its flag) for a from/to intent.

        Promotions default to a queen when *promotion* is ``None``.
        """
        piece = self._board[from_sq]
        if piece is None:
            raise ValueError(f"No piece on {from_sq}")
        if promotion is not None and promotion not in PROMOTION_TYPES:
            raise ValueError(f"Invalid promotion piece: {promotion!r}")
        return self._classify(piece, from_sq, to_sq, promotion or PieceType.QUEEN)

    # -- Piece rules (private) ----------------------------------------------

    def _pawn_can_move(self, piece: Piece, from_sq: Square, to_sq: Square) -> bool:
        forward = pawn_direction(piece.color)
        d_row = row_of(to_sq) - row_of(from_sq)
        d_col = col_of(to_sq) - col_of(from_sq)
        target = self._board[to_sq]

        if d_col == 0:
            if target is not None:
                return False
            if d_row == forward:
                return True
            return (
                d_row == 2 * forward
                and row_of(from_sq) == _PAWN_HOME_ROW[piece.color]
                and self._board.is_empty(from_sq + 8 * forward)
            )

        if abs(d_col) == 1 and d_row == forward:
            if target is not None:
                return True
            return self._is_en_passant(piece, from_sq, to_sq)
        return False

    def _is_en_passant(self, piece: Piece, from_sq: Square, to_sq: Square) -> bool:
        if to_sq != self._pos.en_passant:
            return False
        victim = self._board[en_passant_victim(Move(from_sq, to_sq))]
        return victim == Piece(piece.color.opposite, PieceType.PAWN)

    def _king_can_move(self, piece: Piece, from_sq: Square, to_sq: Square) -> bool:
        d_row = row_of(to_sq) - row_of(from_sq)
        d_col = col_of(to_sq) - col_of(from_sq)

        if abs(d_row) <= 1 and abs(d_col) <= 1:
            pass
        elif d_row == 0 and abs(d_col) == 2:
            if not self._can_castle(piece, from_sq, to_sq):
                return False
        else:
            return False

        # Lift the king so it cannot shield the square it steps along.
        lifted = self._board.copy()
        lifted[from_sq] = None
        if is_square_attacked(lifted, to_sq, piece.color.opposite):
            _LOGGER.debug("King move %s-%s rejected: destination attacked", from_sq, to_sq)
            return False
        return True

    def _can_castle(self, piece: Piece, from_sq: Square, to_sq: Square) -> bool:
        color = piece.color
        if from_sq != _KING_HOME[color]:
            return False

        kingside = to_sq > from_sq
        if not self._pos.castling & CastlingRights.for_wing(color, kingside):
            return False

        rook_sq = make_square(7 if kingside else 0, rank_of(from_sq))
        if self._board[rook_sq] != Piece(color, PieceType.ROOK):
            return False

        step = 1 if kingside else -1
        for sq in range(from_sq + step, rook_sq, step):
            if not self._board.is_empty(sq):
                return False

        opponent = color.opposite
        for sq in (from_sq, from_sq + step, to_sq):
            if is_square_attacked(self._board, sq, opponent):
                return False
        return True

    # -- Move construction --------------------------------------------------

    def _classify(
        self,
        piece: Piece,
        from_sq: Square,
        to_sq: Square,
        promotion: PieceType,
    ) -> Move:
        kind = piece.piece_type
        if kind == PieceType.PAWN:
            if row_of(to_sq) == _PAWN_LAST_ROW[piece.color]:
                return Move(from_sq, to_sq, MoveFlag.PROMOTION, promotion)
            if abs(row_of(to_sq) - row_of(from_sq)) == 2:
                return Move(from_sq, to_sq, MoveFlag.DOUBLE_PAWN)
            if (
                col_of(to_sq) != col_of(from_sq)
                and self._board[to_sq] is None
                and to_sq == self._pos.en_passant
            ):
                return Move(from_sq, to_sq, MoveFlag.EN_PASSANT)
        elif kind == PieceType.KING and abs(col_of(to_sq) - col_of(from_sq)) == 2:
            if to_sq > from_sq:
                return Move(from_sq, to_sq, MoveFlag.CASTLE_KINGSIDE)
            return Move(from_sq, to_sq, MoveFlag.CASTLE_QUEENSIDE)
        return Move(from_sq, to_sq)

    def _iter_legal_moves(self) -> Iterator[Move]:
        color = self._pos.side_to_move
        for from_sq, piece in list(self._board.occupied()):
            if piece.color != color:
                continue
            for to_sq in range(64):
                if not self.is_legal(piece, from_sq, to_sq):
                    continue
                move = self._classify(piece, from_sq, to_sq, PieceType.QUEEN)
                if move.is_promotion:
                    for pt in PROMOTION_TYPES:
                        yield Move(from_sq, to_sq, MoveFlag.PROMOTION, pt)
                else:
                    yield move
