"""Position — complete game state (board + metadata) with make/unmake."""

from __future__ import annotations

from dataclasses import dataclass

from gambit.core.board import Board
from gambit.core.enums import CastlingRights, Color, MoveFlag, PieceType
from gambit.core.move import Move
from gambit.core.piece import Piece
from gambit.core.types import Square, file_of, make_square, rank_of

# Castling right lost when a rook corner is vacated or captured on.
_ROOK_CORNERS: dict[Square, CastlingRights] = {
    make_square(0, 0): CastlingRights.WHITE_QUEENSIDE,
    make_square(7, 0): CastlingRights.WHITE_KINGSIDE,
    make_square(0, 7): CastlingRights.BLACK_QUEENSIDE,
    make_square(7, 7): CastlingRights.BLACK_KINGSIDE,
}


def en_passant_victim(move: Move) -> Square:
    """Square of the pawn removed by an en-passant capture."""
    return make_square(file_of(move.to_sq), rank_of(move.from_sq))


def castling_rook_squares(move: Move) -> tuple[Square, Square]:
    """``(rook_from, rook_to)`` for a castling *move*."""
    rank = rank_of(move.from_sq)
    if move.flag == MoveFlag.CASTLE_KINGSIDE:
        return make_square(7, rank), make_square(5, rank)
    return make_square(0, rank), make_square(3, rank)


@dataclass(frozen=True, slots=True)
class _Undo:
    """Everything :meth:`Position.unmake_move` needs to revert one move."""

    move: Move
    mover: Piece
    captured: Piece | None
    captured_on: Square
    castling: CastlingRights
    en_passant: Square | None
    halfmove_clock: int


class Position:
    """Board plus side to move, castling rights, en-passant target and clocks.

    :meth:`make_move` pushes an undo record and :meth:`unmake_move` pops
    it, so simulated moves always revert exactly.
    """

    __slots__ = (
        "board",
        "side_to_move",
        "castling",
        "en_passant",
        "halfmove_clock",
        "fullmove_number",
        "_undo_stack",
    )

    def __init__(
        self,
        board: Board | None = None,
        side_to_move: Color = Color.WHITE,
        castling: CastlingRights = CastlingRights.ALL,
        en_passant: Square | None = None,
        halfmove_clock: int = 0,
        fullmove_number: int = 1,
    ) -> None:
        self.board = board if board is not None else Board.initial()
        self.side_to_move = side_to_move
        self.castling = castling
        self.en_passant = en_passant
        self.halfmove_clock = halfmove_clock
        self.fullmove_number = fullmove_number
        self._undo_stack: list[_Undo] = []

    # ── Make / unmake ────────────────────────────────────────────────────

    def make_move(self, move: Move) -> None:
        """Apply *move* (assumed legal; see :class:`~gambit.core.validator.MoveValidator`)."""
        board = self.board
        mover = board[move.from_sq]
        if mover is None:
            raise ValueError(f"No piece on {move.from_sq}")

        captured_on = (
            en_passant_victim(move) if move.flag == MoveFlag.EN_PASSANT else move.to_sq
        )
        undo = _Undo(
            move=move,
            mover=mover,
            captured=board[captured_on],
            captured_on=captured_on,
            castling=self.castling,
            en_passant=self.en_passant,
            halfmove_clock=self.halfmove_clock,
        )
        self._undo_stack.append(undo)

        board[move.from_sq] = None
        board[captured_on] = None
        board[move.to_sq] = (
            mover.promoted_to(move.promotion)
            if move.is_promotion and move.promotion is not None
            else mover
        )
        if move.is_castle:
            rook_from, rook_to = castling_rook_squares(move)
            board[rook_from], board[rook_to] = None, board[rook_from]

        self.en_passant = self._skipped_square(move)
        self._revoke_castling(move, mover)
        self._tick_clocks(mover, undo.captured)
        self.side_to_move = self.side_to_move.opposite

    def unmake_move(self, move: Move | None = None) -> None:
        """Revert the most recent :meth:`make_move`.

        Passing *move* checks that it is the move being reverted.
        """
        if not self._undo_stack:
            raise ValueError("No move to unmake")
        undo = self._undo_stack[-1]
        if move is not None and move != undo.move:
            raise ValueError(f"Cannot unmake {move}: last move was {undo.move}")
        self._undo_stack.pop()

        board = self.board
        last = undo.move
        if last.is_castle:
            rook_from, rook_to = castling_rook_squares(last)
            board[rook_to], board[rook_from] = None, board[rook_to]
        board[last.to_sq] = None
        board[undo.captured_on] = undo.captured
        board[last.from_sq] = undo.mover

        self.side_to_move = self.side_to_move.opposite
        if self.side_to_move == Color.BLACK:
            self.fullmove_number -= 1
        self.castling = undo.castling
        self.en_passant = undo.en_passant
        self.halfmove_clock = undo.halfmove_clock

    # ── Bookkeeping ──────────────────────────────────────────────────────

    @staticmethod
    def _skipped_square(move: Move) -> Square | None:
        """En-passant target left behind by a double pawn push."""
        if move.flag != MoveFlag.DOUBLE_PAWN:
            return None
        rank = (rank_of(move.from_sq) + rank_of(move.to_sq)) // 2
        return make_square(file_of(move.from_sq), rank)

    def _revoke_castling(self, move: Move, mover: Piece) -> None:
        if mover.piece_type == PieceType.KING:
            self.castling &= ~CastlingRights.for_color(mover.color)
        for sq in (move.from_sq, move.to_sq):
            if sq in _ROOK_CORNERS:
                self.castling &= ~_ROOK_CORNERS[sq]

    def _tick_clocks(self, mover: Piece, captured: Piece | None) -> None:
        reset = mover.piece_type == PieceType.PAWN or captured is not None
        self.halfmove_clock = 0 if reset else self.halfmove_clock + 1
        if self.side_to_move == Color.BLACK:
            self.fullmove_number += 1

    # ── Utilities ────────────────────────────────────────────────────────

    def copy(self) -> Position:
        """Independent copy with an empty undo stack."""
        return Position(
            board=self.board.copy(),
            side_to_move=self.side_to_move,
            castling=self.castling,
            en_passant=self.en_passant,
            halfmove_clock=self.halfmove_clock,
            fullmove_number=self.fullmove_number,
        )

    def __repr__(self) -> str:
        return f"Position(side_to_move={self.side_to_move}, board=\n{self.board!r})"
