"""High-level chess rules: check, checkmate and stalemate detection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from gambit.core.attacks import is_square_attacked
from gambit.core.enums import Color, GameEndReason, GameResult
from gambit.core.types import Square
from gambit.core.validator import MoveValidator

if TYPE_CHECKING:
    from gambit.core.position import Position


class Rules:
    """Static rule-checker that operates on a :class:`Position`.

    Checkmate and stalemate are found by brute force: every own piece is
    tried against every square, each candidate is played, the king is
    tested, and the move is taken back.
    """

    @staticmethod
    def find_king(position: Position, color: Color) -> Square:
        """Square of *color*'s king.

        Raises ``ValueError`` when the king is missing.
        """
        return position.board.king_square(color)

    @staticmethod
    def is_in_check(position: Position, color: Color | None = None) -> bool:
        """Is *color*'s king (default: side to move) attacked?"""
        if color is None:
            color = position.side_to_move
        king_sq = Rules.find_king(position, color)
        return is_square_attacked(position.board, king_sq, color.opposite)

    @staticmethod
    def has_legal_move(position: Position) -> bool:
        """Does the side to move have a move that leaves its king unattacked?

        Stops at the first one found.
        """
        color = position.side_to_move
        validator = MoveValidator(position)
        for from_sq, piece in list(position.board.occupied()):
            if piece.color != color:
                continue
            for to_sq in range(64):
                if not validator.can_move_to(piece, from_sq, to_sq):
                    continue
                move = validator.make_move_for(from_sq, to_sq)
                position.make_move(move)
                try:
                    safe = not Rules.is_in_check(position, color)
                finally:
                    position.unmake_move(move)
                if safe:
                    return True
        return False

    @staticmethod
    def is_checkmate(position: Position) -> bool:
        if not Rules.is_in_check(position):
            return False
        return not Rules.has_legal_move(position)

    @staticmethod
    def is_stalemate(position: Position) -> bool:
        if Rules.is_in_check(position):
            return False
        return not Rules.has_legal_move(position)

    @staticmethod
    def end_reason(position: Position) -> GameEndReason | None:
        """Why the game is over in *position*, or ``None`` if it is not."""
        if Rules.has_legal_move(position):
            return None
        if Rules.is_in_check(position):
            return GameEndReason.CHECKMATE
        return GameEndReason.STALEMATE

    @staticmethod
    def game_result(position: Position) -> GameResult:
        """Determine the current game result."""
        return Rules.result_for(position, Rules.end_reason(position))

    @staticmethod
    def result_for(position: Position, reason: GameEndReason | None) -> GameResult:
        """Map an end *reason* in *position* to the game result."""
        if reason is None:
            return GameResult.IN_PROGRESS
        if reason == GameEndReason.STALEMATE:
            return GameResult.DRAW
        # The side to move has been mated.
        return GameResult.win_for(position.side_to_move.opposite)

