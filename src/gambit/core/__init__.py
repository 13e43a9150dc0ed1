"""Core domain layer — pure chess rules with zero external dependencies.

Quick start::

    from gambit.core import (
        STARTING_FEN, MoveValidator, Rules, parse_square, position_from_fen,
    )

    pos = position_from_fen(STARTING_FEN)
    validator = MoveValidator(pos)
    print(validator.legal_destinations(parse_square("b1")))
    print(Rules.is_checkmate(pos))
"""

from gambit.core.attacks import is_square_attacked, threatens
from gambit.core.board import Board
from gambit.core.enums import (
    PROMOTION_TYPES,
    CastlingRights,
    Color,
    GameEndReason,
    GameResult,
    MoveFlag,
    PieceType,
)
from gambit.core.move import Move
from gambit.core.notation import (
    STARTING_FEN,
    move_to_san,
    position_from_fen,
    position_to_fen,
)
from gambit.core.piece import Piece
from gambit.core.position import Position
from gambit.core.rules import Rules
from gambit.core.types import (
    Square,
    file_of,
    make_square,
    parse_square,
    rank_of,
    square_name,
)
from gambit.core.validator import MoveValidator

__all__ = [
    # Enums / flags
    "PROMOTION_TYPES",
    "CastlingRights",
    "Color",
    "GameEndReason",
    "GameResult",
    "MoveFlag",
    "PieceType",
    # Types / helpers
    "Square",
    "file_of",
    "make_square",
    "parse_square",
    "rank_of",
    "square_name",
    # Domain objects
    "Board",
    "Move",
    "MoveValidator",
    "Piece",
    "Position",
    "Rules",
    # Attacks
    "is_square_attacked",
    "threatens",
    # Notation
    "STARTING_FEN",
    "move_to_san",
    "position_from_fen",
    "position_to_fen",
]
