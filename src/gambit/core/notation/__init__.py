"""Notation package: FEN parsing/serialisation and SAN-style labels."""

from gambit.core.notation.fen import (
    STARTING_FEN,
    placement_to_fen,
    position_from_fen,
    position_to_fen,
)
from gambit.core.notation.san import move_to_san

__all__ = [
    "STARTING_FEN",
    "placement_to_fen",
    "position_from_fen",
    "position_to_fen",
    "move_to_san",
]
