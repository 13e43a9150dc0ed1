"""Abstract interfaces for the game layer.

The controller depends on these ABCs, not on the Qt widgets that end up
implementing them.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from gambit.core.enums import Color, PieceType
    from gambit.core.types import Square


class GamePhase(IntEnum):
    """Finite-state-machine states for a session."""

    NOT_STARTED = auto()
    AWAITING_MOVE = auto()
    REWOUND = auto()  # browsing history; new moves refused
    GAME_OVER = auto()


class IPromotionChooser(ABC):
    """Asked which piece a pawn becomes on the last rank."""

    @abstractmethod
    def choose(self, color: Color) -> PieceType | None:
        """Return QUEEN, ROOK, BISHOP or KNIGHT, or ``None`` to cancel."""


class IGameController(ABC):
    """Interface for the session orchestrator."""

    @abstractmethod
    def new_game(self, fen: str | None = None) -> None:
        """Set up a new game (standard start when *fen* is ``None``)."""

    @abstractmethod
    def submit_move(
        self,
        from_sq: Square,
        to_sq: Square,
        promotion: PieceType | None = None,
    ) -> bool:
        """Submit a move intent. Returns True if legal and applied."""

    @abstractmethod
    def undo(self) -> bool:
        """Step the history back one move. Returns True on success."""

    @abstractmethod
    def redo(self) -> bool:
        """Step the history forward one move. Returns True on success."""
