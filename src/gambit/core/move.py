"""Move value object."""

from __future__ import annotations

from dataclasses import dataclass

from gambit.core.enums import MoveFlag, PieceType
from gambit.core.types import Square, square_name


@dataclass(frozen=True, slots=True)
class Move:
    """One move: origin, destination, and how it is carried out.

    ``promotion`` is only meaningful with :attr:`MoveFlag.PROMOTION`.
    """

    from_sq: Square
    to_sq: Square
    flag: MoveFlag = MoveFlag.NORMAL
    promotion: PieceType | None = None

    @property
    def uci(self) -> str:
        """Long algebraic form, e.g. ``e2e4`` or ``a7a8q``."""
        text = square_name(self.from_sq) + square_name(self.to_sq)
        if self.promotion is not None:
            text += self.promotion.letter.lower()
        return text

    @property
    def is_castle(self) -> bool:
        return self.flag.is_castle

    @property
    def is_promotion(self) -> bool:
        return self.flag == MoveFlag.PROMOTION

    def __str__(self) -> str:
        return self.uci
