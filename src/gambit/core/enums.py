"""Enumerations shared by every layer: colours, kinds, flags, outcomes."""

from __future__ import annotations

from enum import IntEnum, IntFlag, auto


class Color(IntEnum):
    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color.BLACK if self is Color.WHITE else Color.WHITE

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Piece kinds, cheapest first."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6

    @property
    def letter(self) -> str:
        """Upper-case notation letter (``P`` for pawns)."""
        return "PNBRQK"[self - 1]


# Order offered to the player when a pawn promotes.
PROMOTION_TYPES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)


class MoveFlag(IntEnum):
    """What a move does beyond relocating one piece."""

    NORMAL = 0
    DOUBLE_PAWN = 1  # sets the en-passant target
    EN_PASSANT = 2
    CASTLE_KINGSIDE = 3
    CASTLE_QUEENSIDE = 4
    PROMOTION = 5

    @property
    def is_castle(self) -> bool:
        return self in (MoveFlag.CASTLE_KINGSIDE, MoveFlag.CASTLE_QUEENSIDE)


class CastlingRights(IntFlag):
    """Which castles are still allowed, one bit per king/side pair."""

    NONE = 0
    WHITE_KINGSIDE = auto()
    WHITE_QUEENSIDE = auto()
    BLACK_KINGSIDE = auto()
    BLACK_QUEENSIDE = auto()

    WHITE_BOTH = WHITE_KINGSIDE | WHITE_QUEENSIDE
    BLACK_BOTH = BLACK_KINGSIDE | BLACK_QUEENSIDE
    ALL = WHITE_BOTH | BLACK_BOTH

    @classmethod
    def for_color(cls, color: Color) -> CastlingRights:
        """Both rights belonging to *color*."""
        return cls.WHITE_BOTH if color == Color.WHITE else cls.BLACK_BOTH

    @classmethod
    def for_wing(cls, color: Color, kingside: bool) -> CastlingRights:
        if color == Color.WHITE:
            return cls.WHITE_KINGSIDE if kingside else cls.WHITE_QUEENSIDE
        return cls.BLACK_KINGSIDE if kingside else cls.BLACK_QUEENSIDE


class GameResult(IntEnum):
    IN_PROGRESS = 0
    WHITE_WINS = 1
    BLACK_WINS = 2
    DRAW = 3

    @classmethod
    def win_for(cls, color: Color) -> GameResult:
        return cls.WHITE_WINS if color == Color.WHITE else cls.BLACK_WINS

    @property
    def is_over(self) -> bool:
        return self != GameResult.IN_PROGRESS


class GameEndReason(IntEnum):
    """Why a finished game ended."""

    CHECKMATE = auto()
    STALEMATE = auto()
