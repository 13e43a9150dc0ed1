"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass

from gambit.core.enums import Color, PieceType

_KINDS: dict[str, PieceType] = {kind.letter: kind for kind in PieceType}

# White glyphs occupy U+2654..U+2659; the black set follows six code points later.
_WHITE_GLYPHS: dict[PieceType, int] = {
    PieceType.KING: 0x2654,
    PieceType.QUEEN: 0x2655,
    PieceType.ROOK: 0x2656,
    PieceType.BISHOP: 0x2657,
    PieceType.KNIGHT: 0x2658,
    PieceType.PAWN: 0x2659,
}
_BLACK_GLYPH_OFFSET = 6


@dataclass(frozen=True, slots=True)
class Piece:
    """Immutable piece: a kind plus an owner.

    Empty squares are represented by ``None`` on the board, so a piece
    always carries both a colour and a type.
    """

    color: Color
    piece_type: PieceType

    def __str__(self) -> str:
        """FEN character (uppercase = white, lowercase = black)."""
        letter = self.piece_type.letter
        return letter if self.color == Color.WHITE else letter.lower()

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Create piece from FEN character, e.g. 'N' → white knight."""
        kind = _KINDS.get(char.upper()) if len(char) == 1 else None
        if kind is None:
            raise ValueError(f"Invalid piece character: {char!r}")
        return cls(Color.WHITE if char.isupper() else Color.BLACK, kind)

    @property
    def symbol(self) -> str:
        """Unicode chess symbol, e.g. ♞."""
        code = _WHITE_GLYPHS[self.piece_type]
        if self.color == Color.BLACK:
            code += _BLACK_GLYPH_OFFSET
        return chr(code)

    def promoted_to(self, piece_type: PieceType) -> Piece:
        """Same owner, new kind."""
        return Piece(self.color, piece_type)
