"""Board - piece placement on an 8x8 board."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from gambit.core.enums import Color, PieceType
from gambit.core.piece import Piece
from gambit.core.types import Square

# Start placement, row 0 (black's back rank) first; "." is empty.
_START_ROWS = (
    "rnbqkbnr",
    "pppppppp",
    "........",
    "........",
    "........",
    "........",
    "PPPPPPPP",
    "RNBQKBNR",
)


class Board:
    """Mutable 64-square board in FEN placement order (a8 first).

    Cells hold a :class:`Piece` or ``None``.
    """

    __slots__ = ("_cells",)

    def __init__(self, cells: Iterable[Piece | None] | None = None) -> None:
        self._cells: list[Piece | None] = [None] * 64 if cells is None else list(cells)
        if len(self._cells) != 64:
            raise ValueError(f"A board has 64 squares, got {len(self._cells)}")

    def __getitem__(self, sq: Square) -> Piece | None:
        return self._cells[sq]

    def __setitem__(self, sq: Square, piece: Piece | None) -> None:
        self._cells[sq] = piece

    def __iter__(self) -> Iterator[Piece | None]:
        return iter(self._cells)

    def is_empty(self, sq: Square) -> bool:
        return self._cells[sq] is None

    def rows(self) -> Iterator[list[Piece | None]]:
        """The eight rows from the top (rank 8) down, a-file first."""
        for start in range(0, 64, 8):
            yield self._cells[start : start + 8]

    # ── Queries ──────────────────────────────────────────────────────────

    def occupied(self) -> Iterator[tuple[Square, Piece]]:
        """Yield ``(square, piece)`` for every non-empty square."""
        return ((sq, p) for sq, p in enumerate(self._cells) if p is not None)

    def pieces(self, color: Color, piece_type: PieceType | None = None) -> list[Square]:
        """Squares holding *color*'s pieces, optionally of one *piece_type*."""
        found = []
        for sq, piece in self.occupied():
            if piece.color != color:
                continue
            if piece_type is None or piece.piece_type == piece_type:
                found.append(sq)
        return found

    def find_king(self, color: Color) -> Square | None:
        try:
            return self._cells.index(Piece(color, PieceType.KING))
        except ValueError:
            return None

    def king_square(self, color: Color) -> Square:
        """Like :meth:`find_king` but a missing king raises ``ValueError``."""
        sq = self.find_king(color)
        if sq is None:
            raise ValueError(f"No {color} king on board")
        return sq

    def count(self, piece: Piece) -> int:
        return self._cells.count(piece)

    # ── Construction ─────────────────────────────────────────────────────

    def copy(self) -> Board:
        return Board(self._cells)

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        return cls(
            None if ch == "." else Piece.from_char(ch)
            for row in _START_ROWS
            for ch in row
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._cells == other._cells

    def __repr__(self) -> str:
        lines = [
            f"{8 - index} " + " ".join(str(p) if p else "." for p in row)
            for index, row in enumerate(self.rows())
        ]
        lines.append("  a b c d e f g h")
        return "\n".join(lines)
