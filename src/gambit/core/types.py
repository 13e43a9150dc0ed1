"""Square type alias and coordinate helpers.

Squares are numbered in FEN placement order, row by row from the top:
a8=0, b8=1 ... h8=7, a7=8 ... h1=63. Row 0 is the eighth rank, so rows
grow towards White's side of the board.
"""

from __future__ import annotations

from typing import TypeAlias

Square: TypeAlias = int  # 0–63

FILES = "abcdefgh"
RANKS = "12345678"


def row_of(sq: Square) -> int:
    """Row 0–7 counted from the top (rank 8)."""
    return sq >> 3


def col_of(sq: Square) -> int:
    """Column 0–7 counted from the a-file."""
    return sq & 7


# Files coincide with columns.
file_of = col_of


def rank_of(sq: Square) -> int:
    """Zero-based rank: 0 for rank 1, 7 for rank 8."""
    return 7 - row_of(sq)


def make_square(file: int, rank: int) -> Square:
    """Square at zero-based *file* and *rank*."""
    return (7 - rank) * 8 + file


def square_name(sq: Square) -> str:
    """Algebraic name: 0 → ``'a8'``, 63 → ``'h1'``."""
    return FILES[file_of(sq)] + RANKS[rank_of(sq)]


def parse_square(name: str) -> Square:
    """Inverse of :func:`square_name`; raises ``ValueError`` on bad input."""
    if len(name) != 2 or name[0] not in FILES or name[1] not in RANKS:
        raise ValueError(f"Invalid square name: {name!r}")
    return make_square(FILES.index(name[0]), RANKS.index(name[1]))


def is_valid_square(sq: int) -> bool:
    return 0 <= sq < 64


# ── Named square constants ──────────────────────────────────────────────────

A8, B8, C8, D8, E8, F8, G8, H8 = range(0, 8)
A7, B7, C7, D7, E7, F7, G7, H7 = range(8, 16)
A6, B6, C6, D6, E6, F6, G6, H6 = range(16, 24)
A5, B5, C5, D5, E5, F5, G5, H5 = range(24, 32)
A4, B4, C4, D4, E4, F4, G4, H4 = range(32, 40)
A3, B3, C3, D3, E3, F3, G3, H3 = range(40, 48)
A2, B2, C2, D2, E2, F2, G2, H2 = range(48, 56)
A1, B1, C1, D1, E1, F1, G1, H1 = range(56, 64)
