"""FEN parsing and serialization."""

from __future__ import annotations

from itertools import groupby

from gambit.core.board import Board
from gambit.core.enums import CastlingRights, Color, PieceType
from gambit.core.piece import Piece
from gambit.core.position import Position
from gambit.core.types import Square, parse_square, rank_of, square_name

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

# Digits allowed for runs of empty squares.
_RUN_LENGTHS = "12345678"

_CASTLING_CHARS: dict[str, CastlingRights] = {
    "K": CastlingRights.WHITE_KINGSIDE,
    "Q": CastlingRights.WHITE_QUEENSIDE,
    "k": CastlingRights.BLACK_KINGSIDE,
    "q": CastlingRights.BLACK_QUEENSIDE,
}


def _expand_rank(rank_text: str, fen: str) -> list[Piece | None]:
    """One placement rank as eight cells; digits stand for empty runs."""
    cells: list[Piece | None] = []
    for ch in rank_text:
        if ch in _RUN_LENGTHS:
            cells.extend([None] * int(ch))
        else:
            cells.append(Piece.from_char(ch))
        if len(cells) > 8:
            break
    if len(cells) != 8:
        raise ValueError(f"Invalid FEN rank width ({rank_text!r}): {fen!r}")
    return cells


def _parse_counter(text: str, fen: str) -> int:
    """ASCII decimal digits only."""
    if not (text.isascii() and text.isdigit()):
        raise ValueError(f"Invalid FEN move counter {text!r}: {fen!r}")
    return int(text)


def _parse_placement(placement: str, fen: str) -> Board:
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise ValueError(f"Invalid FEN board (must contain 8 ranks): {fen!r}")
    board = Board(cell for rank_text in ranks for cell in _expand_rank(rank_text, fen))

    for color in Color:
        kings = board.count(Piece(color, PieceType.KING))
        if kings != 1:
            raise ValueError(f"Invalid FEN: expected one {color} king, found {kings}")
    return board


def position_from_fen(fen: str) -> Position:
    """Parse a FEN string into a :class:`Position`.

    Raises ``ValueError`` on any malformed field; unknown symbols are never
    skipped.
    """
    parts = fen.split()
    if not (4 <= len(parts) <= 6):
        raise ValueError(f"Invalid FEN (need 4-6 fields): {fen!r}")

    placement, side_part, castling_part, ep_part = parts[:4]

    # 1. Piece placement
    board = _parse_placement(placement, fen)

    # 2. Side to move
    if side_part == "w":
        side = Color.WHITE
    elif side_part == "b":
        side = Color.BLACK
    else:
        raise ValueError(f"Invalid FEN side-to-move field: {side_part!r}")

    # 3. Castling
    castling = CastlingRights.NONE
    if castling_part != "-":
        seen: set[str] = set()
        for ch in castling_part:
            right = _CASTLING_CHARS.get(ch)
            if right is None or ch in seen:
                raise ValueError(f"Invalid FEN castling field: {castling_part!r}")
            seen.add(ch)
            castling |= right

    # 4. En passant
    ep: Square | None = None
    if ep_part != "-":
        ep = parse_square(ep_part)
        expected_ep_rank = 5 if side == Color.WHITE else 2
        if rank_of(ep) != expected_ep_rank:
            raise ValueError(
                f"Invalid FEN en-passant square for side-to-move: {ep_part!r}"
            )

    # 5–6. Clocks (optional)
    halfmove = _parse_counter(parts[4], fen) if len(parts) > 4 else 0
    fullmove = _parse_counter(parts[5], fen) if len(parts) > 5 else 1
    if fullmove < 1:
        raise ValueError(f"Invalid FEN fullmove number: {parts[5]!r}")

    return Position(board, side, castling, ep, halfmove, fullmove)


def placement_to_fen(board: Board) -> str:
    """Serialise only the piece-placement field."""
    ranks = []
    for row in board.rows():
        tokens = []
        for is_empty, run in groupby(row, key=lambda cell: cell is None):
            cells = list(run)
            tokens.append(str(len(cells)) if is_empty else "".join(map(str, cells)))
        ranks.append("".join(tokens))
    return "/".join(ranks)


def position_to_fen(pos: Position) -> str:
    """Serialise a :class:`Position` to FEN."""
    board_str = placement_to_fen(pos.board)
    side_str = "w" if pos.side_to_move == Color.WHITE else "b"

    castling_str = "".join(
        ch for ch, right in _CASTLING_CHARS.items() if pos.castling & right
    )
    if not castling_str:
        castling_str = "-"

    ep_str = square_name(pos.en_passant) if pos.en_passant is not None else "-"

    return f"{board_str} {side_str} {castling_str} {ep_str} {pos.halfmove_clock} {pos.fullmove_number}"
