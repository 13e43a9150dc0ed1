"""Application settings."""

from __future__ import annotations

from dataclasses import dataclass

# Back-rank mate in one for White: Qa8#.
DEFAULT_CUSTOM_FEN = "6k1/5ppp/8/8/8/5Q2/6PP/6K1 w - - 0 1"


@dataclass
class AppSettings:
    """All user-configurable settings."""

    # Board
    tile_size: int = 80
    show_coordinates: bool = True
    show_legal_moves: bool = True

    # Position loaded by the "load custom position" action
    custom_fen: str = DEFAULT_CUSTOM_FEN

    # Diagnostics
    log_level: str = "INFO"
