"""Visual theme constants and QSS styles for Gambit."""

from __future__ import annotations

from dataclasses import dataclass

from PyQt6.QtGui import QColor


@dataclass(frozen=True)
class BoardTheme:
    """Colour scheme for the chessboard."""

    light_square: QColor
    dark_square: QColor
    highlight_from: QColor  # picked-up piece origin
    highlight_to: QColor  # legal destinations
    highlight_check: QColor  # king in check
    last_move: QColor
    coord_light: QColor  # coordinate text on dark squares
    coord_dark: QColor  # coordinate text on light squares
    white_piece: QColor
    black_piece: QColor

    @classmethod
    def default(cls) -> BoardTheme:
        return cls(
            light_square=QColor(240, 217, 181),
            dark_square=QColor(181, 136, 99),
            highlight_from=QColor(219, 157, 70, 200),  # golden
            highlight_to=QColor(200, 50, 50, 110),  # red tint
            highlight_check=QColor(255, 0, 0, 120),
            last_move=QColor(155, 199, 0, 105),
            coord_light=QColor(181, 136, 99),
            coord_dark=QColor(240, 217, 181),
            white_piece=QColor(255, 255, 255),
            black_piece=QColor(20, 20, 20),
        )


APP_STYLE = """
QMainWindow, QWidget {
    background-color: #2b2b2b;
    color: #e0e0e0;
}
QLabel#notationLabel {
    font-size: 18px;
    font-weight: bold;
    padding: 4px;
}
QListWidget {
    background-color: #1f1f1f;
    border: 1px solid #3a3a3a;
}
QListWidget::item:selected {
    background-color: #4a6b8a;
}
QStatusBar {
    background-color: #1f1f1f;
}
"""
