"""Promotion dialog — lets the user pick the promotion piece."""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QFont
from PyQt6.QtWidgets import (
    QAbstractButton,
    QButtonGroup,
    QDialog,
    QDialogButtonBox,
    QGridLayout,
    QLabel,
    QToolButton,
    QWidget,
)

from gambit.core.enums import PROMOTION_TYPES, Color, PieceType
from gambit.core.piece import Piece
from gambit.game.interfaces import IPromotionChooser

_GLYPH_POINT_SIZE = 30


class PromotionDialog(QDialog):
    """Modal piece picker; one glyph button per promotion kind.

    Cancelling (Esc or the Cancel button) rejects the dialog, which
    :meth:`ask` reports as ``None``.
    """

    def __init__(self, color: Color, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setModal(True)
        self.setWindowTitle(f"Promote {color} pawn")

        self._selected = PROMOTION_TYPES[0]
        self._group = QButtonGroup(self)
        self._buttons: dict[PieceType, QToolButton] = {}

        grid = QGridLayout(self)
        prompt = QLabel("Promote pawn to:")
        prompt.setAlignment(Qt.AlignmentFlag.AlignCenter)
        grid.addWidget(prompt, 0, 0, 1, len(PROMOTION_TYPES))

        font = QFont("DejaVu Sans", _GLYPH_POINT_SIZE)
        for column, kind in enumerate(PROMOTION_TYPES):
            button = QToolButton()
            button.setText(Piece(color, kind).symbol)
            button.setFont(font)
            button.setToolTip(kind.name.title())
            button.setMinimumSize(64, 64)
            self._group.addButton(button, int(kind))
            self._buttons[kind] = button
            grid.addWidget(button, 1, column)
        self._group.buttonClicked.connect(self._on_clicked)

        cancel = QDialogButtonBox(QDialogButtonBox.StandardButton.Cancel)
        cancel.rejected.connect(self.reject)
        grid.addWidget(cancel, 2, 0, 1, len(PROMOTION_TYPES))

    @property
    def selected(self) -> PieceType:
        return self._selected

    def _on_clicked(self, button: QAbstractButton) -> None:
        self._selected = PieceType(self._group.id(button))
        self.accept()

    @staticmethod
    def ask(color: Color, parent: QWidget | None = None) -> PieceType | None:
        """Run the dialog; ``None`` when the user cancels."""
        dialog = PromotionDialog(color, parent)
        accepted = dialog.exec() == QDialog.DialogCode.Accepted
        return dialog.selected if accepted else None


class DialogPromotionChooser(IPromotionChooser):
    """Asks the user through :class:`PromotionDialog`."""

    def __init__(self, parent: QWidget | None = None) -> None:
        self._parent = parent

    def choose(self, color: Color) -> PieceType | None:
        return PromotionDialog.ask(color, self._parent)
