"""Tests for the promotion dialog and its chooser adapter."""

from __future__ import annotations

import pytest

from gambit.core.enums import Color, PieceType
from gambit.ui.promotion_dialog import DialogPromotionChooser, PromotionDialog


def test_dialog_offers_four_pieces() -> None:
    dlg = PromotionDialog(Color.BLACK)
    assert list(dlg._buttons) == [
        PieceType.QUEEN,
        PieceType.ROOK,
        PieceType.BISHOP,
        PieceType.KNIGHT,
    ]
    assert dlg._buttons[PieceType.QUEEN].text() == "♛"
    assert dlg.selected == PieceType.QUEEN


def test_clicking_a_button_selects_it() -> None:
    dlg = PromotionDialog(Color.WHITE)
    dlg._buttons[PieceType.KNIGHT].click()
    assert dlg.selected == PieceType.KNIGHT


def test_chooser_delegates_to_dialog(monkeypatch: pytest.MonkeyPatch) -> None:
    asked: list[Color] = []

    def _ask(color: Color, parent: object) -> PieceType:
        asked.append(color)
        return PieceType.BISHOP

    monkeypatch.setattr("gambit.ui.promotion_dialog.PromotionDialog.ask", _ask)

    assert DialogPromotionChooser().choose(Color.WHITE) == PieceType.BISHOP
    assert asked == [Color.WHITE]


def test_reject_leaves_default_and_is_not_accepted() -> None:
    dlg = PromotionDialog(Color.WHITE)
    dlg.reject()
    assert dlg.result() == PromotionDialog.DialogCode.Rejected
    assert dlg.selected == PieceType.QUEEN
