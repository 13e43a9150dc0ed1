"""Tests for MainWindow wiring: moves, history, custom loads."""

from __future__ import annotations

import logging

import pytest

from gambit.core.enums import Color, PieceType
from gambit.core.notation import STARTING_FEN
from gambit.core.piece import Piece
from gambit.core.types import A7, A8, E2, E4, E5, E7
from gambit.game.interfaces import GamePhase
from gambit.ui.main_window import MainWindow
from gambit.ui.settings import DEFAULT_CUSTOM_FEN, AppSettings


def _window(**overrides: object) -> MainWindow:
    return MainWindow(AppSettings(**overrides))  # type: ignore[arg-type]


def test_starts_with_standard_game() -> None:
    window = _window()
    assert window.controller.fen == STARTING_FEN
    assert window.status_text == "White to move"
    assert window.notation_text == ""
    assert window._move_list.count() == 1
    assert len(window.board_view.board_scene._piece_items) == 32


def test_move_updates_notation_and_list() -> None:
    window = _window()
    window._on_move_requested(E2, E4)

    assert window.notation_text == "e4"
    assert window.status_text == "Black to move"
    assert window._move_list.count() == 2
    assert window._move_list.item(1).text() == "1. e4"
    assert len(window.board_view.board_scene._last_move_items) == 2


def test_illegal_move_is_ignored() -> None:
    window = _window()
    window._on_move_requested(E2, E5)
    assert window.controller.fen == STARTING_FEN
    assert window.status_text == "White to move"


def test_undo_redo_actions() -> None:
    window = _window()
    window._on_move_requested(E2, E4)
    window._on_move_requested(E7, E5)

    window._act_undo.trigger()
    assert window.controller.phase == GamePhase.REWOUND
    assert window.status_text.startswith("Viewing move 1 of 2")
    assert window.notation_text == "e4"
    assert window.board_view.board_scene._interactive is False

    window._act_redo.trigger()
    assert window.controller.is_live
    assert window.notation_text == "e5"
    assert window._move_list.item(2).text() == "1... e5"
    assert window.board_view.board_scene._interactive is True


def test_undo_shortcuts() -> None:
    window = _window()
    shortcuts = [seq.toString() for seq in window._act_undo.shortcuts()]
    assert shortcuts == ["Left", "Ctrl+Z"]
    shortcuts = [seq.toString() for seq in window._act_redo.shortcuts()]
    assert shortcuts == ["Right", "Ctrl+Y"]


def test_selecting_history_row_seeks() -> None:
    window = _window()
    window._on_move_requested(E2, E4)
    window._move_list.setCurrentRow(0)
    assert window.controller.history.cursor == 0
    assert window.controller.fen == STARTING_FEN


def test_load_custom_position() -> None:
    window = _window()
    window._act_load_custom.trigger()
    assert window.controller.fen == DEFAULT_CUSTOM_FEN
    assert window.controller.history.labels() == []


def test_load_custom_position_reports_errors(caplog: pytest.LogCaptureFixture) -> None:
    window = _window(custom_fen="8/8/8 w")
    with caplog.at_level(logging.WARNING, logger="gambit.ui.main_window"):
        window._on_load_custom()
    assert window.status_text.startswith("Could not load position")
    assert window.controller.fen == STARTING_FEN
    assert "Could not load custom position" in caplog.text


def test_checkmate_status_and_highlight() -> None:
    window = _window(custom_fen="3Q2k1/5ppp/8/8/8/8/8/7K b - - 0 1")
    window._on_load_custom()
    assert window.status_text == "Checkmate. White wins"
    assert len(window.board_view.board_scene._check_items) == 1
    assert window.board_view.board_scene._interactive is False


def test_promotion_uses_dialog(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        "gambit.ui.promotion_dialog.PromotionDialog.ask",
        lambda _color, _parent: PieceType.ROOK,
    )
    window = _window(custom_fen="4k3/P7/8/8/8/8/8/4K3 w - - 0 1")
    window._on_load_custom()
    window._on_move_requested(A7, A8)
    assert window.controller.board[A8] == Piece(Color.WHITE, PieceType.ROOK)
    assert window.notation_text == "a8=R+"


def test_flip_action() -> None:
    window = _window()
    window._act_flip.trigger()
    assert window.board_view.board_scene.is_flipped()
    window._act_flip.trigger()
    assert not window.board_view.board_scene.is_flipped()


def test_settings_applied_to_scene() -> None:
    window = _window(show_coordinates=False, tile_size=60)
    scene = window.board_view.board_scene
    assert scene.tile == 60
    assert all(not item.isVisible() for item in scene._coord_items)
