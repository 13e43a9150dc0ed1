"""MainWindow — top-level window assembling all UI components."""

from __future__ import annotations

import logging

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QAction, QKeySequence
from PyQt6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QListWidget,
    QMainWindow,
    QStatusBar,
    QVBoxLayout,
    QWidget,
)

from gambit.core.enums import Color, GameEndReason, GameResult
from gambit.game.controller import GameController
from gambit.game.interfaces import GamePhase
from gambit.ui.board_view import BoardView
from gambit.ui.promotion_dialog import DialogPromotionChooser
from gambit.ui.settings import AppSettings

_LOGGER = logging.getLogger(__name__)

_RESULT_TEXT: dict[GameResult, str] = {
    GameResult.WHITE_WINS: "White wins",
    GameResult.BLACK_WINS: "Black wins",
    GameResult.DRAW: "Draw",
}


class MainWindow(QMainWindow):
    """Main application window for Gambit."""

    def __init__(self, settings: AppSettings | None = None) -> None:
        super().__init__()
        self.setWindowTitle("Gambit")
        self.setMinimumSize(760, 560)

        self._settings = settings or AppSettings()
        self._controller = GameController(DialogPromotionChooser(self))
        self._syncing_list = False

        self._setup_ui()
        self._setup_actions()
        self._connect_signals()

        self._controller.new_game()

    # ── Accessors (used by tests) ────────────────────────────────────────

    @property
    def controller(self) -> GameController:
        return self._controller

    @property
    def board_view(self) -> BoardView:
        return self._board_view

    @property
    def status_text(self) -> str:
        return self._status_label.text()

    @property
    def notation_text(self) -> str:
        return self._notation_label.text()

    # ── UI setup ─────────────────────────────────────────────────────────

    def _setup_ui(self) -> None:
        central = QWidget()
        self.setCentralWidget(central)
        root = QHBoxLayout(central)
        root.setContentsMargins(6, 6, 6, 6)
        root.setSpacing(6)

        # Board (left)
        self._board_view = BoardView(self._settings.tile_size)
        scene = self._board_view.board_scene
        scene.set_show_coordinates(self._settings.show_coordinates)
        scene.set_show_legal_moves(self._settings.show_legal_moves)
        scene.set_destination_provider(self._controller.legal_destinations)
        root.addWidget(self._board_view, stretch=3)

        # Right panel
        right = QVBoxLayout()
        right.setSpacing(6)

        self._notation_label = QLabel("")
        self._notation_label.setObjectName("notationLabel")
        self._notation_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        right.addWidget(self._notation_label)

        self._move_list = QListWidget()
        self._move_list.setFocusPolicy(Qt.FocusPolicy.NoFocus)
        right.addWidget(self._move_list, stretch=1)

        right_widget = QWidget()
        right_widget.setLayout(right)
        right_widget.setFixedWidth(220)
        root.addWidget(right_widget)

        # Status bar
        self._status = QStatusBar()
        self.setStatusBar(self._status)
        self._status_label = QLabel("Ready")
        self._status.addWidget(self._status_label)

    def _setup_actions(self) -> None:
        menu_bar = self.menuBar()
        assert menu_bar is not None

        game_menu = menu_bar.addMenu("&Game")
        assert game_menu is not None

        self._act_new_game = self._add_action(
            game_menu, "New game", [QKeySequence("Ctrl+N")], self._on_new_game
        )
        self._act_load_custom = self._add_action(
            game_menu, "Load custom position", [QKeySequence("L")], self._on_load_custom
        )
        game_menu.addSeparator()
        self._act_undo = self._add_action(
            game_menu,
            "Undo",
            [QKeySequence("Left"), QKeySequence("Ctrl+Z")],
            self._on_undo,
        )
        self._act_redo = self._add_action(
            game_menu,
            "Redo",
            [QKeySequence("Right"), QKeySequence("Ctrl+Y")],
            self._on_redo,
        )
        game_menu.addSeparator()
        self._act_flip = self._add_action(
            game_menu, "Flip board", [QKeySequence("F")], self._on_flip
        )
        game_menu.addSeparator()
        self._act_quit = self._add_action(
            game_menu, "Quit", [QKeySequence("Ctrl+Q")], self.close
        )
        self._act_quit.setMenuRole(QAction.MenuRole.QuitRole)

    def _add_action(self, menu, text: str, shortcuts: list[QKeySequence], slot) -> QAction:
        action = QAction(text, self)
        action.setShortcuts(shortcuts)
        action.triggered.connect(slot)
        menu.addAction(action)
        return action

    # ── Signal wiring ────────────────────────────────────────────────────

    def _connect_signals(self) -> None:
        self._board_view.move_requested.connect(self._on_move_requested)
        self._move_list.currentRowChanged.connect(self._on_history_selected)

        events = self._controller.events
        events.on_move.append(lambda move, san: self._refresh())
        events.on_history_changed.append(lambda state: self._refresh())
        events.on_game_over.append(self._on_game_over)

    # ── Handlers ─────────────────────────────────────────────────────────

    def _on_move_requested(self, from_sq: int, to_sq: int) -> None:
        if not self._controller.submit_move(from_sq, to_sq):
            # Snap the dragged piece back and keep the status current.
            self._refresh()

    def _on_new_game(self) -> None:
        self._controller.new_game()

    def _on_load_custom(self) -> None:
        fen = self._settings.custom_fen
        try:
            self._controller.load_position(fen)
        except ValueError as exc:
            _LOGGER.warning("Could not load custom position %r: %s", fen, exc)
            self._status_label.setText(f"Could not load position: {exc}")

    def _on_undo(self) -> None:
        self._controller.undo()

    def _on_redo(self) -> None:
        self._controller.redo()

    def _on_flip(self) -> None:
        scene = self._board_view.board_scene
        scene.set_flipped(not scene.is_flipped())
        self._refresh()

    def _on_history_selected(self, row: int) -> None:
        if self._syncing_list or row < 0:
            return
        self._controller.seek(row)

    def _on_game_over(self, result: GameResult, reason: GameEndReason) -> None:
        _LOGGER.debug("Game over shown: %s by %s", result.name, reason.name)

    # ── View sync ────────────────────────────────────────────────────────

    def _refresh(self) -> None:
        """Redraw board, move list and status from the controller."""
        controller = self._controller
        scene = self._board_view.board_scene

        scene.set_position(controller.board, controller.side_to_move)
        scene.set_interactive(controller.phase == GamePhase.AWAITING_MOVE)
        scene.highlight_last_move(controller.last_move)
        if controller.is_in_check:
            scene.highlight_check(controller.board.find_king(controller.side_to_move))
        else:
            scene.highlight_check(None)

        self._notation_label.setText(controller.current_label)
        self._sync_move_list()
        self._act_undo.setEnabled(controller.history.can_undo)
        self._act_redo.setEnabled(controller.history.can_redo)
        self._status_label.setText(self._status_message())

    def _sync_move_list(self) -> None:
        history = self._controller.history
        self._syncing_list = True
        try:
            self._move_list.clear()
            self._move_list.addItem("Start")
            for index, label in enumerate(history.labels()):
                number = index // 2 + 1
                prefix = f"{number}." if index % 2 == 0 else f"{number}..."
                self._move_list.addItem(f"{prefix} {label}")
            self._move_list.setCurrentRow(history.cursor)
        finally:
            self._syncing_list = False

    def _status_message(self) -> str:
        controller = self._controller
        if not controller.is_live:
            history = controller.history
            return (
                f"Viewing move {history.cursor} of {len(history) - 1}"
                " (Right to go forward)"
            )
        if controller.is_game_over:
            reason = controller.end_reason
            assert reason is not None
            return f"{reason.name.capitalize()}. {_RESULT_TEXT[controller.result]}"
        side = "White" if controller.side_to_move == Color.WHITE else "Black"
        if controller.is_in_check:
            return f"{side} to move (check)"
        return f"{side} to move"
