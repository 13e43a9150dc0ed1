"""GameController — the session orchestrator.

Coordinates: Position, MoveValidator, Rules, MoveHistory.
Emits events via simple callbacks so the UI / tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from gambit.core.board import Board
from gambit.core.enums import Color, GameEndReason, GameResult, PieceType
from gambit.core.move import Move
from gambit.core.notation import (
    STARTING_FEN,
    move_to_san,
    position_from_fen,
    position_to_fen,
)
from gambit.core.position import Position
from gambit.core.rules import Rules
from gambit.core.types import Square, square_name
from gambit.core.validator import MoveValidator
from gambit.game.history import HistoryState, MoveHistory
from gambit.game.interfaces import GamePhase, IGameController, IPromotionChooser

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[Move, str], None]  # move, san
GameOverCallback = Callable[[GameResult, GameEndReason], None]
HistoryCallback = Callable[[HistoryState], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_history_changed: list[HistoryCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController(IGameController):
    """Owns the live position and its history for a hot-seat game.

    Every public method runs to completion on the caller's thread (the Qt
    GUI thread in the application); nothing here is reentrant.
    """

    __slots__ = (
        "_position",
        "_history",
        "_phase",
        "_result",
        "_end_reason",
        "_promotion_chooser",
        "events",
    )

    def __init__(self, promotion_chooser: IPromotionChooser | None = None) -> None:
        self._position = Position()
        self._history = MoveHistory()
        self._phase = GamePhase.NOT_STARTED
        self._result = GameResult.IN_PROGRESS
        self._end_reason: GameEndReason | None = None
        self._promotion_chooser = promotion_chooser
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def position(self) -> Position:
        return self._position

    @property
    def board(self) -> Board:
        return self._position.board

    @property
    def history(self) -> MoveHistory:
        return self._history

    @property
    def phase(self) -> GamePhase:
        return self._phase

    @property
    def result(self) -> GameResult:
        return self._result

    @property
    def end_reason(self) -> GameEndReason | None:
        return self._end_reason

    @property
    def side_to_move(self) -> Color:
        return self._position.side_to_move

    @property
    def is_live(self) -> bool:
        return self._history.is_live

    @property
    def is_game_over(self) -> bool:
        return self._result.is_over

    @property
    def is_in_check(self) -> bool:
        return Rules.is_in_check(self._position)

    @property
    def current_label(self) -> str:
        return self._history.current_label() if len(self._history) else ""

    @property
    def last_move(self) -> Move | None:
        return self._history.current_move() if len(self._history) else None

    @property
    def fen(self) -> str:
        return position_to_fen(self._position)

    def set_promotion_chooser(self, chooser: IPromotionChooser | None) -> None:
        self._promotion_chooser = chooser

    def legal_destinations(self, from_sq: Square) -> list[Square]:
        """Highlight targets for the piece on *from_sq* (empty unless it may move)."""
        if self._phase != GamePhase.AWAITING_MOVE:
            return []
        piece = self._position.board[from_sq]
        if piece is None or piece.color != self._position.side_to_move:
            return []
        return MoveValidator(self._position).legal_destinations(from_sq)

    # ── IGameController impl ─────────────────────────────────────────────

    def new_game(self, fen: str | None = None) -> None:
        position = position_from_fen(fen or STARTING_FEN)
        self._position = position
        self._history.reset(position_to_fen(position))
        self._evaluate()
        _LOGGER.info("New game from %s", self._history.current())
        self._emit_history()

    def load_position(self, fen: str) -> None:
        """Replace the session with a custom position (history restarts)."""
        self.new_game(fen)

    def submit_move(
        self,
        from_sq: Square,
        to_sq: Square,
        promotion: PieceType | None = None,
    ) -> bool:
        if self._phase != GamePhase.AWAITING_MOVE:
            _LOGGER.debug("Move refused in phase %s", self._phase.name)
            return False

        position = self._position
        piece = position.board[from_sq]
        if piece is None or piece.color != position.side_to_move:
            return False

        validator = MoveValidator(position)
        if not validator.is_legal(piece, from_sq, to_sq):
            _LOGGER.debug(
                "Illegal move %s%s", square_name(from_sq), square_name(to_sq)
            )
            return False

        if validator.needs_promotion(from_sq, to_sq) and promotion is None:
            if self._promotion_chooser is not None:
                promotion = self._promotion_chooser.choose(piece.color)
                if promotion is None:
                    return False
        move = validator.make_move_for(from_sq, to_sq, promotion)

        san = move_to_san(position, move)
        position.make_move(move)
        fen = position_to_fen(position)
        self._history.record(fen, san, move)
        _LOGGER.debug("Position after %s: %s", san, fen)
        self._evaluate()

        self._emit_move(move, san)
        if self.is_game_over:
            self._emit_game_over()
        return True

    def undo(self) -> bool:
        return self._restore(self._history.undo())

    def redo(self) -> bool:
        return self._restore(self._history.redo())

    def seek(self, index: int) -> bool:
        """Show the position after history node *index* (0 = start)."""
        return self._restore(self._history.seek(index))

    # ── Internal helpers ─────────────────────────────────────────────────

    def _restore(self, fen: str | None) -> bool:
        if fen is None:
            return False
        self._position = position_from_fen(fen)
        self._evaluate()
        self._emit_history()
        return True

    def _evaluate(self) -> None:
        """Refresh result / phase for the position under the cursor."""
        self._end_reason = Rules.end_reason(self._position)
        self._result = Rules.result_for(self._position, self._end_reason)
        if not self._history.is_live:
            self._phase = GamePhase.REWOUND
        elif self._end_reason is not None:
            self._phase = GamePhase.GAME_OVER
        else:
            self._phase = GamePhase.AWAITING_MOVE

    def _emit_move(self, move: Move, san: str) -> None:
        for cb in self.events.on_move:
            cb(move, san)

    def _emit_game_over(self) -> None:
        assert self._end_reason is not None
        _LOGGER.info("Game over: %s (%s)", self._result.name, self._end_reason.name)
        for cb in self.events.on_game_over:
            cb(self._result, self._end_reason)

    def _emit_history(self) -> None:
        state = self._history.state
        for cb in self.events.on_history_changed:
            cb(state)
