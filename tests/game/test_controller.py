"""Tests for GameController — the orchestrator."""

import logging

import pytest

from gambit.core.enums import Color, GameEndReason, GameResult, PieceType
from gambit.core.move import Move
from gambit.core.notation import STARTING_FEN
from gambit.core.piece import Piece
from gambit.core.types import (
    A1, A3, A7, A8, B1, C3, D8, E2, E4, E5, E7, F2, F3, G2, G4, H4,
)
from gambit.game.controller import GameController
from gambit.game.history import HistoryState
from gambit.game.interfaces import GamePhase, IPromotionChooser

PROMOTION_FEN = "4k3/P7/8/8/8/8/8/4K3 w - - 0 1"


class _FixedChooser(IPromotionChooser):
    def __init__(self, answer: PieceType | None) -> None:
        self.answer = answer
        self.asked: list[Color] = []

    def choose(self, color: Color) -> PieceType | None:
        self.asked.append(color)
        return self.answer


def _make_controller(fen: str | None = None) -> GameController:
    ctrl = GameController()
    ctrl.new_game(fen)
    return ctrl


def _play_fools_mate(ctrl: GameController) -> None:
    for from_sq, to_sq in ((F2, F3), (E7, E5), (G2, G4), (D8, H4)):
        assert ctrl.submit_move(from_sq, to_sq)


class TestNewGame:
    def test_not_started_refuses_moves(self) -> None:
        ctrl = GameController()
        assert ctrl.phase == GamePhase.NOT_STARTED
        assert not ctrl.submit_move(E2, E4)

    def test_phase_awaiting(self) -> None:
        ctrl = _make_controller()
        assert ctrl.phase == GamePhase.AWAITING_MOVE
        assert ctrl.fen == STARTING_FEN
        assert ctrl.side_to_move == Color.WHITE
        assert ctrl.result == GameResult.IN_PROGRESS
        assert len(ctrl.history) == 1

    def test_custom_fen(self) -> None:
        fen = "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"
        ctrl = _make_controller(fen)
        assert ctrl.side_to_move == Color.BLACK
        assert ctrl.fen == fen

    def test_emits_history_changed(self) -> None:
        ctrl = GameController()
        states: list[HistoryState] = []
        ctrl.events.on_history_changed.append(states.append)
        ctrl.new_game()
        assert states == [HistoryState.LIVE]

    def test_new_game_clears_history(self) -> None:
        ctrl = _make_controller()
        ctrl.submit_move(E2, E4)
        ctrl.new_game()
        assert len(ctrl.history) == 1
        assert ctrl.current_label == ""
        assert ctrl.last_move is None


class TestSubmitMove:
    def test_legal_move(self) -> None:
        ctrl = _make_controller()
        moves: list[tuple[Move, str]] = []
        ctrl.events.on_move.append(lambda move, san: moves.append((move, san)))

        assert ctrl.submit_move(E2, E4)
        assert ctrl.side_to_move == Color.BLACK
        assert ctrl.current_label == "e4"
        assert ctrl.board[E4] == Piece(Color.WHITE, PieceType.PAWN)
        assert len(moves) == 1
        assert moves[0][1] == "e4"
        assert ctrl.last_move == moves[0][0]

    def test_illegal_move_changes_nothing(self) -> None:
        ctrl = _make_controller()
        assert not ctrl.submit_move(E2, E5)
        assert ctrl.fen == STARTING_FEN
        assert len(ctrl.history) == 1

    def test_wrong_side_refused(self) -> None:
        ctrl = _make_controller()
        assert not ctrl.submit_move(E7, E5)

    def test_empty_square_refused(self) -> None:
        ctrl = _make_controller()
        assert not ctrl.submit_move(E4, E5)

    def test_in_check_flag(self) -> None:
        ctrl = _make_controller("4k3/8/8/8/8/8/8/R3K3 w - - 0 1")
        assert ctrl.submit_move(A1, A8)
        assert ctrl.is_in_check
        assert ctrl.current_label == "Ra8+"

    def test_logs_position_after_move(self, caplog: pytest.LogCaptureFixture) -> None:
        ctrl = _make_controller()
        with caplog.at_level(logging.DEBUG, logger="gambit.game.controller"):
            assert ctrl.submit_move(E2, E4)
        assert (
            "Position after e4: "
            "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"
        ) in caplog.text


class TestGameOver:
    def test_fools_mate(self) -> None:
        ctrl = _make_controller()
        results: list[tuple[GameResult, GameEndReason]] = []
        ctrl.events.on_game_over.append(lambda r, why: results.append((r, why)))

        _play_fools_mate(ctrl)

        assert ctrl.phase == GamePhase.GAME_OVER
        assert ctrl.result == GameResult.BLACK_WINS
        assert ctrl.end_reason == GameEndReason.CHECKMATE
        assert ctrl.is_game_over
        assert ctrl.current_label == "Qh4#"
        assert results == [(GameResult.BLACK_WINS, GameEndReason.CHECKMATE)]

    def test_moves_refused_after_mate(self) -> None:
        ctrl = _make_controller()
        _play_fools_mate(ctrl)
        assert not ctrl.submit_move(E2, E4)

    def test_stalemate_on_load(self) -> None:
        ctrl = _make_controller("7k/5Q2/6K1/8/8/8/8/8 b - - 0 1")
        assert ctrl.phase == GamePhase.GAME_OVER
        assert ctrl.result == GameResult.DRAW
        assert ctrl.end_reason == GameEndReason.STALEMATE

    def test_undo_out_of_mate_and_back(self) -> None:
        ctrl = _make_controller()
        _play_fools_mate(ctrl)
        assert ctrl.undo()
        assert ctrl.phase == GamePhase.REWOUND
        assert ctrl.result == GameResult.IN_PROGRESS
        assert ctrl.redo()
        assert ctrl.phase == GamePhase.GAME_OVER
        assert ctrl.result == GameResult.BLACK_WINS


class TestHistoryNavigation:
    def test_undo_at_start(self) -> None:
        ctrl = _make_controller()
        assert not ctrl.undo()
        assert not ctrl.redo()

    def test_rewound_refuses_moves(self) -> None:
        ctrl = _make_controller()
        ctrl.submit_move(E2, E4)
        ctrl.submit_move(E7, E5)
        assert ctrl.undo()
        assert ctrl.phase == GamePhase.REWOUND
        assert not ctrl.is_live
        assert not ctrl.submit_move(E7, E5)
        assert ctrl.legal_destinations(E7) == []

    def test_redo_returns_to_live(self) -> None:
        ctrl = _make_controller()
        ctrl.submit_move(E2, E4)
        ctrl.submit_move(E7, E5)
        live_fen = ctrl.fen
        ctrl.undo()
        ctrl.undo()
        assert ctrl.fen == STARTING_FEN
        ctrl.redo()
        ctrl.redo()
        assert ctrl.fen == live_fen
        assert ctrl.phase == GamePhase.AWAITING_MOVE
        assert ctrl.history.state == HistoryState.LIVE

    def test_seek(self) -> None:
        ctrl = _make_controller()
        ctrl.submit_move(E2, E4)
        ctrl.submit_move(E7, E5)
        assert ctrl.seek(0)
        assert ctrl.fen == STARTING_FEN
        assert not ctrl.seek(7)
        assert ctrl.seek(2)
        assert ctrl.is_live

    def test_history_events(self) -> None:
        ctrl = _make_controller()
        ctrl.submit_move(E2, E4)
        states: list[HistoryState] = []
        ctrl.events.on_history_changed.append(states.append)
        ctrl.undo()
        ctrl.redo()
        ctrl.redo()  # at the tail: no event
        assert states == [HistoryState.REWOUND, HistoryState.LIVE]


class TestLegalDestinations:
    def test_knight(self) -> None:
        assert _make_controller().legal_destinations(B1) == [A3, C3]

    def test_opponent_piece(self) -> None:
        assert _make_controller().legal_destinations(E7) == []


class TestPromotion:
    def test_default_queen_without_chooser(self) -> None:
        ctrl = _make_controller(PROMOTION_FEN)
        assert ctrl.submit_move(A7, A8)
        assert ctrl.board[A8] == Piece(Color.WHITE, PieceType.QUEEN)

    def test_chooser_picks_piece(self) -> None:
        chooser = _FixedChooser(PieceType.KNIGHT)
        ctrl = GameController(chooser)
        ctrl.new_game(PROMOTION_FEN)
        assert ctrl.submit_move(A7, A8)
        assert chooser.asked == [Color.WHITE]
        assert ctrl.board[A8] == Piece(Color.WHITE, PieceType.KNIGHT)
        assert ctrl.current_label == "a8=N"

    def test_chooser_cancel(self) -> None:
        ctrl = _make_controller(PROMOTION_FEN)
        ctrl.set_promotion_chooser(_FixedChooser(None))
        assert not ctrl.submit_move(A7, A8)
        assert ctrl.board[A7] == Piece(Color.WHITE, PieceType.PAWN)
        assert ctrl.fen == PROMOTION_FEN

    def test_explicit_piece_skips_chooser(self) -> None:
        chooser = _FixedChooser(PieceType.KNIGHT)
        ctrl = GameController(chooser)
        ctrl.new_game(PROMOTION_FEN)
        assert ctrl.submit_move(A7, A8, PieceType.ROOK)
        assert chooser.asked == []
        assert ctrl.board[A8] == Piece(Color.WHITE, PieceType.ROOK)


class TestLoadPosition:
    def test_load(self) -> None:
        ctrl = _make_controller()
        ctrl.submit_move(E2, E4)
        ctrl.load_position(PROMOTION_FEN)
        assert ctrl.fen == PROMOTION_FEN
        assert len(ctrl.history) == 1

    def test_invalid_fen_keeps_session(self) -> None:
        ctrl = _make_controller()
        ctrl.submit_move(E2, E4)
        fen = ctrl.fen
        with pytest.raises(ValueError):
            ctrl.load_position("not a fen")
        assert ctrl.fen == fen
        assert len(ctrl.history) == 2
