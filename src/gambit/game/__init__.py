"""Session layer — controller, history, interfaces.

Quick start::

    from gambit.core import parse_square
    from gambit.game import GameController

    ctrl = GameController()
    ctrl.new_game()
    ctrl.submit_move(parse_square("e2"), parse_square("e4"))
    ctrl.undo()
"""

from gambit.game.controller import GameController, GameEvents
from gambit.game.history import HistoryNode, HistoryState, MoveHistory
from gambit.game.interfaces import GamePhase, IGameController, IPromotionChooser

__all__ = [
    # Interfaces
    "GamePhase",
    "IGameController",
    "IPromotionChooser",
    # Concrete
    "GameController",
    "GameEvents",
    "HistoryNode",
    "HistoryState",
    "MoveHistory",
]
