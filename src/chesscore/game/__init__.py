"""Game management layer — state machine and controller.

Quick start::

    from chesscore.game import GameController

    ctrl = GameController()
    ctrl.new_game()
    ctrl.events.on_game_over.append(print)
"""

from chesscore.game.controller import GameController, GameEvents
from chesscore.game.enums import DrawOffer, GameEndReason, GamePhase
from chesscore.game.state import GameState, MoveRecord

__all__ = [
    "DrawOffer",
    "GameEndReason",
    "GamePhase",
    "GameController",
    "GameEvents",
    "GameState",
    "MoveRecord",
]
