"""chesscore — chess rules engine and move-legality core."""

from chesscore.core import (
    GameResult,
    IllegalMoveError,
    Move,
    Position,
    apply_move,
    is_attacked,
    legal_moves,
    pseudo_legal_moves,
)
from chesscore.game import GameState

__version__ = "0.1.0"

__all__ = [
    "GameResult",
    "GameState",
    "IllegalMoveError",
    "Move",
    "Position",
    "apply_move",
    "is_attacked",
    "legal_moves",
    "pseudo_legal_moves",
    "__version__",
]
