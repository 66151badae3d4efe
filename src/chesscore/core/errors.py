"""Exception hierarchy for the rules core.

Checkmate, stalemate and draws are not errors; they are reported through
:class:`~chesscore.core.enums.GameResult`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from chesscore.core.move import Move


class ChessError(Exception):
    """Base class for every error raised by chesscore."""


class InvalidSquareError(ChessError, ValueError):
    """A square index, coordinate pair or name is off the board."""


class NotationError(ChessError, ValueError):
    """Malformed FEN, SAN or UCI text."""


class IllegalMoveError(ChessError):
    """A move is not in the legal set of the position it was played in."""

    def __init__(self, message: str, move: Move | None = None) -> None:
        super().__init__(message)
        self.move = move


class GameOverError(IllegalMoveError):
    """A move was submitted after the game reached a terminal result."""
