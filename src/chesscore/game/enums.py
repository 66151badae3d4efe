"""Enumerations for the game layer."""

from __future__ import annotations

from enum import IntEnum, auto

from chesscore.core.enums import GameResult


class GamePhase(IntEnum):
    """Finite-state-machine states for a chess game."""

    AWAITING_MOVE = auto()
    GAME_OVER = auto()


class DrawOffer(IntEnum):
    """Draw offer status between players."""

    NONE = 0
    OFFERED = auto()
    ACCEPTED = auto()
    DECLINED = auto()


class GameEndReason(IntEnum):
    """Why a finished game ended."""

    NONE = 0
    CHECKMATE = auto()
    RESIGNATION = auto()
    STALEMATE = auto()
    FIFTY_MOVE_RULE = auto()
    THREEFOLD_REPETITION = auto()
    INSUFFICIENT_MATERIAL = auto()
    DRAW_AGREED = auto()

    @classmethod
    def for_result(cls, result: GameResult) -> GameEndReason:
        """Reason implied by a result reached over the board."""
        return _REASON_BY_RESULT[result]


_REASON_BY_RESULT: dict[GameResult, GameEndReason] = {
    GameResult.IN_PROGRESS: GameEndReason.NONE,
    GameResult.WHITE_WINS: GameEndReason.CHECKMATE,
    GameResult.BLACK_WINS: GameEndReason.CHECKMATE,
    GameResult.DRAW_BY_STALEMATE: GameEndReason.STALEMATE,
    GameResult.DRAW_BY_FIFTY_MOVE: GameEndReason.FIFTY_MOVE_RULE,
    GameResult.DRAW_BY_REPETITION: GameEndReason.THREEFOLD_REPETITION,
    GameResult.DRAW_BY_INSUFFICIENT_MATERIAL: GameEndReason.INSUFFICIENT_MATERIAL,
    GameResult.DRAW_BY_AGREEMENT: GameEndReason.DRAW_AGREED,
}
