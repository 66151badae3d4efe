"""High-level chess rules: checkmate, stalemate, draw detection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chesscore.core.enums import Color, GameResult, PieceKind
from chesscore.core.legality import has_legal_move, is_in_check
from chesscore.core.types import square_color

if TYPE_CHECKING:
    from chesscore.core.position import Position

FIFTY_MOVE_HALFMOVES = 100
REPETITION_LIMIT = 3

_MINOR_KINDS = (PieceKind.KNIGHT, PieceKind.BISHOP)


class Rules:
    """Static rule-checker that operates on a :class:`Position`.

    All draws are automatic: the fifty-move rule at 100 half-moves, threefold
    repetition on the third occurrence and insufficient material.
    """

    @staticmethod
    def is_in_check(position: Position) -> bool:
        return is_in_check(position)

    @staticmethod
    def is_checkmate(position: Position) -> bool:
        return is_in_check(position) and not has_legal_move(position)

    @staticmethod
    def is_stalemate(position: Position) -> bool:
        return not is_in_check(position) and not has_legal_move(position)

    @staticmethod
    def is_insufficient_material(position: Position) -> bool:
        """K vs K, K+B vs K, K+N vs K, K+B vs K+B (same-color bishops)."""
        board = position.board
        total = board.piece_count()

        if total == 2:
            return True

        if total == 3:
            return any(
                board.has_piece(color, kind)
                for color in Color
                for kind in _MINOR_KINDS
            )

        if total == 4:
            white_bishops = board.pieces(Color.WHITE, PieceKind.BISHOP)
            black_bishops = board.pieces(Color.BLACK, PieceKind.BISHOP)
            if len(white_bishops) == 1 and len(black_bishops) == 1:
                return square_color(white_bishops[0]) == square_color(black_bishops[0])

        return False

    @staticmethod
    def is_fifty_move_rule(position: Position) -> bool:
        return position.halfmove_clock >= FIFTY_MOVE_HALFMOVES

    @staticmethod
    def is_threefold_repetition(repetitions: int) -> bool:
        return repetitions >= REPETITION_LIMIT

    @staticmethod
    def game_result(position: Position, repetitions: int = 1) -> GameResult:
        """Determine the result of *position*.

        *repetitions* is how many times the position's key has occurred in
        the game so far, the current occurrence included.  Conditions are
        checked in order: mate, stalemate, fifty-move rule, repetition,
        insufficient material.
        """
        if not has_legal_move(position):
            if is_in_check(position):
                return GameResult.win_for(position.side_to_move.opposite)
            return GameResult.DRAW_BY_STALEMATE

        if Rules.is_fifty_move_rule(position):
            return GameResult.DRAW_BY_FIFTY_MOVE

        if Rules.is_threefold_repetition(repetitions):
            return GameResult.DRAW_BY_REPETITION

        if Rules.is_insufficient_material(position):
            return GameResult.DRAW_BY_INSUFFICIENT_MATERIAL

        return GameResult.IN_PROGRESS
