"""Move applier — the single entry point that turns a move into a new position."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from chesscore.core.errors import IllegalMoveError
from chesscore.core.legality import find_legal_move

if TYPE_CHECKING:
    from chesscore.core.move import Move
    from chesscore.core.position import Position

_LOGGER = logging.getLogger(__name__)


def apply_move(position: Position, move: Move) -> Position:
    """Return the position after *move*.

    *move* is matched against the legal moves of *position* by its from
    square, to square and promotion; the generated move's flags are the ones
    applied.  Raises :class:`IllegalMoveError` if nothing matches, in which
    case *position* is left exactly as it was (positions are immutable).
    """
    legal = find_legal_move(position, move.from_sq, move.to_sq, move.promotion)
    if legal is None:
        _LOGGER.debug("Rejected %s for %s to move", move, position.side_to_move)
        raise IllegalMoveError(
            f"Illegal move {move} for {position.side_to_move} to move", move
        )
    return position.successor(legal)
