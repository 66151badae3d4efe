"""Legality filter: pseudo-legal moves minus those that expose the king."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

from chesscore.core.enums import Color, PieceKind
from chesscore.core.move_generator import MoveGenerator, is_attacked
from chesscore.core.types import Square, make_square, rank_of

if TYPE_CHECKING:
    from chesscore.core.move import Move
    from chesscore.core.position import Position


def is_in_check(position: Position, color: Color | None = None) -> bool:
    """Is *color*'s king attacked?  Defaults to the side to move."""
    side = position.side_to_move if color is None else color
    return MoveGenerator(position).is_in_check(side)


def _castle_path_is_safe(gen: MoveGenerator, move: Move, color: Color) -> bool:
    """The king may not castle out of, through or into an attacked square."""
    rank = rank_of(move.from_sq)
    files = (4, 5, 6) if move.is_castle_kingside else (4, 3, 2)
    opponent = color.opposite
    return not any(
        gen.is_square_attacked(make_square(f, rank), opponent) for f in files
    )


def _iter_legal(position: Position) -> Iterator[Move]:
    gen = MoveGenerator(position)
    color = position.side_to_move
    opponent = color.opposite
    king_sq = position.board.king_square(color)

    for move in gen.generate_pseudo_legal_moves():
        if move.is_castle and not _castle_path_is_safe(gen, move, color):
            continue
        # Attack detection on the successor only uses the opponent's raw
        # attack patterns, never this filter.
        target = move.to_sq if move.from_sq == king_sq else king_sq
        if not is_attacked(position.successor(move), target, opponent):
            yield move


def legal_moves(position: Position) -> list[Move]:
    """All strictly legal moves for the side to move, in generator order."""
    return list(_iter_legal(position))


def has_legal_move(position: Position) -> bool:
    """Like ``bool(legal_moves(position))`` but stops at the first hit."""
    return next(_iter_legal(position), None) is not None


def find_legal_move(
    position: Position,
    from_sq: Square,
    to_sq: Square,
    promotion: PieceKind | None = None,
) -> Move | None:
    """The legal move matching the given squares and promotion, if any."""
    for move in _iter_legal(position):
        if move.identity == (from_sq, to_sq, promotion):
            return move
    return None


def is_legal(position: Position, move: Move) -> bool:
    return find_legal_move(position, *move.identity) is not None
