"""UCI long-algebraic moves and free-form move input."""

from __future__ import annotations

import re

from chesscore.core.errors import IllegalMoveError, NotationError
from chesscore.core.legality import find_legal_move
from chesscore.core.move import Move
from chesscore.core.notation.san import parse_san
from chesscore.core.piece import kind_from_letter
from chesscore.core.position import Position
from chesscore.core.types import parse_square

_UCI_RE = re.compile(r"^(?P<from>[a-h][1-8])(?P<to>[a-h][1-8])(?P<promotion>[nbrq])?$")


def is_uci(text: str) -> bool:
    return _UCI_RE.match(text.strip().lower()) is not None


def parse_uci(position: Position, text: str) -> Move:
    """Resolve UCI *text* (``e2e4``, ``e7e8q``) to a legal move of *position*."""
    match = _UCI_RE.match(text.strip().lower())
    if match is None:
        raise NotationError(f"Unrecognised UCI move: {text!r}")
    promotion = kind_from_letter(match["promotion"]) if match["promotion"] else None
    from_sq = parse_square(match["from"])
    to_sq = parse_square(match["to"])
    move = find_legal_move(position, from_sq, to_sq, promotion)
    if move is None:
        raise IllegalMoveError(
            f"Illegal move: {text.strip()}", Move(from_sq, to_sq, promotion)
        )
    return move


def parse_move(position: Position, text: str) -> Move:
    """Parse user input as UCI if it looks like UCI, otherwise as SAN."""
    if not text.strip():
        raise NotationError("Empty move")
    if is_uci(text):
        return parse_uci(position, text)
    return parse_san(position, text)
