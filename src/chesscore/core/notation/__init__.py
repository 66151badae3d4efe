"""Notation package: FEN / SAN / UCI parsing and serialization."""

from chesscore.core.notation.fen import STARTING_FEN, position_from_fen, position_to_fen
from chesscore.core.notation.san import move_to_san, parse_san
from chesscore.core.notation.uci import is_uci, parse_move, parse_uci

__all__ = [
    "STARTING_FEN",
    "position_from_fen",
    "position_to_fen",
    "move_to_san",
    "parse_san",
    "is_uci",
    "parse_move",
    "parse_uci",
]
