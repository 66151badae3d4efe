"""Core domain layer — pure chess rules with zero external dependencies.

Quick start::

    from chesscore.core import Position, apply_move, legal_moves

    pos = Position.initial()
    for move in legal_moves(pos):
        print(move)
    pos = apply_move(pos, legal_moves(pos)[0])
"""

from chesscore.core.applier import apply_move
from chesscore.core.board import Board
from chesscore.core.enums import CastlingRights, Color, GameResult, MoveFlag, PieceKind
from chesscore.core.errors import (
    ChessError,
    GameOverError,
    IllegalMoveError,
    InvalidSquareError,
    NotationError,
)
from chesscore.core.legality import (
    find_legal_move,
    has_legal_move,
    is_in_check,
    is_legal,
    legal_moves,
)
from chesscore.core.move import Move
from chesscore.core.move_generator import MoveGenerator, is_attacked, pseudo_legal_moves
from chesscore.core.notation import (
    STARTING_FEN,
    move_to_san,
    parse_move,
    parse_san,
    parse_uci,
    position_from_fen,
    position_to_fen,
)
from chesscore.core.perft import divide, perft
from chesscore.core.piece import Piece
from chesscore.core.position import Position
from chesscore.core.rules import Rules
from chesscore.core.types import (
    Square,
    coords_to_square,
    file_of,
    make_square,
    parse_square,
    rank_of,
    square_name,
    square_to_coords,
)

__all__ = [
    # Enums / flags
    "CastlingRights",
    "Color",
    "GameResult",
    "MoveFlag",
    "PieceKind",
    # Errors
    "ChessError",
    "GameOverError",
    "IllegalMoveError",
    "InvalidSquareError",
    "NotationError",
    # Types / helpers
    "Square",
    "coords_to_square",
    "file_of",
    "make_square",
    "parse_square",
    "rank_of",
    "square_name",
    "square_to_coords",
    # Domain objects
    "Board",
    "Move",
    "MoveGenerator",
    "Piece",
    "Position",
    "Rules",
    # Operations
    "apply_move",
    "divide",
    "find_legal_move",
    "has_legal_move",
    "is_attacked",
    "is_in_check",
    "is_legal",
    "legal_moves",
    "perft",
    "pseudo_legal_moves",
    # Notation
    "STARTING_FEN",
    "move_to_san",
    "parse_move",
    "parse_san",
    "parse_uci",
    "position_from_fen",
    "position_to_fen",
]
