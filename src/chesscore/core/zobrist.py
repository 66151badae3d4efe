"""Zobrist keys identifying positions for repetition detection.

A key covers piece placement, side to move, castling rights and the en
passant target square. The two move clocks are not part of it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from chesscore.core.enums import CastlingRights, Color
from chesscore.core.piece import Piece
from chesscore.core.types import Square

if TYPE_CHECKING:
    from chesscore.core.board import Board

_SEED: Final = 0x2F6B1D93C4E8A057
_MASK_64: Final = 0xFFFFFFFFFFFFFFFF

# Key table layout: 768 piece-square keys, 1 side key, 16 castling keys,
# 64 en passant keys.
_PIECE_SQUARE_COUNT: Final = 2 * 6 * 64
_SIDE_INDEX: Final = _PIECE_SQUARE_COUNT
_CASTLING_BASE: Final = _SIDE_INDEX + 1
_EN_PASSANT_BASE: Final = _CASTLING_BASE + 16


def _splitmix64(state: int) -> int:
    z = (state + 0x9E3779B97F4A7C15) & _MASK_64
    z = ((z ^ (z >> 30)) * 0xBF58476D1CE4E5B9) & _MASK_64
    z = ((z ^ (z >> 27)) * 0x94D049BB133111EB) & _MASK_64
    return z ^ (z >> 31)


_KEYS: Final = tuple(_splitmix64(_SEED + i) for i in range(_EN_PASSANT_BASE + 64))


def piece_key(piece: Piece, sq: Square) -> int:
    return _KEYS[(piece.color * 6 + piece.kind - 1) * 64 + sq]


def side_key() -> int:
    """Toggled in whenever Black is to move."""
    return _KEYS[_SIDE_INDEX]


def castling_key(castling: CastlingRights) -> int:
    return _KEYS[_CASTLING_BASE + (int(castling) & 0xF)]


def en_passant_key(ep_square: Square) -> int:
    return _KEYS[_EN_PASSANT_BASE + ep_square]


def board_key(board: Board) -> int:
    """XOR of the piece-square keys of every occupied square."""
    key = 0
    for sq, piece in board.occupied():
        key ^= piece_key(piece, sq)
    return key


def position_key(
    board: Board,
    side_to_move: Color,
    castling: CastlingRights,
    en_passant: Square | None,
) -> int:
    """Full key computed from scratch."""
    key = board_key(board) ^ castling_key(castling)
    if side_to_move == Color.BLACK:
        key ^= side_key()
    if en_passant is not None:
        key ^= en_passant_key(en_passant)
    return key
