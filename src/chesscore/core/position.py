"""Position — complete, immutable game state (board + metadata)."""

from __future__ import annotations

from dataclasses import dataclass, field

from chesscore.core.board import Board
from chesscore.core.enums import CastlingRights, Color, PieceKind
from chesscore.core.errors import IllegalMoveError
from chesscore.core.move import Move
from chesscore.core.piece import Piece
from chesscore.core.types import Square, file_of, make_square, rank_of, square_name
from chesscore.core.zobrist import (
    castling_key,
    en_passant_key,
    piece_key,
    position_key,
    side_key,
)

# Rook home squares and the right each one guards.
_ROOK_CORNERS: dict[Square, CastlingRights] = {
    make_square(0, 0): CastlingRights.WHITE_QUEENSIDE,
    make_square(7, 0): CastlingRights.WHITE_KINGSIDE,
    make_square(0, 7): CastlingRights.BLACK_QUEENSIDE,
    make_square(7, 7): CastlingRights.BLACK_KINGSIDE,
}


@dataclass(frozen=True, slots=True)
class Position:
    """Full chess position: board + side to move + castling + en passant + clocks.

    Positions are values.  A new position is produced from an old one by
    :func:`chesscore.core.applier.apply_move`; nothing ever changes a
    position after it has been built.
    """

    board: Board = field(default_factory=Board.initial)
    side_to_move: Color = Color.WHITE
    castling: CastlingRights = CastlingRights.ALL
    en_passant: Square | None = None
    halfmove_clock: int = 0
    fullmove_number: int = 1
    _key: int | None = field(default=None, repr=False, compare=False, kw_only=True)

    def __post_init__(self) -> None:
        if self._key is None:
            object.__setattr__(
                self,
                "_key",
                position_key(
                    self.board, self.side_to_move, self.castling, self.en_passant
                ),
            )

    @classmethod
    def initial(cls) -> Position:
        """Standard starting position, White to move."""
        return cls()

    # ── Accessors ────────────────────────────────────────────────────────

    def piece_at(self, sq: Square) -> Piece | None:
        """Piece on *sq*, or ``None`` for an empty square."""
        return self.board.piece_at(sq)

    @property
    def key(self) -> int:
        """Zobrist key of placement, side to move, castling and en passant."""
        assert self._key is not None
        return self._key

    def king_square(self, color: Color | None = None) -> Square:
        return self.board.king_square(self.side_to_move if color is None else color)

    # ── Transition ───────────────────────────────────────────────────────

    def successor(self, move: Move) -> Position:
        """Position after *move*, without any legality check.

        *move* must carry the flags the move generator assigned to it.
        Callers outside the rules core go through ``apply_move`` instead.
        """
        board = self.board
        piece = board[move.from_sq]
        if piece is None:
            raise IllegalMoveError(f"No piece on {square_name(move.from_sq)}", move)
        color = piece.color

        key = self.key ^ castling_key(self.castling) ^ side_key()
        if self.en_passant is not None:
            key ^= en_passant_key(self.en_passant)

        capture_sq = move.to_sq
        if move.is_en_passant:
            capture_sq = make_square(file_of(move.to_sq), rank_of(move.from_sq))
        captured = board[capture_sq]

        changes: dict[Square, Piece | None] = {move.from_sq: None}
        key ^= piece_key(piece, move.from_sq)
        if captured is not None:
            changes[capture_sq] = None
            key ^= piece_key(captured, capture_sq)

        placed = piece if move.promotion is None else Piece(color, move.promotion)
        changes[move.to_sq] = placed
        key ^= piece_key(placed, move.to_sq)

        if move.is_castle:
            rank = rank_of(move.from_sq)
            if move.is_castle_kingside:
                rook_from, rook_to = make_square(7, rank), make_square(5, rank)
            else:
                rook_from, rook_to = make_square(0, rank), make_square(3, rank)
            rook = board[rook_from]
            if rook is None:
                raise IllegalMoveError(f"No rook on {square_name(rook_from)}", move)
            changes[rook_from] = None
            changes[rook_to] = rook
            key ^= piece_key(rook, rook_from) ^ piece_key(rook, rook_to)

        en_passant: Square | None = None
        if piece.kind == PieceKind.PAWN and abs(move.to_sq - move.from_sq) == 16:
            en_passant = (move.from_sq + move.to_sq) // 2
            key ^= en_passant_key(en_passant)

        castling = self.castling
        if piece.kind == PieceKind.KING:
            castling &= ~CastlingRights.both(color)
        for sq in (move.from_sq, move.to_sq):
            corner_right = _ROOK_CORNERS.get(sq)
            if corner_right is not None:
                castling &= ~corner_right
        key ^= castling_key(castling)

        if piece.kind == PieceKind.PAWN or captured is not None:
            halfmove_clock = 0
        else:
            halfmove_clock = self.halfmove_clock + 1

        fullmove_number = self.fullmove_number
        if color == Color.BLACK:
            fullmove_number += 1

        return Position(
            board.replace(changes),
            color.opposite,
            castling,
            en_passant,
            halfmove_clock,
            fullmove_number,
            _key=key,
        )

    def __str__(self) -> str:
        return f"{self.board!r}\n{self.side_to_move} to move"
