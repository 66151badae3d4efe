"""Pseudo-legal move generation + attack detection.

Nothing in this module consults the legality filter: attack detection looks
only at the raw attack patterns of the attacking side, which keeps
:func:`is_attacked` safe to call from inside legality checks.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from chesscore.core.enums import CastlingRights, Color, MoveFlag, PieceKind
from chesscore.core.move import Move
from chesscore.core.types import Square, make_square

if TYPE_CHECKING:
    from chesscore.core.position import Position


KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS

PROMOTION_KINDS: tuple[PieceKind, ...] = (
    PieceKind.QUEEN,
    PieceKind.ROOK,
    PieceKind.BISHOP,
    PieceKind.KNIGHT,
)

# Home squares: king file e, rooks on a/h, transit squares per side.
_KING_FILE = 4
_BACK_RANK: tuple[int, int] = (0, 7)


# -- Precomputed lookup tables ---------------------------------------------


def _on_board(file_idx: int, rank_idx: int) -> bool:
    return 0 <= file_idx < 8 and 0 <= rank_idx < 8


def _build_targets(
    offsets: tuple[tuple[int, int], ...],
) -> tuple[tuple[Square, ...], ...]:
    table: list[tuple[Square, ...]] = []
    for sq in range(64):
        f, r = sq & 7, sq >> 3
        table.append(
            tuple(
                make_square(f + df, r + dr)
                for df, dr in offsets
                if _on_board(f + df, r + dr)
            )
        )
    return tuple(table)


def _build_rays(
    directions: tuple[tuple[int, int], ...],
) -> tuple[tuple[tuple[Square, ...], ...], ...]:
    table: list[tuple[tuple[Square, ...], ...]] = []
    for sq in range(64):
        rays: list[tuple[Square, ...]] = []
        for df, dr in directions:
            f, r = (sq & 7) + df, (sq >> 3) + dr
            ray: list[Square] = []
            while _on_board(f, r):
                ray.append(make_square(f, r))
                f += df
                r += dr
            rays.append(tuple(ray))
        table.append(tuple(rays))
    return tuple(table)


def _build_pawn_captures() -> tuple[tuple[tuple[Square, ...], ...], ...]:
    """[color][sq] -> squares a pawn of *color* standing on *sq* attacks."""
    per_color: list[tuple[tuple[Square, ...], ...]] = []
    for dr in (1, -1):
        per_color.append(_build_targets(((-1, dr), (1, dr))))
    return tuple(per_color)


def _to_masks(targets: tuple[tuple[Square, ...], ...]) -> tuple[int, ...]:
    masks: list[int] = []
    for squares in targets:
        mask = 0
        for sq in squares:
            mask |= 1 << sq
        masks.append(mask)
    return tuple(masks)


_KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
_KING_TARGETS = _build_targets(KING_OFFSETS)
_PAWN_CAPTURES = _build_pawn_captures()

_KNIGHT_MASKS = _to_masks(_KNIGHT_TARGETS)
_KING_MASKS = _to_masks(_KING_TARGETS)
# A pawn of color C attacks sq exactly when it stands on a square that a pawn
# of the other color on sq would attack.
_PAWN_ATTACKER_MASKS = (
    _to_masks(_PAWN_CAPTURES[Color.BLACK]),
    _to_masks(_PAWN_CAPTURES[Color.WHITE]),
)

_BISHOP_RAYS = _build_rays(BISHOP_DIRS)
_ROOK_RAYS = _build_rays(ROOK_DIRS)
_QUEEN_RAYS = _build_rays(QUEEN_DIRS)

_DIAGONAL_SLIDERS = (PieceKind.BISHOP, PieceKind.QUEEN)
_STRAIGHT_SLIDERS = (PieceKind.ROOK, PieceKind.QUEEN)


def _move_order(move: Move) -> tuple[Square, Square]:
    return (move.from_sq, move.to_sq)


class MoveGenerator:
    """Generates pseudo-legal moves and answers attack queries for a
    :class:`Position`.  The position is only read, never changed.
    """

    __slots__ = ("_pos", "_board")

    def __init__(self, position: Position) -> None:
        self._pos = position
        self._board = position.board

    # -- Public API ---------------------------------------------------------

    def generate_pseudo_legal_moves(self) -> list[Move]:
        """All pseudo-legal moves, sorted by from-square then to-square.

        Promotions to the same square keep Q, R, B, N order.
        """
        moves: list[Move] = []
        color = self._pos.side_to_move

        for sq, piece in self._board.occupied():
            if piece.color != color:
                continue
            kind = piece.kind
            if kind == PieceKind.PAWN:
                self._gen_pawn(sq, color, moves)
            elif kind == PieceKind.KNIGHT:
                self._gen_steps(sq, color, _KNIGHT_TARGETS[sq], moves)
            elif kind == PieceKind.BISHOP:
                self._gen_sliding(sq, color, _BISHOP_RAYS[sq], moves)
            elif kind == PieceKind.ROOK:
                self._gen_sliding(sq, color, _ROOK_RAYS[sq], moves)
            elif kind == PieceKind.QUEEN:
                self._gen_sliding(sq, color, _QUEEN_RAYS[sq], moves)
            else:
                self._gen_steps(sq, color, _KING_TARGETS[sq], moves)
                self._gen_castling(sq, color, moves)

        # Squares are visited in ascending order; only castling and captures
        # interleave with quiet moves, so a stable sort settles the order.
        moves.sort(key=_move_order)
        return moves

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king attacked by the opponent?"""
        king_sq = self._board.king_square(color)
        return self.is_square_attacked(king_sq, color.opposite)

    def is_square_attacked(self, sq: Square, by_color: Color) -> bool:
        """Is *sq* attacked by any piece of *by_color*?

        Pawns count only for their diagonal capture squares.
        """
        board = self._board

        if board.pieces_bitboard(by_color, PieceKind.PAWN) & _PAWN_ATTACKER_MASKS[
            by_color
        ][sq]:
            return True
        if board.pieces_bitboard(by_color, PieceKind.KNIGHT) & _KNIGHT_MASKS[sq]:
            return True
        if board.pieces_bitboard(by_color, PieceKind.KING) & _KING_MASKS[sq]:
            return True

        queens = board.has_piece(by_color, PieceKind.QUEEN)
        if queens or board.has_piece(by_color, PieceKind.BISHOP):
            if self._ray_hits(_BISHOP_RAYS[sq], by_color, _DIAGONAL_SLIDERS):
                return True
        if queens or board.has_piece(by_color, PieceKind.ROOK):
            if self._ray_hits(_ROOK_RAYS[sq], by_color, _STRAIGHT_SLIDERS):
                return True
        return False

    def attacked_squares(self, by_color: Color) -> int:
        """Bitboard of every square *by_color* attacks."""
        mask = 0
        for sq in range(64):
            if self.is_square_attacked(sq, by_color):
                mask |= 1 << sq
        return mask

    # -- Attack helpers (private) ------------------------------------------

    def _ray_hits(
        self,
        rays: tuple[tuple[Square, ...], ...],
        by_color: Color,
        kinds: tuple[PieceKind, ...],
    ) -> bool:
        board = self._board
        for ray in rays:
            for to_sq in ray:
                piece = board[to_sq]
                if piece is None:
                    continue
                if piece.color == by_color and piece.kind in kinds:
                    return True
                break
        return False

    # -- Piece-specific generators (private) -------------------------------

    def _gen_pawn(self, sq: Square, color: Color, moves: list[Move]) -> None:
        board = self._board
        rank_idx = sq >> 3
        if color == Color.WHITE:
            step, start_rank, last_rank = 8, 1, 7
        else:
            step, start_rank, last_rank = -8, 6, 0
        promotes = rank_idx + (1 if step > 0 else -1) == last_rank

        one_step = sq + step
        if board.is_empty(one_step):
            if promotes:
                for kind in PROMOTION_KINDS:
                    moves.append(Move(sq, one_step, kind))
            else:
                moves.append(Move(sq, one_step))
                two_step = one_step + step
                if rank_idx == start_rank and board.is_empty(two_step):
                    moves.append(Move(sq, two_step, flags=MoveFlag.DOUBLE_PUSH))

        for cap_sq in _PAWN_CAPTURES[color][sq]:
            target = board[cap_sq]
            if target is not None:
                if target.color == color:
                    continue
                if promotes:
                    for kind in PROMOTION_KINDS:
                        moves.append(Move(sq, cap_sq, kind, MoveFlag.CAPTURE))
                else:
                    moves.append(Move(sq, cap_sq, flags=MoveFlag.CAPTURE))
            elif cap_sq == self._pos.en_passant:
                moves.append(
                    Move(sq, cap_sq, flags=MoveFlag.CAPTURE | MoveFlag.EN_PASSANT)
                )

    def _gen_steps(
        self,
        sq: Square,
        color: Color,
        targets: tuple[Square, ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        for to_sq in targets:
            target = board[to_sq]
            if target is None:
                moves.append(Move(sq, to_sq))
            elif target.color != color:
                moves.append(Move(sq, to_sq, flags=MoveFlag.CAPTURE))

    def _gen_sliding(
        self,
        sq: Square,
        color: Color,
        rays: tuple[tuple[Square, ...], ...],
        moves: list[Move],
    ) -> None:
        board = self._board
        for ray in rays:
            for to_sq in ray:
                target = board[to_sq]
                if target is None:
                    moves.append(Move(sq, to_sq))
                    continue
                if target.color != color:
                    moves.append(Move(sq, to_sq, flags=MoveFlag.CAPTURE))
                break

    def _gen_castling(self, king_sq: Square, color: Color, moves: list[Move]) -> None:
        rights = self._pos.castling & CastlingRights.both(color)
        if not rights:
            return
        back_rank = _BACK_RANK[color]
        if king_sq != make_square(_KING_FILE, back_rank):
            return
        if self.is_in_check(color):
            return

        if rights & CastlingRights.kingside(color):
            move = self._castle_if_clear(
                king_sq, color, rook_file=7, between=(5, 6), transit=(5, 6)
            )
            if move is not None:
                moves.append(move)
        if rights & CastlingRights.queenside(color):
            move = self._castle_if_clear(
                king_sq, color, rook_file=0, between=(1, 2, 3), transit=(3, 2)
            )
            if move is not None:
                moves.append(move)

    def _castle_if_clear(
        self,
        king_sq: Square,
        color: Color,
        rook_file: int,
        between: tuple[int, ...],
        transit: tuple[int, ...],
    ) -> Move | None:
        board = self._board
        back_rank = _BACK_RANK[color]
        rook = board[make_square(rook_file, back_rank)]
        if rook is None or rook.color != color or rook.kind != PieceKind.ROOK:
            return None
        if any(not board.is_empty(make_square(f, back_rank)) for f in between):
            return None
        opponent = color.opposite
        if any(
            self.is_square_attacked(make_square(f, back_rank), opponent)
            for f in transit
        ):
            return None
        flag = MoveFlag.CASTLE_KINGSIDE if rook_file == 7 else MoveFlag.CASTLE_QUEENSIDE
        return Move(king_sq, make_square(transit[-1], back_rank), flags=flag)


# -- Functional entry points -------------------------------------------------


def pseudo_legal_moves(position: Position) -> list[Move]:
    """Pseudo-legal moves for the side to move (may leave own king in check)."""
    return MoveGenerator(position).generate_pseudo_legal_moves()


def is_attacked(position: Position, square: Square, by_color: Color) -> bool:
    """Whether *by_color* attacks *square* in *position*."""
    return MoveGenerator(position).is_square_attacked(square, by_color)
