"""Board - immutable piece placement on an 8x8 board."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping

from chesscore.core.enums import Color, PieceKind
from chesscore.core.piece import Piece
from chesscore.core.types import Square, make_square, validate_square

_KIND_COUNT = 6
_COLOR_COUNT = 2

_BACK_RANK: tuple[PieceKind, ...] = (
    PieceKind.ROOK,
    PieceKind.KNIGHT,
    PieceKind.BISHOP,
    PieceKind.QUEEN,
    PieceKind.KING,
    PieceKind.BISHOP,
    PieceKind.KNIGHT,
    PieceKind.ROOK,
)


def _squares_from_bitboard(bitboard: int) -> list[Square]:
    squares: list[Square] = []
    while bitboard:
        lsb = bitboard & -bitboard
        squares.append(lsb.bit_length() - 1)
        bitboard ^= lsb
    return squares


class Board:
    """Immutable 64-square placement with per-color piece indexes.

    Boards are never modified after construction; :meth:`replace` builds a
    new board and updates the indexes only for the squares that changed.
    """

    __slots__ = ("_squares", "_piece_bitboards", "_color_bitboards", "_king_squares")

    _squares: tuple[Piece | None, ...]
    # [color][kind-1] -> bitboard of occupied squares.
    _piece_bitboards: tuple[tuple[int, ...], ...]
    # [color] -> bitboard of all occupied squares for that color.
    _color_bitboards: tuple[int, ...]
    # [color] -> king square cache (None if king missing).
    _king_squares: tuple[Square | None, ...]

    def __init__(self, squares: Iterable[Piece | None] | None = None) -> None:
        cells = tuple(squares) if squares is not None else (None,) * 64
        if len(cells) != 64:
            raise ValueError(f"A board needs exactly 64 squares, got {len(cells)}")

        piece_bbs = [[0] * _KIND_COUNT for _ in range(_COLOR_COUNT)]
        color_bbs = [0] * _COLOR_COUNT
        kings: list[Square | None] = [None] * _COLOR_COUNT
        for sq, piece in enumerate(cells):
            if piece is None:
                continue
            piece_bbs[piece.color][piece.kind - 1] |= 1 << sq
            color_bbs[piece.color] |= 1 << sq
            if piece.kind == PieceKind.KING:
                kings[piece.color] = sq
        self._freeze(cells, piece_bbs, color_bbs, kings)

    def _freeze(
        self,
        cells: tuple[Piece | None, ...],
        piece_bbs: list[list[int]],
        color_bbs: list[int],
        kings: list[Square | None],
    ) -> None:
        object.__setattr__(self, "_squares", cells)
        object.__setattr__(self, "_piece_bitboards", tuple(map(tuple, piece_bbs)))
        object.__setattr__(self, "_color_bitboards", tuple(color_bbs))
        object.__setattr__(self, "_king_squares", tuple(kings))

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        return self._squares[sq]

    def piece_at(self, sq: Square) -> Piece | None:
        """Bounds-checked square lookup."""
        return self._squares[validate_square(sq)]

    def is_empty(self, sq: Square) -> bool:
        return self._squares[sq] is None

    def __iter__(self) -> Iterator[Piece | None]:
        return iter(self._squares)

    def occupied(self) -> Iterator[tuple[Square, Piece]]:
        """``(square, piece)`` pairs for every occupied square, a1 first."""
        for sq, piece in enumerate(self._squares):
            if piece is not None:
                yield sq, piece

    # -- Query helpers ------------------------------------------------------

    def pieces(self, color: Color, kind: PieceKind) -> list[Square]:
        """Squares occupied by *color*'s *kind*."""
        return _squares_from_bitboard(self._piece_bitboards[color][kind - 1])

    def pieces_bitboard(self, color: Color, kind: PieceKind) -> int:
        """Bitboard of squares occupied by *color*'s *kind*."""
        return self._piece_bitboards[color][kind - 1]

    def has_piece(self, color: Color, kind: PieceKind) -> bool:
        return bool(self._piece_bitboards[color][kind - 1])

    def all_pieces_bitboard(self, color: Color) -> int:
        """Bitboard of all squares occupied by *color*."""
        return self._color_bitboards[color]

    def all_pieces(self, color: Color) -> list[Square]:
        return _squares_from_bitboard(self._color_bitboards[color])

    def piece_count(self) -> int:
        return (self._color_bitboards[0] | self._color_bitboards[1]).bit_count()

    def king_square(self, color: Color) -> Square:
        """Return the king square for *color*."""
        sq = self._king_squares[color]
        if sq is None:
            raise ValueError(f"No {color.name} king on board")
        return sq

    # -- Derivation ---------------------------------------------------------

    def replace(self, changes: Mapping[Square, Piece | None]) -> Board:
        """New board with *changes* applied; ``None`` empties a square."""
        cells = list(self._squares)
        piece_bbs = [list(row) for row in self._piece_bitboards]
        color_bbs = list(self._color_bitboards)
        kings = list(self._king_squares)

        for sq, piece in changes.items():
            old = cells[sq]
            if old == piece:
                continue
            mask = 1 << sq
            if old is not None:
                piece_bbs[old.color][old.kind - 1] &= ~mask
                color_bbs[old.color] &= ~mask
                if old.kind == PieceKind.KING and kings[old.color] == sq:
                    kings[old.color] = None
            cells[sq] = piece
            if piece is not None:
                piece_bbs[piece.color][piece.kind - 1] |= mask
                color_bbs[piece.color] |= mask
                if piece.kind == PieceKind.KING:
                    kings[piece.color] = sq

        board = Board.__new__(Board)
        board._freeze(tuple(cells), piece_bbs, color_bbs, kings)
        return board

    # -- Factory ------------------------------------------------------------

    @classmethod
    def empty(cls) -> Board:
        return cls()

    @classmethod
    def from_pieces(cls, placement: Mapping[Square, Piece]) -> Board:
        """Board holding exactly the pieces in *placement*."""
        cells: list[Piece | None] = [None] * 64
        for sq, piece in placement.items():
            cells[validate_square(sq)] = piece
        return cls(cells)

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        cells: list[Piece | None] = [None] * 64
        for f, kind in enumerate(_BACK_RANK):
            cells[make_square(f, 0)] = Piece(Color.WHITE, kind)
            cells[make_square(f, 1)] = Piece(Color.WHITE, PieceKind.PAWN)
            cells[make_square(f, 6)] = Piece(Color.BLACK, PieceKind.PAWN)
            cells[make_square(f, 7)] = Piece(Color.BLACK, kind)
        return cls(cells)

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._squares == other._squares

    def __hash__(self) -> int:
        return hash(self._squares)

    def __repr__(self) -> str:
        rows: list[str] = []
        for rank in range(7, -1, -1):
            row = []
            for file in range(8):
                p = self._squares[make_square(file, rank)]
                row.append(str(p) if p else ".")
            rows.append(f"{rank + 1} {' '.join(row)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
