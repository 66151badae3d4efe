"""Square type alias and coordinate helpers.

Board layout (Little-Endian Rank-File mapping):
    a1=0, b1=1, ..., h1=7
    a2=8, b2=9, ..., h2=15
    ...
    a8=56, b8=57, ..., h8=63

Rank 0 is White's back rank.  The unchecked helpers (:func:`file_of`,
:func:`rank_of`, :func:`make_square`) are used on hot paths; the checked
conversions raise :class:`~chesscore.core.errors.InvalidSquareError` and are
meant for values coming from outside the core.
"""

from __future__ import annotations

from typing import TypeAlias

from chesscore.core.errors import InvalidSquareError

Square: TypeAlias = int  # 0–63

_FILES = "abcdefgh"
_RANKS = "12345678"


def file_of(sq: Square) -> int:
    """File index 0–7 (a–h)."""
    return sq & 7


def rank_of(sq: Square) -> int:
    """Rank index 0–7 (1–8)."""
    return sq >> 3


def make_square(file: int, rank: int) -> Square:
    """Create square from file (0–7) and rank (0–7) without bounds checks."""
    return rank * 8 + file


def is_valid_square(sq: int) -> bool:
    return 0 <= sq < 64


def validate_square(sq: int) -> Square:
    """Return *sq* unchanged, or raise if it is not on the board."""
    if not isinstance(sq, int) or not is_valid_square(sq):
        raise InvalidSquareError(f"Square index out of range 0-63: {sq!r}")
    return sq


def coords_to_square(rank: int, file: int) -> Square:
    """Square for a ``(rank, file)`` pair, both 0–7."""
    if not (0 <= rank < 8 and 0 <= file < 8):
        raise InvalidSquareError(f"Coordinates out of range: rank={rank}, file={file}")
    return make_square(file, rank)


def square_to_coords(sq: Square) -> tuple[int, int]:
    """``(rank, file)`` pair for *sq*."""
    validate_square(sq)
    return rank_of(sq), file_of(sq)


def square_name(sq: Square) -> str:
    """Human-readable name, e.g. 0 → 'a1', 63 → 'h8'."""
    return _FILES[file_of(sq)] + _RANKS[rank_of(sq)]


def parse_square(name: str) -> Square:
    """Parse square name, e.g. 'e4' → 28."""
    if len(name) != 2 or name[0] not in _FILES or name[1] not in _RANKS:
        raise InvalidSquareError(f"Invalid square name: {name!r}")
    return make_square(_FILES.index(name[0]), _RANKS.index(name[1]))


def square_color(sq: Square) -> int:
    """0 for dark squares (a1), 1 for light squares (h1)."""
    return (file_of(sq) + rank_of(sq)) & 1


# ── Named square constants ──────────────────────────────────────────────────

A1, B1, C1, D1, E1, F1, G1, H1 = range(0, 8)
A2, B2, C2, D2, E2, F2, G2, H2 = range(8, 16)
A3, B3, C3, D3, E3, F3, G3, H3 = range(16, 24)
A4, B4, C4, D4, E4, F4, G4, H4 = range(24, 32)
A5, B5, C5, D5, E5, F5, G5, H5 = range(32, 40)
A6, B6, C6, D6, E6, F6, G6, H6 = range(40, 48)
A7, B7, C7, D7, E7, F7, G7, H7 = range(48, 56)
A8, B8, C8, D8, E8, F8, G8, H8 = range(56, 64)
