"""Piece value object.

An empty square is represented by ``None``, never by a colorless piece.
"""

from __future__ import annotations

from dataclasses import dataclass

from chesscore.core.enums import Color, PieceKind
from chesscore.core.errors import NotationError

_KIND_LETTERS: dict[PieceKind, str] = {
    PieceKind.PAWN: "p",
    PieceKind.KNIGHT: "n",
    PieceKind.BISHOP: "b",
    PieceKind.ROOK: "r",
    PieceKind.QUEEN: "q",
    PieceKind.KING: "k",
}
_LETTER_KINDS: dict[str, PieceKind] = {v: k for k, v in _KIND_LETTERS.items()}

# Glyph order follows PieceKind: pawn, knight, bishop, rook, queen, king.
_WHITE_GLYPHS = "♙♘♗♖♕♔"
_BLACK_GLYPHS = "♟♞♝♜♛♚"


@dataclass(frozen=True, slots=True)
class Piece:
    """Immutable value object representing a chess piece."""

    color: Color
    kind: PieceKind

    def __str__(self) -> str:
        """FEN character (uppercase = white, lowercase = black)."""
        letter = _KIND_LETTERS[self.kind]
        return letter.upper() if self.color == Color.WHITE else letter

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Create piece from FEN character, e.g. 'N' → white knight."""
        kind = _LETTER_KINDS.get(char.lower()) if len(char) == 1 else None
        if kind is None:
            raise NotationError(f"Invalid piece character: {char!r}")
        return cls(Color.WHITE if char.isupper() else Color.BLACK, kind)

    @property
    def symbol(self) -> str:
        """Unicode chess symbol, e.g. ♞."""
        glyphs = _WHITE_GLYPHS if self.color == Color.WHITE else _BLACK_GLYPHS
        return glyphs[self.kind - 1]

    @property
    def is_white(self) -> bool:
        return self.color == Color.WHITE


def kind_letter(kind: PieceKind) -> str:
    """Lowercase FEN/UCI letter for *kind*, e.g. ``q``."""
    return _KIND_LETTERS[kind]


def kind_from_letter(letter: str) -> PieceKind:
    """Inverse of :func:`kind_letter`; accepts either case."""
    kind = _LETTER_KINDS.get(letter.lower())
    if kind is None:
        raise NotationError(f"Invalid piece letter: {letter!r}")
    return kind
