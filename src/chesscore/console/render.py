"""Fixed-width text rendering of a position."""

from __future__ import annotations

from chesscore.console.settings import ConsoleSettings
from chesscore.core.piece import Piece
from chesscore.core.position import Position
from chesscore.core.types import coords_to_square

_FILE_LABELS = "abcdefgh"
_RULE = "+-+-+-+-+-+-+-+-+"
_EMPTY = {"unicode": "·", "ascii": "."}


def _glyph(piece: Piece | None, style: str) -> str:
    if piece is None:
        return _EMPTY[style]
    return piece.symbol if style == "unicode" else str(piece)


def render_board(position: Position, settings: ConsoleSettings | None = None) -> str:
    """Render *position* as text, rank 8 on top unless ``settings.flip``.

    Only :meth:`Position.piece_at` is used to read the board.
    """
    s = settings or ConsoleSettings()
    ranks = range(8) if s.flip else range(7, -1, -1)
    files = range(7, -1, -1) if s.flip else range(8)
    labels = "  " + " ".join(_FILE_LABELS[f] for f in files)

    rule = " " + _RULE if s.show_coordinates else _RULE

    lines: list[str] = []
    if s.show_coordinates:
        lines.append(labels)
    lines.append(rule)
    for rank in ranks:
        cells = " ".join(
            _glyph(position.piece_at(coords_to_square(rank, f)), s.glyphs)
            for f in files
        )
        if s.show_coordinates:
            lines.append(f"{rank + 1}|{cells}|{rank + 1}")
        else:
            lines.append(f"|{cells}|")
    lines.append(rule)
    if s.show_coordinates:
        lines.append(labels)
    return "\n".join(lines)


def render_status(position: Position) -> str:
    """One-line summary: side to move and move number."""
    side = position.side_to_move.name.capitalize()
    return f"{side} to move (move {position.fullmove_number})"
