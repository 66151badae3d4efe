"""Console front-end settings."""

from __future__ import annotations

from dataclasses import dataclass

GLYPH_STYLES = ("unicode", "ascii")


@dataclass
class ConsoleSettings:
    """All user-configurable console settings."""

    # Board
    glyphs: str = "unicode"
    flip: bool = False
    show_coordinates: bool = True

    # Session
    prompt: str = "Your move: "
    echo_moves: bool = True

    def __post_init__(self) -> None:
        if self.glyphs not in GLYPH_STYLES:
            raise ValueError(
                f"Unknown glyph style {self.glyphs!r}; expected one of {GLYPH_STYLES}"
            )
