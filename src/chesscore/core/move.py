"""Move value object (UCI-style representation)."""

from __future__ import annotations

from dataclasses import dataclass

from chesscore.core.enums import MoveFlag, PieceKind
from chesscore.core.piece import kind_letter
from chesscore.core.types import Square, square_name


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable value object representing a single chess move.

    A move is identified by ``from_sq``, ``to_sq`` and ``promotion``.
    ``flags`` describe the move in the position it was generated from and
    are filled in by the move generator; hand-built moves may leave them
    empty and are matched against the generated ones on application.
    """

    from_sq: Square
    to_sq: Square
    promotion: PieceKind | None = None
    flags: MoveFlag = MoveFlag.NONE

    # ── Flag accessors ───────────────────────────────────────────────────

    @property
    def is_capture(self) -> bool:
        return bool(self.flags & MoveFlag.CAPTURE)

    @property
    def is_en_passant(self) -> bool:
        return bool(self.flags & MoveFlag.EN_PASSANT)

    @property
    def is_castle_kingside(self) -> bool:
        return bool(self.flags & MoveFlag.CASTLE_KINGSIDE)

    @property
    def is_castle_queenside(self) -> bool:
        return bool(self.flags & MoveFlag.CASTLE_QUEENSIDE)

    @property
    def is_castle(self) -> bool:
        return bool(self.flags & MoveFlag.CASTLE)

    @property
    def is_double_push(self) -> bool:
        return bool(self.flags & MoveFlag.DOUBLE_PUSH)

    @property
    def is_promotion(self) -> bool:
        return self.promotion is not None

    @property
    def identity(self) -> tuple[Square, Square, PieceKind | None]:
        """The part of a move that a player chooses."""
        return (self.from_sq, self.to_sq, self.promotion)

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        base = f"{square_name(self.from_sq)}{square_name(self.to_sq)}"
        if self.promotion is not None:
            base += kind_letter(self.promotion)
        return base

    @property
    def uci(self) -> str:
        """UCI long-algebraic notation."""
        return str(self)
