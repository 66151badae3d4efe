"""Perft node counting — the standard check of move-generator correctness.

Reference values: https://www.chessprogramming.org/Perft_Results
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from chesscore.core.legality import legal_moves

if TYPE_CHECKING:
    from chesscore.core.position import Position


def perft(position: Position, depth: int) -> int:
    """Count leaf nodes of the legal move tree at *depth*."""
    if depth < 0:
        raise ValueError(f"Perft depth must be non-negative, got {depth}")
    if depth == 0:
        return 1
    moves = legal_moves(position)
    if depth == 1:
        return len(moves)
    return sum(perft(position.successor(move), depth - 1) for move in moves)


def divide(position: Position, depth: int) -> dict[str, int]:
    """Per-root-move perft counts keyed by UCI string."""
    if depth < 1:
        raise ValueError(f"Divide depth must be at least 1, got {depth}")
    return {
        move.uci: perft(position.successor(move), depth - 1)
        for move in legal_moves(position)
    }
