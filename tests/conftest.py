"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from chesscore.core.applier import apply_move
from chesscore.core.notation import parse_move
from chesscore.core.position import Position


@pytest.fixture
def initial_position() -> Position:
    return Position.initial()


@pytest.fixture
def play() -> Callable[..., Position]:
    """Play a sequence of SAN/UCI moves from a position."""

    def _play(position: Position, *moves: str) -> Position:
        for text in moves:
            position = apply_move(position, parse_move(position, text))
        return position

    return _play
