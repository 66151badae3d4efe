"""GameController — front door for a game driven from outside the core.

Wraps :class:`GameState` with draw-offer handshakes and emits events via
simple callbacks so the console / tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from chesscore.core.enums import Color, GameResult
from chesscore.core.errors import IllegalMoveError
from chesscore.core.move import Move
from chesscore.core.position import Position
from chesscore.game.enums import DrawOffer, GamePhase
from chesscore.game.state import GameState, MoveRecord

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[MoveRecord, GameState], None]
GameOverCallback = Callable[[GameResult], None]
PhaseCallback = Callable[[GamePhase], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_phase_changed: list[PhaseCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController:
    """Validates and applies moves, tracks draw offers, notifies listeners.

    Methods are meant to be called from a single thread.
    """

    __slots__ = ("_state", "events")

    def __init__(self) -> None:
        self._state = GameState()
        self.events = GameEvents()

    @property
    def state(self) -> GameState:
        return self._state

    # ── Game lifecycle ───────────────────────────────────────────────────

    def new_game(self, start: Position | str | None = None) -> None:
        """Start a new game from the initial position, a position or a FEN."""
        self._state = GameState()
        self._state.setup(start)
        self._emit_phase(self._state.phase)
        if self._state.is_game_over:
            self._emit_game_over(self._state.result)

    def submit_move(self, move: Move) -> bool:
        """Play *move* for the side to move.  Returns True if it was applied."""
        try:
            record = self._state.play(move)
        except IllegalMoveError as exc:
            _LOGGER.info("Move rejected: %s", exc)
            return False

        for cb in self.events.on_move:
            cb(record, self._state)

        if self._state.is_game_over:
            self._emit_game_over(self._state.result)
        return True

    def undo_move(self) -> bool:
        """Take back the last move unless the game has already ended."""
        if self._state.is_game_over or not self._state.move_history:
            return False
        self._state.undo()
        self._emit_phase(GamePhase.AWAITING_MOVE)
        return True

    # ── Resignation / draw ───────────────────────────────────────────────

    def resign(self, color: Color) -> None:
        if self._state.is_game_over:
            return
        self._state.resign(color)
        self._emit_game_over(self._state.result)

    def offer_draw(self, color: Color) -> None:
        if self._state.is_game_over or self._state.draw_offer == DrawOffer.OFFERED:
            return
        self._state.draw_offer = DrawOffer.OFFERED
        self._state.draw_offer_by = color

    def accept_draw(self, color: Color) -> bool:
        """Accept the opponent's pending offer.  Returns True if the game ended."""
        state = self._state
        if state.is_game_over or state.draw_offer != DrawOffer.OFFERED:
            return False
        if state.draw_offer_by in (None, color):
            return False
        state.draw_offer = DrawOffer.ACCEPTED
        state.draw_offer_by = None
        state.agree_draw()
        self._emit_game_over(state.result)
        return True

    def decline_draw(self) -> None:
        if self._state.draw_offer != DrawOffer.OFFERED:
            return
        self._state.draw_offer = DrawOffer.DECLINED
        self._state.draw_offer_by = None

    # ── Internal helpers ─────────────────────────────────────────────────

    def _emit_game_over(self, result: GameResult) -> None:
        self._emit_phase(GamePhase.GAME_OVER)
        for cb in self.events.on_game_over:
            cb(result)

    def _emit_phase(self, phase: GamePhase) -> None:
        for cb in self.events.on_phase_changed:
            cb(phase)
