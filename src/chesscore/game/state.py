"""Game state machine — drives turns, keeps history, detects the result."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field

from chesscore.core.applier import apply_move
from chesscore.core.enums import Color, GameResult
from chesscore.core.errors import GameOverError
from chesscore.core.legality import find_legal_move, is_in_check, legal_moves
from chesscore.core.move import Move
from chesscore.core.notation import move_to_san, position_from_fen, position_to_fen
from chesscore.core.position import Position
from chesscore.core.rules import Rules
from chesscore.game.enums import DrawOffer, GameEndReason, GamePhase

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class MoveRecord:
    """A single entry in the move history."""

    move: Move
    san: str
    position: Position
    was_check: bool = False
    was_capture: bool = False

    @property
    def fen_after(self) -> str:
        return position_to_fen(self.position)


@dataclass
class GameState:
    """Manages game lifecycle: phase, result, position history, draw offers.

    Every position of the game is kept, oldest first; the current position
    is the last one.  Positions are immutable, so undoing a move is just
    dropping the newest entry.
    """

    phase: GamePhase = field(default=GamePhase.AWAITING_MOVE, init=False)
    result: GameResult = field(default=GameResult.IN_PROGRESS, init=False)
    end_reason: GameEndReason = field(default=GameEndReason.NONE, init=False)
    draw_offer: DrawOffer = field(default=DrawOffer.NONE, init=False)
    draw_offer_by: Color | None = field(default=None, init=False)
    positions: list[Position] = field(default_factory=list, init=False)
    move_history: list[MoveRecord] = field(default_factory=list, init=False)
    _key_counts: Counter[int] = field(default_factory=Counter, init=False, repr=False)

    def __post_init__(self) -> None:
        self.setup()

    # ── Initialisation ───────────────────────────────────────────────────

    def setup(self, start: Position | str | None = None) -> None:
        """Initialise (or reset) the game from a position or FEN string."""
        if start is None:
            position = Position.initial()
        elif isinstance(start, str):
            position = position_from_fen(start)
        else:
            position = start

        self.positions = [position]
        self.move_history = []
        self._key_counts = Counter({position.key: 1})
        self.phase = GamePhase.AWAITING_MOVE
        self.result = GameResult.IN_PROGRESS
        self.end_reason = GameEndReason.NONE
        self.draw_offer = DrawOffer.NONE
        self.draw_offer_by = None
        self._update_result()

    # ── Move application ─────────────────────────────────────────────────

    def play(self, move: Move) -> MoveRecord:
        """Apply *move* and return the history record.

        Raises :class:`GameOverError` once the game has ended and
        :class:`~chesscore.core.errors.IllegalMoveError` for moves outside
        the legal set.  A rejected move leaves the state unchanged.
        """
        if self.is_game_over:
            raise GameOverError(f"Game is over ({self.result.name})", move)

        before = self.position
        after = apply_move(before, move)
        # apply_move accepted the move, so the canonical version exists.
        played = find_legal_move(before, *move.identity)
        assert played is not None

        record = MoveRecord(
            move=played,
            san=move_to_san(before, played),
            position=after,
            was_check=is_in_check(after),
            was_capture=played.is_capture,
        )
        self.positions.append(after)
        self.move_history.append(record)
        self._key_counts[after.key] += 1
        _LOGGER.debug("Ply %d: %s", self.ply_count, record.san)

        # Any move cancels a pending offer.
        self.draw_offer = DrawOffer.NONE
        self.draw_offer_by = None
        self._update_result()
        return record

    def undo(self) -> Move | None:
        """Take back the last move.  Returns it, or ``None`` if there is none."""
        if not self.move_history:
            return None

        record = self.move_history.pop()
        dropped = self.positions.pop()
        self._key_counts[dropped.key] -= 1
        if not self._key_counts[dropped.key]:
            del self._key_counts[dropped.key]

        self.result = GameResult.IN_PROGRESS
        self.end_reason = GameEndReason.NONE
        self.phase = GamePhase.AWAITING_MOVE
        self._update_result()
        return record.move

    # ── Resignation / draw ───────────────────────────────────────────────

    def resign(self, color: Color) -> None:
        self._finish(GameResult.win_for(color.opposite), GameEndReason.RESIGNATION)

    def agree_draw(self) -> None:
        self._finish(GameResult.DRAW_BY_AGREEMENT, GameEndReason.DRAW_AGREED)

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def position(self) -> Position:
        return self.positions[-1]

    @property
    def start_position(self) -> Position:
        return self.positions[0]

    @property
    def side_to_move(self) -> Color:
        return self.position.side_to_move

    @property
    def is_game_over(self) -> bool:
        return self.phase == GamePhase.GAME_OVER

    @property
    def ply_count(self) -> int:
        """Number of half-moves played."""
        return len(self.move_history)

    @property
    def fullmove_display(self) -> int:
        """Current full-move number for display."""
        return self.position.fullmove_number

    def repetition_count(self, position: Position | None = None) -> int:
        """How many times *position* (default: current) occurred in this game."""
        target = self.position if position is None else position
        return self._key_counts.get(target.key, 0)

    def legal_moves(self) -> list[Move]:
        """Legal moves in the current position; empty once the game is over."""
        if self.is_game_over:
            return []
        return legal_moves(self.position)

    # ── Internal ─────────────────────────────────────────────────────────

    def _update_result(self) -> None:
        result = Rules.game_result(self.position, self.repetition_count())
        if result != GameResult.IN_PROGRESS:
            self._finish(result, GameEndReason.for_result(result))

    def _finish(self, result: GameResult, reason: GameEndReason) -> None:
        self.result = result
        self.end_reason = reason
        self.phase = GamePhase.GAME_OVER
        _LOGGER.info(
            "Game over after %d plies: %s (%s)", self.ply_count, result.name, reason.name
        )
