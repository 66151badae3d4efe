"""Interactive console game: print the board, read a move, repeat."""

from __future__ import annotations

import logging
import sys
from typing import TextIO

from chesscore.console.render import render_board, render_status
from chesscore.console.settings import ConsoleSettings
from chesscore.core.enums import Color, GameResult
from chesscore.core.errors import IllegalMoveError, NotationError
from chesscore.core.notation import move_to_san, parse_move, position_to_fen
from chesscore.game.controller import GameController
from chesscore.game.enums import DrawOffer
from chesscore.game.state import GameState, MoveRecord

_LOGGER = logging.getLogger(__name__)

HELP_TEXT = """\
Enter a move in SAN (Nf3, exd5, O-O, e8=Q) or UCI (g1f3, e7e8q).
Commands:
  moves    list legal moves
  undo     take back the last move
  fen      print the current position as FEN
  board    print the board again
  draw     offer a draw; the opponent answers with 'accept', a move declines
  accept   accept a pending draw offer
  resign   resign for the side to move
  help     show this text
  quit     leave the session"""


class ConsoleSession:
    """Hot-seat game between two people sharing one text stream."""

    def __init__(
        self,
        controller: GameController | None = None,
        settings: ConsoleSettings | None = None,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
    ) -> None:
        self._controller = controller if controller is not None else GameController()
        self._settings = settings or ConsoleSettings()
        self._in = stdin if stdin is not None else sys.stdin
        self._out = stdout if stdout is not None else sys.stdout
        self._controller.events.on_move.append(self._on_move)
        self._controller.events.on_game_over.append(self._on_game_over)
        self._quit = False

    @property
    def controller(self) -> GameController:
        return self._controller

    @property
    def state(self) -> GameState:
        return self._controller.state

    # ── Loop ─────────────────────────────────────────────────────────────

    def run(self) -> GameResult:
        """Play until the game ends, the user quits or input runs out."""
        self._show_board()
        if self.state.is_game_over:
            self._on_game_over(self.state.result)
            return self.state.result
        while not self.state.is_game_over and not self._quit:
            self._write(self._settings.prompt, end="")
            line = self._in.readline()
            if not line:
                self._write("")
                _LOGGER.debug("Input exhausted after %d plies", self.state.ply_count)
                break
            self.handle(line.strip())
        return self.state.result

    def handle(self, line: str) -> None:
        """Execute one line of input: a command or a move."""
        if not line:
            return
        command = line.lower()
        handler = self._COMMANDS.get(command)
        if handler is not None:
            handler(self)
            return
        self._play(line)

    # ── Commands ─────────────────────────────────────────────────────────

    def _play(self, text: str) -> None:
        try:
            move = parse_move(self.state.position, text)
        except (NotationError, IllegalMoveError) as exc:
            self._write(f"Error: {exc}")
            return
        if not self._controller.submit_move(move):
            self._write(f"Error: move {text!r} was not accepted")

    def _cmd_moves(self) -> None:
        position = self.state.position
        sans = sorted(move_to_san(position, m) for m in self.state.legal_moves())
        self._write(" ".join(sans) if sans else "(no legal moves)")

    def _cmd_undo(self) -> None:
        if self._controller.undo_move():
            self._show_board()
        else:
            self._write("Nothing to undo")

    def _cmd_fen(self) -> None:
        self._write(position_to_fen(self.state.position))

    def _cmd_draw(self) -> None:
        self._controller.offer_draw(self.state.side_to_move)
        if self.state.draw_offer == DrawOffer.OFFERED:
            self._write(f"{_name(self.state.side_to_move)} offers a draw")

    def _cmd_accept(self) -> None:
        # Both players share the terminal, so the answer comes from the other side.
        offerer = self.state.draw_offer_by
        if offerer is None or not self._controller.accept_draw(offerer.opposite):
            self._write("No draw offer to accept")

    def _cmd_resign(self) -> None:
        self._controller.resign(self.state.side_to_move)

    def _cmd_help(self) -> None:
        self._write(HELP_TEXT)

    def _cmd_quit(self) -> None:
        self._quit = True

    _COMMANDS = {
        "moves": _cmd_moves,
        "undo": _cmd_undo,
        "fen": _cmd_fen,
        "board": lambda self: self._show_board(),
        "draw": _cmd_draw,
        "accept": _cmd_accept,
        "resign": _cmd_resign,
        "help": _cmd_help,
        "?": _cmd_help,
        "quit": _cmd_quit,
        "exit": _cmd_quit,
    }

    # ── Event handlers ───────────────────────────────────────────────────

    def _on_move(self, record: MoveRecord, state: GameState) -> None:
        if self._settings.echo_moves:
            mover = record.position.side_to_move.opposite
            number = record.position.fullmove_number
            if mover == Color.BLACK:
                number -= 1
            dots = "." if mover == Color.WHITE else "..."
            self._write(f"{number}{dots} {record.san}")
        self._show_board()

    def _on_game_over(self, result: GameResult) -> None:
        reason = self.state.end_reason.name.replace("_", " ").lower()
        self._write(f"Game over: {result.score} ({reason})")

    # ── Output ───────────────────────────────────────────────────────────

    def _show_board(self) -> None:
        position = self.state.position
        self._write(render_board(position, self._settings))
        if not self.state.is_game_over:
            self._write(render_status(position))

    def _write(self, text: str, end: str = "\n") -> None:
        self._out.write(text + end)
        self._out.flush()


def _name(color: Color) -> str:
    return color.name.capitalize()
