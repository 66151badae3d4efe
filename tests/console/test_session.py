"""Tests for the interactive console session."""

import io

from chesscore.console.session import HELP_TEXT, ConsoleSession
from chesscore.console.settings import ConsoleSettings
from chesscore.core.enums import GameResult
from chesscore.game.controller import GameController


def _run(script: str, fen: str | None = None) -> tuple[ConsoleSession, str]:
    controller = GameController()
    controller.new_game(fen)
    out = io.StringIO()
    session = ConsoleSession(
        controller,
        ConsoleSettings(glyphs="ascii"),
        stdin=io.StringIO(script),
        stdout=out,
    )
    session.run()
    return session, out.getvalue()


class TestMoves:
    def test_fools_mate(self) -> None:
        session, out = _run("f3\ne5\ng4\nQh4\n")
        assert session.state.result == GameResult.BLACK_WINS
        assert "1. f3" in out
        assert "1... e5" in out
        assert "2... Qh4#" in out
        assert "Game over: 0-1 (checkmate)" in out

    def test_uci_input(self) -> None:
        session, out = _run("e2e4\ne7e5\n")
        assert session.state.ply_count == 2
        assert "1... e5" in out

    def test_bad_input_reports_error(self) -> None:
        session, out = _run("e5\nzz9\n")
        assert session.state.ply_count == 0
        assert out.count("Error:") == 2

    def test_run_stops_at_end_of_input(self) -> None:
        session, _ = _run("e4\n")
        assert session.state.result == GameResult.IN_PROGRESS
        assert session.state.ply_count == 1

    def test_dead_start_position(self) -> None:
        session, out = _run("", fen="4k3/8/8/8/8/8/8/4K3 w - - 0 1")
        assert session.state.is_game_over
        assert "Game over: 1/2-1/2 (insufficient material)" in out


class TestCommands:
    def test_help(self) -> None:
        _, out = _run("help\n")
        assert HELP_TEXT in out

    def test_fen(self) -> None:
        _, out = _run("e4\nfen\n")
        assert "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1" in out

    def test_moves_lists_san(self) -> None:
        _, out = _run("moves\n")
        assert "Nf3" in out
        assert "e4" in out

    def test_undo(self) -> None:
        session, _ = _run("e4\nundo\n")
        assert session.state.ply_count == 0

    def test_undo_nothing(self) -> None:
        _, out = _run("undo\n")
        assert "Nothing to undo" in out

    def test_resign(self) -> None:
        session, out = _run("e4\nresign\n")
        assert session.state.result == GameResult.WHITE_WINS
        assert "Game over: 1-0 (resignation)" in out

    def test_draw_offer_accepted(self) -> None:
        session, out = _run("draw\naccept\n")
        assert "White offers a draw" in out
        assert session.state.result == GameResult.DRAW_BY_AGREEMENT
        assert "(draw agreed)" in out

    def test_accept_without_offer(self) -> None:
        session, out = _run("accept\n")
        assert "No draw offer to accept" in out
        assert not session.state.is_game_over

    def test_quit_stops_loop(self) -> None:
        session, _ = _run("quit\ne4\n")
        assert session.state.ply_count == 0

    def test_commands_case_insensitive(self) -> None:
        session, _ = _run("RESIGN\n")
        assert session.state.result == GameResult.BLACK_WINS
