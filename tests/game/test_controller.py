"""Tests for GameController — the orchestrator."""

from chesscore.core.enums import Color, GameResult
from chesscore.core.move import Move
from chesscore.core.notation import parse_move
from chesscore.core.types import E2, E4, parse_square
from chesscore.game.controller import GameController
from chesscore.game.enums import DrawOffer, GameEndReason, GamePhase
from chesscore.game.state import GameState, MoveRecord


def _submit(ctrl: GameController, *moves: str) -> None:
    for text in moves:
        assert ctrl.submit_move(parse_move(ctrl.state.position, text)), text


class TestNewGame:
    def test_phase_awaiting(self) -> None:
        ctrl = GameController()
        ctrl.new_game()
        assert ctrl.state.phase == GamePhase.AWAITING_MOVE

    def test_custom_fen(self) -> None:
        fen = "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"
        ctrl = GameController()
        ctrl.new_game(fen)
        assert ctrl.state.side_to_move == Color.BLACK

    def test_new_game_discards_history(self) -> None:
        ctrl = GameController()
        _submit(ctrl, "e4")
        ctrl.new_game()
        assert ctrl.state.ply_count == 0

    def test_dead_position_reports_game_over(self) -> None:
        ctrl = GameController()
        results: list[GameResult] = []
        ctrl.events.on_game_over.append(results.append)
        ctrl.new_game("4k3/8/8/8/8/8/8/4K3 w - - 0 1")
        assert results == [GameResult.DRAW_BY_INSUFFICIENT_MATERIAL]


class TestSubmitMove:
    def test_legal_move_accepted(self) -> None:
        ctrl = GameController()
        assert ctrl.submit_move(Move(E2, E4))
        assert ctrl.state.side_to_move == Color.BLACK

    def test_illegal_move_rejected(self) -> None:
        ctrl = GameController()
        assert not ctrl.submit_move(Move(E2, parse_square("e5")))
        assert ctrl.state.side_to_move == Color.WHITE

    def test_move_event_fires(self) -> None:
        ctrl = GameController()
        seen: list[str] = []

        def on_move(record: MoveRecord, state: GameState) -> None:
            seen.append(record.san)

        ctrl.events.on_move.append(on_move)
        _submit(ctrl, "e4", "e5")
        assert seen == ["e4", "e5"]

    def test_rejected_move_fires_nothing(self) -> None:
        ctrl = GameController()
        seen: list[MoveRecord] = []
        ctrl.events.on_move.append(lambda record, state: seen.append(record))
        ctrl.submit_move(Move(E2, parse_square("e5")))
        assert seen == []

    def test_checkmate_event(self) -> None:
        ctrl = GameController()
        results: list[GameResult] = []
        phases: list[GamePhase] = []
        ctrl.events.on_game_over.append(results.append)
        ctrl.events.on_phase_changed.append(phases.append)
        _submit(ctrl, "f3", "e5", "g4", "Qh4")
        assert results == [GameResult.BLACK_WINS]
        assert phases[-1] == GamePhase.GAME_OVER

    def test_moves_after_game_over_rejected(self) -> None:
        ctrl = GameController()
        _submit(ctrl, "f3", "e5", "g4", "Qh4")
        assert not ctrl.submit_move(Move(E2, E4))


class TestUndo:
    def test_undo_move(self) -> None:
        ctrl = GameController()
        _submit(ctrl, "e4")
        assert ctrl.undo_move()
        assert ctrl.state.ply_count == 0

    def test_undo_without_history(self) -> None:
        assert not GameController().undo_move()

    def test_undo_blocked_after_game_over(self) -> None:
        ctrl = GameController()
        _submit(ctrl, "f3", "e5", "g4", "Qh4")
        assert not ctrl.undo_move()
        assert ctrl.state.result == GameResult.BLACK_WINS


class TestResignAndDraw:
    def test_resign(self) -> None:
        ctrl = GameController()
        results: list[GameResult] = []
        ctrl.events.on_game_over.append(results.append)
        ctrl.resign(Color.BLACK)
        assert results == [GameResult.WHITE_WINS]
        assert ctrl.state.end_reason == GameEndReason.RESIGNATION

    def test_resign_after_game_over_ignored(self) -> None:
        ctrl = GameController()
        ctrl.resign(Color.BLACK)
        ctrl.resign(Color.WHITE)
        assert ctrl.state.result == GameResult.WHITE_WINS

    def test_offer_and_accept(self) -> None:
        ctrl = GameController()
        ctrl.offer_draw(Color.WHITE)
        assert ctrl.state.draw_offer == DrawOffer.OFFERED
        assert ctrl.accept_draw(Color.BLACK)
        assert ctrl.state.result == GameResult.DRAW_BY_AGREEMENT
        assert ctrl.state.end_reason == GameEndReason.DRAW_AGREED

    def test_cannot_accept_own_offer(self) -> None:
        ctrl = GameController()
        ctrl.offer_draw(Color.WHITE)
        assert not ctrl.accept_draw(Color.WHITE)
        assert not ctrl.state.is_game_over

    def test_accept_without_offer(self) -> None:
        assert not GameController().accept_draw(Color.BLACK)

    def test_decline(self) -> None:
        ctrl = GameController()
        ctrl.offer_draw(Color.WHITE)
        ctrl.decline_draw()
        assert ctrl.state.draw_offer == DrawOffer.DECLINED
        assert not ctrl.accept_draw(Color.BLACK)

    def test_move_cancels_offer(self) -> None:
        ctrl = GameController()
        ctrl.offer_draw(Color.WHITE)
        _submit(ctrl, "e4")
        assert ctrl.state.draw_offer == DrawOffer.NONE
        assert not ctrl.accept_draw(Color.BLACK)
