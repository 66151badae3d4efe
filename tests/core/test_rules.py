"""Tests for Rules: checkmate, stalemate, draw detection."""

from chesscore.core.enums import GameResult
from chesscore.core.notation import STARTING_FEN, position_from_fen
from chesscore.core.position import Position
from chesscore.core.rules import Rules

FOOLS_MATE = "rnb1kbnr/pppp1ppp/8/4p3/6Pq/5P2/PPPPP2P/RNBQKBNR w KQkq - 1 3"


class TestCheck:
    def test_starting_not_in_check(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        assert not Rules.is_in_check(pos)

    def test_fools_mate_in_check(self) -> None:
        # After 1.f3 e5 2.g4 Qh4# white is in check
        assert Rules.is_in_check(position_from_fen(FOOLS_MATE))


class TestCheckmate:
    def test_fools_mate(self) -> None:
        pos = position_from_fen(FOOLS_MATE)
        assert Rules.is_checkmate(pos)
        assert Rules.game_result(pos) == GameResult.BLACK_WINS

    def test_fools_mate_played_out(self, play) -> None:
        pos = play(Position.initial(), "f3", "e5", "g4", "Qh4#")
        assert Rules.game_result(pos) == GameResult.BLACK_WINS

    def test_back_rank_mate(self) -> None:
        # R on a8 checks black king d8; white king d6 covers all escapes
        pos = position_from_fen("R2k4/8/3K4/8/8/8/8/8 b - - 0 1")
        assert Rules.is_checkmate(pos)
        assert Rules.game_result(pos) == GameResult.WHITE_WINS

    def test_corner_mate(self) -> None:
        # Rook h8 against king h1, black king f2 takes g1 and g2
        pos = position_from_fen("7r/8/8/8/8/8/5k2/7K w - - 0 1")
        assert Rules.is_checkmate(pos)
        assert Rules.game_result(pos) == GameResult.BLACK_WINS

    def test_not_checkmate_when_can_escape(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/8/r3K3 w - - 0 1")
        assert not Rules.is_checkmate(pos)
        assert Rules.game_result(pos) == GameResult.IN_PROGRESS

    def test_not_checkmate_when_checker_can_be_captured(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/3R4/5PPP/3r2K1 w - - 0 1")
        assert Rules.is_in_check(pos)
        assert not Rules.is_checkmate(pos)


class TestStalemate:
    def test_king_trapped(self) -> None:
        # Black king on h8, white K on f6, white Q on g6
        pos = position_from_fen("7k/8/5KQ1/8/8/8/8/8 b - - 0 1")
        assert Rules.is_stalemate(pos)
        assert Rules.game_result(pos) == GameResult.DRAW_BY_STALEMATE

    def test_not_stalemate_when_has_moves(self) -> None:
        pos = position_from_fen("7k/8/5K2/8/8/8/8/8 b - - 0 1")
        assert not Rules.is_stalemate(pos)


class TestInsufficientMaterial:
    def test_k_vs_k(self) -> None:
        pos = position_from_fen("8/8/4k3/8/8/4K3/8/8 w - - 0 1")
        assert Rules.is_insufficient_material(pos)
        assert Rules.game_result(pos) == GameResult.DRAW_BY_INSUFFICIENT_MATERIAL

    def test_k_bishop_vs_k(self) -> None:
        pos = position_from_fen("8/8/4k3/8/8/4K3/3B4/8 w - - 0 1")
        assert Rules.is_insufficient_material(pos)

    def test_k_knight_vs_k(self) -> None:
        pos = position_from_fen("8/8/4k3/8/8/4K3/3n4/8 w - - 0 1")
        assert Rules.is_insufficient_material(pos)

    def test_same_colored_bishops(self) -> None:
        # c1 and f4 are both dark squares.
        pos = position_from_fen("4k3/8/8/8/5b2/8/8/2B1K3 w - - 0 1")
        assert Rules.is_insufficient_material(pos)

    def test_opposite_colored_bishops_sufficient(self) -> None:
        pos = position_from_fen("4k3/8/8/8/4b3/8/8/2B1K3 w - - 0 1")
        assert not Rules.is_insufficient_material(pos)

    def test_two_knights_sufficient(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/8/1N2K1N1 w - - 0 1")
        assert not Rules.is_insufficient_material(pos)

    def test_k_rook_vs_k_sufficient(self) -> None:
        pos = position_from_fen("8/8/4k3/8/8/4K3/3R4/8 w - - 0 1")
        assert not Rules.is_insufficient_material(pos)

    def test_kp_vs_k_sufficient(self) -> None:
        pos = position_from_fen("8/8/4k3/8/4P3/4K3/8/8 w - - 0 1")
        assert not Rules.is_insufficient_material(pos)


class TestFiftyMoveRule:
    def test_not_triggered_at_start(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/4K2R/8 w - - 0 1")
        assert not Rules.is_fifty_move_rule(pos)

    def test_not_triggered_at_99(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/4K2R/8 w - - 99 50")
        assert Rules.game_result(pos) == GameResult.IN_PROGRESS

    def test_triggered_at_100_halfmoves(self) -> None:
        pos = position_from_fen("4k3/8/8/8/8/8/4K2R/8 w - - 100 51")
        assert Rules.is_fifty_move_rule(pos)
        assert Rules.game_result(pos) == GameResult.DRAW_BY_FIFTY_MOVE

    def test_checkmate_takes_precedence(self) -> None:
        pos = position_from_fen("R2k4/8/3K4/8/8/8/8/8 b - - 100 80")
        assert Rules.game_result(pos) == GameResult.WHITE_WINS


class TestRepetition:
    def test_threshold(self) -> None:
        assert not Rules.is_threefold_repetition(2)
        assert Rules.is_threefold_repetition(3)

    def test_game_result_uses_count(self) -> None:
        pos = position_from_fen("4k2n/8/8/8/8/8/8/4K2N w - - 0 1")
        assert Rules.game_result(pos, repetitions=2) == GameResult.IN_PROGRESS
        assert Rules.game_result(pos, repetitions=3) == GameResult.DRAW_BY_REPETITION

    def test_fifty_move_precedes_repetition(self) -> None:
        pos = position_from_fen("4k2n/8/8/8/8/8/8/4K2N w - - 100 60")
        assert Rules.game_result(pos, repetitions=3) == GameResult.DRAW_BY_FIFTY_MOVE


class TestGameResult:
    def test_in_progress_at_start(self) -> None:
        assert Rules.game_result(Position.initial()) == GameResult.IN_PROGRESS

    def test_result_properties(self) -> None:
        assert GameResult.WHITE_WINS.score == "1-0"
        assert GameResult.BLACK_WINS.score == "0-1"
        assert GameResult.DRAW_BY_REPETITION.score == "1/2-1/2"
        assert GameResult.IN_PROGRESS.score == "*"
        assert GameResult.DRAW_BY_STALEMATE.is_draw
        assert not GameResult.WHITE_WINS.is_draw
        assert not GameResult.IN_PROGRESS.is_over
