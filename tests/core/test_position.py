"""Tests for Position values and successor()."""

import dataclasses

import pytest

from chesscore.core.enums import CastlingRights, Color, PieceKind
from chesscore.core.errors import IllegalMoveError
from chesscore.core.legality import legal_moves
from chesscore.core.move import Move
from chesscore.core.notation import STARTING_FEN, position_from_fen, position_to_fen
from chesscore.core.piece import Piece
from chesscore.core.position import Position
from chesscore.core.types import E1, E2, E4, E8, parse_square


class TestPositionValue:
    def test_initial_defaults(self) -> None:
        pos = Position.initial()
        assert pos.side_to_move == Color.WHITE
        assert pos.castling == CastlingRights.ALL
        assert pos.en_passant is None
        assert pos.halfmove_clock == 0
        assert pos.fullmove_number == 1

    def test_frozen(self) -> None:
        pos = Position.initial()
        with pytest.raises(dataclasses.FrozenInstanceError):
            pos.side_to_move = Color.BLACK  # type: ignore[misc]

    def test_king_square(self) -> None:
        pos = Position.initial()
        assert pos.king_square() == E1
        assert pos.king_square(Color.BLACK) == E8

    def test_piece_at(self) -> None:
        pos = Position.initial()
        assert pos.piece_at(E2) == Piece(Color.WHITE, PieceKind.PAWN)
        assert pos.piece_at(E4) is None

    def test_key_depends_on_side_to_move(self) -> None:
        white = position_from_fen("4k3/8/8/8/8/8/8/4K3 w - - 0 1")
        black = position_from_fen("4k3/8/8/8/8/8/8/4K3 b - - 0 1")
        assert white.key != black.key

    def test_key_depends_on_castling(self) -> None:
        a = position_from_fen("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
        b = position_from_fen("r3k2r/8/8/8/8/8/8/R3K2R w Kkq - 0 1")
        assert a.key != b.key

    def test_key_ignores_clocks(self) -> None:
        a = position_from_fen("4k3/8/8/8/8/8/8/4K3 w - - 0 1")
        b = position_from_fen("4k3/8/8/8/8/8/8/4K3 w - - 12 40")
        assert a.key == b.key


class TestSuccessor:
    def test_every_legal_move_keeps_original(self) -> None:
        pos = position_from_fen(STARTING_FEN)
        fen_before = position_to_fen(pos)
        for move in legal_moves(pos):
            pos.successor(move)
            assert position_to_fen(pos) == fen_before, f"Failed for {move}"

    def test_incremental_key_matches_full_key(self) -> None:
        pos = position_from_fen(
            "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1"
        )
        for move in legal_moves(pos):
            after = pos.successor(move)
            rebuilt = Position(
                after.board,
                after.side_to_move,
                after.castling,
                after.en_passant,
                after.halfmove_clock,
                after.fullmove_number,
            )
            assert after.key == rebuilt.key, f"Key drift after {move}"

    def test_empty_from_square(self) -> None:
        with pytest.raises(IllegalMoveError):
            Position.initial().successor(Move(parse_square("e4"), parse_square("e5")))
