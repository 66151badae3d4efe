"""SAN (Standard Algebraic Notation) conversion and parsing."""

from __future__ import annotations

import re

from chesscore.core.enums import PieceKind
from chesscore.core.errors import IllegalMoveError, NotationError
from chesscore.core.legality import has_legal_move, is_in_check, legal_moves
from chesscore.core.move import Move
from chesscore.core.position import Position
from chesscore.core.types import file_of, parse_square, rank_of, square_name

_SAN_PIECE: dict[PieceKind, str] = {
    PieceKind.KNIGHT: "N",
    PieceKind.BISHOP: "B",
    PieceKind.ROOK: "R",
    PieceKind.QUEEN: "Q",
    PieceKind.KING: "K",
}
_SAN_PIECE_REV: dict[str, PieceKind] = {v: k for k, v in _SAN_PIECE.items()}

_SAN_RE = re.compile(
    r"^(?P<piece>[NBRQK])?"
    r"(?P<file>[a-h])?(?P<rank>[1-8])?"
    r"(?P<capture>x)?"
    r"(?P<to>[a-h][1-8])"
    r"(?:=?(?P<promotion>[NBRQ]))?$"
)
_KINGSIDE_TOKENS = ("O-O", "0-0")
_QUEENSIDE_TOKENS = ("O-O-O", "0-0-0")


def _disambiguation(position: Position, move: Move, legal: list[Move]) -> str:
    board = position.board
    piece = board[move.from_sq]
    assert piece is not None
    rivals = [
        m.from_sq
        for m in legal
        if m.to_sq == move.to_sq
        and m.from_sq != move.from_sq
        and board[m.from_sq] == piece
    ]
    if not rivals:
        return ""
    if all(file_of(sq) != file_of(move.from_sq) for sq in rivals):
        return square_name(move.from_sq)[0]
    if all(rank_of(sq) != rank_of(move.from_sq) for sq in rivals):
        return square_name(move.from_sq)[1]
    return square_name(move.from_sq)


def move_to_san(position: Position, move: Move) -> str:
    """Convert a legal *move* to SAN given the *position* before the move."""
    piece = position.board[move.from_sq]
    if piece is None:
        raise IllegalMoveError(f"No piece on {square_name(move.from_sq)}", move)

    if move.is_castle_kingside:
        san = "O-O"
    elif move.is_castle_queenside:
        san = "O-O-O"
    elif piece.kind == PieceKind.PAWN:
        san = square_name(move.from_sq)[0] + "x" if move.is_capture else ""
        san += square_name(move.to_sq)
        if move.promotion is not None:
            san += "=" + _SAN_PIECE[move.promotion]
    else:
        san = _SAN_PIECE[piece.kind]
        san += _disambiguation(position, move, legal_moves(position))
        if move.is_capture:
            san += "x"
        san += square_name(move.to_sq)

    after = position.successor(move)
    if is_in_check(after):
        san += "+" if has_legal_move(after) else "#"
    return san


def parse_san(position: Position, san: str) -> Move:
    """Parse a SAN string into a legal :class:`Move` of *position*."""
    clean = san.strip().rstrip("+#!?")
    legal = legal_moves(position)

    if clean in _KINGSIDE_TOKENS or clean in _QUEENSIDE_TOKENS:
        kingside = clean in _KINGSIDE_TOKENS
        for m in legal:
            if (m.is_castle_kingside if kingside else m.is_castle_queenside):
                return m
        raise IllegalMoveError(f"Illegal move: {san}")

    match = _SAN_RE.match(clean)
    if match is None:
        raise NotationError(f"Unrecognised SAN: {san!r}")

    kind = _SAN_PIECE_REV.get(match["piece"] or "", PieceKind.PAWN)
    to_sq = parse_square(match["to"])
    promotion = _SAN_PIECE_REV[match["promotion"]] if match["promotion"] else None
    from_file = "abcdefgh".index(match["file"]) if match["file"] else None
    from_rank = int(match["rank"]) - 1 if match["rank"] else None
    capture = match["capture"] is not None

    candidates: list[Move] = []
    for m in legal:
        piece = position.board[m.from_sq]
        if piece is None or piece.kind != kind:
            continue
        if m.to_sq != to_sq or m.promotion != promotion:
            continue
        # Pieces may omit the "x"; pawn moves must mark captures exactly.
        if capture and not m.is_capture:
            continue
        if kind == PieceKind.PAWN and m.is_capture and not capture:
            continue
        if from_file is not None and file_of(m.from_sq) != from_file:
            continue
        if from_rank is not None and rank_of(m.from_sq) != from_rank:
            continue
        candidates.append(m)

    if len(candidates) == 1:
        return candidates[0]
    if not candidates:
        raise IllegalMoveError(f"Illegal move: {san}")
    options = ", ".join(str(m) for m in candidates)
    raise NotationError(f"Ambiguous move: {san} ({options})")
