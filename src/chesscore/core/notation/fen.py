"""FEN parsing and serialization."""

from __future__ import annotations

from chesscore.core.board import Board
from chesscore.core.enums import CastlingRights, Color, PieceKind
from chesscore.core.errors import InvalidSquareError, NotationError
from chesscore.core.piece import Piece
from chesscore.core.position import Position
from chesscore.core.types import Square, make_square, parse_square, rank_of, square_name

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_CASTLING_CHARS: tuple[tuple[str, CastlingRights], ...] = (
    ("K", CastlingRights.WHITE_KINGSIDE),
    ("Q", CastlingRights.WHITE_QUEENSIDE),
    ("k", CastlingRights.BLACK_KINGSIDE),
    ("q", CastlingRights.BLACK_QUEENSIDE),
)


def _parse_placement(placement: str, fen: str) -> Board:
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise NotationError(f"Invalid FEN board (must contain 8 ranks): {fen!r}")

    cells: list[Piece | None] = [None] * 64
    for rank_idx, rank_text in enumerate(ranks):
        rank = 7 - rank_idx
        file = 0
        for ch in rank_text:
            if ch.isdigit():
                step = int(ch)
                if not (1 <= step <= 8):
                    raise NotationError(f"Invalid FEN digit {ch!r}: {fen!r}")
                file += step
            else:
                if file >= 8:
                    raise NotationError(f"Invalid FEN rank width: {fen!r}")
                piece = Piece.from_char(ch)
                if piece.kind == PieceKind.PAWN and rank in (0, 7):
                    raise NotationError(f"Invalid FEN pawn on back rank: {fen!r}")
                cells[make_square(file, rank)] = piece
                file += 1
            if file > 8:
                raise NotationError(f"Invalid FEN rank width: {fen!r}")
        if file != 8:
            raise NotationError(f"Invalid FEN rank width: {fen!r}")

    board = Board(cells)
    for color in Color:
        kings = len(board.pieces(color, PieceKind.KING))
        if kings != 1:
            raise NotationError(
                f"Invalid FEN: expected one {color} king, found {kings}: {fen!r}"
            )
    return board


def _parse_counter(text: str, name: str, minimum: int) -> int:
    try:
        value = int(text)
    except ValueError:
        raise NotationError(f"Invalid FEN {name}: {text!r}") from None
    if value < minimum:
        raise NotationError(f"Invalid FEN {name}: {text!r}")
    return value


def position_from_fen(fen: str) -> Position:
    """Parse a FEN string into a :class:`Position`."""
    parts = fen.split()
    if not (4 <= len(parts) <= 6):
        raise NotationError(f"Invalid FEN (need 4-6 fields): {fen!r}")

    placement, side_part, castling_part, ep_part = parts[:4]
    board = _parse_placement(placement, fen)

    if side_part == "w":
        side = Color.WHITE
    elif side_part == "b":
        side = Color.BLACK
    else:
        raise NotationError(f"Invalid FEN side-to-move field: {side_part!r}")

    castling = CastlingRights.NONE
    if castling_part != "-":
        rights = dict(_CASTLING_CHARS)
        seen: set[str] = set()
        for ch in castling_part:
            right = rights.get(ch)
            if right is None or ch in seen:
                raise NotationError(f"Invalid FEN castling field: {castling_part!r}")
            seen.add(ch)
            castling |= right

    ep: Square | None = None
    if ep_part != "-":
        try:
            ep = parse_square(ep_part)
        except InvalidSquareError:
            raise NotationError(f"Invalid FEN en-passant square: {ep_part!r}") from None
        expected_ep_rank = 5 if side == Color.WHITE else 2
        if rank_of(ep) != expected_ep_rank:
            raise NotationError(
                f"Invalid FEN en-passant square for side-to-move: {ep_part!r}"
            )
        # The pushed pawn stands one step past the target, and both the target
        # and the square it was pushed from are empty.
        step = -8 if side == Color.WHITE else 8
        pushed = Piece(side.opposite, PieceKind.PAWN)
        if (
            board[ep + step] != pushed
            or board[ep] is not None
            or board[ep - step] is not None
        ):
            raise NotationError(
                f"Invalid FEN en-passant square (no double-pushed pawn): {ep_part!r}"
            )

    halfmove = _parse_counter(parts[4], "halfmove clock", 0) if len(parts) > 4 else 0
    fullmove = _parse_counter(parts[5], "fullmove number", 1) if len(parts) > 5 else 1

    return Position(board, side, castling, ep, halfmove, fullmove)


def position_to_fen(pos: Position) -> str:
    """Serialise a :class:`Position` to FEN."""
    rows: list[str] = []
    for rank in range(7, -1, -1):
        empty = 0
        row = ""
        for file in range(8):
            piece = pos.board[make_square(file, rank)]
            if piece is None:
                empty += 1
                continue
            if empty:
                row += str(empty)
                empty = 0
            row += str(piece)
        if empty:
            row += str(empty)
        rows.append(row)

    side_str = "w" if pos.side_to_move == Color.WHITE else "b"
    castling_str = "".join(ch for ch, right in _CASTLING_CHARS if pos.castling & right)
    ep_str = square_name(pos.en_passant) if pos.en_passant is not None else "-"

    return " ".join(
        (
            "/".join(rows),
            side_str,
            castling_str or "-",
            ep_str,
            str(pos.halfmove_clock),
            str(pos.fullmove_number),
        )
    )
