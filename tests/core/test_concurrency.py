"""Shared positions are read-only, so parallel analysis needs no locking."""

from concurrent.futures import ThreadPoolExecutor

from chesscore.core.legality import is_legal, legal_moves
from chesscore.core.move_generator import pseudo_legal_moves
from chesscore.core.notation import position_from_fen, position_to_fen
from chesscore.core.perft import perft

KIWIPETE = "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1"


def test_parallel_legality_checks_match_sequential() -> None:
    pos = position_from_fen(KIWIPETE)
    candidates = pseudo_legal_moves(pos)
    expected = [is_legal(pos, m) for m in candidates]

    with ThreadPoolExecutor(max_workers=4) as pool:
        results = list(pool.map(lambda m: is_legal(pos, m), candidates))

    assert results == expected
    assert sum(results) == len(legal_moves(pos))
    assert position_to_fen(pos) == KIWIPETE


def test_parallel_subtree_counts() -> None:
    pos = position_from_fen(KIWIPETE)
    moves = legal_moves(pos)

    with ThreadPoolExecutor(max_workers=4) as pool:
        counts = list(pool.map(lambda m: perft(pos.successor(m), 1), moves))

    assert sum(counts) == 2_039
