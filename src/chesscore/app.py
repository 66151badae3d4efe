"""Application entry point."""

from __future__ import annotations

import argparse
import logging
import sys
import time
from collections.abc import Sequence

from chesscore.console.session import ConsoleSession
from chesscore.console.settings import ConsoleSettings
from chesscore.core.errors import ChessError
from chesscore.core.notation import STARTING_FEN, position_from_fen
from chesscore.core.perft import divide, perft
from chesscore.game.controller import GameController

_LOGGER = logging.getLogger(__name__)
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chesscore",
        description="Chess rules engine with a console board",
    )
    parser.add_argument(
        "--log-level",
        choices=_LOG_LEVELS,
        default="WARNING",
        help="Logging level for diagnostics on stderr (default: WARNING)",
    )
    sub = parser.add_subparsers(dest="command")

    play = sub.add_parser("play", help="Play a two-player game in the terminal")
    play.add_argument("--fen", default=None, help="Start from this FEN position")
    play.add_argument(
        "--ascii", action="store_true", help="Draw pieces with FEN letters"
    )
    play.add_argument(
        "--flip", action="store_true", help="Show the board from Black's side"
    )
    play.add_argument(
        "--no-coordinates",
        action="store_true",
        help="Hide file letters and rank numbers",
    )

    perft_cmd = sub.add_parser("perft", help="Count move-tree leaf nodes")
    perft_cmd.add_argument("depth", type=int, help="Search depth in plies")
    perft_cmd.add_argument("--fen", default=STARTING_FEN, help="Root position")
    perft_cmd.add_argument(
        "--divide", action="store_true", help="Print the count for each root move"
    )
    return parser


def _run_play(args: argparse.Namespace) -> int:
    settings = ConsoleSettings(
        glyphs="ascii" if args.ascii else "unicode",
        flip=args.flip,
        show_coordinates=not args.no_coordinates,
    )
    controller = GameController()
    controller.new_game(args.fen)
    ConsoleSession(controller, settings).run()
    return 0


def _run_perft(args: argparse.Namespace) -> int:
    position = position_from_fen(args.fen)
    started = time.perf_counter()
    if args.divide:
        counts = divide(position, args.depth)
        for uci, nodes in sorted(counts.items()):
            print(f"{uci}: {nodes}")
        total = sum(counts.values())
    else:
        total = perft(position, args.depth)
    elapsed = time.perf_counter() - started
    print(f"Nodes: {total}")
    _LOGGER.info("perft(%d) took %.3fs", args.depth, elapsed)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Launch the chesscore command line."""
    parser = build_parser()
    arg_list = list(sys.argv[1:] if argv is None else argv)
    args = parser.parse_args(arg_list)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if args.command is None:
        args = parser.parse_args([*arg_list, "play"])

    try:
        if args.command == "perft":
            return _run_perft(args)
        return _run_play(args)
    except (ChessError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
