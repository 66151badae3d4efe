"""Console front end: text board rendering and an interactive move loop."""

from chesscore.console.render import render_board, render_status
from chesscore.console.session import ConsoleSession
from chesscore.console.settings import ConsoleSettings

__all__ = [
    "ConsoleSession",
    "ConsoleSettings",
    "render_board",
    "render_status",
]
