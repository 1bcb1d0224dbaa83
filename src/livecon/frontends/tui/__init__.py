"""Terminal console front-end (prompt_toolkit + rich)."""

from livecon.frontends.tui.completer import SessionCompleter
from livecon.frontends.tui.console import ConsoleApp
from livecon.frontends.tui.themes import THEMES, create_theme, get_theme

__all__ = [
    "ConsoleApp",
    "SessionCompleter",
    "THEMES",
    "create_theme",
    "get_theme",
]
