"""Colon commands for the terminal console.

Lines starting with ":" are console commands rather than Python:
    :help       Show command help
    :history    Print the command history into the transcript
    :clear      Clear the transcript
    :autostart  Create (if needed) and open the autostart file
    :exit       Leave the console
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING

from livecon.frontends.cli.autostart import open_autostart_file

if TYPE_CHECKING:
    from livecon.frontends.tui.console import ConsoleApp

logger = logging.getLogger(__name__)


class CommandAction(Enum):
    """Control flow actions from command handlers."""

    CONTINUE = auto()  # Keep reading input
    BREAK = auto()  # Leave the console


@dataclass
class CommandResult:
    """Result from a command handler."""

    action: CommandAction = CommandAction.CONTINUE


CommandHandler = Callable[["ConsoleApp", str], CommandResult]

HELP_TEXT = """\
Console commands:
  :help        Show this help
  :history     List previously submitted commands
  :clear       Clear the console output
  :autostart   Open the autostart file (created if missing)
  :exit        Leave the console (Ctrl-D works too)

Keys:
  Up / Down    Recall previous commands
  Tab          Complete the name under the cursor
  Esc, Enter   Insert a newline
"""


def cmd_help(app: ConsoleApp, args: str) -> CommandResult:
    app.session.transcript.append(HELP_TEXT)
    return CommandResult()


def cmd_history(app: ConsoleApp, args: str) -> CommandResult:
    app.session.show_history()
    return CommandResult()


def cmd_clear(app: ConsoleApp, args: str) -> CommandResult:
    app.clear()
    return CommandResult()


def cmd_autostart(app: ConsoleApp, args: str) -> CommandResult:
    """Create and open the autostart file."""
    path = app.session.context.config.autostart_file
    app.session.transcript.append(f"Opening autostart file at {path}")
    try:
        open_autostart_file(path)
    except OSError as e:
        app.session.transcript.append(str(e))
    return CommandResult()


def cmd_exit(app: ConsoleApp, args: str) -> CommandResult:
    return CommandResult(action=CommandAction.BREAK)


COMMANDS: dict[str, CommandHandler] = {
    "help": cmd_help,
    "history": cmd_history,
    "clear": cmd_clear,
    "autostart": cmd_autostart,
    "exit": cmd_exit,
    "quit": cmd_exit,
}


def dispatch_command(app: ConsoleApp, cmd_str: str) -> CommandResult:
    """Dispatch a colon command.

    Args:
        app: Console application.
        cmd_str: Command string without the leading colon.

    Returns:
        Result of the handler; unknown commands are reported and continue.
    """
    parts = cmd_str.strip().split(maxsplit=1)
    command = parts[0].lower() if parts else ""
    args = parts[1] if len(parts) > 1 else ""

    handler = COMMANDS.get(command)
    if handler is None:
        app.session.transcript.append(f"Unknown command: :{command} (try :help)")
        return CommandResult()

    logger.debug("command: %s", command)
    return handler(app, args)
