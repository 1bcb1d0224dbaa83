"""Terminal console - prompt_toolkit input, rich output.

Adapts the terminal's read loop to the session's event interface: the
completer calls request_completions, Up/Down call recall_history, Enter
calls submit. New transcript lines are printed after every step.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from prompt_toolkit import PromptSession
from prompt_toolkit.document import Document
from prompt_toolkit.filters import has_completions
from prompt_toolkit.key_binding import KeyBindings, KeyPressEvent
from prompt_toolkit.styles import Style
from rich.console import Console

from livecon.core.session import ConsoleSession
from livecon.frontends.tui.commands import CommandAction, dispatch_command
from livecon.frontends.tui.completer import SessionCompleter
from livecon.frontends.tui.themes import get_theme

logger = logging.getLogger(__name__)

PROMPT = ">>> "

_ERROR_LINE = re.compile(
    r"^(Traceback \(most recent call last\):|[A-Za-z_][\w.]*(Error|Exception|Exit|Interrupt)\b)"
)
_LOG_LINE = re.compile(r"^\[(WARNING|ERROR|CRITICAL)\] ")


def line_style(line: str) -> str:
    """Theme style for one transcript line."""
    if line.startswith("> "):
        return "echo"
    if _ERROR_LINE.match(line):
        return "error"
    if _LOG_LINE.match(line):
        return "warning"
    return "output"


@dataclass
class ConsoleApp:
    """Interactive terminal front-end for a ConsoleSession.

    Example:
        >>> app = ConsoleApp(ConsoleSession.create())
        >>> app.run()
    """

    session: ConsoleSession

    console: Console = field(init=False)
    _prompt_session: PromptSession[str] = field(init=False)
    _rendered: int = field(default=0, init=False)
    _running: bool = field(default=False, init=False)

    def __post_init__(self) -> None:
        self.console = Console(theme=get_theme(self.session.context.config.theme))
        self._prompt_session = PromptSession(
            completer=SessionCompleter(self.session),
            complete_while_typing=True,
            key_bindings=self._create_key_bindings(),
            style=Style.from_dict(
                {
                    "prompt": "ansigreen bold",
                    "completion-namespace": "ansiblue",
                    "completion-type": "ansiyellow",
                    "completion-member": "ansicyan",
                }
            ),
        )

    def run(self) -> None:
        """Read and evaluate input until :exit or Ctrl-D."""
        self._running = True
        self.render()
        try:
            while self._running:
                try:
                    text = self._prompt_session.prompt([("class:prompt", PROMPT)])
                except KeyboardInterrupt:
                    continue
                except EOFError:
                    break
                self.handle_input(text)
        finally:
            self._running = False
            self.session.close()

    def handle_input(self, text: str) -> None:
        """Evaluate a line or dispatch a colon command, then print new output."""
        stripped = text.strip()
        if stripped.startswith(":"):
            result = dispatch_command(self, stripped[1:])
            if result.action == CommandAction.BREAK:
                self._running = False
        else:
            self.session.submit(text)
        self.render()

    def render(self) -> None:
        """Print transcript lines added since the last render."""
        lines = self.session.transcript.lines
        if len(lines) < self._rendered:
            # Transcript was cleared behind our back
            self._rendered = 0
        for line in lines[self._rendered :]:
            self.console.print(line, style=line_style(line), markup=False, highlight=False)
        self._rendered = len(lines)

    def clear(self) -> None:
        self.session.clear_transcript()
        self._rendered = 0
        self.console.clear()

    @property
    def running(self) -> bool:
        return self._running

    def _create_key_bindings(self) -> KeyBindings:
        kb = KeyBindings()

        @kb.add("up", filter=~has_completions)
        def _recall_previous(event: KeyPressEvent) -> None:
            self._recall(event, -1)

        @kb.add("down", filter=~has_completions)
        def _recall_next(event: KeyPressEvent) -> None:
            self._recall(event, 1)

        @kb.add("escape", "enter")
        def _newline(event: KeyPressEvent) -> None:
            event.current_buffer.insert_text("\n")

        return kb

    def _recall(self, event: KeyPressEvent, direction: int) -> None:
        if not len(self.session.history):
            return
        state = self.session.recall_history(direction)
        event.current_buffer.document = Document(state.text, state.cursor)
