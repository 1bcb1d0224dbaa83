"""prompt_toolkit completer backed by a console session.

Hands the buffer text and caret to ConsoleSession.request_completions and
turns the resulting suggestions into dropdown entries. Each entry shows
the full name and inserts only the missing suffix at the caret.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document

if TYPE_CHECKING:
    from livecon.core.session import ConsoleSession


class SessionCompleter(Completer):
    """Completer for the console input line.

    Example:
        >>> completer = SessionCompleter(session)
        >>> # User types "import coll"
        >>> # Dropdown shows: collections, collections.abc
        >>> # Selecting "collections" inserts "ections"
    """

    def __init__(self, session: ConsoleSession) -> None:
        self.session = session

    def get_completions(self, document: Document, complete_event: object) -> Iterable[Completion]:
        """Yield completions for the token under the caret.

        Args:
            document: The current document being edited.
            complete_event: The completion event (unused).

        Yields:
            Completion objects inserted at the caret (start_position=0).
        """
        suggestions = self.session.request_completions(document.text, document.cursor_position)
        for suggestion in suggestions:
            yield Completion(
                text=suggestion.insertion_text,
                start_position=0,
                display=suggestion.display_text,
                display_meta=suggestion.kind.value,
                style=f"class:completion-{suggestion.kind.value}",
            )
