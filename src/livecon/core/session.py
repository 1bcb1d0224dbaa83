"""Console session - one submit/evaluate/display cycle at a time.

The session is driven through a render-agnostic event interface:
    submit(text)                      evaluate the input line
    request_completions(text, cursor) refresh suggestions for the caret
    recall_history(direction)         step through previous commands
    accept_suggestion(choice)         splice a suggestion into the input

Strictly turn-based: one caller, one operation in flight, no threads.
"""

from __future__ import annotations

import logging
import traceback
from collections.abc import Callable, Mapping
from typing import Any

from rich.pretty import pretty_repr

from livecon.core.completion import CompletionEngine, NamespaceProvider
from livecon.core.config import ConsoleConfig
from livecon.core.context import ConsoleContext
from livecon.core.evaluator import Evaluator, PythonEvaluator
from livecon.core.helpers import console_helpers
from livecon.core.history import HistoryBuffer
from livecon.core.logging_config import TranscriptLogHandler
from livecon.core.segment import segment_input
from livecon.core.transcript import Transcript
from livecon.core.types import EvaluationResult, InputState, Suggestion

logger = logging.getLogger(__name__)

WELCOME = (
    "Welcome to the Python console (read-evaluate-print loop)! "
    'Enter "helpers()" to get a list of console helpers.'
)

RewriteHook = Callable[[str], str]
EvaluatorFactory = Callable[[ConsoleContext], Evaluator]


class ConsoleSession:
    """Orchestrates history, evaluation and completion for one console.

    Use ConsoleSession.create() to get a fully wired session.

    Example:
        >>> session = ConsoleSession.create()
        >>> _ = session.submit("x = 40")
        >>> _ = session.submit("x + 2")
        >>> session.transcript.lines[-2:]
        ('> x + 2', '42')
    """

    def __init__(
        self,
        context: ConsoleContext,
        evaluator: Evaluator,
        completion: CompletionEngine,
        history: HistoryBuffer,
        rewrite_hook: RewriteHook | None = None,
    ) -> None:
        self.context = context
        self.evaluator = evaluator
        self.completion = completion
        self.history = history
        self.rewrite_hook = rewrite_hook
        self.input_text = ""
        self.cursor = 0
        self._log_handlers: list[tuple[logging.Logger, logging.Handler]] = []

    @classmethod
    def create(
        cls,
        config: ConsoleConfig | None = None,
        *,
        namespace: dict[str, Any] | None = None,
        evaluator_factory: EvaluatorFactory | None = None,
        namespace_provider: NamespaceProvider | None = None,
        rewrite_hook: RewriteHook | None = None,
    ) -> ConsoleSession:
        """Build a session with its context, evaluator and helpers.

        Args:
            config: Settings; defaults to ConsoleConfig().
            namespace: Initial namespace for the default Python evaluator.
            evaluator_factory: Builds a custom evaluator from the context.
            namespace_provider: Source of namespace names for completion.
            rewrite_hook: Optional rewrite applied to submitted text.

        Returns:
            Session with the welcome line in its transcript and the startup
            statements already evaluated.
        """
        context = ConsoleContext(config=config or ConsoleConfig())
        context.transcript.append(WELCOME)

        if evaluator_factory is not None:
            evaluator = evaluator_factory(context)
        else:
            evaluator = PythonEvaluator(context, namespace)
        for name, helper in console_helpers(context).items():
            evaluator.namespace.setdefault(name, helper)

        session = cls(
            context=context,
            evaluator=evaluator,
            completion=CompletionEngine(context, evaluator, namespace_provider),
            history=HistoryBuffer(context.config.history_limit),
            rewrite_hook=rewrite_hook,
        )
        for statement in context.config.startup_statements:
            session.evaluate(statement)
        return session

    @property
    def transcript(self) -> Transcript:
        return self.context.transcript

    @property
    def suggestions(self) -> list[Suggestion]:
        return self.completion.suggestions

    @property
    def input_state(self) -> InputState:
        return InputState(self.input_text, self.cursor)

    # =========================================================================
    # Event interface
    # =========================================================================

    def submit(self, text: str | None = None) -> EvaluationResult:
        """Run one submit cycle.

        Args:
            text: Input to evaluate. Defaults to the current input buffer.

        Returns:
            The evaluation result. Blank input is a no-op returning a void
            result with history, transcript and namespace untouched.
        """
        text = (self.input_text if text is None else text).strip()
        if not text:
            return EvaluationResult()

        self.history.append(text)
        text = self._rewrite(text)
        logger.debug("submit: chars=%d", len(text))

        self.transcript.append(f"> {text}")
        result = self.evaluate(text)
        if result.has_value:
            self._display(result.value)

        self._set_input("", 0)
        self.completion.clear()
        return result

    def request_completions(self, text: str, cursor: int) -> list[Suggestion]:
        """Refresh suggestions for the token under the caret.

        Args:
            text: Whole input buffer.
            cursor: Caret index into ``text``.

        Returns:
            Current suggestion list.
        """
        self._set_input(text, cursor)
        if not text:
            self.completion.clear()
            return []
        segment = segment_input(text, cursor)
        return self.completion.refresh(segment.text)

    def recall_history(self, direction: int) -> InputState:
        """Replace the input with a history entry (-1 older/newest wrap, +1 forward).

        With no history the input is left as it is.
        """
        entry = self.history.recall(direction)
        if entry is not None:
            self._set_input(entry, len(entry))
        self.completion.clear()
        return self.input_state

    def accept_suggestion(self, choice: Suggestion | int) -> InputState:
        """Insert a suggestion's text at the caret.

        Args:
            choice: A suggestion, or an index into the current suggestions.

        Returns:
            The new input text and caret position.

        Raises:
            IndexError: If ``choice`` is an index with no suggestion.
        """
        suggestion = self.completion.suggestions[choice] if isinstance(choice, int) else choice
        insertion = suggestion.insertion_text
        text = self.input_text[: self.cursor] + insertion + self.input_text[self.cursor :]
        self._set_input(text, self.cursor + len(insertion))
        self.completion.clear()
        return self.input_state

    # =========================================================================
    # Other actions
    # =========================================================================

    def evaluate(self, text: str) -> EvaluationResult:
        """Compile and run text without touching history or echoing it."""
        unit = self.evaluator.compile(text)
        if unit is None:
            return EvaluationResult()
        return self.evaluator.invoke(unit)

    def show_history(self) -> None:
        self.transcript.append("")
        self.transcript.append("# History of submitted commands:")
        for entry in self.history.entries:
            self.transcript.append(entry)

    def clear_transcript(self) -> None:
        self.transcript.clear()

    def forward_logs(self, target: logging.Logger | None = None) -> TranscriptLogHandler:
        """Echo log records from ``target`` (default: root) into the transcript."""
        target = target or logging.getLogger()
        handler = TranscriptLogHandler(self.transcript, self.context.config.transcript_log_level)
        target.addHandler(handler)
        self._log_handlers.append((target, handler))
        return handler

    def close(self) -> None:
        for target, handler in self._log_handlers:
            target.removeHandler(handler)
        self._log_handlers.clear()
        self.evaluator.close()

    # =========================================================================
    # Internals
    # =========================================================================

    def _set_input(self, text: str, cursor: int) -> None:
        self.input_text = text
        self.cursor = min(max(cursor, 0), len(text))

    def _rewrite(self, text: str) -> str:
        if self.rewrite_hook is None:
            return text
        try:
            return self.rewrite_hook(text)
        except Exception as e:
            logger.debug("rewrite_hook_failed: %s", e)
            return text

    def _display(self, value: Any) -> None:
        try:
            self.transcript.append(pretty_repr(value))
        except Exception as e:
            self.transcript.append(
                "".join(traceback.format_exception_only(type(e), e)).rstrip("\n")
            )


def literal_substitution_hook(
    substitutions: Mapping[str, str | Callable[[], str | None]],
) -> RewriteHook:
    """Build a rewrite hook that replaces literal tokens in submitted text.

    Replacement values may be callables evaluated at submit time; a callable
    returning None leaves its token alone.

    Example:
        >>> hook = literal_substitution_hook({"$cwd": lambda: repr(os.getcwd())})
        >>> hook("print($cwd)")
        "print('/home/me')"
    """

    def rewrite(text: str) -> str:
        for token, replacement in substitutions.items():
            if token not in text:
                continue
            value = replacement() if callable(replacement) else replacement
            if value is not None:
                text = text.replace(token, value)
        return text

    return rewrite
