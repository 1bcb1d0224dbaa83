"""Evaluator - compiles and runs snippets against a persistent namespace.

Error boundary of the console: nothing the user types may raise out of
``compile`` or ``invoke``. Syntax errors and runtime faults become
transcript text, and the namespace keeps whatever state it had.

No sandboxing or timeouts. A snippet that never returns blocks the caller.
"""

from __future__ import annotations

import ast
import asyncio
import builtins
import inspect
import io
import logging
import rlcompleter
import traceback
from contextlib import ExitStack, redirect_stderr, redirect_stdout
from types import CodeType, ModuleType, TracebackType
from typing import TYPE_CHECKING, Any, Protocol

from livecon.core.types import (
    VOID,
    CompiledUnit,
    EvaluationResult,
    Suggestion,
    SuggestionKind,
)

if TYPE_CHECKING:
    from livecon.core.context import ConsoleContext

logger = logging.getLogger(__name__)

FILENAME = "<console>"

# Lets snippets use `await` at top level; see PythonEvaluator._run
COMPILE_FLAGS = ast.PyCF_ALLOW_TOP_LEVEL_AWAIT

# Raised by user code and must not reach the host
CAUGHT_FAULTS = (Exception, SystemExit, KeyboardInterrupt)


class Evaluator(Protocol):
    """Pluggable compile/execute service owning the console namespace.

    Implementations never raise from compile, invoke or get_completions
    because of what the snippet contains.
    """

    @property
    def namespace(self) -> dict[str, Any]:
        """Declarations visible to every later evaluation."""
        ...

    def compile(self, text: str) -> CompiledUnit | None:
        """Compile a snippet; None on failure (diagnostics already in transcript)."""
        ...

    def invoke(self, unit: CompiledUnit) -> EvaluationResult:
        """Run a compiled unit; faults go to the transcript and yield a void result."""
        ...

    def get_completions(self, text: str) -> tuple[list[Suggestion], str]:
        """Best-effort completions for a fragment, plus the prefix being completed."""
        ...

    def close(self) -> None:
        """Release resources held by the evaluator."""
        ...


class PythonEvaluator:
    """Evaluates Python snippets in one long-lived globals dict.

    Multi-statement snippets are allowed; if the last statement is a bare
    expression its value is returned. Top-level ``await`` runs on an event
    loop owned by the evaluator, so awaitables survive between snippets.

    Example:
        >>> evaluator = PythonEvaluator(ConsoleContext())
        >>> evaluator.invoke(evaluator.compile("x = 20"))
        EvaluationResult(value=VOID)
        >>> evaluator.invoke(evaluator.compile("x + 1")).value
        21
    """

    def __init__(self, context: ConsoleContext, namespace: dict[str, Any] | None = None) -> None:
        self.context = context
        self._namespace: dict[str, Any] = namespace if namespace is not None else {}
        self._namespace.setdefault("__name__", "__console__")
        self._loop: asyncio.AbstractEventLoop | None = None

    @property
    def namespace(self) -> dict[str, Any]:
        return self._namespace

    # =========================================================================
    # Compilation
    # =========================================================================

    def compile(self, text: str) -> CompiledUnit | None:
        source = text.strip()
        try:
            tree = ast.parse(source, filename=FILENAME, mode="exec")
            expression: CodeType | None = None
            if tree.body and isinstance(tree.body[-1], ast.Expr):
                last = tree.body.pop()
                expression = compile(ast.Expression(last.value), FILENAME, "eval", COMPILE_FLAGS)
            body = compile(tree, FILENAME, "exec", COMPILE_FLAGS) if tree.body else None
        except (SyntaxError, ValueError, OverflowError, RecursionError, MemoryError) as e:
            # ValueError: null bytes; OverflowError: absurd literals;
            # RecursionError: deeply nested input
            logger.debug("compile_failed: %s", e)
            self.context.transcript.append(
                "".join(traceback.format_exception_only(type(e), e)).rstrip("\n")
            )
            return None

        return CompiledUnit(source=source, body=body, expression=expression)

    # =========================================================================
    # Execution
    # =========================================================================

    def invoke(self, unit: CompiledUnit) -> EvaluationResult:
        if unit.invoked:
            raise RuntimeError("Compiled unit has already been invoked")
        unit.invoked = True

        stdout = io.StringIO()
        stderr = io.StringIO()
        value: Any = VOID
        try:
            with self._capture(stdout, stderr):
                if unit.body is not None:
                    self._run(unit.body)
                if unit.expression is not None:
                    value = self._run(unit.expression)
        except CAUGHT_FAULTS as e:
            self._flush_output(stdout, stderr)
            self.report_fault(e)
            return EvaluationResult()

        self._flush_output(stdout, stderr)
        return EvaluationResult(value)

    def report_fault(self, error: BaseException) -> None:
        """Append an exception and its traceback to the transcript.

        Frames from before the first snippet frame are dropped.
        """
        logger.debug("evaluation_fault: %s: %s", type(error).__name__, error)
        tb = _first_snippet_frame(error.__traceback__)
        lines = traceback.format_exception(type(error), error, tb)
        self.context.transcript.append("".join(lines).rstrip("\n"))

    def _run(self, code: CodeType) -> Any:
        result = eval(code, self._namespace)
        if code.co_flags & inspect.CO_COROUTINE:
            result = self._event_loop().run_until_complete(result)
        return result

    def _event_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None or self._loop.is_closed():
            self._loop = asyncio.new_event_loop()
        return self._loop

    def _capture(self, stdout: io.StringIO, stderr: io.StringIO) -> ExitStack:
        stack = ExitStack()
        if self.context.config.capture_output:
            stack.enter_context(redirect_stdout(stdout))
            stack.enter_context(redirect_stderr(stderr))
        return stack

    def _flush_output(self, stdout: io.StringIO, stderr: io.StringIO) -> None:
        for stream in (stdout, stderr):
            output = stream.getvalue()
            if output:
                self.context.transcript.append(output)

    # =========================================================================
    # Completion
    # =========================================================================

    def get_completions(self, text: str) -> tuple[list[Suggestion], str]:
        fragment = text.lstrip()
        prefix = fragment.rsplit(".", 1)[-1]
        if not fragment.strip():
            return [], prefix

        try:
            completer = _StaticCompleter(self._namespace)
            suggestions: list[Suggestion] = []
            state = 0
            while (match := completer.complete(fragment, state)) is not None:
                state += 1
                if not match.startswith(fragment):
                    continue
                addition = match[len(fragment) :]
                suggestions.append(Suggestion(addition, prefix + addition, self._classify(match)))
        except Exception as e:
            logger.debug("completion_failed: %r: %s", text, e)
            return [], text

        return suggestions, prefix

    def _classify(self, match: str) -> SuggestionKind:
        """Classify a completed name without running descriptors."""
        parts = match.rstrip("(: ").split(".")
        try:
            obj = _lookup_static(self._namespace, parts)
        except AttributeError:
            return SuggestionKind.UNKNOWN

        if isinstance(obj, ModuleType):
            return SuggestionKind.NAMESPACE
        if isinstance(obj, type):
            return SuggestionKind.TYPE
        if len(parts) > 1:
            return SuggestionKind.MEMBER
        return SuggestionKind.UNKNOWN

    def close(self) -> None:
        if self._loop is not None and not self._loop.is_closed():
            self._loop.close()
        self._loop = None


class _StaticCompleter(rlcompleter.Completer):
    """rlcompleter that completes attributes without evaluating the prefix.

    The dotted prefix is resolved with ``inspect.getattr_static``, so
    ``__getattr__`` hooks and properties do not run while the user types.
    """

    def attr_matches(self, text: str) -> list[str]:
        expr, _, attr = text.rpartition(".")
        parts = expr.split(".")
        if not all(part.isidentifier() for part in parts):
            return []
        try:
            base = _lookup_static(self.namespace, parts)
            words = set(dir(base))
        except Exception:
            return []
        words.discard("__builtins__")

        # Like rlcompleter: hide private names until an underscore is typed
        hidden = "_" if attr == "" else "__" if attr == "_" else None
        matches = [
            self._with_postfix(base, f"{expr}.{word}", word)
            for word in words
            if word.startswith(attr) and not (hidden and word.startswith(hidden))
        ]
        if not matches and hidden:
            matches = [
                self._with_postfix(base, f"{expr}.{word}", word)
                for word in words
                if word.startswith(attr)
            ]
        matches.sort()
        return matches

    @staticmethod
    def _with_postfix(base: Any, match: str, word: str) -> str:
        value = inspect.getattr_static(base, word, None)
        if callable(value):
            return match + "("
        return match


def _lookup_static(namespace: dict[str, Any], parts: list[str]) -> Any:
    """Resolve a dotted name without running descriptors or ``__getattr__``.

    Raises:
        AttributeError: If any part cannot be found.
    """
    if parts[0] in namespace:
        obj = namespace[parts[0]]
    else:
        obj = getattr(builtins, parts[0])
    for part in parts[1:]:
        obj = inspect.getattr_static(obj, part)
    return obj


def _first_snippet_frame(tb: TracebackType | None) -> TracebackType | None:
    current = tb
    while current is not None:
        if current.tb_frame.f_code.co_filename == FILENAME:
            return current
        current = current.tb_next
    return None
