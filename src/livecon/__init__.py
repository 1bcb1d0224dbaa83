"""livecon - embeddable interactive Python console engine.

An application embeds a ConsoleSession and forwards user input to it; the
session evaluates snippets against a persistent namespace, keeps a bounded
command history and offers completions for the token under the caret.

Layers:
    core/       Console engine (evaluator, completion, history, session)
    frontends/  Terminal console (prompt_toolkit) and CLI (rich-click)

Quick Start:
    >>> from livecon import ConsoleSession
    >>>
    >>> session = ConsoleSession.create()
    >>> _ = session.submit("import math")
    >>> _ = session.submit("math.sqrt(16)")
    >>> session.transcript.lines[-1]
    '4.0'
    >>> [s.display_text for s in session.request_completions("math.fl", 7)]
    ['floor(']
"""

from livecon.__version__ import __version__
from livecon.core import (
    ConsoleConfig,
    ConsoleSession,
    EvaluationResult,
    PythonEvaluator,
    Suggestion,
    SuggestionKind,
    load_config,
    run_autostart,
)

__all__ = [
    "__version__",
    "ConsoleConfig",
    "ConsoleSession",
    "EvaluationResult",
    "PythonEvaluator",
    "Suggestion",
    "SuggestionKind",
    "load_config",
    "run_autostart",
]
