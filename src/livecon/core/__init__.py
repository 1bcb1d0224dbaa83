"""Console engine: evaluation, completion, history and session orchestration.

Front-end independent; hosts drive a ConsoleSession through its event
methods and render its transcript and suggestions however they like.
"""

from livecon.core.autostart import run_autostart
from livecon.core.completion import CompletionEngine
from livecon.core.config import ConfigError, ConsoleConfig, load_config
from livecon.core.context import ConsoleContext
from livecon.core.evaluator import Evaluator, PythonEvaluator
from livecon.core.history import HISTORY_LIMIT, HistoryBuffer
from livecon.core.segment import INPUT_DELIMITERS, segment_input
from livecon.core.session import ConsoleSession, literal_substitution_hook
from livecon.core.transcript import Transcript
from livecon.core.types import (
    VOID,
    CompiledUnit,
    EvaluationResult,
    InputState,
    Segment,
    Suggestion,
    SuggestionKind,
)

__all__ = [
    # Session
    "ConsoleSession",
    "ConsoleContext",
    "literal_substitution_hook",
    "run_autostart",
    # Components
    "Evaluator",
    "PythonEvaluator",
    "CompletionEngine",
    "HistoryBuffer",
    "HISTORY_LIMIT",
    "Transcript",
    "segment_input",
    "INPUT_DELIMITERS",
    # Config
    "ConsoleConfig",
    "ConfigError",
    "load_config",
    # Types
    "CompiledUnit",
    "EvaluationResult",
    "InputState",
    "Segment",
    "Suggestion",
    "SuggestionKind",
    "VOID",
]
