"""Core value types shared by the console components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import CodeType
from typing import Any


class SuggestionKind(Enum):
    """Classification of a completion candidate."""

    UNKNOWN = "unknown"
    NAMESPACE = "namespace"
    MEMBER = "member"
    TYPE = "type"


@dataclass(frozen=True)
class Suggestion:
    """A completion candidate.

    Attributes:
        insertion_text: Text spliced into the buffer at the caret.
        display_text: Full text shown to the user.
        kind: Classification of the candidate.
    """

    insertion_text: str
    display_text: str
    kind: SuggestionKind = SuggestionKind.UNKNOWN


@dataclass(frozen=True)
class Segment:
    """Token under the caret: text plus its [start, end) offsets in the buffer."""

    text: str
    start: int
    end: int


@dataclass(frozen=True)
class InputState:
    """Input buffer contents and caret position."""

    text: str = ""
    cursor: int = 0


class _VoidType:
    """Marker for evaluations that produced no value."""

    _instance: _VoidType | None = None

    def __new__(cls) -> _VoidType:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "VOID"

    def __bool__(self) -> bool:
        return False


VOID = _VoidType()


@dataclass(frozen=True)
class EvaluationResult:
    """Outcome of one evaluation.

    Failures never surface here: they are written to the transcript and the
    caller gets a void result.
    """

    value: Any = VOID

    @property
    def is_void(self) -> bool:
        return self.value is VOID

    @property
    def has_value(self) -> bool:
        """True when there is something worth displaying (non-void, non-None)."""
        return not self.is_void and self.value is not None


@dataclass
class CompiledUnit:
    """Compiled form of a snippet, invocable once.

    ``body`` holds every statement except a trailing bare expression, which
    is compiled separately into ``expression`` so its value can be returned.
    """

    source: str
    body: CodeType | None = None
    expression: CodeType | None = None
    invoked: bool = field(default=False, repr=False)
