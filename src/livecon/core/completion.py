"""Completion engine for the console input line.

Combines two sources, in this order:
1. Symbol completions from the evaluator (names, attributes, keywords)
2. Module namespace names, e.g. "import coll" -> "collections"

Suggestions are only recomputed when the segment under the caret changes.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING

from livecon.core.namespaces import loaded_namespaces
from livecon.core.types import Suggestion, SuggestionKind

if TYPE_CHECKING:
    from livecon.core.context import ConsoleContext
    from livecon.core.evaluator import Evaluator

logger = logging.getLogger(__name__)

NamespaceProvider = Callable[[], Iterable[str]]

LITERAL_KEYWORD = "using"


class CompletionEngine:
    """Keeps the suggestion list for the segment being edited.

    Failures never propagate: any error while computing suggestions
    clears the list and is logged at DEBUG.

    Example:
        >>> engine = CompletionEngine(context, evaluator,
        ...     namespace_provider=lambda: ["System", "System.Linq", "Systema"])
        >>> [s.insertion_text for s in engine.namespace_suggestions("System")]
        ['.Linq', 'a']
    """

    def __init__(
        self,
        context: ConsoleContext,
        evaluator: Evaluator,
        namespace_provider: NamespaceProvider | None = None,
    ) -> None:
        self.context = context
        self.evaluator = evaluator
        self._namespace_provider = namespace_provider or self._default_provider
        self._namespaces: frozenset[str] | None = None
        self._suggestions: list[Suggestion] = []
        self._previous: str = ""

    @property
    def suggestions(self) -> list[Suggestion]:
        return list(self._suggestions)

    @property
    def namespaces(self) -> frozenset[str]:
        """Known namespace names, computed on first access and cached."""
        if self._namespaces is None:
            self._namespaces = frozenset(self._namespace_provider())
            logger.debug("namespaces_cached: count=%d", len(self._namespaces))
        return self._namespaces

    def refresh(self, segment_text: str) -> list[Suggestion]:
        """Update suggestions for the text under the caret.

        Args:
            segment_text: Untrimmed segment from the input segmenter.

        Returns:
            Current suggestion list (unchanged if the text did not change).
        """
        if segment_text == self._previous:
            return self.suggestions
        self._previous = segment_text

        if not segment_text:
            self._suggestions = []
            return []

        try:
            self._suggestions = self._compute(segment_text)
        except Exception as e:
            logger.debug("suggestions_failed: %r: %s", segment_text, e)
            self._suggestions = []

        return self.suggestions

    def clear(self) -> None:
        """Drop suggestions and forget the last segment."""
        self._suggestions = []
        self._previous = ""

    def namespace_suggestions(self, text: str) -> list[Suggestion]:
        """Namespace names extending ``text``, sorted by full name.

        A leading import keyword ("using", "import", "from") is stripped.
        Names equal to the typed text are not suggested.
        """
        typed = self._strip_keyword(text.strip())
        matches = sorted(
            name for name in self.namespaces if name.startswith(typed) and len(name) > len(typed)
        )
        return [Suggestion(name[len(typed) :], name, SuggestionKind.NAMESPACE) for name in matches]

    def _strip_keyword(self, typed: str) -> str:
        for keyword in self.context.config.import_keywords:
            if not typed.startswith(keyword):
                continue
            rest = typed[len(keyword) :]
            # "using" is a literal prefix; other keywords must stand alone
            if keyword == LITERAL_KEYWORD or not rest or rest[0].isspace():
                return rest.strip()
        return typed

    def _compute(self, segment_text: str) -> list[Suggestion]:
        completions, _prefix = self.evaluator.get_completions(segment_text)
        suggestions = [s for s in completions if s.insertion_text]
        suggestions.extend(self.namespace_suggestions(segment_text))
        return suggestions

    def _default_provider(self) -> set[str]:
        return loaded_namespaces(include_installed=self.context.config.include_installed_modules)
