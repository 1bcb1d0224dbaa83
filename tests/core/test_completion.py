"""Tests for the completion engine."""

from __future__ import annotations

import pytest

from livecon.core.completion import CompletionEngine
from livecon.core.context import ConsoleContext
from livecon.core.evaluator import PythonEvaluator
from livecon.core.types import Suggestion, SuggestionKind



class StubEvaluator:
    """Evaluator double that records completion requests."""

    def __init__(self, completions: list[Suggestion] | None = None, error: bool = False):
        self.namespace: dict = {}
        self.completions = completions or []
        self.error = error
        self.requests: list[str] = []

    def get_completions(self, text: str):
        self.requests.append(text)
        if self.error:
            raise RuntimeError("completion backend down")
        return list(self.completions), text.rsplit(".", 1)[-1]

    def close(self) -> None:
        pass


def make_engine(context: ConsoleContext, names: list[str], evaluator=None) -> CompletionEngine:
    return CompletionEngine(context, evaluator or StubEvaluator(), namespace_provider=lambda: names)


class TestNamespaceSuggestions:
    """Tests for CompletionEngine.namespace_suggestions."""

    def test_extends_typed_name(self, context, namespaces):
        """'System' offers '.Linq' and 'a', not itself."""
        engine = make_engine(context, namespaces)
        suggestions = engine.namespace_suggestions("System")

        assert [s.insertion_text for s in suggestions] == [".Linq", "a"]
        assert [s.display_text for s in suggestions] == ["System.Linq", "Systema"]
        assert all(s.kind == SuggestionKind.NAMESPACE for s in suggestions)

    def test_sorted_by_full_name(self, context, namespaces):
        engine = make_engine(context, namespaces)
        names = [s.display_text for s in engine.namespace_suggestions("Sys")]
        assert names == ["System", "System.Linq", "Systema"]

    @pytest.mark.parametrize("keyword", ["import", "using", "from"])
    def test_import_keyword_stripped(self, context, namespaces, keyword: str):
        engine = make_engine(context, namespaces)
        suggestions = engine.namespace_suggestions(f"{keyword} coll")
        assert [s.insertion_text for s in suggestions] == ["ections", "ections.abc"]

    def test_keyword_prefixed_name_not_stripped(self, context):
        """"importl" completes to importlib instead of names starting with "l"."""
        engine = make_engine(context, ["importlib", "importlib.util", "logging", "locale"])
        suggestions = engine.namespace_suggestions("importl")
        assert [(s.insertion_text, s.display_text) for s in suggestions] == [
            ("ib", "importlib"),
            ("ib.util", "importlib.util"),
        ]

    def test_from_prefixed_name_not_stripped(self, context):
        engine = make_engine(context, ["fromage", "frozen"])
        assert [s.display_text for s in engine.namespace_suggestions("froma")] == ["fromage"]

    def test_bare_keyword_offers_everything(self, context):
        engine = make_engine(context, ["json", "os"])
        assert [s.display_text for s in engine.namespace_suggestions("import")] == ["json", "os"]

    def test_using_is_literal_prefix(self, context, namespaces):
        engine = make_engine(context, namespaces)
        suggestions = engine.namespace_suggestions("usingSystem")
        assert [s.insertion_text for s in suggestions] == [".Linq", "a"]

    def test_surrounding_whitespace_ignored(self, context, namespaces):
        engine = make_engine(context, namespaces)
        assert [s.display_text for s in engine.namespace_suggestions("  json  ")] == []
        assert [s.display_text for s in engine.namespace_suggestions("  js")] == ["json"]

    def test_exact_match_excluded(self, context):
        engine = make_engine(context, ["json"])
        assert engine.namespace_suggestions("json") == []

    def test_namespaces_computed_once(self, context):
        calls = []

        def provider():
            calls.append(1)
            return ["json"]

        engine = CompletionEngine(context, StubEvaluator(), namespace_provider=provider)
        engine.namespace_suggestions("j")
        engine.namespace_suggestions("js")

        assert len(calls) == 1
        assert engine.namespaces == frozenset({"json"})

    def test_default_provider_lists_loaded_modules(self, context):
        engine = CompletionEngine(context, StubEvaluator())
        assert "os" in engine.namespaces


class TestRefresh:
    """Tests for CompletionEngine.refresh."""

    def test_symbol_completions_before_namespaces(self, context, namespaces):
        symbol = Suggestion("tem_value", "System_value", SuggestionKind.UNKNOWN)
        engine = make_engine(context, namespaces, StubEvaluator([symbol]))

        suggestions = engine.refresh("Sys")

        assert suggestions[0] == symbol
        assert [s.display_text for s in suggestions[1:]] == ["System", "System.Linq", "Systema"]

    def test_empty_insertions_dropped(self, context):
        empty = Suggestion("", "json", SuggestionKind.NAMESPACE)
        engine = make_engine(context, [], StubEvaluator([empty]))
        assert engine.refresh("json") == []

    def test_unchanged_text_not_recomputed(self, context, namespaces):
        evaluator = StubEvaluator()
        engine = make_engine(context, namespaces, evaluator)

        engine.refresh("Sys")
        engine.refresh("Sys")

        assert evaluator.requests == ["Sys"]

    def test_changed_text_recomputed(self, context, namespaces):
        evaluator = StubEvaluator()
        engine = make_engine(context, namespaces, evaluator)

        engine.refresh("Sys")
        engine.refresh("Syst")

        assert evaluator.requests == ["Sys", "Syst"]

    def test_empty_text_clears(self, context, namespaces):
        engine = make_engine(context, namespaces)
        engine.refresh("Sys")
        assert engine.refresh("") == []
        assert engine.suggestions == []

    def test_failure_clears_suggestions(self, context, namespaces):
        """Errors while computing suggestions never propagate."""
        engine = make_engine(context, namespaces, StubEvaluator(error=True))
        assert engine.refresh("Sys") == []

    def test_clear_forgets_previous_text(self, context, namespaces):
        evaluator = StubEvaluator()
        engine = make_engine(context, namespaces, evaluator)

        engine.refresh("Sys")
        engine.clear()
        engine.refresh("Sys")

        assert engine.suggestions
        assert evaluator.requests == ["Sys", "Sys"]

    def test_suggestions_returns_copy(self, context, namespaces):
        engine = make_engine(context, namespaces)
        engine.refresh("Sys")
        engine.suggestions.clear()
        assert engine.suggestions

    def test_with_python_evaluator(self, context, namespaces):
        """Names from the live namespace come first, then namespaces."""
        evaluator = PythonEvaluator(context, {"Systematic": 1})
        engine = make_engine(context, namespaces, evaluator)

        displays = [s.display_text for s in engine.refresh("Systema")]

        assert displays == ["Systematic"]
