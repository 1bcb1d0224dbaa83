"""Tests for the command history buffer."""

from __future__ import annotations

import pytest

from livecon.core.history import HISTORY_LIMIT, HistoryBuffer


def filled(*entries: str) -> HistoryBuffer:
    history = HistoryBuffer()
    for entry in entries:
        history.append(entry)
    return history


class TestAppend:
    """Tests for HistoryBuffer.append."""

    def test_append_trims(self):
        """Entries are stored trimmed."""
        history = filled("  x = 1  ")
        assert history.entries == ("x = 1",)

    def test_blank_entries_ignored(self):
        """Empty and whitespace-only entries are not recorded."""
        history = filled("", "   ", "\t\n")
        assert len(history) == 0

    def test_limit_default(self):
        """Default limit is 50."""
        assert HistoryBuffer().limit == HISTORY_LIMIT == 50

    def test_bounded_to_last_fifty(self):
        """After N > 50 submissions exactly the last 50 remain, oldest first."""
        history = filled(*(f"cmd {i}" for i in range(73)))

        assert len(history) == 50
        assert history.entries == tuple(f"cmd {i}" for i in range(23, 73))

    def test_custom_limit(self):
        """Custom limits evict down to the limit."""
        history = HistoryBuffer(limit=2)
        for entry in ("a", "b", "c"):
            history.append(entry)
        assert history.entries == ("b", "c")

    def test_invalid_limit(self):
        """Limit must be positive."""
        with pytest.raises(ValueError):
            HistoryBuffer(limit=0)

    def test_append_resets_recall_cursor(self):
        """A new entry puts the recall cursor back at 0."""
        history = filled("a", "b", "c")
        history.recall(1)
        history.append("d")
        assert history.position == 0


class TestRecall:
    """Tests for HistoryBuffer.recall."""

    def test_empty_history_is_noop(self):
        """Recall with no history returns None instead of failing."""
        history = HistoryBuffer()
        assert history.recall(-1) is None
        assert history.recall(1) is None

    def test_recall_up_returns_newest(self):
        """-1 from a fresh cursor wraps to the newest entry."""
        history = filled("a", "b", "c")
        assert history.recall(-1) == "c"

    def test_round_trip(self):
        """+1 then -1 returns to the entry at the starting cursor."""
        history = filled("a", "b", "c")
        before = history.entries[history.position]

        history.recall(1)
        assert history.recall(-1) == before

    def test_cycles_forward(self):
        """Repeated +1 cycles through every entry."""
        history = filled("a", "b", "c")
        assert [history.recall(1) for _ in range(6)] == ["b", "c", "a", "b", "c", "a"]

    def test_cycles_backward(self):
        """Repeated -1 cycles through every entry in reverse."""
        history = filled("a", "b", "c")
        assert [history.recall(-1) for _ in range(4)] == ["c", "b", "a", "c"]

    def test_large_negative_step_lands_on_newest(self):
        """Any step below zero lands on the newest entry."""
        history = filled("a", "b", "c", "d", "e")
        assert history.recall(-3) == "e"

    def test_single_entry(self):
        """A single entry is returned in both directions."""
        history = filled("only")
        assert history.recall(-1) == "only"
        assert history.recall(1) == "only"

    def test_clear(self):
        """clear() empties the buffer."""
        history = filled("a")
        history.clear()
        assert len(history) == 0
        assert history.recall(1) is None
