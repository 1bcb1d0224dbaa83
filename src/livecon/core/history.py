"""Bounded, circular-recall record of submitted commands."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

HISTORY_LIMIT = 50


class HistoryBuffer:
    """Keeps the last ``limit`` submitted commands, oldest evicted first.

    Recall is circular: moving past either end wraps around. Submitting a
    new entry resets the recall cursor to 0, so recalling -1 right after a
    submit yields the most recent entry.

    Example:
        >>> history = HistoryBuffer()
        >>> history.append("x = 1")
        >>> history.append("x + 1")
        >>> history.recall(-1)
        'x + 1'
    """

    def __init__(self, limit: int = HISTORY_LIMIT) -> None:
        if limit < 1:
            raise ValueError(f"history limit must be positive, got {limit}")
        self.limit = limit
        self._entries: list[str] = []
        self._position = 0

    def append(self, entry: str) -> None:
        """Record a command. Blank entries are ignored."""
        entry = entry.strip()
        if not entry:
            return

        self._entries.append(entry)
        overflow = len(self._entries) - self.limit
        if overflow > 0:
            del self._entries[:overflow]
            logger.debug("history_evicted: count=%d", overflow)
        self._position = 0

    def recall(self, direction: int) -> str | None:
        """Move the recall cursor by ``direction`` and return that entry.

        Returns:
            The entry at the wrapped cursor, or None when there is no history
            (the caller keeps its current input).
        """
        if not self._entries:
            return None

        position = self._position + direction
        # Any step below zero lands on the newest entry
        if position < 0:
            position = len(self._entries) - 1
        self._position = position % len(self._entries)
        return self._entries[self._position]

    @property
    def position(self) -> int:
        return self._position

    @property
    def entries(self) -> tuple[str, ...]:
        return tuple(self._entries)

    def clear(self) -> None:
        self._entries.clear()
        self._position = 0

    def __len__(self) -> int:
        return len(self._entries)
