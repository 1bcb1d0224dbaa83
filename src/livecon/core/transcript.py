"""Append-only transcript of console output."""

from __future__ import annotations

from collections.abc import Iterator


class Transcript:
    """Ordered, unbounded sequence of display lines.

    Components only ever append. ``clear`` exists for the host (the
    "clear log" action) and is treated as an external reset.
    """

    def __init__(self) -> None:
        self._lines: list[str] = []

    def append(self, text: object = "") -> None:
        """Append text, splitting it into display lines.

        A trailing newline does not produce an extra empty line, but an
        explicit empty string appends one blank line.
        """
        self._lines.extend(str(text).splitlines() or [""])

    def extend(self, lines: list[str]) -> None:
        for line in lines:
            self.append(line)

    @property
    def lines(self) -> tuple[str, ...]:
        return tuple(self._lines)

    @property
    def text(self) -> str:
        return "\n".join(self._lines)

    def tail(self, start: int) -> list[str]:
        """Lines appended since ``start`` (a previous ``len(transcript)``)."""
        return self._lines[start:]

    def clear(self) -> None:
        self._lines.clear()

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._lines))
