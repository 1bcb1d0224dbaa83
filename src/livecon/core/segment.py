"""Isolate the expression under the caret from a larger input buffer."""

from __future__ import annotations

from livecon.core.types import Segment

# Statement, argument and operator boundaries
INPUT_DELIMITERS = frozenset(",;<>()[]=|&")


def segment_input(buffer: str, cursor: int) -> Segment:
    """Return the token the user is editing.

    Scans backward from ``cursor - 1`` (inclusive) for the nearest
    delimiter; the segment starts right after it. Scans forward from the
    same anchor for the end. A caret at 0 selects the whole buffer.

    Examples:
        >>> segment_input("a(b.Ba", 6).text
        'b.Ba'
        >>> segment_input("foo.Ba", 6).text
        'foo.Ba'

    Args:
        buffer: Full input text.
        cursor: Caret index; out-of-range values are clamped.

    Returns:
        Segment with untrimmed text and its [start, end) offsets.
    """
    length = len(buffer)
    cursor = min(max(cursor, 0), length)

    if cursor == 0:
        return Segment(buffer, 0, length)

    anchor = cursor - 1

    start = 0
    for index in range(anchor, -1, -1):
        if buffer[index] in INPUT_DELIMITERS:
            start = index + 1
            break

    end = length
    for index in range(anchor, length):
        if buffer[index] in INPUT_DELIMITERS:
            end = index
            break

    if end < start:
        end = length

    return Segment(buffer[start:end], start, end)
