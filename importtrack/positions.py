"""
Position arithmetic over immutable source text.

All functions here are pure: they take the source content and integer offsets
and return new offsets.
"""

from typing import Iterable, Optional, Tuple

from .types import Span, TextRange

WHITESPACE = frozenset(" \t\r")
LINE_BREAKS = frozenset("\n\f\r\x1a")


def is_whitespace(c: str) -> bool:
    """Whitespace within a line; line feeds are not whitespace."""
    return c in WHITESPACE


def is_line_break(c: str) -> bool:
    return c in LINE_BREAKS


def last_non_whitespace(content: str, before: int) -> int:
    """Index of the last non-whitespace character before ``before``, or -1."""
    i = min(before, len(content)) - 1
    while i >= 0 and is_whitespace(content[i]):
        i -= 1
    return i


def next_non_whitespace(content: str, start: int) -> int:
    """Index of the first non-whitespace character at or after ``start``, or -1."""
    i = max(start, 0)
    n = len(content)
    while i < n and is_whitespace(content[i]):
        i += 1
    return i if i < n else -1


def edit_range(content: str, start: int, end: int, replacement: str) -> TextRange:
    """
    Widen an edit so it leaves no trailing whitespace or blank line behind.

    If the rest of the line after ``end`` is blank, the edit extends up to the
    line break. If the replacement is empty and the line before ``start`` is
    blank too, the whole line is deleted, including its line break.

    Args:
        content: Source text
        start: Start offset of the edit
        end: End offset of the edit
        replacement: Text that will replace ``[start, end)``

    Returns:
        The repaired (start, end)
    """
    prev = last_non_whitespace(content, start)
    empty_left = prev < 0 or is_line_break(content[prev])
    nxt = next_non_whitespace(content, end)
    empty_right = nxt < 0 or is_line_break(content[nxt])
    delete_line = empty_left and empty_right and not replacement

    if nxt >= 0 and empty_right:
        end = nxt + 1 if delete_line else nxt
    if delete_line:
        start = prev + 1
    return start, end


def wrapping_range(spans: Iterable[Span]) -> Optional[TextRange]:
    """Smallest range enclosing all ``spans``; None if there are none."""
    start = end = None
    for span in spans:
        start = span.start if start is None else min(start, span.start)
        end = span.end if end is None else max(end, span.end)
    if start is None:
        return None
    return start, end


def offset_to_line_col(text: str, offset: int) -> Tuple[int, int]:
    """
    Convert an offset to 1-based line, 0-based column.

    Args:
        text: Source text
        offset: Character offset (0-based)

    Returns:
        Tuple of (line, col)
    """
    if offset >= len(text):
        offset = len(text)

    line = text.count('\n', 0, offset) + 1
    last_newline = text.rfind('\n', 0, offset)
    if last_newline == -1:
        col = offset
    else:
        col = offset - last_newline - 1

    return line, col


def range_dict(text: str, start: int, end: int) -> dict:
    """Create a protocol range object from offsets."""
    start_line, start_col = offset_to_line_col(text, start)
    end_line, end_col = offset_to_line_col(text, end)

    return {
        "startLine": start_line,
        "startCol": start_col,
        "endLine": end_line,
        "endCol": end_col
    }
