"""Literal forward search with wraparound."""

from typing import Optional, Sequence

from .position import Position


def _find_in_rows(lines: Sequence[str], pattern: str, rows: range,
                  start: Optional[Position] = None) -> Optional[Position]:
    for row in rows:
        line = lines[row]
        offset = 0
        if start is not None and row == start.row:
            offset = start.column
        index = line.find(pattern, offset)
        if index != -1:
            return Position(row, index)
    return None


def find_forward(lines: Sequence[str], pattern: str, start: Position) -> Optional[Position]:
    """Return the start of the next occurrence of ``pattern`` at or after ``start``.

    The line holding ``start`` is only searched from ``start.column`` onwards.
    When nothing is found before the end of the document the search wraps to
    row 0 and stops short of the start line, so text before ``start`` on its
    own line is never matched. Matching is case-sensitive and literal; an
    empty pattern never matches.
    """
    if not pattern or not lines:
        return None
    row = min(max(start.row, 0), len(lines) - 1)
    start = Position(row, min(max(start.column, 0), len(lines[row])))

    match = _find_in_rows(lines, pattern, range(start.row, len(lines)), start)
    if match is None:
        match = _find_in_rows(lines, pattern, range(0, start.row))
    return match
