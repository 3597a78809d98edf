"""Vertical scroll state for the editing area."""

from .constants import EditorConstants


class Viewport:
    """First visible row plus the terminal height it is fitted to.

    The header and footer bars take ``EditorConstants.CHROME_ROWS`` rows, so
    only ``height - 2`` document rows are visible at a time.
    """

    def __init__(self, height: int = 24, scroll: int = 0):
        self.height = height
        self.scroll = max(0, scroll)

    def visible_rows(self, reserved_rows: int = EditorConstants.CHROME_ROWS) -> int:
        return max(1, self.height - reserved_rows)

    def reconcile(self, row: int, reserved_rows: int = EditorConstants.CHROME_ROWS) -> None:
        """Scroll the minimum amount needed to bring ``row`` into view."""
        rows = self.visible_rows(reserved_rows)
        if row < self.scroll:
            self.scroll = row
        elif row > self.scroll + rows - 1:
            self.scroll = row - rows + 1
        self.scroll = max(0, self.scroll)

    def visible_range(self, line_count: int) -> range:
        """Document rows that currently fit on screen."""
        end = min(line_count, self.scroll + self.visible_rows())
        return range(self.scroll, max(self.scroll, end))
