"""Document, caret and selection state for the editor."""

from typing import Optional

from .constants import EditorConstants
from .position import Position
from .search import find_forward
from .viewport import Viewport


class TextModel:
    """Lines of text plus the caret (``cursor``) and selection ``anchor``.

    The selection is the range between ``anchor`` and ``cursor``; it is empty
    when they are equal. Every public operation leaves both positions inside
    the document and, when the caret changed rows, scrolls the viewport once.
    """

    lines: list[str]
    cursor: Position
    anchor: Position
    viewport: Viewport
    dirty: bool

    def __init__(self, lines: Optional[list[str]] = None, viewport: Optional[Viewport] = None):
        self.lines = list(lines) if lines else [""]
        self.viewport = viewport or Viewport()
        self.cursor = Position()
        self.anchor = Position()
        self.dirty = False

    # --- Queries ---

    @property
    def line_count(self) -> int:
        return len(self.lines)

    @property
    def current_line(self) -> str:
        return self.lines[self.cursor.row]

    @property
    def has_selection(self) -> bool:
        return self.cursor != self.anchor

    def selection_range(self) -> tuple[Position, Position]:
        """Return the selection as an ordered ``(start, end)`` pair."""
        start, end = sorted((self.cursor, self.anchor))
        return start.copy(), end.copy()

    def selected_text(self) -> str:
        if not self.has_selection:
            return ""
        start, end = self.selection_range()
        if start.row == end.row:
            return self.lines[start.row][start.column:end.column]
        parts = [self.lines[start.row][start.column:]]
        parts.extend(self.lines[start.row + 1:end.row])
        parts.append(self.lines[end.row][:end.column])
        return "\n".join(parts)

    def text(self) -> str:
        return "\n".join(self.lines)

    # --- Invariant helpers ---

    def _clamp(self, position: Position) -> Position:
        row = min(max(position.row, 0), len(self.lines) - 1)
        column = min(max(position.column, 0), len(self.lines[row]))
        return Position(row, column)

    def _collapse(self) -> None:
        self.cursor = self._clamp(self.cursor)
        self.anchor = self.cursor.copy()

    def _scroll_if_moved(self, old_row: int) -> None:
        if self.cursor.row != old_row:
            self.viewport.reconcile(self.cursor.row)

    def _delete_range(self, start: Position, end: Position) -> None:
        if start.row == end.row:
            line = self.lines[start.row]
            self.lines[start.row] = line[:start.column] + line[end.column:]
        else:
            head = self.lines[start.row][:start.column]
            tail = self.lines[end.row][end.column:]
            self.lines[start.row:end.row + 1] = [head + tail]
        self.cursor = start.copy()
        self.anchor = start.copy()
        self.dirty = True

    def _delete_selection(self) -> bool:
        if not self.has_selection:
            return False
        self._delete_range(*self.selection_range())
        return True

    def _insert_lines(self, parts: list[str]) -> None:
        row, column = self.cursor.row, self.cursor.column
        line = self.lines[row]
        after_cursor = line[column:]
        parts = parts[:]
        parts[0] = line[:column] + parts[0]
        parts[-1] = parts[-1] + after_cursor
        self.lines[row:row + 1] = parts
        self.cursor = Position(row + len(parts) - 1, len(parts[-1]) - len(after_cursor))
        self.anchor = self.cursor.copy()
        self.dirty = True

    # --- Editing ---

    def insert_char(self, char: str) -> None:
        """Insert one character at the caret, replacing any selection."""
        old_row = self.cursor.row
        self._delete_selection()
        self._insert_lines([char])
        self._scroll_if_moved(old_row)

    def insert_text(self, text: str) -> None:
        """Insert possibly multi-line text (a paste) at the caret."""
        text = text.replace("\r\n", "\n")
        if not text:
            return
        old_row = self.cursor.row
        self._delete_selection()
        self._insert_lines(text.split("\n"))
        self._scroll_if_moved(old_row)

    def split_line(self) -> None:
        """Break the current line at the caret; the caret starts the new line."""
        old_row = self.cursor.row
        self._delete_selection()
        self._insert_lines(["", ""])
        self._scroll_if_moved(old_row)

    def delete_selection(self) -> None:
        old_row = self.cursor.row
        self._delete_selection()
        self._scroll_if_moved(old_row)

    def delete_backward(self) -> None:
        """Backspace: remove the selection, the previous character or the line break."""
        old_row = self.cursor.row
        if self.has_selection:
            self._delete_selection()
        elif self.cursor.column > 0:
            self._delete_range(Position(self.cursor.row, self.cursor.column - 1), self.cursor.copy())
        elif self.cursor.row > 0:
            previous = self.cursor.row - 1
            self._delete_range(Position(previous, len(self.lines[previous])), self.cursor.copy())
        self._collapse()
        self._scroll_if_moved(old_row)

    def delete_forward(self) -> None:
        """Delete: remove the selection, the character at the caret or the line break."""
        old_row = self.cursor.row
        line_length = len(self.current_line)
        if self.has_selection:
            self._delete_selection()
        elif self.cursor.column < line_length:
            self._delete_range(self.cursor.copy(), Position(self.cursor.row, self.cursor.column + 1))
        elif self.cursor.row < len(self.lines) - 1:
            self._delete_range(self.cursor.copy(), Position(self.cursor.row + 1, 0))
        # else: end of the last line, nothing to delete
        self._collapse()
        self._scroll_if_moved(old_row)

    def swap_line_down(self) -> None:
        self._swap_with(self.cursor.row + 1)

    def swap_line_up(self) -> None:
        self._swap_with(self.cursor.row - 1)

    def _swap_with(self, other: int) -> None:
        row = self.cursor.row
        if 0 <= other < len(self.lines):
            self.lines[row], self.lines[other] = self.lines[other], self.lines[row]
            self.cursor.row = other
            self.dirty = True
        self._collapse()
        self._scroll_if_moved(row)

    # --- Navigation ---

    def move_to(self, row: int, column: int) -> None:
        """Place the caret at a clamped position and drop the selection."""
        old_row = self.cursor.row
        self.cursor = self._clamp(Position(row, column))
        self._collapse()
        self._scroll_if_moved(old_row)

    def move_vertical(self, delta: int) -> None:
        self.move_to(self.cursor.row + delta, self.cursor.column)

    def page(self, delta: int) -> None:
        self.move_vertical(delta * self.viewport.visible_rows())

    def move_horizontal(self, delta: int) -> None:
        """Move the caret left (negative) or right, wrapping at line ends.

        With a selection the caret only collapses onto the selection edge in
        the direction of travel.
        """
        old_row = self.cursor.row
        if self.has_selection:
            start, end = self.selection_range()
            if delta > 0:
                self.cursor = end
            elif delta < 0:
                self.cursor = start
            self._collapse()
            self._scroll_if_moved(old_row)
            return

        row = self.cursor.row
        column = self.cursor.column + delta
        if column < 0:
            if row > 0:
                row -= 1
                column = len(self.lines[row])
            else:
                column = 0
        elif column > len(self.lines[row]):
            if row < len(self.lines) - 1:
                row += 1
                column = 0
            else:
                column = len(self.lines[row])
        self.cursor = Position(row, column)
        self._collapse()
        self._scroll_if_moved(old_row)

    def move_line_start(self) -> None:
        self.move_to(self.cursor.row, 0)

    def move_line_end(self) -> None:
        self.move_to(self.cursor.row, len(self.current_line))

    def goto_line(self, row: int) -> None:
        """Jump to the start of ``row`` (0-based, clamped)."""
        self.cursor = self._clamp(Position(row, 0))
        self._collapse()
        self.viewport.reconcile(self.cursor.row)

    def extend_selection(self, delta: int) -> None:
        """Move the anchor ``delta`` characters, crossing line breaks.

        The caret stays put. A line break counts as one character, so growing
        past the end of a line continues at the start of the next one.
        """
        anchor = self._clamp(self.anchor)
        last_row = len(self.lines) - 1
        for _ in range(abs(delta)):
            if delta > 0:
                if anchor.column < len(self.lines[anchor.row]):
                    anchor.column += 1
                elif anchor.row < last_row:
                    anchor = Position(anchor.row + 1, 0)
                else:
                    break
            else:
                if anchor.column > 0:
                    anchor.column -= 1
                elif anchor.row > 0:
                    anchor = Position(anchor.row - 1, len(self.lines[anchor.row - 1]))
                else:
                    break
        self.anchor = anchor

    def extend_selection_vertical(self, delta: int) -> None:
        """Move the anchor up or down whole rows; the caret stays put."""
        self.anchor = self._clamp(Position(self.anchor.row + delta, self.anchor.column))

    # --- Search ---

    def find_next(self, pattern: str, start: Optional[Position] = None) -> bool:
        """Select the next occurrence of ``pattern``.

        Returns False, leaving caret and selection untouched, when the
        pattern does not occur anywhere in the document.
        """
        origin = self._clamp(start if start is not None else self.cursor)
        match = find_forward(self.lines, pattern, origin)
        if match is None:
            return False
        self.anchor = match
        self.cursor = Position(match.row, match.column + len(pattern))
        self.viewport.reconcile(self.cursor.row, EditorConstants.SEARCH_CHROME_ROWS)
        return True
