"""Document coordinates."""

from dataclasses import dataclass


@dataclass(order=True)
class Position:
    """A (row, column) pair; columns count characters, a tab is one column."""
    row: int = 0
    column: int = 0

    def copy(self) -> "Position":
        return Position(self.row, self.column)
