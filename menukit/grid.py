"""Cursor movement over suggestions laid out in a grid of rows and columns."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class GridCursor:
    """Position of the selection in ``size`` values laid out row by row.

    ``columns`` is the number of columns of the layout; a value below one
    is treated as a single column. ``col`` and ``row`` start from 0.
    """

    columns: int = 1
    size: int = 0
    col: int = 0
    row: int = 0

    @property
    def _cols(self) -> int:
        return max(self.columns, 1)

    def rows(self) -> int:
        """Rows the layout takes; one when empty, for the no-records message."""
        if self.size == 0:
            return 1
        return -(-self.size // self._cols)

    def index(self) -> int:
        """Index of the selected value."""
        return self.row * self._cols + self.col

    def reset(self) -> None:
        self.col = 0
        self.row = 0

    def move_next(self) -> None:
        """Select the next value, wrapping to the first one."""
        new_col = self.col + 1
        new_row = self.row
        if new_col >= self._cols:
            new_row += 1
            new_col = 0
        if new_row >= self.rows():
            new_row = 0
            new_col = 0

        if new_row * self._cols + new_col >= self.size:
            self.reset()
        else:
            self.col = new_col
            self.row = new_row

    def move_previous(self) -> None:
        """Select the previous value, wrapping to the last one."""
        if self.col > 0:
            new_col, new_row = self.col - 1, self.row
        elif self.row > 0:
            new_col, new_row = self._cols - 1, self.row - 1
        else:
            new_col, new_row = self._cols - 1, max(self.rows() - 1, 0)

        if new_row * self._cols + new_col >= self.size:
            self.col = max(self.size % self._cols - 1, 0)
            self.row = max(self.rows() - 1, 0)
        else:
            self.col = new_col
            self.row = new_row

    def move_up(self) -> None:
        """Move one row up, wrapping to the lowest row that has this column."""
        if self.row > 0:
            self.row -= 1
            return
        new_row = max(self.rows() - 1, 0)
        if new_row * self._cols + self.col >= self.size:
            self.row = max(new_row - 1, 0)
        else:
            self.row = new_row

    def move_down(self) -> None:
        """Move one row down, wrapping to the top row."""
        new_row = self.row + 1
        if new_row >= self.rows() or new_row * self._cols + self.col >= self.size:
            self.row = 0
        else:
            self.row = new_row

    def move_left(self) -> None:
        """Move one column left, wrapping to the last column."""
        if self.col > 0:
            self.col -= 1
        elif self.index() + 1 == self.size:
            self.col = 0
        else:
            self.col = max(self._cols - 1, 0)

    def move_right(self) -> None:
        """Move one column right, wrapping to the first column."""
        new_col = self.col + 1
        if new_col >= self._cols or self.index() + 2 > self.size:
            self.col = 0
        else:
            self.col = new_col