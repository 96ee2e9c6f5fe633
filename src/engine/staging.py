"""Edit staging: in-memory grid mutations with a dirty flag.

Nothing here touches a connection. The grid a caller finally submits to
replace_table already carries every staged add/remove/edit, which is why a
full replace is equivalent to applying the diff.
"""

from __future__ import annotations

from typing import Optional

from .grid import Grid


def append_blank_row(grid: Grid) -> int:
    """Append a row of empty cells; return its index."""
    grid.rows.append([""] * grid.column_count)
    return len(grid.rows) - 1


def remove_row(grid: Grid, index: int) -> None:
    if index < 0 or index >= len(grid.rows):
        raise IndexError(f"Row index {index} out of range for {len(grid.rows)} rows")
    del grid.rows[index]


def set_cell(grid: Grid, row: int, column: int, value: Optional[str]) -> None:
    if row < 0 or row >= len(grid.rows):
        raise IndexError(f"Row index {row} out of range for {len(grid.rows)} rows")
    if column < 0:
        raise IndexError(f"Column index {column} out of range")
    cells = grid.rows[row]
    if column >= len(cells):
        cells.extend([""] * (column + 1 - len(cells)))
    cells[column] = "" if value is None else str(value)


class EditSession:
    """A loaded table's grid plus the dirty flag for unsaved edits."""

    def __init__(self, table: str, grid: Grid):
        self.table = table
        self.grid = grid.copy()
        self.dirty = False

    def append_blank_row(self) -> int:
        index = append_blank_row(self.grid)
        self.dirty = True
        return index

    def remove_row(self, index: int) -> None:
        remove_row(self.grid, index)
        self.dirty = True

    def set_cell(self, row: int, column: int, value: Optional[str]) -> None:
        set_cell(self.grid, row, column, value)
        self.dirty = True

    def reset(self, grid: Grid) -> None:
        """Discard staged edits and start over from ``grid``."""
        self.grid = grid.copy()
        self.dirty = False

    def mark_committed(self, grid: Grid) -> None:
        """Adopt the re-read grid after a successful commit."""
        self.reset(grid)
