"""In-memory grid of text cells with a header row."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class Grid:
    header: List[Optional[str]] = field(default_factory=list)
    rows: List[List[str]] = field(default_factory=list)

    @property
    def column_count(self) -> int:
        return len(self.header)

    @property
    def row_count(self) -> int:
        return len(self.rows)

    def copy(self) -> "Grid":
        return Grid(header=list(self.header), rows=[list(r) for r in self.rows])

    def padded_rows(self, width: Optional[int] = None) -> List[List[str]]:
        """Rows padded with "" (or truncated) to ``width`` cells.

        ``width`` defaults to the header-derived column count. ``None`` cells
        become "".
        """
        if width is None:
            width = self.column_count
        out = []
        for row in self.rows:
            cells = ["" if v is None else str(v) for v in row[:width]]
            cells.extend([""] * (width - len(cells)))
            out.append(cells)
        return out
