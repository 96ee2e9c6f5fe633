"""TableEngine: the calls the presentation layer makes into the core."""

from __future__ import annotations

from collections import Counter
from typing import List, Optional, Sequence

from helpers.logging_config import get_logger

from . import materializer, replace, schema
from .config import EngineConfig
from .connection import ConnectionManager
from .errors import NoSuchTableError
from .grid import Grid

logger = get_logger(__name__)


class TableEngine:
    """One open database file and the operations on its tables.

    Every call runs synchronously on the caller's thread. Opening a new file
    closes the previous one. Overlapping replace operations on one engine are
    not supported.
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        self._manager = ConnectionManager(config)

    # --- Lifecycle ---------------------------------------------------------------

    def open(self, path: str) -> None:
        self._manager.open(path)

    def close(self) -> None:
        self._manager.close()

    def is_loaded(self) -> bool:
        return self._manager.is_live()

    @property
    def current_path(self) -> Optional[str]:
        return self._manager.path

    @property
    def connection_id(self) -> Optional[str]:
        return self._manager.connection_id

    def __enter__(self) -> "TableEngine":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    # --- Schema ------------------------------------------------------------------

    def list_tables(self) -> List[str]:
        return schema.list_tables(self._manager.connection)

    def columns_of(self, table: str) -> List[str]:
        return schema.columns_of(self._manager.connection, table)

    # --- Data --------------------------------------------------------------------

    def load_table(self, table: str) -> Grid:
        conn = self._manager.connection
        if not table:
            raise NoSuchTableError("No table name given")
        return materializer.load_table(conn, table)

    def replace_table(self, table: str, grid: Grid) -> Grid:
        """Persist ``grid`` as the full content of ``table``, then re-read it.

        Returns the grid as stored. Column affinity may change how some cells
        read back (e.g. "01" in an INTEGER column reads as "1"); such
        differences are logged, not raised.
        """
        conn = self._manager.connection
        if not table:
            raise NoSuchTableError("No table name given")
        replace.replace_table(conn, table, grid)
        stored = materializer.load_table(conn, table)
        width = stored.column_count
        expected = Counter(tuple(r) for r in grid.padded_rows(width))
        if Counter(tuple(r) for r in stored.rows) != expected:
            logger.warning(f"Table {table} reads back differently than written (type affinity coercion)")
        return stored

    def append_row(self, table: str, values: Sequence[Optional[str]]) -> None:
        replace.append_row(self._manager.connection, table, values)

    def delete_row_at(self, table: str, offset: int) -> bool:
        """Delete by storage-order offset. Unsafe if the table changed since the last load."""
        return replace.delete_row_at(self._manager.connection, table, offset)
