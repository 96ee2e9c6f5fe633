"""SQLGrid table engine.

Opens a SQLite file, introspects its schema, materializes one table into a
text grid and commits an edited grid back atomically.
"""

from .config import EngineConfig
from .connection import ConnectionManager
from .errors import (
    EngineError,
    ConnError,
    CannotOpenError,
    InvalidStructureError,
    NoConnectionError,
    LoadError,
    NoSuchTableError,
    QueryFailedError,
    ReplaceError,
    TransactionStartFailedError,
    WriteFailedError,
    CommitFailedError,
)
from .grid import Grid
from .materializer import load_table, to_text
from .replace import replace_table, resolve_write_columns, append_row, delete_row_at
from .schema import list_tables, columns_of, quote_identifier
from .staging import EditSession, append_blank_row, remove_row, set_cell
from .worker import TableEngine

__all__ = [
    # Facade
    "TableEngine",
    "EngineConfig",
    "ConnectionManager",
    "Grid",
    # Core operations
    "list_tables",
    "columns_of",
    "quote_identifier",
    "load_table",
    "to_text",
    "replace_table",
    "resolve_write_columns",
    "append_row",
    "delete_row_at",
    # Staging
    "EditSession",
    "append_blank_row",
    "remove_row",
    "set_cell",
    # Errors
    "EngineError",
    "ConnError",
    "CannotOpenError",
    "InvalidStructureError",
    "NoConnectionError",
    "LoadError",
    "NoSuchTableError",
    "QueryFailedError",
    "ReplaceError",
    "TransactionStartFailedError",
    "WriteFailedError",
    "CommitFailedError",
]
