"""Full-scan materialization of a table into a text Grid."""

from __future__ import annotations

import sqlite3
from typing import Any

from helpers.logging_config import get_logger

from .errors import NoSuchTableError, QueryFailedError
from .grid import Grid
from .schema import columns_of, quote_identifier

logger = get_logger(__name__)

# Selects exactly the pragma_table_info columns (generated columns excluded).
SELECT_COLUMNS_QUERY = "SELECT {columns} FROM {table}"


def to_text(value: Any) -> str:
    """Coerce a stored value to its display text. NULL becomes ""."""
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return str(value)


def load_table(conn: sqlite3.Connection, table: str) -> Grid:
    """Read every row of ``table`` into a Grid.

    The header is the schema's column order and the scan selects exactly
    those columns. No ORDER BY is applied, so row order is whatever the
    storage engine's scan returns and may differ between loads once the table
    has been modified.

    Raises:
        NoSuchTableError: the catalog reports no columns for ``table``
        QueryFailedError: the scan could not run
    """
    columns = columns_of(conn, table)
    if not columns:
        logger.error(f"Could not retrieve column information for table {table}")
        raise NoSuchTableError("No such table", table)

    query = SELECT_COLUMNS_QUERY.format(
        columns=", ".join(quote_identifier(c) for c in columns),
        table=quote_identifier(table),
    )
    try:
        cursor = conn.execute(query)
        rows = [[to_text(v) for v in record] for record in cursor]
    except sqlite3.Error as e:
        logger.error(f"Failed to execute query {query}: {e}")
        raise QueryFailedError(f"Failed to read table {table}", str(e)) from e

    logger.info(f"Loaded table {table} with {len(rows)} rows")
    return Grid(header=list(columns), rows=rows)
