"""Catalog introspection: table names and ordered column names."""

from __future__ import annotations

import sqlite3
from typing import List

from helpers.logging_config import get_logger

from .errors import QueryFailedError

logger = get_logger(__name__)

# The underscore is escaped so only the literal reserved "sqlite_" prefix matches.
GET_TABLES_QUERY = "SELECT name FROM sqlite_master WHERE type = 'table' AND name NOT LIKE 'sqlite\\_%' ESCAPE '\\'"
GET_COLUMNS_QUERY = "SELECT name FROM pragma_table_info(?) ORDER BY cid"


def quote_identifier(name: str) -> str:
    """Quote an SQL identifier, doubling embedded quotes."""
    return '"' + name.replace('"', '""') + '"'


def list_tables(conn: sqlite3.Connection) -> List[str]:
    """Return user table names in catalog order.

    Internal ``sqlite_*`` tables are excluded. An empty list means the file
    has no user tables.

    Raises:
        QueryFailedError: the catalog query could not run
    """
    try:
        rows = conn.execute(GET_TABLES_QUERY).fetchall()
    except sqlite3.Error as e:
        logger.error(f"Failed to query table names: {e}")
        raise QueryFailedError("Failed to query table names", str(e)) from e
    tables = [row[0] for row in rows if row[0]]
    logger.debug(f"Found tables: {tables}")
    return tables


def columns_of(conn: sqlite3.Connection, table: str) -> List[str]:
    """Return the column names of ``table`` in declaration order.

    An empty list means the table is not usable (missing, or the metadata
    query failed).
    """
    if not table:
        return []
    try:
        rows = conn.execute(GET_COLUMNS_QUERY, (table,)).fetchall()
    except sqlite3.Error as e:
        logger.warning(f"Failed to get column information for table {table}: {e}")
        return []
    return [row[0] for row in rows]
