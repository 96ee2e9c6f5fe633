"""Transactional full replace of a table's contents.

The whole table is deleted and re-inserted inside one transaction, so an edit
session of any size is persisted all-or-nothing. No diff against the previous
content is computed and no snapshot is kept: rollback is the storage
transaction itself.
"""

from __future__ import annotations

import sqlite3
from typing import List, Optional, Sequence

from helpers.logging_config import get_logger

from .errors import (
    CommitFailedError,
    NoSuchTableError,
    TransactionStartFailedError,
    WriteFailedError,
)
from .grid import Grid
from .schema import columns_of, quote_identifier

logger = get_logger(__name__)

DELETE_ALL_QUERY = "DELETE FROM {table}"
INSERT_QUERY_TEMPLATE = "INSERT INTO {table} ({columns}) VALUES ({values})"
DELETE_AT_OFFSET_QUERY = "DELETE FROM {table} WHERE rowid = (SELECT rowid FROM {table} LIMIT 1 OFFSET ?)"


def placeholder_column(index: int) -> str:
    return f"Column_{index + 1}"


def resolve_write_columns(header: Sequence[Optional[str]], schema: Sequence[str]) -> List[str]:
    """Pick the column name to write for each grid column.

    The grid's own label wins; a missing label falls back to the schema column
    at the same position, then to a ``Column_<n>`` placeholder. A grid with no
    header at all writes the schema's columns.
    """
    if not header:
        return list(schema)
    columns = []
    for i, label in enumerate(header):
        if label:
            columns.append(label)
        elif i < len(schema):
            columns.append(schema[i])
        else:
            columns.append(placeholder_column(i))
    return columns


def _insert_query(table: str, columns: Sequence[str]) -> str:
    return INSERT_QUERY_TEMPLATE.format(
        table=quote_identifier(table),
        columns=", ".join(quote_identifier(c) for c in columns),
        values=", ".join("?" for _ in columns),
    )


def _begin(conn: sqlite3.Connection, table: str) -> None:
    try:
        conn.execute("BEGIN IMMEDIATE")
    except sqlite3.Error as e:
        logger.error(f"Failed to start transaction for table {table}: {e}")
        raise TransactionStartFailedError("Failed to start transaction", str(e)) from e


def _rollback(conn: sqlite3.Connection) -> None:
    # Some errors make SQLite roll back on its own.
    if not conn.in_transaction:
        return
    try:
        conn.execute("ROLLBACK")
    except sqlite3.Error as e:
        logger.error(f"Rollback failed: {e}")


def _commit(conn: sqlite3.Connection, table: str) -> None:
    try:
        conn.execute("COMMIT")
    except sqlite3.Error as e:
        logger.error(f"Failed to commit transaction for table {table}: {e}")
        _rollback(conn)
        raise CommitFailedError("Failed to commit transaction", str(e)) from e


def _require_columns(conn: sqlite3.Connection, table: str) -> List[str]:
    schema = columns_of(conn, table)
    if not schema:
        logger.error(f"Could not retrieve column information for table {table}")
        raise NoSuchTableError("No such table", table)
    return schema


def replace_table(conn: sqlite3.Connection, table: str, grid: Grid) -> int:
    """Make ``table`` hold exactly the rows of ``grid``.

    Returns the number of rows written. On any failure the transaction is
    rolled back and the table keeps its previous content.

    Raises:
        NoSuchTableError: ``table`` is not in the catalog; nothing touched
        TransactionStartFailedError: BEGIN refused, e.g. another writer holds the lock
        WriteFailedError: the delete or an insert failed; rolled back
        CommitFailedError: COMMIT failed; rolled back
    """
    schema = _require_columns(conn, table)
    columns = resolve_write_columns(grid.header, schema)
    rows = grid.padded_rows(len(columns))

    _begin(conn, table)
    try:
        conn.execute(DELETE_ALL_QUERY.format(table=quote_identifier(table)))
        if rows:
            conn.executemany(_insert_query(table, columns), rows)
    except sqlite3.Error as e:
        logger.error(f"Failed to replace contents of table {table}: {e}")
        _rollback(conn)
        raise WriteFailedError(f"Failed to write table {table}", str(e)) from e
    except BaseException:
        _rollback(conn)
        raise

    _commit(conn, table)
    logger.info(f"Updated table {table} with {len(rows)} rows")
    return len(rows)


def append_row(conn: sqlite3.Connection, table: str, values: Sequence[Optional[str]]) -> None:
    """Insert one row using the schema's columns; missing values become ""."""
    schema = _require_columns(conn, table)
    row = Grid(header=list(schema), rows=[list(values)]).padded_rows()[0]

    _begin(conn, table)
    try:
        conn.execute(_insert_query(table, schema), row)
    except sqlite3.Error as e:
        logger.error(f"Failed to insert row into table {table}: {e}")
        _rollback(conn)
        raise WriteFailedError(f"Failed to add row to table {table}", str(e)) from e
    except BaseException:
        _rollback(conn)
        raise

    _commit(conn, table)
    logger.info(f"Added new row to table {table}")


def delete_row_at(conn: sqlite3.Connection, table: str, offset: int) -> bool:
    """Delete the row at storage-order ``offset``.

    The offset only identifies the intended row right after a load with a
    stable scan order. If the table was modified in between it can hit a
    different row; use replace_table for edit sessions.

    Returns True when a row was deleted.
    """
    if offset < 0:
        raise ValueError(f"Row offset must be non-negative, got {offset}")
    _require_columns(conn, table)
    query = DELETE_AT_OFFSET_QUERY.format(table=quote_identifier(table))

    _begin(conn, table)
    try:
        cursor = conn.execute(query, (offset,))
    except sqlite3.Error as e:
        logger.error(f"Failed to delete row {offset} from table {table}: {e}")
        _rollback(conn)
        raise WriteFailedError(f"Failed to delete row from table {table}", str(e)) from e
    except BaseException:
        _rollback(conn)
        raise

    _commit(conn, table)
    deleted = cursor.rowcount > 0
    logger.info(f"Deleted row {offset} from table {table}" if deleted else f"No row at offset {offset} in {table}")
    return deleted
