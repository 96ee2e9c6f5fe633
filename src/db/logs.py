"""Database logging handler and log queries.

Log records from every SQLGrid logger land in the app_logs table of the
app-state store.
"""

from __future__ import annotations

import logging
import os
import traceback
from datetime import datetime
from typing import List, Optional

from db.core import get_connection, get_db_path, init_db

INSERT_LOG_QUERY = """
    INSERT INTO app_logs (timestamp, level, logger, message, module, func_name, line_no, exc_info)
    VALUES (?, ?, ?, ?, ?, ?, ?, ?)
"""


class DatabaseHandler(logging.Handler):
    """Logging handler that writes records to the app-state store."""

    def __init__(self, level: int = logging.NOTSET):
        super().__init__(level)
        self._ready_path: Optional[str] = None

    def emit(self, record: logging.LogRecord) -> None:
        try:
            # The store path can change under tests; initialize once per path.
            path = os.path.abspath(get_db_path())
            if self._ready_path != path:
                init_db(path)
                self._ready_path = path
            conn = get_connection(path)

            exc_info = None
            if record.exc_info:
                exc_info = "".join(traceback.format_exception(*record.exc_info))

            conn.execute(
                INSERT_LOG_QUERY,
                (
                    datetime.fromtimestamp(record.created).isoformat(),
                    record.levelname,
                    record.name,
                    record.getMessage(),
                    record.module,
                    record.funcName,
                    record.lineno,
                    exc_info,
                ),
            )
            conn.commit()
        except Exception:
            # Logging must never raise into the caller
            self.handleError(record)


def get_logs(
    level: Optional[str] = None,
    logger: Optional[str] = None,
    limit: int = 100,
    offset: int = 0,
) -> List[dict]:
    """Return the newest log records first, optionally filtered.

    Args:
        level: Exact level name (e.g., "ERROR")
        logger: Substring of the logger name (e.g., "engine.replace")
        limit: Maximum number of records
        offset: Offset for pagination
    """
    init_db()
    conn = get_connection()

    clauses = []
    params: list = []
    if level:
        clauses.append("level = ?")
        params.append(level)
    if logger:
        clauses.append("logger LIKE ?")
        params.append(f"%{logger}%")

    where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
    params.extend([limit, offset])
    rows = conn.execute(
        f"SELECT * FROM app_logs {where} ORDER BY id DESC LIMIT ? OFFSET ?",
        params,
    ).fetchall()
    return [dict(row) for row in rows]


def clear_logs(before_date: Optional[str] = None) -> int:
    """Delete log records, all of them or only those older than an ISO date.

    Returns:
        Number of records deleted
    """
    init_db()
    conn = get_connection()
    if before_date:
        cursor = conn.execute("DELETE FROM app_logs WHERE timestamp < ?", (before_date,))
    else:
        cursor = conn.execute("DELETE FROM app_logs")
    conn.commit()
    return cursor.rowcount


def get_log_count(level: Optional[str] = None) -> int:
    init_db()
    conn = get_connection()
    if level:
        return conn.execute("SELECT COUNT(*) FROM app_logs WHERE level = ?", (level,)).fetchone()[0]
    return conn.execute("SELECT COUNT(*) FROM app_logs").fetchone()[0]
