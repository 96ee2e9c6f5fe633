"""App-state store: connection management and schema.

This is SQLGrid's own private database (settings, logs). It is separate from
the user database files the table engine opens and edits.
"""

from __future__ import annotations

import os
import sqlite3
import threading
from typing import Optional

# Thread-local storage for connections
_local = threading.local()

_DB_NAME = "sqlgrid.db"

# Override for testing - set _DB_PATH_OVERRIDE["path"] to use a different db
_DB_PATH_OVERRIDE: dict = {}

SCHEMA_VERSION = 1


def get_db_path(project_root: Optional[str] = None) -> str:
    """Get the path to the app-state database file."""
    if "path" in _DB_PATH_OVERRIDE:
        return _DB_PATH_OVERRIDE["path"]
    if project_root:
        return os.path.join(project_root, _DB_NAME)
    # Default: project root (parent of src/)
    src_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    return os.path.join(src_dir, "..", _DB_NAME)


def get_connection(db_path: Optional[str] = None) -> sqlite3.Connection:
    """Get a thread-local connection to the app-state store.

    Connections are cached per path and reused within the same thread.
    """
    if db_path is None:
        db_path = get_db_path()
    db_path = os.path.abspath(db_path)

    if not hasattr(_local, "connections"):
        _local.connections = {}

    if db_path not in _local.connections:
        conn = sqlite3.connect(db_path, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        _local.connections[db_path] = conn

    return _local.connections[db_path]


def close_all_connections() -> None:
    """Close all thread-local connections."""
    if hasattr(_local, "connections"):
        for conn in _local.connections.values():
            try:
                conn.close()
            except sqlite3.Error:
                pass
        _local.connections.clear()


def init_db(db_path: Optional[str] = None) -> None:
    """Create the app-state tables if they don't exist. Safe to call repeatedly."""
    conn = get_connection(db_path)
    cursor = conn.cursor()

    # Key/value settings, values JSON-encoded
    cursor.execute("""
        CREATE TABLE IF NOT EXISTS settings (
            key TEXT PRIMARY KEY,
            value TEXT NOT NULL,
            updated_at TEXT DEFAULT (datetime('now'))
        )
    """)

    cursor.execute("""
        CREATE TABLE IF NOT EXISTS app_state (
            key TEXT PRIMARY KEY,
            value TEXT
        )
    """)

    cursor.execute("""
        CREATE TABLE IF NOT EXISTS app_logs (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            timestamp TEXT DEFAULT (datetime('now')),
            level TEXT NOT NULL,
            logger TEXT,
            message TEXT NOT NULL,
            module TEXT,
            func_name TEXT,
            line_no INTEGER,
            exc_info TEXT
        )
    """)

    cursor.execute("""
        CREATE INDEX IF NOT EXISTS idx_app_logs_timestamp
        ON app_logs(timestamp)
    """)

    cursor.execute("""
        CREATE INDEX IF NOT EXISTS idx_app_logs_level
        ON app_logs(level)
    """)

    cursor.execute(
        "INSERT OR IGNORE INTO app_state (key, value) VALUES ('schema_version', ?)",
        (str(SCHEMA_VERSION),),
    )

    conn.commit()


def get_schema_version(db_path: Optional[str] = None) -> int:
    """Get the app-state schema version (0 when not initialized)."""
    conn = get_connection(db_path)
    try:
        row = conn.execute("SELECT value FROM app_state WHERE key = 'schema_version'").fetchone()
    except sqlite3.OperationalError:
        return 0
    return int(row["value"]) if row else 0
