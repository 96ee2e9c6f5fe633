"""Connection lifecycle for a single user database file.

The manager owns exactly one sqlite3 handle at a time and hands it explicitly
to the schema, materializer and replace functions. There is no process-wide
connection registry.
"""

from __future__ import annotations

import os
import sqlite3
import uuid
from pathlib import Path
from typing import Optional

from helpers.logging_config import get_logger

from .config import EngineConfig
from .errors import CannotOpenError, InvalidStructureError, NoConnectionError

logger = get_logger(__name__)

# Trivial read-only query used to check that an opened handle answers.
LIVENESS_PROBE = "SELECT 1"


def _database_uri(path: str) -> str:
    # mode=rw: never create a new file for a path that does not exist
    return Path(path).resolve().as_uri() + "?mode=rw"


class ConnectionManager:
    """Open, validate and close the connection to one database file."""

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or EngineConfig.from_env()
        self.path: Optional[str] = None
        self.connection_id: Optional[str] = None
        self._conn: Optional[sqlite3.Connection] = None

    @property
    def connection(self) -> sqlite3.Connection:
        if self._conn is None:
            raise NoConnectionError("No database file is loaded")
        return self._conn

    def open(self, path: str) -> sqlite3.Connection:
        """Open and validate ``path``, replacing any previously open file.

        Raises:
            CannotOpenError: empty path, directory, missing file, or not an SQLite database
            InvalidStructureError: the liveness probe failed after opening
        """
        self.close()

        if not path:
            raise CannotOpenError("Empty file path provided")
        if os.path.isdir(path):
            raise CannotOpenError("Path points to a directory, expected a database file", path)
        if not os.path.exists(path):
            raise CannotOpenError("Database file not found", path)

        try:
            conn = sqlite3.connect(
                _database_uri(path),
                uri=True,
                timeout=self.config.busy_timeout,
                isolation_level=None,
            )
        except sqlite3.Error as e:
            logger.error(f"Cannot open database file {path}: {e}")
            raise CannotOpenError(f"Cannot open database file {path}", str(e)) from e

        try:
            # Reading the header rejects files that are not SQLite databases.
            conn.execute("PRAGMA schema_version").fetchone()
        except sqlite3.Error as e:
            conn.close()
            logger.error(f"Not an SQLite database: {path}: {e}")
            raise CannotOpenError(f"Cannot open database file {path}", str(e)) from e

        try:
            conn.execute(LIVENESS_PROBE).fetchone()
            if self.config.foreign_keys:
                conn.execute("PRAGMA foreign_keys = ON")
        except sqlite3.Error as e:
            conn.close()
            logger.error(f"Database connection test failed for {path}: {e}")
            raise InvalidStructureError("Invalid database structure", str(e)) from e

        self._conn = conn
        self.path = path
        self.connection_id = uuid.uuid4().hex
        logger.info(f"Opened database file {path} (connection {self.connection_id})")
        return conn

    def close(self) -> None:
        """Release the handle and its identifier. Safe to call repeatedly."""
        if self._conn is None:
            return
        conn, self._conn = self._conn, None
        try:
            conn.close()
        finally:
            logger.debug(f"Closed connection {self.connection_id} ({self.path})")
            self.path = None
            self.connection_id = None

    def is_live(self) -> bool:
        return self._conn is not None
