"""SQLGrid app-state store.

A private SQLite file holding the application's settings and log records.
User database files are never touched here; see the ``engine`` package.
"""

from .core import (
    get_db_path,
    get_connection,
    init_db,
    close_all_connections,
    get_schema_version,
)
from .settings import (
    get_setting,
    set_setting,
    get_all_settings,
    delete_setting,
)
from .logs import (
    DatabaseHandler,
    get_logs,
    clear_logs,
    get_log_count,
)

__all__ = [
    # Core
    "get_db_path",
    "get_connection",
    "init_db",
    "close_all_connections",
    "get_schema_version",
    # Settings
    "get_setting",
    "set_setting",
    "get_all_settings",
    "delete_setting",
    # Logs
    "DatabaseHandler",
    "get_logs",
    "clear_logs",
    "get_log_count",
]
