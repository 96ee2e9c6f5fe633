"""Settings storage using SQLite.

Settings are key/value pairs with JSON-encoded values, e.g.
"files.recent" -> ["/data/app.db", ...].
"""

from __future__ import annotations

import json
from typing import Any, Dict, Optional

from .core import get_connection, init_db


def get_setting(key: str, default: Any = None, db_path: Optional[str] = None) -> Any:
    """Get a setting value by key.

    Args:
        key: Setting key (e.g., "files.recent", "export.dir")
        default: Default value if key doesn't exist
        db_path: Optional database path

    Returns:
        The setting value (parsed from JSON) or default
    """
    init_db(db_path)
    conn = get_connection(db_path)
    row = conn.execute("SELECT value FROM settings WHERE key = ?", (key,)).fetchone()

    if row is None:
        return default

    try:
        return json.loads(row["value"])
    except (json.JSONDecodeError, TypeError):
        return row["value"]


def set_setting(key: str, value: Any, db_path: Optional[str] = None) -> None:
    """Store a setting value (JSON-encoded), replacing any previous value."""
    init_db(db_path)
    conn = get_connection(db_path)

    conn.execute(
        """
        INSERT INTO settings (key, value, updated_at)
        VALUES (?, ?, datetime('now'))
        ON CONFLICT(key) DO UPDATE SET
            value = excluded.value,
            updated_at = datetime('now')
    """,
        (key, json.dumps(value, ensure_ascii=False)),
    )
    conn.commit()


def get_all_settings(db_path: Optional[str] = None) -> Dict[str, Any]:
    """Get all settings as a flat dictionary keyed by dotted setting key."""
    init_db(db_path)
    conn = get_connection(db_path)

    result = {}
    for row in conn.execute("SELECT key, value FROM settings"):
        try:
            result[row["key"]] = json.loads(row["value"])
        except (json.JSONDecodeError, TypeError):
            result[row["key"]] = row["value"]
    return result


def delete_setting(key: str, db_path: Optional[str] = None) -> bool:
    """Delete a setting.

    Returns:
        True if setting was deleted, False if it didn't exist
    """
    init_db(db_path)
    conn = get_connection(db_path)
    cursor = conn.execute("DELETE FROM settings WHERE key = ?", (key,))
    conn.commit()
    return cursor.rowcount > 0
