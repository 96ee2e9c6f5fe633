"""Application settings helpers.

Thin, typed accessors over the app-state settings table.
"""

from __future__ import annotations

import os
from typing import List, Optional

from db.settings import get_setting, set_setting, delete_setting

RECENT_FILES_KEY = "files.recent"
EXPORT_DIR_KEY = "export.dir"
LAST_TABLE_KEY = "tables.last_selected"
MAX_RECENT_FILES = 10


def load_recent_files() -> List[str]:
    """Recently opened database files, most recent first."""
    files = get_setting(RECENT_FILES_KEY, []) or []
    return [f for f in files if isinstance(f, str) and f]


def remember_recent_file(path: str) -> List[str]:
    """Move ``path`` to the front of the recent files list (capped, de-duplicated)."""
    path = os.path.abspath(path)
    files = [f for f in load_recent_files() if f != path]
    files.insert(0, path)
    files = files[:MAX_RECENT_FILES]
    set_setting(RECENT_FILES_KEY, files)
    return files


def clear_recent_files() -> None:
    delete_setting(RECENT_FILES_KEY)


def load_export_dir() -> Optional[str]:
    return get_setting(EXPORT_DIR_KEY) or None


def save_export_dir(path: str) -> None:
    set_setting(EXPORT_DIR_KEY, path.strip())


def load_last_table(db_file: str) -> Optional[str]:
    """Table last selected for ``db_file``, if any."""
    by_file = get_setting(LAST_TABLE_KEY, {}) or {}
    return by_file.get(os.path.abspath(db_file))


def save_last_table(db_file: str, table: str) -> None:
    by_file = get_setting(LAST_TABLE_KEY, {}) or {}
    by_file[os.path.abspath(db_file)] = table
    set_setting(LAST_TABLE_KEY, by_file)
