"""User-friendly error message helpers.

Translates engine and storage errors into plain language. A failed save must
never read like a success, so every ReplaceError message says nothing was
saved.
"""

from engine.errors import (
    CannotOpenError,
    CommitFailedError,
    ConnError,
    InvalidStructureError,
    LoadError,
    NoConnectionError,
    NoSuchTableError,
    ReplaceError,
    TransactionStartFailedError,
    WriteFailedError,
)

NOTHING_SAVED = "Nothing was saved."


def _short(detail, limit: int = 100) -> str:
    text = str(detail or "")
    if len(text) > limit:
        text = text[:limit] + "..."
    return text


def friendly_save_error(error: ReplaceError) -> str:
    """Message for a failed commit of the edited grid."""
    msg = str(error).lower()

    if isinstance(error, NoSuchTableError):
        return f"The table no longer exists in this file. {NOTHING_SAVED}"

    if isinstance(error, TransactionStartFailedError):
        if "locked" in msg or "busy" in msg:
            return f"The database is locked by another program. Close it and try again. {NOTHING_SAVED}"
        return f"Couldn't start saving. {NOTHING_SAVED}"

    if isinstance(error, WriteFailedError):
        if "unique" in msg:
            return f"Two rows have the same value in a column that must be unique. {NOTHING_SAVED}"
        if "not null" in msg:
            return f"A required column was left empty. {NOTHING_SAVED}"
        if "foreign key" in msg:
            return f"A row refers to data that doesn't exist. {NOTHING_SAVED}"
        if "has no column" in msg:
            return f"A column header doesn't match the table. Reload the table. {NOTHING_SAVED}"
        if "readonly" in msg or "read-only" in msg:
            return f"The file is read-only. {NOTHING_SAVED}"
        return f"Writing the table failed: {_short(error.detail)}. {NOTHING_SAVED}"

    if isinstance(error, CommitFailedError):
        if "foreign key" in msg:
            return f"A row refers to data that doesn't exist. {NOTHING_SAVED}"
        return f"The database refused to finish saving. {NOTHING_SAVED}"

    return f"Saving failed. {NOTHING_SAVED}"


def friendly_open_error(error: ConnError) -> str:
    """Message for a file that would not open."""
    msg = str(error).lower()

    if isinstance(error, NoConnectionError):
        return "No database file is loaded. Choose and load a file first."

    if isinstance(error, InvalidStructureError):
        return "The file opened but doesn't look like a working database."

    if isinstance(error, CannotOpenError):
        if "not found" in msg:
            return "File not found. Check the path and try again."
        if "directory" in msg:
            return "That's a folder. Choose a database file instead."
        if "not a database" in msg or "encrypted" in msg:
            return "That file is not an SQLite database."
        if "empty file path" in msg:
            return "Choose a file first."
        if "permission" in msg or "unable to open" in msg:
            return "The file couldn't be opened. Check that you have permission to read and write it."

    return f"The file could not be opened: {_short(error)}"


def friendly_error(error: Exception, context: str = "") -> str:
    """Convert any error into a user-friendly message.

    Args:
        error: The exception that occurred
        context: Optional context about what operation was being attempted
    """
    # NoSuchTableError is both a load and a save error; callers saving a grid
    # use friendly_save_error directly.
    if isinstance(error, NoSuchTableError):
        return "That table doesn't exist in this file."

    if isinstance(error, ReplaceError):
        return friendly_save_error(error)

    if isinstance(error, ConnError):
        return friendly_open_error(error)

    if isinstance(error, LoadError):
        return f"Couldn't read the table: {_short(error.detail)}"

    msg = str(error).lower()

    if "permission denied" in msg or "access denied" in msg:
        return "Permission denied. Check folder permissions."

    if "no space" in msg or "disk full" in msg:
        return "Not enough disk space. Free up some space and try again."

    if "no such file" in msg or "does not exist" in msg:
        return "File or folder not found. Check the path and try again."

    if context:
        return f"{context} failed: {_short(error)}"

    return f"Something went wrong: {_short(error, 150)}"
