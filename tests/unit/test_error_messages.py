"""Tests for helpers/error_messages.py.

Tests cover:
- Save (ReplaceError) translations always saying nothing was saved
- Open (ConnError) translations
- Load and generic error translations
"""

from engine.errors import (
    CannotOpenError,
    CommitFailedError,
    InvalidStructureError,
    NoConnectionError,
    NoSuchTableError,
    QueryFailedError,
    TransactionStartFailedError,
    WriteFailedError,
)
from helpers.error_messages import (
    NOTHING_SAVED,
    friendly_error,
    friendly_open_error,
    friendly_save_error,
)


class TestFriendlySaveError:
    """Tests for friendly_save_error."""

    def test_locked(self):
        error = TransactionStartFailedError("Failed to start transaction", "database is locked")
        result = friendly_save_error(error)
        assert "locked" in result.lower()
        assert result.endswith(NOTHING_SAVED)

    def test_unique(self):
        error = WriteFailedError("Failed to write table Users", "UNIQUE constraint failed: Users.id")
        result = friendly_save_error(error)
        assert "unique" in result.lower()
        assert NOTHING_SAVED in result

    def test_not_null(self):
        error = WriteFailedError("Failed to write table Users", "NOT NULL constraint failed: Users.name")
        assert "required" in friendly_save_error(error).lower()

    def test_unknown_column(self):
        error = WriteFailedError("Failed to write table Users", "table Users has no column named nick")
        assert "header" in friendly_save_error(error).lower()

    def test_generic_write_failure_includes_detail(self):
        error = WriteFailedError("Failed to write table Users", "disk I/O error")
        result = friendly_save_error(error)
        assert "disk I/O error" in result
        assert NOTHING_SAVED in result

    def test_commit_foreign_key(self):
        error = CommitFailedError("Failed to commit transaction", "FOREIGN KEY constraint failed")
        assert "refers to data" in friendly_save_error(error)

    def test_missing_table(self):
        result = friendly_save_error(NoSuchTableError("No such table", "Users"))
        assert "no longer exists" in result
        assert NOTHING_SAVED in result

    def test_every_save_error_says_nothing_saved(self):
        for error in (
            TransactionStartFailedError("x", "other"),
            WriteFailedError("x", "other"),
            CommitFailedError("x", "other"),
            NoSuchTableError("x"),
        ):
            assert NOTHING_SAVED in friendly_save_error(error)


class TestFriendlyOpenError:
    """Tests for friendly_open_error."""

    def test_not_found(self):
        result = friendly_open_error(CannotOpenError("Database file not found", "/x.db"))
        assert "not found" in result.lower()

    def test_directory(self):
        result = friendly_open_error(CannotOpenError("Path points to a directory, expected a database file"))
        assert "folder" in result.lower()

    def test_not_a_database(self):
        result = friendly_open_error(CannotOpenError("Cannot open database file x", "file is not a database"))
        assert "not an sqlite database" in result.lower()

    def test_empty_path(self):
        assert "choose a file" in friendly_open_error(CannotOpenError("Empty file path provided")).lower()

    def test_invalid_structure(self):
        assert "working database" in friendly_open_error(InvalidStructureError("Invalid database structure"))

    def test_no_connection(self):
        assert "load a file" in friendly_open_error(NoConnectionError("No database file is loaded"))


class TestFriendlyError:
    """Tests for the general friendly_error function."""

    def test_dispatches_replace_errors(self):
        error = WriteFailedError("x", "UNIQUE constraint failed")
        assert friendly_error(error) == friendly_save_error(error)

    def test_dispatches_conn_errors(self):
        error = CannotOpenError("Database file not found")
        assert friendly_error(error) == friendly_open_error(error)

    def test_missing_table_is_not_a_save_message(self):
        result = friendly_error(NoSuchTableError("No such table", "Ghosts"))
        assert "doesn't exist" in result
        assert NOTHING_SAVED not in result

    def test_load_error(self):
        result = friendly_error(QueryFailedError("Failed to read table Users", "malformed"))
        assert "read the table" in result
        assert "malformed" in result

    def test_permission_denied(self):
        assert "permission" in friendly_error(Exception("Permission denied: /x")).lower()

    def test_with_context(self):
        result = friendly_error(Exception("weird"), context="Export")
        assert result.startswith("Export failed")

    def test_long_message_truncated(self):
        result = friendly_error(Exception("x" * 500))
        assert result.endswith("...")
        assert len(result) < 200
