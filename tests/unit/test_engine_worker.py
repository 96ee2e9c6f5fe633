"""Unit tests for engine/worker.py (TableEngine).

Tests cover:
- The Users(id, name) open / list / load / replace flow
- Add-row and remove-row edit sessions persisted through replace_table
- Failures: unknown table, non-database file, nothing loaded
- Re-read after replace and type-affinity coercion
- Context manager and idempotent close
"""

import logging

import pytest

from engine import (
    CannotOpenError,
    EditSession,
    EngineConfig,
    Grid,
    NoConnectionError,
    NoSuchTableError,
    TableEngine,
)


class TestUsersFlow:
    """End-to-end flows over the Users table."""

    def test_open_and_list(self, engine):
        assert engine.is_loaded()
        assert engine.list_tables() == ["Users"]
        assert engine.columns_of("Users") == ["id", "name"]

    def test_load(self, engine):
        grid = engine.load_table("Users")
        assert grid.header == ["id", "name"]
        assert grid.rows == [["1", "Ann"], ["2", "Bob"]]

    def test_add_row_session(self, engine):
        """Test an appended and filled row is persisted by replace."""
        session = EditSession("Users", engine.load_table("Users"))
        index = session.append_blank_row()
        session.set_cell(index, 0, "3")
        session.set_cell(index, 1, "Cara")
        stored = engine.replace_table("Users", session.grid)
        assert stored.rows == [["1", "Ann"], ["2", "Bob"], ["3", "Cara"]]
        assert engine.load_table("Users").row_count == 3

    def test_remove_row_session(self, engine):
        session = EditSession("Users", engine.load_table("Users"))
        session.remove_row(0)
        stored = engine.replace_table("Users", session.grid)
        assert stored.rows == [["2", "Bob"]]

    def test_replace_unknown_table_leaves_users(self, engine):
        with pytest.raises(NoSuchTableError):
            engine.replace_table("Ghosts", Grid(["a"], [["1"]]))
        assert engine.load_table("Users").rows == [["1", "Ann"], ["2", "Bob"]]

    def test_load_unknown_table(self, engine):
        with pytest.raises(NoSuchTableError):
            engine.load_table("Ghosts")

    def test_empty_table_name(self, engine):
        with pytest.raises(NoSuchTableError):
            engine.load_table("")
        with pytest.raises(NoSuchTableError):
            engine.replace_table("", Grid())

    def test_append_and_delete_row(self, engine):
        engine.append_row("Users", ["3", "Cara"])
        assert engine.delete_row_at("Users", 0) is True
        assert engine.load_table("Users").rows == [["2", "Bob"], ["3", "Cara"]]


class TestAffinity:
    """Tests for the post-replace re-read."""

    def test_integer_affinity_logged(self, engine, caplog):
        """Test "01" written to INTEGER reads back as "1" with a warning."""
        caplog.set_level(logging.WARNING, logger="engine.worker")
        stored = engine.replace_table("Users", Grid(["id", "name"], [["01", "Ann"]]))
        assert stored.rows == [["1", "Ann"]]
        assert any("reads back differently" in r.getMessage() for r in caplog.records)

    def test_exact_round_trip_no_warning(self, engine, caplog):
        caplog.set_level(logging.WARNING, logger="engine.worker")
        grid = Grid(["id", "name"], [["2", "Bob"], ["1", "Ann"]])
        engine.replace_table("Users", grid)
        assert not any("reads back differently" in r.getMessage() for r in caplog.records)


class TestGeneratedColumns:
    """Round trips over tables whose SELECT * differs from the column catalog."""

    def test_unedited_round_trip_keeps_rows(self, make_db, read_rows):
        path = make_db(
            "generated.db",
            "CREATE TABLE t (a INTEGER, b GENERATED ALWAYS AS (a * 2) VIRTUAL, c TEXT)",
            "INSERT INTO t (a, c) VALUES (1, 'x')",
            "INSERT INTO t (a, c) VALUES (5, 'y')",
        )
        with TableEngine(EngineConfig(busy_timeout=0)) as eng:
            eng.open(path)
            grid = eng.load_table("t")
            assert grid.header == ["a", "c"]
            assert grid.rows == [["1", "x"], ["5", "y"]]
            stored = eng.replace_table("t", grid)
            assert stored.rows == [["1", "x"], ["5", "y"]]
        assert read_rows(path, "t") == [(1, 2, "x"), (5, 10, "y")]


class TestLifecycle:
    """Tests for open/close semantics."""

    def test_nothing_loaded(self):
        eng = TableEngine(EngineConfig(busy_timeout=0))
        assert not eng.is_loaded()
        with pytest.raises(NoConnectionError):
            eng.list_tables()
        with pytest.raises(NoConnectionError):
            eng.replace_table("Users", Grid())

    def test_non_database_file(self, tmp_path):
        """Test a text file is rejected and the engine stays unloaded."""
        path = tmp_path / "readme.db"
        path.write_text("plain text, not sqlite\n" * 64)
        eng = TableEngine(EngineConfig(busy_timeout=0))
        with pytest.raises(CannotOpenError):
            eng.open(str(path))
        assert not eng.is_loaded()

    def test_close_idempotent(self, engine):
        engine.close()
        engine.close()
        assert not engine.is_loaded()
        assert engine.current_path is None
        assert engine.connection_id is None

    def test_context_manager_closes(self, users_db):
        with TableEngine(EngineConfig(busy_timeout=0)) as eng:
            eng.open(users_db)
            assert eng.current_path == users_db
        assert not eng.is_loaded()

    def test_open_other_file_switches(self, engine, make_db):
        other = make_db("other.db", "CREATE TABLE Orders (sku TEXT)")
        first_id = engine.connection_id
        engine.open(other)
        assert engine.list_tables() == ["Orders"]
        assert engine.connection_id != first_id
