import sqlite3

import pytest

from db.core import _DB_PATH_OVERRIDE, close_all_connections
from engine import EngineConfig, TableEngine


@pytest.fixture(autouse=True)
def app_store(tmp_path):
    """Point the app-state store (settings, logs) at a throwaway file."""
    db_path = str(tmp_path / "sqlgrid_test.db")
    _DB_PATH_OVERRIDE["path"] = db_path
    yield db_path
    close_all_connections()
    _DB_PATH_OVERRIDE.clear()


@pytest.fixture
def make_db(tmp_path):
    """Factory: create an SQLite file from DDL statements and {table: rows} data."""

    def _make(name, *statements, rows=None):
        path = tmp_path / name
        conn = sqlite3.connect(path)
        try:
            for stmt in statements:
                conn.execute(stmt)
            for table, values in (rows or {}).items():
                marks = ", ".join("?" for _ in values[0])
                quoted = table.replace('"', '""')
                conn.executemany(f'INSERT INTO "{quoted}" VALUES ({marks})', values)
            conn.commit()
        finally:
            conn.close()
        return str(path)

    return _make


@pytest.fixture
def read_rows():
    """Read a table's stored rows through an independent connection."""

    def _read(path, table):
        conn = sqlite3.connect(path)
        try:
            quoted = table.replace('"', '""')
            return conn.execute(f'SELECT * FROM "{quoted}" ORDER BY rowid').fetchall()
        finally:
            conn.close()

    return _read


@pytest.fixture
def users_db(make_db):
    """Users(id, name) with rows (1, Ann), (2, Bob)."""
    return make_db(
        "users.db",
        "CREATE TABLE Users (id INTEGER, name TEXT)",
        rows={"Users": [(1, "Ann"), (2, "Bob")]},
    )


@pytest.fixture
def engine(users_db):
    eng = TableEngine(EngineConfig(busy_timeout=0))
    eng.open(users_db)
    yield eng
    eng.close()
