"""Smoke tests for the Table tab controller.

Drives the handlers exposed on ``tab.data`` against real database files:
load, select, add/delete/edit modes, Update (commit), Cancel (discard) and
Export, without a running Flet app.
"""

from types import SimpleNamespace

import flet as ft
import pytest

from engine import EngineConfig, TableEngine
from helpers.error_messages import NOTHING_SAVED
from helpers.settings import load_export_dir, load_recent_files, save_export_dir
from helpers.ui import section_title
from ui.tabs.table_controller import build_table_tab_with_logic


class DummyPage:
    """Minimal stand-in for ft.Page used in controller smoke tests.

    It implements just enough of the interface that controllers expect:
    - controls / overlay collections
    - snack_bar / dialog attributes
    - update()
    - open() (for dialogs and snack bars)
    """

    def __init__(self):
        self.controls = []
        self.overlay = []
        self.snack_bar = None
        self.dialog = None
        self.updated = False

    def add(self, *controls):
        self.controls.extend(controls)

    def update(self):
        self.updated = True

    def open(self, ctl):  # used for dialogs and snack bars
        self.snack_bar = ctl


def _mk_help_handler(_msg: str):
    """Return a no-op help handler; controllers wire this into help icons."""

    def handler(_=None):  # noqa: ARG001
        return None

    return handler


def _message(page) -> str:
    ctl = page.snack_bar
    content = getattr(ctl, "content", None)
    return getattr(content, "value", "") or ""


def _confirm_yes(page) -> None:
    dlg = page.snack_bar
    assert isinstance(dlg, ft.AlertDialog)
    dlg.actions[0].on_click(None)


@pytest.fixture
def page():
    return DummyPage()


@pytest.fixture
def tab(page):
    eng = TableEngine(EngineConfig(busy_timeout=0))
    control = build_table_tab_with_logic(
        page,
        section_title=section_title,
        _mk_help_handler=_mk_help_handler,
        engine=eng,
    )
    yield control
    eng.close()


@pytest.mark.integration
def test_build_table_tab_smoke(page, tab):
    assert isinstance(tab, ft.Control)
    assert isinstance(tab.data, dict)
    assert len(page.overlay) == 1
    assert isinstance(page.overlay[0], ft.FilePicker)
    assert tab.data["grid_table"].visible is False


@pytest.mark.integration
def test_load_and_select_users(tab, users_db):
    hooks = tab.data
    assert hooks["load_file"](users_db) is True
    assert [o.key for o in hooks["table_dd"].options] == ["Users"]
    assert load_recent_files()[0].endswith("users.db")

    assert hooks["select_table"]("Users") is True
    grid_table = hooks["grid_table"]
    assert grid_table.visible is True
    assert len(grid_table.columns) == 2
    assert len(grid_table.rows) == 2
    assert grid_table.rows[0].cells[1].content.value == "Ann"


@pytest.mark.integration
def test_reload_selects_last_table(page, tab, users_db):
    hooks = tab.data
    hooks["load_file"](users_db)
    hooks["select_table"]("Users")
    hooks["load_file"](users_db)
    assert hooks["state"]["table"] == "Users"
    assert hooks["table_dd"].value == "Users"


@pytest.mark.integration
def test_add_row_and_commit(page, tab, users_db, read_rows):
    hooks = tab.data
    hooks["load_file"](users_db)
    hooks["select_table"]("Users")

    hooks["toggle_mode"]("add")
    assert hooks["mode_active"]("add")
    grid_table = hooks["grid_table"]
    assert len(grid_table.rows) == 3

    # Type into the inline editors of the new row
    id_editor = grid_table.rows[2].cells[0].content
    name_editor = grid_table.rows[2].cells[1].content
    assert isinstance(id_editor, ft.TextField)
    id_editor.on_change(SimpleNamespace(control=SimpleNamespace(value="3")))
    name_editor.on_change(SimpleNamespace(control=SimpleNamespace(value="Cara")))
    assert hooks["state"]["session"].dirty is True

    assert hooks["commit"]() is True
    assert read_rows(users_db, "Users") == [(1, "Ann"), (2, "Bob"), (3, "Cara")]
    assert hooks["state"]["session"].dirty is False
    assert hooks["state"]["mode"] is None
    assert not hooks["mode_active"]("add")
    assert "saved" in _message(page).lower()


@pytest.mark.integration
def test_modes_are_exclusive(tab, users_db):
    hooks = tab.data
    hooks["load_file"](users_db)
    hooks["select_table"]("Users")
    hooks["toggle_mode"]("edit")
    hooks["toggle_mode"]("delete")
    assert hooks["mode_active"]("delete")
    assert not hooks["mode_active"]("edit")
    # Delete mode adds one column of row delete buttons
    assert len(hooks["grid_table"].columns) == 3
    hooks["toggle_mode"]("delete")
    assert hooks["state"]["mode"] is None


@pytest.mark.integration
def test_delete_row_with_confirmation(page, tab, users_db, read_rows):
    hooks = tab.data
    hooks["load_file"](users_db)
    hooks["select_table"]("Users")
    hooks["toggle_mode"]("delete")

    delete_btn = hooks["grid_table"].rows[0].cells[-1].content
    delete_btn.on_click(None)
    _confirm_yes(page)
    assert hooks["state"]["session"].grid.rows == [["2", "Bob"]]
    # Not persisted until Update
    assert read_rows(users_db, "Users") == [(1, "Ann"), (2, "Bob")]

    assert hooks["commit"]() is True
    assert read_rows(users_db, "Users") == [(2, "Bob")]


@pytest.mark.integration
def test_cancel_discards_edits(page, tab, users_db, read_rows):
    hooks = tab.data
    hooks["load_file"](users_db)
    hooks["select_table"]("Users")
    hooks["toggle_mode"]("edit")
    hooks["state"]["session"].set_cell(0, 1, "Zed")

    hooks["cancel"]()
    _confirm_yes(page)
    session = hooks["state"]["session"]
    assert session.dirty is False
    assert session.grid.rows == [["1", "Ann"], ["2", "Bob"]]
    assert hooks["state"]["mode"] is None
    assert read_rows(users_db, "Users") == [(1, "Ann"), (2, "Bob")]


@pytest.mark.integration
def test_failed_commit_keeps_file_and_edits(page, tab, make_db, read_rows):
    path = make_db(
        "keyed.db",
        "CREATE TABLE Users (id INTEGER PRIMARY KEY, name TEXT)",
        rows={"Users": [(1, "Ann"), (2, "Bob")]},
    )
    hooks = tab.data
    hooks["load_file"](path)
    hooks["select_table"]("Users")
    hooks["state"]["session"].set_cell(1, 0, "1")

    assert hooks["commit"]() is False
    assert NOTHING_SAVED in _message(page)
    assert hooks["state"]["session"].dirty is True
    assert read_rows(path, "Users") == [(1, "Ann"), (2, "Bob")]


@pytest.mark.integration
def test_commit_without_changes(page, tab, users_db):
    hooks = tab.data
    hooks["load_file"](users_db)
    hooks["select_table"]("Users")
    assert hooks["commit"]() is False
    assert "no changes" in _message(page).lower()


@pytest.mark.integration
def test_load_invalid_file(page, tab, tmp_path):
    bogus = tmp_path / "notes.db"
    bogus.write_text("not a database\n" * 100)
    hooks = tab.data
    assert hooks["load_file"](str(bogus)) is False
    assert not hooks["engine"].is_loaded()
    assert hooks["table_dd"].options == []
    assert "not an sqlite database" in _message(page).lower()


@pytest.mark.integration
def test_export_current_table(page, tab, users_db, tmp_path):
    out_dir = tmp_path / "exports"
    save_export_dir(str(out_dir))
    hooks = tab.data
    hooks["load_file"](users_db)
    hooks["select_table"]("Users")
    paths = hooks["export"]()
    assert paths is not None
    assert paths["csv"].startswith(str(out_dir))
    assert "Exported to" in _message(page)


@pytest.mark.integration
def test_export_remembers_directory(page, tab, users_db, tmp_path, monkeypatch):
    out_dir = tmp_path / "downloads"
    monkeypatch.setattr("helpers.export.default_export_dir", lambda: str(out_dir))
    assert load_export_dir() is None
    hooks = tab.data
    hooks["load_file"](users_db)
    hooks["select_table"]("Users")
    paths = hooks["export"]()
    assert paths is not None
    assert load_export_dir() == str(out_dir)
