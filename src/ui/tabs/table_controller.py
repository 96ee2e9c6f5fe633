"""Table tab controller for SQLGrid.

Builds the Table tab controls and wires every handler to the table engine:
load a file, pick a table, stage adds/deletes/edits in memory, then commit the
whole grid atomically with Update or throw the edits away with Cancel. Layout
composition lives in `tab_table.py` and its per-section builders.
"""

from __future__ import annotations

import os
from typing import Any, Callable, Dict, Optional

import flet as ft

from engine import ConnError, EditSession, EngineError, LoadError, ReplaceError, TableEngine
from helpers.error_messages import friendly_error, friendly_open_error, friendly_save_error
from helpers.export import export_table, header_labels
from helpers.logging_config import get_logger
from helpers.settings import (
    load_export_dir,
    load_last_table,
    load_recent_files,
    remember_recent_file,
    save_export_dir,
    save_last_table,
)
from helpers.theme import (
    ADD_ICON,
    BORDER_BASE,
    CANCEL_ICON,
    DELETE_ICON,
    DIRTY_COLOR,
    EDIT_ICON,
    ERROR_COLOR,
    EXPORT_ICON,
    ICONS,
    LOAD_ICON,
    OPEN_ICON,
    SAVE_ICON,
    TABLE_ICON,
)
from helpers.ui import (
    WITH_OPACITY,
    cell_editor,
    cell_text,
    is_mode_button_active,
    make_empty_placeholder,
    mode_button,
    set_mode_button_active,
)
from ui.tabs.tab_table import build_table_tab

logger = get_logger(__name__)

DB_EXTENSIONS = ["db", "sqlite", "sqlite3", "db3"]
MODES = ("add", "delete", "edit")


def build_table_tab_with_logic(
    page: ft.Page,
    *,
    section_title,
    _mk_help_handler,
    engine: Optional[TableEngine] = None,
) -> ft.Control:
    """Build the Table tab UI and attach all related handlers.

    The returned control's ``data`` dict exposes the handlers and state so
    the tab can be driven without a running Flet app.
    """
    engine = engine or TableEngine()
    state: Dict[str, Any] = {"path": None, "table": None, "session": None, "mode": None}

    # --- Controls ---------------------------------------------------------------

    file_path_tf = ft.TextField(label="Database file", hint_text="/path/to/database.db", expand=True)
    recent_dd = ft.Dropdown(label="Recent files", width=600, options=[])
    table_dd = ft.Dropdown(label="Table", width=320, options=[], disabled=True)
    status_text = ft.Text("No file loaded", size=12, color=WITH_OPACITY(0.7, BORDER_BASE))
    dirty_text = ft.Text("", size=12, color=DIRTY_COLOR)

    grid_table = ft.DataTable(
        columns=[ft.DataColumn(ft.Text(""))],
        rows=[],
        visible=False,
        border=ft.border.all(1, WITH_OPACITY(0.08, BORDER_BASE)),
        heading_row_height=36,
        data_row_min_height=32,
        column_spacing=16,
    )
    grid_placeholder = make_empty_placeholder("Load a database file and pick a table", TABLE_ICON)

    # --- UI helpers -------------------------------------------------------------

    def _refresh() -> None:
        try:
            page.update()
        except Exception:
            pass

    def _open(ctl) -> None:
        try:
            page.open(ctl)
        except Exception:
            page.dialog = ctl
            ctl.open = True
        _refresh()

    def _snack(msg: str, error: bool = False) -> None:
        page.snack_bar = ft.SnackBar(ft.Text(msg), bgcolor=ERROR_COLOR if error else None)
        _open(page.snack_bar)

    def _confirm(title: str, message: str, on_yes: Callable[[], None]) -> ft.AlertDialog:
        dlg = ft.AlertDialog(modal=True, title=ft.Text(title), content=ft.Text(message))

        def _close(_=None):
            dlg.open = False
            _refresh()

        def _yes(_=None):
            _close()
            on_yes()

        dlg.actions = [ft.TextButton("Yes", on_click=_yes), ft.TextButton("No", on_click=_close)]
        _open(dlg)
        return dlg

    def _session() -> Optional[EditSession]:
        return state.get("session")

    # --- Rendering --------------------------------------------------------------

    def _on_cell_change(row: int, col: int, value: str) -> None:
        session = _session()
        if session is None:
            return
        was_dirty = session.dirty
        session.set_cell(row, col, value)
        if not was_dirty:
            _update_status()
            _refresh()

    def _request_delete(row: int) -> None:
        _confirm(
            "Confirm Deletion",
            f"Delete row {row + 1}? It is removed from the file only when you press Update.",
            lambda: remove_row(row),
        )

    def _render_grid() -> None:
        session = _session()
        if session is None:
            grid_table.visible = False
            grid_placeholder.visible = True
            return

        mode = state.get("mode")
        editable = mode in ("add", "edit")
        columns = [ft.DataColumn(ft.Text(label, weight=ft.FontWeight.BOLD)) for label in header_labels(session.grid)]
        if mode == "delete":
            columns.append(ft.DataColumn(ft.Text("")))

        rows = []
        for r, cells in enumerate(session.grid.padded_rows()):
            data_cells = []
            for c, value in enumerate(cells):
                if editable:
                    content = cell_editor(value, on_change=lambda e, r=r, c=c: _on_cell_change(r, c, e.control.value))
                else:
                    content = cell_text(value)
                data_cells.append(ft.DataCell(content))
            if mode == "delete":
                data_cells.append(
                    ft.DataCell(
                        ft.IconButton(
                            icon=DELETE_ICON,
                            icon_color=ERROR_COLOR,
                            tooltip="Delete this row",
                            on_click=lambda e, r=r: _request_delete(r),
                        )
                    )
                )
            rows.append(ft.DataRow(cells=data_cells))

        grid_table.columns = columns or [ft.DataColumn(ft.Text(""))]
        grid_table.rows = rows
        grid_table.visible = True
        grid_placeholder.visible = False

    def _update_status() -> None:
        session = _session()
        if not engine.is_loaded():
            status_text.value = "No file loaded"
        elif session is None:
            status_text.value = os.path.basename(state.get("path") or "")
        else:
            status_text.value = f"{session.table}: {session.grid.row_count} rows, {session.grid.column_count} columns"
        dirty_text.value = "Unsaved changes" if session is not None and session.dirty else ""
        has_table = session is not None
        for btn in (add_btn, delete_btn, edit_btn, update_btn, cancel_btn, export_btn):
            btn.disabled = not has_table

    def _set_mode(mode: Optional[str]) -> None:
        state["mode"] = mode
        set_mode_button_active(add_btn, mode == "add")
        set_mode_button_active(delete_btn, mode == "delete")
        set_mode_button_active(edit_btn, mode == "edit")

    def _refresh_recent() -> None:
        recent_dd.options = [ft.dropdown.Option(p) for p in load_recent_files()]

    # --- Handlers ---------------------------------------------------------------

    def load_file(path: Optional[str] = None) -> bool:
        """Open ``path`` (or the path field) and list its tables."""
        path = (path or file_path_tf.value or "").strip()
        file_path_tf.value = path
        table_dd.options = []
        table_dd.value = None
        table_dd.disabled = True
        state.update({"path": None, "table": None, "session": None})
        _set_mode(None)

        try:
            engine.open(path)
            tables = engine.list_tables()
        except EngineError as e:
            engine.close()
            logger.error(f"Failed to load database file {path}: {e}")
            _render_grid()
            _update_status()
            _snack(friendly_open_error(e) if isinstance(e, ConnError) else friendly_error(e), error=True)
            return False

        state["path"] = path
        remember_recent_file(path)
        _refresh_recent()
        table_dd.options = [ft.dropdown.Option(t) for t in tables]
        table_dd.disabled = not tables
        _render_grid()
        _update_status()

        if not tables:
            _snack("No tables found in the database file.")
            return True

        last = load_last_table(path)
        if last in tables:
            select_table(last)
        else:
            _snack(f"Loaded {os.path.basename(path)}: {len(tables)} tables.")
        return True

    def select_table(table: str) -> bool:
        """Load ``table`` into a fresh edit session (pending edits are dropped)."""
        try:
            grid = engine.load_table(table)
        except (LoadError, ConnError) as e:
            logger.error(f"Failed to load table {table}: {e}")
            _snack(friendly_error(e, "Loading table"), error=True)
            return False

        table_dd.value = table
        state["table"] = table
        state["session"] = EditSession(table, grid)
        if state.get("path"):
            save_last_table(state["path"], table)
        _set_mode(None)
        _render_grid()
        _update_status()
        _refresh()
        return True

    def toggle_mode(mode: str) -> None:
        """Switch Add/Delete/Edit mode; turning one on turns the others off."""
        if mode not in MODES or _session() is None:
            return
        if state.get("mode") == mode:
            _set_mode(None)
        else:
            _set_mode(mode)
            if mode == "add":
                _session().append_blank_row()
        _render_grid()
        _update_status()
        _refresh()

    def remove_row(index: int) -> None:
        session = _session()
        if session is None:
            return
        try:
            session.remove_row(index)
        except IndexError:
            return
        _render_grid()
        _update_status()
        _refresh()

    def commit_changes(_=None) -> bool:
        """Write the whole grid back in one transaction, then show what is stored."""
        session = _session()
        if session is None:
            return False
        if not session.dirty:
            _snack("No changes to save.")
            return False
        try:
            stored = engine.replace_table(session.table, session.grid)
        except ReplaceError as e:
            _snack(friendly_save_error(e), error=True)
            return False
        except (ConnError, LoadError) as e:
            # Saved, but the re-read failed: reload from scratch.
            logger.error(f"Saved table {session.table} but could not re-read it: {e}")
            _snack(friendly_error(e), error=True)
            select_table(session.table)
            return True

        session.mark_committed(stored)
        _set_mode(None)
        _render_grid()
        _update_status()
        _snack("Changes saved to the database file.")
        return True

    def discard_changes() -> None:
        session = _session()
        if session is None:
            return
        try:
            session.reset(engine.load_table(session.table))
        except (LoadError, ConnError) as e:
            _snack(friendly_error(e, "Reloading table"), error=True)
            return
        _set_mode(None)
        _render_grid()
        _update_status()
        _snack("All changes have been discarded.")

    def on_cancel(_=None) -> None:
        session = _session()
        if session is None:
            return
        if not session.dirty and state.get("mode") is None:
            _snack("No changes to discard.")
            return
        _confirm("Confirm Discard", "Discard all pending changes?", discard_changes)

    def export_current(_=None) -> Optional[Dict[str, str]]:
        session = _session()
        if session is None or session.grid.row_count == 0:
            _snack("No table data to export.")
            return None
        try:
            paths = export_table(session.grid, session.table, load_export_dir())
        except OSError as e:
            logger.error(f"Export of table {session.table} failed: {e}")
            _snack(friendly_error(e, "Export"), error=True)
            return None
        save_export_dir(os.path.dirname(paths["csv"]))
        _snack(f"Exported to {paths['csv']} and {paths['html']}")
        return paths

    def on_file_picked(e: ft.FilePickerResultEvent) -> None:
        files = getattr(e, "files", None) or []
        if files and getattr(files[0], "path", None):
            load_file(files[0].path)

    def on_recent_selected(e) -> None:
        if recent_dd.value:
            load_file(recent_dd.value)

    def on_table_selected(e) -> None:
        if table_dd.value:
            select_table(table_dd.value)

    # --- Buttons ----------------------------------------------------------------

    file_picker = ft.FilePicker(on_result=on_file_picked)
    page.overlay.append(file_picker)

    choose_btn = ft.ElevatedButton(
        "Choose File",
        icon=OPEN_ICON,
        on_click=lambda _: file_picker.pick_files(
            dialog_title="Select SQLite Database File",
            allowed_extensions=DB_EXTENSIONS,
            allow_multiple=False,
        ),
    )
    load_btn = ft.ElevatedButton("Load", icon=LOAD_ICON, on_click=lambda _: load_file())
    add_btn = mode_button("Add", ADD_ICON, lambda _: toggle_mode("add"))
    delete_btn = mode_button("Delete", DELETE_ICON, lambda _: toggle_mode("delete"))
    edit_btn = mode_button("Edit", EDIT_ICON, lambda _: toggle_mode("edit"))
    update_btn = ft.ElevatedButton("Update", icon=SAVE_ICON, on_click=commit_changes)
    cancel_btn = ft.OutlinedButton("Cancel", icon=CANCEL_ICON, on_click=on_cancel)
    export_btn = ft.OutlinedButton("Export", icon=EXPORT_ICON, on_click=export_current)

    recent_dd.on_change = on_recent_selected
    table_dd.on_change = on_table_selected
    _refresh_recent()
    _update_status()

    tab = build_table_tab(
        section_title=section_title,
        ICONS=ICONS,
        BORDER_BASE=BORDER_BASE,
        WITH_OPACITY=WITH_OPACITY,
        _mk_help_handler=_mk_help_handler,
        file_path_tf=file_path_tf,
        choose_btn=choose_btn,
        load_btn=load_btn,
        recent_dd=recent_dd,
        table_dd=table_dd,
        status_text=status_text,
        add_btn=add_btn,
        delete_btn=delete_btn,
        edit_btn=edit_btn,
        update_btn=update_btn,
        cancel_btn=cancel_btn,
        export_btn=export_btn,
        dirty_text=dirty_text,
        grid_table=grid_table,
        grid_placeholder=grid_placeholder,
    )

    tab.data = {
        "engine": engine,
        "state": state,
        "grid_table": grid_table,
        "table_dd": table_dd,
        "mode_active": lambda mode: is_mode_button_active({"add": add_btn, "delete": delete_btn, "edit": edit_btn}[mode]),
        "load_file": load_file,
        "select_table": select_table,
        "toggle_mode": toggle_mode,
        "remove_row": remove_row,
        "commit": commit_changes,
        "discard": discard_changes,
        "cancel": on_cancel,
        "export": export_current,
    }
    return tab
