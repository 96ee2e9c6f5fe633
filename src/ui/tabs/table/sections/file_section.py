"""Table tab: database file section builder."""

from __future__ import annotations

import flet as ft


def build_file_section(
    *,
    section_title,
    ICONS,
    BORDER_BASE,
    WITH_OPACITY,
    _mk_help_handler,
    file_path_tf: ft.TextField,
    choose_btn: ft.ElevatedButton,
    load_btn: ft.ElevatedButton,
    recent_dd: ft.Dropdown,
) -> ft.Container:
    help_text = "Choose an SQLite database file (.db, .sqlite, .sqlite3) and load it."
    return ft.Container(
        content=ft.Column(
            [
                section_title(
                    "Database File",
                    getattr(ICONS, "STORAGE", ICONS.FOLDER),
                    help_text,
                    on_help_click=_mk_help_handler(help_text),
                ),
                ft.Row([file_path_tf, choose_btn, load_btn], spacing=8),
                recent_dd,
            ],
            spacing=10,
        ),
        width=1000,
        padding=10,
        border=ft.border.all(1, WITH_OPACITY(0.1, BORDER_BASE)),
        border_radius=8,
    )
