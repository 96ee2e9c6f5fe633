"""Table tab: table selector section builder."""

from __future__ import annotations

import flet as ft


def build_selector_section(
    *,
    section_title,
    ICONS,
    _mk_help_handler,
    table_dd: ft.Dropdown,
    status_text: ft.Text,
) -> ft.Container:
    return ft.Container(
        content=ft.Column(
            [
                section_title(
                    "Table",
                    getattr(ICONS, "TABLE_CHART", ICONS.LIST),
                    "Pick the table to view and edit.",
                    on_help_click=_mk_help_handler("Pick the table to view and edit."),
                ),
                ft.Row([table_dd, status_text], spacing=16, vertical_alignment=ft.CrossAxisAlignment.CENTER),
            ],
            spacing=10,
        ),
        width=1000,
    )
