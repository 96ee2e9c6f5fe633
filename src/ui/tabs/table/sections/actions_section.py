"""Table tab: edit actions section builder."""

from __future__ import annotations

import flet as ft

ACTIONS_HELP = (
    "Add appends a blank row. Delete lets you remove rows. Edit makes cells editable. "
    "Nothing is written until you press Update, which saves the whole table at once. "
    "Cancel discards every pending change."
)


def build_actions_section(
    *,
    section_title,
    ICONS,
    _mk_help_handler,
    add_btn: ft.ElevatedButton,
    delete_btn: ft.ElevatedButton,
    edit_btn: ft.ElevatedButton,
    update_btn: ft.ElevatedButton,
    cancel_btn: ft.OutlinedButton,
    export_btn: ft.OutlinedButton,
    dirty_text: ft.Text,
) -> ft.Container:
    return ft.Container(
        content=ft.Column(
            [
                section_title(
                    "Edit",
                    getattr(ICONS, "EDIT_NOTE", ICONS.EDIT),
                    ACTIONS_HELP,
                    on_help_click=_mk_help_handler(ACTIONS_HELP),
                ),
                ft.Row(
                    [add_btn, delete_btn, edit_btn, ft.VerticalDivider(width=12), update_btn, cancel_btn, export_btn],
                    spacing=8,
                    wrap=True,
                ),
                dirty_text,
            ],
            spacing=10,
        ),
        width=1000,
    )
