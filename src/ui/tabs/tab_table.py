"""Table tab builder for SQLGrid.

Composes the tab from the per-section builders under
`ui.tabs.table.sections`. Controls and handlers are created in
`table_controller.py`.
"""

from __future__ import annotations

import flet as ft

from ui.tabs.table.sections.file_section import build_file_section
from ui.tabs.table.sections.selector_section import build_selector_section
from ui.tabs.table.sections.actions_section import build_actions_section
from ui.tabs.table.sections.grid_section import build_grid_section


def build_table_tab(
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
    table_dd: ft.Dropdown,
    status_text: ft.Text,
    add_btn: ft.ElevatedButton,
    delete_btn: ft.ElevatedButton,
    edit_btn: ft.ElevatedButton,
    update_btn: ft.ElevatedButton,
    cancel_btn: ft.OutlinedButton,
    export_btn: ft.OutlinedButton,
    dirty_text: ft.Text,
    grid_table: ft.DataTable,
    grid_placeholder: ft.Container,
) -> ft.Container:
    file_section = build_file_section(
        section_title=section_title,
        ICONS=ICONS,
        BORDER_BASE=BORDER_BASE,
        WITH_OPACITY=WITH_OPACITY,
        _mk_help_handler=_mk_help_handler,
        file_path_tf=file_path_tf,
        choose_btn=choose_btn,
        load_btn=load_btn,
        recent_dd=recent_dd,
    )

    selector_section = build_selector_section(
        section_title=section_title,
        ICONS=ICONS,
        _mk_help_handler=_mk_help_handler,
        table_dd=table_dd,
        status_text=status_text,
    )

    actions_section = build_actions_section(
        section_title=section_title,
        ICONS=ICONS,
        _mk_help_handler=_mk_help_handler,
        add_btn=add_btn,
        delete_btn=delete_btn,
        edit_btn=edit_btn,
        update_btn=update_btn,
        cancel_btn=cancel_btn,
        export_btn=export_btn,
        dirty_text=dirty_text,
    )

    grid_section = build_grid_section(
        BORDER_BASE=BORDER_BASE,
        WITH_OPACITY=WITH_OPACITY,
        grid_table=grid_table,
        grid_placeholder=grid_placeholder,
    )

    return ft.Container(
        content=ft.Column(
            [
                file_section,
                ft.Divider(),
                selector_section,
                actions_section,
                grid_section,
            ],
            scroll=ft.ScrollMode.AUTO,
            spacing=12,
        ),
        padding=16,
    )
