"""Table tab: data grid section builder."""

from __future__ import annotations

import flet as ft


def build_grid_section(
    *,
    BORDER_BASE,
    WITH_OPACITY,
    grid_table: ft.DataTable,
    grid_placeholder: ft.Container,
) -> ft.Container:
    # DataTable does not scroll on its own: wrap it both ways.
    scroller = ft.Column(
        [ft.Row([grid_table], scroll=ft.ScrollMode.AUTO)],
        scroll=ft.ScrollMode.AUTO,
        expand=True,
    )
    return ft.Container(
        content=ft.Stack([scroller, grid_placeholder], expand=True),
        height=460,
        width=1000,
        border=ft.border.all(1, WITH_OPACITY(0.1, BORDER_BASE)),
        border_radius=8,
        padding=10,
    )
