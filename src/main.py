import sys

import flet as ft

from db import init_db, close_all_connections
from engine import TableEngine
from helpers.logging_config import get_logger
from helpers.theme import ACCENT_COLOR, DARK_ICON, INFO_ICON
from helpers.ui import section_title
from ui.tabs.table_controller import build_table_tab_with_logic

logger = get_logger(__name__)

APP_TITLE = "SQLGrid"

ABOUT_TEXT = (
    "SQLGrid\n\n"
    "Open an SQLite database file, browse a table as a grid, edit it and save it back.\n"
    "Edits stay in memory until you press Update; the whole table is then written in one transaction, "
    "so a failed save leaves the file unchanged.\n"
    "Built with Flet."
)


def main(page: ft.Page):
    page.title = APP_TITLE
    page.theme_mode = ft.ThemeMode.LIGHT
    page.theme = ft.Theme(color_scheme_seed=ACCENT_COLOR)
    page.window_min_width = 980
    page.window_min_height = 700

    try:
        init_db()
    except Exception as e:
        logger.warning(f"Database initialization warning: {e}")

    engine = TableEngine()

    about_dialog = ft.AlertDialog(
        title=ft.Text("About"),
        content=ft.Text(ABOUT_TEXT),
        actions=[ft.TextButton("Close", on_click=lambda e: _close_dialog(about_dialog))],
    )

    def _close_dialog(dlg):
        dlg.open = False
        page.update()

    def open_about(_):
        page.open(about_dialog)

    def toggle_theme(_):
        page.theme_mode = ft.ThemeMode.DARK if page.theme_mode == ft.ThemeMode.LIGHT else ft.ThemeMode.LIGHT
        page.update()

    def _mk_help_handler(message: str):
        def handler(_=None):
            page.snack_bar = ft.SnackBar(ft.Text(message))
            page.open(page.snack_bar)

        return handler

    def on_disconnect(_=None):
        engine.close()
        close_all_connections()

    page.on_disconnect = on_disconnect

    page.appbar = ft.AppBar(
        title=ft.Text(APP_TITLE, weight=ft.FontWeight.BOLD),
        center_title=False,
        actions=[
            ft.IconButton(icon=DARK_ICON, tooltip="Toggle theme", on_click=toggle_theme),
            ft.IconButton(icon=INFO_ICON, tooltip="About", on_click=open_about),
        ],
    )

    table_tab = build_table_tab_with_logic(
        page,
        section_title=section_title,
        _mk_help_handler=_mk_help_handler,
        engine=engine,
    )
    page.add(table_tab)

    # Open a file passed on the command line
    if len(sys.argv) > 1:
        table_tab.data["load_file"](sys.argv[1])

    logger.info("SQLGrid started")


def run():
    ft.app(target=main)


if __name__ == "__main__":
    run()
