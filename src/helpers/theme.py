import flet as ft

# Robust color aliasing: prefer ft.Colors, fall back to ft.colors if present
if hasattr(ft, "Colors"):
    COLORS = ft.Colors
else:
    COLORS = getattr(ft, "colors", None)

# Robust icons aliasing: prefer ft.Icons, fall back to ft.icons if present
if hasattr(ft, "Icons"):
    ICONS = ft.Icons
else:
    ICONS = getattr(ft, "icons", None)

# Accent and borders
ACCENT_COLOR = COLORS.BLUE
BORDER_BASE = getattr(COLORS, "ON_SURFACE", getattr(COLORS, "GREY", "#e0e0e0"))

# Toggle mode buttons (Add / Delete / Edit): green while the mode is active
MODE_ACTIVE_COLOR = COLORS.GREEN
MODE_IDLE_COLOR = getattr(COLORS, "BLUE_GREY_100", getattr(COLORS, "GREY", "#e0e0e0"))
DIRTY_COLOR = COLORS.ORANGE
ERROR_COLOR = COLORS.RED

# Icons with fallbacks across Flet versions
OPEN_ICON = getattr(ICONS, "FOLDER_OPEN", getattr(ICONS, "FOLDER", None))
LOAD_ICON = getattr(ICONS, "UPLOAD_FILE", getattr(ICONS, "FILE_OPEN", OPEN_ICON))
TABLE_ICON = getattr(ICONS, "TABLE_CHART", getattr(ICONS, "GRID_ON", None))
ADD_ICON = getattr(ICONS, "ADD", None)
DELETE_ICON = getattr(ICONS, "DELETE_OUTLINE", getattr(ICONS, "DELETE", None))
EDIT_ICON = getattr(ICONS, "EDIT", None)
SAVE_ICON = getattr(ICONS, "SAVE", getattr(ICONS, "CHECK", None))
CANCEL_ICON = getattr(ICONS, "UNDO", getattr(ICONS, "CANCEL", None))
EXPORT_ICON = getattr(ICONS, "PRINT", getattr(ICONS, "DOWNLOAD", None))
INFO_ICON = getattr(
    ICONS,
    "INFO_OUTLINE",
    getattr(ICONS, "INFO", getattr(ICONS, "HELP_OUTLINE", getattr(ICONS, "HELP", None))),
)
DARK_ICON = getattr(ICONS, "DARK_MODE_OUTLINED", getattr(ICONS, "DARK_MODE", None))

__all__ = [
    "COLORS",
    "ICONS",
    "ACCENT_COLOR",
    "BORDER_BASE",
    "MODE_ACTIVE_COLOR",
    "MODE_IDLE_COLOR",
    "DIRTY_COLOR",
    "ERROR_COLOR",
    "OPEN_ICON",
    "LOAD_ICON",
    "TABLE_ICON",
    "ADD_ICON",
    "DELETE_ICON",
    "EDIT_ICON",
    "SAVE_ICON",
    "CANCEL_ICON",
    "EXPORT_ICON",
    "INFO_ICON",
    "DARK_ICON",
]
