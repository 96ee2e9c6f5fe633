from typing import Optional, Callable
import flet as ft

from .theme import COLORS, ICONS, ACCENT_COLOR, BORDER_BASE, INFO_ICON, MODE_ACTIVE_COLOR, MODE_IDLE_COLOR


def WITH_OPACITY(opacity: float, color):
    """Apply opacity if supported in this Flet build; otherwise return color as-is."""
    if hasattr(ft, "colors") and hasattr(ft.colors, "with_opacity"):
        try:
            return ft.colors.with_opacity(opacity, color)
        except Exception:
            pass
    if hasattr(COLORS, "with_opacity"):
        try:
            return COLORS.with_opacity(opacity, color)
        except Exception:
            pass
    return color


def section_title(
    title: str, icon: str, help_text: Optional[str] = None, on_help_click: Optional[Callable[..., None]] = None
) -> ft.Row:
    controls = [
        ft.Icon(icon, color=ACCENT_COLOR),
        ft.Text(title, size=16, weight=ft.FontWeight.BOLD),
    ]
    if help_text and INFO_ICON is not None:
        controls.append(
            ft.IconButton(
                icon=INFO_ICON,
                icon_color=WITH_OPACITY(0.8, BORDER_BASE),
                tooltip=help_text,
                on_click=on_help_click,
            )
        )
    return ft.Row(controls)


def make_empty_placeholder(text: str, icon) -> ft.Container:
    """Centered, subtle placeholder shown when a panel has no content."""
    return ft.Container(
        content=ft.Column(
            [
                ft.Icon(icon, color=WITH_OPACITY(0.45, BORDER_BASE), size=18),
                ft.Text(text, size=12, color=WITH_OPACITY(0.7, BORDER_BASE)),
            ],
            alignment=ft.MainAxisAlignment.CENTER,
            horizontal_alignment=ft.CrossAxisAlignment.CENTER,
            spacing=6,
        ),
        padding=10,
    )


def cell_text(text: str, size: int = 13) -> ft.Text:
    """Read-only DataTable cell text that wraps within its cell."""
    return ft.Text(text or "", no_wrap=False, size=size, selectable=True)


def cell_editor(text: str, on_change: Callable, size: int = 13) -> ft.TextField:
    """Borderless inline editor for a DataTable cell."""
    return ft.TextField(
        value=text or "",
        dense=True,
        text_size=size,
        border=ft.InputBorder.NONE,
        content_padding=ft.padding.symmetric(4, 2),
        on_change=on_change,
    )


def mode_button(label: str, icon, on_click: Callable) -> ft.ElevatedButton:
    """Toggle-style button; colour it with set_mode_button_active()."""
    btn = ft.ElevatedButton(label, icon=icon, on_click=on_click, bgcolor=MODE_IDLE_COLOR)
    btn.data = {"active": False}
    return btn


def set_mode_button_active(btn: ft.ElevatedButton, active: bool) -> None:
    btn.data = {"active": bool(active)}
    btn.bgcolor = MODE_ACTIVE_COLOR if active else MODE_IDLE_COLOR
    btn.color = COLORS.WHITE if active else None


def is_mode_button_active(btn: ft.ElevatedButton) -> bool:
    return bool((btn.data or {}).get("active"))


__all__ = [
    "WITH_OPACITY",
    "section_title",
    "make_empty_placeholder",
    "cell_text",
    "cell_editor",
    "mode_button",
    "set_mode_button_active",
    "is_mode_button_active",
    "ICONS",
]
