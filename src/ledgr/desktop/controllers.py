"""Controller helpers for desktop navigation and primary actions."""

from __future__ import annotations

from typing import TYPE_CHECKING

import flet as ft

from ..devtools import dev_log
from ..logging_config import get_logger
from ..services import auth
from .navigation_helpers import handle_navigation_selection, resolve_shortcut_route

if TYPE_CHECKING:
    from .context import AppContext

logger = get_logger(__name__)


def _show_snack(page: ft.Page, message: str, *, error: bool = False) -> None:
    """Display a snack bar message."""

    page.snack_bar = ft.SnackBar(
        content=ft.Text(message, color=ft.Colors.ON_ERROR if error else None),
        bgcolor=ft.Colors.ERROR if error else None,
        show_close_icon=error,
    )
    page.snack_bar.open = True
    page.update()


def notify(page: ft.Page, message: str, error: bool = False) -> None:
    """Transient notification; the error variant uses the error colours."""

    if not message:
        return
    _show_snack(page, message, error=error)


def navigate(page: ft.Page, route: str) -> None:
    """Navigate to a route and update the page."""

    clean = route if route.startswith("/") else f"/{route}"
    page.go(clean)
    page.update()


def handle_nav_selection(page: ft.Page, selected_index: int) -> None:
    """Delegate navigation rail selection to the helpers and update."""

    handle_navigation_selection(page, selected_index)
    page.update()


def handle_shortcut(page: ft.Page, key: str, ctrl: bool, shift: bool) -> bool:
    """Resolve shortcut navigation; returns True when a route was triggered."""

    route = resolve_shortcut_route(key, ctrl, shift)
    if route:
        navigate(page, route)
        return True
    return False


def logout(ctx: AppContext, page: ft.Page) -> None:
    """Sign out, clear the stored token and return to the login screen."""

    auth.logout(ctx.client, ctx.session)
    dev_log(ctx.config, "Signed out")
    _show_snack(page, "Logged out successfully")
    page.go("/login")


def refresh(page: ft.Page) -> None:
    """Reload the current route."""

    page.go(page.route)
    page.update()


def toggle_theme(ctx: AppContext, page: ft.Page) -> ft.ThemeMode:
    mode = ft.ThemeMode.DARK if ctx.theme_mode == ft.ThemeMode.LIGHT else ft.ThemeMode.LIGHT
    ctx.theme_mode = mode
    page.theme_mode = mode
    page.update()
    logger.info("Theme changed", extra={"theme_mode": mode.value})
    return mode
