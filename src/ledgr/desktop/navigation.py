"""Navigation and routing for Flet desktop app."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Dict, Optional

import flet as ft

if TYPE_CHECKING:
    from .context import AppContext

from ..devtools import dev_log
from ..logging_config import get_logger
from ..services.filters import split_route

logger = get_logger(__name__)

# View builder type
ViewBuilder = Callable[["AppContext", ft.Page], ft.View]

PUBLIC_ROUTES = frozenset({"/login", "/register"})


class Router:
    """Handles routing and navigation for the Flet app.

    Routes are matched on their path. When only the query string changes and
    the current view exposes ``view.data.on_route``, the view refreshes in
    place instead of being rebuilt so text inputs keep their state.
    """

    def __init__(self, page: ft.Page, context: AppContext):
        """Initialize router with page and context."""
        self.page = page
        self.context = context
        self.routes: Dict[str, ViewBuilder] = {}
        self.current_path: Optional[str] = None

    def register(self, route: str, builder: ViewBuilder) -> None:
        """Register a route with its view builder."""
        logger.debug("Registering route: %s", route)
        self.routes[route] = builder

    def route_change(self, e: ft.RouteChangeEvent) -> None:
        """Handle route change events."""
        self.navigate_to(e.route or "/")

    def navigate_to(self, route: str) -> None:
        path, _ = split_route(route)
        logger.info("Route change requested: %s", path)

        if path not in PUBLIC_ROUTES and not self.context.is_authenticated:
            logger.info("Route requires a session, redirecting to login")
            self.page.go("/login")
            return

        if path not in self.routes:
            logger.warning("Route not in registered routes: %s, defaulting to dashboard", path)
            self.page.go("/dashboard")
            return

        current = self.page.views[-1] if self.page.views else None
        refresh = getattr(getattr(current, "data", None), "on_route", None)
        if path == self.current_path and callable(refresh):
            try:
                refresh(route)
                self.page.update()
            except Exception as ex:
                logger.error("Failed to refresh view for %s", route, exc_info=True)
                dev_log(self.context.config, "Route refresh failed", exc=ex, context={"route": route})
                self.show_error(f"Error loading view: {ex}")
            return

        builder = self.routes[path]
        try:
            logger.debug("Building view for route: %s", path)
            self._dispose_current()
            view = builder(self.context, self.page)
            if self.page.views:
                self.page.views[-1] = view
            else:
                self.page.views.append(view)
            self.current_path = path
            self.page.update()
            logger.info("Successfully loaded view for route: %s", path)
        except Exception as ex:
            logger.error("Failed to build view for route %s", path, exc_info=True)
            dev_log(self.context.config, "Route load failed", exc=ex, context={"route": route})
            self.show_error(f"Error loading view: {ex}")

    def _dispose_current(self) -> None:
        if not self.page.views:
            return
        dispose = getattr(getattr(self.page.views[-1], "data", None), "dispose", None)
        if callable(dispose):
            dispose()

    def view_pop(self, e: ft.ViewPopEvent) -> None:
        """Handle back button navigation."""
        if len(self.page.views) > 1:
            self.page.views.pop()
        top_view = self.page.views[-1]
        self.page.go(top_view.route)

    def show_error(self, message: str) -> None:
        """Display an error dialog."""
        dialog = ft.AlertDialog(
            title=ft.Text("Error"),
            content=ft.Text(message),
            actions=[ft.TextButton("OK", on_click=lambda _: self.close_dialog(dialog))],
        )
        self.page.dialog = dialog
        dialog.open = True
        self.page.update()

    def close_dialog(self, dialog: ft.AlertDialog) -> None:
        """Close a dialog."""
        dialog.open = False
        self.page.update()
