"""Main Flet desktop application entry point."""

from __future__ import annotations

import time

import flet as ft

from ..devtools import dev_log
from ..logging_config import get_logger, session_log_path, setup_logging
from . import controllers
from .context import create_app_context
from .navigation import Router
from .views.accounts import build_bank_accounts_view, build_fund_sources_view
from .views.auth import build_login_view, build_register_view
from .views.budgets import build_budgets_view
from .views.categories import build_categories_view
from .views.dashboard import build_dashboard_view
from .views.installments import build_installments_view
from .views.loans import build_loans_view
from .views.recurring import build_recurring_view
from .views.reports import build_reports_view
from .views.settings import build_settings_view
from .views.transactions import build_expenses_view, build_income_view

logger = get_logger(__name__)

ROUTE_BUILDERS = {
    "/login": build_login_view,
    "/register": build_register_view,
    "/dashboard": build_dashboard_view,
    "/": build_dashboard_view,
    "/expenses": build_expenses_view,
    "/income": build_income_view,
    "/recurring": build_recurring_view,
    "/budgets": build_budgets_view,
    "/categories": build_categories_view,
    "/bank-accounts": build_bank_accounts_view,
    "/fund-sources": build_fund_sources_view,
    "/loans": build_loans_view,
    "/installments": build_installments_view,
    "/reports": build_reports_view,
    "/settings": build_settings_view,
}


class ErrorThrottle:
    """Collapses bursts of the same Flet error into one log line and one snack."""

    def __init__(self, page: ft.Page, window: float = 0.5, clock=time.monotonic):
        self.page = page
        self.window = window
        self.clock = clock
        self.last_message: str | None = None
        self.last_seen = 0.0
        self.suppressed = 0

    def __call__(self, e: ft.ControlEvent) -> None:
        message = getattr(e, "data", None) or "<no-data>"
        now = self.clock()
        repeated = message == self.last_message and now - self.last_seen < self.window
        self.last_seen = now
        if repeated:
            self.suppressed += 1
            if self.suppressed % 100 == 0:
                logger.warning("Repeated UI errors suppressed", extra={"error_message": message, "suppressed": self.suppressed})
            return
        if self.suppressed:
            logger.warning(
                "UI error burst ended", extra={"error_message": self.last_message, "suppressed": self.suppressed}
            )
        self.last_message = message
        self.suppressed = 0
        logger.error("Flet page error", extra={"data": message})
        controllers.notify(self.page, f"UI error: {message}", True)


def main(page: ft.Page) -> None:
    """Main entry point for the Flet desktop app."""

    ctx = create_app_context()

    setup_logging(ctx.config)
    logger.info("Ledgr desktop application starting")

    def on_page_close(_):
        logger.info("Application closing")
        ctx.close()
        slp = session_log_path()
        if slp:
            logger.info("Debug session log saved to: %s", slp)

    page.on_close = on_page_close

    ctx.page = page
    page.title = "Ledgr (DEV)" if ctx.dev_mode else "Ledgr"
    if ctx.dev_mode:
        dev_log(ctx.config, "Dev mode enabled", context={"api": ctx.config.API_BASE_URL})
    page.theme_mode = ctx.theme_mode
    page.padding = 0
    page.window.width = 1280
    page.window.height = 800
    page.window.min_width = 1024
    page.window.min_height = 600
    transitions = ft.PageTransitionsTheme(
        android=ft.PageTransitionTheme.NONE,
        ios=ft.PageTransitionTheme.NONE,
        macos=ft.PageTransitionTheme.NONE,
        windows=ft.PageTransitionTheme.NONE,
    )
    page.theme = ft.Theme(page_transitions=transitions)
    page.dark_theme = ft.Theme(page_transitions=transitions)

    router = Router(page, ctx)
    for route, builder in ROUTE_BUILDERS.items():
        router.register(route, builder)

    page.on_route_change = router.route_change
    page.on_view_pop = router.view_pop

    page.on_error = ErrorThrottle(page)

    def handle_shortcuts(e: ft.KeyboardEvent):
        """Global keyboard shortcuts for quick navigation."""
        controllers.handle_shortcut(page, e.key, e.ctrl, e.shift)

    page.on_keyboard_event = handle_shortcuts

    page.go("/dashboard" if ctx.is_authenticated else "/login")


if __name__ == "__main__":
    ft.app(target=main)
