"""Navigation metadata and helpers for the desktop app."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Protocol

import flet as ft

from ..services.filters import split_route


class PageLike(Protocol):
    """Minimal subset of `ft.Page` needed for navigation helpers."""

    def go(self, route: str) -> None: ...


@dataclass(frozen=True)
class NavigationDestination:
    """Metadata for a desktop navigation rail entry."""

    route: str
    label: str
    icon: str
    selected_icon: str


NAVIGATION_DESTINATIONS: List[NavigationDestination] = [
    NavigationDestination("/dashboard", "Dashboard", ft.Icons.DASHBOARD_OUTLINED, ft.Icons.DASHBOARD),
    NavigationDestination("/expenses", "Expenses", ft.Icons.RECEIPT_LONG_OUTLINED, ft.Icons.RECEIPT_LONG),
    NavigationDestination("/income", "Income", ft.Icons.SAVINGS_OUTLINED, ft.Icons.SAVINGS),
    NavigationDestination("/recurring", "Recurring", ft.Icons.AUTORENEW_OUTLINED, ft.Icons.AUTORENEW),
    NavigationDestination("/budgets", "Budgets", ft.Icons.PIE_CHART_OUTLINE, ft.Icons.PIE_CHART),
    NavigationDestination("/categories", "Categories", ft.Icons.LABEL_OUTLINE, ft.Icons.LABEL),
    NavigationDestination(
        "/bank-accounts", "Accounts", ft.Icons.ACCOUNT_BALANCE_OUTLINED, ft.Icons.ACCOUNT_BALANCE
    ),
    NavigationDestination(
        "/fund-sources", "Cash", ft.Icons.ACCOUNT_BALANCE_WALLET_OUTLINED, ft.Icons.ACCOUNT_BALANCE_WALLET
    ),
    NavigationDestination("/loans", "Loans", ft.Icons.CREDIT_CARD_OUTLINED, ft.Icons.CREDIT_CARD),
    NavigationDestination(
        "/installments", "Installments", ft.Icons.CALENDAR_MONTH_OUTLINED, ft.Icons.CALENDAR_MONTH
    ),
    NavigationDestination("/reports", "Reports", ft.Icons.ASSESSMENT_OUTLINED, ft.Icons.ASSESSMENT),
    NavigationDestination("/settings", "Settings", ft.Icons.SETTINGS_OUTLINED, ft.Icons.SETTINGS),
]


_SHORTCUT_DIGIT_ROUTES = {
    "1": "/dashboard",
    "2": "/expenses",
    "3": "/income",
    "4": "/recurring",
    "5": "/budgets",
    "6": "/loans",
    "7": "/reports",
    "8": "/settings",
}


_SHORTCUT_KEYS_WITH_CTRL = {
    "e": "/expenses",
    "i": "/income",
}


def nav_routes() -> list[str]:
    """List of routes represented in the navigation rail."""
    return [dest.route for dest in NAVIGATION_DESTINATIONS]


def route_for_index(selected_index: int) -> Optional[str]:
    """Return the route that corresponds to the selected navigation index."""
    if 0 <= selected_index < len(NAVIGATION_DESTINATIONS):
        return NAVIGATION_DESTINATIONS[selected_index].route
    return None


def index_for_route(route: str) -> int:
    """Return the index of the destination matching the route's path."""
    path, _ = split_route(route)
    try:
        return nav_routes().index(path)
    except ValueError:
        return 0


def handle_navigation_selection(page: PageLike, selected_index: int) -> None:
    """Go to the route that was selected in the navigation rail."""
    if route := route_for_index(selected_index):
        page.go(route)


def resolve_shortcut_route(key: str, ctrl: bool, shift: bool) -> Optional[str]:
    """Map keyboard shortcuts to navigation routes."""
    key = (key or "").lower()
    if ctrl and shift and key == "c":
        return "/categories"
    if ctrl and not shift:
        if key in _SHORTCUT_DIGIT_ROUTES:
            return _SHORTCUT_DIGIT_ROUTES[key]
        return _SHORTCUT_KEYS_WITH_CTRL.get(key)
    return None


__all__ = [
    "NavigationDestination",
    "NAVIGATION_DESTINATIONS",
    "handle_navigation_selection",
    "index_for_route",
    "nav_routes",
    "resolve_shortcut_route",
    "route_for_index",
]
