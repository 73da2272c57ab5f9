"""Tests for the desktop navigation helpers and the router."""

from __future__ import annotations

from dataclasses import dataclass, field

import flet as ft

from ledgr.desktop.navigation import Router
from ledgr.desktop.navigation_helpers import (
    handle_navigation_selection,
    index_for_route,
    nav_routes,
    resolve_shortcut_route,
    route_for_index,
)


@dataclass
class _PageSpy:
    """Minimal fake page that records navigation actions."""

    navigated_to: list[str] = field(default_factory=list)

    def go(self, route: str) -> None:
        self.navigated_to.append(route)


def test_navigation_selection_drives_page_route() -> None:
    """Selecting a navigation index pushes the expected route."""

    page = _PageSpy()

    handle_navigation_selection(page, 1)

    assert page.navigated_to == ["/expenses"]


def test_navigation_selection_out_of_bounds_does_nothing() -> None:
    """Out-of-range indexes do not trigger navigation."""

    page = _PageSpy()

    handle_navigation_selection(page, 99)

    assert page.navigated_to == []


def test_index_and_route_round_trip() -> None:
    """Every navigation route resolves back to itself via the helpers."""

    for index, route in enumerate(nav_routes()):
        assert route_for_index(index) == route
        assert index_for_route(route) == index


def test_index_for_route_ignores_query() -> None:
    assert index_for_route("/categories?type=income&page=2") == nav_routes().index("/categories")
    assert index_for_route("/unknown") == 0


def test_every_list_resource_is_reachable() -> None:
    routes = set(nav_routes())

    assert {
        "/expenses",
        "/income",
        "/categories",
        "/bank-accounts",
        "/fund-sources",
        "/loans",
        "/installments",
        "/recurring",
        "/budgets",
    } <= routes


def test_shortcuts() -> None:
    assert resolve_shortcut_route("1", ctrl=True, shift=False) == "/dashboard"
    assert resolve_shortcut_route("E", ctrl=True, shift=False) == "/expenses"
    assert resolve_shortcut_route("c", ctrl=True, shift=True) == "/categories"
    assert resolve_shortcut_route("e", ctrl=False, shift=False) is None


class _ListViewData:
    def __init__(self):
        self.routes: list[str] = []
        self.disposed = False

    def on_route(self, route: str) -> None:
        self.routes.append(route)

    def dispose(self) -> None:
        self.disposed = True


def _router(ctx, page):
    router = Router(page, ctx)
    built: list[str] = []
    data = _ListViewData()

    def expenses(_ctx, _page):
        built.append("/expenses")
        view = ft.View(route="/expenses")
        view.data = data
        return view

    def categories(_ctx, _page):
        built.append("/categories")
        return ft.View(route="/categories")

    router.register("/expenses", expenses)
    router.register("/categories", categories)
    router.register("/login", lambda _ctx, _page: ft.View(route="/login"))
    return router, built, data


def test_router_requires_a_session(anonymous_ctx, page):
    router, built, _ = _router(anonymous_ctx, page)

    router.navigate_to("/expenses")

    assert page.history == ["/login"]
    assert built == []


def test_router_allows_public_routes_without_session(anonymous_ctx, page):
    router, _, _ = _router(anonymous_ctx, page)

    router.navigate_to("/login")

    assert page.views[-1].route == "/login"


def test_router_unknown_route_falls_back_to_dashboard(ctx, page):
    router, _, _ = _router(ctx, page)

    router.navigate_to("/nowhere")

    assert page.history == ["/dashboard"]


def test_query_change_refreshes_view_in_place(ctx, page):
    """Filter navigation does not rebuild the view, so inputs keep focus."""

    router, built, data = _router(ctx, page)
    router.navigate_to("/expenses")

    router.navigate_to("/expenses?search=cof&page=1")

    assert built == ["/expenses"]
    assert data.routes == ["/expenses?search=cof&page=1"]
    assert len(page.views) == 1


def test_switching_views_disposes_the_old_one(ctx, page):
    router, built, data = _router(ctx, page)
    router.navigate_to("/expenses")

    router.navigate_to("/categories")

    assert data.disposed
    assert built == ["/expenses", "/categories"]
    assert page.views[-1].route == "/categories"


def test_builder_failure_shows_error_dialog(ctx, page):
    router = Router(page, ctx)

    def broken(_ctx, _page):
        raise RuntimeError("kaboom")

    router.register("/expenses", broken)
    router.navigate_to("/expenses")

    assert page.dialog is not None
    assert page.dialog.open
    assert "kaboom" in page.dialog.content.value
