"""Smoke tests: every registered view builds against the fake backend."""

from __future__ import annotations

import flet as ft
import pytest

from ledgr.desktop import controllers
from ledgr.desktop.app import ROUTE_BUILDERS, ErrorThrottle
from ledgr.desktop.components import ListPage

LIST_ROUTES = [
    "/expenses",
    "/income",
    "/recurring",
    "/budgets",
    "/categories",
    "/bank-accounts",
    "/fund-sources",
    "/loans",
    "/installments",
]


@pytest.mark.parametrize("route", sorted(ROUTE_BUILDERS))
def test_view_builds(ctx, page, route):
    page.route = route

    view = ROUTE_BUILDERS[route](ctx, page)

    assert isinstance(view, ft.View)


@pytest.mark.parametrize("route", LIST_ROUTES)
def test_list_views_load_their_resource(ctx, api, page, route):
    page.route = f"{route}?page=2"

    view = ROUTE_BUILDERS[route](ctx, page)

    assert isinstance(view.data, ListPage)
    list_request = next(
        request
        for request in api.requests
        if request.method == "GET" and api.query(request).get("per_page") == "15"
    )
    assert api.query(list_request)["page"] == "2"


def test_dashboard_degrades_when_stats_fail(ctx, api, page):
    api.on("GET", "/dashboard/stats", {"message": "Stats offline"}, status=500)

    view = ROUTE_BUILDERS["/dashboard"](ctx, page)

    assert isinstance(view, ft.View)
    assert page.snack_message == "Stats offline"


def test_login_view_redirects_when_signed_in(ctx, page):
    ROUTE_BUILDERS["/login"](ctx, page)

    assert page.history == ["/dashboard"]


def test_login_view_shows_server_error(anonymous_ctx, api, page):
    api.on("POST", "/login", {"message": "Invalid credentials", "errors": {"email": ["Unknown email"]}}, status=422)
    view = ROUTE_BUILDERS["/login"](anonymous_ctx, page)
    fields = _find_all(view, ft.TextField)
    email, password = fields[0], fields[1]

    email.value = "ada@example.com"
    password.value = "pw"
    password.on_submit(None)

    assert email.error_text == "Unknown email"
    assert page.history == []
    assert not anonymous_ctx.is_authenticated


def test_categories_view_locks_default_rows(ctx, api, page, category_factory):
    api.on(
        "GET",
        "/categories",
        [category_factory(id=1, name="Salary", type="income", user_id=None), category_factory(id=2, name="Pets")],
    )
    page.route = "/categories"
    view = ROUTE_BUILDERS["/categories"](ctx, page)
    rows = view.data.table.rows

    default_actions = rows[0].cells[-1].content.controls
    assert isinstance(default_actions[0], ft.Icon)

    default_actions[-1].on_click(None)
    assert page.snack_message == "Cannot delete default categories"
    assert page.dialog is None

    rows[1].cells[-1].content.controls[-1].on_click(None)
    assert page.dialog.open
    page.dialog.actions[1].on_click(None)

    assert len(api.calls("DELETE", "/categories/2")) == 1
    assert api.calls("DELETE", "/categories/1") == []


def test_theme_toggle_updates_context(ctx, page):
    mode = controllers.toggle_theme(ctx, page)

    assert mode == ft.ThemeMode.DARK
    assert ctx.theme_mode == page.theme_mode == ft.ThemeMode.DARK


def test_logout_controller_returns_to_login(ctx, page):
    controllers.logout(ctx, page)

    assert not ctx.is_authenticated
    assert page.history == ["/login"]


def _find_all(control, kind):
    found = []

    def walk(node):
        if isinstance(node, kind):
            found.append(node)
        for attr in ("controls", "content"):
            child = getattr(node, attr, None)
            if isinstance(child, list):
                for item in child:
                    walk(item)
            elif isinstance(child, ft.Control):
                walk(child)

    walk(control)
    return found


def test_error_throttle_collapses_repeats(page):
    now = [0.0]
    throttle = ErrorThrottle(page, clock=lambda: now[0])
    event = type("Evt", (), {"data": "layout overflow"})()

    throttle(event)
    page.snack_bar = None
    for _ in range(5):
        now[0] += 0.1
        throttle(event)

    assert page.snack_bar is None
    assert throttle.suppressed == 5

    now[0] += 1.0
    throttle(event)
    assert page.snack_message == "UI error: layout overflow"
    assert throttle.suppressed == 0


def test_settings_password_dialog_shows_server_errors_inline(ctx, api, page):
    api.on(
        "PUT",
        "/profile/password",
        {"message": "The given data was invalid", "errors": {"current_password": ["The current password is incorrect"]}},
        status=422,
    )
    view = ROUTE_BUILDERS["/settings"](ctx, page)
    view.data.change_password()
    dialog = page.dialog
    current, new, confirm = dialog.content.content.controls[:3]

    for field, value in ((current, "wrong"), (new, "new-secret-1"), (confirm, "new-secret-1")):
        field.value = value
        field.on_change(type("Evt", (), {"control": field})())
    dialog.actions[1].on_click(None)

    assert dialog.open
    assert current.error_text == "The current password is incorrect"
    assert page.snack_message == "The given data was invalid"


def test_settings_password_mismatch_is_caught_before_sending(ctx, api, page):
    view = ROUTE_BUILDERS["/settings"](ctx, page)
    view.data.change_password()
    dialog = page.dialog
    current, new, confirm = dialog.content.content.controls[:3]

    for field, value in ((current, "old-secret"), (new, "new-secret-1"), (confirm, "new-secret-2")):
        field.value = value
        field.on_change(type("Evt", (), {"control": field})())
    dialog.actions[1].on_click(None)

    assert dialog.open
    assert confirm.error_text == "Passwords do not match"
    assert api.calls("PUT", "/profile/password") == []
