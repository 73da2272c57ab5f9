"""App bar, navigation rail and the shell every signed-in view sits in."""

from __future__ import annotations

from typing import TYPE_CHECKING, List

import flet as ft

if TYPE_CHECKING:
    from ..context import AppContext

from .. import controllers
from ..navigation_helpers import NAVIGATION_DESTINATIONS, index_for_route


def build_app_bar(ctx: AppContext, title: str, page: ft.Page) -> ft.AppBar:
    """Title plus refresh, theme toggle and the signed-in user."""

    user = ctx.current_user
    actions: List[ft.Control] = [
        ft.IconButton(ft.Icons.REFRESH, tooltip="Reload this page", on_click=lambda _: controllers.refresh(page)),
        ft.IconButton(
            ft.Icons.LIGHT_MODE if ctx.theme_mode == ft.ThemeMode.DARK else ft.Icons.DARK_MODE_OUTLINED,
            tooltip="Toggle theme",
            on_click=lambda _: controllers.toggle_theme(ctx, page),
        ),
    ]
    if user is not None:
        actions.append(
            ft.Container(
                ft.Chip(label=ft.Text(user.name or user.email), leading=ft.Icon(ft.Icons.PERSON)),
                tooltip=ctx.config.API_BASE_URL,
                padding=ft.padding.only(right=12),
            )
        )
    return ft.AppBar(
        title=ft.Text(title, size=20, weight=ft.FontWeight.BOLD),
        bgcolor=ft.Colors.SURFACE_CONTAINER_HIGHEST,
        actions=actions,
    )


def build_navigation_rail(ctx: AppContext, page: ft.Page, current_route: str) -> ft.NavigationRail:
    """Extended rail over every resource; sign-out sits at the bottom."""

    trailing = None
    if ctx.is_authenticated:
        trailing = ft.TextButton("Sign out", icon=ft.Icons.LOGOUT, on_click=lambda _: controllers.logout(ctx, page))
    return ft.NavigationRail(
        selected_index=index_for_route(current_route),
        extended=True,
        min_extended_width=190,
        leading=ft.Container(
            ft.Row([ft.Icon(ft.Icons.ACCOUNT_BALANCE_WALLET, color=ft.Colors.PRIMARY), ft.Text("Ledgr", size=18)]),
            padding=ft.padding.symmetric(vertical=12),
        ),
        destinations=[
            ft.NavigationRailDestination(icon=dest.icon, selected_icon=dest.selected_icon, label=dest.label)
            for dest in NAVIGATION_DESTINATIONS
        ],
        trailing=trailing,
        on_change=lambda e: controllers.handle_nav_selection(page, e.control.selected_index),
    )


def build_main_layout(
    ctx: AppContext,
    page: ft.Page,
    current_route: str,
    content: ft.Control,
) -> List[ft.Control]:
    """Rail on the left, padded ``content`` filling the rest."""

    return [
        ft.Row(
            [
                build_navigation_rail(ctx, page, current_route),
                ft.VerticalDivider(width=1),
                ft.Container(content, expand=True, padding=20),
            ],
            spacing=0,
            expand=True,
        )
    ]
