"""Settings view implementation."""

from __future__ import annotations

from typing import TYPE_CHECKING

import flet as ft

from .. import controllers
from ...logging_config import session_log_path
from ...services.profile import ProfileController
from ..components import FieldSpec, FormDialog, build_card
from . import common

if TYPE_CHECKING:
    from ..context import AppContext


def _info_value(value: str) -> ft.Text:
    return ft.Text(value, selectable=True, color=ft.Colors.ON_SURFACE_VARIANT)


def _info_row(label: str, value: ft.Text) -> ft.Row:
    return ft.Row([ft.Text(label, weight=ft.FontWeight.W_500, width=180), value])


def build_settings_view(ctx: AppContext, page: ft.Page) -> ft.View:
    """Build the settings view: appearance, account and connection details."""

    def on_theme(_e):
        mode = controllers.toggle_theme(ctx, page)
        theme_switch.value = mode == ft.ThemeMode.DARK
        page.update()

    theme_switch = ft.Switch(
        label="Dark mode",
        value=ctx.theme_mode == ft.ThemeMode.DARK,
        on_change=on_theme,
    )

    profile = ProfileController(
        ctx.profile_repo, ctx.session, notify=lambda message, error: controllers.notify(page, message, error)
    )
    FormDialog(
        page,
        profile.info_form,
        [FieldSpec("name", "Full name"), FieldSpec("email", "Email address")],
        title_create="Edit profile",
        title_edit="Edit profile",
        on_submit=lambda: save_info(),
    )
    FormDialog(
        page,
        profile.password_form,
        [
            FieldSpec("current_password", "Current password", "password"),
            FieldSpec("password", "New password", "password", hint="At least 8 characters"),
            FieldSpec("password_confirmation", "Confirm new password", "password"),
        ],
        title_create="Change password",
        title_edit="Change password",
        on_submit=profile.submit_password,
    )

    name_text = _info_value("")
    email_text = _info_value("")

    def show_user() -> None:
        user = ctx.current_user
        name_text.value = user.name if user and user.name else "-"
        email_text.value = user.email if user and user.email else "-"

    def save_info() -> None:
        result = profile.submit_info()
        if result is not None and result.ok:
            show_user()
            page.update()

    show_user()
    account = ft.Column(
        [
            _info_row("Name", name_text),
            _info_row("Email", email_text),
            _info_row("Currency", _info_value(ctx.currency)),
        ],
        spacing=8,
    )
    log_path = session_log_path()
    connection = ft.Column(
        [
            _info_row("API", _info_value(ctx.config.API_BASE_URL)),
            _info_row("Page size", _info_value(str(ctx.config.PER_PAGE))),
            _info_row("Search delay", _info_value(f"{ctx.config.SEARCH_DEBOUNCE_MS} ms")),
            _info_row("Data directory", _info_value(str(ctx.config.DATA_DIR))),
            _info_row("Session log", _info_value(str(log_path) if log_path else "-")),
            _info_row("Mode", _info_value("Development" if ctx.dev_mode else "Production")),
        ],
        spacing=8,
    )

    content = ft.Column(
        [
            common.page_header("Settings"),
            build_card("Appearance", theme_switch),
            build_card(
                "Account",
                account,
                actions=[
                    ft.TextButton("Edit profile", icon=ft.Icons.EDIT, on_click=lambda _: profile.edit_info()),
                    ft.TextButton(
                        "Change password", icon=ft.Icons.LOCK_RESET, on_click=lambda _: profile.change_password()
                    ),
                    ft.OutlinedButton(
                        "Sign out", icon=ft.Icons.LOGOUT, on_click=lambda _: controllers.logout(ctx, page)
                    ),
                ],
            ),
            build_card("Connection", connection),
        ],
        spacing=16,
    )
    return common.wrap_view(ctx, page, "/settings", "Settings", content, data=profile)
