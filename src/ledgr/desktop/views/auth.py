"""Sign-in and registration views."""

from __future__ import annotations

from typing import TYPE_CHECKING

import flet as ft

from .. import controllers
from ...api.errors import ApiError
from ...devtools import dev_log
from ...services import auth

if TYPE_CHECKING:  # pragma: no cover
    from ..context import AppContext


def _auth_shell(route: str, subtitle: str, controls: list[ft.Control]) -> ft.View:
    return ft.View(
        route=route,
        controls=[
            ft.Container(
                content=ft.Column(
                    controls=[
                        ft.Container(
                            content=ft.Icon(ft.Icons.ACCOUNT_BALANCE_WALLET, size=64, color=ft.Colors.PRIMARY),
                            alignment=ft.alignment.center,
                        ),
                        ft.Text("Ledgr", size=32, weight=ft.FontWeight.BOLD, text_align=ft.TextAlign.CENTER),
                        ft.Text(
                            subtitle,
                            size=16,
                            color=ft.Colors.ON_SURFACE_VARIANT,
                            text_align=ft.TextAlign.CENTER,
                        ),
                        ft.Container(height=24),
                        *controls,
                    ],
                    horizontal_alignment=ft.CrossAxisAlignment.CENTER,
                    spacing=8,
                ),
                alignment=ft.alignment.center,
                expand=True,
            )
        ],
        padding=0,
    )


def _show_errors(exc: ApiError, fields: dict[str, ft.TextField], error_text: ft.Text) -> None:
    for name, field in fields.items():
        field.error_text = exc.field_error(name)
    error_text.value = exc.message
    error_text.visible = True


def build_login_view(ctx: AppContext, page: ft.Page) -> ft.View:
    """Build login view with email and password fields."""

    if ctx.is_authenticated:
        page.go("/dashboard")
        return ft.View(route="/login", controls=[ft.Container(ft.Text("Redirecting..."), padding=20)], padding=0)

    email_field = ft.TextField(label="Email", autofocus=True, width=300)
    password_field = ft.TextField(label="Password", password=True, can_reveal_password=True, width=300)
    error_text = ft.Text("", color=ft.Colors.ERROR, visible=False)
    submit = ft.FilledButton("Sign In", width=300)

    def do_login(_e):
        error_text.visible = False
        submit.disabled = True
        page.update()
        try:
            user = auth.login(ctx.client, ctx.session, email_field.value or "", password_field.value or "")
        except ApiError as exc:
            dev_log(ctx.config, "Login failed", context={"status": exc.status_code})
            _show_errors(exc, {"email": email_field, "password": password_field}, error_text)
            submit.disabled = False
            page.update()
            return
        controllers.notify(page, f"Welcome, {user.name if user else email_field.value}!")
        page.go("/dashboard")

    submit.on_click = do_login
    email_field.on_submit = lambda _: password_field.focus()
    password_field.on_submit = do_login

    return _auth_shell(
        "/login",
        "Sign in to continue",
        [
            email_field,
            password_field,
            error_text,
            ft.Container(height=16),
            submit,
            ft.TextButton("Create an account", on_click=lambda _: page.go("/register")),
        ],
    )


def build_register_view(ctx: AppContext, page: ft.Page) -> ft.View:
    """Build the registration view."""

    fields = {
        "name": ft.TextField(label="Name", autofocus=True, width=300),
        "email": ft.TextField(label="Email", width=300),
        "password": ft.TextField(label="Password", password=True, can_reveal_password=True, width=300),
        "password_confirmation": ft.TextField(
            label="Confirm password", password=True, can_reveal_password=True, width=300
        ),
    }
    error_text = ft.Text("", color=ft.Colors.ERROR, visible=False)
    submit = ft.FilledButton("Create account", width=300)

    def do_register(_e):
        error_text.visible = False
        submit.disabled = True
        page.update()
        try:
            auth.register(ctx.client, ctx.session, {name: field.value or "" for name, field in fields.items()})
        except ApiError as exc:
            _show_errors(exc, fields, error_text)
            submit.disabled = False
            page.update()
            return
        controllers.notify(page, "Account created")
        page.go("/dashboard")

    submit.on_click = do_register
    fields["password_confirmation"].on_submit = do_register

    return _auth_shell(
        "/register",
        "Create your account",
        [
            *fields.values(),
            error_text,
            ft.Container(height=16),
            submit,
            ft.TextButton("Already have an account? Sign in", on_click=lambda _: page.go("/login")),
        ],
    )
