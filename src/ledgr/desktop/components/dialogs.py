"""Dialog components for the desktop app."""

from __future__ import annotations

from typing import Callable, Optional

import flet as ft


def safe_open_dialog(page: ft.Page, dialog: ft.AlertDialog) -> None:
    """Open a dialog and best-effort refresh without raising when detached."""
    page.dialog = dialog
    dialog.open = True
    try:
        page.update()
    except AssertionError:
        # Headless/preview contexts may not attach the dialog to a live page
        pass


def close_dialog(page: ft.Page, dialog: ft.AlertDialog) -> None:
    dialog.open = False
    try:
        page.update()
    except AssertionError:
        pass


def show_error_dialog(page: ft.Page, title: str, message: str) -> None:
    """Show an error dialog."""

    dialog = ft.AlertDialog(
        modal=True,
        title=ft.Text(title),
        content=ft.Text(message),
        actions=[
            ft.TextButton("OK", on_click=lambda _: close_dialog(page, dialog)),
        ],
    )
    safe_open_dialog(page, dialog)


def show_confirm_dialog(
    page: ft.Page,
    title: str,
    message: str,
    on_confirm: Callable[[], None],
    on_cancel: Optional[Callable[[], None]] = None,
    *,
    confirm_label: str = "Delete",
) -> ft.AlertDialog:
    """Show a confirmation dialog; ``on_confirm`` runs only on the confirm button."""

    def handle_confirm(_e):
        close_dialog(page, dialog)
        on_confirm()

    def handle_cancel(_e):
        close_dialog(page, dialog)
        if on_cancel:
            on_cancel()

    dialog = ft.AlertDialog(
        modal=True,
        title=ft.Text(title),
        content=ft.Text(message),
        actions=[
            ft.TextButton("Cancel", on_click=handle_cancel),
            ft.FilledButton(
                confirm_label,
                on_click=handle_confirm,
                style=ft.ButtonStyle(bgcolor=ft.Colors.ERROR, color=ft.Colors.ON_ERROR),
            ),
        ],
    )
    safe_open_dialog(page, dialog)
    return dialog


def confirm_step(page: ft.Page, title: str, message: str) -> Callable[[Callable[[], None]], None]:
    """Adapt :func:`show_confirm_dialog` to the mutation coordinator's confirm hook."""

    def _confirm(proceed: Callable[[], None]) -> None:
        show_confirm_dialog(page, title, message, on_confirm=proceed)

    return _confirm
