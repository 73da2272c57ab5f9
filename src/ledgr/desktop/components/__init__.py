"""Reusable UI components for the desktop app."""

from .dialogs import confirm_step, safe_open_dialog, show_confirm_dialog, show_error_dialog
from .form_dialog import FieldSpec, FormDialog
from .layout import build_app_bar, build_main_layout, build_navigation_rail
from .list_page import ListPage, row_actions
from .widgets import (
    build_card,
    build_progress_bar,
    build_stat_card,
    empty_state,
    format_money,
    status_chip,
)

__all__ = [
    "FieldSpec",
    "FormDialog",
    "ListPage",
    "build_app_bar",
    "build_card",
    "build_main_layout",
    "build_navigation_rail",
    "build_progress_bar",
    "build_stat_card",
    "confirm_step",
    "empty_state",
    "format_money",
    "row_actions",
    "safe_open_dialog",
    "show_confirm_dialog",
    "show_error_dialog",
    "status_chip",
]
