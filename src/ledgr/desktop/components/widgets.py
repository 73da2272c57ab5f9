"""Reusable widget components for the desktop app."""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Optional

import flet as ft

from ...models.base import to_decimal

MUTED = ft.Colors.ON_SURFACE_VARIANT


def format_money(amount: Any, currency: str = "LKR") -> str:
    value = to_decimal(amount)
    return f"{currency} {value:,.2f}"


def build_card(
    title: str,
    content: ft.Control,
    actions: Optional[list[ft.Control]] = None,
) -> ft.Card:
    """Titled card; ``actions`` sit at the right of the title row."""

    title_row = ft.Row(
        [ft.Text(title, size=16, weight=ft.FontWeight.BOLD, expand=True), *(actions or [])],
        vertical_alignment=ft.CrossAxisAlignment.CENTER,
    )
    return ft.Card(
        content=ft.Container(
            ft.Column([title_row, ft.Divider(height=1), content], spacing=12),
            padding=16,
        ),
        elevation=1,
    )


def build_stat_card(
    label: str,
    value: str,
    icon: Optional[str] = None,
    color: Optional[str] = None,
    subtitle: Optional[str] = None,
) -> ft.Card:
    """Single figure with its label, e.g. a dashboard total."""

    lines: list[ft.Control] = [
        ft.Text(label, size=13, color=MUTED),
        ft.Text(value, size=22, weight=ft.FontWeight.BOLD, color=color),
    ]
    if subtitle:
        lines.append(ft.Text(subtitle, size=12, color=MUTED))
    body: ft.Control = ft.Column(lines, spacing=2, tight=True)
    if icon:
        body = ft.Row([ft.Icon(icon, size=32, color=color or ft.Colors.PRIMARY), body], spacing=12)
    return ft.Card(content=ft.Container(body, padding=16), elevation=1)


def _usage_color(ratio: Decimal) -> str:
    if ratio > 1:
        return ft.Colors.ERROR
    if ratio >= Decimal("0.9"):
        return ft.Colors.AMBER
    return ft.Colors.PRIMARY


def build_progress_bar(
    current: Any,
    maximum: Any,
    label: Optional[str] = None,
    color: Optional[str] = None,
    currency: str = "LKR",
) -> ft.Column:
    """Spent-vs-limit bar. Past 90% it turns amber, past 100% red."""

    spent = to_decimal(current)
    limit = to_decimal(maximum)
    ratio = spent / limit if limit > 0 else Decimal("0")
    bar_color = color or _usage_color(ratio)

    caption = f"{format_money(spent, currency)} of {format_money(limit, currency)} ({ratio * 100:.1f}%)"
    controls: list[ft.Control] = []
    if label:
        controls.append(ft.Text(label, size=14))
    controls.extend(
        [
            ft.ProgressBar(
                value=float(min(max(ratio, Decimal("0")), Decimal("1"))),
                color=bar_color,
                bgcolor=ft.Colors.SURFACE_CONTAINER_HIGHEST,
                height=8,
            ),
            ft.Text(caption, size=12, color=bar_color if ratio > 1 else MUTED),
        ]
    )
    return ft.Column(controls, spacing=4)


def empty_state(message: str) -> ft.Container:
    return ft.Container(
        ft.Row(
            [ft.Icon(ft.Icons.INBOX, size=20, color=MUTED), ft.Text(message, color=MUTED)],
            alignment=ft.MainAxisAlignment.CENTER,
        ),
        padding=20,
    )


def status_chip(label: str, color: str) -> ft.Container:
    return ft.Container(
        content=ft.Text(label, size=12, color=color, weight=ft.FontWeight.W_500),
        padding=ft.padding.symmetric(horizontal=8, vertical=2),
        border=ft.border.all(1, color),
        border_radius=12,
    )
