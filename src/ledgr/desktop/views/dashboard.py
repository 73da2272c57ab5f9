"""Dashboard view implementation."""

from __future__ import annotations

from typing import TYPE_CHECKING

import flet as ft

from .. import controllers
from ...api.errors import ApiError
from ...devtools import dev_log
from ...logging_config import get_logger
from ...models.reports import DashboardStats
from ..charts import cashflow_trend_png, category_breakdown_png
from ..components import build_card, build_stat_card, empty_state, format_money
from . import common

if TYPE_CHECKING:
    from ..context import AppContext

logger = get_logger(__name__)


def _recent_row(tx: dict, currency: str) -> ft.ListTile:
    is_income = tx.get("type") == "income"
    return ft.ListTile(
        leading=ft.Icon(
            ft.Icons.ARROW_DOWNWARD if is_income else ft.Icons.ARROW_UPWARD,
            color=ft.Colors.GREEN if is_income else ft.Colors.RED,
        ),
        title=ft.Text(tx.get("description") or tx.get("category") or "Transaction"),
        subtitle=ft.Text(str(tx.get("date") or "")),
        trailing=ft.Text(format_money(tx.get("amount"), currency), weight=ft.FontWeight.BOLD),
    )


def build_dashboard_view(ctx: AppContext, page: ft.Page) -> ft.View:
    """Build the dashboard from ``/dashboard/stats``."""

    currency = ctx.currency
    try:
        stats = ctx.reports_repo.dashboard_stats()
    except ApiError as exc:
        logger.warning("Dashboard unavailable", extra={"status": exc.status_code})
        dev_log(ctx.config, "Dashboard stats failed", exc=exc)
        controllers.notify(page, exc.message, True)
        stats = DashboardStats()

    net = stats.net_cash_flow
    stat_row = ft.ResponsiveRow(
        [
            ft.Container(
                build_stat_card("Net worth", format_money(stats.net_worth, currency), ft.Icons.SAVINGS),
                col={"sm": 12, "md": 6, "lg": 3},
            ),
            ft.Container(
                build_stat_card(
                    "Income this month",
                    format_money(stats.monthly_income, currency),
                    ft.Icons.TRENDING_UP,
                    ft.Colors.GREEN,
                ),
                col={"sm": 12, "md": 6, "lg": 3},
            ),
            ft.Container(
                build_stat_card(
                    "Expenses this month",
                    format_money(stats.monthly_expenses, currency),
                    ft.Icons.TRENDING_DOWN,
                    ft.Colors.RED,
                ),
                col={"sm": 12, "md": 6, "lg": 3},
            ),
            ft.Container(
                build_stat_card(
                    "Net cash flow",
                    format_money(net, currency),
                    ft.Icons.ACCOUNT_BALANCE,
                    ft.Colors.GREEN if net >= 0 else ft.Colors.RED,
                    subtitle=f"Loans outstanding: {format_money(stats.total_loan_balance, currency)}",
                ),
                col={"sm": 12, "md": 6, "lg": 3},
            ),
        ],
        spacing=12,
    )

    breakdown = ft.Image(src=str(category_breakdown_png(stats.category_breakdown, currency)), fit=ft.ImageFit.CONTAIN)
    trend = ft.Image(src=str(cashflow_trend_png(stats.monthly_trend, currency)), fit=ft.ImageFit.CONTAIN)

    bills = [
        ft.ListTile(
            leading=ft.Icon(ft.Icons.EVENT),
            title=ft.Text(bill.name),
            subtitle=ft.Text(bill.due_date.isoformat() if bill.due_date else "-"),
            trailing=ft.Text(format_money(bill.amount, currency)),
        )
        for bill in stats.upcoming_bills
    ]
    recent = [_recent_row(tx, currency) for tx in stats.recent_transactions if isinstance(tx, dict)]

    content = ft.Column(
        [
            common.page_header(f"Welcome back{', ' + ctx.current_user.name if ctx.current_user else ''}"),
            stat_row,
            ft.ResponsiveRow(
                [
                    ft.Container(build_card("Spending by category", breakdown), col={"sm": 12, "lg": 6}),
                    ft.Container(build_card("Cash flow", trend), col={"sm": 12, "lg": 6}),
                ],
                spacing=12,
            ),
            ft.ResponsiveRow(
                [
                    ft.Container(
                        build_card("Upcoming bills", ft.Column(bills or [empty_state("No upcoming bills")])),
                        col={"sm": 12, "lg": 6},
                    ),
                    ft.Container(
                        build_card(
                            "Recent transactions",
                            ft.Column(recent or [empty_state("No transactions yet")]),
                            actions=[ft.TextButton("View expenses", on_click=lambda _: controllers.navigate(page, "/expenses"))],
                        ),
                        col={"sm": 12, "lg": 6},
                    ),
                ],
                spacing=12,
            ),
        ],
        spacing=16,
    )
    return common.wrap_view(ctx, page, "/dashboard", "Dashboard", content)
