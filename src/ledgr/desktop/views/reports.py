"""Reports view implementation."""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

import flet as ft

from .. import controllers
from ...api.errors import ApiError
from ...logging_config import get_logger
from ...models.reports import FinancialReport, NamedValue, ProgressRow
from ...services.aggregates import percentage
from ..charts import cashflow_trend_png, category_breakdown_png
from ..components import build_card, build_progress_bar, build_stat_card, empty_state, format_money
from . import common

if TYPE_CHECKING:
    from ..context import AppContext

logger = get_logger(__name__)


def _distribution(values: Iterable[NamedValue], currency: str) -> ft.Control:
    rows = list(values)
    total = sum(float(v.value) for v in rows)
    if not rows:
        return empty_state("Nothing to show")
    return ft.Column(
        [
            ft.Row(
                [
                    ft.Container(width=12, height=12, border_radius=6, bgcolor=v.fill or ft.Colors.PRIMARY),
                    ft.Text(v.name, expand=True),
                    ft.Text(f"{format_money(v.value, currency)} ({percentage(v.value, total):.0f}%)"),
                ],
                spacing=8,
            )
            for v in rows
        ],
        spacing=6,
    )


def _progress(rows: Iterable[ProgressRow], currency: str, empty: str) -> ft.Control:
    items = list(rows)
    if not items:
        return empty_state(empty)
    return ft.Column(
        [build_progress_bar(row.paid, row.total, row.name, ft.Colors.GREEN, currency) for row in items],
        spacing=12,
    )


def build_reports_view(ctx: AppContext, page: ft.Page) -> ft.View:
    """Build the reports view from ``/reports`` and the category breakdown."""

    currency = ctx.currency
    try:
        report = ctx.reports_repo.financial_report()
        slices = ctx.reports_repo.expenses_by_category()
    except ApiError as exc:
        logger.warning("Reports unavailable", extra={"status": exc.status_code})
        controllers.notify(page, exc.message, True)
        report, slices = FinancialReport(), []

    overview = report.overview
    budgets = report.budgets_recurring
    debts = report.debts_assets

    adherence = (
        ft.Column(
            [
                build_progress_bar(b.spent, b.limit, b.category, None, currency)
                for b in budgets.budget_adherence
            ],
            spacing=12,
        )
        if budgets.budget_adherence
        else empty_state("No budgets this month")
    )

    content = ft.Column(
        [
            common.page_header("Reports"),
            ft.ResponsiveRow(
                [
                    ft.Container(
                        build_stat_card("Net worth", format_money(overview.net_worth, currency), ft.Icons.SAVINGS),
                        col={"sm": 12, "md": 4},
                    ),
                    ft.Container(
                        build_stat_card(
                            "Total assets", format_money(overview.total_assets, currency), ft.Icons.TRENDING_UP, ft.Colors.GREEN
                        ),
                        col={"sm": 12, "md": 4},
                    ),
                    ft.Container(
                        build_stat_card(
                            "Total liabilities",
                            format_money(overview.total_liabilities, currency),
                            ft.Icons.TRENDING_DOWN,
                            ft.Colors.RED,
                        ),
                        col={"sm": 12, "md": 4},
                    ),
                ],
                spacing=12,
            ),
            ft.ResponsiveRow(
                [
                    ft.Container(
                        build_card(
                            "Cash flow",
                            ft.Image(src=str(cashflow_trend_png(overview.cash_flow, currency)), fit=ft.ImageFit.CONTAIN),
                        ),
                        col={"sm": 12, "lg": 6},
                    ),
                    ft.Container(
                        build_card(
                            "Expenses by category",
                            ft.Image(src=str(category_breakdown_png(slices, currency)), fit=ft.ImageFit.CONTAIN),
                        ),
                        col={"sm": 12, "lg": 6},
                    ),
                ],
                spacing=12,
            ),
            ft.ResponsiveRow(
                [
                    ft.Container(build_card("Liquidity mix", _distribution(overview.liquidity_mix, currency)), col={"sm": 12, "lg": 4}),
                    ft.Container(build_card("Debt distribution", _distribution(debts.debt_distribution, currency)), col={"sm": 12, "lg": 4}),
                    ft.Container(build_card("Assets vs debts", _distribution(debts.asset_ratio, currency)), col={"sm": 12, "lg": 4}),
                ],
                spacing=12,
            ),
            ft.ResponsiveRow(
                [
                    ft.Container(
                        build_card(
                            f"Budget adherence (recurring: {format_money(budgets.monthly_recurring_cost, currency)}/month)",
                            adherence,
                        ),
                        col={"sm": 12, "lg": 4},
                    ),
                    ft.Container(
                        build_card("Loan payoff", _progress(debts.loan_progress, currency, "No loans")),
                        col={"sm": 12, "lg": 4},
                    ),
                    ft.Container(
                        build_card("Installment payoff", _progress(debts.installment_progress, currency, "No installments")),
                        col={"sm": 12, "lg": 4},
                    ),
                ],
                spacing=12,
            ),
        ],
        spacing=16,
    )
    return common.wrap_view(ctx, page, "/reports", "Reports", content)
