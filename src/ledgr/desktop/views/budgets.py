"""Budgets view implementation."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING, Optional

import flet as ft

from ...api.errors import ApiError
from ...logging_config import get_logger
from ...models.budget import BudgetOverview
from ...services.aggregates import Totals
from ...services.fetcher import ListState
from ...services.forms import BudgetForm
from ..components import FieldSpec, FormDialog, ListPage, build_progress_bar, confirm_step, format_money, row_actions
from ..constants import MONTH_OPTIONS, year_options
from . import common

if TYPE_CHECKING:
    from ..context import AppContext

logger = get_logger(__name__)

ROUTE = "/budgets"


def build_budgets_view(ctx: AppContext, page: ft.Page) -> ft.View:
    """Build the budgets view for one month (``?month=&year=``)."""

    currency = ctx.currency
    today = date.today()
    controller = common.list_controller(
        ctx,
        page,
        path=ROUTE,
        repository=ctx.budget_repo,
        form_cls=BudgetForm,
        noun="Budget",
        filter_keys=("month", "year", "page"),
    )
    FormDialog(
        page,
        controller.form,
        [
            FieldSpec("category_id", "Category", "select", common.category_options(ctx, page, "expense")),
            FieldSpec("amount", f"Limit ({currency})", "number"),
            FieldSpec("month", "Month", "select", MONTH_OPTIONS),
            FieldSpec("year", "Year", "number"),
            FieldSpec("rollover_enabled", "Roll unused budget into next month", "switch"),
            FieldSpec("alert_at_90_percent", "Warn at 90%", "switch"),
        ],
        title_create="Add budget",
        title_edit="Edit budget",
        on_submit=controller.submit_form,
    )
    confirm = confirm_step(page, "Delete budget", "Delete this budget?")
    warnings_column = ft.Column(spacing=4)

    def selected_period() -> tuple[int, int]:
        filters = controller.filters
        try:
            return int(filters.get("month") or today.month), int(filters.get("year") or today.year)
        except ValueError:
            return today.month, today.year

    def overview() -> Optional[BudgetOverview]:
        try:
            return ctx.budget_repo.overview(*selected_period())
        except ApiError as exc:
            logger.warning("Budget overview unavailable", extra={"status": exc.status_code})
            return None

    def budget_row(budget) -> list[ft.Control]:
        name = budget.category.name if budget.category else "Uncategorized"
        return [
            ft.Text(name, weight=ft.FontWeight.W_500),
            ft.Container(build_progress_bar(budget.spent, budget.limit, currency=currency), width=320),
            ft.Text(
                format_money(budget.remaining, currency),
                color=ft.Colors.ERROR if budget.is_exceeded else None,
            ),
            ft.Text(format_money(budget.rollover_amount, currency) if budget.rollover_enabled else "-"),
            row_actions(
                lambda b=budget: controller.request_edit(b),
                lambda b=budget: controller.request_delete(b, confirm),
            ),
        ]

    def summary(state: ListState) -> list[ft.Control]:
        server = overview()
        budgeted = Totals.of(state.items, "amount", server.total_budgeted if server else None)
        spent = Totals.of(state.items, "spent", server.total_spent if server else None)
        warnings_column.controls = [
            ft.Text(f"{w.category_name}: {w.message}", color=ft.Colors.AMBER_800)
            for w in (server.warnings if server else [])
        ]
        controls = [
            common.summary_text("Budgeted (page)", format_money(budgeted.page_local, currency)),
            common.summary_text("Spent (page)", format_money(spent.page_local, currency)),
        ]
        if server is not None:
            controls.extend(
                [
                    common.summary_text("Budgeted (month)", format_money(budgeted.authoritative, currency)),
                    common.summary_text("Spent (month)", format_money(spent.authoritative, currency)),
                    common.summary_text(
                        "Remaining (month)",
                        format_money(server.total_remaining, currency),
                        hint=f"{server.percentage_used:.0f}% used",
                    ),
                ]
            )
        return controls

    month_filter = common.filter_dropdown(controller, "month", "Month", MONTH_OPTIONS, include_all=False)
    year_filter = common.filter_dropdown(
        controller, "year", "Year", year_options(today.year), include_all=False, width=120
    )

    def sync_period() -> None:
        month, year = selected_period()
        month_filter.value = str(month)
        year_filter.value = str(year)

    list_page = ListPage(
        page,
        controller,
        columns=["Category", "Progress", "Remaining", "Rollover", "Actions"],
        row_builder=budget_row,
        noun_plural="budgets",
        searchable=False,
        filter_controls=[month_filter, year_filter],
        summary_builder=summary,
        on_filters=sync_period,
    )

    def add_budget(_e) -> None:
        month, year = selected_period()
        controller.form.open_create(month=month, year=year)

    header = common.page_header(
        "Budgets", [ft.FilledButton("Add budget", icon=ft.Icons.ADD, on_click=add_budget)]
    )
    content = ft.Column([header, warnings_column, list_page.build()], spacing=16)
    view = common.wrap_view(ctx, page, ROUTE, "Budgets", content, data=list_page)
    list_page.on_route(page.route)
    return view
