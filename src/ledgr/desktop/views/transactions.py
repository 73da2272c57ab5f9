"""Expenses and income list views."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

import flet as ft

from .. import controllers
from ...api.errors import ApiError
from ...devtools import dev_log
from ...logging_config import get_logger
from ...services.aggregates import Totals
from ...services.export_csv import export_entries_csv
from ...services.forms import ExpenseForm, IncomeForm
from ...services.fetcher import ListState
from ..components import FieldSpec, FormDialog, ListPage, confirm_step, format_money, row_actions
from ..constants import INCOME_SOURCE_TYPE_OPTIONS, SOURCE_TYPE_OPTIONS
from . import common

if TYPE_CHECKING:
    from ..context import AppContext

logger = get_logger(__name__)


def _monthly_figure(ctx: AppContext, field: str) -> Optional[Any]:
    """This month's server total, or None when the dashboard is unavailable."""

    try:
        return getattr(ctx.reports_repo.dashboard_stats(), field)
    except ApiError as exc:
        logger.warning("Dashboard totals unavailable", extra={"status": exc.status_code})
        return None


def _build_entries_view(
    ctx: AppContext,
    page: ft.Page,
    *,
    route: str,
    title: str,
    noun: str,
    noun_plural: str,
    repository: Any,
    form_cls: type,
    category_type: str,
    source_type_options: list[tuple[str, str]],
    monthly_field: str,
    amount_color: str,
) -> ft.View:
    currency = ctx.currency
    controller = common.list_controller(
        ctx, page, path=route, repository=repository, form_cls=form_cls, noun=noun
    )

    categories = common.category_options(ctx, page, category_type)
    sources = common.funding_options(ctx, page, form_cls.FUNDING_KINDS)
    monthly_total = _monthly_figure(ctx, monthly_field)

    dialog = FormDialog(
        page,
        controller.form,
        [
            FieldSpec("amount", f"Amount ({currency})", "number"),
            FieldSpec("category_id", "Category", "select", categories),
            FieldSpec("date", "Date", "date"),
            FieldSpec("funding", "Paid from" if category_type == "expense" else "Received into", "select", sources),
            FieldSpec("description", "Description", "multiline"),
        ],
        title_create=f"Add {noun.lower()}",
        title_edit=f"Edit {noun.lower()}",
        on_submit=controller.submit_form,
    )

    confirm = confirm_step(page, f"Delete {noun.lower()}", f"Delete this {noun.lower()}? This cannot be undone.")

    def entry_row(entry) -> list[ft.Control]:
        funding = entry.funding
        source = f"{funding.kind.label}: {funding.name}" if funding else "-"
        return [
            ft.Text(entry.date.isoformat() if entry.date else "-"),
            ft.Text(entry.description or "-", max_lines=1, overflow=ft.TextOverflow.ELLIPSIS, width=220),
            ft.Text(entry.category_name),
            ft.Text(source),
            ft.Text(format_money(entry.amount, currency), color=amount_color, weight=ft.FontWeight.W_500),
            row_actions(
                lambda e=entry: controller.request_edit(e),
                lambda e=entry: controller.request_delete(e, confirm),
            ),
        ]

    def summary(state: ListState) -> list[ft.Control]:
        totals = Totals.of(state.items, "amount", monthly_total)
        controls = [
            common.summary_text(
                "On this page",
                format_money(totals.page_local, currency),
                hint=f"{len(state.items)} of {state.meta.total} {noun_plural}",
            )
        ]
        if totals.has_authoritative:
            controls.append(
                common.summary_text(
                    "This month (all)",
                    format_money(totals.authoritative, currency),
                    hint="Reported by the server",
                )
            )
        return controls

    category_filter = common.filter_dropdown(controller, "category_id", "Category", categories)
    source_filter = common.filter_dropdown(controller, "source_type", "Source", source_type_options)
    start_filter = common.date_filter(controller, "start_date", "From")
    end_filter = common.date_filter(controller, "end_date", "To")
    filter_inputs = {
        "category_id": category_filter,
        "source_type": source_filter,
        "start_date": start_filter,
        "end_date": end_filter,
    }

    list_page = ListPage(
        page,
        controller,
        columns=["Date", "Description", "Category", "Source", "Amount", "Actions"],
        row_builder=entry_row,
        noun_plural=noun_plural,
        filter_controls=list(filter_inputs.values()),
        summary_builder=summary,
        on_filters=lambda: common.sync_filter_inputs(controller, filter_inputs),
    )

    def export_page(_e) -> None:
        stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        target = Path(ctx.config.DATA_DIR) / "exports" / f"{noun_plural}_{stamp}.csv"
        try:
            path = export_entries_csv(entries=controller.items, output_path=target)
        except OSError as exc:
            dev_log(ctx.config, "CSV export failed", exc=exc, context={"path": target})
            controllers.notify(page, f"Export failed: {exc}", True)
            return
        logger.info("Exported %s", noun_plural, extra={"rows": len(controller.items), "path": str(path)})
        controllers.notify(page, f"Exported {len(controller.items)} {noun_plural} to {path}")

    header = common.page_header(
        title,
        [
            ft.OutlinedButton("Export CSV", icon=ft.Icons.DOWNLOAD, on_click=export_page),
            ft.FilledButton(f"Add {noun.lower()}", icon=ft.Icons.ADD, on_click=lambda _: controller.form.open_create()),
        ],
    )

    content = ft.Column([header, list_page.build()], spacing=16)
    view = common.wrap_view(ctx, page, route, title, content, data=list_page)
    list_page.on_route(page.route)
    return view


def build_expenses_view(ctx: AppContext, page: ft.Page) -> ft.View:
    """Build the expenses view."""

    return _build_entries_view(
        ctx,
        page,
        route="/expenses",
        title="Expenses",
        noun="Expense",
        noun_plural="expenses",
        repository=ctx.expense_repo,
        form_cls=ExpenseForm,
        category_type="expense",
        source_type_options=SOURCE_TYPE_OPTIONS,
        monthly_field="monthly_expenses",
        amount_color=ft.Colors.RED,
    )


def build_income_view(ctx: AppContext, page: ft.Page) -> ft.View:
    """Build the income view."""

    return _build_entries_view(
        ctx,
        page,
        route="/income",
        title="Income",
        noun="Income",
        noun_plural="incomes",
        repository=ctx.income_repo,
        form_cls=IncomeForm,
        category_type="income",
        source_type_options=INCOME_SOURCE_TYPE_OPTIONS,
        monthly_field="monthly_income",
        amount_color=ft.Colors.GREEN,
    )

