"""Recurring transactions (subscriptions and bills) view."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

import flet as ft

from ...api.errors import ApiError
from ...logging_config import get_logger
from ...models.base import to_decimal
from ...services.aggregates import Totals, active_counts, monthly_recurring_cost
from ...services.fetcher import ListState
from ...services.forms import RecurringForm
from ..components import (
    FieldSpec,
    FormDialog,
    ListPage,
    build_card,
    confirm_step,
    empty_state,
    format_money,
    row_actions,
    status_chip,
)
from ..constants import ACTIVE_OPTIONS, FREQUENCY_OPTIONS
from . import common

if TYPE_CHECKING:
    from ..context import AppContext

logger = get_logger(__name__)

ROUTE = "/recurring"
UPCOMING_DAYS = 7


def build_recurring_view(ctx: AppContext, page: ft.Page) -> ft.View:
    """Build the recurring transactions view."""

    currency = ctx.currency
    controller = common.list_controller(
        ctx,
        page,
        path=ROUTE,
        repository=ctx.recurring_repo,
        form_cls=RecurringForm,
        noun="Subscription",
        filter_keys=("search", "category_id", "is_active", "page"),
    )

    categories = common.category_options(ctx, page, "expense")
    FormDialog(
        page,
        controller.form,
        [
            FieldSpec("name", "Name"),
            FieldSpec("amount", f"Amount ({currency})", "number"),
            FieldSpec("frequency", "Frequency", "select", FREQUENCY_OPTIONS),
            FieldSpec("start_date", "Start date", "date"),
            FieldSpec("end_date", "End date (optional)", "date"),
            FieldSpec("category_id", "Category", "select", categories),
            FieldSpec("funding", "Paid from", "select", common.funding_options(ctx, page, RecurringForm.FUNDING_KINDS)),
            FieldSpec("description", "Description", "multiline"),
            FieldSpec("notify_3_days_before", "Remind me 3 days before", "switch"),
        ],
        title_create="Add subscription",
        title_edit="Edit subscription",
        on_submit=controller.submit_form,
    )
    confirm = confirm_step(page, "Delete subscription", "Delete this recurring transaction?")
    upcoming_column = ft.Column(spacing=6)

    def load_upcoming() -> None:
        try:
            upcoming = ctx.recurring_repo.upcoming(UPCOMING_DAYS)
        except ApiError as exc:
            logger.warning("Upcoming subscriptions unavailable", extra={"status": exc.status_code})
            upcoming = []
        if not upcoming:
            upcoming_column.controls = [empty_state(f"Nothing due in the next {UPCOMING_DAYS} days")]
            return
        upcoming_column.controls = [
            ft.ListTile(
                leading=ft.Icon(ft.Icons.EVENT),
                title=ft.Text(item.name),
                subtitle=ft.Text(item.next_due_date.isoformat() if item.next_due_date else "-"),
                trailing=ft.Text(format_money(item.amount, currency), weight=ft.FontWeight.BOLD),
            )
            for item in upcoming
        ]

    def authoritative_cost() -> Optional[object]:
        try:
            return ctx.reports_repo.financial_report().budgets_recurring.monthly_recurring_cost
        except ApiError as exc:
            logger.warning("Report totals unavailable", extra={"status": exc.status_code})
            return None

    server_cost = authoritative_cost()

    def toggle(item) -> None:
        verb = "Paused" if item.is_active else "Resumed"
        controller.run_action(
            f"Toggle subscription {item.id}",
            lambda: ctx.recurring_repo.toggle(item.id),
            success_message=f"{verb} {item.name}",
        )
        load_upcoming()

    def recurring_row(item) -> list[ft.Control]:
        return [
            ft.Text(item.name, weight=ft.FontWeight.W_500),
            ft.Text(format_money(item.amount, currency)),
            ft.Text(item.frequency.title()),
            ft.Text(item.next_due_date.isoformat() if item.next_due_date else "-"),
            status_chip("Active", ft.Colors.GREEN) if item.is_active else status_chip("Paused", ft.Colors.GREY),
            ft.Row(
                [
                    ft.IconButton(
                        icon=ft.Icons.PAUSE if item.is_active else ft.Icons.PLAY_ARROW,
                        tooltip="Pause" if item.is_active else "Resume",
                        on_click=lambda _, i=item: toggle(i),
                    ),
                    row_actions(
                        lambda i=item: controller.request_edit(i),
                        lambda i=item: controller.request_delete(i, confirm),
                    ),
                ],
                spacing=0,
            ),
        ]

    def summary(state: ListState) -> list[ft.Control]:
        counts = active_counts(state.items)
        page_cost = monthly_recurring_cost(state.items)
        totals = Totals(page_local=page_cost, authoritative=to_decimal(server_cost) if server_cost is not None else None)
        controls = [
            common.summary_text("Active", str(counts["active"]), hint="on this page"),
            common.summary_text("Paused", str(counts["inactive"]), hint="on this page"),
            common.summary_text("Monthly cost (page)", format_money(totals.page_local, currency)),
        ]
        if totals.has_authoritative:
            controls.append(
                common.summary_text(
                    "Monthly cost (all)", format_money(totals.authoritative, currency), hint="Reported by the server"
                )
            )
        return controls

    category_filter = common.filter_dropdown(controller, "category_id", "Category", categories)
    status_filter = common.filter_dropdown(controller, "is_active", "Status", ACTIVE_OPTIONS)
    filter_inputs = {"category_id": category_filter, "is_active": status_filter}
    list_page = ListPage(
        page,
        controller,
        columns=["Name", "Amount", "Frequency", "Next due", "Status", "Actions"],
        row_builder=recurring_row,
        noun_plural="subscriptions",
        filter_controls=list(filter_inputs.values()),
        summary_builder=summary,
        on_filters=lambda: common.sync_filter_inputs(controller, filter_inputs),
    )

    load_upcoming()
    header = common.page_header(
        "Recurring",
        [ft.FilledButton("Add subscription", icon=ft.Icons.ADD, on_click=lambda _: controller.form.open_create())],
    )
    content = ft.Column(
        [header, list_page.build(), build_card(f"Due in the next {UPCOMING_DAYS} days", upcoming_column)],
        spacing=16,
    )
    view = common.wrap_view(ctx, page, ROUTE, "Recurring", content, data=list_page)
    list_page.on_route(page.route)
    return view
