"""Loans view implementation."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

import flet as ft

from .. import controllers
from ...api.errors import ApiError
from ...logging_config import get_logger
from ...models.loan import Loan, LoanStats
from ...services.aggregates import Totals, average_balance
from ...services.fetcher import ListState
from ...services.forms import LoanForm, LoanRepaymentForm
from ..components import (
    FieldSpec,
    FormDialog,
    ListPage,
    build_progress_bar,
    confirm_step,
    format_money,
    row_actions,
    safe_open_dialog,
    status_chip,
)
from ..components.dialogs import close_dialog
from ..constants import LOAN_STATUS_OPTIONS
from . import common

if TYPE_CHECKING:
    from ..context import AppContext

logger = get_logger(__name__)

ROUTE = "/loans"
_STATUS_COLORS = {"paid": ft.Colors.GREEN, "partially_paid": ft.Colors.AMBER, "unpaid": ft.Colors.RED}


def build_loans_view(ctx: AppContext, page: ft.Page) -> ft.View:
    """Build the loans view with repayments."""

    currency = ctx.currency
    controller = common.list_controller(
        ctx,
        page,
        path=ROUTE,
        repository=ctx.loan_repo,
        form_cls=LoanForm,
        noun="Loan",
        filter_keys=("search", "status", "page"),
    )
    FormDialog(
        page,
        controller.form,
        [
            FieldSpec("lender_name", "Lender"),
            FieldSpec("amount", f"Amount ({currency})", "number"),
            FieldSpec("due_date", "Due date (optional)", "date"),
            FieldSpec("description", "Description", "multiline"),
        ],
        title_create="Add loan",
        title_edit="Edit loan",
        on_submit=controller.submit_form,
    )

    repaying: dict[str, Optional[Loan]] = {"loan": None}

    def _repay(payload: dict) -> object:
        loan = repaying["loan"]
        if loan is None:
            raise ApiError("Choose a loan to repay")
        return ctx.loan_repo.repay(loan.id, payload)

    repay_binding = controller.action_form(LoanRepaymentForm, "Repay loan", _repay, success_message="Repayment recorded")
    repay_dialog = FormDialog(
        page,
        repay_binding,
        [
            FieldSpec("amount", f"Amount ({currency})", "number"),
            FieldSpec("category_id", "Category", "select", common.category_options(ctx, page, "expense")),
            FieldSpec("date", "Date", "date"),
            FieldSpec(
                "funding", "Paid from", "select", common.funding_options(ctx, page, LoanRepaymentForm.FUNDING_KINDS)
            ),
            FieldSpec("description", "Notes", "multiline"),
        ],
        title_create="Repay loan",
        title_edit="Repay loan",
        on_submit=repay_binding.submit,
    )
    confirm = confirm_step(page, "Delete loan", "Delete this loan and its repayment history?")

    def open_repay(loan: Loan) -> None:
        repaying["loan"] = loan
        repay_dialog.title_create = f"Repay {loan.lender_name}"
        repay_binding.open_create(amount=loan.balance_remaining)

    def show_history(loan: Loan) -> None:
        try:
            repayments = ctx.loan_repo.repayments(loan.id)
        except ApiError as exc:
            controllers.notify(page, exc.message, True)
            return
        rows = [
            ft.ListTile(
                title=ft.Text(format_money(r.amount, currency)),
                subtitle=ft.Text(r.notes or ""),
                trailing=ft.Text(r.date.isoformat() if r.date else "-"),
            )
            for r in repayments
        ] or [ft.Text("No repayments yet", color=ft.Colors.ON_SURFACE_VARIANT)]
        dialog = ft.AlertDialog(
            title=ft.Text(f"Repayments: {loan.lender_name}"),
            content=ft.Container(ft.Column(rows, tight=True, scroll=ft.ScrollMode.AUTO), width=420, height=320),
            actions=[ft.TextButton("Close", on_click=lambda _: close_dialog(page, dialog))],
        )
        safe_open_dialog(page, dialog)

    def loan_row(loan: Loan) -> list[ft.Control]:
        return [
            ft.Text(loan.lender_name, weight=ft.FontWeight.W_500),
            ft.Container(build_progress_bar(loan.paid_amount, loan.amount, currency=currency), width=280),
            ft.Text(format_money(loan.balance_remaining, currency)),
            ft.Text(loan.due_date.isoformat() if loan.due_date else "-"),
            status_chip(loan.status.replace("_", " ").title(), _STATUS_COLORS.get(loan.status, ft.Colors.GREY)),
            ft.Row(
                [
                    ft.IconButton(
                        icon=ft.Icons.PAYMENTS,
                        tooltip="Repay",
                        disabled=not loan.is_active,
                        on_click=lambda _, item=loan: open_repay(item),
                    ),
                    ft.IconButton(
                        icon=ft.Icons.HISTORY, tooltip="Repayments", on_click=lambda _, item=loan: show_history(item)
                    ),
                    row_actions(
                        lambda item=loan: controller.request_edit(item),
                        lambda item=loan: controller.request_delete(item, confirm),
                    ),
                ],
                spacing=0,
            ),
        ]

    def stats() -> Optional[LoanStats]:
        try:
            return ctx.loan_repo.stats()
        except ApiError as exc:
            logger.warning("Loan stats unavailable", extra={"status": exc.status_code})
            return None

    def summary(state: ListState) -> list[ft.Control]:
        server = stats()
        remaining = Totals.of(state.items, "balance_remaining", server.total_remaining if server else None)
        controls = [
            common.summary_text("Remaining (page)", format_money(remaining.page_local, currency)),
            common.summary_text("Average balance (page)", format_money(average_balance(state.items), currency)),
        ]
        if server is not None:
            controls.extend(
                [
                    common.summary_text("Borrowed (all)", format_money(server.total_borrowed, currency)),
                    common.summary_text("Repaid (all)", format_money(server.total_paid, currency)),
                    common.summary_text(
                        "Remaining (all)",
                        format_money(remaining.authoritative, currency),
                        hint=f"{server.active_count} active, {server.paid_count} paid",
                    ),
                ]
            )
        return controls

    status_filter = common.filter_dropdown(controller, "status", "Status", LOAN_STATUS_OPTIONS)
    list_page = ListPage(
        page,
        controller,
        columns=["Lender", "Progress", "Remaining", "Due", "Status", "Actions"],
        row_builder=loan_row,
        noun_plural="loans",
        filter_controls=[status_filter],
        summary_builder=summary,
        on_filters=lambda: common.sync_filter_inputs(controller, {"status": status_filter}),
    )
    header = common.page_header(
        "Loans", [ft.FilledButton("Add loan", icon=ft.Icons.ADD, on_click=lambda _: controller.form.open_create())]
    )
    view = common.wrap_view(ctx, page, ROUTE, "Loans", ft.Column([header, list_page.build()], spacing=16), data=list_page)
    list_page.on_route(page.route)
    return view
