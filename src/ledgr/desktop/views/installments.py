"""Installment plans view."""

from __future__ import annotations

from typing import TYPE_CHECKING

import flet as ft

from ...services.aggregates import sum_amounts
from ...services.fetcher import ListState
from ...services.forms import InstallmentForm
from ..components import FieldSpec, FormDialog, ListPage, confirm_step, format_money, row_actions, status_chip
from ..constants import INSTALLMENT_STATUS_OPTIONS
from . import common

if TYPE_CHECKING:
    from ..context import AppContext

ROUTE = "/installments"


def build_installments_view(ctx: AppContext, page: ft.Page) -> ft.View:
    """Build the installments view."""

    currency = ctx.currency
    controller = common.list_controller(
        ctx,
        page,
        path=ROUTE,
        repository=ctx.installment_repo,
        form_cls=InstallmentForm,
        noun="Installment",
        filter_keys=("search", "status", "page"),
    )
    FormDialog(
        page,
        controller.form,
        [
            FieldSpec("item_name", "Item"),
            FieldSpec("total_amount", f"Total amount ({currency})", "number"),
            FieldSpec("monthly_amount", f"Monthly amount ({currency})", "number"),
            FieldSpec("total_months", "Total months", "number"),
            FieldSpec("paid_months", "Months already paid", "number"),
            FieldSpec("start_date", "Start date", "date"),
            FieldSpec("category_id", "Category", "select", common.category_options(ctx, page, "expense")),
            FieldSpec(
                "funding", "Paid from", "select", common.funding_options(ctx, page, InstallmentForm.FUNDING_KINDS)
            ),
        ],
        title_create="Add installment plan",
        title_edit="Edit installment plan",
        on_submit=controller.submit_form,
    )
    confirm = confirm_step(page, "Delete installment", "Delete this installment plan?")

    def pay_month(plan) -> None:
        controller.run_action(
            f"Pay installment {plan.id}",
            lambda: ctx.installment_repo.pay(plan.id, 1),
            success_message=f"Paid one month of {plan.item_name}",
        )

    def plan_row(plan) -> list[ft.Control]:
        return [
            ft.Text(plan.item_name, weight=ft.FontWeight.W_500),
            ft.Text(format_money(plan.monthly_amount, currency)),
            ft.Column(
                [
                    ft.Text(f"{plan.paid_months}/{plan.total_months} months"),
                    ft.ProgressBar(value=plan.progress_percent / 100, width=160, height=6),
                ],
                spacing=2,
            ),
            ft.Text(format_money(plan.remaining_amount, currency)),
            status_chip("Completed", ft.Colors.GREEN) if plan.is_completed else status_chip("Ongoing", ft.Colors.BLUE),
            ft.Row(
                [
                    ft.IconButton(
                        icon=ft.Icons.CHECK_CIRCLE_OUTLINE,
                        tooltip="Pay one month",
                        disabled=plan.is_completed,
                        on_click=lambda _, p=plan: pay_month(p),
                    ),
                    row_actions(
                        lambda p=plan: controller.request_edit(p),
                        lambda p=plan: controller.request_delete(p, confirm),
                    ),
                ],
                spacing=0,
            ),
        ]

    def summary(state: ListState) -> list[ft.Control]:
        ongoing = [plan for plan in state.items if not plan.is_completed]
        remaining = sum(plan.remaining_amount for plan in state.items)
        return [
            common.summary_text("Monthly commitment (page)", format_money(sum_amounts(ongoing, "monthly_amount"), currency)),
            common.summary_text("Still owed (page)", format_money(remaining, currency)),
            common.summary_text("Ongoing", f"{len(ongoing)} of {len(state.items)}", hint="on this page"),
        ]

    status_filter = common.filter_dropdown(controller, "status", "Status", INSTALLMENT_STATUS_OPTIONS)
    list_page = ListPage(
        page,
        controller,
        columns=["Item", "Monthly", "Progress", "Remaining", "Status", "Actions"],
        row_builder=plan_row,
        noun_plural="installments",
        filter_controls=[status_filter],
        summary_builder=summary,
        on_filters=lambda: common.sync_filter_inputs(controller, {"status": status_filter}),
    )
    header = common.page_header(
        "Installments",
        [ft.FilledButton("Add plan", icon=ft.Icons.ADD, on_click=lambda _: controller.form.open_create())],
    )
    view = common.wrap_view(
        ctx, page, ROUTE, "Installments", ft.Column([header, list_page.build()], spacing=16), data=list_page
    )
    list_page.on_route(page.route)
    return view
