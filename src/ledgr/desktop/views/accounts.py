"""Bank accounts and fund sources views."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional

import flet as ft

from ...api.errors import ApiError
from ...logging_config import get_logger
from ...services.aggregates import Totals
from ...services.fetcher import ListState
from ...services.forms import BankAccountForm, FundSourceForm, WithdrawForm
from ..components import FieldSpec, FormDialog, ListPage, confirm_step, format_money, row_actions
from . import common

if TYPE_CHECKING:
    from ..context import AppContext

logger = get_logger(__name__)


def _dashboard_value(ctx: AppContext, field: str) -> Optional[Any]:
    try:
        return getattr(ctx.reports_repo.dashboard_stats(), field)
    except ApiError as exc:
        logger.warning("Dashboard totals unavailable", extra={"status": exc.status_code})
        return None


def _balance_summary(label: str, field: str, currency: str, server_total: Any):
    def summary(state: ListState) -> list[ft.Control]:
        totals = Totals.of(state.items, field, server_total)
        controls = [
            common.summary_text(
                f"{label} (page)", format_money(totals.page_local, currency), hint=f"{len(state.items)} shown"
            )
        ]
        if totals.has_authoritative:
            controls.append(
                common.summary_text(
                    f"{label} (all)", format_money(totals.authoritative, currency), hint="Reported by the server"
                )
            )
        return controls

    return summary


def build_bank_accounts_view(ctx: AppContext, page: ft.Page) -> ft.View:
    """Build the bank accounts view."""

    route = "/bank-accounts"
    currency = ctx.currency
    controller = common.list_controller(
        ctx,
        page,
        path=route,
        repository=ctx.bank_account_repo,
        form_cls=BankAccountForm,
        noun="Bank account",
        filter_keys=("search", "page"),
    )
    FormDialog(
        page,
        controller.form,
        [
            FieldSpec("bank_name", "Bank name"),
            FieldSpec("account_number", "Account number"),
            FieldSpec("balance", f"Opening balance ({currency})", "number"),
            FieldSpec("account_holder_name", "Account holder"),
            FieldSpec("branch_code", "Branch code"),
            FieldSpec("color", "Color", hint="#RRGGBB"),
        ],
        title_create="Add bank account",
        title_edit="Edit bank account",
        on_submit=controller.submit_form,
    )
    confirm = confirm_step(page, "Delete bank account", "Delete this bank account?")

    def account_row(account) -> list[ft.Control]:
        return [
            ft.Text(account.display_name, weight=ft.FontWeight.W_500),
            ft.Text(account.masked_number),
            ft.Text(account.account_holder_name or "-"),
            ft.Text(format_money(account.balance, currency)),
            row_actions(
                lambda a=account: controller.request_edit(a),
                lambda a=account: controller.request_delete(a, confirm),
            ),
        ]

    list_page = ListPage(
        page,
        controller,
        columns=["Bank", "Number", "Holder", "Balance", "Actions"],
        row_builder=account_row,
        noun_plural="accounts",
        summary_builder=_balance_summary(
            "Balance", "balance", currency, _dashboard_value(ctx, "total_bank_balance")
        ),
    )
    header = common.page_header(
        "Bank Accounts",
        [ft.FilledButton("Add account", icon=ft.Icons.ADD, on_click=lambda _: controller.form.open_create())],
    )
    view = common.wrap_view(
        ctx, page, route, "Bank Accounts", ft.Column([header, list_page.build()], spacing=16), data=list_page
    )
    list_page.on_route(page.route)
    return view


def build_fund_sources_view(ctx: AppContext, page: ft.Page) -> ft.View:
    """Build the cash fund sources view, including bank withdrawals."""

    route = "/fund-sources"
    currency = ctx.currency
    controller = common.list_controller(
        ctx,
        page,
        path=route,
        repository=ctx.fund_source_repo,
        form_cls=FundSourceForm,
        noun="Fund source",
        filter_keys=("search", "page"),
    )
    FormDialog(
        page,
        controller.form,
        [
            FieldSpec("source_name", "Name"),
            FieldSpec("amount", f"Amount ({currency})", "number"),
            FieldSpec("description", "Description", "multiline"),
        ],
        title_create="Add fund source",
        title_edit="Edit fund source",
        on_submit=controller.submit_form,
    )

    withdraw = controller.action_form(
        WithdrawForm,
        "Withdraw cash",
        lambda payload: ctx.fund_source_repo.withdraw(payload["bank_account_id"], payload["amount"]),
        success_message="Cash withdrawn",
    )
    accounts = common.load_options(page, "bank accounts", ctx.bank_account_repo.list_all)
    FormDialog(
        page,
        withdraw,
        [
            FieldSpec(
                "bank_account_id",
                "From bank account",
                "select",
                [(str(a.id), f"{a.display_name} ({format_money(a.balance, currency)})") for a in accounts],
            ),
            FieldSpec("amount", f"Amount ({currency})", "number"),
        ],
        title_create="Withdraw cash",
        title_edit="Withdraw cash",
        on_submit=withdraw.submit,
    )
    confirm = confirm_step(page, "Delete fund source", "Delete this fund source?")

    def fund_row(fund) -> list[ft.Control]:
        return [
            ft.Text(fund.display_name, weight=ft.FontWeight.W_500),
            ft.Text(fund.description or "-"),
            ft.Text(format_money(fund.amount, currency)),
            row_actions(
                lambda f=fund: controller.request_edit(f),
                lambda f=fund: controller.request_delete(f, confirm),
            ),
        ]

    list_page = ListPage(
        page,
        controller,
        columns=["Name", "Description", "Amount", "Actions"],
        row_builder=fund_row,
        noun_plural="fund sources",
        summary_builder=_balance_summary(
            "Cash", "amount", currency, _dashboard_value(ctx, "total_fund_balance")
        ),
    )
    header = common.page_header(
        "Fund Sources",
        [
            ft.OutlinedButton("Withdraw from bank", icon=ft.Icons.ATM, on_click=lambda _: withdraw.open_create()),
            ft.FilledButton("Add fund source", icon=ft.Icons.ADD, on_click=lambda _: controller.form.open_create()),
        ],
    )
    view = common.wrap_view(
        ctx, page, route, "Fund Sources", ft.Column([header, list_page.build()], spacing=16), data=list_page
    )
    list_page.on_route(page.route)
    return view
