"""Command line entry point for Ledgr."""

from __future__ import annotations

from typing import Any

import click

from .api.errors import ApiError
from .config import BaseConfig
from .desktop.context import AppContext, create_app_context
from .logging_config import setup_logging
from .models.base import to_decimal
from .services import auth
from .services.fetcher import ResourceFetcher
from .services.filters import decode_filters, encode_update

RESOURCES = {
    "expenses": "expense_repo",
    "incomes": "income_repo",
    "categories": "category_repo",
    "bank-accounts": "bank_account_repo",
    "fund-sources": "fund_source_repo",
    "loans": "loan_repo",
    "installments": "installment_repo",
    "recurring": "recurring_repo",
    "budgets": "budget_repo",
}

_LABEL_FIELDS = ("display_name", "name", "item_name", "lender_name", "description")
_AMOUNT_FIELDS = ("amount", "balance", "balance_remaining", "monthly_amount")


def _context(obj: dict) -> AppContext:
    if "ctx" not in obj:
        config = BaseConfig()
        setup_logging(config)
        obj["ctx"] = create_app_context(config)
        obj["owns_ctx"] = True
    return obj["ctx"]


def describe(item: Any, currency: str = "") -> str:
    """One-line summary of any list item for terminal output."""

    label = next((str(getattr(item, f)) for f in _LABEL_FIELDS if getattr(item, f, None)), "")
    category = getattr(item, "category", None)
    parts = [f"#{getattr(item, 'id', '?')}"]
    date = getattr(item, "date", None)
    if date is not None:
        parts.append(date.isoformat())
    if label:
        parts.append(label)
    if category is not None and getattr(category, "name", None):
        parts.append(f"[{category.name}]")
    amount = next((getattr(item, f) for f in _AMOUNT_FIELDS if getattr(item, f, None) is not None), None)
    if amount is not None:
        parts.append(f"{currency} {to_decimal(amount):,.2f}".strip())
    return "  ".join(parts)


@click.group()
@click.pass_context
def main(click_ctx: click.Context) -> None:
    """Ledgr personal finance client."""

    obj = click_ctx.ensure_object(dict)

    def _close() -> None:
        if obj.get("owns_ctx"):
            obj["ctx"].close()

    click_ctx.call_on_close(_close)


@main.command()
def desktop() -> None:
    """Launch the desktop app."""

    import flet as ft

    from .desktop.app import main as desktop_main

    ft.app(target=desktop_main)


@main.command()
@click.argument("email")
@click.option("--password", prompt=True, hide_input=True, help="Account password")
@click.pass_obj
def login(obj: dict, email: str, password: str) -> None:
    """Sign in and remember the session token."""

    ctx = _context(obj)
    try:
        user = auth.login(ctx.client, ctx.session, email, password)
    except ApiError as exc:
        raise click.ClickException(exc.message) from exc
    click.echo(f"Signed in as {user.name if user and user.name else email}")


@main.command()
@click.pass_obj
def logout(obj: dict) -> None:
    """Sign out and forget the stored token."""

    ctx = _context(obj)
    auth.logout(ctx.client, ctx.session)
    click.echo("Signed out")


@main.command(name="list")
@click.argument("resource", type=click.Choice(sorted(RESOURCES)))
@click.option("--search", default="", help="Free-text search")
@click.option("--category", "category_id", default="", help="Category id")
@click.option("--source", "source_type", default="", help="bank, fund or loan")
@click.option("--start", "start_date", default="", help="From date (YYYY-MM-DD)")
@click.option("--end", "end_date", default="", help="To date (YYYY-MM-DD)")
@click.option("--page", "page_number", default=1, type=int, show_default=True)
@click.pass_obj
def list_resource(
    obj: dict,
    resource: str,
    search: str,
    category_id: str,
    source_type: str,
    start_date: str,
    end_date: str,
    page_number: int,
) -> None:
    """Print one page of RESOURCE with the pagination window."""

    ctx = _context(obj)
    if not ctx.is_authenticated:
        raise click.ClickException("Not signed in. Run `ledgr login EMAIL` first.")

    query = encode_update(
        "",
        {
            "search": search,
            "category_id": category_id,
            "source_type": source_type,
            "start_date": start_date,
            "end_date": end_date,
            "page": page_number if page_number > 1 else None,
        },
    )
    fetcher = ResourceFetcher(getattr(ctx, RESOURCES[resource]), per_page=ctx.config.PER_PAGE)
    state = fetcher.fetch(decode_filters(query))
    if state.error:
        raise click.ClickException(state.error)

    currency = ctx.currency
    for item in state.items:
        click.echo(describe(item, currency))
    if not state.items:
        click.echo(f"No {resource} found")
    click.echo(state.meta.window_label(resource))


if __name__ == "__main__":
    main()
