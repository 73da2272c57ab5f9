"""Tests for the click command line."""

from __future__ import annotations

from click.testing import CliRunner

from ledgr.cli import describe, main
from ledgr.models.transaction import Expense


def test_list_prints_rows_and_window(ctx, api, paginated, expense_factory):
    api.on("GET", "/expenses", paginated([expense_factory()]))

    result = CliRunner().invoke(main, ["list", "expenses", "--search", "cof", "--source", "bank"], obj={"ctx": ctx})

    assert result.exit_code == 0, result.output
    assert "#1  2024-05-01  Coffee  [Food]  LKR 12.50" in result.output
    assert "Showing 1 to 1 of 1 expenses" in result.output
    assert api.query(api.requests[0]) == {"search": "cof", "source_type": "bank", "page": "1", "per_page": "15"}


def test_list_page_option(ctx, api):
    CliRunner().invoke(main, ["list", "loans", "--page", "3"], obj={"ctx": ctx})

    assert api.query(api.requests[0])["page"] == "3"


def test_list_empty_result(ctx, api):
    result = CliRunner().invoke(main, ["list", "categories"], obj={"ctx": ctx})

    assert result.exit_code == 0
    assert "No categories found" in result.output


def test_list_reports_server_errors(ctx, api):
    api.on("GET", "/budgets", {"message": "Maintenance"}, status=503)

    result = CliRunner().invoke(main, ["list", "budgets"], obj={"ctx": ctx})

    assert result.exit_code == 1
    assert "Maintenance" in result.output


def test_list_requires_sign_in(anonymous_ctx, api):
    result = CliRunner().invoke(main, ["list", "expenses"], obj={"ctx": anonymous_ctx})

    assert result.exit_code == 1
    assert "Not signed in" in result.output
    assert api.requests == []


def test_login_and_logout(anonymous_ctx, api):
    api.on("POST", "/login", {"token": "abc", "user": {"id": 1, "name": "Ada", "email": "ada@example.com"}})

    login = CliRunner().invoke(main, ["login", "ada@example.com", "--password", "pw"], obj={"ctx": anonymous_ctx})
    assert login.exit_code == 0
    assert "Signed in as Ada" in login.output
    assert anonymous_ctx.session.token == "abc"

    logout = CliRunner().invoke(main, ["logout"], obj={"ctx": anonymous_ctx})
    assert "Signed out" in logout.output
    assert anonymous_ctx.session.token is None


def test_login_failure_is_reported(anonymous_ctx, api):
    api.on("POST", "/login", {"message": "Invalid credentials"}, status=401)

    result = CliRunner().invoke(main, ["login", "ada@example.com", "--password", "bad"], obj={"ctx": anonymous_ctx})

    assert result.exit_code == 1
    assert "Invalid credentials" in result.output


def test_describe_without_optional_fields():
    assert describe(Expense(id=3), "USD") == "#3  USD 0.00"
