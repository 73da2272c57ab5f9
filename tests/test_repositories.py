"""Tests for the HTTP repositories."""

from __future__ import annotations

from decimal import Decimal

import pytest

from ledgr.api.errors import DefaultCategoryError, NotFoundError
from ledgr.models.category import Category
from ledgr.models.funding import FundingKind


def test_list_page_parses_items_and_meta(ctx, api, paginated, expense_factory):
    api.on("GET", "/expenses", paginated([expense_factory(id=1), expense_factory(id=2)], last_page=4, total=50))

    envelope = ctx.expense_repo.list_page({"page": 1, "per_page": 15})

    assert [expense.id for expense in envelope.items] == [1, 2]
    assert envelope.items[0].amount == Decimal("12.50")
    assert envelope.items[0].funding.kind is FundingKind.BANK
    assert envelope.meta.last_page == 4
    assert envelope.meta.total == 50


def test_list_by_type_filters_categories(ctx, api, category_factory):
    api.on("GET", "/categories", [category_factory(id=1, type="income")])

    categories = ctx.category_repo.list_by_type("income")

    assert categories[0].is_income
    assert api.query(api.requests[0]) == {"type": "income"}


def test_get_unwraps_data(ctx, api):
    api.on("GET", "/loans/3", {"data": {"id": 3, "lender_name": "Bank", "amount": "1000", "balance_remaining": "400"}})

    loan = ctx.loan_repo.get(3)

    assert loan.lender_name == "Bank"
    assert loan.balance_remaining == Decimal("400")


def test_get_missing_item_raises(ctx, api):
    api.on("GET", "/loans/99", {"message": "Loan not found"}, status=404)

    with pytest.raises(NotFoundError, match="Loan not found"):
        ctx.loan_repo.get(99)


def test_category_repository_refuses_default_targets(ctx, api):
    default = Category(id=1, name="Salary", type="income", user_id=None)

    with pytest.raises(DefaultCategoryError, match="Cannot delete default categories"):
        ctx.category_repo.delete(1, target=default)
    with pytest.raises(DefaultCategoryError, match="Cannot edit default categories"):
        ctx.category_repo.update(1, {"name": "Wages"}, target=default)

    assert api.requests == []


def test_category_repository_updates_owned_category(ctx, api):
    owned = Category(id=9, name="Pets", user_id=1)

    ctx.category_repo.update(9, {"name": "Animals"}, target=owned)

    assert api.body(api.calls("PUT", "/categories/9")[0]) == {"name": "Animals"}


def test_withdraw_posts_bank_account_and_amount(ctx, api):
    ctx.fund_source_repo.withdraw(3, Decimal("150.25"))

    assert api.body(api.calls("POST", "/fund-sources/withdraw")[0]) == {"bank_account_id": 3, "amount": 150.25}


def test_loan_endpoints(ctx, api):
    api.on("GET", "/loans-stats", {"total_borrowed": "5000", "total_remaining": "1200", "active_count": 2})
    api.on("GET", "/loans/4/repayments", [{"id": 1, "amount": "300", "date": "2024-03-01"}])

    stats = ctx.loan_repo.stats()
    repayments = ctx.loan_repo.repayments(4)
    ctx.loan_repo.repay(4, {"amount": 300.0, "category_id": 2, "bank_account_id": 3})

    assert stats.total_remaining == Decimal("1200")
    assert stats.active_count == 2
    assert repayments[0].amount == Decimal("300")
    assert api.body(api.calls("POST", "/loans/4/repay")[0])["bank_account_id"] == 3


def test_installment_pay_rejects_non_positive_months(ctx, api):
    with pytest.raises(ValueError):
        ctx.installment_repo.pay(1, 0)
    assert api.requests == []


def test_recurring_toggle_and_upcoming(ctx, api):
    api.on("GET", "/recurring-transactions-upcoming", {"data": [{"id": 5, "name": "Netflix", "amount": "15"}]})

    ctx.recurring_repo.toggle(5)
    upcoming = ctx.recurring_repo.upcoming(7)

    assert len(api.calls("POST", "/recurring-transactions/5/toggle")) == 1
    assert api.query(api.calls("GET", "/recurring-transactions-upcoming")[0]) == {"days": "7"}
    assert upcoming[0].name == "Netflix"


def test_budget_overview(ctx, api):
    api.on(
        "GET",
        "/budgets-overview",
        {"total_budgeted": "1000", "total_spent": "950", "warnings": [{"category_name": "Food", "message": "90% used"}]},
    )

    overview = ctx.budget_repo.overview(5, 2024)

    assert api.query(api.requests[0]) == {"month": "5", "year": "2024"}
    assert overview.total_spent == Decimal("950")
    assert overview.warnings[0].category_name == "Food"


def test_reports_and_payment_sources(ctx, api):
    api.on("GET", "/dashboard/stats", {"monthly_income": "3000", "monthly_expenses": "1250.50"})
    api.on("GET", "/reports/expenses-by-category", [{"category": "Food", "value": "200", "fill": "#f00"}])
    api.on(
        "GET",
        "/payment-sources",
        [
            {"id": 3, "type": "bank", "name": "City Bank", "balance": "900", "display_name": "City Bank (1234)"},
            {"id": 2, "type": "fund", "name": "Wallet", "balance": "40"},
        ],
    )

    stats = ctx.reports_repo.dashboard_stats()
    slices = ctx.reports_repo.expenses_by_category()
    sources = ctx.payment_source_repo.list_all()

    assert stats.monthly_expenses == Decimal("1250.50")
    assert slices[0].name == "Food"
    assert slices[0].amount == Decimal("200")
    assert slices[0].color == "#f00"
    assert [source.ref.option_key for source in sources] == ["bank:3", "fund:2"]


def test_payment_sources_read_the_grouped_all_list(ctx, api):
    api.on(
        "GET",
        "/payment-sources",
        {
            "all": [
                {"id": 3, "type": "bank", "name": "City Bank", "balance": "900"},
                {"id": 7, "type": "loan", "name": "Car loan", "balance": "4000"},
            ],
            "bank_accounts": [{"id": 3, "type": "bank", "name": "City Bank", "balance": "900"}],
        },
    )

    sources = ctx.payment_source_repo.list_all()

    assert [source.ref.option_key for source in sources] == ["bank:3", "loan:7"]


def test_payment_sources_accept_a_data_wrapper(ctx, api):
    api.on("GET", "/payment-sources", {"data": [{"id": 2, "type": "fund", "name": "Wallet", "balance": "40"}]})

    assert [source.ref.option_key for source in ctx.payment_source_repo.list_all()] == ["fund:2"]
