"""Aggregates computed by the server for the dashboard and reports pages."""

from __future__ import annotations

from typing import Optional

from sqlmodel import Field, SQLModel

from .base import IsoDate, Money, ZERO


class CategorySlice(SQLModel):
    name: str = ""
    amount: Money = ZERO
    color: Optional[str] = None


class TrendPoint(SQLModel):
    month: str = ""
    income: Money = ZERO
    expense: Money = ZERO


class UpcomingBill(SQLModel):
    id: int
    name: str = ""
    amount: Money = ZERO
    due_date: IsoDate = None


class DashboardStats(SQLModel):
    """Payload of ``/dashboard/stats``."""

    total_bank_balance: Money = ZERO
    total_fund_balance: Money = ZERO
    total_loan_balance: Money = ZERO
    monthly_income: Money = ZERO
    monthly_expenses: Money = ZERO
    recent_transactions: list[dict] = Field(default_factory=list)
    category_breakdown: list[CategorySlice] = Field(default_factory=list)
    monthly_trend: list[TrendPoint] = Field(default_factory=list)
    upcoming_bills: list[UpcomingBill] = Field(default_factory=list)

    @property
    def net_cash_flow(self):
        return self.monthly_income - self.monthly_expenses

    @property
    def net_worth(self):
        return self.total_bank_balance + self.total_fund_balance - self.total_loan_balance


class NamedValue(SQLModel):
    """One slice of a server-built distribution (liquidity mix, debt split)."""

    name: str = ""
    value: Money = ZERO
    fill: Optional[str] = None


class CashFlowPoint(SQLModel):
    name: str = ""
    income: Money = ZERO
    expense: Money = ZERO


class BudgetAdherence(SQLModel):
    id: int
    category: str = ""
    limit: Money = ZERO
    spent: Money = ZERO
    percentage: float = 0.0
    color: Optional[str] = None


class ProgressRow(SQLModel):
    """Loan or installment payoff progress as reported by ``/reports``."""

    id: int
    name: str = ""
    total: Money = ZERO
    paid: Money = ZERO
    remaining: Money = ZERO
    percentage: float = 0.0


class ReportOverview(SQLModel):
    cash_flow: list[CashFlowPoint] = Field(default_factory=list)
    liquidity_mix: list[NamedValue] = Field(default_factory=list)
    net_worth: Money = ZERO
    total_assets: Money = ZERO
    total_liabilities: Money = ZERO


class BudgetsRecurringReport(SQLModel):
    budget_adherence: list[BudgetAdherence] = Field(default_factory=list)
    monthly_recurring_cost: Money = ZERO
    upcoming_recurring: list[UpcomingBill] = Field(default_factory=list)


class DebtsAssetsReport(SQLModel):
    debt_distribution: list[NamedValue] = Field(default_factory=list)
    loan_progress: list[ProgressRow] = Field(default_factory=list)
    installment_progress: list[ProgressRow] = Field(default_factory=list)
    asset_ratio: list[NamedValue] = Field(default_factory=list)


class FinancialReport(SQLModel):
    """Payload of ``/reports``; every section is optional on the wire."""

    overview: ReportOverview = Field(default_factory=ReportOverview)
    budgets_recurring: BudgetsRecurringReport = Field(default_factory=BudgetsRecurringReport)
    debts_assets: DebtsAssetsReport = Field(default_factory=DebtsAssetsReport)
