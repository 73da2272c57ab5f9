"""Read-only report and payment-source protocols."""

from __future__ import annotations

from typing import Protocol

from ...models.funding import PaymentSource
from ...models.reports import CategorySlice, DashboardStats, FinancialReport


class ReportsRepository(Protocol):
    def dashboard_stats(self) -> DashboardStats:
        """Balances, monthly totals, breakdowns and upcoming bills."""
        ...

    def financial_report(self) -> FinancialReport:
        """The multi-section report page payload."""
        ...

    def expenses_by_category(self) -> list[CategorySlice]:
        """Current-month spending grouped by category."""
        ...


class PaymentSourceRepository(Protocol):
    def list_all(self) -> list[PaymentSource]:
        """Every bank account, cash fund and loan as one option list."""
        ...
