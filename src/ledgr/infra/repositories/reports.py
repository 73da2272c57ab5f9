"""Read-only report endpoints and the flattened payment-source list."""

from __future__ import annotations

from typing import Any, Mapping

from ...api.client import ApiClient
from ...api.envelope import normalize_list, unwrap
from ...models.funding import PaymentSource
from ...models.reports import CategorySlice, DashboardStats, FinancialReport


def _as_mapping(body: Any) -> Mapping[str, Any]:
    data = unwrap(body)
    return data if isinstance(data, Mapping) else {}


def _category_slice(raw: Mapping[str, Any]) -> CategorySlice:
    # /reports/expenses-by-category names the label "category" and the colour "fill"
    return CategorySlice.model_validate(
        {
            "name": raw.get("name") or raw.get("category") or "",
            "amount": raw.get("amount", raw.get("value")),
            "color": raw.get("color") or raw.get("fill"),
        }
    )


class HttpReportsRepository:
    def __init__(self, client: ApiClient):
        self.client = client

    def dashboard_stats(self) -> DashboardStats:
        return DashboardStats.model_validate(_as_mapping(self.client.get("/dashboard/stats")))

    def financial_report(self) -> FinancialReport:
        return FinancialReport.model_validate(_as_mapping(self.client.get("/reports")))

    def expenses_by_category(self) -> list[CategorySlice]:
        body = self.client.get("/reports/expenses-by-category")
        return normalize_list(body, _category_slice).items


class HttpPaymentSourceRepository:
    def __init__(self, client: ApiClient):
        self.client = client

    def list_all(self) -> list[PaymentSource]:
        body = self.client.get("/payment-sources")
        # grouped answer: {"all": [...], "bank_accounts": [...], "fund_sources": [...], ...}
        if isinstance(body, Mapping) and isinstance(body.get("all"), list):
            body = body["all"]
        return normalize_list(body, PaymentSource.model_validate).items
