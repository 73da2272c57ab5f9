"""HTTP implementation of the budget repository."""

from __future__ import annotations

from typing import Mapping

from ...api.client import ApiClient
from ...api.envelope import unwrap
from ...models.budget import Budget, BudgetOverview
from .base import HttpResourceRepository


class HttpBudgetRepository(HttpResourceRepository[Budget]):
    def __init__(self, client: ApiClient, *, per_page: int = 15):
        super().__init__(client, "budgets", Budget, per_page=per_page)

    def overview(self, month: int, year: int) -> BudgetOverview:
        data = unwrap(self.client.get("/budgets-overview", params={"month": month, "year": year}))
        return BudgetOverview.model_validate(data if isinstance(data, Mapping) else {})
