"""Budget repository protocol."""

from __future__ import annotations

from typing import Protocol

from ...models.budget import Budget, BudgetOverview
from .resource import ResourceRepository


class BudgetRepository(ResourceRepository[Budget], Protocol):
    def overview(self, month: int, year: int) -> BudgetOverview:
        """Server totals and warnings for one month."""
        ...
