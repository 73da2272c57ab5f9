"""Monthly category budgets and the server overview."""

from __future__ import annotations

from typing import Optional

from sqlmodel import Field, SQLModel

from .base import Money, ZERO
from .category import Category


class Budget(SQLModel):
    """Spending limit for one category in one month.

    ``spent`` and the derived fields are computed server-side, including
    rollover from the previous month.
    """

    id: int
    category: Optional[Category] = None
    amount: Money = ZERO
    spent: Money = ZERO
    rollover_amount: Money = ZERO
    rollover_enabled: bool = False
    month: int = 1
    year: int = 1970
    alert_at_90_percent: bool = True
    total_budget: Money = ZERO
    remaining: Money = ZERO
    percentage_used: float = 0.0
    is_near_limit: bool = False
    is_exceeded: bool = False

    @property
    def limit(self):
        return self.total_budget or self.amount


class BudgetWarning(SQLModel):
    category_name: str = ""
    message: str = ""


class BudgetOverview(SQLModel):
    total_budgeted: Money = ZERO
    total_spent: Money = ZERO
    total_remaining: Money = ZERO
    percentage_used: float = 0.0
    warnings: list[BudgetWarning] = Field(default_factory=list)
