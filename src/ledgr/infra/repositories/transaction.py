"""Expense and income repositories."""

from __future__ import annotations

from ...api.client import ApiClient
from ...models.transaction import Expense, Income
from .base import HttpResourceRepository


class HttpExpenseRepository(HttpResourceRepository[Expense]):
    def __init__(self, client: ApiClient, *, per_page: int = 15):
        super().__init__(client, "expenses", Expense, per_page=per_page)


class HttpIncomeRepository(HttpResourceRepository[Income]):
    def __init__(self, client: ApiClient, *, per_page: int = 15):
        super().__init__(client, "incomes", Income, per_page=per_page)
