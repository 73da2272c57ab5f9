"""HTTP implementation of the recurring transaction repository."""

from __future__ import annotations

from typing import Any

from ...api.client import ApiClient
from ...api.envelope import normalize_list
from ...models.recurring import RecurringTransaction
from .base import HttpResourceRepository


class HttpRecurringRepository(HttpResourceRepository[RecurringTransaction]):
    def __init__(self, client: ApiClient, *, per_page: int = 15):
        super().__init__(client, "recurring-transactions", RecurringTransaction, per_page=per_page)

    def toggle(self, item_id: int) -> Any:
        return self.client.post(self.item_path(item_id, "toggle"))

    def upcoming(self, days: int = 7) -> list[RecurringTransaction]:
        body = self.client.get("/recurring-transactions-upcoming", params={"days": days})
        return normalize_list(body, self.parse).items
