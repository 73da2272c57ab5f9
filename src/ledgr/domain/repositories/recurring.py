"""Recurring transaction repository protocol."""

from __future__ import annotations

from typing import Any, Protocol

from ...models.recurring import RecurringTransaction
from .resource import ResourceRepository


class RecurringRepository(ResourceRepository[RecurringTransaction], Protocol):
    def toggle(self, item_id: int) -> Any:
        """Flip ``is_active`` on the server."""
        ...

    def upcoming(self, days: int = 7) -> list[RecurringTransaction]:
        """Bills due within ``days``."""
        ...
