"""Category repository protocol."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol

from ...models.category import Category
from .resource import ResourceRepository


class CategoryRepository(ResourceRepository[Category], Protocol):
    """Categories, including read-only system defaults."""

    def list_by_type(self, category_type: str) -> list[Category]:
        """List categories filtered by type (income/expense)."""
        ...

    def update(
        self, item_id: int, payload: Mapping[str, Any], *, target: Optional[Category] = None
    ) -> Category:
        """Update a user-owned category; defaults are refused locally."""
        ...

    def delete(self, item_id: int, *, target: Optional[Category] = None) -> None:
        """Delete a user-owned category; defaults are refused locally."""
        ...
