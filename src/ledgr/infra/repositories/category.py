"""HTTP implementation of the category repository."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from ...api.client import ApiClient
from ...api.errors import DefaultCategoryError
from ...logging_config import get_logger
from ...models.category import Category
from .base import HttpResourceRepository

logger = get_logger(__name__)


def ensure_user_owned(category: Optional[Category], action: str) -> None:
    """Refuse to ``action`` a system default category before any request."""

    if category is not None and category.is_default:
        logger.info(
            "Blocked %s of default category", action, extra={"category_id": category.id}
        )
        raise DefaultCategoryError(f"Cannot {action} default categories")


class HttpCategoryRepository(HttpResourceRepository[Category]):
    def __init__(self, client: ApiClient, *, per_page: int = 15):
        super().__init__(client, "categories", Category, per_page=per_page)

    def list_by_type(self, category_type: str) -> list[Category]:
        """List categories filtered by type (income/expense)."""
        return self.list_all(type=category_type)

    def update(
        self, item_id: int, payload: Mapping[str, Any], *, target: Optional[Category] = None
    ) -> Category:
        ensure_user_owned(target, "edit")
        return super().update(item_id, payload)

    def delete(self, item_id: int, *, target: Optional[Category] = None) -> None:
        ensure_user_owned(target, "delete")
        super().delete(item_id)
