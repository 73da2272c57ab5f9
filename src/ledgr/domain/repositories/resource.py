"""Generic list/CRUD repository protocol."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, TypeVar

from ...api.envelope import ListEnvelope

T = TypeVar("T")


class ResourceRepository(Protocol[T]):
    """Repository for one REST collection such as ``/expenses``."""

    resource: str

    def list_page(self, params: Mapping[str, Any]) -> ListEnvelope:
        """Fetch one filtered page; always a normalized envelope."""
        ...

    def list_all(self, **params: Any) -> list[T]:
        """Fetch every item (used for dropdown options)."""
        ...

    def get(self, item_id: int) -> T:
        """Retrieve a single item by ID."""
        ...

    def create(self, payload: Mapping[str, Any]) -> T:
        """Create an item from a validated payload."""
        ...

    def update(self, item_id: int, payload: Mapping[str, Any], *, target: Optional[T] = None) -> T:
        """Replace an item's editable fields."""
        ...

    def delete(self, item_id: int, *, target: Optional[T] = None) -> None:
        """Delete an item by ID."""
        ...
