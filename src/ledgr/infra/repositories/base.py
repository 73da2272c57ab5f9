"""HTTP implementation of the generic resource repository."""

from __future__ import annotations

from typing import Any, Generic, Mapping, Optional, Type, TypeVar

from sqlmodel import SQLModel

from ...api.client import ApiClient
from ...api.envelope import ListEnvelope, normalize_list, unwrap
from ...api.errors import ApiError
from ...logging_config import get_logger

logger = get_logger(__name__)

T = TypeVar("T", bound=SQLModel)


class HttpResourceRepository(Generic[T]):
    """CRUD over ``/{resource}`` returning validated DTOs."""

    def __init__(self, client: ApiClient, resource: str, model: Type[T], *, per_page: int = 15):
        """Initialize with the shared API client."""
        self.client = client
        self.resource = resource.strip("/")
        self.model = model
        self.per_page = per_page

    @property
    def path(self) -> str:
        return f"/{self.resource}"

    def item_path(self, item_id: int, action: Optional[str] = None) -> str:
        suffix = f"/{action}" if action else ""
        return f"{self.path}/{item_id}{suffix}"

    def parse(self, raw: Any) -> T:
        return self.model.model_validate(raw)

    def _parse_single(self, body: Any) -> T:
        data = unwrap(body)
        if not isinstance(data, Mapping):
            raise ApiError("The server returned an unexpected response")
        return self.parse(data)

    def list_page(self, params: Mapping[str, Any]) -> ListEnvelope:
        """Fetch one filtered page."""
        body = self.client.get(self.path, params=params)
        per_page = _safe_int(params.get("per_page")) or self.per_page
        return normalize_list(body, self.parse, default_per_page=per_page)

    def list_all(self, **params: Any) -> list[T]:
        """Fetch every item."""
        body = self.client.get(self.path, params=params or None)
        return normalize_list(body, self.parse, default_per_page=self.per_page).items

    def get(self, item_id: int) -> T:
        """Retrieve an item by ID."""
        return self._parse_single(self.client.get(self.item_path(item_id)))

    def create(self, payload: Mapping[str, Any]) -> T:
        """Create a new item."""
        body = self.client.post(self.path, dict(payload))
        logger.info("Created %s", self.resource)
        return self._parse_or_none(body)

    def update(self, item_id: int, payload: Mapping[str, Any], *, target: Optional[T] = None) -> T:
        """Update an existing item; ``target`` is the loaded row, when known."""
        body = self.client.put(self.item_path(item_id), dict(payload))
        logger.info("Updated %s", self.resource, extra={"item_id": item_id})
        return self._parse_or_none(body)

    def delete(self, item_id: int, *, target: Optional[T] = None) -> None:
        """Delete an item by ID."""
        self.client.delete(self.item_path(item_id))
        logger.info("Deleted %s", self.resource, extra={"item_id": item_id})

    def _parse_or_none(self, body: Any) -> Optional[T]:
        """Write endpoints may answer with the item, a wrapper or nothing."""
        data = unwrap(body)
        if not isinstance(data, Mapping):
            return None
        try:
            return self.parse(data)
        except ValueError:
            logger.debug("Write response was not a %s", self.model.__name__)
            return None


def _safe_int(value: Any) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None
