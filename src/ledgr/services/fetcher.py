"""Fetch one filtered page of a resource and fence out stale responses."""

from __future__ import annotations

import threading
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Generic, Optional, TypeVar

from ..api.envelope import ListEnvelope
from ..api.errors import ApiError
from ..domain.repositories.resource import ResourceRepository
from ..logging_config import get_logger
from ..models.pagination import PaginationMeta
from .filters import ListFilters

logger = get_logger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class ListState(Generic[T]):
    """What a list view renders: items, window and an optional error."""

    items: list[T] = field(default_factory=list)
    meta: PaginationMeta = field(default_factory=PaginationMeta)
    error: Optional[str] = None
    stale: bool = False
    paginated: bool = False
    sequence: int = 0

    @property
    def is_empty(self) -> bool:
        return not self.items


class ResourceFetcher(Generic[T]):
    """Single-GET list loader with request fencing.

    Each call to :meth:`fetch` takes the next sequence number. A response is
    delivered to ``on_result`` only if no newer fetch was started while it was
    in flight; older responses come back marked ``stale`` and are otherwise
    ignored. Requests already sent are never aborted.
    """

    def __init__(
        self,
        repository: ResourceRepository[T],
        *,
        per_page: int = 15,
        on_result: Optional[Callable[[ListState[T]], None]] = None,
    ) -> None:
        self.repository = repository
        self.per_page = per_page
        self.on_result = on_result
        self._lock = threading.Lock()
        self._issued = 0
        self._last_filters: Optional[ListFilters] = None
        self.fetch_count = 0
        self.latest: ListState[T] = ListState(meta=PaginationMeta(per_page=per_page))

    def build_query(self, filters: ListFilters) -> dict[str, Any]:
        """Request parameters: every set filter plus ``page`` and ``per_page``."""

        query: dict[str, Any] = dict(filters.as_dict())
        query["page"] = filters.page_number
        query["per_page"] = self.per_page
        return query

    @property
    def last_filters(self) -> Optional[ListFilters]:
        return self._last_filters

    def is_current(self, sequence: int) -> bool:
        with self._lock:
            return sequence == self._issued

    def fetch(self, filters: ListFilters) -> ListState[T]:
        with self._lock:
            self._issued += 1
            sequence = self._issued
            self._last_filters = filters
            self.fetch_count += 1

        params = self.build_query(filters)
        state = self._load(params, sequence)

        if not self.is_current(sequence):
            logger.debug(
                "Discarding stale %s response", self._resource, extra={"sequence": sequence}
            )
            return replace(state, stale=True)

        self.latest = state
        if self.on_result is not None:
            self.on_result(state)
        return state

    def refetch(self) -> ListState[T]:
        """Repeat the last fetch (after a mutation)."""

        return self.fetch(self._last_filters or ListFilters())

    @property
    def _resource(self) -> str:
        return getattr(self.repository, "resource", type(self.repository).__name__)

    def _load(self, params: dict[str, Any], sequence: int) -> ListState[T]:
        try:
            envelope: ListEnvelope = self.repository.list_page(params)
        except ApiError as exc:
            logger.warning(
                "Failed to load %s",
                self._resource,
                extra={"status": exc.status_code, "error_message": exc.message},
            )
            return self._empty(exc.message, sequence)
        except (TypeError, ValueError) as exc:
            logger.error("Unreadable %s response", self._resource, exc_info=exc)
            return self._empty("The server returned an unreadable response", sequence)
        return ListState(
            items=list(envelope.items),
            meta=envelope.meta,
            paginated=envelope.paginated,
            sequence=sequence,
        )

    def _empty(self, message: str, sequence: int) -> ListState[T]:
        return ListState(meta=PaginationMeta(per_page=self.per_page), error=message, sequence=sequence)

