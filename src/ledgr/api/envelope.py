"""Normalization of the list-response shapes returned by the API.

Endpoints answer a list request in one of three ways:

* a bare JSON array,
* ``{"data": [...]}``,
* ``{"data": [...], "current_page": .., "last_page": .., ...}`` where the
  pagination fields may instead sit under ``meta``.

:func:`normalize_list` folds all of them into :class:`Paginated` or
:class:`Plain` once, at the repository boundary, so views never inspect raw
bodies.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Generic, Mapping, Optional, TypeVar, Union

from pydantic import ValidationError as SchemaError

from ..logging_config import get_logger
from ..models.pagination import PaginationMeta

logger = get_logger(__name__)

T = TypeVar("T")

PAGINATION_FIELDS = ("current_page", "last_page", "per_page", "total", "from", "to")


@dataclass(frozen=True)
class Paginated(Generic[T]):
    """One server-side page plus its window description."""

    items: list[T]
    meta: PaginationMeta
    paginated: bool = field(default=True, init=False)


@dataclass(frozen=True)
class Plain(Generic[T]):
    """An unpaginated collection; ``meta`` describes it as a single page."""

    items: list[T]
    paginated: bool = field(default=False, init=False)

    @property
    def meta(self) -> PaginationMeta:
        count = len(self.items)
        return PaginationMeta(
            current_page=1,
            last_page=1,
            per_page=max(count, 1),
            total=count,
            from_=1 if count else 0,
            to=count,
        )


ListEnvelope = Union[Paginated[T], Plain[T]]


def _as_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _pick(body: Mapping[str, Any], key: str) -> Optional[int]:
    """Top-level value first, then ``meta``; falsy/invalid counts as missing."""

    top = _as_int(body.get(key))
    if top:
        return top
    meta = body.get("meta")
    if isinstance(meta, Mapping):
        nested = _as_int(meta.get(key))
        if nested:
            return nested
    return top


def _has_pagination(body: Mapping[str, Any]) -> bool:
    meta = body.get("meta")
    if any(key in body for key in PAGINATION_FIELDS):
        return True
    return isinstance(meta, Mapping) and any(key in meta for key in PAGINATION_FIELDS)


def parse_meta(body: Mapping[str, Any], *, default_per_page: int = 15) -> PaginationMeta:
    """Merge pagination fields, replacing anything missing with safe defaults."""

    return PaginationMeta(
        current_page=_pick(body, "current_page") or 1,
        last_page=_pick(body, "last_page") or 1,
        per_page=_pick(body, "per_page") or default_per_page,
        total=_pick(body, "total") or 0,
        from_=_pick(body, "from") or 0,
        to=_pick(body, "to") or 0,
    )


def _parse_items(raw: list[Any], parse: Optional[Callable[[Any], T]]) -> list[T]:
    if parse is None:
        return list(raw)
    items: list[T] = []
    for entry in raw:
        try:
            items.append(parse(entry))
        except (SchemaError, TypeError, ValueError) as exc:
            logger.warning("Skipping malformed list item", extra={"error": str(exc)})
    return items


def normalize_list(
    body: Any,
    parse: Optional[Callable[[Any], T]] = None,
    *,
    default_per_page: int = 15,
) -> ListEnvelope:
    """Return a typed envelope for any list body; never raises on bad input."""

    if isinstance(body, list):
        return Plain(_parse_items(body, parse))
    if isinstance(body, Mapping):
        data = body.get("data")
        if isinstance(data, list):
            items = _parse_items(data, parse)
            if _has_pagination(body):
                return Paginated(items, parse_meta(body, default_per_page=default_per_page))
            return Plain(items)
    if body is not None:
        logger.warning("Unexpected list response shape", extra={"body_type": type(body).__name__})
    return Plain([])


def unwrap(body: Any) -> Any:
    """Return ``body["data"]`` for wrapped single-object responses."""

    if isinstance(body, Mapping) and "data" in body and isinstance(body["data"], (Mapping, list)):
        return body["data"]
    return body
