"""Route query string <-> list filter translation.

The route (``/expenses?search=cof&page=2``) is the single source of truth for
what a list view shows. Views never hold filter state of their own: they
decode it from the route on every render and navigate to a new route to
change it.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Mapping, Optional, Protocol
from urllib.parse import parse_qsl, urlencode

from ..logging_config import get_logger

logger = get_logger(__name__)

FILTER_KEYS = ("search", "category_id", "source_type", "start_date", "end_date", "page")
CHOICE_KEYS = frozenset({"category_id", "source_type", "type", "is_active", "status"})
DEFAULT_PAGE = "1"
_NO_FILTER = {"all", "any", "none"}


@dataclass(frozen=True)
class ListFilters:
    """Decoded filter values, always strings, with defaults applied.

    ``extra`` carries resource-specific keys (``type`` for categories,
    ``month``/``year`` for budgets) that were requested from the decoder.
    """

    search: str = ""
    category_id: str = ""
    source_type: str = ""
    start_date: str = ""
    end_date: str = ""
    page: str = DEFAULT_PAGE
    extra: Mapping[str, str] = field(default_factory=dict)

    @property
    def page_number(self) -> int:
        try:
            return max(1, int(self.page))
        except (TypeError, ValueError):
            return 1

    def get(self, key: str, default: str = "") -> str:
        if key in _FIELD_NAMES:
            return getattr(self, key)
        return self.extra.get(key, default)

    def as_dict(self) -> dict[str, str]:
        """Every set value, ``page`` included; empty values are omitted."""

        values = {name: getattr(self, name) for name in FILTER_KEYS}
        values.update(self.extra)
        return {key: value for key, value in values.items() if value}

    @property
    def active_count(self) -> int:
        """Number of filters narrowing the list (pagination excluded)."""

        return sum(1 for key, value in self.as_dict().items() if key != "page")


_FIELD_NAMES = frozenset(f.name for f in fields(ListFilters) if f.name != "extra")


def normalize_choice(value: Optional[str]) -> str:
    """Return ``""`` for the "all" sentinel of enum-like filters."""

    if value is None:
        return ""
    text = str(value).strip()
    if text.lower() in _NO_FILTER:
        return ""
    return text


def split_route(route: Optional[str]) -> tuple[str, str]:
    """Split ``/path?query`` into ``("/path", "query")``."""

    path, _, query = (route or "/").partition("?")
    return path or "/", query


def join_route(path: str, query: str) -> str:
    return f"{path}?{query}" if query else path


def parse_query(query: str) -> dict[str, str]:
    """Last value wins for repeated keys; blank values are dropped."""

    return dict(parse_qsl(query.lstrip("?"), keep_blank_values=False))


def decode_filters(query: str, keys: tuple[str, ...] = FILTER_KEYS) -> ListFilters:
    """Read the recognized ``keys`` from ``query`` and apply defaults.

    Unrecognized parameters are ignored here but survive :func:`encode_update`.
    """

    params = parse_query(query)
    standard: dict[str, str] = {}
    extra: dict[str, str] = {}
    for key in keys:
        raw = params.get(key, "")
        value = normalize_choice(raw) if key in CHOICE_KEYS else raw.strip()
        if key in _FIELD_NAMES:
            standard[key] = value
        else:
            extra[key] = value
    if not standard.get("page"):
        standard["page"] = DEFAULT_PAGE
    return ListFilters(**standard, extra=extra)


def encode_update(query: str, updates: Mapping[str, Any]) -> str:
    """Apply ``updates`` to ``query`` and return the canonical query string.

    Falsy values remove their key; every other current parameter, recognized
    or not, is kept in its original order.
    """

    params = parse_query(query)
    for key, value in updates.items():
        text = "" if value is None else str(value).strip()
        if key in CHOICE_KEYS:
            text = normalize_choice(text)
        if text:
            params[key] = text
        else:
            params.pop(key, None)
    return urlencode(params)


def encode_filters(filters: ListFilters) -> str:
    return urlencode(filters.as_dict())


def filter_update(key: str, value: Any) -> dict[str, Any]:
    """Update for one filter; anything but ``page`` restarts at page 1."""

    if key == "page":
        return {"page": value}
    return {key: value, "page": DEFAULT_PAGE}


class NavigablePage(Protocol):
    route: str

    def go(self, route: str) -> None: ...


class FilterNavigator:
    """Apply filter updates by navigating the page to a new route."""

    def __init__(self, page: NavigablePage, path: Optional[str] = None):
        self.page = page
        self._path = path

    @property
    def path(self) -> str:
        return self._path or split_route(self.page.route)[0]

    @property
    def query(self) -> str:
        path, query = split_route(self.page.route)
        if self._path and path != self._path:
            return ""
        return query

    def route_for(self, updates: Mapping[str, Any]) -> str:
        return join_route(self.path, encode_update(self.query, updates))

    def apply(self, updates: Mapping[str, Any]) -> str:
        """Navigate to the route with ``updates`` applied; returns it."""

        route = self.route_for(updates)
        if route != self.page.route:
            logger.debug("Filter navigation", extra={"route": route})
            self.page.go(route)
        return route

    def apply_filter(self, key: str, value: Any) -> str:
        return self.apply(filter_update(key, value))

    def go_to_page(self, page_number: int) -> str:
        return self.apply({"page": max(1, int(page_number))})

    def clear_filters(self) -> str:
        """Drop every query parameter."""

        if self.page.route != self.path:
            self.page.go(self.path)
        return self.path
