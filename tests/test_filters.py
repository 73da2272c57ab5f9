"""Tests for the route query <-> filter codec."""

from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from ledgr.services.filters import (
    FilterNavigator,
    ListFilters,
    decode_filters,
    encode_filters,
    encode_update,
    filter_update,
    normalize_choice,
    split_route,
)


@dataclass
class _PageSpy:
    """Minimal fake page that records navigation actions."""

    route: str = "/expenses"
    navigated_to: list[str] = field(default_factory=list)

    def go(self, route: str) -> None:
        self.route = route
        self.navigated_to.append(route)


def test_decode_applies_defaults():
    """A bare route decodes to empty filters on page one."""

    filters = decode_filters("")

    assert filters == ListFilters()
    assert filters.page == "1"
    assert filters.page_number == 1
    assert filters.active_count == 0


def test_decode_reads_recognized_keys_only():
    filters = decode_filters("search=cof&category_id=4&page=3&sort=desc")

    assert filters.search == "cof"
    assert filters.category_id == "4"
    assert filters.page_number == 3
    assert "sort" not in filters.as_dict()


def test_decode_treats_all_sentinel_as_unset():
    filters = decode_filters("source_type=all&category_id=ALL")

    assert filters.source_type == ""
    assert filters.category_id == ""


def test_decode_invalid_page_falls_back_to_first():
    assert decode_filters("page=abc").page_number == 1
    assert decode_filters("page=-4").page_number == 1


def test_decode_extra_keys_requested_by_view():
    """Resource-specific keys land in ``extra`` and in the dict form."""

    filters = decode_filters("type=income&month=5&search=x", ("search", "type", "month", "page"))

    assert filters.get("type") == "income"
    assert filters.get("month") == "5"
    assert filters.as_dict() == {"search": "x", "page": "1", "type": "income", "month": "5"}
    assert filters.active_count == 3


def test_encode_update_removes_falsy_values():
    query = encode_update("search=cof&page=2", {"search": "", "category_id": None})

    assert query == "page=2"


def test_encode_update_preserves_unrelated_parameters():
    query = encode_update("sort=desc&search=cof", {"search": "tea"})

    assert query == "sort=desc&search=tea"


def test_encode_update_normalizes_choice_sentinel():
    assert encode_update("source_type=bank&page=1", {"source_type": "all"}) == "page=1"


def test_canonical_query_survives_decode_encode():
    query = "search=cof&category_id=3&start_date=2024-01-01&page=2"

    assert encode_filters(decode_filters(query)) == query


@pytest.mark.parametrize(
    "filters",
    [
        ListFilters(),
        ListFilters(search="cof", page="3"),
        ListFilters(search="rent & bills + fees", source_type="bank"),
        ListFilters(category_id="4", end_date="2024-06-30"),
        ListFilters(start_date="2024-01-01", end_date="2024-01-31", source_type="loan", page="2"),
        ListFilters(
            search="50% off = deal?",
            category_id="12",
            source_type="fund",
            start_date="2024-02-01",
            end_date="2024-02-29",
            page="7",
        ),
    ],
)
def test_filters_round_trip_through_the_route(filters):
    assert decode_filters(encode_filters(filters)) == filters


def test_round_trip_keeps_resource_specific_keys():
    keys = ("search", "type", "is_active", "page")
    filters = decode_filters("type=expense&is_active=1&search=gym%20%26%20pool", keys)

    assert filters.search == "gym & pool"
    assert decode_filters(encode_filters(filters), keys) == filters


def test_filter_update_resets_page_except_for_page_itself():
    assert filter_update("search", "cof") == {"search": "cof", "page": "1"}
    assert filter_update("page", 4) == {"page": 4}


def test_split_route_handles_missing_query():
    assert split_route("/expenses") == ("/expenses", "")
    assert split_route("/expenses?page=2") == ("/expenses", "page=2")
    assert split_route(None) == ("/", "")


def test_normalize_choice():
    assert normalize_choice(None) == ""
    assert normalize_choice(" any ") == ""
    assert normalize_choice("bank") == "bank"


def test_navigator_filter_change_returns_to_first_page():
    page = _PageSpy(route="/expenses?search=cof&page=3")
    navigator = FilterNavigator(page, "/expenses")

    navigator.apply_filter("category_id", "4")

    assert page.navigated_to == ["/expenses?search=cof&page=1&category_id=4"]


def test_navigator_go_to_page_keeps_filters():
    page = _PageSpy(route="/expenses?search=cof&page=1")
    navigator = FilterNavigator(page, "/expenses")

    navigator.go_to_page(2)

    assert page.route == "/expenses?search=cof&page=2"


def test_navigator_skips_navigation_when_route_is_unchanged():
    page = _PageSpy(route="/expenses?search=cof&page=1")
    navigator = FilterNavigator(page, "/expenses")

    navigator.apply_filter("search", "cof")

    assert page.navigated_to == []


def test_navigator_clear_filters_drops_query():
    page = _PageSpy(route="/expenses?search=cof&page=2")
    navigator = FilterNavigator(page, "/expenses")

    assert navigator.clear_filters() == "/expenses"
    assert page.navigated_to == ["/expenses"]


def test_navigator_ignores_query_of_another_path():
    """A stale route from another screen never leaks its filters."""

    page = _PageSpy(route="/income?search=salary")
    navigator = FilterNavigator(page, "/expenses")

    assert navigator.route_for({"page": 2}) == "/expenses?page=2"
