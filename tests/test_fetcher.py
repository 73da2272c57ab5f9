"""Tests for the resource fetcher and its request fencing."""

from __future__ import annotations

from ledgr.api.envelope import Plain
from ledgr.api.errors import ServerError
from ledgr.services.fetcher import ResourceFetcher
from ledgr.services.filters import ListFilters, decode_filters


class _ScriptedRepository:
    """Repository stub; ``during_call`` runs while a request is "in flight"."""

    resource = "expenses"

    def __init__(self):
        self.calls: list[dict] = []
        self.during_call = None
        self.error = None

    def list_page(self, params):
        self.calls.append(dict(params))
        hook, self.during_call = self.during_call, None
        if hook is not None:
            hook()
        if self.error is not None:
            raise self.error
        return Plain([f"page-{params['page']}"])


def test_build_query_adds_page_and_per_page():
    fetcher = ResourceFetcher(_ScriptedRepository(), per_page=20)

    query = fetcher.build_query(decode_filters("search=cof&page=2"))

    assert query == {"search": "cof", "page": 2, "per_page": 20}


def test_fetch_delivers_current_result():
    repo = _ScriptedRepository()
    delivered = []
    fetcher = ResourceFetcher(repo, on_result=delivered.append)

    state = fetcher.fetch(ListFilters())

    assert delivered == [state]
    assert state.items == ["page-1"]
    assert state.stale is False
    assert fetcher.latest is state
    assert fetcher.fetch_count == 1


def test_older_response_arriving_last_is_discarded():
    """Only the most recently issued fetch reaches the view."""

    repo = _ScriptedRepository()
    delivered = []
    fetcher = ResourceFetcher(repo, on_result=delivered.append)
    repo.during_call = lambda: fetcher.fetch(ListFilters(page="2"))

    first = fetcher.fetch(ListFilters(page="1"))

    assert first.stale is True
    assert [state.items for state in delivered] == [["page-2"]]
    assert fetcher.latest.items == ["page-2"]
    assert [call["page"] for call in repo.calls] == [1, 2]


def test_api_error_degrades_to_empty_state():
    repo = _ScriptedRepository()
    repo.error = ServerError("Database unavailable", status_code=503)
    delivered = []
    fetcher = ResourceFetcher(repo, per_page=10, on_result=delivered.append)

    state = fetcher.fetch(ListFilters())

    assert state.items == []
    assert state.error == "Database unavailable"
    assert state.meta.per_page == 10
    assert delivered == [state]


def test_unreadable_payload_degrades_to_empty_state():
    repo = _ScriptedRepository()
    repo.error = ValueError("bad json")
    fetcher = ResourceFetcher(repo)

    state = fetcher.fetch(ListFilters())

    assert state.error == "The server returned an unreadable response"


def test_refetch_repeats_last_filters():
    repo = _ScriptedRepository()
    fetcher = ResourceFetcher(repo)
    fetcher.fetch(decode_filters("search=tea&page=3"))

    fetcher.refetch()

    assert repo.calls[-1] == {"search": "tea", "page": 3, "per_page": 15}
    assert fetcher.fetch_count == 2


def test_refetch_before_any_fetch_loads_first_page():
    repo = _ScriptedRepository()
    fetcher = ResourceFetcher(repo)

    fetcher.refetch()

    assert repo.calls == [{"page": 1, "per_page": 15}]
