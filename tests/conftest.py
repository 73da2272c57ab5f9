"""Pytest configuration and shared fixtures for Ledgr tests.

The REST API is replaced by :class:`FakeApi`, a scripted handler mounted on
``httpx.MockTransport``, so repositories, services and views run against the
real client without touching the network.
"""

from __future__ import annotations

import json
from typing import Any, Callable, Optional

import flet as ft
import httpx
import pytest

from ledgr.api.session import AuthSession
from ledgr.config import BaseConfig
from ledgr.desktop.context import create_app_context
from ledgr.models.user import User

API_URL = "https://api.test/api"
API_PREFIX = "/api"


# =============================================================================
# Fake REST backend
# =============================================================================


class FakeApi:
    """Scripted REST backend that records every request it receives.

    Responses are queued per ``(method, path)``; the last one is repeated once
    the queue runs down. Unscripted GETs answer ``[]`` and writes answer with an
    empty body.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._routes: dict[tuple[str, str], list[tuple[int, Any]]] = {}

    def on(self, method: str, path: str, body: Any = None, status: int = 200) -> "FakeApi":
        self._routes.setdefault((method.upper(), path), []).append((status, body))
        return self

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix(API_PREFIX)
        queue = self._routes.get((request.method, path))
        if queue:
            status, body = queue.pop(0) if len(queue) > 1 else queue[0]
        else:
            status, body = 200, ([] if request.method == "GET" else None)
        if callable(body):
            body = body(request)
        if body is None:
            return httpx.Response(status)
        return httpx.Response(status, json=body)

    def calls(self, method: Optional[str] = None, path: Optional[str] = None) -> list[httpx.Request]:
        return [
            request
            for request in self.requests
            if (method is None or request.method == method)
            and (path is None or request.url.path.removeprefix(API_PREFIX) == path)
        ]

    @staticmethod
    def query(request: httpx.Request) -> dict[str, str]:
        return dict(request.url.params)

    @staticmethod
    def body(request: httpx.Request) -> Any:
        return json.loads(request.content) if request.content else None


# =============================================================================
# Timers and pages
# =============================================================================


class ManualTimer:
    """Timer that only fires when the test says so."""

    def __init__(self, delay: float, callback: Callable[[], None]):
        self.delay = delay
        self.callback = callback
        self.started = False
        self.cancelled = False
        self.fired = False

    def start(self) -> None:
        self.started = True

    def cancel(self) -> None:
        self.cancelled = True

    def fire(self) -> None:
        self.fired = True
        self.callback()


class ManualClock:
    """Timer factory for ``SearchDebouncer``; ``elapse`` runs due timers."""

    def __init__(self) -> None:
        self.timers: list[ManualTimer] = []

    def __call__(self, delay: float, callback: Callable[[], None]) -> ManualTimer:
        timer = ManualTimer(delay, callback)
        self.timers.append(timer)
        return timer

    def elapse(self) -> None:
        for timer in list(self.timers):
            if timer.started and not timer.cancelled and not timer.fired:
                timer.fire()


class DummyPage:
    """Minimal stand-in for flet.Page used in view builders and router tests.

    ``on_go`` lets a test play the router: it is called with every new route.
    """

    def __init__(self, route: str = "/"):
        self.route = route
        self.history: list[str] = []
        self.views: list[ft.View] = []
        self.dialog = None
        self.snack_bar = None
        self.overlay: list[ft.Control] = []
        self.updates = 0
        self.theme_mode = ft.ThemeMode.LIGHT
        self.on_go: Optional[Callable[[str], Any]] = None

    def go(self, route: str) -> None:
        self.route = route
        self.history.append(route)
        if self.on_go is not None:
            self.on_go(route)

    def update(self, *_controls) -> None:
        self.updates += 1

    @property
    def snack_message(self) -> Optional[str]:
        if self.snack_bar is None:
            return None
        return self.snack_bar.content.value


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def config(tmp_path, monkeypatch) -> BaseConfig:
    """Configuration isolated to a temporary data directory."""

    monkeypatch.setenv("LEDGR_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("LEDGR_DEV_MODE", "0")
    monkeypatch.setenv("LEDGR_API_URL", API_URL)
    for name in (
        "LEDGR_PER_PAGE",
        "LEDGR_REQUEST_TIMEOUT",
        "LEDGR_SEARCH_DEBOUNCE_MS",
        "LEDGR_SEARCH_MIN_LENGTH",
        "LEDGR_CURRENCY",
    ):
        monkeypatch.delenv(name, raising=False)
    return BaseConfig()


@pytest.fixture
def api() -> FakeApi:
    return FakeApi()


@pytest.fixture
def user() -> User:
    return User(id=1, name="Ada", email="ada@example.com")


@pytest.fixture
def ctx(config, api, user):
    """Signed-in application context talking to the fake backend."""

    context = create_app_context(
        config,
        transport=httpx.MockTransport(api),
        session=AuthSession(token="test-token", user=user),
    )
    yield context
    context.close()


@pytest.fixture
def anonymous_ctx(config, api):
    context = create_app_context(config, transport=httpx.MockTransport(api), session=AuthSession())
    yield context
    context.close()


@pytest.fixture
def page() -> DummyPage:
    return DummyPage()


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


# =============================================================================
# Payload factories
# =============================================================================


@pytest.fixture
def category_factory():
    def _make(id: int = 4, name: str = "Food", type: str = "expense", user_id: Optional[int] = 1) -> dict:
        return {"id": id, "name": name, "type": type, "icon": None, "color": "#ff8800", "user_id": user_id}

    return _make


@pytest.fixture
def expense_factory(category_factory):
    def _make(id: int = 1, amount: str = "12.50", description: str = "Coffee", **overrides) -> dict:
        payload = {
            "id": id,
            "amount": amount,
            "description": description,
            "date": "2024-05-01T00:00:00.000000Z",
            "category": category_factory(),
            "bank_account": {"id": 3, "bank_name": "City Bank", "account_number": "1234567890", "balance": "900.00"},
            "fund_source": None,
            "loan": None,
        }
        payload.update(overrides)
        return payload

    return _make


def _paginated(items: list, *, current_page: int = 1, last_page: int = 1, per_page: int = 15, total: Optional[int] = None) -> dict:
    """Laravel-style paginated list body."""

    count = len(items)
    start = (current_page - 1) * per_page + 1 if count else 0
    return {
        "data": items,
        "current_page": current_page,
        "last_page": last_page,
        "per_page": per_page,
        "total": count if total is None else total,
        "from": start,
        "to": start + count - 1 if count else 0,
    }


@pytest.fixture
def paginated():
    return _paginated

