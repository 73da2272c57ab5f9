"""Tests for the REST client and its error mapping."""

from __future__ import annotations

import httpx
import pytest

from ledgr.api.client import ApiClient
from ledgr.api.errors import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ServerError,
    TransportError,
    ValidationError,
    error_for_status,
)
from ledgr.api.session import AuthSession


def _client(config, handler, token="secret-token"):
    return ApiClient(config, AuthSession(token=token), transport=httpx.MockTransport(handler))


def test_bearer_token_is_sent_on_every_request(config):
    seen = []

    def handler(request):
        seen.append(request.headers.get("Authorization"))
        return httpx.Response(200, json=[])

    with _client(config, handler) as client:
        client.get("/expenses")
        client.session.token = "rotated"
        client.get("/expenses")

    assert seen == ["Bearer secret-token", "Bearer rotated"]


def test_no_authorization_header_when_signed_out(config):
    seen = []

    def handler(request):
        seen.append("Authorization" in request.headers)
        return httpx.Response(200, json={})

    with _client(config, handler, token=None) as client:
        client.get("/categories")

    assert seen == [False]


def test_empty_params_are_not_sent(config, api):
    with ApiClient(config, AuthSession(token="t"), transport=httpx.MockTransport(api)) as client:
        client.get("/expenses", {"search": "", "category_id": None, "page": 2})

    assert api.query(api.requests[0]) == {"page": "2"}
    assert str(api.requests[0].url).startswith("https://api.test/api/expenses?")


def test_empty_body_returns_none(config):
    with _client(config, lambda request: httpx.Response(204)) as client:
        assert client.delete("/expenses/1") is None


@pytest.mark.parametrize(
    ("status", "error_cls"),
    [
        (400, ValidationError),
        (401, AuthenticationError),
        (403, AuthorizationError),
        (404, NotFoundError),
        (409, ConflictError),
        (422, ValidationError),
        (429, ServerError),
        (500, ServerError),
    ],
)
def test_status_codes_map_to_typed_errors(status, error_cls):
    error = error_for_status(status, None)

    assert type(error) is error_cls
    assert error.status_code == status
    assert error.message == error_cls.default_message


def test_server_message_and_field_errors_are_kept(config):
    body = {"message": "The amount field is required.", "errors": {"amount": ["The amount field is required."], "date": "Bad date"}}

    with _client(config, lambda request: httpx.Response(422, json=body)) as client:
        with pytest.raises(ValidationError) as excinfo:
            client.post("/expenses", {})

    error = excinfo.value
    assert error.message == "The amount field is required."
    assert error.field_error("amount") == "The amount field is required."
    assert error.errors["date"] == ["Bad date"]
    assert error.field_error("category_id") is None


def test_non_json_error_body_uses_default_message(config):
    with _client(config, lambda request: httpx.Response(502, text="<html>Bad gateway</html>")) as client:
        with pytest.raises(ServerError) as excinfo:
            client.get("/dashboard/stats")

    assert excinfo.value.message == ServerError.default_message


def test_timeout_becomes_transport_error(config):
    def handler(request):
        raise httpx.ReadTimeout("slow", request=request)

    with _client(config, handler) as client:
        with pytest.raises(TransportError) as excinfo:
            client.get("/expenses")

    assert excinfo.value.message == "The server took too long to respond"


def test_connection_failure_becomes_transport_error(config):
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    with _client(config, handler) as client:
        with pytest.raises(TransportError) as excinfo:
            client.get("/expenses")

    assert excinfo.value.message == "Unable to reach the server"
    assert excinfo.value.status_code is None
