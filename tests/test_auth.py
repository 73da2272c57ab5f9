"""Tests for sign in, registration, sign out and token persistence."""

from __future__ import annotations

import json

import httpx
import pytest

from ledgr.api.errors import AuthenticationError, ValidationError
from ledgr.api.session import AuthSession, TokenStore
from ledgr.desktop.context import create_app_context
from ledgr.models.user import User
from ledgr.services import auth

USER = {"id": 1, "name": "Ada", "email": "ada@example.com", "currency": "usd"}


def test_login_stores_token_and_user(anonymous_ctx, api):
    api.on("POST", "/login", {"token": "abc123", "user": USER})

    user = auth.login(anonymous_ctx.client, anonymous_ctx.session, " Ada@Example.com ", "pw")

    assert user.name == "Ada"
    assert anonymous_ctx.session.token == "abc123"
    assert api.body(api.calls("POST", "/login")[0]) == {"email": "ada@example.com", "password": "pw"}
    assert anonymous_ctx.currency == "USD"


def test_login_accepts_wrapped_access_token(anonymous_ctx, api):
    api.on("POST", "/login", {"data": {"access_token": "xyz", "user": USER}})

    auth.login(anonymous_ctx.client, anonymous_ctx.session, "ada@example.com", "pw")

    assert anonymous_ctx.session.token == "xyz"


def test_login_rejects_response_without_token(anonymous_ctx, api):
    api.on("POST", "/login", {"user": USER})

    with pytest.raises(AuthenticationError):
        auth.login(anonymous_ctx.client, anonymous_ctx.session, "ada@example.com", "pw")

    assert not anonymous_ctx.session.is_authenticated


def test_wrong_credentials_surface_server_message(anonymous_ctx, api):
    api.on("POST", "/login", {"message": "Invalid credentials"}, status=401)

    with pytest.raises(AuthenticationError) as excinfo:
        auth.login(anonymous_ctx.client, anonymous_ctx.session, "ada@example.com", "wrong")

    assert excinfo.value.message == "Invalid credentials"
    assert anonymous_ctx.session.token is None


def test_invalid_email_is_rejected_locally(anonymous_ctx, api):
    with pytest.raises(ValidationError) as excinfo:
        auth.login(anonymous_ctx.client, anonymous_ctx.session, "not-an-email", "pw")

    assert excinfo.value.field_error("email") == "Enter a valid email address"
    assert api.requests == []


def test_register_checks_confirmation_before_sending(anonymous_ctx, api):
    fields = {"name": "Ada", "email": "ada@example.com", "password": "longenough", "password_confirmation": "nope"}

    with pytest.raises(ValidationError) as excinfo:
        auth.register(anonymous_ctx.client, anonymous_ctx.session, fields)

    assert excinfo.value.field_error("password_confirmation") == "Passwords do not match"
    assert api.requests == []


def test_register_signs_in(anonymous_ctx, api):
    api.on("POST", "/register", {"token": "new-token", "user": USER}, status=201)
    fields = {"name": "Ada", "email": "ada@example.com", "password": "longenough", "password_confirmation": "longenough"}

    auth.register(anonymous_ctx.client, anonymous_ctx.session, fields)

    assert anonymous_ctx.session.token == "new-token"
    assert api.body(api.requests[0])["name"] == "Ada"


def test_logout_clears_session_even_when_server_fails(ctx, api):
    api.on("POST", "/logout", {"message": "boom"}, status=500)

    auth.logout(ctx.client, ctx.session)

    assert len(api.calls("POST", "/logout")) == 1
    assert ctx.session.token is None
    assert ctx.session.user is None


def test_logout_when_signed_out_sends_nothing(anonymous_ctx, api):
    auth.logout(anonymous_ctx.client, anonymous_ctx.session)

    assert api.requests == []


def test_token_store_round_trip(tmp_path):
    store = TokenStore(tmp_path / "nested" / "session.json")
    store.save("abc", User(id=2, name="Grace", email="grace@example.com"))

    token, user = store.load()

    assert token == "abc"
    assert user.email == "grace@example.com"

    store.clear()
    assert store.load() == (None, None)
    store.clear()


def test_token_store_ignores_unreadable_file(tmp_path):
    path = tmp_path / "session.json"
    path.write_text("{not json", encoding="utf-8")

    assert TokenStore(path).load() == (None, None)


def test_session_persists_across_launches(config, api):
    """A token saved at sign in is restored by the next app context."""

    api.on("POST", "/login", {"token": "persisted", "user": USER})
    first = create_app_context(config, transport=httpx.MockTransport(api))
    assert not first.is_authenticated
    auth.login(first.client, first.session, "ada@example.com", "pw")
    first.close()

    saved = json.loads(config.session_path.read_text(encoding="utf-8"))
    assert saved["token"] == "persisted"

    second = create_app_context(config, transport=httpx.MockTransport(api))
    try:
        assert second.is_authenticated
        assert second.current_user.name == "Ada"
    finally:
        second.close()


def test_sign_in_requires_token():
    with pytest.raises(ValueError):
        AuthSession().sign_in("")
