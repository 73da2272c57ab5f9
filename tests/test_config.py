"""Tests for environment-driven configuration."""

from __future__ import annotations

import pytest

from ledgr.config import BaseConfig


def test_defaults(config, tmp_path):
    assert config.DEV_MODE is False
    assert config.API_BASE_URL == "https://api.test/api"
    assert config.PER_PAGE == 15
    assert config.REQUEST_TIMEOUT == 10.0
    assert config.SEARCH_DEBOUNCE_MS == 800
    assert config.search_debounce_seconds == 0.8
    assert config.SEARCH_MIN_LENGTH == 2
    assert config.CURRENCY == "LKR"
    assert config.DATA_DIR == (tmp_path / "data").resolve()
    assert config.DATA_DIR.is_dir()
    assert config.session_path == config.DATA_DIR / "session.json"


def test_overrides(config, monkeypatch):
    monkeypatch.setenv("LEDGR_PER_PAGE", "50")
    monkeypatch.setenv("LEDGR_SEARCH_DEBOUNCE_MS", "300")
    monkeypatch.setenv("LEDGR_CURRENCY", "usd")
    monkeypatch.setenv("LEDGR_API_URL", "https://example.org/api/")

    overridden = BaseConfig()

    assert overridden.PER_PAGE == 50
    assert overridden.search_debounce_seconds == 0.3
    assert overridden.CURRENCY == "USD"
    assert overridden.API_BASE_URL == "https://example.org/api"


def test_plain_http_requires_dev_mode(config, monkeypatch):
    monkeypatch.setenv("LEDGR_API_URL", "http://localhost:8000/api")

    with pytest.raises(ValueError, match="https"):
        BaseConfig()

    monkeypatch.setenv("LEDGR_DEV_MODE", "true")
    assert BaseConfig().API_BASE_URL == "http://localhost:8000/api"


@pytest.mark.parametrize("value", ["zero", "0", "-3"])
def test_invalid_page_size_is_rejected(config, monkeypatch, value):
    monkeypatch.setenv("LEDGR_PER_PAGE", value)

    with pytest.raises(ValueError, match="LEDGR_PER_PAGE"):
        BaseConfig()
