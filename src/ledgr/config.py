"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    """Read a positive integer from the environment."""

    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


def _env_float(name: str, default: float) -> float:
    """Read a positive float from the environment."""

    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "Ledgr"
    SESSION_FILENAME = "session.json"
    DEFAULT_API_URL = "http://localhost:8000/api"

    def __init__(self) -> None:
        self.DEV_MODE = _env_bool("LEDGR_DEV_MODE", default=True)
        self.DATA_DIR = self._resolve_data_dir()
        self.API_BASE_URL = os.getenv("LEDGR_API_URL", self.DEFAULT_API_URL).rstrip("/")
        self.PER_PAGE = _env_int("LEDGR_PER_PAGE", 15)
        self.REQUEST_TIMEOUT = _env_float("LEDGR_REQUEST_TIMEOUT", 10.0)
        self.SEARCH_DEBOUNCE_MS = _env_int("LEDGR_SEARCH_DEBOUNCE_MS", 800)
        self.SEARCH_MIN_LENGTH = _env_int("LEDGR_SEARCH_MIN_LENGTH", 2)
        self.CURRENCY = os.getenv("LEDGR_CURRENCY", "LKR").strip().upper() or "LKR"
        if not self.DEV_MODE and not self.API_BASE_URL.startswith("https://"):
            raise ValueError("LEDGR_API_URL must use https:// in non-dev mode.")

    def _resolve_data_dir(self) -> Path:
        """Return the directory where the session token and logs live."""

        data_root = os.getenv("LEDGR_DATA_DIR", "instance")
        base_path = Path(data_root).expanduser()
        try:
            path = base_path.resolve()
            path.mkdir(parents=True, exist_ok=True)
            return path
        except PermissionError:
            # Protected install locations fall back to user-local storage.
            local_app_data = os.getenv("LOCALAPPDATA") or (Path.home() / "AppData" / "Local")
            fallback_path = Path(local_app_data).expanduser() / self.APP_NAME
            fallback_path.mkdir(parents=True, exist_ok=True)
            return fallback_path.resolve()

    @property
    def session_path(self) -> Path:
        """Location of the persisted bearer token."""

        return self.DATA_DIR / self.SESSION_FILENAME

    @property
    def search_debounce_seconds(self) -> float:
        return self.SEARCH_DEBOUNCE_MS / 1000.0


class DevConfig(BaseConfig):
    """Development configuration against a local API."""

    DEBUG = True
    TESTING = False
