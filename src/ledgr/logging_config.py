"""Structured logging configuration with JSON output and rotation."""

from __future__ import annotations

import atexit
import json
import logging
import logging.handlers
import re
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import List

from .config import BaseConfig

ROOT_LOGGER_NAME = "ledgr"

_SESSION_BUFFER: List[str] = []
_SESSION_START = datetime.now()
_SESSION_LOG_PATH: Path | None = None
_FLUSH_REGISTERED = False

_BEARER_PATTERN = re.compile(r"(Bearer\s+)[A-Za-z0-9\-._~+/|]+=*", re.IGNORECASE)
_SECRET_KEYS = {"token", "password", "password_confirmation", "authorization"}


def redact(text: str) -> str:
    """Mask bearer tokens embedded in free text."""

    return _BEARER_PATTERN.sub(r"\1***", text)


class RedactingFilter(logging.Filter):
    """Strip credentials from messages and ``extra`` payloads before emit."""

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: D401
        if isinstance(record.msg, str):
            record.msg = redact(record.msg)
        for key in list(record.__dict__):
            if key.lower() in _SECRET_KEYS:
                record.__dict__[key] = "***"
        return True


class SessionBufferHandler(logging.Handler):
    """In-memory handler collecting every line of the current app session.

    Flushed to a timestamped file when the application exits.
    """

    def __init__(self, formatter: logging.Formatter):
        super().__init__()
        self._formatter = formatter

    def emit(self, record: logging.LogRecord) -> None:  # noqa: D401
        try:
            _SESSION_BUFFER.append(self._formatter.format(record))
        except Exception:  # pragma: no cover - never let logging break the UI
            self.handleError(record)


class JSONFormatter(logging.Formatter):
    """One JSON object per line; ``extra`` keys are nested under ``extra``."""

    _RESERVED = frozenset(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime"}

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "where": f"{record.module}.{record.funcName}:{record.lineno}",
        }
        extra = {key: value for key, value in vars(record).items() if key not in self._RESERVED}
        if extra:
            payload["extra"] = extra
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def _flush_session() -> None:  # pragma: no cover - runs at interpreter exit
    if not _SESSION_BUFFER or _SESSION_LOG_PATH is None:
        return
    try:
        _SESSION_LOG_PATH.parent.mkdir(parents=True, exist_ok=True)
        with _SESSION_LOG_PATH.open("w", encoding="utf-8") as handle:
            handle.write("# Ledgr session log\n")
            handle.write(f"# Started: {_SESSION_START.isoformat()}\n")
            handle.write(f"# Entries: {len(_SESSION_BUFFER)}\n\n")
            for line in _SESSION_BUFFER:
                handle.write(line + "\n")
    except OSError as exc:
        sys.stderr.write(f"Failed to flush session log: {exc}\n")


def setup_logging(config: BaseConfig) -> logging.Logger:
    """Configure the ``ledgr`` logger tree.

    Console output is human readable (verbose in dev mode), the rotating file
    under ``DATA_DIR/logs`` is JSON, and a session buffer keeps every console
    line for post-mortem inspection. Calling this twice replaces the handlers
    instead of stacking them.

    Args:
        config: Application configuration with DATA_DIR and DEV_MODE

    Returns:
        Configured package logger
    """
    global _SESSION_LOG_PATH, _FLUSH_REGISTERED  # noqa: PLW0603

    logs_dir = Path(config.DATA_DIR) / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(logging.DEBUG if config.DEV_MODE else logging.INFO)
    for handler in list(root_logger.handlers):
        handler.close()
    root_logger.handlers.clear()
    # handler filters also see records propagated from child loggers
    redactor = RedactingFilter()

    if config.DEV_MODE:
        console_formatter = logging.Formatter(
            fmt="[%(asctime)s] %(levelname)-8s [%(name)s.%(funcName)s:%(lineno)d] %(message)s",
            datefmt="%H:%M:%S",
        )
    else:
        console_formatter = logging.Formatter(
            fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO if config.DEV_MODE else logging.WARNING)
    console_handler.setFormatter(console_formatter)
    console_handler.addFilter(redactor)
    root_logger.addHandler(console_handler)

    log_file = logs_dir / "ledgr.log"
    file_handler = logging.handlers.RotatingFileHandler(
        filename=log_file,
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(JSONFormatter())
    file_handler.addFilter(redactor)
    root_logger.addHandler(file_handler)

    session_handler = SessionBufferHandler(console_formatter)
    session_handler.setLevel(logging.DEBUG)
    session_handler.addFilter(redactor)
    root_logger.addHandler(session_handler)

    _SESSION_LOG_PATH = logs_dir / _SESSION_START.strftime("session_%Y%m%d_%H%M%S.log")
    if not _FLUSH_REGISTERED:
        atexit.register(_flush_session)
        _FLUSH_REGISTERED = True

    root_logger.info(
        "Logging initialized",
        extra={
            "dev_mode": config.DEV_MODE,
            "log_file": str(log_file),
            "api_base_url": config.API_BASE_URL,
        },
    )
    return root_logger


def get_logger(name: str) -> logging.Logger:
    """Return a logger nested under the package logger.

    Module ``__name__`` values already start with ``ledgr`` and are used as-is.
    """
    if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def session_log_path() -> Path | None:
    """Return the path where the in-memory session log will be flushed on exit."""
    return _SESSION_LOG_PATH
