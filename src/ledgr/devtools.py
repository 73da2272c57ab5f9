"""Dev-mode diagnostics printed to the terminal that launched the app."""

from __future__ import annotations

import traceback
from typing import Any, Mapping

from .config import BaseConfig
from .logging_config import get_logger, redact

logger = get_logger("dev")


def in_dev_mode(config: BaseConfig | None) -> bool:
    return config is not None and bool(getattr(config, "DEV_MODE", False))


def dev_log(
    config: BaseConfig | None,
    message: str,
    *,
    exc: BaseException | None = None,
    context: Mapping[str, Any] | None = None,
) -> None:
    """Echo ``message`` with ``key=value`` context when dev mode is on.

    Values are redacted like log records. The line is also logged at DEBUG
    so it lands in the session log.
    """

    if not in_dev_mode(config):
        return

    pairs = {key: redact(str(value)) for key, value in (context or {}).items()}
    line = f"[DEV] {message}"
    if pairs:
        line += " (" + " ".join(f"{key}={value}" for key, value in pairs.items()) + ")"
    print(line)
    logger.debug(message, extra={"dev_context": pairs})
    if exc is not None:
        traceback.print_exception(type(exc), exc, exc.__traceback__)
