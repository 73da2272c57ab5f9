"""Tests for structured logging functionality."""

from __future__ import annotations

import json
import logging

from ledgr.logging_config import (
    JSONFormatter,
    RedactingFilter,
    get_logger,
    redact,
    session_log_path,
    setup_logging,
)


def _record(msg="Test message", **extra):
    record = logging.LogRecord(
        name="test.logger",
        level=logging.INFO,
        pathname="test.py",
        lineno=42,
        msg=msg,
        args=(),
        exc_info=None,
    )
    record.module = "test_module"
    record.funcName = "test_function"
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter():
    """Test that JSONFormatter correctly formats log records."""
    log_data = json.loads(JSONFormatter().format(_record()))

    assert log_data["level"] == "INFO"
    assert log_data["logger"] == "test.logger"
    assert log_data["message"] == "Test message"
    assert log_data["where"] == "test_module.test_function:42"
    assert "timestamp" in log_data


def test_json_formatter_with_extra_fields():
    """Test that JSONFormatter includes extra fields."""
    log_data = json.loads(JSONFormatter().format(_record(status=422, path="/expenses")))

    assert log_data["extra"] == {"status": 422, "path": "/expenses"}


def test_json_formatter_with_exception():
    """Test that JSONFormatter correctly handles exceptions."""
    try:
        raise ValueError("Test error")
    except ValueError:
        import sys

        exc_info = sys.exc_info()

    record = _record("Error occurred")
    record.exc_info = exc_info
    log_data = json.loads(JSONFormatter().format(record))

    assert log_data["exception"].startswith("Traceback")
    assert "ValueError: Test error" in log_data["exception"]


def test_redact_masks_bearer_tokens():
    assert redact("Authorization: Bearer 12|abcDEF.ghi") == "Authorization: Bearer ***"
    assert redact("nothing to hide") == "nothing to hide"


def test_redacting_filter_masks_secret_extras():
    record = _record("Sending Bearer abc123", token="abc123", password="pw", status=200)

    assert RedactingFilter().filter(record) is True
    assert record.msg == "Sending Bearer ***"
    assert record.token == "***"
    assert record.password == "***"
    assert record.status == 200


def test_get_logger_nests_under_package():
    assert get_logger("ledgr.api.client").name == "ledgr.api.client"
    assert get_logger("widgets").name == "ledgr.widgets"


def test_setup_logging_writes_json_file_without_secrets(config):
    """Child logger records reach the file with credentials masked."""

    logger = setup_logging(config)
    try:
        get_logger("ledgr.tests").info("Signed in with Bearer s3cr3t", extra={"token": "s3cr3t"})
        for handler in logger.handlers:
            handler.flush()

        log_file = config.DATA_DIR / "logs" / "ledgr.log"
        lines = [json.loads(line) for line in log_file.read_text(encoding="utf-8").splitlines()]
        entry = next(line for line in lines if line["logger"] == "ledgr.tests")
        assert entry["message"] == "Signed in with Bearer ***"
        assert entry["extra"]["token"] == "***"
        assert "s3cr3t" not in log_file.read_text(encoding="utf-8")
        assert session_log_path().parent == config.DATA_DIR / "logs"
    finally:
        for handler in list(logger.handlers):
            handler.close()
        logger.handlers.clear()


def test_setup_logging_does_not_stack_handlers(config):
    logger = setup_logging(config)
    try:
        count = len(logger.handlers)
        setup_logging(config)
        assert len(logger.handlers) == count == 3
    finally:
        for handler in list(logger.handlers):
            handler.close()
        logger.handlers.clear()
