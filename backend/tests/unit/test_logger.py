"""Unit tests for the logging utility."""

from __future__ import annotations

import io
import json
import logging

import pytest
from socialapp.core.logger import (
    JSONFormatter,
    configure_logging,
    ensure_request_id,
    resolve_level,
)


@pytest.fixture()
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def test_configure_logging_sets_level(restore_root_logger) -> None:
    """``configure_logging`` should set the root logger level."""

    # Act
    configure_logging("DEBUG")

    # Assert
    assert restore_root_logger.level == logging.DEBUG
    assert len(restore_root_logger.handlers) == 1


@pytest.mark.parametrize("raw,expected", [("debug", 10), (" warning ", 30), (40, 40), ("nonsense", 20)])
def test_resolve_level(raw, expected) -> None:
    assert resolve_level(raw) == expected


def test_json_formatter_emits_single_line_json() -> None:
    # Arrange
    record = logging.LogRecord("socialapp.test", logging.INFO, __file__, 1, "post.created", None, None)
    record.request_id = "req-1"
    record.post_id = 5
    record.user_id = 9

    # Act
    line = JSONFormatter().format(record)

    # Assert
    payload = json.loads(line)
    assert "\n" not in line
    assert payload["message"] == "post.created"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "socialapp.test"
    assert payload["request_id"] == "req-1"
    assert (payload["post_id"], payload["user_id"]) == (5, 9)
    assert "elapsed_ms" not in payload


def test_records_carry_request_id_inside_a_request(app, restore_root_logger) -> None:
    # Arrange
    stream = io.StringIO()
    configure_logging("INFO", stream=stream)

    # Act
    with app.app_context(), app.test_request_context("/api/v1/health", headers={"X-Request-ID": "abc-123"}):
        logging.getLogger("socialapp.test").info("inside.request")

    # Assert
    payload = json.loads(stream.getvalue().strip().splitlines()[-1])
    assert payload["request_id"] == "abc-123"
    assert payload["path"] == "/api/v1/health"


def test_request_id_taken_from_header(app) -> None:
    with app.app_context(), app.test_request_context(headers={"X-Correlation-ID": "corr-9"}):
        assert ensure_request_id() == "corr-9"
        assert ensure_request_id() == "corr-9"


def test_request_id_generated_once_per_request(app) -> None:
    with app.app_context(), app.test_request_context():
        first = ensure_request_id()
        assert first
        assert ensure_request_id() == first
