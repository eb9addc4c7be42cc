"""Tests for sensitive data filtering in logs."""

from __future__ import annotations

import json
import logging
from io import StringIO

import pytest

from user_admin.core.logging import (
    JsonFormatter,
    RequestIdFilter,
    SensitiveDataFilter,
    clear_request_id,
    redact,
    set_request_id,
)


@pytest.fixture
def capture():
    logger = logging.getLogger("test_user_admin_logging")
    logger.setLevel(logging.INFO)
    logger.handlers.clear()
    logger.propagate = False

    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.addFilter(RequestIdFilter())
    handler.addFilter(SensitiveDataFilter())
    handler.setFormatter(JsonFormatter())
    logger.addHandler(handler)

    def lines() -> list[dict]:
        return [json.loads(line) for line in stream.getvalue().splitlines()]

    yield logger, lines
    logger.handlers.clear()


def test_email_is_redacted(capture):
    logger, lines = capture

    logger.info("users.created", extra={"user_id": 4, "email": "ann@x.com"})

    record = lines()[0]
    assert record["message"] == "users.created"
    assert record["user_id"] == 4
    assert record["email"] == "[REDACTED]"
    assert "ann@x.com" not in json.dumps(record)


def test_credentials_redacted_in_nested_fields(capture):
    logger, lines = capture

    logger.info(
        "database.configured",
        extra={
            "connection": {"database_url": "postgresql://u:pw@db/users", "pool_size": 5},
            "headers": [{"authorization": "Bearer abc"}],
        },
    )

    record = lines()[0]
    assert record["connection"] == {"database_url": "[REDACTED]", "pool_size": 5}
    assert record["headers"] == [{"authorization": "[REDACTED]"}]


def test_safe_fields_pass_through(capture):
    logger, lines = capture

    logger.info(
        "http.request",
        extra={"method": "GET", "path": "/api/users", "status_code": 200, "duration_ms": 1.5},
    )

    record = lines()[0]
    assert record["path"] == "/api/users"
    assert record["status_code"] == 200
    assert "[REDACTED]" not in json.dumps(record)


def test_request_id_attached_from_context(capture):
    logger, lines = capture

    set_request_id("req-123")
    try:
        logger.warning("rate_limit.exceeded", extra={"count": 50, "limit": 50})
    finally:
        clear_request_id()

    record = lines()[0]
    assert record["request_id"] == "req-123"
    assert record["level"] == "warning"


def test_redact_leaves_scalars_alone():
    assert redact("ann@x.com") == "ann@x.com"
    assert redact({"Email": "ann@x.com"}) == {"Email": "[REDACTED]"}
    assert redact(("a", {"token": "t"})) == ("a", {"token": "[REDACTED]"})
