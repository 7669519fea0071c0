"""Tests for the structured logging system (flowsync_kernel/logging_config.py)."""

import json
import logging
from datetime import date
from decimal import Decimal
from io import StringIO

import pytest

from flowsync_kernel.exceptions import InvalidTransitionError
from flowsync_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    get_logger,
    reset_logging,
)


@pytest.fixture(autouse=True)
def _clean_logging():
    """Reset logging state between tests, then restore the suite configuration."""
    reset_logging()
    LogContext.clear()
    yield
    LogContext.clear()
    reset_logging()
    configure_logging(level=logging.DEBUG)


def _make_handler() -> tuple[logging.Handler, StringIO]:
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    return handler, stream


def _parse_log(stream: StringIO) -> dict:
    """Parse the first JSON log line from a stream."""
    line = stream.getvalue().strip().split("\n")[0]
    return json.loads(line)


class TestStructuredFormatter:

    def test_basic_json_output(self):
        handler, stream = _make_handler()
        configure_logging(handler=handler)
        get_logger("test").info("hello")

        record = _parse_log(stream)
        assert record["level"] == "INFO"
        assert record["message"] == "hello"
        assert record["logger"] == "flowsync.test"
        assert "ts" in record

    def test_extra_fields_serialized(self):
        handler, stream = _make_handler()
        configure_logging(handler=handler)
        get_logger("test").info("wip", extra={
            "amount": Decimal("4465.00"),
            "work_date": date(2023, 10, 25),
            "count": 3,
        })

        record = _parse_log(stream)
        assert record["amount"] == "4465.00"
        assert record["work_date"] == "2023-10-25"
        assert record["count"] == 3

    def test_context_fields_included(self):
        handler, stream = _make_handler()
        configure_logging(handler=handler)
        LogContext.set(correlation_id="req-1", actor_id="manager")
        get_logger("test").info("approved")

        record = _parse_log(stream)
        assert record["correlation_id"] == "req-1"
        assert record["actor_id"] == "manager"

    def test_structured_exception_fields(self):
        handler, stream = _make_handler()
        configure_logging(handler=handler)
        try:
            raise InvalidTransitionError("invoice", "Draft", "record_payment")
        except InvalidTransitionError:
            get_logger("test").error("failed", exc_info=True)

        record = _parse_log(stream)
        assert record["exc_type"] == "InvalidTransitionError"
        assert record["exc_code"] == "INVALID_TRANSITION"
        assert record["exc_from_state"] == "Draft"
        assert record["exc_action"] == "record_payment"
        assert "traceback" in record


class TestLogContext:

    def test_bind_restores_previous_values(self):
        LogContext.set(employee_id="e1")
        with LogContext.bind(employee_id="e2"):
            assert LogContext.get_all()["employee_id"] == "e2"
        assert LogContext.get_all()["employee_id"] == "e1"

    def test_clear(self):
        LogContext.set(correlation_id="x")
        LogContext.clear()
        assert LogContext.get_all() == {}


class TestConfigureLogging:

    def test_idempotent(self):
        reset_logging()
        handler, _ = _make_handler()
        configure_logging(handler=handler)
        configure_logging(handler=handler)

        handlers = logging.getLogger("flowsync").handlers
        assert handlers.count(handler) == 1
        assert [h for h in handlers if isinstance(h.formatter, StructuredFormatter)] == [handler]

    def test_level_applied(self):
        handler, stream = _make_handler()
        configure_logging(level=logging.WARNING, handler=handler)
        get_logger("test").info("quiet")
        get_logger("test").warning("loud")

        assert _parse_log(stream)["message"] == "loud"
