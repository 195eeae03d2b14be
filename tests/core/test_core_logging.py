"""
Tests for structured logging and exception defaults
"""

import json
import logging

import pytest

from content_factory.core import (
    AuthorizationError,
    ContentFactoryError,
    GenerationError,
    LogTimer,
    NotFoundError,
    PreconditionError,
    ResponseParseError,
    ResponseValidationError,
    clear_context,
    get_logger,
    set_project_id,
    set_request_id,
)
from content_factory.core.logging import REDACTED, StructuredFormatter, redact


def _record(logger_name="content_factory.test", **extra):
    record = logging.LogRecord(logger_name, logging.INFO, __file__, 1, "hello", (), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestStructuredFormatter:
    def test_includes_correlation_ids_and_extra(self):
        set_request_id("req-1")
        set_project_id("proj-1")
        try:
            payload = json.loads(StructuredFormatter().format(_record(stage_key="mining")))
        finally:
            clear_context()

        assert payload["message"] == "hello"
        assert payload["request_id"] == "req-1"
        assert payload["project_id"] == "proj-1"
        assert payload["extra"]["stage_key"] == "mining"

    def test_credentials_are_redacted(self):
        payload = json.loads(StructuredFormatter().format(
            _record(api_key="sk-live", body={"password": "p", "ok": 1})
        ))
        assert payload["extra"]["api_key"] == REDACTED
        assert payload["extra"]["body"] == {"password": REDACTED, "ok": 1}


def test_redact_nested_lists():
    assert redact("tokens", ["a", "b"]) == [REDACTED, REDACTED]
    assert redact("items", [{"secret": "x"}]) == [{"secret": REDACTED}]


def test_adapter_merges_bound_context(caplog):
    logger = get_logger("content_factory.test_adapter", component="mining")
    with caplog.at_level(logging.INFO, logger="content_factory.test_adapter"):
        logger.info("Topics mined", extra={"count": 3})
    record = caplog.records[-1]
    assert record.component == "mining"
    assert record.count == 3


def test_log_timer_records_failure(caplog):
    logger = get_logger("content_factory.test_timer")
    with caplog.at_level(logging.INFO, logger="content_factory.test_timer"):
        with pytest.raises(GenerationError):
            with LogTimer(logger, "mining generation"):
                raise GenerationError("boom")
    messages = [r.getMessage() for r in caplog.records]
    assert "Starting: mining generation" in messages
    assert "Failed: mining generation" in messages


class TestExceptions:
    def test_status_codes(self):
        assert AuthorizationError().status_code == 403
        assert NotFoundError().status_code == 404
        assert PreconditionError().status_code == 400
        assert GenerationError().status_code == 500

    def test_default_message_is_docstring(self):
        assert ResponseValidationError().message == "Invalid AI response format"
        assert AuthorizationError().message == "Forbidden"
        assert NotFoundError("Topic not found").message == "Topic not found"

    def test_parse_error_is_a_response_validation_error(self):
        error = ResponseParseError("bad", raw_text="{", truncated=True)
        assert isinstance(error, ResponseValidationError)
        assert isinstance(error, ContentFactoryError)
        assert error.truncated and error.raw_text == "{"
