"""Tests for structlog configuration helpers."""

from __future__ import annotations

import json
import logging

import structlog

from coin_spine.core.logging import (
    LogContext,
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
)


class TestContextBinding:
    def setup_method(self):
        clear_context()

    def teardown_method(self):
        clear_context()

    def test_bind_and_clear(self):
        bind_context(request_id="r-1")
        assert structlog.contextvars.get_contextvars()["request_id"] == "r-1"
        clear_context()
        assert structlog.contextvars.get_contextvars() == {}

    def test_log_context_scopes_values(self):
        with LogContext(request_id="r-2", caller="cli"):
            ctx = structlog.contextvars.get_contextvars()
            assert ctx["request_id"] == "r-2"
            assert ctx["caller"] == "cli"
        assert "request_id" not in structlog.contextvars.get_contextvars()


class TestConfigureLogging:
    def teardown_method(self):
        structlog.reset_defaults()
        clear_context()

    def test_json_output(self, caplog):
        caplog.set_level(logging.INFO)
        configure_logging(level="INFO", json_format=True, service="coin-test")
        get_logger("coin_spine.test").info("coin_saved", coin_id="c-1")
        record = json.loads(caplog.records[-1].getMessage())
        assert record["event"] == "coin_saved"
        assert record["coin_id"] == "c-1"
        assert record["logger"] == "coin_spine.test"
        assert record["service.name"] == "coin-test"
        assert record["log.level"] == "info"
        assert "@timestamp" in record

    def test_level_filters(self, caplog):
        caplog.set_level(logging.DEBUG)
        configure_logging(level="WARNING", json_format=True)
        get_logger("coin_spine.test").info("hidden_event")
        assert all("hidden_event" not in r.getMessage() for r in caplog.records)
