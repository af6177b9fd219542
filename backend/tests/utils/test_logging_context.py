# backend/tests/utils/test_logging_context.py
"""
Tests for call context management and logging configuration.
"""

import io
import json
import logging

import pytest

from fundmetrics.utils.context import (
    clear_analysis_context,
    clear_correlation_id,
    correlation_scope,
    get_analysis_context,
    get_correlation_id,
    set_analysis_context,
    set_correlation_id,
)
from fundmetrics.utils.logging import (
    NO_CORRELATION_ID,
    CorrelationIdFilter,
    JsonFormatter,
    _get_log_level,
    get_logger,
    setup_logging,
)


def make_record(message: str = "hello") -> logging.LogRecord:
    return logging.LogRecord(
        name="fundmetrics.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=message,
        args=(),
        exc_info=None,
    )


# =============================================================================
# CONTEXT TESTS
# =============================================================================

class TestCorrelationIdContext:
    """Tests for correlation ID context functions."""

    def test_get_returns_none_when_not_set(self):
        assert get_correlation_id() is None

    def test_set_and_get(self):
        set_correlation_id("test-correlation-123")

        assert get_correlation_id() == "test-correlation-123"

    def test_clear(self):
        set_correlation_id("test-correlation-456")
        clear_correlation_id()

        assert get_correlation_id() is None


class TestCorrelationScope:

    def test_generates_id(self):
        """Should bind a fresh UUID when none is given."""
        with correlation_scope() as active:
            assert len(active) == 36
            assert get_correlation_id() == active

        assert get_correlation_id() is None

    def test_uses_given_id(self):
        with correlation_scope("req-1") as active:
            assert active == "req-1"

        assert get_correlation_id() is None

    def test_nested_scope_keeps_outer_id(self):
        with correlation_scope("outer"):
            with correlation_scope("inner") as active:
                assert active == "outer"
            assert get_correlation_id() == "outer"

    def test_restored_on_error(self):
        with pytest.raises(RuntimeError):
            with correlation_scope("req-err"):
                raise RuntimeError("boom")

        assert get_correlation_id() is None


class TestAnalysisContext:

    def test_set_and_get(self):
        set_analysis_context("fund_id", "F1")
        set_analysis_context("operation", "risk_report")

        assert get_analysis_context() == {"fund_id": "F1", "operation": "risk_report"}

    def test_get_returns_copy(self):
        set_analysis_context("fund_id", "F1")

        get_analysis_context()["fund_id"] = "changed"

        assert get_analysis_context() == {"fund_id": "F1"}

    def test_clear(self):
        set_analysis_context("fund_id", "F1")
        clear_analysis_context()

        assert get_analysis_context() == {}


# =============================================================================
# LOGGING TESTS
# =============================================================================

class TestCorrelationIdFilter:

    def test_placeholder_without_id(self):
        record = make_record()

        assert CorrelationIdFilter().filter(record) is True
        assert record.correlation_id == NO_CORRELATION_ID
        assert record.analysis == {}

    def test_adds_context(self):
        set_correlation_id("req-9")
        set_analysis_context("fund_id", "F1")
        record = make_record()

        CorrelationIdFilter().filter(record)

        assert record.correlation_id == "req-9"
        assert record.analysis == {"fund_id": "F1"}


class TestJsonFormatter:

    def test_output(self):
        set_correlation_id("req-json")
        set_analysis_context("operation", "prediction")
        record = make_record("Prediction done")
        CorrelationIdFilter().filter(record)

        entry = json.loads(JsonFormatter().format(record))

        assert entry["level"] == "INFO"
        assert entry["logger"] == "fundmetrics.test"
        assert entry["message"] == "Prediction done"
        assert entry["correlation_id"] == "req-json"
        assert entry["analysis"] == {"operation": "prediction"}
        assert "extra" not in entry

    def test_extra_fields(self):
        record = make_record()
        record.fund_id = "F1"
        record.when = object()

        entry = json.loads(JsonFormatter().format(record))

        assert entry["extra"]["fund_id"] == "F1"
        assert isinstance(entry["extra"]["when"], str)


class TestSetupLogging:

    def test_json_output(self, library_logger):
        stream = io.StringIO()
        setup_logging(level="INFO", log_format="json", stream=stream)

        with correlation_scope("req-setup"):
            logging.getLogger("fundmetrics.services.analytics.service").info("Risk report done")

        entry = json.loads(stream.getvalue().strip().splitlines()[-1])
        assert entry["message"] == "Risk report done"
        assert entry["correlation_id"] == "req-setup"
        assert library_logger.propagate is False

    def test_text_output_and_level(self, library_logger):
        stream = io.StringIO()
        setup_logging(level="WARNING", log_format="text", stream=stream)

        logger = logging.getLogger("fundmetrics.services.analytics.overlap")
        logger.info("hidden")
        logger.warning("shown")

        output = stream.getvalue()
        assert "hidden" not in output
        assert f"| {NO_CORRELATION_ID} |" in output
        assert "shown" in output

    def test_only_library_logger_configured(self, library_logger):
        root_handlers = list(logging.getLogger().handlers)

        setup_logging(level="INFO", stream=io.StringIO())

        assert logging.getLogger().handlers == root_handlers
        assert len(library_logger.handlers) == 1


class TestGetLogger:

    def test_returns_named_child(self):
        logger = get_logger("fundmetrics.services.analytics.risk")

        assert logger.name == "fundmetrics.services.analytics.risk"


class TestGetLogLevel:

    @pytest.mark.parametrize("name, level", [
        ("debug", logging.DEBUG),
        (" INFO ", logging.INFO),
        ("warn", logging.WARNING),
        ("CRITICAL", logging.CRITICAL),
    ])
    def test_valid(self, name, level):
        assert _get_log_level(name) == level

    def test_invalid(self):
        with pytest.raises(ValueError, match="Invalid log level"):
            _get_log_level("verbose")
