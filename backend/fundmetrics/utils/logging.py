# backend/fundmetrics/utils/logging.py
"""
Logging configuration for the fund analytics library.

Library modules only ever call `logging.getLogger(__name__)`; they never
configure handlers. Host applications (and the CLI-less test suite) call
`setup_logging()` once to get:
- Settings-based log levels (LOG_LEVEL)
- Correlation ID and analysis context on every record
- JSON format option for log aggregation (LOG_FORMAT=json)

Usage:
    from fundmetrics.utils import setup_logging

    setup_logging()                       # from settings
    setup_logging(level="DEBUG")          # calculator-level detail

Log Levels:
    DEBUG   - Per-calculator detail (bucket counts, intermediate ratios)
    INFO    - One line per completed analysis
    WARNING - Refused analyses (insufficient data, invalid fund count)
    ERROR   - Unexpected failures
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from fundmetrics.config import settings
from fundmetrics.utils.context import get_analysis_context, get_correlation_id

# =============================================================================
# CONSTANTS
# =============================================================================

# Default text format: timestamp | level | correlation_id | logger_name | message
DEFAULT_TEXT_FORMAT = "%(asctime)s | %(levelname)-8s | %(correlation_id)s | %(name)s | %(message)s"
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Placeholder when no correlation ID is available
NO_CORRELATION_ID = "no-correlation-id"

# Root logger name for everything this library emits
LIBRARY_LOGGER = "fundmetrics"


# =============================================================================
# CORRELATION ID FILTER
# =============================================================================

class CorrelationIdFilter(logging.Filter):
    """
    Logging filter that adds correlation ID and analysis context to records.

    Adds:
        record.correlation_id: active correlation ID or NO_CORRELATION_ID
        record.analysis: dict from the analysis context (may be empty)
    """

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id() or NO_CORRELATION_ID
        record.analysis = get_analysis_context()
        return True


# =============================================================================
# JSON FORMATTER
# =============================================================================

class JsonFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Output format:
    {
        "timestamp": "2024-01-15T10:30:00.123+00:00",
        "level": "INFO",
        "logger": "fundmetrics.services.analytics.service",
        "correlation_id": "abc-123-def",
        "message": "Risk report computed for fund F1",
        "analysis": {"operation": "risk_report", "fund_id": "F1"},
        "extra": { ... }
    }
    """

    # Standard LogRecord attributes excluded from "extra"
    _STANDARD_ATTRS = frozenset({
        "name", "msg", "args", "created", "filename", "funcName",
        "levelname", "levelno", "lineno", "module", "msecs",
        "pathname", "process", "processName", "relativeCreated",
        "stack_info", "exc_info", "exc_text", "thread", "threadName",
        "correlation_id", "analysis", "message", "taskName",
    })

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "correlation_id": getattr(record, "correlation_id", NO_CORRELATION_ID),
            "message": record.getMessage(),
        }

        analysis = getattr(record, "analysis", None)
        if analysis:
            log_entry["analysis"] = analysis

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        extra = {}
        for key, value in record.__dict__.items():
            if key in self._STANDARD_ATTRS:
                continue
            try:
                json.dumps(value)
                extra[key] = value
            except (TypeError, ValueError):
                extra[key] = str(value)

        if extra:
            log_entry["extra"] = extra

        return json.dumps(log_entry)


# =============================================================================
# SETUP FUNCTION
# =============================================================================

def setup_logging(
        level: str | None = None,
        log_format: str | None = None,
        stream=None,
) -> logging.Handler:
    """
    Configure the library logger with correlation ID support.

    Only the "fundmetrics" logger is configured, so host applications keep
    control of the root logger and their own handlers.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
               Defaults to settings.log_level.
        log_format: Output format ('text' or 'json').
                    Defaults to settings.log_format.
        stream: Output stream (default sys.stdout)

    Returns:
        The installed handler
    """
    log_level_str = level or settings.log_level
    log_level = _get_log_level(log_level_str)
    format_type = (log_format or settings.log_format).lower()

    if format_type == "json":
        formatter: logging.Formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(
            fmt=DEFAULT_TEXT_FORMAT,
            datefmt=DEFAULT_DATE_FORMAT,
        )

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(formatter)
    handler.addFilter(CorrelationIdFilter())

    library_logger = logging.getLogger(LIBRARY_LOGGER)
    library_logger.setLevel(log_level)
    library_logger.handlers.clear()
    library_logger.addHandler(handler)
    library_logger.propagate = False

    logging.getLogger(__name__).debug(
        f"Logging configured: level={log_level_str}, format={format_type}"
    )
    return handler


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def _get_log_level(level_str: str) -> int:
    """
    Convert string log level to logging constant.

    Raises:
        ValueError: If level_str is not a valid log level
    """
    level_str = level_str.upper().strip()

    level_mapping = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "WARN": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }

    if level_str not in level_mapping:
        valid_levels = ", ".join(level_mapping.keys())
        raise ValueError(
            f"Invalid log level: '{level_str}'. "
            f"Valid levels are: {valid_levels}"
        )

    return level_mapping[level_str]


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger with the given name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Standard library logger
    """
    return logging.getLogger(name)
