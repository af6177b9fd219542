# backend/fundmetrics/utils/__init__.py
"""
Utility modules for the fund analytics library.

This package contains cross-cutting utilities:
- logging: Logging configuration with correlation ID support
- context: Call context management for correlation IDs
- date_utils: Month arithmetic and year fractions

Usage:
    from fundmetrics.utils import setup_logging, get_logger
    from fundmetrics.utils import correlation_scope, get_correlation_id
    from fundmetrics.utils.date_utils import subtract_months
"""

from fundmetrics.utils.context import (
    get_correlation_id,
    set_correlation_id,
    clear_correlation_id,
    correlation_scope,
    get_analysis_context,
    set_analysis_context,
    clear_analysis_context,
)
from fundmetrics.utils.logging import setup_logging, get_logger

__all__ = [
    # Logging
    "setup_logging",
    "get_logger",
    # Context
    "get_correlation_id",
    "set_correlation_id",
    "clear_correlation_id",
    "correlation_scope",
    "get_analysis_context",
    "set_analysis_context",
    "clear_analysis_context",
]
