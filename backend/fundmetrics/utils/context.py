# backend/fundmetrics/utils/context.py
"""
Call context management for the fund analytics library.

The analytics core is invoked once per incoming request by the host
application. This module carries request-scoped metadata into the library's
log records without threading it through every calculator signature:
- Correlation ID supplied by the caller (or generated per analysis)
- Analysis context (fund id, operation name)

Uses Python's contextvars, so values are isolated per thread and per
asyncio task.

Usage:
    from fundmetrics.utils.context import correlation_scope, get_correlation_id

    with correlation_scope("req-abc-123"):
        service.get_risk_report(navs)   # log lines carry "req-abc-123"
"""

import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Iterator

# =============================================================================
# CONTEXT VARIABLES
# =============================================================================

_correlation_id_var: ContextVar[str | None] = ContextVar("correlation_id", default=None)

_analysis_context_var: ContextVar[dict[str, Any] | None] = ContextVar(
    "analysis_context", default=None
)


# =============================================================================
# CORRELATION ID
# =============================================================================

def get_correlation_id() -> str | None:
    """
    Get the current correlation ID.

    Returns:
        The correlation ID for the current call chain, or None if not set.
    """
    return _correlation_id_var.get()


def set_correlation_id(correlation_id: str) -> None:
    """
    Set the correlation ID for the current call chain.

    Args:
        correlation_id: Unique identifier supplied by the caller
    """
    _correlation_id_var.set(correlation_id)


def clear_correlation_id() -> None:
    """Clear the correlation ID."""
    _correlation_id_var.set(None)


@contextmanager
def correlation_scope(correlation_id: str | None = None) -> Iterator[str]:
    """
    Bind a correlation ID for the duration of a block.

    An ID already set by the caller is kept, so nested service calls share
    one ID. Otherwise `correlation_id` (or a fresh UUID4) is bound and
    restored on exit.

    Args:
        correlation_id: ID to bind when none is active

    Yields:
        The active correlation ID
    """
    existing = _correlation_id_var.get()
    if existing is not None:
        yield existing
        return

    token = _correlation_id_var.set(correlation_id or str(uuid.uuid4()))
    try:
        yield _correlation_id_var.get()
    finally:
        _correlation_id_var.reset(token)


# =============================================================================
# ANALYSIS CONTEXT
# =============================================================================

def get_analysis_context() -> dict[str, Any]:
    """
    Get a copy of the current analysis context.

    Returns:
        Dictionary with keys such as "operation" and "fund_id".
    """
    return dict(_analysis_context_var.get() or {})


def set_analysis_context(key: str, value: Any) -> None:
    """
    Set a value in the analysis context.

    Args:
        key: Context key
        value: Context value
    """
    ctx = get_analysis_context()
    ctx[key] = value
    _analysis_context_var.set(ctx)


def clear_analysis_context() -> None:
    """Clear all analysis context."""
    _analysis_context_var.set(None)
