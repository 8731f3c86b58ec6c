"""
Per-request correlation ID.

Held in a ContextVar so it follows the request through awaits and into
tasks created while handling it.

Dependencies: contextvars
System role: Request tracing across log lines
"""

from contextvars import ContextVar
import logging
import uuid

CORRELATION_HEADER = "X-Correlation-ID"

correlation_id_ctx: ContextVar[str] = ContextVar("correlation_id", default="")


def set_correlation_id(correlation_id: str | None = None) -> str:
    """
    Bind a correlation ID to the current context.

    Args:
        correlation_id: Incoming ID; None or blank generates a UUID4

    Returns:
        str: The ID now bound
    """
    value = (correlation_id or "").strip() or str(uuid.uuid4())
    correlation_id_ctx.set(value)
    return value


def get_correlation_id() -> str:
    """Bound correlation ID, or "" outside a request."""
    return correlation_id_ctx.get()


def clear_correlation_id() -> None:
    correlation_id_ctx.set("")


class CorrelationIdFilter(logging.Filter):
    """Adds correlation_id to every record so formatters can print it."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id() or "-"
        return True
