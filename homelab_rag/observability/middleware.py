"""
HTTP middleware: correlation IDs and access logging.

CorrelationMiddleware is installed outermost so the access log line and
everything logged while handling the request carry the same ID.

Dependencies: fastapi, starlette, homelab_rag.observability
System role: Per-request tracing and timing
"""

import logging
import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from homelab_rag.observability.correlation import (
    CORRELATION_HEADER,
    clear_correlation_id,
    set_correlation_id,
)

logger = logging.getLogger(__name__)


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """One log line per request with status and duration."""

    async def dispatch(self, request: Request, call_next):
        """
        Time the request and log its outcome.

        Unhandled exceptions are logged with traceback and re-raised.

        Args:
            request: Incoming request
            call_next: Downstream handler

        Returns:
            Response: Downstream response, unchanged
        """
        started = time.perf_counter()
        extra = {"method": request.method, "path": request.url.path}

        try:
            response: Response = await call_next(request)
        except Exception as e:
            extra["process_time_ms"] = _elapsed_ms(started)
            logger.exception(
                f"{request.method} {request.url.path} - unhandled {type(e).__name__}",
                extra=extra,
            )
            raise

        extra["status_code"] = response.status_code
        extra["process_time_ms"] = _elapsed_ms(started)
        logger.info(
            f"{request.method} {request.url.path} - {response.status_code} "
            f"({extra['process_time_ms']} ms)",
            extra=extra,
        )
        return response


class CorrelationMiddleware(BaseHTTPMiddleware):
    """Binds X-Correlation-ID (or a fresh UUID) for the duration of a request."""

    async def dispatch(self, request: Request, call_next):
        correlation_id = set_correlation_id(request.headers.get(CORRELATION_HEADER))
        try:
            response: Response = await call_next(request)
        finally:
            clear_correlation_id()
        response.headers[CORRELATION_HEADER] = correlation_id
        return response
