"""
Process-wide logging setup.

Console output only; each line carries the request's correlation ID, or
'-' outside a request.

Dependencies: logging (stdlib), homelab_rag.observability.correlation
System role: Centralized logging configuration
"""

import logging
import sys

from homelab_rag.observability.correlation import CorrelationIdFilter

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(correlation_id)s] - %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"
NOISY_LOGGERS = ("httpx", "httpcore", "sqlalchemy.engine", "asyncio")


def configure_logging(level: str = "INFO") -> None:
    """
    Replace root handlers with a single stdout handler.

    Safe to call more than once (app factory in tests).

    Args:
        level: Root level name; unknown names fall back to INFO
    """
    root_logger = logging.getLogger()
    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(CorrelationIdFilter())
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))

    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    root_logger.addHandler(handler)

    # HTTP client and SQL chatter
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Module logger; configure_logging() decides where it goes."""
    return logging.getLogger(name)
