"""
Logging utilities for safe structured logging.

Keeps document text, questions and vectors out of logs beyond a short prefix.

Dependencies: logging (stdlib)
System role: Logging helper functions
"""

import logging
from typing import Any


def safe_log_value(value: Any, max_length: int = 100) -> str:
    """
    Safely convert any value to a short string for logging.

    Sequences and mappings are summarised by size, never printed.

    Args:
        value: Value to convert
        max_length: Maximum length before truncating

    Returns:
        str: Safe string representation
    """
    if value is None:
        return "None"
    if isinstance(value, str):
        val_str = repr(value)
    elif isinstance(value, (list, tuple)):
        val_str = f"{type(value).__name__}({len(value)} items)"
    elif isinstance(value, dict):
        val_str = f"dict({len(value)} keys)"
    else:
        val_str = str(value)

    if len(val_str) > max_length:
        return val_str[:max_length] + f"... (truncated, {len(val_str)} total)"
    return val_str


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: Exception,
    **context,
) -> None:
    """
    Log an exception with its type and safe context.

    Logged at WARNING with the exception chain; callers that handle the
    error keep going.

    Args:
        logger: Logger instance
        message: Log message
        exc: Exception instance
        **context: Additional context dict
    """
    safe_context = {
        key: safe_log_value(val) for key, val in context.items()
    }
    safe_context.update({
        "error_type": type(exc).__name__,
        "error_msg": safe_log_value(str(exc), max_length=300),
    })
    logger.warning(
        f"{message} - {safe_context['error_type']}: {safe_context['error_msg']}",
        extra=safe_context,
        exc_info=exc,
    )
