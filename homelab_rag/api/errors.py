"""
Domain exception to HTTP status mapping.

Dependencies: fastapi, homelab_rag.core.exceptions
System role: Error translation for the HTTP shell
"""

import logging

from fastapi import HTTPException, status

from homelab_rag.core.exceptions import (
    DocumentSourceNotFoundError,
    HomelabRAGException,
    IngestionFailed,
    NoProviderAvailable,
    ProviderConfigurationError,
    ProviderNotConfigured,
    RetrievalError,
)

logger = logging.getLogger(__name__)

# Checked in order; subclasses before their bases.
STATUS_BY_EXCEPTION: tuple[tuple[type[HomelabRAGException], int], ...] = (
    (DocumentSourceNotFoundError, status.HTTP_404_NOT_FOUND),
    (ProviderNotConfigured, status.HTTP_400_BAD_REQUEST),
    (NoProviderAvailable, status.HTTP_503_SERVICE_UNAVAILABLE),
    (RetrievalError, status.HTTP_502_BAD_GATEWAY),
    (IngestionFailed, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (ProviderConfigurationError, status.HTTP_500_INTERNAL_SERVER_ERROR),
)


def to_http_exception(exc: HomelabRAGException) -> HTTPException:
    """
    Translate a domain exception into an HTTPException.

    Args:
        exc: Raised domain exception

    Returns:
        HTTPException: Status from STATUS_BY_EXCEPTION (500 when unlisted)
    """
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    for exc_type, mapped in STATUS_BY_EXCEPTION:
        if isinstance(exc, exc_type):
            status_code = mapped
            break

    if status_code >= 500:
        logger.error(f"{__name__}:to_http_exception - {status_code} {type(exc).__name__}: {exc}")
    else:
        logger.info(f"{__name__}:to_http_exception - {status_code} {type(exc).__name__}: {exc.message}")
    return HTTPException(status_code=status_code, detail=exc.message)
