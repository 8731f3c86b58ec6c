"""
Backend failure classification shared by the provider integrations.

Connection errors, timeouts, HTTP 429 and 5xx are ProviderUnavailable; any
other HTTP error and unparseable responses are ProviderResponseInvalid.

Dependencies: homelab_rag.core.exceptions
System role: Error mapping for provider backends
"""

from homelab_rag.core.exceptions import (
    ProviderError,
    ProviderResponseInvalid,
    ProviderUnavailable,
)

TOO_MANY_REQUESTS = 429


def is_transient_status(status_code: int) -> bool:
    """Whether an HTTP status is worth retrying on the same provider."""
    return status_code == TOO_MANY_REQUESTS or status_code >= 500


def status_error(status_code: int, reason: str, provider: str) -> ProviderError:
    """
    Classify an HTTP error status returned by a backend.

    Args:
        status_code: HTTP status (negative when the backend reported no status)
        reason: Backend's error text
        provider: Provider name for error context

    Returns:
        ProviderError: ProviderUnavailable for 429/5xx, ProviderResponseInvalid otherwise
    """
    details = {"status_code": status_code, "reason": reason[:200]}
    if is_transient_status(status_code):
        return ProviderUnavailable(
            f"{provider} server error: HTTP {status_code}", provider, details
        )
    return ProviderResponseInvalid(
        f"{provider} rejected request: HTTP {status_code}", provider, details
    )
