"""
Exception hierarchy for the Homelab RAG application.

Every error carries a message and a details dict; str() appends the
details. Orchestrators wrap provider and store errors with the file name or
question; the HTTP shell maps the result to a status code.

Dependencies: None (pure domain layer)
System role: Typed errors shared by every layer
"""

from typing import Any


class HomelabRAGException(Exception):
    """Base exception for all Homelab RAG application errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Store message and context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ProviderError(HomelabRAGException):
    """Base exception for embedding and generation backend failures."""

    def __init__(
        self,
        message: str,
        provider: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize provider error.

        Args:
            message: Error message
            provider: Registered name of the failing provider
            details: Additional context
        """
        details = details or {}
        if provider:
            details["provider"] = provider
        self.provider = provider
        super().__init__(message, details)


class ProviderUnavailable(ProviderError):
    """Transport failure, timeout or server-side error. Transient."""

    pass


class ProviderResponseInvalid(ProviderError):
    """Malformed or empty backend response. Not retried."""

    pass


class ProviderConfigurationError(HomelabRAGException):
    """Base exception for provider setup errors; fatal for the affected name."""

    pass


class ProviderNotConfigured(ProviderConfigurationError):
    """Raised when a provider name is not registered."""

    def __init__(
        self,
        name: str,
        kind: str = "generation",
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize provider not configured error.

        Args:
            name: Requested provider name
            kind: Provider capability (generation or embedding)
            details: Additional context
        """
        details = details or {}
        details["provider"] = name
        details["kind"] = kind
        self.name = name
        super().__init__(f"No {kind} provider registered under '{name}'", details)


class NoProviderAvailable(ProviderConfigurationError):
    """Raised when no generation provider can be selected without an explicit name."""

    pass


class EmbeddingDimensionMismatch(ProviderConfigurationError):
    """Raised when an embedding does not have the deployment's fixed dimension."""

    def __init__(
        self,
        expected: int,
        actual: int,
        provider: str | None = None,
    ) -> None:
        """
        Initialize dimension mismatch error.

        Args:
            expected: Configured vector size
            actual: Size of the vector the backend returned
            provider: Embedding provider name
        """
        details: dict[str, Any] = {"expected": expected, "actual": actual}
        if provider:
            details["provider"] = provider
        super().__init__(
            f"Embedding dimension mismatch: expected {expected}, got {actual}",
            details,
        )


class DocumentSourceNotFoundError(HomelabRAGException):
    """Raised when a file or directory to ingest does not exist."""

    def __init__(self, path: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize source not found error.

        Args:
            path: Path that could not be located
            details: Additional context
        """
        details = details or {}
        details["path"] = path
        self.path = path
        super().__init__(f"Source not found: {path}", details)


class DocumentAlreadyExists(HomelabRAGException):
    """Raised by a store when a document with the same file name is already persisted."""

    def __init__(self, file_name: str) -> None:
        """
        Initialize duplicate document error.

        Args:
            file_name: Conflicting file name
        """
        self.file_name = file_name
        super().__init__(f"Document already exists: {file_name}", {"file_name": file_name})


class IngestionFailed(HomelabRAGException):
    """Raised when a document could not be ingested. Nothing was persisted."""

    def __init__(
        self,
        message: str,
        file_name: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize ingestion error.

        Args:
            message: Error message
            file_name: Document being ingested
            details: Additional context
        """
        details = details or {}
        details["file_name"] = file_name
        self.file_name = file_name
        super().__init__(message, details)


class VectorStoreError(HomelabRAGException):
    """Raised when vector store operations fail."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize vector store error.

        Args:
            message: Error message
            operation: Operation that failed (create_document, create_chunk, nearest_k)
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)


class RetrievalError(HomelabRAGException):
    """Raised when answering a question fails at a provider or the store."""

    def __init__(
        self,
        message: str,
        question: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize retrieval error.

        Args:
            message: Error message
            question: Question being answered (truncated for context)
            details: Additional context
        """
        details = details or {}
        if question:
            details["question"] = question[:100]
        super().__init__(message, details)
