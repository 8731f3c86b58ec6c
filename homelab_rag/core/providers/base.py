"""
Embedding and generation capabilities.

Backends implement _embed / _complete; the public embed / generate methods add
the shared contract on top: same-provider retry of transient failures,
response validation, and the fixed embedding dimension.

Dependencies: tenacity, langchain_core, homelab_rag.core.exceptions, homelab_rag.core.providers.prompt
System role: Provider abstraction consumed by the orchestrators
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable, Sequence
from typing import TypeVar

from langchain_core.messages import BaseMessage
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from homelab_rag.core.exceptions import (
    EmbeddingDimensionMismatch,
    ProviderResponseInvalid,
    ProviderUnavailable,
)
from homelab_rag.core.providers.prompt import build_messages

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RetryPolicy:
    """Bounded retry of ProviderUnavailable on the same provider."""

    def __init__(
        self,
        max_retries: int = 0,
        initial_wait: float = 0.5,
        max_wait: float = 8.0,
    ) -> None:
        self.max_retries = max_retries
        self.initial_wait = initial_wait
        self.max_wait = max_wait

    async def call(self, name: str, operation: Callable[[], Awaitable[T]]) -> T:
        """
        Run operation, retrying transient failures up to max_retries times.

        Args:
            name: Provider name for logging
            operation: Zero-argument coroutine factory

        Returns:
            The operation's result

        Raises:
            ProviderUnavailable: After the last attempt fails
            ProviderResponseInvalid: Immediately, never retried
        """
        if self.max_retries == 0:
            return await operation()

        attempts = self.max_retries + 1
        async for attempt in AsyncRetrying(
            retry=retry_if_exception_type(ProviderUnavailable),
            stop=stop_after_attempt(attempts),
            wait=wait_exponential_jitter(multiplier=self.initial_wait, max=self.max_wait),
            before_sleep=lambda retry_state: logger.warning(
                f"{__name__}:call - {name} unavailable, retry "
                f"{retry_state.attempt_number}/{self.max_retries}"
            ),
            reraise=True,
        ):
            with attempt:
                return await operation()
        raise AssertionError("unreachable")  # pragma: no cover


NO_RETRY = RetryPolicy()


class EmbeddingProvider(ABC):
    """Text → fixed-length vector."""

    def __init__(
        self,
        name: str,
        dimension: int,
        retry_policy: RetryPolicy | None = None,
    ) -> None:
        self.name = name
        self.dimension = dimension
        self._retry = retry_policy or NO_RETRY

    async def embed(self, text: str) -> list[float]:
        """
        Embed text.

        Args:
            text: Text to embed

        Returns:
            list[float]: Vector of exactly `dimension` floats

        Raises:
            ProviderUnavailable: Transport failure or timeout
            ProviderResponseInvalid: Malformed or empty response
            EmbeddingDimensionMismatch: Vector size differs from the configured dimension
        """
        vector = await self._retry.call(self.name, lambda: self._embed(text))
        if not vector:
            raise ProviderResponseInvalid("Backend returned an empty embedding", self.name)
        if len(vector) != self.dimension:
            raise EmbeddingDimensionMismatch(self.dimension, len(vector), self.name)
        return vector

    @abstractmethod
    async def _embed(self, text: str) -> list[float]:
        """Backend call returning the raw vector."""

    async def aclose(self) -> None:
        """Release the backend client."""


class GenerationProvider(ABC):
    """(question, ordered context chunks) → answer."""

    def __init__(self, name: str, retry_policy: RetryPolicy | None = None) -> None:
        self.name = name
        self._retry = retry_policy or NO_RETRY

    async def generate(self, question: str, context_chunks: Sequence[str]) -> str:
        """
        Generate an answer grounded in the given context.

        Every chunk is included in the prompt, in order; none is dropped.

        Args:
            question: User's question
            context_chunks: Chunk texts in ranking order

        Returns:
            str: Answer text

        Raises:
            ProviderUnavailable: Transport failure or timeout
            ProviderResponseInvalid: Malformed or empty response
        """
        messages = build_messages(question, context_chunks)
        answer = await self._retry.call(self.name, lambda: self._complete(messages))
        if not answer or not answer.strip():
            raise ProviderResponseInvalid("Backend returned an empty answer", self.name)
        return answer

    @abstractmethod
    async def _complete(self, messages: list[BaseMessage]) -> str:
        """Backend call returning the raw answer text."""

    async def aclose(self) -> None:
        """Release the backend client."""
