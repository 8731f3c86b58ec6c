"""
Groq generation backend.

Wraps LangChain's ChatGroq over Groq's OpenAI-compatible chat completions
endpoint. Groq has no embedding endpoint, so it is registered for generation
only. Retries are left to RetryPolicy, so the SDK's own retry is disabled.

Dependencies: langchain_groq, groq, httpx, homelab_rag.core.providers
System role: Hosted LLM adapter (generation)
"""

import logging

import groq
import httpx
from langchain_core.messages import BaseMessage
from langchain_groq import ChatGroq

from homelab_rag.core.exceptions import (
    ProviderError,
    ProviderResponseInvalid,
    ProviderUnavailable,
)
from homelab_rag.core.providers.base import GenerationProvider, RetryPolicy
from homelab_rag.core.providers.errors import status_error

logger = logging.getLogger(__name__)


def _to_provider_error(error: groq.APIError, provider: str) -> ProviderError:
    if isinstance(error, groq.APITimeoutError):
        return ProviderUnavailable(f"{provider} request timed out", provider)
    if isinstance(error, groq.APIConnectionError):
        return ProviderUnavailable(f"{provider} network error: {error}", provider)
    if isinstance(error, groq.APIStatusError):
        return status_error(error.status_code, error.message, provider)
    return ProviderResponseInvalid(f"{provider} returned a malformed response: {error}", provider)


class GroqGenerationProvider(GenerationProvider):
    """Answers from Groq chat completions."""

    def __init__(
        self,
        api_key: str,
        model: str = "llama-3.3-70b-versatile",
        base_url: str = "https://api.groq.com",
        max_tokens: int = 1000,
        temperature: float = 0.7,
        timeout: float = 60.0,
        name: str = "groq",
        retry_policy: RetryPolicy | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize Groq client.

        Args:
            api_key: Groq API key (bearer token)
            model: Chat model identifier
            base_url: Groq API host; the SDK appends /openai/v1
            max_tokens: Maximum completion tokens
            temperature: Sampling temperature
            timeout: Per-request timeout in seconds
            name: Registry name
            retry_policy: Same-provider retry policy
            transport: Optional httpx transport (tests)

        Raises:
            ValueError: When api_key is empty
        """
        if not api_key:
            raise ValueError("api_key cannot be empty")

        super().__init__(name=name, retry_policy=retry_policy)
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature
        self._http_client = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            transport=transport,
        )
        self._chat = ChatGroq(
            model=model,
            api_key=api_key,
            base_url=base_url.rstrip("/"),
            max_tokens=max_tokens,
            temperature=temperature,
            timeout=timeout,
            max_retries=0,
            http_async_client=self._http_client,
        )

    async def _complete(self, messages: list[BaseMessage]) -> str:
        logger.info(f"{__name__}:_complete - Generating response with Groq model: {self.model}")
        try:
            response = await self._chat.ainvoke(messages)
        except groq.APIError as e:
            raise _to_provider_error(e, self.name) from e
        if not isinstance(response.content, str):
            raise ProviderResponseInvalid("Groq response content is not text", self.name)
        return response.content

    async def aclose(self) -> None:
        await self._http_client.aclose()
