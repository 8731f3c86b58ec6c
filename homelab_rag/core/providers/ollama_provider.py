"""
Ollama embedding and generation backends.

Wraps LangChain's Ollama integration: OllamaEmbeddings for vectors,
ChatOllama for answers. Both provider classes own one httpx transport for
their whole lifetime; it is handed to the Ollama client and closed by aclose().

Dependencies: langchain_ollama, ollama, httpx, homelab_rag.core.providers
System role: Local LLM adapter (embeddings and generation)
"""

import logging

import httpx
from langchain_core.messages import BaseMessage
from langchain_ollama import ChatOllama, OllamaEmbeddings
from ollama import ResponseError

from homelab_rag.core.exceptions import (
    ProviderError,
    ProviderResponseInvalid,
    ProviderUnavailable,
)
from homelab_rag.core.providers.base import (
    EmbeddingProvider,
    GenerationProvider,
    RetryPolicy,
)
from homelab_rag.core.providers.errors import status_error

logger = logging.getLogger(__name__)

# ollama raises the builtin ConnectionError when the server refuses connections;
# malformed payloads fail pydantic validation, a ValueError subclass
OLLAMA_ERRORS = (ResponseError, ConnectionError, httpx.TransportError, ValueError)


def _to_provider_error(error: Exception, provider: str) -> ProviderError:
    if isinstance(error, ResponseError):
        return status_error(error.status_code, str(error.error), provider)
    if isinstance(error, httpx.TimeoutException):
        return ProviderUnavailable(f"{provider} request timed out", provider)
    if isinstance(error, (ConnectionError, httpx.TransportError)):
        return ProviderUnavailable(f"{provider} network error: {error}", provider)
    return ProviderResponseInvalid(f"{provider} returned a malformed response: {error}", provider)


def _client_kwargs(timeout: float, transport: httpx.AsyncBaseTransport) -> dict:
    return {"timeout": httpx.Timeout(timeout), "transport": transport}


class OllamaEmbeddingProvider(EmbeddingProvider):
    """Embeddings from Ollama's /api/embed endpoint."""

    def __init__(
        self,
        base_url: str,
        model: str,
        dimension: int,
        timeout: float = 60.0,
        name: str = "ollama",
        retry_policy: RetryPolicy | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize Ollama embeddings client.

        Args:
            base_url: Ollama server URL
            model: Embedding model name
            dimension: Vector size the model produces
            timeout: Per-request timeout in seconds
            name: Registry name
            retry_policy: Same-provider retry policy
            transport: Optional httpx transport (tests)
        """
        super().__init__(name=name, dimension=dimension, retry_policy=retry_policy)
        self.model = model
        self._transport = transport or httpx.AsyncHTTPTransport()
        self._embeddings = OllamaEmbeddings(
            model=model,
            base_url=base_url.rstrip("/"),
            client_kwargs=_client_kwargs(timeout, self._transport),
        )
        logger.info(
            f"{__name__}:__init__ - Initialized with model={model}, "
            f"dimension={dimension}, base_url={base_url}"
        )

    async def _embed(self, text: str) -> list[float]:
        try:
            vectors = await self._embeddings.aembed_documents([text])
        except OLLAMA_ERRORS as e:
            raise _to_provider_error(e, self.name) from e
        if not vectors or not vectors[0]:
            raise ProviderResponseInvalid("No embedding returned from Ollama", self.name)
        return [float(value) for value in vectors[0]]

    async def aclose(self) -> None:
        await self._transport.aclose()


class OllamaGenerationProvider(GenerationProvider):
    """Answers from Ollama's /api/chat endpoint via ChatOllama."""

    def __init__(
        self,
        base_url: str,
        model: str,
        max_tokens: int = 1000,
        temperature: float = 0.7,
        timeout: float = 60.0,
        name: str = "ollama",
        retry_policy: RetryPolicy | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(name=name, retry_policy=retry_policy)
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature
        self._transport = transport or httpx.AsyncHTTPTransport()
        self._chat = ChatOllama(
            model=model,
            base_url=base_url.rstrip("/"),
            temperature=temperature,
            num_predict=max_tokens,
            client_kwargs=_client_kwargs(timeout, self._transport),
        )

    async def _complete(self, messages: list[BaseMessage]) -> str:
        logger.info(f"{__name__}:_complete - Generating response with Ollama model: {self.model}")
        try:
            response = await self._chat.ainvoke(messages)
        except OLLAMA_ERRORS as e:
            raise _to_provider_error(e, self.name) from e
        if not isinstance(response.content, str):
            raise ProviderResponseInvalid("Ollama response has no text content", self.name)
        return response.content

    async def aclose(self) -> None:
        await self._transport.aclose()
