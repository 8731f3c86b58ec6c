"""
Retrieval orchestrator.

Answers a question from the stored documents:
embed question -> nearest-K chunks -> resolve generation provider -> generate -> cite.

When no chunk matches, a fixed answer is returned without resolving or
calling any generation provider.

Dependencies: homelab_rag.core.registry, homelab_rag.core.citation_builder, homelab_rag.boundary.vdb
System role: Read path of the RAG pipeline
"""

import logging

from homelab_rag.boundary.vdb.vector_store import VectorStore
from homelab_rag.core.citation_builder import build_sources
from homelab_rag.core.exceptions import ProviderError, RetrievalError, VectorStoreError
from homelab_rag.core.registry import ProviderRegistry
from homelab_rag.models.query import AnswerResult

logger = logging.getLogger(__name__)

NO_INFORMATION_ANSWER = (
    "I don't have any relevant information in the documentation to answer this question."
)
DEFAULT_TOP_K = 5


def normalize_top_k(top_k: object, default: int = DEFAULT_TOP_K) -> int:
    """Positive int passes through; anything else (None, 0, negatives, bools) gets the default."""
    if isinstance(top_k, bool) or not isinstance(top_k, int) or top_k <= 0:
        return default
    return top_k


class RetrievalOrchestrator:
    """Question answering over the vector store."""

    def __init__(
        self,
        store: VectorStore,
        registry: ProviderRegistry,
        default_top_k: int = DEFAULT_TOP_K,
    ) -> None:
        """
        Initialize retrieval orchestrator.

        Args:
            store: Vector store to search
            registry: Provider registry (embedding provider and generation resolution)
            default_top_k: Chunks retrieved when the caller gives no valid top_k
        """
        self.store = store
        self.registry = registry
        self.default_top_k = default_top_k

    async def answer(
        self,
        question: str,
        top_k: int | None = None,
        provider_name: str | None = None,
    ) -> AnswerResult:
        """
        Answer a question with citations.

        Args:
            question: Natural-language question
            top_k: Number of chunks to retrieve
            provider_name: Generation provider to use (None for default/fallback)

        Returns:
            AnswerResult: Answer text, sources in retrieval order, provider used

        Raises:
            RetrievalError: Provider or store failure
            ProviderNotConfigured: provider_name is not registered
            NoProviderAvailable: No default and no single alternate
        """
        k = normalize_top_k(top_k, self.default_top_k)

        try:
            vector = await self.registry.embedding_provider.embed(question)
            chunks = await self.store.nearest_k(vector, k)
        except (ProviderError, VectorStoreError) as e:
            raise RetrievalError(
                f"Failed to retrieve context: {e.message}",
                question=question,
            ) from e

        if not chunks:
            logger.info(f"{__name__}:answer - No matching chunks, returning fixed answer")
            return AnswerResult(answer=NO_INFORMATION_ANSWER)

        resolved = self.registry.resolve_generation(provider_name)
        logger.info(
            f"{__name__}:answer - {len(chunks)} chunks, generating with "
            f"'{resolved.name}' ({resolved.selection.value})"
        )

        try:
            answer = await resolved.provider.generate(
                question,
                [chunk.content for chunk in chunks],
            )
        except ProviderError as e:
            raise RetrievalError(
                f"Generation failed: {e.message}",
                question=question,
                details={"provider": resolved.name},
            ) from e

        return AnswerResult(
            answer=answer,
            sources=build_sources(chunks),
            chunks_used=len(chunks),
            provider_used=resolved.name,
        )
