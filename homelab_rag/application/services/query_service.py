"""
Query service for question answering with RAG.

Thin wrapper over RetrievalOrchestrator that echoes the question back with
the answer.

Dependencies: homelab_rag.core
System role: Query orchestration layer
"""

import logging

from homelab_rag.core.retrieval_orchestrator import RetrievalOrchestrator
from homelab_rag.models.query import QueryResult
from homelab_rag.observability.log_utils import safe_log_value

logger = logging.getLogger(__name__)


class QueryService:
    """Query service for single-turn Q&A."""

    def __init__(self, orchestrator: RetrievalOrchestrator) -> None:
        """
        Initialize query service.

        Args:
            orchestrator: Retrieval orchestrator
        """
        self.orchestrator = orchestrator

    async def query(
        self,
        question: str,
        top_k: int | None = None,
        provider_name: str | None = None,
    ) -> QueryResult:
        """
        Answer a question.

        Args:
            question: Natural-language question
            top_k: Number of chunks to retrieve (invalid values use the default)
            provider_name: Generation provider name, or None for the default

        Returns:
            QueryResult: Question, answer, sources, chunks used and provider

        Raises:
            RetrievalError: Provider or store failure
            ProviderNotConfigured: Unknown provider_name
            NoProviderAvailable: No generation provider can be selected
        """
        logger.info(
            f"{__name__}:query - question={safe_log_value(question)} "
            f"top_k={top_k} provider={provider_name}"
        )
        result = await self.orchestrator.answer(question, top_k, provider_name)
        return QueryResult(
            question=question,
            answer=result.answer,
            sources=result.sources,
            chunks_used=result.chunks_used,
            provider_used=result.provider_used,
        )
