"""Query API endpoint.

Routes:
- POST /query - Answer a question from ingested documentation

Dependencies: homelab_rag.application.services.query_service
System role: Question answering HTTP API
"""

import logging

from fastapi import APIRouter, Depends

from homelab_rag.api.deps import get_query_service
from homelab_rag.api.errors import to_http_exception
from homelab_rag.application.services.query_service import QueryService
from homelab_rag.core.exceptions import HomelabRAGException
from homelab_rag.models.api import QueryRequest, QueryResponse, SourceResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/query", tags=["query"])


@router.post("", response_model=QueryResponse)
async def query(
    request: QueryRequest,
    query_service: QueryService = Depends(get_query_service),
) -> QueryResponse:
    """Answer a question with citations.

    Args:
        request: QueryRequest with question, optional topK and provider
        query_service: Injected QueryService

    Returns:
        QueryResponse: Answer, sources in retrieval order, provider used

    Raises:
        HTTPException(400): Unknown provider
        HTTPException(502): Provider or store failure
        HTTPException(503): No generation provider available
    """
    try:
        result = await query_service.query(
            question=request.question,
            top_k=request.top_k,
            provider_name=request.provider,
        )
    except HomelabRAGException as e:
        raise to_http_exception(e) from e

    return QueryResponse(
        question=result.question,
        answer=result.answer,
        sources=[
            SourceResponse(
                file_name=source.file_name,
                chunk_index=source.chunk_index,
                preview=source.preview,
            )
            for source in result.sources
        ],
        chunks_used=result.chunks_used,
        provider_used=result.provider_used,
    )
