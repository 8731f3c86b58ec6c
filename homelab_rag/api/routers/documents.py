"""
Document API endpoints.

Routes: POST /documents/ingest, POST /documents/ingest-directory, GET /documents

Dependencies: homelab_rag.application.services.document_service, homelab_rag.models
System role: Document HTTP API
"""

import logging

from fastapi import APIRouter, Depends

from homelab_rag.api.deps import get_document_service
from homelab_rag.api.errors import to_http_exception
from homelab_rag.application.services.document_service import DocumentService
from homelab_rag.core.exceptions import HomelabRAGException
from homelab_rag.models.api import (
    DocumentResponse,
    FileIngestResultResponse,
    IngestDirectoryRequest,
    IngestDirectoryResponse,
    IngestFileRequest,
    IngestFileResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/documents", tags=["documents"])


@router.post("/ingest", response_model=IngestFileResponse)
async def ingest_document(
    request: IngestFileRequest,
    document_service: DocumentService = Depends(get_document_service),
) -> IngestFileResponse:
    """
    Ingest one file from the server's filesystem.

    Re-ingesting a file name that is already stored returns the stored document.

    Args:
        request: IngestFileRequest with filePath
        document_service: Injected DocumentService

    Returns:
        IngestFileResponse: Document id, file name and chunk count

    Raises:
        HTTPException(404): File not found
        HTTPException(500): Ingestion failed
    """
    try:
        result = await document_service.ingest_file(request.file_path)
    except HomelabRAGException as e:
        raise to_http_exception(e) from e

    message = (
        "Document ingested successfully"
        if result.created
        else "Document already ingested"
    )
    return IngestFileResponse(
        message=message,
        document_id=result.document_id,
        file_name=result.file_name,
        chunk_count=result.chunk_count,
        created=result.created,
    )


@router.post("/ingest-directory", response_model=IngestDirectoryResponse)
async def ingest_directory(
    request: IngestDirectoryRequest,
    document_service: DocumentService = Depends(get_document_service),
) -> IngestDirectoryResponse:
    """
    Ingest every matching file under a directory.

    Per-file failures are reported in the results, not as an error status.

    Args:
        request: IngestDirectoryRequest with directoryPath and optional pattern
        document_service: Injected DocumentService

    Returns:
        IngestDirectoryResponse: Summary message and per-file results

    Raises:
        HTTPException(404): Directory not found
    """
    try:
        result = await document_service.ingest_directory(
            request.directory_path,
            request.pattern,
        )
    except HomelabRAGException as e:
        raise to_http_exception(e) from e

    return IngestDirectoryResponse(
        message=f"Processed {len(result.results)} files: "
        f"{result.succeeded} succeeded, {result.failed} failed",
        results=[
            FileIngestResultResponse(**item.model_dump())
            for item in result.results
        ],
    )


@router.get("", response_model=list[DocumentResponse])
async def list_documents(
    document_service: DocumentService = Depends(get_document_service),
) -> list[DocumentResponse]:
    """
    List ingested documents with their chunk counts.

    Returns:
        list[DocumentResponse]: Documents ordered by ingestion time

    Raises:
        HTTPException(500): Store failure
    """
    try:
        documents = await document_service.list_documents()
    except HomelabRAGException as e:
        raise to_http_exception(e) from e

    return [
        DocumentResponse(
            id=doc.id,
            file_name=doc.file_name,
            file_path=doc.file_path,
            ingested_at=doc.ingested_at,
            chunk_count=doc.chunk_count,
        )
        for doc in documents
    ]
