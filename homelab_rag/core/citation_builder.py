"""
Citation extraction and formatting.

Builds source citations from retrieval results, preserving ranking order.

Dependencies: homelab_rag.models
System role: Citation formatting business logic
"""

from collections.abc import Sequence

from homelab_rag.models.document import RetrievedChunk
from homelab_rag.models.query import Source

PREVIEW_LENGTH = 200
ELLIPSIS = "..."


def make_preview(content: str, limit: int = PREVIEW_LENGTH) -> str:
    """Cut content to limit characters, marking the cut with an ellipsis."""
    if len(content) > limit:
        return content[:limit] + ELLIPSIS
    return content


def build_sources(chunks: Sequence[RetrievedChunk]) -> list[Source]:
    """
    Build citations in the order the store ranked the chunks.

    Args:
        chunks: Retrieved chunks, closest first

    Returns:
        list[Source]: One citation per chunk, same order
    """
    return [
        Source(
            file_name=chunk.file_name,
            chunk_index=chunk.chunk_index,
            preview=make_preview(chunk.content),
        )
        for chunk in chunks
    ]
