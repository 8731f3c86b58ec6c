"""
Paragraph-packing text chunker.

Splits a document on blank lines and packs consecutive paragraphs into chunks
of at most max_chunk_size characters. Paragraphs are never split, so a single
paragraph longer than the limit becomes its own oversized chunk.

Dependencies: re
System role: First stage of document ingestion
"""

import re

DEFAULT_MAX_CHUNK_SIZE = 1000

# One or more blank lines, tolerating \r\n endings and whitespace-only lines.
_BLANK_LINES = re.compile(r"\r?\n[ \t]*(?:\r?\n[ \t]*)+")


def split_paragraphs(text: str) -> list[str]:
    """
    Split text into non-blank paragraphs in source order.

    Args:
        text: Raw document text

    Returns:
        list[str]: Paragraphs; whitespace-only paragraphs are dropped
    """
    return [p for p in _BLANK_LINES.split(text) if p.strip()]


def split_text(text: str, max_chunk_size: int = DEFAULT_MAX_CHUNK_SIZE) -> list[str]:
    """
    Pack paragraphs into ordered chunks.

    A paragraph is appended to the running buffer unless that would push the
    buffer past max_chunk_size while it already holds text, in which case the
    buffer is flushed first. Length is counted in characters.

    Args:
        text: Raw document text
        max_chunk_size: Soft upper bound for a chunk's length

    Returns:
        list[str]: Trimmed chunks in source order (empty for empty input)

    Raises:
        ValueError: When max_chunk_size is not positive
    """
    if max_chunk_size <= 0:
        raise ValueError("max_chunk_size must be positive")

    chunks: list[str] = []
    buffer = ""

    for paragraph in split_paragraphs(text):
        if buffer and len(buffer) + len(paragraph) > max_chunk_size:
            chunks.append(buffer.strip())
            buffer = ""
        buffer += paragraph + "\n"

    if buffer.strip():
        chunks.append(buffer.strip())

    return chunks


class ChunkSplitter:
    """Chunker bound to a configured chunk size."""

    def __init__(self, max_chunk_size: int = DEFAULT_MAX_CHUNK_SIZE) -> None:
        if max_chunk_size <= 0:
            raise ValueError("max_chunk_size must be positive")
        self.max_chunk_size = max_chunk_size

    def split(self, text: str) -> list[str]:
        """Split text with the configured chunk size."""
        return split_text(text, self.max_chunk_size)
