"""
Query domain models.

Dependencies: pydantic
System role: Answer and source structures returned by retrieval
"""

from pydantic import BaseModel, Field


class Source(BaseModel):
    """Citation of one retrieved chunk."""

    file_name: str = Field(description="Source document name")
    chunk_index: int = Field(description="Chunk position in the source document")
    preview: str = Field(description="First 200 characters of the chunk, '...' appended if cut")


class AnswerResult(BaseModel):
    """Outcome of answering one question."""

    answer: str
    sources: list[Source] = Field(default_factory=list)
    chunks_used: int = 0
    provider_used: str | None = Field(
        default=None,
        description="Generation provider that answered; None when no chunk matched",
    )


class QueryResult(BaseModel):
    """Answer to a question as returned by the query service."""

    question: str
    answer: str
    sources: list[Source] = Field(default_factory=list)
    chunks_used: int = 0
    provider_used: str | None = None
