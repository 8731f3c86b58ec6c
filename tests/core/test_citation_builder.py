"""Tests for citation previews."""

import uuid

from homelab_rag.core.citation_builder import build_sources, make_preview
from homelab_rag.models.document import RetrievedChunk


def retrieved(content: str, file_name: str = "a.md", index: int = 0) -> RetrievedChunk:
    return RetrievedChunk(
        chunk_id=uuid.uuid4(),
        document_id=uuid.uuid4(),
        file_name=file_name,
        content=content,
        chunk_index=index,
        distance=0.1,
    )


class TestMakePreview:
    """Test make_preview()."""

    def test_make_preview_should_keep_short_content(self) -> None:
        assert make_preview("short") == "short"

    def test_make_preview_should_keep_content_of_exactly_200_chars(self) -> None:
        content = "x" * 200
        assert make_preview(content) == content

    def test_make_preview_should_truncate_long_content(self) -> None:
        # Act
        preview = make_preview("y" * 201)

        # Assert
        assert preview == "y" * 200 + "..."
        assert len(preview) == 203


class TestBuildSources:
    """Test build_sources()."""

    def test_build_sources_should_preserve_order(self) -> None:
        # Arrange
        chunks = [
            retrieved("z" * 500, "b.md", 3),
            retrieved("first", "a.md", 0),
        ]

        # Act
        sources = build_sources(chunks)

        # Assert
        assert [(s.file_name, s.chunk_index) for s in sources] == [("b.md", 3), ("a.md", 0)]
        assert len(sources[0].preview) == 203
        assert sources[1].preview == "first"
