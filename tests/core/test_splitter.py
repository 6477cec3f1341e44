"""Tests for DocumentSplitter."""

import pytest

from chatppc.core.exceptions import ValidationError
from chatppc.core.ingestion.splitter import DocumentSplitter


class TestDocumentSplitterInit:
    """Construction rules."""

    def test_defaults(self):
        splitter = DocumentSplitter()

        assert splitter.chunk_size == 4000
        assert splitter.chunk_overlap == 200

    @pytest.mark.parametrize(
        "size, overlap",
        [(0, 0), (-5, 0), (100, -1), (100, 100), (100, 150)],
    )
    def test_rejects_invalid_sizes(self, size, overlap):
        with pytest.raises(ValidationError):
            DocumentSplitter(chunk_size=size, chunk_overlap=overlap)


class TestDocumentSplitterSplit:
    """Splitting behaviour."""

    def test_empty_content_yields_no_chunks(self):
        assert DocumentSplitter().split("", {"source": "a.md"}) == []

    def test_small_document_is_one_chunk_with_metadata(self):
        chunks = DocumentSplitter().split("# A\n\nHello", {"source": "doc.md", "hash": "h"})

        assert len(chunks) == 1
        assert chunks[0].page_content == "# A\n\nHello"
        assert chunks[0].metadata["source"] == "doc.md"
        assert chunks[0].metadata["hash"] == "h"

    def test_chunks_never_exceed_chunk_size(self):
        sections = [f"## Section {i}\n\n" + ("word " * 60) for i in range(20)]
        content = "# Guide\n\n" + "\n\n".join(sections)
        splitter = DocumentSplitter(chunk_size=300, chunk_overlap=50)

        chunks = splitter.split(content, {"source": "guide.md"})

        assert len(chunks) > 1
        assert all(len(c.page_content) <= 300 for c in chunks)
        assert all(c.metadata["source"] == "guide.md" for c in chunks)

    def test_metadata_is_not_shared_between_chunks(self):
        content = "\n\n".join(f"## S{i}\n\n" + "text " * 40 for i in range(5))
        metadata = {"source": "s.md"}

        chunks = DocumentSplitter(chunk_size=200, chunk_overlap=20).split(content, metadata)
        chunks[0].metadata["source"] = "changed"

        assert metadata == {"source": "s.md"}
        assert chunks[1].metadata["source"] == "s.md"
