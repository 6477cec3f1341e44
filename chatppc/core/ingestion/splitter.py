"""
Markdown-aware text splitting using MarkdownTextSplitter.

Splits documents into retrievable chunks while preserving context.
Separators prefer headings, code fences, rules and paragraphs before
falling back to lines, words and finally single characters, so a chunk
never exceeds chunk_size.

Dependencies: langchain_text_splitters, langchain_core
System role: Second stage of document ingestion pipeline
"""

from typing import Any

from langchain_core.documents import Document
from langchain_text_splitters import MarkdownTextSplitter

from chatppc.core.exceptions import ValidationError

DEFAULT_CHUNK_SIZE = 4000
DEFAULT_CHUNK_OVERLAP = 200


class DocumentSplitter:
    """Split markdown text into overlapping chunks."""

    def __init__(
        self,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        chunk_overlap: int = DEFAULT_CHUNK_OVERLAP,
    ) -> None:
        """
        Initialize splitter configuration.

        Args:
            chunk_size: Maximum chunk size in characters
            chunk_overlap: Overlap between consecutive chunks

        Raises:
            ValidationError: When sizes are not positive or overlap >= chunk_size
        """
        if chunk_size <= 0:
            raise ValidationError("chunk_size must be positive", field="chunk_size")
        if chunk_overlap < 0 or chunk_overlap >= chunk_size:
            raise ValidationError(
                "chunk_overlap must be >= 0 and smaller than chunk_size",
                field="chunk_overlap",
            )

        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap
        self._splitter = MarkdownTextSplitter(
            chunk_size=chunk_size,
            chunk_overlap=chunk_overlap,
            add_start_index=True,
            length_function=len,
        )

    def split(self, content: str, metadata: dict[str, Any] | None = None) -> list[Document]:
        """
        Split one document into chunks.

        Args:
            content: Full document text
            metadata: Metadata copied onto every chunk

        Returns:
            list[Document]: Chunks in document order, each carrying its
                own copy of metadata plus "start_index"
        """
        if not content:
            return []
        return self._splitter.create_documents([content], [dict(metadata or {})])
