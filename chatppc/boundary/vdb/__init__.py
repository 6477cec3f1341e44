"""
Vector store boundary.

Exports:
  - ChunkStore: Embeds chunks, persists them in the documents table and searches them
  - ChunkSearchResult: Scored similarity search hit
  - get_embeddings: Configured embedding model factory
"""

from chatppc.boundary.vdb.chunk_store import ChunkStore
from chatppc.boundary.vdb.embeddings_wrapper import FixedDimensionEmbeddings, get_embeddings
from chatppc.boundary.vdb.vector_schemas import ChunkSearchResult

__all__ = ["ChunkSearchResult", "ChunkStore", "FixedDimensionEmbeddings", "get_embeddings"]
