"""
Google Generative AI Embeddings wrapper with fixed output dimensionality.

Wraps GoogleGenerativeAIEmbeddings to ensure consistent vector dimensions
across all embedding calls. The base class ignores output_dimensionality
in the constructor, so it is applied on every call instead.

Dependencies: langchain_google_genai, chatppc.configs
System role: Embedding dimension consistency for stored chunks
"""

import logging
from typing import List

from langchain_google_genai import GoogleGenerativeAIEmbeddings

from chatppc.configs import get_settings
from chatppc.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class FixedDimensionEmbeddings(GoogleGenerativeAIEmbeddings):
    """
    GoogleGenerativeAIEmbeddings wrapper with fixed output dimensionality.

    Every embed call uses the configured dimension unless the caller
    overrides it, keeping stored vectors comparable.
    """

    _output_dimensionality: int = 1536

    def __init__(
        self,
        model: str = "models/gemini-embedding-001",
        output_dimensionality: int = 1536,
        **kwargs,
    ) -> None:
        """
        Initialize embeddings with fixed output dimensionality.

        Args:
            model: Google embedding model ID
            output_dimensionality: Fixed dimension for all embeddings
            **kwargs: Additional arguments for GoogleGenerativeAIEmbeddings
        """
        super().__init__(model=model, **kwargs)
        self._output_dimensionality = output_dimensionality
        logger.info(
            f"{__name__}:__init__ - Initialized with model={model}, "
            f"output_dimensionality={output_dimensionality}"
        )

    def embed_documents(
        self,
        texts: List[str],
        *,
        batch_size: int = 100,
        task_type: str | None = None,
        titles: List[str] | None = None,
        output_dimensionality: int | None = None,
    ) -> List[List[float]]:
        """
        Embed documents with fixed output dimensionality.

        Args:
            texts: List of texts to embed
            batch_size: Batch size for API calls
            task_type: Optional task type for embedding
            titles: Optional titles for documents
            output_dimensionality: Override dimension (uses configured if None)

        Returns:
            List of embedding vectors
        """
        dim = output_dimensionality or self._output_dimensionality
        return super().embed_documents(
            texts,
            batch_size=batch_size,
            task_type=task_type,
            titles=titles,
            output_dimensionality=dim,
        )

    def embed_query(
        self,
        text: str,
        task_type: str | None = None,
        title: str | None = None,
        output_dimensionality: int | None = None,
    ) -> List[float]:
        """
        Embed query with fixed output dimensionality.

        Args:
            text: Query text to embed
            task_type: Optional task type for embedding
            title: Optional title
            output_dimensionality: Override dimension (uses configured if None)

        Returns:
            Embedding vector
        """
        dim = output_dimensionality or self._output_dimensionality
        return super().embed_query(
            text,
            task_type=task_type,
            title=title,
            output_dimensionality=dim,
        )


def get_embeddings() -> FixedDimensionEmbeddings:
    """
    Build the embedding model from settings.

    Returns:
        FixedDimensionEmbeddings: Configured embedder

    Raises:
        ConfigurationError: When no Google API key is configured
    """
    config = get_settings().embeddings
    if not config.google_api_key:
        raise ConfigurationError(
            "Embeddings API key is not configured",
            details={"missing": ["GOOGLE_API_KEY"]},
        )
    return FixedDimensionEmbeddings(
        model=config.model,
        output_dimensionality=config.dimension,
        google_api_key=config.google_api_key,
    )
