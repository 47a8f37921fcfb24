"""EmbeddingProvider abstract interface."""

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel, Field


class EmbeddingResponse(BaseModel):
    """Response from an embedding provider."""

    embeddings: list[list[float]] = Field(..., description="Embedding vectors")
    model: str = Field(..., description="Model used")
    dimensions: int = Field(..., description="Vector dimensions")
    usage: dict[str, int] | None = Field(default=None, description="Token usage stats")


class EmbeddingProvider(ABC):
    """Abstract interface for text embeddings.

    The vector store only relies on ``embed_documents`` and ``embed_query``;
    implementations provide ``embed``.
    """

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the provider name."""
        pass

    @property
    @abstractmethod
    def dimensions(self) -> int:
        """Return the embedding dimensions."""
        pass

    @abstractmethod
    async def embed(
        self,
        texts: list[str],
        *,
        model: str | None = None,
        **kwargs: Any,
    ) -> EmbeddingResponse:
        """Generate embeddings for texts.

        Args:
            texts: List of texts to embed
            model: Model to use (provider default if not specified)
            **kwargs: Provider-specific options

        Returns:
            EmbeddingResponse with one vector per text, in input order
        """
        pass

    async def embed_documents(self, texts: list[str]) -> list[list[float]]:
        """Embed documents for storage, one vector per text in order."""
        if not texts:
            return []
        response = await self.embed(texts)
        return response.embeddings

    async def embed_query(self, text: str) -> list[float]:
        """Embed a single search query."""
        response = await self.embed([text])
        return response.embeddings[0]

    async def close(self) -> None:
        """Release client resources."""
        pass
