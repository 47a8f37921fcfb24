"""VectorStore abstract interface.

The VectorStore is responsible for:
- Storing embedding vectors with their text and metadata
- Answering k-nearest-neighbour queries, optionally pre-filtered by metadata
- Managing the lifecycle of the backing index

Indexing and distance computation happen in the backend; implementations
only shape requests and responses.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from redvec.providers.embedding.base import EmbeddingProvider


class Document(BaseModel):
    """A piece of text with its metadata."""

    page_content: str = Field(..., description="Document text")
    metadata: dict[str, Any] = Field(default_factory=dict, description="Structured metadata")


class IndexStatus(str, Enum):
    """Outcome of probing for an index."""

    EXISTS = "exists"
    NOT_FOUND = "not_found"
    BACKEND_ERROR = "backend_error"


class DropStatus(str, Enum):
    """Outcome of dropping an index."""

    DROPPED = "dropped"
    NOT_FOUND = "not_found"
    BACKEND_ERROR = "backend_error"


class VectorStore(ABC):
    """Abstract interface for vector storage and similarity search."""

    def __init__(self, embedder: EmbeddingProvider) -> None:
        self.embedder = embedder

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the provider name (e.g., 'redis')."""
        pass

    @abstractmethod
    async def add_vectors(
        self,
        vectors: list[list[float]],
        documents: list[Document],
        *,
        keys: list[str] | None = None,
        batch_size: int | None = None,
    ) -> list[str]:
        """Store precomputed vectors alongside their documents.

        Args:
            vectors: One vector per document, all the same length
            documents: Documents to store
            keys: Explicit record keys, positionally matched to documents
            batch_size: Writes per backend batch (store default if None)

        Returns:
            Keys of the written records
        """
        pass

    @abstractmethod
    async def similarity_search_vector_with_score(
        self,
        query: list[float],
        k: int,
        filter: list[str] | None = None,
    ) -> list[tuple[Document, float]]:
        """Find the k records nearest to a query vector.

        Args:
            query: Query embedding vector
            k: Maximum number of results
            filter: Metadata tags; a record matches if it contains any

        Returns:
            (document, score) pairs sorted by ascending score
        """
        pass

    @abstractmethod
    async def drop_index(self, *, delete_documents: bool = False) -> bool:
        """Drop the backing index.

        Returns:
            True if dropped, False on any failure (including absence)
        """
        pass

    async def add_documents(
        self,
        documents: list[Document],
        *,
        keys: list[str] | None = None,
        batch_size: int | None = None,
    ) -> list[str]:
        """Embed documents with the store's embedder and add them."""
        texts = [doc.page_content for doc in documents]
        vectors = await self.embedder.embed_documents(texts)
        return await self.add_vectors(vectors, documents, keys=keys, batch_size=batch_size)

    async def similarity_search_with_score(
        self,
        query: str,
        k: int = 4,
        filter: list[str] | None = None,
    ) -> list[tuple[Document, float]]:
        """Embed a text query and search with it."""
        vector = await self.embedder.embed_query(query)
        return await self.similarity_search_vector_with_score(vector, k, filter)

    async def similarity_search(
        self,
        query: str,
        k: int = 4,
        filter: list[str] | None = None,
    ) -> list[Document]:
        """Embed a text query and return only the matching documents."""
        results = await self.similarity_search_with_score(query, k, filter)
        return [doc for doc, _ in results]

    async def close(self) -> None:
        """Close connections and cleanup resources."""
        pass

    async def __aenter__(self) -> "VectorStore":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()
