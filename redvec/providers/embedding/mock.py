"""Mock embedding provider for testing."""

import hashlib
from typing import Any

from redvec.providers.embedding.base import EmbeddingProvider, EmbeddingResponse


class MockEmbeddingProvider(EmbeddingProvider):
    """Deterministic embeddings derived from a hash of the text.

    No API calls. Identical texts get identical unit vectors; similar texts
    do NOT get similar vectors.
    """

    def __init__(
        self,
        dimensions: int = 384,
        default_model: str = "mock-embedding",
    ):
        self._dimensions = dimensions
        self._default_model = default_model
        self._call_history: list[dict[str, Any]] = []

    @property
    def provider_name(self) -> str:
        return "mock"

    @property
    def dimensions(self) -> int:
        return self._dimensions

    @property
    def call_history(self) -> list[dict[str, Any]]:
        """Return history of calls for testing assertions."""
        return self._call_history

    def _generate_embedding(self, text: str) -> list[float]:
        digest = hashlib.sha256(text.encode()).digest()

        embedding = [(digest[i % len(digest)] / 127.5) - 1.0 for i in range(self._dimensions)]

        magnitude = sum(x * x for x in embedding) ** 0.5
        if magnitude > 0:
            embedding = [x / magnitude for x in embedding]

        return embedding

    async def embed(
        self,
        texts: list[str],
        *,
        model: str | None = None,
        **kwargs: Any,
    ) -> EmbeddingResponse:
        """Generate mock embeddings."""
        self._call_history.append({
            "texts": texts,
            "model": model or self._default_model,
            "kwargs": kwargs,
        })

        return EmbeddingResponse(
            embeddings=[self._generate_embedding(text) for text in texts],
            model=model or self._default_model,
            dimensions=self._dimensions,
            usage={"total_tokens": sum(len(t) // 4 for t in texts)},
        )
