"""OpenAI embedding provider."""

import os
from typing import Any

from openai import AsyncOpenAI, OpenAIError

from redvec.observability.logging import get_logger
from redvec.providers.embedding.base import EmbeddingProvider, EmbeddingResponse

logger = get_logger(__name__)

DEFAULT_DIMENSIONS = {
    "text-embedding-3-small": 1536,
    "text-embedding-3-large": 3072,
    "text-embedding-ada-002": 1536,
}


class OpenAIEmbeddingProvider(EmbeddingProvider):
    """Embedding provider using the OpenAI API."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str = "text-embedding-3-small",
        dimensions: int | None = None,
        timeout: float = 60.0,
    ):
        """Initialize OpenAI embedding provider.

        Args:
            api_key: OpenAI API key (defaults to OPENAI_API_KEY env var)
            model: Embedding model identifier
            dimensions: Output dimensions (only honoured by text-embedding-3-* models)
            timeout: Request timeout in seconds
        """
        self._api_key = api_key or os.environ.get("OPENAI_API_KEY")
        if not self._api_key:
            raise ValueError("OPENAI_API_KEY environment variable not set")

        self._model = model
        self._dimensions = dimensions or DEFAULT_DIMENSIONS.get(model, 1536)
        self._client = AsyncOpenAI(api_key=self._api_key, timeout=timeout)

    @property
    def provider_name(self) -> str:
        return "openai"

    @property
    def dimensions(self) -> int:
        return self._dimensions

    async def embed(
        self,
        texts: list[str],
        *,
        model: str | None = None,
        **kwargs: Any,
    ) -> EmbeddingResponse:
        """Generate embeddings using the OpenAI API."""
        use_model = model or self._model

        logger.debug(
            "openai_embed_request",
            model=use_model,
            num_texts=len(texts),
        )

        api_kwargs: dict[str, Any] = {"input": texts, "model": use_model}
        if use_model.startswith("text-embedding-3-"):
            api_kwargs["dimensions"] = self._dimensions
        api_kwargs.update(kwargs)

        try:
            response = await self._client.embeddings.create(**api_kwargs)
        except OpenAIError as e:
            logger.error("openai_embed_error", model=use_model, error=str(e))
            raise RuntimeError(f"OpenAI API error: {e}") from e

        # API may return items out of order
        data = sorted(response.data, key=lambda item: item.index)
        embeddings = [item.embedding for item in data]

        usage = None
        if response.usage:
            usage = {
                "total_tokens": response.usage.total_tokens,
                "prompt_tokens": response.usage.prompt_tokens,
            }

        return EmbeddingResponse(
            embeddings=embeddings,
            model=use_model,
            dimensions=len(embeddings[0]) if embeddings else self._dimensions,
            usage=usage,
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.close()
