"""Embedding providers."""

from redvec.config.models.providers import EmbeddingConfig
from redvec.observability.logging import get_logger
from redvec.providers.embedding.base import EmbeddingProvider, EmbeddingResponse
from redvec.providers.embedding.mock import MockEmbeddingProvider
from redvec.providers.embedding.openai import OpenAIEmbeddingProvider

logger = get_logger(__name__)


def create_embedding_provider(config: EmbeddingConfig) -> EmbeddingProvider:
    """Create an EmbeddingProvider from configuration.

    Raises:
        ValueError: If the provider type is not supported
    """
    logger.info(
        "creating_embedding_provider",
        provider=config.provider,
        model=config.model,
    )

    if config.provider == "mock":
        return MockEmbeddingProvider(dimensions=config.dimensions or 384)
    elif config.provider == "openai":
        return OpenAIEmbeddingProvider(
            model=config.model,
            dimensions=config.dimensions,
            timeout=config.timeout,
        )
    else:
        raise ValueError(f"Unsupported embedding provider: {config.provider}")


__all__ = [
    "EmbeddingProvider",
    "EmbeddingResponse",
    "MockEmbeddingProvider",
    "OpenAIEmbeddingProvider",
    "create_embedding_provider",
]
