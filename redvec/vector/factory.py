"""Factory functions wiring settings, Redis client and embedder into a store.

Connection strings are read from environment variables:
- REDIS_URL: Redis URL, may carry credentials (defaults to settings.redis.url)
"""

import os

import redis.asyncio as redis

from redvec.config import get_settings
from redvec.config.models.storage import RedisConfig
from redvec.config.settings import Settings
from redvec.observability.logging import get_logger, setup_logging
from redvec.providers.embedding import EmbeddingProvider, create_embedding_provider
from redvec.vector.stores.redis import RedisVectorStore

logger = get_logger(__name__)


def create_redis_client(config: RedisConfig) -> redis.Redis:
    """Create an async Redis client from configuration."""
    url = os.environ.get("REDIS_URL", config.url)

    logger.info(
        "creating_redis_client",
        url=url,
        socket_timeout=config.socket_timeout,
    )

    return redis.from_url(
        url,
        socket_timeout=config.socket_timeout,
        decode_responses=config.decode_responses,
    )


def create_vector_store(
    settings: Settings | None = None,
    *,
    embedder: EmbeddingProvider | None = None,
    client: redis.Redis | None = None,
    configure_logging: bool = True,
) -> RedisVectorStore:
    """Create a RedisVectorStore from settings.

    Args:
        settings: Settings to use (loaded via get_settings() if None)
        embedder: Embedding provider (built from settings.embedding if None;
            the store then owns and closes it)
        client: Redis client (built from settings.redis if None; the store
            then owns and closes it)
        configure_logging: Apply settings.logging via setup_logging

    Returns:
        Configured RedisVectorStore
    """
    settings = settings or get_settings()

    if configure_logging:
        setup_logging(
            level="DEBUG" if settings.debug else settings.logging.level,
            format=settings.logging.format,
            redact_pii=settings.logging.redact_pii,
        )

    store = RedisVectorStore(
        client or create_redis_client(settings.redis),
        embedder or create_embedding_provider(settings.embedding),
        settings.index,
        owns_client=client is None,
        owns_embedder=embedder is None,
    )

    logger.info(
        "creating_vector_store",
        app=settings.app_name,
        backend=store.provider_name,
        index=store.index_name,
        prefix=store.key_prefix,
        algorithm=settings.index.algorithm,
        distance=settings.index.distance_metric,
    )
    return store
