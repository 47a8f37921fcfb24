"""Pytest fixtures for store integration tests.

Needs a Redis server with the search module (Redis Stack or Redis 8).
Tests skip gracefully when it is unavailable.
"""

import os
from collections.abc import AsyncIterator
from uuid import uuid4

import pytest
import pytest_asyncio
import redis.asyncio as redis

from redvec.config.models import IndexConfig
from redvec.providers.embedding import MockEmbeddingProvider
from redvec.vector import RedisVectorStore


@pytest.fixture(scope="session")
def redis_url() -> str:
    """Get Redis URL for tests."""
    return os.environ.get("TEST_REDIS_URL", "redis://localhost:6379/0")


@pytest_asyncio.fixture(scope="function")
async def redis_client(redis_url: str) -> AsyncIterator[redis.Redis]:
    """Create Redis client for tests.

    Skips tests if Redis or its search module is not available.
    Uses function scope to avoid event loop issues across tests.
    """
    client = redis.from_url(redis_url)

    try:
        await client.ping()
        await client.execute_command("FT._LIST")
    except redis.ConnectionError:
        await client.aclose()
        pytest.skip("Redis not available (run 'docker run -p 6379:6379 redis/redis-stack')")
    except redis.ResponseError:
        await client.aclose()
        pytest.skip("Redis search module not loaded")

    yield client

    await client.aclose()


@pytest.fixture
def index_config() -> IndexConfig:
    """Index with a unique name and prefix for test isolation."""
    return IndexConfig(index_name=f"test_idx_{uuid4().hex[:8]}")


@pytest.fixture
def embedder() -> MockEmbeddingProvider:
    return MockEmbeddingProvider(dimensions=8)


@pytest_asyncio.fixture
async def vector_store(
    redis_client: redis.Redis,
    embedder: MockEmbeddingProvider,
    index_config: IndexConfig,
) -> AsyncIterator[RedisVectorStore]:
    """Store whose index and records are dropped after the test."""
    store = RedisVectorStore(redis_client, embedder, index_config)

    yield store

    await store.drop_index(delete_documents=True)
    async for key in redis_client.scan_iter(match=f"{store.key_prefix}*"):
        await redis_client.delete(key)
