"""Tests for vector store factory functions."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from redvec.config.models import EmbeddingConfig, IndexConfig, LoggingConfig, RedisConfig
from redvec.config.settings import Settings
from redvec.providers.embedding import MockEmbeddingProvider
from redvec.vector import RedisVectorStore, create_redis_client, create_vector_store


class TestCreateRedisClient:
    """Tests for create_redis_client."""

    def test_uses_config_url(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.delenv("REDIS_URL", raising=False)
        with patch("redvec.vector.factory.redis.from_url") as from_url:
            create_redis_client(RedisConfig(url="redis://cache:6379/2", socket_timeout=5.0))

        from_url.assert_called_once_with(
            "redis://cache:6379/2",
            socket_timeout=5.0,
            decode_responses=False,
        )

    def test_env_url_wins(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("REDIS_URL", "redis://:secret@prod:6379/0")
        with patch("redvec.vector.factory.redis.from_url") as from_url:
            create_redis_client(RedisConfig())

        assert from_url.call_args.args[0] == "redis://:secret@prod:6379/0"


class TestCreateVectorStore:
    """Tests for create_vector_store."""

    def test_wires_settings(self):
        settings = Settings(
            index=IndexConfig(index_name="articles", batch_size=10),
            embedding=EmbeddingConfig(provider="mock", dimensions=8),
        )
        client = MagicMock()

        store = create_vector_store(settings, client=client)

        assert isinstance(store, RedisVectorStore)
        assert store.index_name == "articles"
        assert store.config.batch_size == 10
        assert store.embedder.provider_name == "mock"
        assert store.embedder.dimensions == 8

    @pytest.mark.asyncio
    async def test_borrowed_client_not_closed(self):
        client = MagicMock()
        store = create_vector_store(
            Settings(), client=client, embedder=MockEmbeddingProvider(dimensions=4)
        )

        await store.close()

        client.aclose.assert_not_called()

    def test_builds_client_when_missing(self):
        with patch("redvec.vector.factory.create_redis_client") as create_client:
            store = create_vector_store(
                Settings(), embedder=MockEmbeddingProvider(dimensions=4)
            )

        create_client.assert_called_once()
        assert store._owns_client is True

    @pytest.mark.asyncio
    async def test_built_embedder_closed_with_store(self):
        embedder = MockEmbeddingProvider(dimensions=4)
        embedder.close = AsyncMock()
        client = MagicMock()
        client.aclose = AsyncMock()

        with patch("redvec.vector.factory.create_embedding_provider", return_value=embedder):
            store = create_vector_store(Settings(), client=client)
        await store.close()

        embedder.close.assert_awaited_once()
        client.aclose.assert_not_called()

    @pytest.mark.asyncio
    async def test_passed_embedder_left_open(self):
        embedder = MockEmbeddingProvider(dimensions=4)
        embedder.close = AsyncMock()

        store = create_vector_store(Settings(), client=MagicMock(), embedder=embedder)
        await store.close()

        embedder.close.assert_not_called()


class TestCreateVectorStoreLogging:
    """Logging settings are applied when the store is built."""

    def test_applies_logging_settings(self):
        settings = Settings(
            logging=LoggingConfig(level="WARNING", format="console", redact_pii=False)
        )

        with patch("redvec.vector.factory.setup_logging") as setup:
            create_vector_store(
                settings, client=MagicMock(), embedder=MockEmbeddingProvider(dimensions=4)
            )

        setup.assert_called_once_with(level="WARNING", format="console", redact_pii=False)

    def test_debug_forces_debug_level(self):
        settings = Settings(debug=True, logging=LoggingConfig(level="ERROR"))

        with patch("redvec.vector.factory.setup_logging") as setup:
            create_vector_store(
                settings, client=MagicMock(), embedder=MockEmbeddingProvider(dimensions=4)
            )

        assert setup.call_args.kwargs["level"] == "DEBUG"

    def test_can_leave_logging_alone(self):
        with patch("redvec.vector.factory.setup_logging") as setup:
            create_vector_store(
                Settings(),
                client=MagicMock(),
                embedder=MockEmbeddingProvider(dimensions=4),
                configure_logging=False,
            )

        setup.assert_not_called()
