"""Redis (RediSearch) vector store implementation.

Records are Redis hashes under a key prefix; a RediSearch index over that
prefix provides KNN search. Each hash holds:

- {vector_key}: little-endian float32 bytes
- {content_key}: document text
- {metadata_key}: JSON metadata with ``-`` escaped
"""

from typing import Any

import redis.asyncio as redis
from redis.commands.search.field import TextField, VectorField
from redis.commands.search.index_definition import IndexDefinition, IndexType
from redis.exceptions import RedisError, ResponseError

from redvec.config.models.storage import IndexConfig
from redvec.errors import ConnectionError, FilterConflictError, ValidationError
from redvec.observability.logging import get_logger
from redvec.providers.embedding.base import EmbeddingProvider
from redvec.vector.codec import dump_metadata, load_metadata, to_float32_bytes
from redvec.vector.keys import KeyPolicy, get_key_policy
from redvec.vector.query import VECTOR_PARAM, build_hybrid_query
from redvec.vector.stores.base import Document, DropStatus, IndexStatus, VectorStore

logger = get_logger(__name__)

DEFAULT_DIMENSIONS = 1536

MISSING_INDEX_MARKERS = ("unknown index", "no such index", "not found")


def _is_missing_index(error: ResponseError) -> bool:
    message = str(error).lower()
    return any(marker in message for marker in MISSING_INDEX_MARKERS)


def _to_str(value: Any) -> str:
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return str(value)


class RedisVectorStore(VectorStore):
    """Vector store backed by Redis hashes and a RediSearch vector index.

    The index is created lazily on the first insert, sized from the first
    vector. All distance computation happens in Redis; scores are returned
    as reported (lower is closer for COSINE and L2).
    """

    def __init__(
        self,
        client: redis.Redis,
        embedder: EmbeddingProvider,
        config: IndexConfig | None = None,
        *,
        key_policy: KeyPolicy | None = None,
        owns_client: bool = False,
        owns_embedder: bool = False,
    ) -> None:
        """Initialize the store.

        Args:
            client: Async Redis client with the search module available
            embedder: Provider used by the text-based helpers
            config: Index configuration (uses defaults if not provided)
            key_policy: Key generation for inserts without explicit keys
                (defaults to the configured policy)
            owns_client: Close the client when the store is closed
            owns_embedder: Close the embedder when the store is closed
        """
        super().__init__(embedder)
        self._client = client
        self._config = config or IndexConfig()
        self._key_policy = key_policy or get_key_policy(self._config.key_policy)
        self._owns_client = owns_client
        self._owns_embedder = owns_embedder

    @property
    def provider_name(self) -> str:
        return "redis"

    @property
    def config(self) -> IndexConfig:
        return self._config

    @property
    def index_name(self) -> str:
        return self._config.index_name

    @property
    def key_prefix(self) -> str:
        return self._config.prefix

    @property
    def filter(self) -> list[str] | None:
        """Default metadata filter applied to every search."""
        return self._config.default_filter

    # Index management

    async def probe_index(self) -> IndexStatus:
        """Check whether the index exists, distinguishing absence from failure."""
        try:
            await self._client.ft(self.index_name).info()
        except ResponseError as e:
            if _is_missing_index(e):
                return IndexStatus.NOT_FOUND
            logger.warning("redis_index_probe_error", index=self.index_name, error=str(e))
            return IndexStatus.BACKEND_ERROR
        except RedisError as e:
            logger.warning("redis_index_probe_error", index=self.index_name, error=str(e))
            return IndexStatus.BACKEND_ERROR

        return IndexStatus.EXISTS

    async def check_index_exists(self) -> bool:
        """Return True only when the index is known to exist."""
        return await self.probe_index() is IndexStatus.EXISTS

    async def ensure_index(self, dimensions: int = DEFAULT_DIMENSIONS) -> None:
        """Create the index unless it already exists.

        A failed probe is treated as absence; the create call then reports
        the real problem. Existence check and creation are not atomic.

        Args:
            dimensions: Vector dimensionality, fixed for the life of the index
        """
        if await self.check_index_exists():
            logger.debug("redis_index_exists", index=self.index_name)
            return

        schema = (
            VectorField(
                self._config.vector_key,
                self._config.algorithm,
                self._config.vector_attributes(dimensions),
            ),
            TextField(self._config.content_key),
            TextField(self._config.metadata_key),
        )
        definition = IndexDefinition(prefix=[self.key_prefix], index_type=IndexType.HASH)

        try:
            await self._client.ft(self.index_name).create_index(schema, definition=definition)
        except ResponseError as e:
            if "already exists" in str(e).lower():
                # Lost a creation race with another writer
                logger.info("redis_index_created_concurrently", index=self.index_name)
                return
            logger.error("redis_index_create_error", index=self.index_name, error=str(e))
            raise ConnectionError(f"Failed to create index {self.index_name}: {e}", cause=e) from e
        except RedisError as e:
            logger.error("redis_index_create_error", index=self.index_name, error=str(e))
            raise ConnectionError(f"Failed to create index {self.index_name}: {e}", cause=e) from e

        logger.info(
            "redis_index_created",
            index=self.index_name,
            prefix=self.key_prefix,
            dimensions=dimensions,
            algorithm=self._config.algorithm,
            distance=self._config.distance_metric,
        )

    async def drop_index_status(self, *, delete_documents: bool = False) -> DropStatus:
        """Drop the index, reporting why it did not happen if it fails.

        Args:
            delete_documents: Also delete the indexed hashes (FT.DROPINDEX DD)
        """
        try:
            await self._client.ft(self.index_name).dropindex(delete_documents=delete_documents)
        except ResponseError as e:
            if _is_missing_index(e):
                logger.debug("redis_index_drop_missing", index=self.index_name)
                return DropStatus.NOT_FOUND
            logger.warning("redis_index_drop_error", index=self.index_name, error=str(e))
            return DropStatus.BACKEND_ERROR
        except RedisError as e:
            logger.warning("redis_index_drop_error", index=self.index_name, error=str(e))
            return DropStatus.BACKEND_ERROR

        logger.info(
            "redis_index_dropped",
            index=self.index_name,
            delete_documents=delete_documents,
        )
        return DropStatus.DROPPED

    async def drop_index(self, *, delete_documents: bool = False) -> bool:
        return await self.drop_index_status(delete_documents=delete_documents) is DropStatus.DROPPED

    # Writes

    def _to_record(self, vector: list[float], document: Document) -> dict[str, Any]:
        return {
            self._config.vector_key: to_float32_bytes(vector),
            self._config.content_key: document.page_content,
            self._config.metadata_key: dump_metadata(document.metadata),
        }

    async def add_vectors(
        self,
        vectors: list[list[float]],
        documents: list[Document],
        *,
        keys: list[str] | None = None,
        batch_size: int | None = None,
    ) -> list[str]:
        """Write vectors and documents as hashes in MULTI/EXEC batches.

        A batch is flushed every ``batch_size`` writes, then once more for
        the remainder. Batches already flushed stay committed if a later
        one fails.
        """
        if len(vectors) != len(documents):
            raise ValidationError(
                f"Got {len(vectors)} vectors for {len(documents)} documents"
            )
        if not vectors:
            return []
        if keys and len(keys) < len(vectors):
            raise ValidationError(f"Got {len(keys)} keys for {len(vectors)} vectors")

        if batch_size is None:
            batch_size = self._config.batch_size
        if batch_size <= 0:
            raise ValidationError(f"batch_size must be positive, got {batch_size}")

        await self.ensure_index(len(vectors[0]))

        try:
            if keys:
                record_keys = list(keys[: len(vectors)])
            else:
                record_keys = await self._key_policy.assign(
                    self._client, self.key_prefix, len(vectors)
                )

            pipe = self._client.pipeline(transaction=True)
            pending = 0
            flushes = 0
            for key, vector, document in zip(record_keys, vectors, documents):
                pipe.hset(key, mapping=self._to_record(vector, document))
                pending += 1
                if pending == batch_size:
                    await pipe.execute()
                    flushes += 1
                    pending = 0
                    logger.debug("redis_batch_flushed", index=self.index_name, size=batch_size)

            if pending:
                await pipe.execute()
                flushes += 1
                logger.debug("redis_batch_flushed", index=self.index_name, size=pending)

        except RedisError as e:
            logger.error(
                "redis_add_vectors_error",
                index=self.index_name,
                count=len(vectors),
                error=str(e),
            )
            raise ConnectionError(f"Failed to add vectors: {e}", cause=e) from e

        logger.info(
            "redis_vectors_added",
            index=self.index_name,
            count=len(record_keys),
            batches=flushes,
        )
        return record_keys

    # Search

    async def similarity_search_vector_with_score(
        self,
        query: list[float],
        k: int,
        filter: list[str] | None = None,
    ) -> list[tuple[Document, float]]:
        """KNN search, optionally restricted to records matching any filter tag.

        Raises:
            FilterConflictError: If both ``filter`` and the default filter are set
        """
        if filter is not None and self.filter is not None:
            raise FilterConflictError("cannot provide both `filter` and a default filter")

        tags = filter if filter is not None else self.filter
        hybrid = build_hybrid_query(
            k=k,
            vector_field=self._config.vector_key,
            metadata_field=self._config.metadata_key,
            content_field=self._config.content_key,
            tags=tags,
        )

        try:
            results = await self._client.ft(self.index_name).search(
                hybrid.to_query(),
                query_params={VECTOR_PARAM: to_float32_bytes(query)},
            )
        except RedisError as e:
            logger.error("redis_search_error", index=self.index_name, error=str(e))
            raise ConnectionError(f"Failed to search index {self.index_name}: {e}", cause=e) from e

        matches = self._parse_results(results, hybrid.knn.score_alias)

        logger.debug(
            "redis_search_success",
            index=self.index_name,
            k=k,
            filtered=bool(tags),
            results=len(matches),
        )
        return matches

    def _parse_results(self, results: Any, score_alias: str) -> list[tuple[Document, float]]:
        if not results.total:
            return []

        matches: list[tuple[Document, float]] = []
        for doc in results.docs:
            score = getattr(doc, score_alias, None)
            if score is None or score == "":
                continue

            raw_metadata = getattr(doc, self._config.metadata_key, None)
            content = getattr(doc, self._config.content_key, "")
            matches.append((
                Document(
                    page_content=_to_str(content),
                    metadata=load_metadata(raw_metadata) if raw_metadata is not None else {},
                ),
                float(_to_str(score)),
            ))

        return matches

    # Constructors

    @classmethod
    async def from_documents(
        cls,
        documents: list[Document],
        embedder: EmbeddingProvider,
        config: IndexConfig | None = None,
        *,
        client: redis.Redis,
        **kwargs: Any,
    ) -> "RedisVectorStore":
        """Create a store and insert the documents before returning it."""
        store = cls(client, embedder, config, **kwargs)
        await store.add_documents(documents)
        return store

    @classmethod
    async def from_texts(
        cls,
        texts: list[str],
        metadatas: list[dict[str, Any]] | dict[str, Any] | None,
        embedder: EmbeddingProvider,
        config: IndexConfig | None = None,
        *,
        client: redis.Redis,
        **kwargs: Any,
    ) -> "RedisVectorStore":
        """Create a store from raw texts.

        ``metadatas`` is either shared by every text or a list matched by
        position; a list shorter than ``texts`` raises IndexError.
        """
        documents = []
        for i, text in enumerate(texts):
            metadata = metadatas[i] if isinstance(metadatas, list) else metadatas
            documents.append(Document(page_content=text, metadata=metadata or {}))
        return await cls.from_documents(documents, embedder, config, client=client, **kwargs)

    # Lifecycle

    async def health_check(self) -> bool:
        """Check Redis connection health."""
        try:
            await self._client.ping()
            return True
        except RedisError as e:
            logger.warning("redis_health_check_failed", error=str(e))
            return False

    async def close(self) -> None:
        if self._owns_embedder:
            await self.embedder.close()
            logger.debug("embedder_closed", provider=self.embedder.provider_name)
        if self._owns_client:
            await self._client.aclose()
            logger.debug("redis_client_closed")
