"""Integration tests for RedisVectorStore.

Runs KNN search, filtering and index lifecycle against a real Redis
server with the search module.
"""

import pytest

from redvec.errors import FilterConflictError
from redvec.vector import Document, RedisVectorStore
from redvec.vector.keys import SequentialKeyPolicy


def _axis(i: int, dims: int = 8) -> list[float]:
    vector = [0.0] * dims
    vector[i] = 1.0
    return vector


@pytest.mark.integration
class TestRedisVectorStoreLifecycle:
    """Index creation and removal."""

    async def test_ensure_index_twice(self, vector_store):
        """Second ensure_index is a no-op."""
        await vector_store.ensure_index(8)
        await vector_store.ensure_index(8)

        assert await vector_store.check_index_exists() is True

    async def test_drop_missing_index_returns_false(self, vector_store):
        assert await vector_store.drop_index() is False

    async def test_drop_existing_index(self, vector_store):
        await vector_store.ensure_index(8)

        assert await vector_store.drop_index() is True
        assert await vector_store.check_index_exists() is False


@pytest.mark.integration
class TestRedisVectorStoreSearch:
    """Writes and KNN queries."""

    async def test_search_before_insert_is_empty(self, vector_store):
        await vector_store.ensure_index(8)

        assert await vector_store.similarity_search_vector_with_score(_axis(0), 3) == []

    async def test_at_most_k_sorted_by_score(self, vector_store):
        docs = [Document(page_content=f"doc {i}", metadata={"i": i}) for i in range(5)]
        await vector_store.add_vectors([_axis(i) for i in range(5)], docs)

        results = await vector_store.similarity_search_vector_with_score(_axis(2), 3)

        assert len(results) == 3
        assert results[0][0].page_content == "doc 2"
        scores = [score for _, score in results]
        assert scores == sorted(scores)

    async def test_metadata_with_dash_round_trips(self, vector_store):
        await vector_store.add_vectors(
            [_axis(0)], [Document(page_content="c", metadata={"a": "x-y"})]
        )

        [(document, _)] = await vector_store.similarity_search_vector_with_score(_axis(0), 1)

        assert document.metadata == {"a": "x-y"}

    async def test_batch_size_one_keeps_everything(self, vector_store):
        docs = [Document(page_content=f"doc {i}") for i in range(3)]
        await vector_store.add_vectors([_axis(i) for i in range(3)], docs, batch_size=1)

        results = await vector_store.similarity_search_vector_with_score(_axis(0), 10)

        assert sorted(doc.page_content for doc, _ in results) == ["doc 0", "doc 1", "doc 2"]

    async def test_filter_restricts_by_metadata_tag(self, vector_store):
        docs = [
            Document(page_content="red", metadata={"color": "crimson"}),
            Document(page_content="blue", metadata={"color": "navy"}),
        ]
        await vector_store.add_vectors([_axis(0), _axis(1)], docs)

        results = await vector_store.similarity_search_vector_with_score(
            _axis(0), 5, filter=["navy"]
        )

        assert [doc.page_content for doc, _ in results] == ["blue"]

    async def test_filter_matches_non_ascii_tag(self, vector_store):
        docs = [
            Document(page_content="paris", metadata={"city": "café"}),
            Document(page_content="berlin", metadata={"city": "kneipe"}),
        ]
        await vector_store.add_vectors([_axis(0), _axis(1)], docs)

        results = await vector_store.similarity_search_vector_with_score(
            _axis(1), 5, filter=["café"]
        )

        assert [doc.page_content for doc, _ in results] == ["paris"]
        assert results[0][0].metadata == {"city": "café"}

    async def test_text_search_uses_embedder(self, vector_store):
        await vector_store.add_documents([
            Document(page_content="the quick brown fox"),
            Document(page_content="lorem ipsum"),
        ])

        [top] = await vector_store.similarity_search("the quick brown fox", k=1)

        assert top.page_content == "the quick brown fox"

    async def test_filter_conflict(self, redis_client, embedder, index_config):
        store = RedisVectorStore(
            redis_client,
            embedder,
            index_config.model_copy(update={"default_filter": ["a"]}),
        )

        with pytest.raises(FilterConflictError):
            await store.similarity_search_vector_with_score(_axis(0), 1, filter=["b"])


@pytest.mark.integration
class TestSequentialKeys:
    """Count-derived keys with a single writer."""

    async def test_new_keys_do_not_collide(self, redis_client, embedder, index_config):
        store = RedisVectorStore(
            redis_client, embedder, index_config, key_policy=SequentialKeyPolicy()
        )
        try:
            first = await store.add_vectors(
                [_axis(i) for i in range(5)],
                [Document(page_content=str(i)) for i in range(5)],
            )
            second = await store.add_vectors(
                [_axis(5), _axis(6)],
                [Document(page_content="5"), Document(page_content="6")],
            )

            assert not set(first) & set(second)
            assert second == [f"{store.key_prefix}5", f"{store.key_prefix}6"]
        finally:
            await store.drop_index(delete_documents=True)
