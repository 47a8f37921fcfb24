"""Vector storage and similarity search over Redis."""

from redvec.vector.factory import create_redis_client, create_vector_store
from redvec.vector.keys import KeyPolicy, SequentialKeyPolicy, UUIDKeyPolicy
from redvec.vector.query import HybridQuery, KnnClause, MatchAll, TagDisjunction
from redvec.vector.stores.base import Document, DropStatus, IndexStatus, VectorStore
from redvec.vector.stores.redis import RedisVectorStore

__all__ = [
    "Document",
    "DropStatus",
    "HybridQuery",
    "IndexStatus",
    "KeyPolicy",
    "KnnClause",
    "MatchAll",
    "RedisVectorStore",
    "SequentialKeyPolicy",
    "TagDisjunction",
    "UUIDKeyPolicy",
    "VectorStore",
    "create_redis_client",
    "create_vector_store",
]
