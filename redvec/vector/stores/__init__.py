"""Vector store implementations."""

from redvec.vector.stores.base import Document, DropStatus, IndexStatus, VectorStore
from redvec.vector.stores.redis import RedisVectorStore

__all__ = [
    "Document",
    "DropStatus",
    "IndexStatus",
    "RedisVectorStore",
    "VectorStore",
]
