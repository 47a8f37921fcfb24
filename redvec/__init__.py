"""redvec: embedding vectors and documents stored in Redis, searched with RediSearch KNN."""

from redvec.errors import (
    ConnectionError,
    FilterConflictError,
    MetadataDecodeError,
    StoreError,
    ValidationError,
)
from redvec.vector import Document, RedisVectorStore, VectorStore, create_vector_store

__all__ = [
    "ConnectionError",
    "Document",
    "FilterConflictError",
    "MetadataDecodeError",
    "RedisVectorStore",
    "StoreError",
    "ValidationError",
    "VectorStore",
    "create_vector_store",
]
