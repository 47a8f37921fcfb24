"""Configuration model exports.

    from redvec.config.models import IndexConfig, RedisConfig
"""

from redvec.config.models.observability import LoggingConfig
from redvec.config.models.providers import EmbeddingConfig
from redvec.config.models.storage import IndexConfig, RedisConfig

__all__ = [
    "EmbeddingConfig",
    "IndexConfig",
    "LoggingConfig",
    "RedisConfig",
]
