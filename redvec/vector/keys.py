"""Key assignment policies for records inserted without explicit keys."""

from abc import ABC, abstractmethod
from uuid import uuid4

import redis.asyncio as redis

from redvec.config.models.storage import KeyPolicyType

SCAN_BATCH = 1000


class KeyPolicy(ABC):
    """Assigns hash keys under a prefix for a batch of new records."""

    @abstractmethod
    async def assign(self, client: redis.Redis, prefix: str, count: int) -> list[str]:
        """Return ``count`` keys, each starting with ``prefix``."""
        pass


class UUIDKeyPolicy(KeyPolicy):
    """Random UUID keys; unique across concurrent writers."""

    async def assign(self, client: redis.Redis, prefix: str, count: int) -> list[str]:
        return [f"{prefix}{uuid4().hex}" for _ in range(count)]


class SequentialKeyPolicy(KeyPolicy):
    """``prefix + n`` keys continuing from the number of keys already stored.

    The offset is re-read on every call, so two concurrent writers can be
    handed the same keys. Only safe with a single writer.
    """

    async def assign(self, client: redis.Redis, prefix: str, count: int) -> list[str]:
        offset = await count_keys(client, prefix)
        return [f"{prefix}{offset + i}" for i in range(count)]


async def count_keys(client: redis.Redis, prefix: str) -> int:
    """Count keys starting with prefix using SCAN (non-blocking, unlike KEYS).

    SCAN may return a key more than once, so the count can be inflated.
    Sequential keys then skip numbers but never reuse one.
    """
    total = 0
    async for _ in client.scan_iter(match=f"{prefix}*", count=SCAN_BATCH):
        total += 1
    return total


def get_key_policy(name: KeyPolicyType) -> KeyPolicy:
    """Resolve a configured policy name."""
    if name == "uuid":
        return UUIDKeyPolicy()
    elif name == "sequential":
        return SequentialKeyPolicy()
    else:
        raise ValueError(f"Unsupported key policy: {name}")
