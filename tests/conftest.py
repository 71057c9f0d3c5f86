"""Pytest configuration and fixtures for neo-acl tests."""

from typing import Sequence, Set

import pytest
import pytest_asyncio
from unittest.mock import AsyncMock, MagicMock

from neo_acl.features.acl.adapters.base import TransactionalBackend
from neo_acl.features.acl.adapters.memory_adapter import MemoryBackend
from neo_acl.features.acl.entities.buckets import BucketNames
from neo_acl.features.acl.entities.transaction import Transaction
from neo_acl.features.acl.services.acl_service import AclService


class SetOnlyBackend(TransactionalBackend):
    """Backend without the bulk ``unions`` capability.

    Delegates to a :class:`MemoryBackend` and counts the reads it serves.
    """

    def __init__(self):
        self.inner = MemoryBackend()
        self.reads = 0

    async def end(self, transaction: Transaction) -> None:
        await self.inner.end(transaction)

    async def get(self, bucket: str, key: str) -> Set[str]:
        self.reads += 1
        return await self.inner.get(bucket, key)

    async def union(self, bucket: str, keys: Sequence[str]) -> Set[str]:
        self.reads += 1
        return await self.inner.union(bucket, keys)


@pytest.fixture
def buckets():
    """Default bucket names."""
    return BucketNames()


@pytest.fixture
def memory_backend():
    """Fresh in-memory backend."""
    return MemoryBackend()


@pytest.fixture
def set_only_backend():
    """Backend lacking ``unions``."""
    return SetOnlyBackend()


@pytest.fixture
def acl(memory_backend):
    """AclService over the in-memory backend."""
    return AclService(memory_backend)


@pytest.fixture
def plain_acl(set_only_backend):
    """AclService over a backend without ``unions``."""
    return AclService(set_only_backend)


@pytest.fixture
def mock_redis_client():
    """Mock redis.asyncio client with a recording pipeline."""
    client = MagicMock()
    client.ping = AsyncMock(return_value=True)
    client.smembers = AsyncMock(return_value=set())
    client.sunion = AsyncMock(return_value=set())
    client.delete = AsyncMock(return_value=0)
    client.aclose = AsyncMock()

    pipeline = MagicMock()
    pipeline.execute = AsyncMock(return_value=[])
    client.pipeline = MagicMock(return_value=pipeline)
    return client


@pytest_asyncio.fixture
async def blog_acl(acl):
    """Blog scenario: admin inherits from user; u1 is admin, u2 is user."""
    await acl.allow("user", "blogs", "get")
    await acl.allow("admin", "blogs", ["put", "delete"])
    await acl.allow("admin", "users", "*")
    await acl.add_role_parents("admin", "user")
    await acl.add_user_roles("u1", "admin")
    await acl.add_user_roles("u2", "user")
    return acl
