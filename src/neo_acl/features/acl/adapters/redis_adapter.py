"""Redis backend adapter for neo-acl.

Every bucket entry is a Redis set stored under ``{prefix}_{bucket}@{key}``.
Batches are replayed into a ``MULTI/EXEC`` pipeline.
"""

import asyncio
import logging
from typing import Dict, Iterable, List, Optional, Sequence, Set, Union

import redis.asyncio as redis
from redis.asyncio import Redis
from redis.exceptions import RedisError

from ..entities.protocols import SupportsUnions
from ..entities.transaction import MutationKind, Transaction
from .base import TransactionalBackend
from ....core.exceptions.infrastructure import (
    BackendConnectionError,
    BackendError,
    BackendTransactionError,
)

logger = logging.getLogger(__name__)


def _decode(members: Iterable[Union[str, bytes]]) -> Set[str]:
    return {m.decode() if isinstance(m, bytes) else m for m in members}


class RedisBackend(TransactionalBackend, SupportsUnions):
    """Redis-backed store for the access control buckets."""

    def __init__(
        self,
        redis_client: Optional[Redis] = None,
        url: str = "redis://localhost:6379/0",
        prefix: str = "acl",
        max_connections: int = 50,
        socket_timeout: float = 3.0,
    ):
        self.redis_client = redis_client
        self.url = url
        self.prefix = prefix
        self.max_connections = max_connections
        self.socket_timeout = socket_timeout
        self._connected = redis_client is not None
        self._connect_lock = asyncio.Lock()

    async def connect(self) -> None:
        """Connect to Redis. Concurrent callers share one client."""
        async with self._connect_lock:
            if self._connected:
                return

            client = redis.Redis.from_url(
                self.url,
                decode_responses=True,
                max_connections=self.max_connections,
                socket_timeout=self.socket_timeout,
            )
            try:
                await client.ping()
            except RedisError as e:
                await client.aclose()
                raise BackendConnectionError(f"Failed to connect to Redis: {e}") from e

            self.redis_client = client
            self._connected = True
            logger.info(f"Connected ACL backend to Redis: {self.url}")

    async def disconnect(self) -> None:
        """Disconnect from Redis."""
        if self.redis_client:
            try:
                await self.redis_client.aclose()
            except RedisError as e:
                logger.error(f"Error closing Redis connection: {e}")
            finally:
                self.redis_client = None
                self._connected = False

    async def health_check(self) -> bool:
        """Check Redis health."""
        if not self._connected:
            return False
        try:
            await self.redis_client.ping()
            return True
        except RedisError as e:
            logger.error(f"Redis health check failed: {e}")
            return False

    def bucket_key(self, bucket: str, key: str) -> str:
        """Redis key holding ``bucket[key]``."""
        return f"{self.prefix}_{bucket}@{key}"

    async def end(self, transaction: Transaction) -> None:
        """Apply the batch inside MULTI/EXEC."""
        if not transaction:
            return
        await self._ensure_connected()

        pipe = self.redis_client.pipeline(transaction=True)
        for intent in transaction:
            redis_key = self.bucket_key(intent.bucket, intent.key)
            if intent.kind == MutationKind.DELETE:
                pipe.delete(redis_key)
            elif not intent.values:
                continue
            elif intent.kind == MutationKind.ADD:
                pipe.sadd(redis_key, *intent.values)
            elif intent.kind == MutationKind.REMOVE:
                pipe.srem(redis_key, *intent.values)

        try:
            await pipe.execute()
        except RedisError as e:
            raise BackendTransactionError(f"Failed to apply transaction: {e}") from e

    async def get(self, bucket: str, key: str) -> Set[str]:
        await self._ensure_connected()
        try:
            members = await self.redis_client.smembers(self.bucket_key(bucket, key))
        except RedisError as e:
            raise BackendError(f"Redis get error for {bucket}[{key}]: {e}") from e
        return _decode(members)

    async def union(self, bucket: str, keys: Sequence[str]) -> Set[str]:
        if not keys:
            return set()
        await self._ensure_connected()
        try:
            members = await self.redis_client.sunion([self.bucket_key(bucket, key) for key in keys])
        except RedisError as e:
            raise BackendError(f"Redis union error for bucket {bucket}: {e}") from e
        return _decode(members)

    async def unions(self, buckets: Sequence[str], keys: Sequence[str]) -> Dict[str, Set[str]]:
        """One pipelined SUNION per bucket."""
        if not buckets:
            return {}
        if not keys:
            return {bucket: set() for bucket in buckets}
        await self._ensure_connected()

        pipe = self.redis_client.pipeline(transaction=False)
        for bucket in buckets:
            pipe.sunion([self.bucket_key(bucket, key) for key in keys])

        try:
            results = await pipe.execute()
        except RedisError as e:
            raise BackendError(f"Redis unions error: {e}") from e
        return {bucket: _decode(members) for bucket, members in zip(buckets, results)}

    async def clean(self) -> int:
        """Delete every key under the prefix. Not reversible.

        Returns:
            Number of keys deleted
        """
        await self._ensure_connected()
        try:
            keys: List[str] = [key async for key in self.redis_client.scan_iter(match=f"{self.prefix}_*")]
            if not keys:
                return 0
            deleted = await self.redis_client.delete(*keys)
        except RedisError as e:
            raise BackendError(f"Redis clean error: {e}") from e
        logger.info(f"Removed {deleted} ACL keys with prefix {self.prefix}")
        return deleted

    async def _ensure_connected(self) -> None:
        if not self._connected:
            await self.connect()
