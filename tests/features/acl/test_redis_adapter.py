"""Tests for the Redis backend using a mocked redis.asyncio client."""

import asyncio

import pytest
from unittest.mock import AsyncMock, call, patch

from redis.exceptions import ConnectionError as RedisConnectionError, RedisError

from neo_acl.core.exceptions import BackendConnectionError, BackendError, BackendTransactionError
from neo_acl.features.acl.adapters.redis_adapter import RedisBackend
from neo_acl.features.acl.entities.protocols import SupportsUnions


@pytest.fixture
def backend(mock_redis_client):
    return RedisBackend(redis_client=mock_redis_client, prefix="acl")


class TestRedisBackendKeys:
    """Key layout."""

    def test_bucket_key(self, backend):
        assert backend.bucket_key("allows_blogs", "admin") == "acl_allows_blogs@admin"
        assert backend.bucket_key("users", "42") == "acl_users@42"

    def test_supports_unions(self, backend):
        assert isinstance(backend, SupportsUnions)


class TestRedisBackendWrites:
    """Batch replay into MULTI/EXEC pipelines."""

    @pytest.mark.asyncio
    async def test_end_replays_batch(self, backend, mock_redis_client):
        transaction = backend.begin()
        backend.add(transaction, "users", "u1", ["admin", "editor"])
        backend.remove(transaction, "roles", "guest", ["u1"])
        backend.delete(transaction, "parents", ["admin", "user"])
        backend.add(transaction, "resources", "admin", [])

        await backend.end(transaction)

        mock_redis_client.pipeline.assert_called_once_with(transaction=True)
        pipe = mock_redis_client.pipeline.return_value
        pipe.sadd.assert_called_once_with("acl_users@u1", "admin", "editor")
        pipe.srem.assert_called_once_with("acl_roles@guest", "u1")
        assert pipe.delete.call_args_list == [call("acl_parents@admin"), call("acl_parents@user")]
        pipe.execute.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_empty_batch_skips_redis(self, backend, mock_redis_client):
        await backend.end(backend.begin())

        mock_redis_client.pipeline.assert_not_called()

    @pytest.mark.asyncio
    async def test_execute_failure(self, backend, mock_redis_client):
        mock_redis_client.pipeline.return_value.execute.side_effect = RedisError("EXECABORT")
        transaction = backend.begin()
        backend.add(transaction, "users", "u1", ["admin"])

        with pytest.raises(BackendTransactionError) as exc_info:
            await backend.end(transaction)

        assert isinstance(exc_info.value.__cause__, RedisError)


class TestRedisBackendReads:
    """SMEMBERS / SUNION reads."""

    @pytest.mark.asyncio
    async def test_get(self, backend, mock_redis_client):
        mock_redis_client.smembers.return_value = {b"admin", "editor"}

        assert await backend.get("users", "u1") == {"admin", "editor"}
        mock_redis_client.smembers.assert_awaited_once_with("acl_users@u1")

    @pytest.mark.asyncio
    async def test_union(self, backend, mock_redis_client):
        mock_redis_client.sunion.return_value = {"get", "put"}

        assert await backend.union("allows_blogs", ["admin", "user"]) == {"get", "put"}
        mock_redis_client.sunion.assert_awaited_once_with(["acl_allows_blogs@admin", "acl_allows_blogs@user"])

    @pytest.mark.asyncio
    async def test_union_without_keys(self, backend, mock_redis_client):
        assert await backend.union("allows_blogs", []) == set()
        mock_redis_client.sunion.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unions_pipelines_one_sunion_per_bucket(self, backend, mock_redis_client):
        pipe = mock_redis_client.pipeline.return_value
        pipe.execute.return_value = [{"get"}, set()]

        result = await backend.unions(["allows_blogs", "allows_news"], ["admin"])

        assert result == {"allows_blogs": {"get"}, "allows_news": set()}
        mock_redis_client.pipeline.assert_called_once_with(transaction=False)
        assert pipe.sunion.call_args_list == [
            call(["acl_allows_blogs@admin"]),
            call(["acl_allows_news@admin"]),
        ]

    @pytest.mark.asyncio
    async def test_read_errors_are_wrapped(self, backend, mock_redis_client):
        mock_redis_client.smembers.side_effect = RedisError("boom")

        with pytest.raises(BackendError):
            await backend.get("users", "u1")


class TestRedisBackendLifecycle:
    """Connection handling."""

    @pytest.mark.asyncio
    async def test_connects_lazily(self, mock_redis_client):
        with patch("neo_acl.features.acl.adapters.redis_adapter.redis.Redis.from_url", return_value=mock_redis_client) as from_url:
            backend = RedisBackend(url="redis://cache:6379/1", prefix="acl")
            await backend.get("users", "u1")

        from_url.assert_called_once_with(
            "redis://cache:6379/1",
            decode_responses=True,
            max_connections=50,
            socket_timeout=3.0,
        )
        mock_redis_client.ping.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_connect_failure(self, mock_redis_client):
        mock_redis_client.ping.side_effect = RedisConnectionError("refused")

        with patch("neo_acl.features.acl.adapters.redis_adapter.redis.Redis.from_url", return_value=mock_redis_client):
            backend = RedisBackend()
            with pytest.raises(BackendConnectionError):
                await backend.connect()

        mock_redis_client.aclose.assert_awaited_once()
        assert backend.redis_client is None

    @pytest.mark.asyncio
    async def test_concurrent_reads_share_one_client(self, mock_redis_client):
        async def slow_ping():
            await asyncio.sleep(0)
            return True

        mock_redis_client.ping = AsyncMock(side_effect=slow_ping)

        with patch("neo_acl.features.acl.adapters.redis_adapter.redis.Redis.from_url", return_value=mock_redis_client) as from_url:
            backend = RedisBackend(url="redis://cache:6379/1")
            await asyncio.gather(*(backend.get("users", f"u{i}") for i in range(5)))

        assert from_url.call_count == 1
        mock_redis_client.ping.assert_awaited_once()
        assert mock_redis_client.smembers.await_count == 5

    @pytest.mark.asyncio
    async def test_health_check(self, backend, mock_redis_client):
        assert await backend.health_check() is True

        mock_redis_client.ping.side_effect = RedisError("down")
        assert await backend.health_check() is False

    @pytest.mark.asyncio
    async def test_disconnect(self, backend, mock_redis_client):
        await backend.disconnect()

        mock_redis_client.aclose.assert_awaited_once()
        assert backend.redis_client is None
        assert await backend.health_check() is False

    @pytest.mark.asyncio
    async def test_clean_deletes_prefixed_keys(self, backend, mock_redis_client):
        async def scan_iter(match):
            for key in ["acl_users@u1", "acl_meta@roles"]:
                yield key

        mock_redis_client.scan_iter = scan_iter
        mock_redis_client.delete = AsyncMock(return_value=2)

        assert await backend.clean() == 2
        mock_redis_client.delete.assert_awaited_once_with("acl_users@u1", "acl_meta@roles")
