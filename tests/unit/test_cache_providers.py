"""Unit tests for the Redis and in-memory cache store providers."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import ResponseError

from src.providers.cache.memory_cache import MemoryCacheProvider
from src.providers.cache.redis_cache import RedisCacheProvider
from src.utils.errors import StoreConnectionError, StoreReadError, StoreWriteError


# ======================================================================
# MemoryCacheProvider
# ======================================================================


class TestMemoryCacheProvider:
    @pytest.fixture()
    def cache(self) -> MemoryCacheProvider:
        return MemoryCacheProvider(max_size=100, ttl=3600)

    @pytest.mark.asyncio
    async def test_get_missing_key_returns_none(self, cache: MemoryCacheProvider) -> None:
        assert await cache.get("nonexistent") is None

    @pytest.mark.asyncio
    async def test_set_and_get(self, cache: MemoryCacheProvider) -> None:
        await cache.set("carl cox", '{"title": "Carl Cox"}', 3600)
        assert await cache.get("carl cox") == '{"title": "Carl Cox"}'

    @pytest.mark.asyncio
    async def test_set_overwrites_existing(self, cache: MemoryCacheProvider) -> None:
        await cache.set("key1", "old", 3600)
        await cache.set("key1", "new", 3600)
        assert await cache.get("key1") == "new"

    @pytest.mark.asyncio
    async def test_differing_ttl_is_accepted(self, cache: MemoryCacheProvider) -> None:
        await cache.set("key1", "value", 60)
        assert await cache.get("key1") == "value"

    @pytest.mark.asyncio
    async def test_connect_always_succeeds(self, cache: MemoryCacheProvider) -> None:
        assert await cache.connect() is True
        assert cache.is_available() is True

    @pytest.mark.asyncio
    async def test_close_clears_entries(self, cache: MemoryCacheProvider) -> None:
        await cache.set("key1", "value", 3600)
        await cache.close()
        assert await cache.get("key1") is None

    def test_provider_name(self, cache: MemoryCacheProvider) -> None:
        assert cache.get_provider_name() == "memory"


# ======================================================================
# RedisCacheProvider
# ======================================================================


def _redis_client(**overrides) -> MagicMock:
    client = MagicMock()
    client.get = AsyncMock(return_value=None)
    client.set = AsyncMock(return_value=True)
    client.ping = AsyncMock(return_value=True)
    client.aclose = AsyncMock(return_value=None)
    for name, value in overrides.items():
        setattr(client, name, value)
    return client


class TestRedisCacheProvider:
    @pytest.mark.asyncio
    async def test_get_returns_value(self) -> None:
        client = _redis_client(get=AsyncMock(return_value='{"title": "x"}'))
        provider = RedisCacheProvider(client=client)

        assert await provider.get("query") == '{"title": "x"}'
        client.get.assert_awaited_once_with("query")

    @pytest.mark.asyncio
    async def test_get_decodes_bytes(self) -> None:
        client = _redis_client(get=AsyncMock(return_value=b'{"title": "x"}'))
        provider = RedisCacheProvider(client=client)

        assert await provider.get("query") == '{"title": "x"}'

    @pytest.mark.asyncio
    async def test_get_missing_key_returns_none(self) -> None:
        provider = RedisCacheProvider(client=_redis_client())
        assert await provider.get("absent") is None

    @pytest.mark.asyncio
    async def test_get_failure_raises_store_read_error(self) -> None:
        client = _redis_client(get=AsyncMock(side_effect=RedisConnectionError("refused")))
        provider = RedisCacheProvider(client=client)

        with pytest.raises(StoreReadError) as exc_info:
            await provider.get("query")

        assert exc_info.value.provider_name == "redis"

    @pytest.mark.asyncio
    async def test_set_uses_expiry(self) -> None:
        client = _redis_client()
        provider = RedisCacheProvider(client=client)

        await provider.set("query", "{}", 604800)

        client.set.assert_awaited_once_with("query", "{}", ex=604800)

    @pytest.mark.asyncio
    async def test_set_failure_raises_store_write_error(self) -> None:
        client = _redis_client(set=AsyncMock(side_effect=ResponseError("READONLY")))
        provider = RedisCacheProvider(client=client)

        with pytest.raises(StoreWriteError):
            await provider.set("query", "{}", 604800)

    @pytest.mark.asyncio
    async def test_connect_success(self) -> None:
        provider = RedisCacheProvider(client=_redis_client())

        assert await provider.connect() is True
        assert provider.is_available() is True

    @pytest.mark.asyncio
    async def test_connect_failure_is_logged_not_raised(self) -> None:
        client = _redis_client(ping=AsyncMock(side_effect=RedisConnectionError("refused")))
        provider = RedisCacheProvider(client=client)
        received: list[StoreConnectionError] = []
        provider.register_error_listener(received.append)

        assert await provider.connect() is False
        assert provider.is_available() is False
        assert len(received) == 1
        assert isinstance(received[0], StoreConnectionError)

    @pytest.mark.asyncio
    async def test_connection_fault_on_read_notifies_async_listener(self) -> None:
        client = _redis_client(get=AsyncMock(side_effect=RedisConnectionError("reset")))
        provider = RedisCacheProvider(client=client)
        listener = AsyncMock()
        provider.register_error_listener(listener)

        with pytest.raises(StoreReadError):
            await provider.get("query")

        listener.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_command_error_does_not_notify_listeners(self) -> None:
        client = _redis_client(set=AsyncMock(side_effect=ResponseError("WRONGTYPE")))
        provider = RedisCacheProvider(client=client)
        received: list[StoreConnectionError] = []
        provider.register_error_listener(received.append)

        with pytest.raises(StoreWriteError):
            await provider.set("query", "{}", 60)

        assert received == []

    @pytest.mark.asyncio
    async def test_faulty_listener_does_not_block_others(self) -> None:
        client = _redis_client(ping=AsyncMock(side_effect=RedisConnectionError("refused")))
        provider = RedisCacheProvider(client=client)
        received: list[StoreConnectionError] = []

        def broken(_error: StoreConnectionError) -> None:
            raise RuntimeError("listener bug")

        provider.register_error_listener(broken)
        provider.register_error_listener(received.append)

        await provider.connect()

        assert len(received) == 1

    @pytest.mark.asyncio
    async def test_unregister_listener(self) -> None:
        client = _redis_client(ping=AsyncMock(side_effect=RedisConnectionError("refused")))
        provider = RedisCacheProvider(client=client)
        received: list[StoreConnectionError] = []
        provider.register_error_listener(received.append)
        provider.unregister_error_listener(received.append)

        await provider.connect()

        assert received == []

    @pytest.mark.asyncio
    async def test_close(self) -> None:
        client = _redis_client()
        provider = RedisCacheProvider(client=client)
        await provider.connect()

        await provider.close()

        client.aclose.assert_awaited_once()
        assert provider.is_available() is False

    def test_provider_name(self) -> None:
        assert RedisCacheProvider(client=_redis_client()).get_provider_name() == "redis"

    def test_builds_client_from_url(self) -> None:
        provider = RedisCacheProvider(redis_url="redis://cache.internal:6380/2")
        assert provider.is_available() is False
