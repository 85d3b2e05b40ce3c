"""Redis cache provider implementing ICacheProvider.

Uses the asyncio client from ``redis`` (redis-py).  Values are stored as
plain strings with ``SET key value EX ttl``.  Every redis-py failure is
converted into the store error the lookup path expects:

    get() failure  → StoreReadError   (surfaced, counted)
    set() failure  → StoreWriteError  (logged by the caller, never surfaced)

Connection-level faults (refused, reset, timeout) are additionally pushed to
registered error listeners as :class:`StoreConnectionError`, standing in for
the "error" event a callback-style client would emit.
"""

from __future__ import annotations

import redis.asyncio as redis
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import RedisError
from redis.exceptions import TimeoutError as RedisTimeoutError

from src.interfaces.cache_provider import ICacheProvider
from src.utils.errors import StoreConnectionError, StoreReadError, StoreWriteError
from src.utils.logging import get_logger

_PROVIDER_NAME = "redis"
_CONNECTION_FAULTS = (RedisConnectionError, RedisTimeoutError)


class RedisCacheProvider(ICacheProvider):
    """Key-value store backed by a Redis server.

    The client is created eagerly from *redis_url*; redis-py only opens a
    socket on first command, so :meth:`connect` issues a ``PING`` to verify
    reachability at startup.  A pre-built client may be injected for tests.
    """

    def __init__(
        self,
        redis_url: str = "redis://localhost:6379/0",
        client: redis.Redis | None = None,
    ) -> None:
        super().__init__()
        self._redis_url = redis_url
        self._client: redis.Redis = client or redis.from_url(redis_url, decode_responses=True)
        self._connected = False
        self._logger = get_logger(__name__)

    # ------------------------------------------------------------------
    # ICacheProvider implementation
    # ------------------------------------------------------------------

    async def get(self, key: str) -> str | None:
        try:
            value = await self._client.get(key)
        except RedisError as exc:
            await self._report_fault(exc, operation="get")
            raise StoreReadError(
                message=f"GET failed for key {key!r}: {exc}",
                provider_name=_PROVIDER_NAME,
            ) from exc

        if isinstance(value, bytes):
            value = value.decode("utf-8")
        return value

    async def set(self, key: str, value: str, ttl: int) -> None:
        try:
            await self._client.set(key, value, ex=ttl)
        except RedisError as exc:
            await self._report_fault(exc, operation="set")
            raise StoreWriteError(
                message=f"SET failed for key {key!r}: {exc}",
                provider_name=_PROVIDER_NAME,
            ) from exc

    async def connect(self) -> bool:
        try:
            await self._client.ping()
        except RedisError as exc:
            self._connected = False
            await self._report_fault(exc, operation="ping")
            return False

        self._connected = True
        self._logger.info("redis_connected", url=self._redis_url)
        return True

    async def close(self) -> None:
        try:
            await self._client.aclose()
        except RedisError as exc:
            self._logger.warning("redis_close_failed", error=str(exc))
        self._connected = False

    def get_provider_name(self) -> str:
        return _PROVIDER_NAME

    def is_available(self) -> bool:
        return self._connected

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    async def _report_fault(self, exc: RedisError, *, operation: str) -> None:
        """Log *exc* and forward connection-level faults to listeners."""
        if not isinstance(exc, _CONNECTION_FAULTS):
            self._logger.warning("redis_command_failed", operation=operation, error=str(exc))
            return

        self._connected = False
        self._logger.error("redis_connection_fault", operation=operation, error=str(exc))
        await self._emit_connection_error(
            StoreConnectionError(
                message=f"{operation} on {self._redis_url}: {exc}",
                provider_name=_PROVIDER_NAME,
            )
        )
