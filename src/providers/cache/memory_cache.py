"""In-memory cache provider using cachetools.TTLCache.

Simple, fast store suitable for development, tests and single-process
deployments without a Redis server.  Never fails on read or write, and
therefore never emits connection faults.
"""

from __future__ import annotations

import structlog
from cachetools import TTLCache

from src.config.settings import CACHE_TTL_SECONDS
from src.interfaces.cache_provider import ICacheProvider

logger = structlog.get_logger(logger_name=__name__)


class MemoryCacheProvider(ICacheProvider):
    """In-memory TTL store backed by ``cachetools.TTLCache``.

    Parameters
    ----------
    max_size:
        Maximum number of entries before the least-recently-used entry
        is evicted.
    ttl:
        Time-to-live in seconds applied to every entry.
    """

    def __init__(self, max_size: int = 10_000, ttl: int = CACHE_TTL_SECONDS) -> None:
        super().__init__()
        self._default_ttl = ttl
        self._cache: TTLCache[str, str] = TTLCache(maxsize=max_size, ttl=ttl)

    # ------------------------------------------------------------------
    # ICacheProvider implementation
    # ------------------------------------------------------------------

    async def get(self, key: str) -> str | None:
        """Return the value for *key*, or ``None`` if missing/expired."""
        value = self._cache.get(key)
        logger.debug("memory_cache_get", key=key, hit=value is not None)
        return value

    async def set(self, key: str, value: str, ttl: int) -> None:
        """Store *value* under *key*.

        ``TTLCache`` applies one TTL fixed at construction time; a differing
        per-call *ttl* is logged and otherwise ignored.
        """
        if ttl != self._default_ttl:
            logger.debug("memory_cache_ttl_ignored", requested=ttl, applied=self._default_ttl)
        self._cache[key] = value
        logger.debug("memory_cache_set", key=key)

    async def connect(self) -> bool:
        return True

    async def close(self) -> None:
        self._cache.clear()

    def get_provider_name(self) -> str:
        return "memory"

    def is_available(self) -> bool:
        return True
