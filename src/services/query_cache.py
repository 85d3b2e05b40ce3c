"""Cache-aside lookup of media metadata.

``QueryCache`` sits in front of an expensive resolver.  Each lookup
normalizes the query, tries the store, and on a miss resolves the query
either directly (video links) or via search-then-fetch (free text), then
writes the result back with a fixed TTL.

# ─── LOOKUP FLOW ──────────────────────────────────────────────────────
#
#   lookup(q) → normalize → store.get ──hit──→ cache_hits++ → return
#                               │
#                               ├─StoreReadError─→ error_count++ → raise
#                               │
#                               └─miss─→ link?  ─yes─→ fetch(q)
#                                          │
#                                          └─no──→ search(q, 1) → fetch(link)
#                                                     │
#                             ResolveError ←──────────┤ error_count++ → raise
#                                                     │
#                             fetch_count++ → json.dumps → start store.set(q, ttl) → return
#
# The write-back is serialized before the lookup returns and runs as a
# background task: its failure is logged but never changes the lookup's
# outcome.  Concurrent misses for the same key are not coalesced; both
# resolve and both write (last write wins).
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

import asyncio
import json

import structlog

from src.config.settings import CACHE_TTL_SECONDS
from src.interfaces.cache_provider import ICacheProvider
from src.interfaces.media_resolver_provider import IMediaResolverProvider
from src.models.cache import CacheStats, MediaMetadata
from src.utils.errors import (
    ResolveError,
    StoreConnectionError,
    StoreReadError,
    StoreWriteError,
)
from src.utils.logging import get_logger
from src.utils.text_normalizer import MAX_QUERY_LENGTH, is_direct_identifier, normalize_query


class QueryCache:
    """Cache-aside front for a media resolver.

    Parameters
    ----------
    store:
        Key-value store holding serialized metadata under normalized queries.
    resolver:
        Search + direct-fetch backend consulted on cache misses.
    ttl_seconds:
        Expiry applied to every write-back.
    max_query_length:
        Normalized queries are truncated to this many characters.
    """

    def __init__(
        self,
        store: ICacheProvider,
        resolver: IMediaResolverProvider,
        *,
        ttl_seconds: int = CACHE_TTL_SECONDS,
        max_query_length: int = MAX_QUERY_LENGTH,
    ) -> None:
        self._store = store
        self._resolver = resolver
        self._ttl_seconds = ttl_seconds
        self._max_query_length = max_query_length
        self._stats = CacheStats()
        self._pending_writes: set[asyncio.Task] = set()
        self._logger: structlog.BoundLogger = get_logger(__name__).bind(
            store=store.get_provider_name()
        )

        self._store.register_error_listener(self._on_store_connection_error)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def normalize(self, query: str) -> str:
        """Return the cache key for *query* under this instance's length cap."""
        return normalize_query(query, self._max_query_length)

    async def lookup(self, query: str) -> MediaMetadata:
        """Return metadata for *query*, from the store if possible.

        Raises
        ------
        StoreReadError
            The store read failed.  The resolver is not consulted.
        ResolveError
            Search or fetch failed, search returned no candidate, or the
            resolver returned data that could not be used.
        """
        key = self.normalize(query)
        self._logger.debug("lookup_start", query=key)

        try:
            cached = await self._store.get(key)
        except StoreReadError as exc:
            self._stats.error_count += 1
            self._logger.error("lookup_failed", query=key, stage="store_read", error=str(exc))
            raise

        if cached is not None:
            self._stats.cache_hits += 1
            self._logger.info("cache_hit", query=key)
            return json.loads(cached)

        self._logger.info("cache_miss_fetching", query=key)

        try:
            metadata = await self._resolve(key)
        except ResolveError as exc:
            self._stats.error_count += 1
            self._logger.error("lookup_failed", query=key, stage="resolve", error=str(exc))
            raise
        except Exception as exc:  # noqa: BLE001
            # Malformed resolver output surfaces as a resolve failure.
            self._stats.error_count += 1
            self._logger.error(
                "lookup_failed",
                query=key,
                stage="resolve",
                error=str(exc),
                error_type=type(exc).__name__,
            )
            raise ResolveError(
                message=f"Resolver returned unusable data for {key!r}: {exc}",
                provider_name=self._resolver.get_provider_name(),
            ) from exc

        self._stats.fetch_count += 1

        # Serialize now so later mutation of the returned dict never reaches the store.
        try:
            payload = json.dumps(metadata)
        except (TypeError, ValueError) as exc:
            self._logger.warning("cache_write_failed", query=key, error=str(exc))
            return metadata

        await self._schedule_write_back(key, payload)
        return metadata

    def get_stats(self) -> CacheStats:
        """Return a point-in-time copy of the hit/fetch/error counters."""
        return self._stats.model_copy()

    async def flush(self) -> None:
        """Wait for every pending write-back to finish."""
        while self._pending_writes:
            await asyncio.gather(*list(self._pending_writes))

    # ------------------------------------------------------------------
    # Miss path
    # ------------------------------------------------------------------

    async def _resolve(self, key: str) -> MediaMetadata:
        """Fetch directly for links, otherwise search and fetch the top hit."""
        if is_direct_identifier(key):
            self._logger.debug("resolve_direct", query=key)
            return await self._resolver.fetch_by_identifier(key)

        candidates = await self._resolver.search(key, max_results=1)
        if not candidates:
            raise ResolveError(
                message=f"No search results for {key!r}",
                provider_name=self._resolver.get_provider_name(),
            )

        self._logger.debug("resolve_via_search", query=key, link=candidates[0].link)
        return await self._resolver.fetch_by_identifier(candidates[0].link)

    # ------------------------------------------------------------------
    # Write-back
    # ------------------------------------------------------------------

    async def _schedule_write_back(self, key: str, payload: str) -> None:
        """Start the store write without waiting for its outcome.

        Yields once so the write is issued before the lookup returns; a
        store that completes without suspending has the entry in place for
        the next sequential lookup.
        """
        task = asyncio.create_task(self._write_back(key, payload))
        self._pending_writes.add(task)
        task.add_done_callback(self._pending_writes.discard)
        await asyncio.sleep(0)

    async def _write_back(self, key: str, payload: str) -> None:
        try:
            await self._store.set(key, payload, self._ttl_seconds)
        except StoreWriteError as exc:
            self._logger.warning("cache_write_failed", query=key, error=str(exc))
            return

        self._logger.info("fetch_complete_cached", query=key, ttl=self._ttl_seconds)

    def _on_store_connection_error(self, error: StoreConnectionError) -> None:
        self._logger.error("store_connection_error", error=str(error))
