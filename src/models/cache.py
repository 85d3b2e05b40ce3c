"""Lookup cache instrumentation models.

``CacheStats`` is the per-instance counter set maintained by
:class:`src.services.query_cache.QueryCache`.  It is mutable internally and
handed out as a copy, so callers get a consistent point-in-time snapshot.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, computed_field

# Stored metadata is opaque to the cache: whatever the resolver returns.
MediaMetadata = dict[str, Any]


class CacheStats(BaseModel):
    """Hit / fetch / error counters for one QueryCache instance.

    Every completed lookup increments exactly one counter.
    """

    cache_hits: int = Field(default=0, ge=0)
    fetch_count: int = Field(default=0, ge=0)
    error_count: int = Field(default=0, ge=0)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_lookups(self) -> int:
        return self.cache_hits + self.fetch_count + self.error_count

    @computed_field  # type: ignore[prop-decorator]
    @property
    def hit_rate(self) -> float:
        """Fraction of completed lookups served from the store."""
        total = self.total_lookups
        return self.cache_hits / total if total else 0.0
