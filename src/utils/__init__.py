"""Utility modules for songCache.

- **errors** -- Domain exception hierarchy rooted at SongCacheError; store
  and resolver failures get their own subclasses so the lookup path can
  count, surface or swallow each one precisely.
- **logging** -- structlog setup with a dual-renderer pattern: coloured
  console output in development, structured JSON in production.
- **text_normalizer** -- Cache-key normalization and video-link detection.
"""

from src.utils.errors import (
    ConfigurationError,
    ResolveError,
    SongCacheError,
    StoreConnectionError,
    StoreError,
    StoreReadError,
    StoreWriteError,
)
from src.utils.logging import configure_logging, get_logger
from src.utils.text_normalizer import (
    MAX_QUERY_LENGTH,
    extract_video_id,
    is_direct_identifier,
    normalize_query,
)

__all__ = [
    "MAX_QUERY_LENGTH",
    "ConfigurationError",
    "ResolveError",
    "SongCacheError",
    "StoreConnectionError",
    "StoreError",
    "StoreReadError",
    "StoreWriteError",
    "configure_logging",
    "extract_video_id",
    "get_logger",
    "is_direct_identifier",
    "normalize_query",
]
