"""songCache domain models: re-exports all public model classes."""

from __future__ import annotations

from src.models.cache import CacheStats, MediaMetadata

__all__ = [
    "CacheStats",
    "MediaMetadata",
]
