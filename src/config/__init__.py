"""Configuration module: exports Settings and the default cache TTL."""

from src.config.settings import CACHE_TTL_SECONDS, Settings

__all__ = ["CACHE_TTL_SECONDS", "Settings"]
