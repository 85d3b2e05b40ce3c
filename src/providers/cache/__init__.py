"""Cache store providers.

RedisCacheProvider is the deployment store: entries survive restarts and are
shared by every worker process.  MemoryCacheProvider is a dict-based TTL
store for local runs and tests; it is not shared across processes.
"""

from src.providers.cache.memory_cache import MemoryCacheProvider
from src.providers.cache.redis_cache import RedisCacheProvider

__all__ = ["MemoryCacheProvider", "RedisCacheProvider"]
