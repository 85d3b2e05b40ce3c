"""Public interface definitions for the external collaborators.

The lookup cache talks to its store and resolver exclusively through the
abstract base classes defined here.  Concrete adapters live in
``src/providers/`` and are injected in ``src/main.py``; tests inject fakes.

CONCRETE PROVIDER MAP:
    Interface               →  Concrete implementations (in src/providers/)
    ──────────────────────────────────────────────────────────────────────
    ICacheProvider          →  RedisCacheProvider, MemoryCacheProvider
    IMediaResolverProvider  →  YouTubeResolverProvider
"""

from src.interfaces.cache_provider import ICacheProvider
from src.interfaces.media_resolver_provider import IMediaResolverProvider, SearchCandidate

__all__ = [
    "ICacheProvider",
    "IMediaResolverProvider",
    "SearchCandidate",
]
