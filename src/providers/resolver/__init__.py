"""Media resolver implementations.

Currently only the YouTube Data API v3.  Any catalogue with a search
endpoint and a direct lookup can be added behind IMediaResolverProvider.
"""

from src.providers.resolver.youtube_resolver import YouTubeResolverProvider

__all__ = ["YouTubeResolverProvider"]
