"""Abstract base class for media resolver providers.

A resolver turns either an exact resource link or a free-text query into a
metadata dict for one media item.  Implementations may wrap the YouTube Data
API, an extractor library, or any other catalogue with search and direct
lookup.  The lookup cache treats the returned metadata as opaque and only
serializes it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class SearchCandidate:
    """A single ranked search hit.

    Attributes
    ----------
    link:
        A direct link that :meth:`IMediaResolverProvider.fetch_by_identifier`
        accepts.
    title:
        The item title as returned by the search backend.
    video_id:
        Provider-specific id, when the backend exposes one.
    channel_title:
        Uploader / channel name, when available.
    """

    link: str
    title: str = ""
    video_id: str | None = None
    channel_title: str | None = None


class IMediaResolverProvider(ABC):
    """Contract for search + direct-fetch media resolvers."""

    @abstractmethod
    async def fetch_by_identifier(self, identifier: str) -> dict[str, Any]:
        """Fetch metadata for an exact resource link.

        Parameters
        ----------
        identifier:
            A resource link (e.g. a watch URL) or a candidate's ``link``.

        Returns
        -------
        dict
            JSON-serializable metadata for the item.

        Raises
        ------
        src.utils.errors.ResolveError
            If the identifier is unrecognised, not found, or the backend
            call fails.
        """

    @abstractmethod
    async def search(self, query: str, max_results: int = 1) -> list[SearchCandidate]:
        """Search by free text and return up to *max_results* ranked candidates.

        Returns an empty list when nothing matches.

        Raises
        ------
        src.utils.errors.ResolveError
            If the search call itself fails.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a short identifier, e.g. ``"youtube"``."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if the resolver is configured (credentials present)."""
