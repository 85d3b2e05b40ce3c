"""YouTube Data API v3 resolver implementing IMediaResolverProvider.

Search uses ``/search`` restricted to videos; direct lookups extract the
video id from the link and call ``/videos``.  All HTTP goes through an
injected ``httpx.AsyncClient`` so tests can mock the transport.  Any
failure, whether network, quota, unknown id or malformed JSON, surfaces as
:class:`~src.utils.errors.ResolveError`.
"""

from __future__ import annotations

import re
from typing import Any

import httpx

from src.config.settings import Settings
from src.interfaces.media_resolver_provider import IMediaResolverProvider, SearchCandidate
from src.utils.errors import ResolveError
from src.utils.logging import get_logger
from src.utils.text_normalizer import extract_video_id

_PROVIDER_NAME = "youtube"
_WATCH_URL = "https://www.youtube.com/watch?v={video_id}"
_VIDEO_PARTS = "snippet,contentDetails,statistics"

# ISO-8601 durations as returned by contentDetails.duration, e.g. "PT3M33S".
_DURATION_RE = re.compile(
    r"^P(?:(?P<days>\d+)D)?(?:T(?:(?P<hours>\d+)H)?(?:(?P<minutes>\d+)M)?(?:(?P<seconds>\d+)S)?)?$"
)


def parse_iso8601_duration(value: str | None) -> int | None:
    """Convert an ISO-8601 duration like ``PT1H2M3S`` to seconds."""
    if not value:
        return None
    match = _DURATION_RE.match(value)
    if match is None:
        return None
    parts = {k: int(v) for k, v in match.groupdict().items() if v}
    return (
        parts.get("days", 0) * 86400
        + parts.get("hours", 0) * 3600
        + parts.get("minutes", 0) * 60
        + parts.get("seconds", 0)
    )


def _to_int(value: Any) -> int | None:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


class YouTubeResolverProvider(IMediaResolverProvider):
    """Resolver backed by the YouTube Data API v3.

    Requires ``YOUTUBE_API_KEY``.  The ``httpx.AsyncClient`` is owned by the
    caller and injected for testability.
    """

    def __init__(self, settings: Settings, http_client: httpx.AsyncClient) -> None:
        self._api_key = settings.youtube_api_key
        self._base_url = settings.youtube_api_base_url.rstrip("/")
        self._http = http_client
        self._logger = get_logger(__name__)

    # -- Private helpers -------------------------------------------------------

    async def _get_json(self, endpoint: str, params: dict[str, Any]) -> dict[str, Any]:
        url = f"{self._base_url}/{endpoint}"
        try:
            response = await self._http.get(url, params={**params, "key": self._api_key})
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as exc:
            raise ResolveError(
                message=f"{endpoint} returned HTTP {exc.response.status_code}",
                provider_name=_PROVIDER_NAME,
            ) from exc
        except httpx.HTTPError as exc:
            raise ResolveError(
                message=f"{endpoint} request failed: {exc}",
                provider_name=_PROVIDER_NAME,
            ) from exc
        except ValueError as exc:
            raise ResolveError(
                message=f"{endpoint} returned malformed JSON",
                provider_name=_PROVIDER_NAME,
            ) from exc

        if not isinstance(payload, dict):
            raise ResolveError(
                message=f"{endpoint} returned an unexpected payload",
                provider_name=_PROVIDER_NAME,
            )
        return payload

    @staticmethod
    def _items(payload: dict[str, Any], endpoint: str) -> list[dict[str, Any]]:
        """Return ``payload["items"]``, rejecting anything but a list of objects."""
        items = payload.get("items") or []
        if not isinstance(items, list) or not all(isinstance(item, dict) for item in items):
            raise ResolveError(
                message=f"{endpoint} returned malformed items",
                provider_name=_PROVIDER_NAME,
            )
        return items

    @staticmethod
    def _metadata_from_item(item: dict[str, Any]) -> dict[str, Any]:
        """Flatten a ``videos`` resource into the cached metadata shape."""
        video_id = item.get("id", "")
        snippet = item.get("snippet") or {}
        details = item.get("contentDetails") or {}
        statistics = item.get("statistics") or {}
        return {
            "video_id": video_id,
            "url": _WATCH_URL.format(video_id=video_id),
            "title": snippet.get("title", ""),
            "description": snippet.get("description", ""),
            "channel_id": snippet.get("channelId"),
            "channel_title": snippet.get("channelTitle"),
            "published_at": snippet.get("publishedAt"),
            "duration": details.get("duration"),
            "duration_seconds": parse_iso8601_duration(details.get("duration")),
            "thumbnails": snippet.get("thumbnails") or {},
            "tags": snippet.get("tags") or [],
            "view_count": _to_int(statistics.get("viewCount")),
            "like_count": _to_int(statistics.get("likeCount")),
        }

    # -- IMediaResolverProvider implementation ---------------------------------

    async def fetch_by_identifier(self, identifier: str) -> dict[str, Any]:
        video_id = extract_video_id(identifier)
        if video_id is None:
            raise ResolveError(
                message=f"No video id in {identifier!r}",
                provider_name=_PROVIDER_NAME,
            )

        payload = await self._get_json("videos", {"part": _VIDEO_PARTS, "id": video_id})
        items = self._items(payload, "videos")
        if not items:
            raise ResolveError(
                message=f"Video {video_id!r} not found",
                provider_name=_PROVIDER_NAME,
            )

        metadata = self._metadata_from_item(items[0])
        self._logger.info("youtube_fetch_complete", video_id=video_id, title=metadata["title"])
        return metadata

    async def search(self, query: str, max_results: int = 1) -> list[SearchCandidate]:
        payload = await self._get_json(
            "search",
            {"part": "snippet", "type": "video", "q": query, "maxResults": max_results},
        )

        candidates: list[SearchCandidate] = []
        for item in self._items(payload, "search"):
            item_id = item.get("id") or {}
            if not isinstance(item_id, dict):
                raise ResolveError(
                    message="search returned an item with a malformed id",
                    provider_name=_PROVIDER_NAME,
                )
            video_id = item_id.get("videoId")
            if not video_id:
                continue
            snippet = item.get("snippet") or {}
            candidates.append(
                SearchCandidate(
                    link=_WATCH_URL.format(video_id=video_id),
                    title=snippet.get("title", ""),
                    video_id=video_id,
                    channel_title=snippet.get("channelTitle"),
                )
            )

        self._logger.debug("youtube_search_complete", query=query, result_count=len(candidates))
        return candidates[:max_results]

    def get_provider_name(self) -> str:
        return _PROVIDER_NAME

    def is_available(self) -> bool:
        return bool(self._api_key)
