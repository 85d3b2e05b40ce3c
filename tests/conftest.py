"""Shared pytest fixtures for the songCache test suite."""

from __future__ import annotations

from typing import Any

import pytest

from src.config.settings import Settings
from src.interfaces.media_resolver_provider import SearchCandidate
from src.services.query_cache import QueryCache
from tests.fakes import RICKROLL_LINK, FakeResolver, FakeStore

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def sample_metadata() -> dict[str, Any]:
    """Metadata shaped like the YouTube resolver's output."""
    return {
        "video_id": "dQw4w9WgXcQ",
        "url": RICKROLL_LINK,
        "title": "Rick Astley - Never Gonna Give You Up (Official Music Video)",
        "description": "The official video for Never Gonna Give You Up",
        "channel_id": "UCuAXFkgsw1L7xaCfnd5JJOw",
        "channel_title": "Rick Astley",
        "published_at": "2009-10-25T06:57:33Z",
        "duration": "PT3M33S",
        "duration_seconds": 213,
        "thumbnails": {"default": {"url": "https://i.ytimg.com/vi/dQw4w9WgXcQ/default.jpg"}},
        "tags": ["rick astley", "never gonna give you up"],
        "view_count": 1_500_000_000,
        "like_count": 17_000_000,
    }


@pytest.fixture
def fake_store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def fake_resolver(sample_metadata: dict[str, Any]) -> FakeResolver:
    return FakeResolver(
        search_results=[
            SearchCandidate(
                link=RICKROLL_LINK,
                title=sample_metadata["title"],
                video_id="dQw4w9WgXcQ",
                channel_title="Rick Astley",
            )
        ],
        metadata_by_link={RICKROLL_LINK: sample_metadata},
    )


@pytest.fixture
def query_cache(fake_store: FakeStore, fake_resolver: FakeResolver) -> QueryCache:
    return QueryCache(fake_store, fake_resolver)


@pytest.fixture
def test_settings() -> Settings:
    """Settings with no credentials and the in-memory store."""
    return Settings(
        _env_file=None,
        cache_backend="memory",
        redis_url="redis://localhost:6379/0",
        youtube_api_key="test-key",
        app_env="test",
    )
