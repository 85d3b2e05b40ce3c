"""songCache FastAPI application entry point.

Wires the store, resolver and lookup cache together, configures structured
logging, and exposes the thin HTTP wrapper in ``src.api``.  ``_build_all``
is shared with the CLI so both surfaces construct identical components.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any

import httpx
import structlog
import uvicorn
from fastapi import FastAPI

from src.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
)
from src.api.routes import router as api_router
from src.config.settings import Settings
from src.interfaces.cache_provider import ICacheProvider
from src.interfaces.media_resolver_provider import IMediaResolverProvider
from src.providers.cache.memory_cache import MemoryCacheProvider
from src.providers.cache.redis_cache import RedisCacheProvider
from src.providers.resolver.youtube_resolver import YouTubeResolverProvider
from src.services.query_cache import QueryCache
from src.utils.errors import ConfigurationError
from src.utils.logging import configure_logging, get_logger

# ---------------------------------------------------------------------------
# Module-level settings & logging
# ---------------------------------------------------------------------------

settings = Settings()

configure_logging(
    log_level=settings.log_level,
    json_output=(settings.app_env == "production"),
)
_logger: structlog.BoundLogger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Component factories
# ---------------------------------------------------------------------------


def _build_store(app_settings: Settings) -> ICacheProvider:
    """Select the cache store from ``CACHE_BACKEND``."""
    backend = app_settings.cache_backend.strip().lower()
    if backend == "redis":
        return RedisCacheProvider(redis_url=app_settings.redis_url)
    if backend == "memory":
        return MemoryCacheProvider(
            max_size=app_settings.memory_cache_max_size,
            ttl=app_settings.cache_ttl_seconds,
        )
    raise ConfigurationError(
        message=f"Unknown CACHE_BACKEND {app_settings.cache_backend!r} (expected 'redis' or 'memory')"
    )


def _build_resolver(
    app_settings: Settings, http_client: httpx.AsyncClient
) -> IMediaResolverProvider:
    return YouTubeResolverProvider(settings=app_settings, http_client=http_client)


def _build_all(app_settings: Settings) -> dict[str, Any]:
    """Construct every long-lived component.

    Returns a dict with ``http_client``, ``store``, ``resolver`` and
    ``query_cache`` keys.  Nothing here touches the network; call
    ``store.connect()`` afterwards to verify the store.
    """
    missing = app_settings.get_missing_credentials()
    if missing:
        _logger.warning("missing_credentials", variables=missing)

    http_client = httpx.AsyncClient(timeout=app_settings.http_timeout_seconds)
    store = _build_store(app_settings)
    resolver = _build_resolver(app_settings, http_client)
    query_cache = QueryCache(
        store,
        resolver,
        ttl_seconds=app_settings.cache_ttl_seconds,
        max_query_length=app_settings.max_query_length,
    )
    return {
        "http_client": http_client,
        "store": store,
        "resolver": resolver,
        "query_cache": query_cache,
    }


async def _shutdown(components: dict[str, Any]) -> None:
    """Drain pending write-backs, then close the store and HTTP client."""
    await components["query_cache"].flush()
    await components["store"].close()
    await components["http_client"].aclose()


# ---------------------------------------------------------------------------
# Application lifespan (startup / shutdown)
# ---------------------------------------------------------------------------


@asynccontextmanager
async def _lifespan(application: FastAPI):  # noqa: ANN201
    components = _build_all(settings)
    for key, value in components.items():
        setattr(application.state, key, value)

    # A failed connect is logged by the store; the app keeps serving and
    # lookups fail with StoreReadError until the store comes back.
    connected = await components["store"].connect()

    _logger.info(
        "app_startup",
        version="0.1.0",
        environment=settings.app_env,
        store=components["store"].get_provider_name(),
        store_connected=connected,
        resolver=components["resolver"].get_provider_name(),
    )

    yield

    await _shutdown(components)
    _logger.info("app_shutdown", stats=components["query_cache"].get_stats().model_dump())


# ---------------------------------------------------------------------------
# FastAPI application factory
# ---------------------------------------------------------------------------


def create_app() -> FastAPI:
    """Build and configure the FastAPI application."""
    application = FastAPI(
        title="songCache API",
        version="0.1.0",
        description=(
            "Look up video metadata by free-text query or link. Results are "
            "cached in Redis for a week so repeated queries skip the YouTube API."
        ),
        lifespan=_lifespan,
    )

    application.add_middleware(ErrorHandlingMiddleware)
    application.add_middleware(RequestLoggingMiddleware)
    configure_cors(application)

    application.include_router(api_router)
    return application


app = create_app()

# ---------------------------------------------------------------------------
# Server entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    uvicorn.run(
        "src.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=(settings.app_env == "development"),
    )
