"""FastAPI routes exposing the lookup cache.

# ─── API ROUTE MAP ────────────────────────────────────────────────────
#
# Endpoint              Method  Description
# ─────────────────────────────────────────────────────────────────────
# /api/v1/lookup?q=     GET     Cached metadata lookup (free text or link)
# /api/v1/stats         GET     Hit / fetch / error counters
# /api/v1/health        GET     Health check + provider availability
#
# The QueryCache instance is resolved from app.state (populated at startup
# in main.py's _build_all) through an Annotated Depends alias.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query, Request

from src.api.schemas import ErrorResponse, HealthResponse, LookupResponse, StatsResponse
from src.services.query_cache import QueryCache

router = APIRouter(prefix="/api/v1")

_VERSION = "0.1.0"


def _get_query_cache(request: Request) -> QueryCache:
    """Return the lookup cache from application state."""
    return request.app.state.query_cache


QueryCacheDep = Annotated[QueryCache, Depends(_get_query_cache)]


@router.get(
    "/lookup",
    response_model=LookupResponse,
    responses={502: {"model": ErrorResponse}, 503: {"model": ErrorResponse}},
    summary="Look up media metadata by text or link",
)
async def lookup(
    query_cache: QueryCacheDep,
    q: Annotated[str, Query(min_length=1, description="Free-text query or video link")],
) -> LookupResponse:
    metadata = await query_cache.lookup(q)
    return LookupResponse(query=query_cache.normalize(q), metadata=metadata)


@router.get("/stats", response_model=StatsResponse, summary="Lookup cache counters")
async def stats(query_cache: QueryCacheDep) -> StatsResponse:
    snapshot = query_cache.get_stats()
    return StatsResponse(
        cache_hits=snapshot.cache_hits,
        fetch_count=snapshot.fetch_count,
        error_count=snapshot.error_count,
    )


@router.get("/health", response_model=HealthResponse, summary="Application health check")
async def health_check(request: Request) -> HealthResponse:
    """Report store and resolver availability.

    ``degraded`` means the process is up but one collaborator is not
    usable; lookups will fail until it recovers.
    """
    providers: dict[str, Any] = {}
    store = getattr(request.app.state, "store", None)
    resolver = getattr(request.app.state, "resolver", None)
    if store is not None:
        providers[store.get_provider_name()] = store.is_available()
    if resolver is not None:
        providers[resolver.get_provider_name()] = resolver.is_available()

    status = "healthy" if providers and all(providers.values()) else "degraded"
    return HealthResponse(status=status, version=_VERSION, providers=providers)
