"""Pydantic response schemas for the songCache API.

FastAPI uses these for response serialization and OpenAPI docs.
Convention: response schemas end with "Response".
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from src.models.cache import CacheStats


class LookupResponse(BaseModel):
    """Metadata resolved for a query, keyed by its normalized form."""

    query: str = Field(description="Normalized query used as the cache key")
    metadata: dict[str, Any]


class StatsResponse(CacheStats):
    """Hit / fetch / error counters of the running lookup cache."""


class HealthResponse(BaseModel):
    """Application health check response."""

    status: str
    version: str
    providers: dict[str, Any]


class ErrorResponse(BaseModel):
    """Standard error response body."""

    error: str
    detail: str | None = None
