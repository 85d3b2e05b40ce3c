"""Unit tests for the exception hierarchy and its HTTP status mapping."""

from __future__ import annotations

import pytest

from src.api.middleware import status_code_for
from src.utils.errors import (
    ConfigurationError,
    ResolveError,
    SongCacheError,
    StoreConnectionError,
    StoreError,
    StoreReadError,
    StoreWriteError,
)


class TestHierarchy:
    @pytest.mark.parametrize(
        "cls", [StoreConnectionError, StoreReadError, StoreWriteError]
    )
    def test_store_errors(self, cls: type[StoreError]) -> None:
        assert issubclass(cls, StoreError)
        assert issubclass(cls, SongCacheError)

    def test_resolve_error_is_not_a_store_error(self) -> None:
        assert not issubclass(ResolveError, StoreError)

    def test_str_includes_provider(self) -> None:
        assert str(StoreReadError("Connection refused", provider_name="redis")) == (
            "[redis] Connection refused"
        )

    def test_str_without_provider(self) -> None:
        assert str(ResolveError("No search results")) == "No search results"

    def test_default_message(self) -> None:
        error = StoreWriteError()
        assert error.message == "Cache store write failed"
        assert error.provider_name is None


class TestStatusMapping:
    @pytest.mark.parametrize(
        ("error", "status"),
        [
            (StoreReadError(), 503),
            (StoreConnectionError(), 503),
            (ResolveError(), 502),
            (ConfigurationError(), 500),
            (SongCacheError(), 500),
        ],
    )
    def test_status_code_for(self, error: SongCacheError, status: int) -> None:
        assert status_code_for(error) == status
