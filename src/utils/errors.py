"""Custom exception hierarchy for songCache.

All application exceptions inherit from :class:`SongCacheError`, which
carries an optional ``provider_name`` so error handlers can identify which
collaborator (e.g. "redis", "youtube") caused the failure.

The hierarchy is organized by collaborator:

    SongCacheError  (base -- catch-all for any songCache error)
    +-- StoreError               (key-value store failures)
    |   +-- StoreConnectionError (out-of-band connection fault, logged only)
    |   +-- StoreReadError       (get() failed -- lookup fails, no fallback)
    |   +-- StoreWriteError      (set() failed -- logged, never surfaced)
    +-- ResolveError             (search / fetch against the resolver failed)
    +-- ConfigurationError       (startup / missing config)

A lookup only ever surfaces ``StoreReadError`` or ``ResolveError`` to the
caller.  ``StoreWriteError`` is swallowed by the write-back path after being
logged, and ``StoreConnectionError`` travels through the store's listener
channel instead of the call stack.
"""


class SongCacheError(Exception):
    """Base exception for all songCache errors.

    Every subclass carries a human-readable ``message`` and an optional
    ``provider_name`` identifying which external service triggered the
    error.  The ``__str__`` method prefixes the provider name in brackets
    for structured log output, e.g. ``[redis] Connection refused``.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Store errors
# ---------------------------------------------------------------------------

class StoreError(SongCacheError):
    """Base class for key-value store failures."""

    def __init__(
        self,
        message: str = "Cache store operation failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class StoreConnectionError(StoreError):
    """Connection-level fault reported out-of-band by a store adapter.

    Delivered to registered error listeners rather than raised into a
    lookup.  In-flight lookups only fail if their own read call fails.
    """

    def __init__(
        self,
        message: str = "Cache store connection fault",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class StoreReadError(StoreError):
    """Raised when a store ``get()`` fails (not when the key is absent)."""

    def __init__(
        self,
        message: str = "Cache store read failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class StoreWriteError(StoreError):
    """Raised when a store ``set()`` fails.

    The write-back path logs and discards this; the resolved metadata is
    still returned to the caller.
    """

    def __init__(
        self,
        message: str = "Cache store write failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Resolver errors
# ---------------------------------------------------------------------------

class ResolveError(SongCacheError):
    """Raised when search or fetch against the resolver fails.

    Covers network failures, not-found identifiers, malformed responses and
    searches that return no usable candidate.  Direct-fetch and
    search-then-fetch failures are not distinguished.
    """

    def __init__(
        self,
        message: str = "Media resolution failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Configuration errors
# ---------------------------------------------------------------------------

class ConfigurationError(SongCacheError):
    """Raised when configuration is invalid or missing at startup."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
