"""Abstract base class for cache store providers.

Defines the key-value contract the lookup cache is built on: read a
serialized blob by key, write one with an expiry, and report
connection-level faults out-of-band.  Implementations may use Redis, an
in-process TTL dict, or any other store with per-key expiry.  Swapping the
backend never touches the lookup logic.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from collections.abc import Callable

from src.utils.errors import StoreConnectionError
from src.utils.logging import get_logger


class ICacheProvider(ABC):
    """Contract for key-value cache stores.

    All data operations are async so network-backed stores never block the
    event loop.  ``get`` distinguishes "key absent" (returns ``None``) from
    "store broken" (raises :class:`~src.utils.errors.StoreReadError`).
    """

    def __init__(self) -> None:
        self._error_listeners: list[Callable] = []

    @abstractmethod
    async def get(self, key: str) -> str | None:
        """Retrieve the value stored under *key*.

        Parameters
        ----------
        key:
            The cache key to look up.

        Returns
        -------
        str or None
            The stored value if present and not expired; ``None`` otherwise.

        Raises
        ------
        src.utils.errors.StoreReadError
            If the store cannot be read.
        """

    @abstractmethod
    async def set(self, key: str, value: str, ttl: int) -> None:
        """Store *value* under *key*, expiring after *ttl* seconds.

        Raises
        ------
        src.utils.errors.StoreWriteError
            If the store cannot be written.
        """

    @abstractmethod
    async def connect(self) -> bool:
        """Establish (or verify) the store connection.

        Returns ``False`` and reports a connection fault instead of raising
        when the store is unreachable, so the process can keep running.
        """

    @abstractmethod
    async def close(self) -> None:
        """Release any connections held by the store."""

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a short identifier, e.g. ``"redis"`` or ``"memory"``."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if the store is configured and believed reachable."""

    # ------------------------------------------------------------------
    # Out-of-band connection fault channel
    # ------------------------------------------------------------------

    def register_error_listener(self, callback: Callable) -> None:
        """Register a sync or async callback receiving :class:`StoreConnectionError`."""
        if callback not in self._error_listeners:
            self._error_listeners.append(callback)

    def unregister_error_listener(self, callback: Callable) -> None:
        """Remove a previously registered error listener."""
        if callback in self._error_listeners:
            self._error_listeners.remove(callback)

    async def _emit_connection_error(self, error: StoreConnectionError) -> None:
        """Deliver *error* to every listener; faulty listeners are logged and skipped."""
        for callback in list(self._error_listeners):
            try:
                result = callback(error)
                if asyncio.iscoroutine(result):
                    await result
            except Exception as exc:  # noqa: BLE001
                get_logger(__name__).warning(
                    "store_error_listener_failed",
                    provider=self.get_provider_name(),
                    error=str(exc),
                )
