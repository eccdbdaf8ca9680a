"""Core service for the process-wide shared cache.

One long-lived store constructed by the composition root and handed to
whichever bindings want a shared rather than private cache. The owner starts
and stops the periodic sweep explicitly; nothing runs on import.
"""

import logging
import time
from typing import Optional

# Domain Layer Imports
from fetchcache.domain.interfaces.cache import CacheStore
from fetchcache.domain.models.cache import (
    DEFAULT_SWEEP_INTERVAL_SECONDS,
    CacheOptions,
    CacheStats,
)
from fetchcache.domain.models.common import CacheKey, Clock, Fetcher, Seconds

# Core / Infrastructure Imports
from fetchcache.core.services.fetch_binding import FetchBinding
from fetchcache.infrastructure.cache.ttl_store import TTLCacheStore
from fetchcache.infrastructure.scheduling.sweeper import PeriodicSweeper

logger = logging.getLogger(__name__)


class SharedCache:
    """A shared store plus its background sweep and admin operations."""

    def __init__(
        self,
        store: Optional[CacheStore] = None,
        sweep_interval: Seconds = DEFAULT_SWEEP_INTERVAL_SECONDS,
        options: Optional[CacheOptions] = None,
        clock: Clock = time.monotonic,
    ):
        """Initializes the shared cache. The sweep is not started.

        Args:
            store: An existing store to share; built from `options` if None.
            sweep_interval: Seconds between background cleanups.
            options: Store options used when `store` is None.
            clock: Clock for a store built here.
        """
        self.store = store if store is not None else TTLCacheStore(options, clock=clock)
        self.sweeper = PeriodicSweeper(self.store, interval=sweep_interval)
        logger.info(f"SharedCache initialized (sweep every {sweep_interval}s).")

    # --- Sweep lifecycle ---

    @property
    def running(self) -> bool:
        return self.sweeper.running

    def start(self) -> None:
        """Starts the periodic sweep. Must be called from a running loop."""
        self.sweeper.start()

    async def stop(self) -> None:
        """Stops the periodic sweep if it is running."""
        await self.sweeper.stop()

    async def __aenter__(self) -> "SharedCache":
        self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.stop()

    # --- Administrative operations ---

    def clear(self, key: Optional[CacheKey] = None) -> None:
        """Clears one key, or the whole store when no key is given."""
        if key:
            removed = self.store.delete(key)
            logger.info(f"Shared cache invalidated key '{key}' (present={removed}).")
        else:
            self.store.clear()
            logger.info("Shared cache cleared.")

    def size(self) -> int:
        return self.store.size()

    def cleanup(self) -> int:
        """Runs one sweep immediately."""
        return self.sweeper.sweep_once()

    def stats(self) -> CacheStats:
        return self.store.stats()

    # --- Bindings ---

    async def bind(self, key: CacheKey, fetcher: Fetcher, ttl: Optional[Seconds] = None) -> FetchBinding:
        """Opens a binding on the shared store.

        Args:
            key: The cache key.
            fetcher: Zero-argument coroutine function producing the value.
            ttl: TTL for this binding's writes; None uses the store default.
        """
        return await FetchBinding.open(self.store, key, fetcher, ttl=ttl)

    def __repr__(self) -> str:
        return f"SharedCache(size={self.size()}, running={self.running})"
