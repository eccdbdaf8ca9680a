"""Core service binding a cache store to a (key, fetcher) pair.

A binding publishes `value`, `loading` and `error` for one key. Reads are
served from the bound store while the entry is fresh; on a miss (or a forced
refresh) the fetcher is awaited and its result stored. Failures are published
but never cached, so the next fetch starts from scratch.

Concurrent fetches are not coalesced: every call that misses invokes the
fetcher, and the last result stored wins.
"""

import logging
import time
from typing import Any, Optional

# Domain Layer Imports
from fetchcache.domain.errors import BindingClosedError
from fetchcache.domain.interfaces.cache import CacheStore
from fetchcache.domain.models.cache import BindingState, CacheOptions
from fetchcache.domain.models.common import MISSING, CacheKey, Clock, Fetcher, Seconds

# Infrastructure Layer Imports
from fetchcache.infrastructure.cache.ttl_store import TTLCacheStore

logger = logging.getLogger(__name__)


class FetchBinding:
    """Publishes the cached or freshly fetched value for one key."""

    def __init__(
        self,
        store: CacheStore,
        key: CacheKey,
        fetcher: Fetcher,
        ttl: Optional[Seconds] = None,
        owns_store: bool = False,
    ):
        """Initializes the binding without fetching.

        Prefer `await FetchBinding.open(...)`, which also runs the initial fetch.

        Args:
            store: The store results are cached in (private or shared).
            key: The cache key this binding reads and writes.
            fetcher: Zero-argument coroutine function producing the value.
            ttl: TTL used when storing results; None uses the store default.
            owns_store: Whether `close()` should clear the store.
        """
        self.store = store
        self.key = key
        self.fetcher = fetcher
        self.ttl = ttl
        self.owns_store = owns_store

        # Published state
        self.value: Optional[Any] = None
        self.loading = False
        self.error: Optional[BaseException] = None

        self._has_value = False
        self._closed = False

    @classmethod
    async def open(
        cls,
        store: CacheStore,
        key: CacheKey,
        fetcher: Fetcher,
        ttl: Optional[Seconds] = None,
        owns_store: bool = False,
    ) -> "FetchBinding":
        """Creates a binding and runs its initial fetch."""
        binding = cls(store, key, fetcher, ttl=ttl, owns_store=owns_store)
        await binding.fetch()
        return binding

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def is_cached(self) -> bool:
        """Whether the bound store currently holds a fresh entry for the key."""
        return self.store.has(self.key)

    @property
    def state(self) -> BindingState:
        if self.loading:
            return BindingState.LOADING
        if self.error is not None:
            return BindingState.ERROR
        if self._has_value:
            return BindingState.SUCCESS
        return BindingState.IDLE

    def _publish(self, value: Any) -> None:
        self.value = value
        self._has_value = True

    async def fetch(self, force_refresh: bool = False) -> Optional[Any]:
        """Publishes the cached value, or fetches and caches a fresh one.

        Args:
            force_refresh: Skip the cache lookup and always invoke the fetcher.

        Returns:
            The published value after the fetch settles.
        """
        if self._closed:
            raise BindingClosedError(self.key)

        if not force_refresh:
            cached = self.store.get(self.key, MISSING)
            if cached is not MISSING:
                logger.debug(f"Binding cache HIT for key: {self.key}")
                self._publish(cached)
                return self.value

        logger.debug(f"Binding fetching key: {self.key} (force_refresh={force_refresh})")
        self.loading = True
        self.error = None
        started = time.monotonic()
        try:
            result = await self.fetcher()
        except Exception as e:
            logger.warning(f"Fetcher for key '{self.key}' failed: {e}")
            self.error = e
        else:
            self.store.set(self.key, result, self.ttl)
            self._publish(result)
            logger.debug(f"Fetched key '{self.key}' in {time.monotonic() - started:.3f}s")
        finally:
            self.loading = False
        return self.value

    async def refresh(self) -> Optional[Any]:
        """Equivalent to `fetch(force_refresh=True)`."""
        return await self.fetch(force_refresh=True)

    def invalidate(self) -> bool:
        """Drops the key from the bound store. Published state is untouched."""
        return self.store.delete(self.key)

    async def rebind(self, key: Optional[CacheKey] = None, fetcher: Optional[Fetcher] = None) -> bool:
        """Points the binding at a new key and/or fetcher.

        A fetch runs only if the (key, fetcher) identity actually changed.

        Returns:
            True if the identity changed and a fetch ran.
        """
        if self._closed:
            raise BindingClosedError(self.key)
        new_key = self.key if key is None else key
        new_fetcher = self.fetcher if fetcher is None else fetcher
        if new_key == self.key and new_fetcher == self.fetcher:
            return False
        self.key = new_key
        self.fetcher = new_fetcher
        await self.fetch()
        return True

    def close(self) -> None:
        """Detaches the binding. A private store is cleared with it."""
        if self._closed:
            return
        self._closed = True
        if self.owns_store:
            self.store.clear()
        logger.debug(f"Binding for key '{self.key}' closed.")

    def __repr__(self) -> str:
        return f"FetchBinding(key={self.key!r}, state={self.state.value})"


async def open_private_binding(
    key: CacheKey,
    fetcher: Fetcher,
    options: Optional[CacheOptions] = None,
    clock: Clock = time.monotonic,
) -> FetchBinding:
    """Opens a binding backed by its own private store.

    The private store is never swept; it relies on lazy expiry during reads
    and is cleared when the binding is closed.
    """
    store = TTLCacheStore(options, clock=clock)
    return await FetchBinding.open(store, key, fetcher, owns_store=True)
