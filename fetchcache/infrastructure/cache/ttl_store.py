"""Concrete in-memory implementation of the CacheStore interface.

Entries carry their own TTL and are expired lazily on read or eagerly by
`cleanup()`. When the store is full the earliest-inserted entry is evicted
(FIFO, reads never reposition an entry).
"""

import logging
import threading
import time
from typing import Any, Dict, List, Optional

# Domain Layer Imports
from fetchcache.domain.interfaces.cache import CacheStore
from fetchcache.domain.models.cache import CacheEntry, CacheOptions, CacheStats
from fetchcache.domain.models.common import (
    MISSING,
    CacheKey,
    Clock,
    KeyCallback,
    Seconds,
    Timestamp,
)

logger = logging.getLogger(__name__)


class TTLCacheStore(CacheStore):
    """Insertion-ordered TTL cache with a capacity bound."""

    def __init__(self, options: Optional[CacheOptions] = None, clock: Clock = time.monotonic):
        """Initializes the store.

        Args:
            options: TTL, size bound and callbacks. Defaults to 300s / 100 entries.
            clock: Zero-argument callable returning the current time in seconds.
        """
        self.options = options or CacheOptions()
        self._clock = clock
        self._entries: Dict[CacheKey, CacheEntry] = {}
        # get() deletes lazily, so reads take the lock too
        self._lock = threading.RLock()
        self._hits = 0
        self._misses = 0
        self._expirations = 0
        self._evictions = 0
        logger.debug(f"TTLCacheStore initialized (ttl={self.options.ttl}s, max={self.options.max_size})")

    @property
    def default_ttl(self) -> Seconds:
        return self.options.ttl

    @property
    def max_size(self) -> int:
        return self.options.max_size

    def _fire(self, callback: Optional[KeyCallback], keys: List[CacheKey]) -> None:
        """Invokes a key callback outside the lock, once per key.

        Every key is reported even if the callback raises; the first
        failure is re-raised after the loop.
        """
        if callback is None:
            return
        first_error: Optional[Exception] = None
        for key in keys:
            try:
                callback(key)
            except Exception as e:
                logger.error(f"Callback failed for cache key '{key}': {e}", exc_info=True)
                if first_error is None:
                    first_error = e
        if first_error is not None:
            raise first_error

    # --- CacheStore Interface Implementation ---

    def set(self, key: CacheKey, value: Any, ttl: Optional[Seconds] = None) -> None:
        evicted: List[CacheKey] = []
        with self._lock:
            if key in self._entries:
                # Replacement takes the newest insertion position
                del self._entries[key]
            elif len(self._entries) >= self.options.max_size:
                oldest_key = next(iter(self._entries))
                del self._entries[oldest_key]
                self._evictions += 1
                evicted.append(oldest_key)
                logger.debug(f"Cache EVICTED key (FIFO): {oldest_key}")

            effective_ttl = ttl if ttl is not None else self.options.ttl
            self._entries[key] = CacheEntry(
                value=value,
                inserted_at=Timestamp(self._clock()),
                ttl=Seconds(effective_ttl),
            )
        self._fire(self.options.on_evict, evicted)

    def _lookup(self, key: CacheKey) -> Any:
        """Returns the live value or MISSING, expiring the entry if stale."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self._misses += 1
                return MISSING
            if not entry.is_expired(self._clock()):
                self._hits += 1
                return entry.value
            del self._entries[key]
            self._misses += 1
            self._expirations += 1
            logger.debug(f"Cache EXPIRED key: {key}")
        self._fire(self.options.on_expire, [key])
        return MISSING

    def get(self, key: CacheKey, default: Any = None) -> Any:
        value = self._lookup(key)
        return default if value is MISSING else value

    def has(self, key: CacheKey) -> bool:
        return self._lookup(key) is not MISSING

    def delete(self, key: CacheKey) -> bool:
        with self._lock:
            if key not in self._entries:
                return False
            del self._entries[key]
        logger.debug(f"Deleted cache key: {key}")
        return True

    def clear(self) -> None:
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
        logger.debug(f"Cleared {count} cache entries.")

    def size(self) -> int:
        with self._lock:
            return len(self._entries)

    def keys(self) -> List[CacheKey]:
        with self._lock:
            return list(self._entries)

    def cleanup(self) -> int:
        with self._lock:
            now = self._clock()
            expired_keys = [k for k, entry in self._entries.items() if entry.is_expired(now)]
            for key in expired_keys:
                del self._entries[key]
            self._expirations += len(expired_keys)
        if expired_keys:
            logger.debug(f"Cleanup removed {len(expired_keys)} expired entries.")
        self._fire(self.options.on_expire, expired_keys)
        return len(expired_keys)

    def stats(self) -> CacheStats:
        with self._lock:
            return CacheStats(
                size=len(self._entries),
                max_size=self.options.max_size,
                default_ttl=self.options.ttl,
                hits=self._hits,
                misses=self._misses,
                expirations=self._expirations,
                evictions=self._evictions,
            )
