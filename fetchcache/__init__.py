"""fetchcache: in-memory TTL cache with fetch bindings.

Public API re-exported for library use; the CLI lives in `fetchcache.main`.
"""

from fetchcache.core.services.fetch_binding import FetchBinding, open_private_binding
from fetchcache.core.services.shared_cache import SharedCache
from fetchcache.domain.errors import BindingClosedError, FetchCacheError
from fetchcache.domain.interfaces.cache import CacheStore
from fetchcache.domain.models.cache import BindingState, CacheEntry, CacheOptions, CacheStats
from fetchcache.domain.models.common import MISSING
from fetchcache.infrastructure.cache.ttl_store import TTLCacheStore
from fetchcache.infrastructure.scheduling.sweeper import PeriodicSweeper

__version__ = "0.1.0"

__all__ = [
    "BindingClosedError",
    "BindingState",
    "CacheEntry",
    "CacheOptions",
    "CacheStats",
    "CacheStore",
    "FetchBinding",
    "FetchCacheError",
    "MISSING",
    "PeriodicSweeper",
    "SharedCache",
    "TTLCacheStore",
    "open_private_binding",
]
