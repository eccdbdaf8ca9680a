"""Domain models for the cache store and its bindings.

Includes the `CacheEntry` record, store configuration (`CacheOptions`),
the `CacheStats` snapshot and the `BindingState` of a fetch binding.
"""

import enum
from dataclasses import dataclass
from typing import Any, Optional

from fetchcache.domain.models.common import KeyCallback, Seconds, Timestamp

DEFAULT_TTL_SECONDS = Seconds(5 * 60)  # 5 minutes
DEFAULT_MAX_SIZE = 100
DEFAULT_SWEEP_INTERVAL_SECONDS = Seconds(5 * 60)


@dataclass(frozen=True)
class CacheEntry:
    """A stored value with the clock reading it was inserted at and its TTL."""
    value: Any
    inserted_at: Timestamp
    ttl: Seconds

    def is_expired(self, now: float) -> bool:
        """A non-positive (or NaN) TTL expires on the very next read."""
        return not self.ttl > 0 or now - self.inserted_at > self.ttl


@dataclass(frozen=True)
class CacheOptions:
    """Per-store configuration."""
    ttl: Seconds = DEFAULT_TTL_SECONDS
    max_size: int = DEFAULT_MAX_SIZE
    on_expire: Optional[KeyCallback] = None
    on_evict: Optional[KeyCallback] = None

    def __post_init__(self) -> None:
        if self.max_size < 1:
            raise ValueError(f"max_size must be at least 1, got {self.max_size}")
        if not self.ttl > 0:
            raise ValueError(f"default ttl must be positive, got {self.ttl}")


@dataclass(frozen=True)
class CacheStats:
    """Point-in-time counters reported by a store."""
    size: int
    max_size: int
    default_ttl: Seconds
    hits: int = 0
    misses: int = 0
    expirations: int = 0
    evictions: int = 0


class BindingState(str, enum.Enum):
    """Lifecycle of a fetch binding: Idle -> Loading -> Success | Error."""
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"
