"""Interface for in-memory cache stores.

Defines the contract for storing, retrieving, expiring and evicting cached
data held in the memory of a single process.
"""

import abc
from typing import Any, List, Optional

# Import relevant domain models
from ..models.cache import CacheStats
from ..models.common import CacheKey, Seconds

class CacheStore(abc.ABC):
    """Abstract Base Class for TTL cache stores."""

    @abc.abstractmethod
    def set(self, key: CacheKey, value: Any, ttl: Optional[Seconds] = None) -> None:
        """Stores an item, replacing any existing entry for the key.

        May evict the earliest-inserted entry when the store is full.

        Args:
            key: The cache key to store the item under.
            value: The item to store.
            ttl: Time-to-live in seconds (uses the store default if None).
        """
        pass

    @abc.abstractmethod
    def get(self, key: CacheKey, default: Any = None) -> Any:
        """Retrieves an item, expiring it lazily if its TTL has elapsed.

        Args:
            key: The cache key to retrieve.
            default: Returned on a miss.

        Returns:
            The cached item if found and not expired, otherwise `default`.
        """
        pass

    @abc.abstractmethod
    def has(self, key: CacheKey) -> bool:
        """Returns True iff `get(key)` would be a hit."""
        pass

    @abc.abstractmethod
    def delete(self, key: CacheKey) -> bool:
        """Deletes an item. Returns whether anything was removed."""
        pass

    @abc.abstractmethod
    def clear(self) -> None:
        """Removes every item without firing expiry callbacks."""
        pass

    @abc.abstractmethod
    def size(self) -> int:
        """Number of stored entries, including expired but unswept ones."""
        pass

    @abc.abstractmethod
    def keys(self) -> List[CacheKey]:
        """Snapshot of the keys in insertion order."""
        pass

    @abc.abstractmethod
    def cleanup(self) -> int:
        """Eagerly removes expired entries.

        Returns:
            The number of entries removed.
        """
        pass

    @abc.abstractmethod
    def stats(self) -> CacheStats:
        """Returns a snapshot of the store's counters."""
        pass

    def __contains__(self, key: object) -> bool:
        return self.has(key)  # type: ignore[arg-type]

    def __len__(self) -> int:
        return self.size()
