"""Defines common Value Objects used across different domain contexts.

These objects represent simple values or concepts like cache keys, durations,
clocks and fetchers, ensuring consistency and type safety.
"""

from typing import Any, Awaitable, Callable, NewType

# === Core Value Objects ===

# Using NewType for semantic clarity, although they are plain values at runtime.
CacheKey = NewType("CacheKey", str)              # Unique key for a cache entry
Seconds = NewType("Seconds", float)              # Durations (TTL, sweep interval)
Timestamp = NewType("Timestamp", float)          # Reading of the injected clock

# === Collaborators ===
Clock = Callable[[], float]                      # Returns "now"; time.monotonic by default
Fetcher = Callable[[], Awaitable[Any]]           # Zero-argument coroutine producing a value
KeyCallback = Callable[[CacheKey], None]         # on_expire / on_evict hooks

# === Shell Context ===
PromptText = NewType("PromptText", str)          # Raw line typed into the shell
ProcessedOutput = NewType("ProcessedOutput", str)  # Text rendered back to the user

# Sentinel reported by stores on a miss when no explicit default is given
# to internal lookups. Distinguishes a cached None from an absent key.
class _Missing:
    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False

MISSING: Any = _Missing()
