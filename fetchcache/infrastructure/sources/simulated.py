"""Simulated upstream data source used by the shell and demo commands.

Stands in for the real collaborators (API clients, report builders) that
supply fetchers to bindings: each call sleeps for a configurable latency and
returns a small payload describing the call, or raises when told to fail.
"""

import asyncio
import logging
import time
from typing import Any, Dict

from fetchcache.domain.models.common import CacheKey, Fetcher

logger = logging.getLogger(__name__)


class UpstreamError(Exception):
    """Raised by the simulated source when a failure is requested."""


class SimulatedSource:
    """Produces fetchers for keys and counts how often each is invoked."""

    def __init__(self, latency: float = 0.2):
        self.latency = latency
        self.calls: Dict[CacheKey, int] = {}
        self.failing = False

    def total_calls(self) -> int:
        return sum(self.calls.values())

    async def load(self, key: CacheKey) -> Dict[str, Any]:
        self.calls[key] = self.calls.get(key, 0) + 1
        logger.debug(f"Simulated source loading '{key}' (call #{self.calls[key]})")
        if self.latency > 0:
            await asyncio.sleep(self.latency)
        if self.failing:
            raise UpstreamError(f"upstream unavailable for '{key}'")
        return {"key": key, "call": self.calls[key], "loaded_at": round(time.time(), 3)}

    def fetcher_for(self, key: CacheKey) -> Fetcher:
        """Returns a zero-argument fetcher bound to `key`."""
        async def fetch() -> Dict[str, Any]:
            return await self.load(key)
        return fetch
