"""Core service walking through the life of a private fetch binding.

Shows a cold fetch, a cached read, expiry after the TTL, a forced refresh
and a failing upstream that keeps the last good value.
"""

import asyncio
import logging
from typing import Optional

# Domain Layer Imports
from fetchcache.domain.interfaces.user_interface import UserInterface
from fetchcache.domain.models.cache import CacheOptions
from fetchcache.domain.models.common import CacheKey, ProcessedOutput, Seconds

# Core / Infrastructure Imports
from fetchcache.core.services.fetch_binding import FetchBinding, open_private_binding
from fetchcache.infrastructure.sources.simulated import SimulatedSource

logger = logging.getLogger(__name__)


class DemoService:
    """Runs the scripted binding walkthrough."""

    def __init__(self, ui: UserInterface, source: Optional[SimulatedSource] = None):
        self.ui = ui
        self.source = source or SimulatedSource(latency=0.1)

    def _report(self, step: str, binding: FetchBinding) -> None:
        calls = self.source.calls.get(binding.key, 0)
        self.ui.display_output(
            ProcessedOutput(f"value={binding.value!r} state={binding.state.value} "
                            f"cached={binding.is_cached} upstream_calls={calls}"),
            title=step,
        )

    async def run(self, key: CacheKey = CacheKey("report"), ttl: Seconds = Seconds(1.0)) -> FetchBinding:
        """Runs the walkthrough and returns the (closed) binding."""
        self.ui.display_info(f"Opening a private binding for '{key}' with a {ttl:g}s TTL.")
        binding = await open_private_binding(key, self.source.fetcher_for(key), CacheOptions(ttl=ttl))
        try:
            self._report("cold fetch", binding)

            await binding.fetch()
            self._report("cached read", binding)

            await asyncio.sleep(ttl + 0.05)
            await binding.fetch()
            self._report("after expiry", binding)

            await binding.refresh()
            self._report("forced refresh", binding)

            binding.invalidate()
            self.source.failing = True
            await binding.fetch()
            self._report("upstream failure", binding)
            if binding.error is not None:
                self.ui.display_warning(f"Fetch failed, last good value kept: {binding.error}")
        finally:
            self.source.failing = False
            binding.close()
        logger.info(f"Demo finished after {self.source.total_calls()} upstream calls.")
        return binding
