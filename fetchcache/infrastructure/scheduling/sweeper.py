"""Periodic background sweep for a cache store.

Runs `store.cleanup()` on a fixed interval inside the running asyncio loop
until stopped. Reads already expire entries lazily; the sweep bounds memory
for keys that are written but never read again.
"""

import asyncio
import logging
from typing import Optional

from fetchcache.domain.interfaces.cache import CacheStore
from fetchcache.domain.models.cache import DEFAULT_SWEEP_INTERVAL_SECONDS

logger = logging.getLogger(__name__)


class PeriodicSweeper:
    """Owns the asyncio task that periodically sweeps one store."""

    def __init__(self, store: CacheStore, interval: float = DEFAULT_SWEEP_INTERVAL_SECONDS):
        """Initializes the sweeper.

        Args:
            store: The store to sweep.
            interval: Seconds between sweeps.
        """
        if interval <= 0:
            raise ValueError(f"sweep interval must be positive, got {interval}")
        self.store = store
        self.interval = interval
        self._task: Optional[asyncio.Task] = None
        self.sweep_count = 0

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Schedules the sweep loop on the running event loop."""
        if self.running:
            logger.warning("Cache sweep already running; ignoring start().")
            return
        self._task = asyncio.get_running_loop().create_task(self._run(), name="fetchcache-sweep")
        logger.info(f"Cache sweep started (every {self.interval}s).")

    async def stop(self) -> None:
        """Cancels the sweep loop and waits for it to exit."""
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.info("Cache sweep stopped.")

    def sweep_once(self) -> int:
        """Runs a single cleanup pass. Returns the number of entries removed."""
        removed = self.store.cleanup()
        self.sweep_count += 1
        logger.debug(f"Cache sweep #{self.sweep_count} removed {removed} expired entries.")
        return removed

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            try:
                self.sweep_once()
            except Exception as e:
                # An on_expire hook failing must not kill the sweep
                logger.error(f"Cache sweep failed: {e}", exc_info=True)
