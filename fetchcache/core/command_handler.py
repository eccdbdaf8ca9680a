"""Command Handler: Orchestrates CLI command execution.

Receives commands from the main entry point (main.py) and delegates the work
to the appropriate application services (ShellService, DemoService), owning
the shared cache's sweep lifecycle around the interactive shell.
"""

import logging

# Core Services Imports
from fetchcache.core.services.demo_service import DemoService
from fetchcache.core.services.shared_cache import SharedCache
from fetchcache.core.services.shell_service import ShellService

# Domain Layer Imports
from fetchcache.domain.interfaces.user_interface import UserInterface
from fetchcache.domain.models.common import CacheKey, Seconds

logger = logging.getLogger(__name__)

class CommandHandler:
    """Handles incoming commands and delegates to appropriate services."""

    def __init__(
        self,
        shared_cache: SharedCache,
        shell_service: ShellService,
        demo_service: DemoService,
        ui: UserInterface,
    ):
        """Initializes the CommandHandler with required services."""
        self.shared_cache = shared_cache
        self.shell_service = shell_service
        self.demo_service = demo_service
        self.ui = ui

    async def handle_shell(self) -> None:
        """Runs the interactive shell with the background sweep active."""
        logger.info("Starting interactive cache shell.")
        self.shared_cache.start()
        try:
            await self.shell_service.run_session()
        except Exception as e:
            logger.error(f"Shell session failed: {e}", exc_info=True)
            self.ui.display_error(f"Shell session failed: {e}")
        finally:
            await self.shared_cache.stop()

    async def handle_demo(self, key: str, ttl: float) -> None:
        """Runs the binding walkthrough."""
        logger.info(f"Handling 'demo' command for key: {key} (ttl={ttl}s)")
        if ttl <= 0:
            self.ui.display_error("TTL must be a positive number of seconds.")
            return
        try:
            await self.demo_service.run(CacheKey(key), Seconds(ttl))
        except Exception as e:
            logger.error(f"Demo failed: {e}", exc_info=True)
            self.ui.display_error(f"Demo failed: {e}")

    def handle_stats(self) -> None:
        """Shows the shared cache's configuration and counters."""
        self.ui.display_stats(self.shared_cache.stats())
        self.ui.display_info(f"Sweep interval: {self.shared_cache.sweeper.interval:g}s")
