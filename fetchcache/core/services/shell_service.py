"""Core service for the interactive cache shell.

Reads commands from the user and applies them to the shared process cache,
either directly on its store (set/get/has/del/...) or through fetch bindings
backed by the simulated upstream source (fetch/refresh/invalidate). The
background sweep keeps running while the shell waits for input.
"""

import asyncio
import logging
import math
import shlex
import time
from typing import Dict, List, Optional

# Domain Layer Imports
from fetchcache.domain.interfaces.user_interface import UserInterface
from fetchcache.domain.models.common import MISSING, CacheKey, ProcessedOutput, PromptText, Seconds

# Core / Infrastructure Imports
from fetchcache.core.services.fetch_binding import FetchBinding
from fetchcache.core.services.shared_cache import SharedCache
from fetchcache.infrastructure.sources.simulated import SimulatedSource

logger = logging.getLogger(__name__)

EXIT_COMMANDS = ("exit", "quit")

HELP_TEXT = """Commands:
  set KEY VALUE [TTL]   store VALUE under KEY (TTL in seconds)
  get KEY               read KEY
  has KEY               check whether KEY is cached
  del KEY               delete KEY
  keys                  list keys, oldest first
  size                  number of stored entries
  stats                 cache counters
  cleanup               remove expired entries now
  clear [KEY]           clear one key or everything
  fetch KEY             read KEY through a binding (fetches on miss)
  refresh KEY           force the binding for KEY to refetch
  invalidate KEY        drop KEY so the next fetch goes upstream
  exit | quit           leave the shell"""


class ShellUsageError(ValueError):
    """Raised when a shell command is malformed."""


class ShellService:
    """Runs the interactive shell over a shared cache."""

    def __init__(self, shared_cache: SharedCache, ui: UserInterface, source: Optional[SimulatedSource] = None):
        """Initializes the ShellService with its dependencies."""
        self.shared_cache = shared_cache
        self.ui = ui
        self.source = source or SimulatedSource()
        self.bindings: Dict[CacheKey, FetchBinding] = {}
        self.command_count = 0

    async def run_session(self) -> None:
        """Prompts for commands until the user exits or input ends."""
        self.ui.display_session_header()
        started = time.monotonic()
        while True:
            try:
                line = await asyncio.to_thread(self.ui.get_prompt, "cache> ")
            except (EOFError, KeyboardInterrupt):
                break
            if not await self.execute(line):
                break
        self.ui.display_session_footer(self.command_count, time.monotonic() - started)
        logger.info(f"Shell session ended after {self.command_count} commands.")

    async def execute(self, line: PromptText) -> bool:
        """Executes one command line.

        Returns:
            False when the session should end, True otherwise.
        """
        try:
            parts = shlex.split(line)
        except ValueError as e:
            self.ui.display_error(f"Could not parse command: {e}")
            return True
        if not parts:
            return True

        command, args = parts[0].lower(), parts[1:]
        if command in EXIT_COMMANDS:
            return False

        self.command_count += 1
        handler = getattr(self, f"_cmd_{command}", None)
        if handler is None:
            self.ui.display_error(f"Unknown command '{command}'. Type 'help' for a list.")
            return True

        try:
            await handler(args)
        except ShellUsageError as e:
            self.ui.display_error(str(e))
        except Exception as e:
            logger.error(f"Shell command '{command}' failed: {e}", exc_info=True)
            self.ui.display_error(f"An error occurred: {e}")
        return True

    # --- Helpers ---

    @staticmethod
    def _require_key(args: List[str], usage: str) -> CacheKey:
        if len(args) != 1:
            raise ShellUsageError(f"Usage: {usage}")
        return CacheKey(args[0])

    async def _binding_for(self, key: CacheKey) -> FetchBinding:
        binding = self.bindings.get(key)
        if binding is None:
            binding = await self.shared_cache.bind(key, self.source.fetcher_for(key))
            self.bindings[key] = binding
        else:
            await binding.fetch()
        return binding

    def _show_binding(self, binding: FetchBinding) -> None:
        if binding.error is not None:
            self.ui.display_error(f"{binding.key}: {binding.error}")
        self.ui.display_output(
            ProcessedOutput(f"{binding.value!r} ({binding.state.value}, upstream calls={self.source.calls.get(binding.key, 0)})"),
            title=binding.key,
        )

    # --- Store commands ---

    async def _cmd_help(self, args: List[str]) -> None:
        self.ui.display_output(ProcessedOutput(HELP_TEXT))

    async def _cmd_set(self, args: List[str]) -> None:
        if len(args) not in (2, 3):
            raise ShellUsageError("Usage: set KEY VALUE [TTL]")
        ttl: Optional[Seconds] = None
        if len(args) == 3:
            try:
                ttl = Seconds(float(args[2]))
            except ValueError:
                raise ShellUsageError(f"TTL must be a number of seconds, got '{args[2]}'")
            if not math.isfinite(ttl):
                raise ShellUsageError(f"TTL must be a finite number of seconds, got '{args[2]}'")
        self.shared_cache.store.set(CacheKey(args[0]), args[1], ttl)
        self.ui.display_info(f"Stored '{args[0]}'.")

    async def _cmd_get(self, args: List[str]) -> None:
        key = self._require_key(args, "get KEY")
        value = self.shared_cache.store.get(key, MISSING)
        if value is MISSING:
            self.ui.display_info(f"'{key}' is not cached.")
            return
        self.ui.display_output(ProcessedOutput(repr(value)), title=key)

    async def _cmd_has(self, args: List[str]) -> None:
        key = self._require_key(args, "has KEY")
        self.ui.display_output(ProcessedOutput(str(self.shared_cache.store.has(key)).lower()), title=key)

    async def _cmd_del(self, args: List[str]) -> None:
        key = self._require_key(args, "del KEY")
        if self.shared_cache.store.delete(key):
            self.ui.display_info(f"Deleted '{key}'.")
        else:
            self.ui.display_info(f"'{key}' was not cached.")

    async def _cmd_keys(self, args: List[str]) -> None:
        self.ui.display_keys(self.shared_cache.store.keys())

    async def _cmd_size(self, args: List[str]) -> None:
        self.ui.display_output(ProcessedOutput(str(self.shared_cache.size())), title="size")

    async def _cmd_stats(self, args: List[str]) -> None:
        self.ui.display_stats(self.shared_cache.stats())

    async def _cmd_cleanup(self, args: List[str]) -> None:
        removed = self.shared_cache.cleanup()
        self.ui.display_info(f"Removed {removed} expired entries.")

    async def _cmd_clear(self, args: List[str]) -> None:
        if len(args) > 1:
            raise ShellUsageError("Usage: clear [KEY]")
        key = CacheKey(args[0]) if args else None
        self.shared_cache.clear(key)
        self.ui.display_info(f"Cleared '{key}'." if key else "Cleared the cache.")

    # --- Binding commands ---

    async def _cmd_fetch(self, args: List[str]) -> None:
        key = self._require_key(args, "fetch KEY")
        self._show_binding(await self._binding_for(key))

    async def _cmd_refresh(self, args: List[str]) -> None:
        key = self._require_key(args, "refresh KEY")
        binding = self.bindings.get(key)
        if binding is None:
            binding = await self._binding_for(key)
        else:
            await binding.refresh()
        self._show_binding(binding)

    async def _cmd_invalidate(self, args: List[str]) -> None:
        key = self._require_key(args, "invalidate KEY")
        binding = self.bindings.get(key)
        removed = binding.invalidate() if binding else self.shared_cache.store.delete(key)
        self.ui.display_info(f"Invalidated '{key}' (was cached: {str(removed).lower()}).")
