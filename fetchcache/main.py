"""Main entry point for the fetchcache application.

Sets up the Typer CLI application, performs dependency injection (Composition
Root), defines CLI commands, and delegates execution to the CommandHandler.
"""

import asyncio
import logging
import sys
from typing import Any, Coroutine, Dict, Optional

import typer
from typing_extensions import Annotated

# --- Core Layer ---
from fetchcache.core.command_handler import CommandHandler
from fetchcache.core.services.demo_service import DemoService
from fetchcache.core.services.shared_cache import SharedCache
from fetchcache.core.services.shell_service import ShellService

# --- Infrastructure Layer ---
# Config
from fetchcache.infrastructure.config.settings import (
    get_cache_options,
    get_config,
    get_sweep_interval,
    load_configuration,
)
# UI
from fetchcache.infrastructure.cli.display import ConsoleDisplay
# Cache
from fetchcache.infrastructure.cache.ttl_store import TTLCacheStore
# Sources
from fetchcache.infrastructure.sources.simulated import SimulatedSource
# Monitoring
from fetchcache.infrastructure.monitoring.logger_setup import setup_logging

logger = logging.getLogger(__name__)

# --- Dependency Injection Container (Manual) ---

def create_dependencies(log_level: Optional[str] = None) -> Dict[str, Any]:
    """Creates and wires up all dependencies for the application.

    This acts as the Composition Root. The shared cache is built here and
    handed to the services that use it; its sweep is started by the command
    that needs it.
    """
    dependencies: Dict[str, Any] = {}
    try:
        # 1. Load Configuration First
        load_configuration()
        setup_logging(
            log_level=log_level or get_config('logging.level', 'INFO'),
            log_file=get_config('logging.file'),
            log_format=get_config('logging.format', '%(asctime)s - %(name)s - %(levelname)s - %(message)s'),
            max_bytes=int(get_config('logging.max_bytes', 0)),
            backup_count=int(get_config('logging.backup_count', 3)),
        )
        logger.debug("Configuration and logging initialized.")

        # 2. Instantiate Infrastructure Adapters
        dependencies['ui'] = ConsoleDisplay()
        dependencies['store'] = TTLCacheStore(get_cache_options())
        latency = float(get_config('source.latency_seconds', 0.2))
        dependencies['source'] = SimulatedSource(latency=latency)

        # 3. Instantiate Core Services (injecting dependencies)
        dependencies['shared_cache'] = SharedCache(
            store=dependencies['store'],
            sweep_interval=get_sweep_interval(),
        )
        dependencies['shell_service'] = ShellService(
            shared_cache=dependencies['shared_cache'],
            ui=dependencies['ui'],
            source=dependencies['source'],
        )
        # The demo counts upstream calls on its own source
        dependencies['demo_service'] = DemoService(ui=dependencies['ui'], source=SimulatedSource(latency=latency))

        # 4. Instantiate Command Handler
        dependencies['command_handler'] = CommandHandler(
            shared_cache=dependencies['shared_cache'],
            shell_service=dependencies['shell_service'],
            demo_service=dependencies['demo_service'],
            ui=dependencies['ui'],
        )
        logger.debug("All dependencies initialized successfully.")
        return dependencies

    except ValueError as e:
        # Invalid cache settings (e.g. cache.max_size: 0)
        logger.error(f"Fatal Error during application initialization: {e}", exc_info=True)
        if 'ui' in dependencies:
            dependencies['ui'].display_error(f"Application Initialization Failed: {e}")
        else:
            print(f"FATAL ERROR during initialization: {e}", file=sys.stderr)
        raise typer.Exit(code=1)

# --- Typer App Definition ---
app = typer.Typer(
    name="fetchcache",
    help="fetchcache: in-memory TTL cache with fetch bindings and a swept shared cache.",
    add_completion=False,
)

LogLevelOption = Annotated[
    Optional[str],
    typer.Option("--log-level", "-l", help="Logging level (debug, info, warning, error). Overrides config."),
]

# --- Helper for Running Async Commands ---
def run_async(coro: Coroutine[Any, Any, None]) -> None:
    """Runs an async command handler to completion from a sync Typer command."""
    asyncio.run(coro)

def _handler(log_level: Optional[str]) -> CommandHandler:
    return create_dependencies(log_level)['command_handler']

# --- CLI Commands ---

@app.command()
def shell(log_level: LogLevelOption = None):
    """Interactive shell over the shared cache (background sweep active)."""
    run_async(_handler(log_level).handle_shell())

@app.command()
def demo(
    key: Annotated[str, typer.Option("--key", "-k", help="Cache key used by the walkthrough.")] = "report",
    ttl: Annotated[float, typer.Option("--ttl", "-t", help="TTL in seconds for the private store.")] = 1.0,
    log_level: LogLevelOption = None,
):
    """Walk a private binding through fetch, hit, expiry, refresh and failure."""
    run_async(_handler(log_level).handle_demo(key, ttl))

@app.command()
def stats(log_level: LogLevelOption = None):
    """Show the configured shared cache settings."""
    _handler(log_level).handle_stats()

@app.callback(invoke_without_command=True)
def main_callback(ctx: typer.Context):
    """Starts the interactive shell if no command is given."""
    if ctx.invoked_subcommand is None:
        logger.debug("No command invoked, starting interactive shell.")
        shell(log_level=None)

# --- Main Execution Guard ---

def cli_entry_point():
    """Function to be called by the script entry point in pyproject.toml."""
    app()

if __name__ == "__main__":
    cli_entry_point()
