import logging
from datetime import datetime
from typing import Any, List

from rich.align import Align
from rich.box import HEAVY, ROUNDED, SIMPLE
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from fetchcache.domain.interfaces.user_interface import UserInterface
from fetchcache.domain.models.cache import CacheStats
from fetchcache.domain.models.common import CacheKey, ProcessedOutput, PromptText

logger = logging.getLogger(__name__)

class ConsoleDisplay(UserInterface):
    """Concrete implementation of UserInterface using the rich library for console output."""

    def __init__(self, console: Console = None):
        """Initializes the rich Console."""
        self._console = console or Console()

    @property
    def console(self):
        """Get the Rich console instance for direct operations."""
        return self._console

    @console.setter
    def console(self, value) -> None:
        self._console = value

    def display_output(self, output: ProcessedOutput, **kwargs: Any) -> None:
        """Displays a result line, optionally prefixed with a styled title.

        Args:
            output: The processed output string to display.
            **kwargs: Additional arguments including:
                - title: Label printed before the output (e.g. the key)
        """
        title = kwargs.get("title")
        if title:
            self.console.print(f"[bold cyan]{escape(str(title))}[/bold cyan] {escape(str(output))}")
        else:
            self.console.print(escape(str(output)))

    def get_prompt(self, prompt_message: str = "> ") -> PromptText:
        """Gets input from the user.

        Args:
            prompt_message: The message to display before the input cursor.

        Returns:
            The text input by the user.
        """
        return PromptText(self.console.input(f"[bold green]{prompt_message}[/bold green]"))

    def display_error(self, error_message: str, **kwargs: Any) -> None:
        """Displays an error message in a distinct style."""
        panel = Panel(
            Text(error_message, style="white"),
            title="[bold red]Error[/bold red]",
            border_style="red",
            box=HEAVY,
            padding=(0, 1)
        )
        self.console.print(panel)

    def display_info(self, info_message: str, **kwargs: Any) -> None:
        """Displays an informational message."""
        self.console.print(f"[blue]Info:[/blue] {escape(info_message)}")

    def display_warning(self, warning_message: str, **kwargs: Any) -> None:
        """Displays a warning message."""
        logger.warning(f"Display warning: {warning_message}")
        self.console.print(f"[bold yellow]Warning:[/bold yellow] {escape(warning_message)}")

    def display_stats(self, stats: CacheStats) -> None:
        """Renders cache counters as a two-column table."""
        table = Table(title="Cache statistics", box=ROUNDED, border_style="cyan")
        table.add_column("Metric", style="cyan")
        table.add_column("Value", justify="right")
        table.add_row("Entries", f"{stats.size} / {stats.max_size}")
        table.add_row("Default TTL", f"{stats.default_ttl:g}s")
        table.add_row("Hits", str(stats.hits))
        table.add_row("Misses", str(stats.misses))
        table.add_row("Expirations", str(stats.expirations))
        table.add_row("Evictions", str(stats.evictions))
        self.console.print(table)

    def display_keys(self, keys: List[CacheKey]) -> None:
        """Lists keys oldest first; the first row is the next eviction candidate."""
        if not keys:
            self.display_info("Cache is empty.")
            return
        table = Table(box=SIMPLE, show_header=True)
        table.add_column("#", justify="right", style="dim")
        table.add_column("Key", style="bold")
        for position, key in enumerate(keys, start=1):
            table.add_row(str(position), str(key))
        self.console.print(table)

    def display_session_header(self, title: str = "fetchcache shell") -> None:
        """Displays a stylized header for a new shell session."""
        table = Table(show_header=False, box=ROUNDED, border_style="cyan", padding=(0, 1))
        table.add_column("Content", style="cyan")
        table.add_row(f"[bold cyan]{title}[/bold cyan]")
        table.add_row(f"Session started at {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
        table.add_row("Type 'help' for commands, 'exit' or 'quit' to end the session")
        self.console.print("")
        self.console.print(Align.center(table))
        self.console.print("")

    def display_session_footer(self, command_count: int, session_duration_secs: float) -> None:
        """Displays a summary at the end of a shell session."""
        minutes, seconds = divmod(int(session_duration_secs), 60)
        hours, minutes = divmod(minutes, 60)
        duration_str = f"{hours}h {minutes}m {seconds}s" if hours else f"{minutes}m {seconds}s"

        table = Table(show_header=False, box=SIMPLE, border_style="cyan", padding=(0, 1))
        table.add_column("Content", style="cyan")
        table.add_row("[bold cyan]Session Summary[/bold cyan]")
        table.add_row(f"Commands run: [bold]{command_count}[/bold]")
        table.add_row(f"Session duration: [bold]{duration_str}[/bold]")
        self.console.print("")
        self.console.print(Align.center(table))
