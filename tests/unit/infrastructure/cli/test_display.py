import pytest
from unittest.mock import MagicMock

from rich.panel import Panel
from rich.table import Table

from fetchcache.domain.models.cache import CacheStats
from fetchcache.infrastructure.cli.display import ConsoleDisplay
from fetchcache.domain.models.common import ProcessedOutput, PromptText

@pytest.fixture
def mock_console():
    """Fixture to create a mock rich Console object."""
    return MagicMock()

@pytest.fixture
def console_display(mock_console: MagicMock):
    """Fixture to create a ConsoleDisplay instance with a mocked console."""
    display = ConsoleDisplay()
    display.console = mock_console # Inject the mock
    return display

def test_display_output_with_title(console_display: ConsoleDisplay, mock_console: MagicMock):
    console_display.display_output(ProcessedOutput("'hello'"), title="greeting")
    mock_console.print.assert_called_once_with("[bold cyan]greeting[/bold cyan] 'hello'")

def test_display_output_plain(console_display: ConsoleDisplay, mock_console: MagicMock):
    console_display.display_output(ProcessedOutput("3"))
    mock_console.print.assert_called_once_with("3")

def test_get_prompt(console_display: ConsoleDisplay, mock_console: MagicMock):
    """Test that get_prompt calls console.input and returns the result."""
    mock_console.input.return_value = "get k"
    actual_input = console_display.get_prompt("cache> ")
    mock_console.input.assert_called_once_with("[bold green]cache> [/bold green]")
    assert actual_input == PromptText("get k")

def test_display_error_uses_panel(console_display: ConsoleDisplay, mock_console: MagicMock):
    console_display.display_error("Something went wrong")
    args, _ = mock_console.print.call_args
    assert isinstance(args[0], Panel)

def test_display_info(console_display: ConsoleDisplay, mock_console: MagicMock):
    console_display.display_info("Stored 'k'.")
    mock_console.print.assert_called_once_with("[blue]Info:[/blue] Stored 'k'.")

def test_display_stats_prints_table(console_display: ConsoleDisplay, mock_console: MagicMock):
    console_display.display_stats(CacheStats(size=2, max_size=100, default_ttl=300.0, hits=5))
    args, _ = mock_console.print.call_args
    table = args[0]
    assert isinstance(table, Table)
    assert table.row_count == 6

def test_display_keys_lists_in_order(console_display: ConsoleDisplay, mock_console: MagicMock):
    console_display.display_keys(["b", "a"])
    table = mock_console.print.call_args.args[0]
    assert isinstance(table, Table)
    assert table.row_count == 2

def test_display_keys_empty(console_display: ConsoleDisplay, mock_console: MagicMock):
    console_display.display_keys([])
    mock_console.print.assert_called_once_with("[blue]Info:[/blue] Cache is empty.")

def test_display_output_escapes_markup(console_display: ConsoleDisplay, mock_console: MagicMock):
    console_display.display_output(ProcessedOutput("[bold]raw[/bold]"))
    mock_console.print.assert_called_once_with("\\[bold]raw\\[/bold]")
