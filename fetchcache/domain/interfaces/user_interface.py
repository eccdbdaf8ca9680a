"""Interface for interacting with the user (input/output).

Defines the contract for displaying information, errors, warnings, cache
snapshots and getting input from the user, allowing different UI
implementations.
"""

import abc
from typing import Any, List

# Import relevant domain models
from fetchcache.domain.models.cache import CacheStats
from fetchcache.domain.models.common import CacheKey, PromptText, ProcessedOutput

class UserInterface(abc.ABC):
    """Abstract Base Class for user interaction."""

    @abc.abstractmethod
    def display_output(self, output: ProcessedOutput, **kwargs: Any) -> None:
        """Displays standard output to the user.

        Args:
            output: The processed output string to display.
            **kwargs: Additional arguments for formatting (e.g., title).
        """
        pass

    @abc.abstractmethod
    def display_error(self, error_message: str, **kwargs: Any) -> None:
        """Displays an error message to the user."""
        pass

    @abc.abstractmethod
    def display_warning(self, warning_message: str, **kwargs: Any) -> None:
        """Displays a warning message to the user."""
        pass

    @abc.abstractmethod
    def display_info(self, info_message: str, **kwargs: Any) -> None:
        """Displays an informational message to the user."""
        pass

    @abc.abstractmethod
    def get_prompt(self, prompt_message: str = "> ") -> PromptText:
        """Gets input from the user synchronously.

        Note: For async contexts, the caller should wrap this in asyncio.to_thread.

        Args:
            prompt_message: The message to display before the input prompt.

        Returns:
            The user's input as PromptText.
        """
        pass

    @abc.abstractmethod
    def display_stats(self, stats: CacheStats) -> None:
        """Displays a snapshot of cache counters."""
        pass

    @abc.abstractmethod
    def display_keys(self, keys: List[CacheKey]) -> None:
        """Displays cache keys in insertion order."""
        pass

    def display_session_header(self, title: str = "fetchcache shell") -> None:
        """Displays a header for a new shell session."""
        pass

    def display_session_footer(self, command_count: int, session_duration_secs: float) -> None:
        """Displays a footer at the end of a shell session."""
        pass
