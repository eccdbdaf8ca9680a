"""Exceptions raised by the fetchcache library."""


class FetchCacheError(Exception):
    """Base class for fetchcache errors."""


class BindingClosedError(FetchCacheError):
    """Raised when a closed binding is asked to fetch or rebind."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Binding for key '{key}' is closed.")
