"""Main entry point when executing fetchcache as a package.

This allows running the package using python -m fetchcache.
"""

from fetchcache.main import cli_entry_point

if __name__ == "__main__":
    cli_entry_point()
