"""Data Sources.

Upstream collaborators that hand fetchers to cache bindings.
"""
