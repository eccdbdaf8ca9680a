"""Cache Store Implementation.

Provides the concrete in-memory implementation of the CacheStore interface:
per-entry TTL, lazy and eager expiry, FIFO eviction at a capacity bound.
Bounded Context: Cache Management
"""
