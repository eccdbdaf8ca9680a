"""Background Scheduling.

Contains the periodic sweep that eagerly expires entries of the shared
process cache.
Bounded Context: Cache Management
"""
