"""Infrastructure Layer: Contains concrete implementations and adapters.

Connects the application to the outside world (the console, configuration
files, the clock, upstream sources) by implementing the interfaces defined in
the domain layer. Also holds the periodic sweep scheduler.
"""
