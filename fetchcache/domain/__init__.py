"""Domain Layer: cache models, value objects, interfaces and errors.

Has no dependency on the core or infrastructure layers.
"""
