"""Application services: bindings, the shared cache, shell and demo."""
