"""Domain layer — descriptors, diagnostics, record context and policy enums.

This layer depends only on stdlib and pydantic.
It must never import from converters, schema or config at runtime.
"""
