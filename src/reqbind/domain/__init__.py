"""Domain layer: directive grammar, timestamp layouts, and value coercion.

This layer depends only on stdlib and pydantic.
It must never import from binding, services, commands, or config.
"""
