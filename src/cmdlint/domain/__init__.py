"""Domain layer — descriptors, enums, name registries, type names.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
