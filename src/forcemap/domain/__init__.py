"""Domain layer — graph model and pure graph queries.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
