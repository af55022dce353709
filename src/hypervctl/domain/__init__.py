"""Domain layer — error vocabulary, records, and incompatibility reasons.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
