"""Domain layer — calendar values, entities, drag payloads, update rules.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
