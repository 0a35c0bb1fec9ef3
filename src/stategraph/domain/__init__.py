"""Domain layer — types, ids, and graph record models.

This layer depends only on stdlib and pydantic.
It must never import from graph, layout, services, infrastructure, or config.
"""
