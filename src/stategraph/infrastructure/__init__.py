"""Infrastructure layer — graph engine and snapshot files.

This layer depends on stdlib and third-party libs (NetworkX).
It must never import from domain, graph, layout, services, or config.
The graph layer bridges between domain models and infrastructure.
"""
