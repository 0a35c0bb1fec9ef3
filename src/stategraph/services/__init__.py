"""Service layer — host-facing operations returning ServiceResult.

Services may import from domain, graph, layout, infrastructure, and config.
Nothing below the service layer may import from it.
"""
