"""stategraph — dependency graph analysis and layout for runtime state entities."""

from __future__ import annotations

from stategraph.dependency_graph import DependencyGraph
from stategraph.domain.types import NodeKind

__version__ = "0.1.0"

__all__ = ["DependencyGraph", "NodeKind", "__version__"]
