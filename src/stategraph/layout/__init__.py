"""Layout algorithms — write 2D coordinates onto graph nodes in place."""

from __future__ import annotations

from stategraph.layout.force import layout_force_directed
from stategraph.layout.hierarchical import (
    CyclicGraphError,
    calculate_levels,
    layout_hierarchical,
)

__all__ = [
    "CyclicGraphError",
    "calculate_levels",
    "layout_force_directed",
    "layout_hierarchical",
]
