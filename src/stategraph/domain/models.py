"""Graph record models — nodes, edges, cycle reports, metrics, layout options.

Nodes and edges are mutable pydantic models: the store hands out the stored
instance, and layout algorithms write ``x``/``y`` in place. Everything else
is frozen.

The wire shape drops unset optional fields, so a freshly added node
serializes as ``{"id", "label", "kind"}`` and gains ``x``/``y`` only after a
layout has run.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from stategraph.domain.types import Metadata, NodeKind

# Force layout keeps nodes this far inside every canvas edge.
CANVAS_MARGIN = 50.0


def _drop_unset(data: dict[str, Any]) -> dict[str, Any]:
    """Remove top-level keys whose value is None (optional wire fields)."""
    return {key: value for key, value in data.items() if value is not None}


class GraphNode(BaseModel):
    """A labeled vertex: one store, component, slice, or hook."""

    id: str
    label: str
    kind: NodeKind
    x: float | None = None
    y: float | None = None
    metadata: Metadata | None = None

    @property
    def positioned(self) -> bool:
        return self.x is not None and self.y is not None

    def to_wire(self) -> dict[str, Any]:
        return _drop_unset(self.model_dump(mode="json"))


class GraphEdge(BaseModel):
    """A directed relation from a node to a dependency it relies on."""

    id: str
    source: str
    target: str
    label: str | None = None
    weight: float = 1.0
    metadata: Metadata | None = None

    def to_wire(self) -> dict[str, Any]:
        return _drop_unset(self.model_dump(mode="json"))


class CircularDependency(BaseModel):
    """One closed dependency loop.

    ``path`` starts and ends with the same node id. ``nodes`` holds the
    resolved node records in path order (including the closing repeat).
    """

    model_config = ConfigDict(frozen=True)

    nodes: list[GraphNode]
    path: list[str]

    @property
    def labels(self) -> list[str]:
        return [node.label for node in self.nodes]

    @property
    def length(self) -> int:
        """Number of edges in the loop."""
        return max(len(self.path) - 1, 0)


class GraphMetrics(BaseModel):
    """Aggregate structural metrics for a graph.

    Attributes use snake_case; :meth:`to_dict` can emit the camelCase names
    (``nodeCount``, ``avgDependencies``, ...) consumed by renderers.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    node_count: int = 0
    edge_count: int = 0
    avg_dependencies: float = 0.0
    max_dependencies: int = 0
    circular_count: int = 0

    def to_dict(self, *, by_alias: bool = False) -> dict[str, Any]:
        return self.model_dump(by_alias=by_alias)


class LayoutOptions(BaseModel):
    """Canvas geometry shared by both layout algorithms.

    Dimensions are finite and wider than both margins together, so the
    force layout always has a non-empty area to clamp into.

    ``node_spacing`` and ``level_spacing`` only affect the hierarchical
    layout. ``seed`` only affects the force-directed layout.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    width: float = Field(default=1000, gt=2 * CANVAS_MARGIN, allow_inf_nan=False)
    height: float = Field(default=600, gt=2 * CANVAS_MARGIN, allow_inf_nan=False)
    node_spacing: float = Field(default=100, ge=0, allow_inf_nan=False)
    level_spacing: float = Field(default=150, ge=0, allow_inf_nan=False)
    seed: int | None = None
