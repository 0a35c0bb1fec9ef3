"""DependencyGraph — one graph instance with its analysis and layout operations.

The facade a host session owns. It delegates to the store, the query layer,
the cycle detector, the two layouts and the snapshot codec, all of which
operate on its private :class:`GraphStore`.

There is no process-wide default graph: whoever needs a graph constructs one
and passes it along.

Usage::

    graph = DependencyGraph()
    store = graph.add_node("cart", NodeKind.STORE)
    view = graph.add_node("CartView", NodeKind.COMPONENT)
    graph.add_edge(view.id, store.id, label="subscribes")
    graph.layout_hierarchical(width=800)
    payload = graph.export()
"""

from __future__ import annotations

import random
from typing import Any

from stategraph.domain.models import (
    CircularDependency,
    GraphEdge,
    GraphMetrics,
    GraphNode,
    LayoutOptions,
)
from stategraph.domain.types import JsonValue, NodeKind
from stategraph.graph import queries
from stategraph.graph.cycles import detect_circular_dependencies
from stategraph.graph.persistence import export_graph, import_graph
from stategraph.graph.store import GraphStore
from stategraph.layout.force import layout_force_directed
from stategraph.layout.hierarchical import calculate_levels, layout_hierarchical


class DependencyGraph:
    """Directed dependency graph of stores, components, slices and hooks."""

    def __init__(self, store: GraphStore | None = None) -> None:
        self._store = store or GraphStore()

    @property
    def store(self) -> GraphStore:
        return self._store

    def __len__(self) -> int:
        return len(self._store)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._store

    # ------------------------------------------------------------------
    # Store
    # ------------------------------------------------------------------

    def add_node(
        self,
        label: str,
        kind: NodeKind | str,
        metadata: dict[str, JsonValue] | None = None,
    ) -> GraphNode:
        return self._store.add_node(label, kind, metadata)

    def remove_node(self, node_id: str) -> bool:
        return self._store.remove_node(node_id)

    def add_edge(
        self,
        source_id: str,
        target_id: str,
        label: str | None = None,
        weight: float = 1.0,
        metadata: dict[str, JsonValue] | None = None,
    ) -> GraphEdge | None:
        return self._store.add_edge(source_id, target_id, label, weight, metadata)

    def remove_edge(self, edge_id: str) -> bool:
        return self._store.remove_edge(edge_id)

    def get_node(self, node_id: str) -> GraphNode | None:
        return self._store.get_node(node_id)

    def get_edge(self, edge_id: str) -> GraphEdge | None:
        return self._store.get_edge(edge_id)

    def find_nodes(self, label: str) -> list[GraphNode]:
        return self._store.find_nodes(label)

    def get_nodes_by_kind(self, kind: NodeKind | str) -> list[GraphNode]:
        return self._store.get_nodes_by_kind(kind)

    def get_all_nodes(self) -> list[GraphNode]:
        return self._store.get_all_nodes()

    def get_all_edges(self) -> list[GraphEdge]:
        return self._store.get_all_edges()

    def clear(self) -> None:
        self._store.clear()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_outgoing_edges(self, node_id: str) -> list[GraphEdge]:
        return queries.get_outgoing_edges(self._store, node_id)

    def get_incoming_edges(self, node_id: str) -> list[GraphEdge]:
        return queries.get_incoming_edges(self._store, node_id)

    def get_dependencies(self, node_id: str) -> list[GraphNode]:
        return queries.get_dependencies(self._store, node_id)

    def get_dependents(self, node_id: str) -> list[GraphNode]:
        return queries.get_dependents(self._store, node_id)

    def get_transitive_dependencies(self, node_id: str) -> list[GraphNode]:
        return queries.get_transitive_dependencies(self._store, node_id)

    def get_transitive_dependents(self, node_id: str) -> list[GraphNode]:
        return queries.get_transitive_dependents(self._store, node_id)

    def get_metrics(self) -> GraphMetrics:
        return queries.get_metrics(self._store)

    def detect_circular_dependencies(self) -> list[CircularDependency]:
        return detect_circular_dependencies(self._store)

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------

    def calculate_levels(self) -> dict[int, list[str]]:
        return calculate_levels(self._store)

    def layout_hierarchical(
        self, options: LayoutOptions | None = None, **overrides: Any
    ) -> dict[int, list[str]]:
        """Level-based layout. Keyword overrides patch *options*.

        Raises:
            CyclicGraphError: If the graph contains a cycle.
        """
        return layout_hierarchical(self._store, _options(options, overrides))

    def layout_force_directed(
        self,
        iterations: int = 100,
        options: LayoutOptions | None = None,
        *,
        rng: random.Random | None = None,
        **overrides: Any,
    ) -> None:
        layout_force_directed(self._store, iterations, _options(options, overrides), rng=rng)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def export(self, *, indent: int | None = 2) -> str:
        return export_graph(self._store, indent=indent)

    def import_json(self, raw: str | bytes) -> dict[str, int]:
        """Replace this graph with a snapshot.

        Raises:
            GraphImportError: On malformed JSON or an invalid document.
        """
        return import_graph(self._store, raw)


def _options(options: LayoutOptions | None, overrides: dict[str, Any]) -> LayoutOptions:
    base = options or LayoutOptions()
    if not overrides:
        return base
    return LayoutOptions.model_validate({**base.model_dump(), **overrides})
