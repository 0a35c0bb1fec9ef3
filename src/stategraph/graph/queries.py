"""Query layer — dependency lookups, transitive closure, aggregate metrics.

An edge points from a node toward what it depends on, so a node's
*dependencies* are the targets of its outgoing edges and its *dependents*
are the sources of its incoming edges.

Direct lookups are linear scans over the edge map in insertion order.
Closures go through the store's NetworkX engine.
"""

from __future__ import annotations

from collections import Counter

from stategraph.domain.models import GraphEdge, GraphMetrics, GraphNode
from stategraph.graph.store import GraphStore


def get_outgoing_edges(store: GraphStore, node_id: str) -> list[GraphEdge]:
    return [edge for edge in store.edges.values() if edge.source == node_id]


def get_incoming_edges(store: GraphStore, node_id: str) -> list[GraphEdge]:
    return [edge for edge in store.edges.values() if edge.target == node_id]


def get_dependencies(store: GraphStore, node_id: str) -> list[GraphNode]:
    """Nodes one outgoing edge away from *node_id*.

    One entry per edge: a target reached by parallel edges appears once per
    edge.
    """
    return _resolve(store, [edge.target for edge in get_outgoing_edges(store, node_id)])


def get_dependents(store: GraphStore, node_id: str) -> list[GraphNode]:
    """Nodes with an outgoing edge into *node_id* (one entry per edge)."""
    return _resolve(store, [edge.source for edge in get_incoming_edges(store, node_id)])


def get_transitive_dependencies(store: GraphStore, node_id: str) -> list[GraphNode]:
    """Every node reachable from *node_id* via outgoing edges, excluding itself.

    The result is a set; it is returned in node insertion order only for
    stable output.
    """
    reachable = store.engine.descendants(node_id)
    return [node for node in store if node.id in reachable]


def get_transitive_dependents(store: GraphStore, node_id: str) -> list[GraphNode]:
    """Every node that can reach *node_id*, excluding itself."""
    reaching = store.engine.ancestors(node_id)
    return [node for node in store if node.id in reaching]


def find_roots(store: GraphStore) -> list[GraphNode]:
    """Nodes with no incoming edge, in insertion order."""
    return [store.nodes[node_id] for node_id in store.engine.roots()]


def is_acyclic(store: GraphStore) -> bool:
    return store.engine.is_acyclic()


def get_metrics(store: GraphStore) -> GraphMetrics:
    """Compute node/edge counts, out-degree statistics and the cycle count.

    ``avg_dependencies`` is total out-degree divided by node count (0.0 for
    an empty graph). ``circular_count`` is the number of cycle reports from
    :func:`stategraph.graph.cycles.detect_circular_dependencies`.
    """
    from stategraph.graph.cycles import detect_circular_dependencies

    node_count = store.node_count
    if node_count == 0:
        return GraphMetrics(edge_count=store.edge_count)

    out_degree: Counter[str] = Counter(edge.source for edge in store.edges.values())
    degrees = [out_degree.get(node_id, 0) for node_id in store.nodes]

    return GraphMetrics(
        node_count=node_count,
        edge_count=store.edge_count,
        avg_dependencies=sum(degrees) / node_count,
        max_dependencies=max(degrees),
        circular_count=len(detect_circular_dependencies(store)),
    )


def dependency_map(store: GraphStore) -> dict[str, list[str]]:
    """Map each node to its dependency ids, one per outgoing edge, in edge order.

    Nodes without outgoing edges are absent from the map.
    """
    adjacency: dict[str, list[str]] = {}
    for edge in store.edges.values():
        if edge.target in store:
            adjacency.setdefault(edge.source, []).append(edge.target)
    return adjacency


def _resolve(store: GraphStore, node_ids: list[str]) -> list[GraphNode]:
    resolved: list[GraphNode] = []
    for node_id in node_ids:
        node = store.get_node(node_id)
        if node is not None:
            resolved.append(node)
    return resolved
