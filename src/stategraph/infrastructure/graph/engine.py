"""GraphEngine — lazy-built NetworkX view over an in-memory graph store.

Built on first access and cached until the source reports a new revision.
Parallel edges are kept (``MultiDiGraph`` keyed by edge id) so degree-based
algorithms see edge multiplicity.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Protocol

import networkx as nx

type _Graph = nx.MultiDiGraph

# (edge_id, source_id, target_id, weight)
type EdgeRecord = tuple[str, str, str, float]


class GraphSource(Protocol):
    """Anything that can enumerate node ids and edge records."""

    @property
    def revision(self) -> int: ...

    def node_ids(self) -> Iterable[str]: ...

    def edge_records(self) -> Iterable[EdgeRecord]: ...


class GraphEngine:
    """Lazy-loading NetworkX engine backed by a :class:`GraphSource`."""

    def __init__(self, source: GraphSource) -> None:
        self._source = source
        self._graph: _Graph | None = None
        self._built_revision = -1

    @property
    def graph(self) -> _Graph:
        """Return the graph, rebuilding when the source changed since the last build."""
        revision = self._source.revision
        if self._graph is None or revision != self._built_revision:
            self._graph = self._build()
            self._built_revision = revision
        return self._graph

    def _build(self) -> _Graph:
        """Build a MultiDiGraph from the source.

        Adds all nodes first so isolated nodes are visible to algorithms.
        """
        g: _Graph = nx.MultiDiGraph()
        g.add_nodes_from(self._source.node_ids())
        for edge_id, source_id, target_id, weight in self._source.edge_records():
            g.add_edge(source_id, target_id, key=edge_id, weight=weight)
        return g

    # ------------------------------------------------------------------
    # Reachability helpers
    # ------------------------------------------------------------------

    def descendants(self, node_id: str) -> set[str]:
        """All nodes reachable from *node_id*, excluding it. Empty if unknown."""
        g = self.graph
        if node_id not in g:
            return set()
        return nx.descendants(g, node_id)

    def ancestors(self, node_id: str) -> set[str]:
        """All nodes that can reach *node_id*, excluding it. Empty if unknown."""
        g = self.graph
        if node_id not in g:
            return set()
        return nx.ancestors(g, node_id)

    def is_acyclic(self) -> bool:
        return nx.is_directed_acyclic_graph(self.graph)

    def find_cycle(self) -> list[str]:
        """Return one cycle as a closed node path, or [] for a DAG."""
        try:
            edges = nx.find_cycle(self.graph, orientation="original")
        except nx.NetworkXNoCycle:
            return []
        path = [edges[0][0]]
        path.extend(edge[1] for edge in edges)
        return path

    def roots(self) -> list[str]:
        """Nodes with no incoming edges, in insertion order."""
        g = self.graph
        return [node for node in g.nodes() if g.in_degree(node) == 0]
