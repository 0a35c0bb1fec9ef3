"""GraphStore — in-memory node/edge repository with id generation and CRUD.

Nodes and edges live in two insertion-ordered dicts keyed by id. Insertion
order is preserved so snapshots export in creation order.

INVARIANT: Every stored edge references two stored nodes. ``add_edge``
refuses dangling endpoints and ``remove_node`` cascades incident edges.

Referential failures return ``None``/``False``; they never raise.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping

from stategraph.domain.ids import EDGE_PREFIX, NODE_PREFIX, IdSequence
from stategraph.domain.models import GraphEdge, GraphNode
from stategraph.domain.types import JsonValue, NodeKind
from stategraph.infrastructure.graph.engine import EdgeRecord, GraphEngine

logger = logging.getLogger(__name__)


class GraphStore:
    """Owns the node and edge maps of one graph instance."""

    def __init__(self) -> None:
        self._nodes: dict[str, GraphNode] = {}
        self._edges: dict[str, GraphEdge] = {}
        self._node_ids = IdSequence(NODE_PREFIX)
        self._edge_ids = IdSequence(EDGE_PREFIX)
        self._revision = 0
        self.engine = GraphEngine(self)

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def revision(self) -> int:
        """Incremented on every structural mutation."""
        return self._revision

    @property
    def nodes(self) -> Mapping[str, GraphNode]:
        return self._nodes

    @property
    def edges(self) -> Mapping[str, GraphEdge]:
        return self._edges

    @property
    def node_count(self) -> int:
        return len(self._nodes)

    @property
    def edge_count(self) -> int:
        return len(self._edges)

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    def __iter__(self) -> Iterator[GraphNode]:
        return iter(self._nodes.values())

    def get_node(self, node_id: str) -> GraphNode | None:
        return self._nodes.get(node_id)

    def get_edge(self, edge_id: str) -> GraphEdge | None:
        return self._edges.get(edge_id)

    def find_nodes(self, label: str) -> list[GraphNode]:
        """Nodes whose label equals *label* exactly."""
        return [node for node in self._nodes.values() if node.label == label]

    def get_nodes_by_kind(self, kind: NodeKind | str) -> list[GraphNode]:
        kind = NodeKind(kind)
        return [node for node in self._nodes.values() if node.kind == kind]

    def get_all_nodes(self) -> list[GraphNode]:
        return list(self._nodes.values())

    def get_all_edges(self) -> list[GraphEdge]:
        return list(self._edges.values())

    # GraphSource protocol (consumed by GraphEngine)

    def node_ids(self) -> Iterable[str]:
        return self._nodes.keys()

    def edge_records(self) -> Iterable[EdgeRecord]:
        for edge in self._edges.values():
            yield edge.id, edge.source, edge.target, edge.weight

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add_node(
        self,
        label: str,
        kind: NodeKind | str,
        metadata: dict[str, JsonValue] | None = None,
    ) -> GraphNode:
        """Create a node with a fresh id and return the stored instance.

        Raises:
            ValueError: If *kind* is not a known :class:`NodeKind`.
            pydantic.ValidationError: If *metadata* is not JSON-serializable.
        """
        kind = NodeKind(kind)
        node = GraphNode(id=self._node_ids.upcoming, label=label, kind=kind, metadata=metadata)
        self._node_ids.next()
        self._nodes[node.id] = node
        self._touch()
        logger.debug("Added node %s (%s %r)", node.id, node.kind, label)
        return node

    def remove_node(self, node_id: str) -> bool:
        """Remove a node and every edge incident to it.

        Returns whether the node existed.
        """
        incident = [
            edge_id
            for edge_id, edge in self._edges.items()
            if edge.source == node_id or edge.target == node_id
        ]
        for edge_id in incident:
            del self._edges[edge_id]

        existed = self._nodes.pop(node_id, None) is not None
        if existed or incident:
            self._touch()
        if existed:
            logger.debug("Removed node %s and %d incident edges", node_id, len(incident))
        return existed

    def add_edge(
        self,
        source_id: str,
        target_id: str,
        label: str | None = None,
        weight: float = 1.0,
        metadata: dict[str, JsonValue] | None = None,
    ) -> GraphEdge | None:
        """Create a directed edge from *source_id* to the dependency *target_id*.

        Returns None, leaving the graph untouched, when either endpoint is
        missing. Parallel edges between the same pair are allowed.
        """
        if source_id not in self._nodes or target_id not in self._nodes:
            logger.debug("Rejected edge %s -> %s: missing endpoint", source_id, target_id)
            return None

        edge = GraphEdge(
            id=self._edge_ids.upcoming,
            source=source_id,
            target=target_id,
            label=label,
            weight=weight,
            metadata=metadata,
        )
        self._edge_ids.next()
        self._edges[edge.id] = edge
        self._touch()
        logger.debug("Added edge %s: %s -> %s", edge.id, source_id, target_id)
        return edge

    def remove_edge(self, edge_id: str) -> bool:
        if self._edges.pop(edge_id, None) is None:
            return False
        self._touch()
        logger.debug("Removed edge %s", edge_id)
        return True

    def clear(self) -> None:
        """Remove every node and edge. Id counters keep counting."""
        self._nodes.clear()
        self._edges.clear()
        self._touch()

    def replace(self, nodes: Iterable[GraphNode], edges: Iterable[GraphEdge]) -> None:
        """Wholesale-replace the graph contents with pre-built records.

        Id counters are advanced past every incoming id so later additions
        never collide with them. Callers are responsible for referential
        integrity of *edges*.
        """
        self._nodes.clear()
        self._edges.clear()
        for node in nodes:
            self._nodes[node.id] = node
            self._node_ids.observe(node.id)
        for edge in edges:
            self._edges[edge.id] = edge
            self._edge_ids.observe(edge.id)
        self._touch()

    def _touch(self) -> None:
        self._revision += 1
