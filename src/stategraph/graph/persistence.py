"""JSON snapshot export and import.

Wire shape::

    {"nodes": [{"id", "label", "kind", "x"?, "y"?, "metadata"?}, ...],
     "edges": [{"id", "source", "target", "label"?, "weight", "metadata"?}, ...]}

Import is all-or-nothing: the document is parsed and validated completely
before the store is cleared and repopulated, so a failed import leaves the
current graph untouched.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from pydantic import TypeAdapter, ValidationError

from stategraph.domain.models import GraphEdge, GraphNode
from stategraph.graph.store import GraphStore

logger = logging.getLogger(__name__)

_NODES = TypeAdapter(list[GraphNode])
_EDGES = TypeAdapter(list[GraphEdge])


class GraphImportError(ValueError):
    """Raised when a snapshot cannot be parsed or has the wrong shape."""


def export_graph(store: GraphStore, *, indent: int | None = 2) -> str:
    """Serialize every node and edge, in insertion order, to a JSON string."""
    document = {
        "nodes": [node.to_wire() for node in store.nodes.values()],
        "edges": [edge.to_wire() for edge in store.edges.values()],
    }
    return json.dumps(document, indent=indent)


def import_graph(store: GraphStore, raw: str | bytes) -> dict[str, int]:
    """Replace the contents of *store* with the snapshot in *raw*.

    ``nodes``/``edges`` keys that are missing or not arrays count as empty.
    Edges whose endpoints are not among the imported nodes are dropped.

    Returns:
        Counts of imported nodes and edges, and of dropped edges.

    Raises:
        GraphImportError: Malformed JSON (including undecodable bytes and
            nesting too deep to parse), a non-object document, or an entry
            that does not validate as a node/edge.
    """
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError, RecursionError) as exc:
        msg = f"Failed to import graph: {exc}"
        raise GraphImportError(msg) from exc

    if not isinstance(data, dict):
        msg = f"Failed to import graph: expected a JSON object, got {type(data).__name__}"
        raise GraphImportError(msg)

    raw_nodes = _array_field(data, "nodes")
    raw_edges = _array_field(data, "edges")

    try:
        nodes = _NODES.validate_python(raw_nodes)
        edges = _EDGES.validate_python(raw_edges)
    except ValidationError as exc:
        msg = f"Failed to import graph: {exc}"
        raise GraphImportError(msg) from exc

    node_ids = {node.id for node in nodes}
    kept = [edge for edge in edges if edge.source in node_ids and edge.target in node_ids]
    dropped = len(edges) - len(kept)
    if dropped:
        logger.warning("Dropped %d imported edges with missing endpoints", dropped)

    store.replace(nodes, kept)
    logger.info("Imported graph: %d nodes, %d edges", store.node_count, store.edge_count)
    return {"nodes": store.node_count, "edges": store.edge_count, "dropped_edges": dropped}


def _array_field(data: dict[str, Any], key: str) -> list[Any]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        logger.warning(
            "Ignoring %r in snapshot: expected an array, got %s", key, type(value).__name__
        )
        return []
    return value
