"""Circular dependency detection.

Depth-first search with a visited set and a recursion stack. Roots are tried
in node insertion order; a node already reached from an earlier root is never
restarted as a root. Meeting a node that is still on the recursion stack
closes a cycle: the current path is sliced from that node's position and the
node is appended again, so every reported path starts and ends on the same id.

The traversal keeps its own frame stack instead of recursing, so graph depth
is not bounded by the interpreter recursion limit.

Reports are not deduplicated. Each back edge met during the walk produces one
report, so a cycle reachable through several back edges (or a doubled
self-loop) is reported more than once.
"""

from __future__ import annotations

from collections.abc import Iterator

from stategraph.domain.models import CircularDependency
from stategraph.graph.queries import dependency_map
from stategraph.graph.store import GraphStore


def detect_circular_dependencies(store: GraphStore) -> list[CircularDependency]:
    """Return every cycle closed by a back edge during the DFS."""
    adjacency = dependency_map(store)
    cycles: list[CircularDependency] = []

    visited: set[str] = set()
    path: list[str] = []
    position: dict[str, int] = {}  # node -> index in path, for nodes on the stack

    def enter(node_id: str) -> tuple[str, Iterator[str]]:
        visited.add(node_id)
        position[node_id] = len(path)
        path.append(node_id)
        return node_id, iter(adjacency.get(node_id, ()))

    for root in list(store.nodes):
        if root in visited:
            continue

        frames = [enter(root)]
        while frames:
            node_id, pending = frames[-1]
            for dep in pending:
                if dep not in visited:
                    frames.append(enter(dep))
                    break
                if dep in position:
                    cycle_path = [*path[position[dep] :], dep]
                    cycles.append(_report(store, cycle_path))
            else:
                frames.pop()
                path.pop()
                del position[node_id]

    return cycles


def _report(store: GraphStore, cycle_path: list[str]) -> CircularDependency:
    nodes = [node for node in map(store.get_node, cycle_path) if node is not None]
    return CircularDependency(nodes=nodes, path=cycle_path)
