"""Hierarchical layout — longest-path levels, then row placement.

Phase 1 assigns each node the length of the longest path from any root
(node without incoming edges). Phase 2 lays every level out as one row:
nodes spaced by ``node_spacing`` and centered in ``width``, rows stacked
``level_spacing`` apart.

The relaxation in phase 1 only terminates on acyclic graphs, so cyclic input
is rejected up front with :class:`CyclicGraphError`.
"""

from __future__ import annotations

import logging
from collections import deque

from stategraph.domain.models import LayoutOptions
from stategraph.graph.queries import dependency_map, find_roots
from stategraph.graph.store import GraphStore

logger = logging.getLogger(__name__)


class CyclicGraphError(ValueError):
    """Raised when a level-based layout is requested for a graph with a cycle."""

    def __init__(self, cycle: list[str]) -> None:
        self.cycle = cycle
        path = " -> ".join(cycle)
        super().__init__(f"Hierarchical layout requires an acyclic graph; found cycle {path}")


def calculate_levels(store: GraphStore) -> dict[int, list[str]]:
    """Group node ids by longest root-to-node path length.

    Roots start at level 0. Each dequeued node pushes its dependencies to
    ``max(their level, its level + 1)``; a node whose level grows moves to
    the new bucket and is queued again.

    Raises:
        CyclicGraphError: If the graph contains a cycle.
    """
    _require_acyclic(store)

    adjacency = dependency_map(store)
    levels: dict[int, list[str]] = {}
    node_level: dict[str, int] = {}

    roots = [node.id for node in find_roots(store)]
    for root in roots:
        node_level[root] = 0
        levels.setdefault(0, []).append(root)

    queue = deque(roots)
    while queue:
        node_id = queue.popleft()
        next_level = node_level[node_id] + 1
        for dep in adjacency.get(node_id, ()):
            current = node_level.get(dep, -1)
            if next_level <= current:
                continue
            if current >= 0:
                levels[current].remove(dep)
            node_level[dep] = next_level
            levels.setdefault(next_level, []).append(dep)
            queue.append(dep)

    return {level: ids for level, ids in sorted(levels.items()) if ids}


def layout_hierarchical(
    store: GraphStore, options: LayoutOptions | None = None
) -> dict[int, list[str]]:
    """Assign ``x``/``y`` to every node by level and return the levels.

    Raises:
        CyclicGraphError: If the graph contains a cycle. No node is moved.
    """
    options = options or LayoutOptions()
    levels = calculate_levels(store)

    for level, node_ids in levels.items():
        y = level * options.level_spacing
        total_width = (len(node_ids) - 1) * options.node_spacing
        start_x = (options.width - total_width) / 2
        for index, node_id in enumerate(node_ids):
            node = store.get_node(node_id)
            if node is None:
                continue
            node.x = start_x + index * options.node_spacing
            node.y = y

    logger.debug("Hierarchical layout placed %d nodes on %d levels", store.node_count, len(levels))
    return levels


def _require_acyclic(store: GraphStore) -> None:
    if store.engine.is_acyclic():
        return
    raise CyclicGraphError(store.engine.find_cycle())
