"""Force-directed layout — a Fruchterman-Reingold spring embedder.

Every pair of nodes repels with magnitude ``k**2 / d`` and every edge pulls
its endpoints together with magnitude ``d**2 / k``, where
``k = sqrt(width * height / node_count)`` is the ideal distance. Per
iteration the summed displacement of each node is capped by a temperature
that cools linearly from ``width / 10`` to 0, then positions are clamped to
a 50px margin inside the canvas.

Cost is O(iterations * (N**2 + E)); intended for graphs of a few hundred
nodes. Output depends on the random starting positions: pass a seeded
``random.Random`` (or set ``LayoutOptions.seed``) for reproducible results.
"""

from __future__ import annotations

import logging
import math
import random

from stategraph.domain.models import CANVAS_MARGIN, GraphNode, LayoutOptions
from stategraph.graph.store import GraphStore

logger = logging.getLogger(__name__)


def layout_force_directed(
    store: GraphStore,
    iterations: int = 100,
    options: LayoutOptions | None = None,
    *,
    rng: random.Random | None = None,
) -> None:
    """Run the simulation and write ``x``/``y`` onto every node.

    Args:
        store: Graph to lay out. Empty graphs are left untouched.
        iterations: Number of simulation steps; the only bound on work.
        options: Canvas size (and optional seed).
        rng: Random source for initial positions. Overrides ``options.seed``.
    """
    options = options or LayoutOptions()
    nodes = store.get_all_nodes()
    if not nodes:
        return

    if rng is None:
        rng = random.Random(options.seed)

    width, height = options.width, options.height
    for node in nodes:
        node.x = rng.random() * width
        node.y = rng.random() * height

    if iterations <= 0:
        for node in nodes:
            _clamp(node, width, height)
        return

    k = math.sqrt(width * height / len(nodes))
    edges = [
        (store.nodes[edge.source], store.nodes[edge.target])
        for edge in store.edges.values()
        if edge.source in store and edge.target in store
    ]

    for iteration in range(iterations):
        disp: dict[str, list[float]] = {node.id: [0.0, 0.0] for node in nodes}

        # Repulsion between every pair
        for i, n1 in enumerate(nodes):
            for n2 in nodes[i + 1 :]:
                dx, dy, distance = _delta(n1, n2)
                force = k * k / distance
                fx, fy = dx / distance * force, dy / distance * force
                disp[n1.id][0] -= fx
                disp[n1.id][1] -= fy
                disp[n2.id][0] += fx
                disp[n2.id][1] += fy

        # Attraction along edges
        for source, target in edges:
            dx, dy, distance = _delta(source, target)
            force = distance * distance / k
            fx, fy = dx / distance * force, dy / distance * force
            disp[source.id][0] += fx
            disp[source.id][1] += fy
            disp[target.id][0] -= fx
            disp[target.id][1] -= fy

        temperature = width / 10 * (1 - iteration / iterations)
        for node in nodes:
            ddx, ddy = disp[node.id]
            magnitude = math.hypot(ddx, ddy) or 1.0
            step = min(magnitude, temperature)
            node.x = _coord(node.x) + ddx / magnitude * step
            node.y = _coord(node.y) + ddy / magnitude * step
            _clamp(node, width, height)

    logger.debug(
        "Force layout finished %d iterations over %d nodes, %d edges",
        iterations,
        len(nodes),
        len(edges),
    )


def _coord(value: float | None) -> float:
    return 0.0 if value is None else value


def _delta(a: GraphNode, b: GraphNode) -> tuple[float, float, float]:
    """Vector from *a* to *b* and its length, floored at 1."""
    dx = _coord(b.x) - _coord(a.x)
    dy = _coord(b.y) - _coord(a.y)
    return dx, dy, max(math.hypot(dx, dy), 1.0)


def _clamp(node: GraphNode, width: float, height: float) -> None:
    node.x = max(CANVAS_MARGIN, min(width - CANVAS_MARGIN, _coord(node.x)))
    node.y = max(CANVAS_MARGIN, min(height - CANVAS_MARGIN, _coord(node.y)))
