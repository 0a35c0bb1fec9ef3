"""GraphService — analysis, layout and snapshot operations for hosts.

Wraps a :class:`DependencyGraph` so that editor panels and debug-session
bridges get uniform :class:`ServiceResult` envelopes: expected failures
(unknown node, cyclic graph, corrupt snapshot) come back as ``ok=False``
with an error code instead of an exception.

Error codes: ``NOT_FOUND``, ``CYCLIC_GRAPH``, ``UNKNOWN_LAYOUT``,
``INVALID_OPTIONS``, ``SNAPSHOT_MISSING``, ``IMPORT_FAILED``.
"""

from __future__ import annotations

import random
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from stategraph.domain.models import CircularDependency, GraphNode
from stategraph.graph.persistence import GraphImportError
from stategraph.infrastructure.snapshot import read_snapshot, write_snapshot
from stategraph.layout.hierarchical import CyclicGraphError
from stategraph.services.base import BaseService
from stategraph.services.result import ServiceResult
from stategraph.services.telemetry import trace_span, traced

LAYOUTS = ("hierarchical", "force")


def _node_item(node: GraphNode) -> dict[str, Any]:
    return {"id": node.id, "label": node.label, "kind": str(node.kind)}


def _cycle_item(cycle: CircularDependency) -> dict[str, Any]:
    return {"path": cycle.path, "labels": cycle.labels, "length": cycle.length}


class GraphService(BaseService):
    """Host-facing operations on one graph."""

    # ------------------------------------------------------------------
    # view
    # ------------------------------------------------------------------

    @traced
    def view(self) -> ServiceResult:
        """Every node (with coordinates once laid out) and every edge."""
        nodes = self._graph.get_all_nodes()
        edges = self._graph.get_all_edges()
        return ServiceResult(
            ok=True,
            op="view",
            data={
                "nodes": [node.to_wire() for node in nodes],
                "edges": [edge.to_wire() for edge in edges],
            },
            meta={"positioned": all(node.positioned for node in nodes)},
        )

    # ------------------------------------------------------------------
    # metrics / cycles / analyze
    # ------------------------------------------------------------------

    @traced
    def metrics(self) -> ServiceResult:
        """Aggregate metrics, keyed by the camelCase wire names."""
        with trace_span("metrics") as span:
            report = self._graph.get_metrics()
            if span:
                span.annotate("nodes", report.node_count)
                span.annotate("edges", report.edge_count)
        return ServiceResult(ok=True, op="metrics", data=report.to_dict(by_alias=True))

    @traced
    def cycles(self) -> ServiceResult:
        """Circular dependencies, one entry per detected loop."""
        with trace_span("detect_cycles"):
            found = self._graph.detect_circular_dependencies()
        return ServiceResult(
            ok=True,
            op="cycles",
            data={"count": len(found), "cycles": [_cycle_item(c) for c in found]},
        )

    @traced
    def analyze(self) -> ServiceResult:
        """Metrics and cycles in one payload, for diagnostic overlays."""
        with trace_span("detect_cycles"):
            found = self._graph.detect_circular_dependencies()
        with trace_span("metrics"):
            report = self._graph.get_metrics()

        warnings: list[str] = []
        if found:
            warnings.append(f"{len(found)} circular dependencies detected")
        return ServiceResult(
            ok=True,
            op="analyze",
            data={
                "metrics": report.to_dict(by_alias=True),
                "cycles": [_cycle_item(c) for c in found],
                "acyclic": not found,
            },
            warnings=warnings,
        )

    # ------------------------------------------------------------------
    # dependencies / dependents
    # ------------------------------------------------------------------

    @traced
    def dependencies(self, node_id: str, *, transitive: bool = False) -> ServiceResult:
        """Nodes *node_id* depends on, directly or transitively."""
        op = "dependencies"
        if node_id not in self._graph:
            return self._failure(op, "NOT_FOUND", f"Node '{node_id}' not found in graph")

        if transitive:
            found = self._graph.get_transitive_dependencies(node_id)
        else:
            found = self._graph.get_dependencies(node_id)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "node_id": node_id,
                "transitive": transitive,
                "count": len(found),
                "items": [_node_item(n) for n in found],
            },
        )

    @traced
    def dependents(self, node_id: str, *, transitive: bool = False) -> ServiceResult:
        """Nodes that depend on *node_id*, directly or transitively."""
        op = "dependents"
        if node_id not in self._graph:
            return self._failure(op, "NOT_FOUND", f"Node '{node_id}' not found in graph")

        if transitive:
            found = self._graph.get_transitive_dependents(node_id)
        else:
            found = self._graph.get_dependents(node_id)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "node_id": node_id,
                "transitive": transitive,
                "count": len(found),
                "items": [_node_item(n) for n in found],
            },
        )

    # ------------------------------------------------------------------
    # layout
    # ------------------------------------------------------------------

    @traced
    def layout(
        self,
        algorithm: str = "hierarchical",
        *,
        iterations: int | None = None,
        rng: random.Random | None = None,
        **overrides: Any,
    ) -> ServiceResult:
        """Run a layout with configured defaults, patched by *overrides*.

        Args:
            algorithm: ``"hierarchical"`` or ``"force"``.
            iterations: Force layout step count (defaults to settings).
            rng: Random source for the force layout.
            overrides: ``width``, ``height``, ``node_spacing``,
                ``level_spacing`` or ``seed``.
        """
        op = "layout"
        if algorithm not in LAYOUTS:
            return self._failure(
                op,
                "UNKNOWN_LAYOUT",
                f"Unknown layout algorithm '{algorithm}'",
                expected=list(LAYOUTS),
            )

        try:
            with trace_span(algorithm) as span:
                if algorithm == "hierarchical":
                    options = self._settings.hierarchical.to_options()
                    levels = self._graph.layout_hierarchical(options, **overrides)
                    extra: dict[str, Any] = {"levels": len(levels)}
                else:
                    options = self._settings.force.to_options()
                    steps = self._settings.force.iterations if iterations is None else iterations
                    self._graph.layout_force_directed(steps, options, rng=rng, **overrides)
                    extra = {"iterations": steps}
                if span:
                    span.annotate("nodes", len(self._graph))
        except CyclicGraphError as exc:
            return self._failure(op, "CYCLIC_GRAPH", str(exc), cycle=exc.cycle)
        except ValidationError as exc:
            return self._failure(op, "INVALID_OPTIONS", f"Invalid layout options: {exc}")

        positions = {
            node.id: {"x": node.x, "y": node.y} for node in self._graph.get_all_nodes()
        }
        return ServiceResult(
            ok=True,
            op=op,
            data={"algorithm": algorithm, "count": len(positions), "positions": positions, **extra},
        )

    # ------------------------------------------------------------------
    # snapshots
    # ------------------------------------------------------------------

    def _resolve_snapshot(self, path: str | Path | None) -> Path:
        return Path(path) if path is not None else self._settings.snapshot_path()

    @traced
    def save_snapshot(self, path: str | Path | None = None) -> ServiceResult:
        """Export the graph to a JSON snapshot file."""
        target = self._resolve_snapshot(path)
        with trace_span("export"):
            text = self._graph.export(indent=self._settings.snapshot.indent)
        with trace_span("write"):
            written = write_snapshot(target, text)
        return ServiceResult(
            ok=True,
            op="save_snapshot",
            data={
                "path": str(written),
                "nodes": len(self._graph),
                "edges": len(self._graph.get_all_edges()),
            },
        )

    @traced
    def load_snapshot(self, path: str | Path | None = None) -> ServiceResult:
        """Replace the graph with the contents of a JSON snapshot file."""
        op = "load_snapshot"
        source = self._resolve_snapshot(path)
        if not source.is_file():
            return self._failure(op, "SNAPSHOT_MISSING", f"Snapshot not found: {source}")

        try:
            with trace_span("read"):
                text = read_snapshot(source)
            with trace_span("import"):
                counts = self._graph.import_json(text)
        except GraphImportError as exc:
            return self._failure(op, "IMPORT_FAILED", str(exc), path=str(source))
        except (OSError, UnicodeDecodeError) as exc:
            msg = f"Failed to read snapshot {source}: {exc}"
            return self._failure(op, "IMPORT_FAILED", msg, path=str(source))

        warnings: list[str] = []
        if counts["dropped_edges"]:
            warnings.append(f"Dropped {counts['dropped_edges']} edges with missing endpoints")
        return ServiceResult(
            ok=True,
            op=op,
            data={"path": str(source), "nodes": counts["nodes"], "edges": counts["edges"]},
            warnings=warnings,
        )
