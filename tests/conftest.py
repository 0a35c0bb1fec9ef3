"""Shared pytest fixtures and test helpers for stategraph tests."""

from __future__ import annotations

from collections.abc import Generator
from pathlib import Path

import pytest

from stategraph.dependency_graph import DependencyGraph
from stategraph.domain.models import GraphNode
from stategraph.domain.types import NodeKind
from stategraph.graph.store import GraphStore
from stategraph.services.telemetry import _current_span, disable_telemetry


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep stray STATEGRAPH_* env vars and stategraph.toml files out of tests."""
    import os

    for key in list(os.environ):
        if key.startswith("STATEGRAPH_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def _reset_telemetry() -> Generator[None]:
    yield
    disable_telemetry()
    _current_span.set(None)


@pytest.fixture
def store() -> GraphStore:
    return GraphStore()


@pytest.fixture
def graph() -> DependencyGraph:
    return DependencyGraph()


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def add_nodes(
    graph: DependencyGraph, *labels: str, kind: NodeKind = NodeKind.STORE
) -> list[GraphNode]:
    """Add one node per label and return them in order."""
    return [graph.add_node(label, kind) for label in labels]


def build_chain(graph: DependencyGraph, *labels: str) -> list[GraphNode]:
    """Create a chain: labels[0] -> labels[1] -> ... (each depends on the next)."""
    nodes = add_nodes(graph, *labels)
    for source, target in zip(nodes, nodes[1:], strict=False):
        assert graph.add_edge(source.id, target.id) is not None
    return nodes


def build_cycle(graph: DependencyGraph, *labels: str) -> list[GraphNode]:
    """Create a closed loop over *labels* (last node depends on the first)."""
    nodes = build_chain(graph, *labels)
    assert graph.add_edge(nodes[-1].id, nodes[0].id) is not None
    return nodes
