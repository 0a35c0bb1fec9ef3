"""Tests for the DependencyGraph facade — end-to-end usage."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

import stategraph
from stategraph import DependencyGraph, NodeKind
from stategraph.domain.models import LayoutOptions
from tests.conftest import build_chain


class TestFacade:
    def test_package_exports(self) -> None:
        assert stategraph.DependencyGraph is DependencyGraph
        assert stategraph.__version__

    def test_instances_are_independent(self) -> None:
        first = DependencyGraph()
        second = DependencyGraph()
        first.add_node("cart", NodeKind.STORE)
        assert len(first) == 1
        assert len(second) == 0
        assert second.add_node("user", NodeKind.STORE).id == "node_0"

    def test_referential_integrity(self, graph: DependencyGraph) -> None:
        a, b, c = build_chain(graph, "A", "B", "C")
        for edge in graph.get_all_edges():
            assert graph.get_node(edge.source) is not None
            assert graph.get_node(edge.target) is not None
        graph.remove_node(c.id)
        assert all(c.id not in (e.source, e.target) for e in graph.get_all_edges())

    def test_typical_session(self, graph: DependencyGraph) -> None:
        cart = graph.add_node("cart", NodeKind.STORE)
        items = graph.add_node("cart.items", NodeKind.SLICE)
        hook = graph.add_node("useCartItems", NodeKind.HOOK)
        view = graph.add_node("CartView", NodeKind.COMPONENT)
        graph.add_edge(cart.id, items.id, "slice")
        graph.add_edge(hook.id, items.id, "selects")
        graph.add_edge(view.id, hook.id, "calls")

        assert graph.get_nodes_by_kind("hook") == [hook]
        assert {n.id for n in graph.get_transitive_dependencies(view.id)} == {hook.id, items.id}
        assert graph.detect_circular_dependencies() == []

        levels = graph.layout_hierarchical()
        assert levels[0] == [cart.id, view.id]
        assert items.y == 300

        payload = json.loads(graph.export())
        assert len(payload["nodes"]) == 4
        assert all("x" in n for n in payload["nodes"])

    def test_layout_options_with_overrides(self, graph: DependencyGraph) -> None:
        (a,) = build_chain(graph, "A")
        graph.layout_hierarchical(LayoutOptions(width=200), width=400)
        assert a.x == 200

    def test_unknown_override_rejected(self, graph: DependencyGraph) -> None:
        build_chain(graph, "A")
        with pytest.raises(ValidationError):
            graph.layout_hierarchical(spacing=3)

    def test_clear(self, graph: DependencyGraph) -> None:
        build_chain(graph, "A", "B")
        graph.clear()
        assert graph.get_all_nodes() == []
        assert graph.get_all_edges() == []
        assert graph.get_metrics().node_count == 0
