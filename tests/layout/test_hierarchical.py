"""Tests for the hierarchical (level-based) layout."""

from __future__ import annotations

import pytest

from stategraph.dependency_graph import DependencyGraph
from stategraph.domain.models import LayoutOptions
from stategraph.layout.hierarchical import CyclicGraphError
from tests.conftest import add_nodes, build_chain, build_cycle


class TestCalculateLevels:
    def test_chain(self, graph: DependencyGraph) -> None:
        a, b, c = build_chain(graph, "A", "B", "C")
        assert graph.calculate_levels() == {0: [a.id], 1: [b.id], 2: [c.id]}

    def test_isolated_nodes_are_roots(self, graph: DependencyGraph) -> None:
        a, b = add_nodes(graph, "A", "B")
        assert graph.calculate_levels() == {0: [a.id, b.id]}

    def test_longest_path_wins(self, graph: DependencyGraph) -> None:
        # root -> leaf directly and via mid: leaf sits below mid.
        root, mid, leaf = add_nodes(graph, "root", "mid", "leaf")
        graph.add_edge(root.id, leaf.id)
        graph.add_edge(root.id, mid.id)
        graph.add_edge(mid.id, leaf.id)
        assert graph.calculate_levels() == {0: [root.id], 1: [mid.id], 2: [leaf.id]}

    def test_node_moves_between_buckets(self, graph: DependencyGraph) -> None:
        a, b, c, d = add_nodes(graph, "A", "B", "C", "D")
        graph.add_edge(a.id, d.id)
        graph.add_edge(a.id, b.id)
        graph.add_edge(b.id, c.id)
        graph.add_edge(c.id, d.id)
        levels = graph.calculate_levels()
        assert levels[3] == [d.id]
        assert d.id not in levels[1]

    def test_empty_graph(self, graph: DependencyGraph) -> None:
        assert graph.calculate_levels() == {}

    def test_cycle_rejected(self, graph: DependencyGraph) -> None:
        a, b, c = build_cycle(graph, "A", "B", "C")
        with pytest.raises(CyclicGraphError) as excinfo:
            graph.calculate_levels()
        cycle = excinfo.value.cycle
        assert cycle[0] == cycle[-1]
        assert set(cycle) == {a.id, b.id, c.id}


class TestLayoutHierarchical:
    def test_chain_y_strictly_increasing(self, graph: DependencyGraph) -> None:
        nodes = build_chain(graph, "A", "B", "C", "D")
        graph.layout_hierarchical()
        ys = [n.y for n in nodes]
        assert ys == [0, 150, 300, 450]

    def test_root_at_level_zero(self, graph: DependencyGraph) -> None:
        root, child = build_chain(graph, "root", "child")
        graph.layout_hierarchical(level_spacing=80)
        assert root.y == 0
        assert child.y == 80

    def test_row_centered(self, graph: DependencyGraph) -> None:
        a, b, c = add_nodes(graph, "A", "B", "C")
        graph.layout_hierarchical(LayoutOptions(width=1000, node_spacing=100))
        assert [n.x for n in (a, b, c)] == [400, 500, 600]

    def test_single_node_centered(self, graph: DependencyGraph) -> None:
        (a,) = add_nodes(graph, "A")
        graph.layout_hierarchical(width=640)
        assert (a.x, a.y) == (320, 0)

    def test_every_node_positioned(self, graph: DependencyGraph) -> None:
        build_chain(graph, "A", "B", "C")
        add_nodes(graph, "lone")
        graph.layout_hierarchical()
        assert all(n.positioned for n in graph.get_all_nodes())

    def test_returns_levels(self, graph: DependencyGraph) -> None:
        a, b = build_chain(graph, "A", "B")
        assert graph.layout_hierarchical() == {0: [a.id], 1: [b.id]}

    def test_cyclic_graph_not_mutated(self, graph: DependencyGraph) -> None:
        nodes = build_cycle(graph, "A", "B")
        with pytest.raises(CyclicGraphError):
            graph.layout_hierarchical()
        assert all(n.x is None and n.y is None for n in nodes)

    def test_cyclic_error_is_value_error(self, graph: DependencyGraph) -> None:
        build_cycle(graph, "A", "B")
        with pytest.raises(ValueError, match="acyclic"):
            graph.layout_hierarchical()
