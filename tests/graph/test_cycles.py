"""Tests for circular dependency detection."""

from __future__ import annotations

import sys

from stategraph.dependency_graph import DependencyGraph
from tests.conftest import add_nodes, build_chain, build_cycle


class TestAcyclic:
    def test_empty_graph(self, graph: DependencyGraph) -> None:
        assert graph.detect_circular_dependencies() == []

    def test_chain(self, graph: DependencyGraph) -> None:
        build_chain(graph, "A", "B", "C", "D")
        assert graph.detect_circular_dependencies() == []

    def test_diamond(self, graph: DependencyGraph) -> None:
        top, left, right, bottom = add_nodes(graph, "top", "left", "right", "bottom")
        graph.add_edge(top.id, left.id)
        graph.add_edge(top.id, right.id)
        graph.add_edge(left.id, bottom.id)
        graph.add_edge(right.id, bottom.id)
        assert graph.detect_circular_dependencies() == []


class TestCycles:
    def test_triangle(self, graph: DependencyGraph) -> None:
        a, b, c = build_cycle(graph, "A", "B", "C")
        cycles = graph.detect_circular_dependencies()
        assert len(cycles) >= 1
        cycle = cycles[0]
        assert cycle.path == [a.id, b.id, c.id, a.id]
        assert cycle.path[0] == cycle.path[-1]
        assert cycle.labels == ["A", "B", "C", "A"]
        assert cycle.nodes[0] is a

    def test_self_loop(self, graph: DependencyGraph) -> None:
        (a,) = add_nodes(graph, "A")
        graph.add_edge(a.id, a.id)
        cycles = graph.detect_circular_dependencies()
        assert [c.path for c in cycles] == [[a.id, a.id]]

    def test_cycle_behind_entry_node(self, graph: DependencyGraph) -> None:
        entry, a, b = add_nodes(graph, "entry", "A", "B")
        graph.add_edge(entry.id, a.id)
        graph.add_edge(a.id, b.id)
        graph.add_edge(b.id, a.id)
        cycles = graph.detect_circular_dependencies()
        assert [c.path for c in cycles] == [[a.id, b.id, a.id]]

    def test_disjoint_cycles(self, graph: DependencyGraph) -> None:
        build_cycle(graph, "A", "B")
        build_cycle(graph, "X", "Y", "Z")
        cycles = graph.detect_circular_dependencies()
        assert sorted(c.length for c in cycles) == [2, 3]

    def test_figure_eight(self, graph: DependencyGraph) -> None:
        a, b, c = add_nodes(graph, "A", "B", "C")
        graph.add_edge(a.id, b.id)
        graph.add_edge(b.id, a.id)
        graph.add_edge(b.id, c.id)
        graph.add_edge(c.id, b.id)
        paths = [c.path for c in graph.detect_circular_dependencies()]
        assert paths == [[a.id, b.id, a.id], [b.id, c.id, b.id]]

    def test_visited_node_not_restarted_as_root(self, graph: DependencyGraph) -> None:
        a, b = build_cycle(graph, "A", "B")
        (late,) = add_nodes(graph, "late")
        graph.add_edge(late.id, a.id)
        assert len(graph.detect_circular_dependencies()) == 1

    def test_parallel_back_edges_report_twice(self, graph: DependencyGraph) -> None:
        a, b = add_nodes(graph, "A", "B")
        graph.add_edge(a.id, b.id)
        graph.add_edge(b.id, a.id)
        graph.add_edge(b.id, a.id)
        paths = [c.path for c in graph.detect_circular_dependencies()]
        assert paths == [[a.id, b.id, a.id], [a.id, b.id, a.id]]

    def test_broken_by_edge_removal(self, graph: DependencyGraph) -> None:
        a, b, c = build_cycle(graph, "A", "B", "C")
        closing = graph.get_outgoing_edges(c.id)[0]
        graph.remove_edge(closing.id)
        assert graph.detect_circular_dependencies() == []


class TestDeepGraphs:
    def test_chain_deeper_than_recursion_limit(self, graph: DependencyGraph) -> None:
        depth = sys.getrecursionlimit() + 500
        nodes = build_cycle(graph, *(f"n{i}" for i in range(depth)))
        cycles = graph.detect_circular_dependencies()
        assert len(cycles) == 1
        assert cycles[0].length == depth
        assert cycles[0].path[0] == nodes[0].id
