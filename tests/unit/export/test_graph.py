from __future__ import annotations

from chatterbook.export.graph import MessageGraph, build_graph, find_entry_point
from chatterbook.export.walker import BranchPolicy
from tests.conftest import hello_mapping, root_node, text_node


class TestBuildGraph:
    def test_indexes_by_node_id(self):
        graph = build_graph(hello_mapping())
        assert set(graph.nodes) == {"root", "m1", "m2"}
        assert all(node.id == key for key, node in graph.nodes.items())
        assert graph.dropped == 0

    def test_uses_node_id_not_mapping_key(self):
        graph = build_graph({"some-key": root_node("real-id", [])})
        assert "real-id" in graph
        assert "some-key" not in graph

    def test_counts_malformed_nodes(self):
        mapping = hello_mapping()
        mapping["bad"] = {"id": "bad", "parent": "m2", "message": {"author": {}}}
        mapping["worse"] = ["not", "a", "node"]
        graph = build_graph(mapping)
        assert len(graph) == 3
        assert graph.dropped == 2
        assert "bad" not in graph

    def test_empty_or_missing_mapping(self):
        assert len(build_graph(None)) == 0
        assert len(build_graph({})) == 0


class TestFindEntryPoint:
    def test_last_child_by_default(self):
        graph = build_graph(
            {
                "root": root_node("root", ["a", "b"]),
                "a": text_node("a", "root", [], "first"),
                "b": text_node("b", "root", [], "second"),
            }
        )
        assert find_entry_point(graph) == "b"

    def test_first_child_policy(self):
        graph = build_graph(
            {
                "root": root_node("root", ["a", "b"]),
                "a": text_node("a", "root", [], "first"),
                "b": text_node("b", "root", [], "second"),
            }
        )
        assert find_entry_point(graph, BranchPolicy.FIRST) == "a"

    def test_single_child(self):
        assert find_entry_point(build_graph(hello_mapping())) == "m1"

    def test_no_parentless_node(self):
        graph = build_graph(
            {"m1": text_node("m1", "ghost", [], "orphan")},
        )
        assert find_entry_point(graph) is None

    def test_root_without_children(self):
        graph = build_graph({"root": root_node("root", [])})
        assert find_entry_point(graph) is None

    def test_empty_graph(self):
        assert find_entry_point(MessageGraph()) is None
