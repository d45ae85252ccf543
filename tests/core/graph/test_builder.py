"""Tests for graph construction from manifests.

Covers node creation, edge resolution, placeholder nodes for undeclared
targets, edge de-duplication and conflicting declarations.
"""

from __future__ import annotations

import pytest

from repodeps.core.graph import EdgeColor, NodeColor, build_graph
from repodeps.core.manifest import ManifestStore, Publish
from repodeps.exceptions import ConfigurationError

from tests.helpers import graph_of, make_manifest, path_dep, registry_dep


class TestNodes:

    def test_one_node_per_manifest(self) -> None:
        g = graph_of(make_manifest("a"), make_manifest("b"), make_manifest("c"))
        assert g.node_count == 3
        assert [n.name for n in g.nodes] == ["a", "b", "c"]

    def test_node_keeps_manifest(self) -> None:
        record = make_manifest("a", repository="core")
        g = graph_of(record)
        node = g.get_node("a")
        assert node is not None
        assert node.manifest is record
        assert node.repository == "core"
        assert not node.is_placeholder

    def test_node_colors(self) -> None:
        g = graph_of(
            make_manifest("pub", Publish.public()),
            make_manifest("priv", Publish.restricted("internal")),
            make_manifest("local", Publish.unpublished()),
        )
        assert g.get_node("pub").color is NodeColor.GREEN
        assert g.get_node("priv").color is NodeColor.BLACK
        assert g.get_node("local").color is NodeColor.BLUE

    def test_empty_input(self) -> None:
        g = build_graph({})
        assert g.node_count == 0
        assert g.edge_count == 0


class TestEdges:

    def test_resolved_edge(self) -> None:
        g = graph_of(make_manifest("a", deps=[registry_dep("b")]), make_manifest("b"))
        edge = g.get_edge("a", "b")
        assert edge is not None
        assert edge.color is EdgeColor.BLACK
        assert g.successors("a") == ["b"]

    def test_path_edge_is_blue(self) -> None:
        g = graph_of(make_manifest("a", deps=[path_dep("b")]), make_manifest("b"))
        assert g.get_edge("a", "b").color is EdgeColor.BLUE

    def test_undeclared_target_becomes_placeholder(self) -> None:
        g = graph_of(make_manifest("a", deps=[registry_dep("serde")]))
        node = g.get_node("serde")
        assert node is not None
        assert node.is_placeholder
        assert node.color is NodeColor.UNCLASSIFIED
        assert g.get_edge("a", "serde") is not None

    def test_placeholder_is_shared(self) -> None:
        g = graph_of(
            make_manifest("a", deps=[registry_dep("serde")]),
            make_manifest("b", deps=[registry_dep("serde")]),
        )
        assert g.node_count == 3
        assert g.edge_count == 2

    def test_exclude_external_drops_target_and_edge(self) -> None:
        g = graph_of(
            make_manifest("a", deps=[registry_dep("serde"), registry_dep("b")]),
            make_manifest("b"),
            include_external=False,
        )
        assert g.get_node("serde") is None
        assert [e.key for e in g.edges] == [("a", "b")]

    def test_edges_never_dangle(self) -> None:
        g = graph_of(
            make_manifest("a", deps=[registry_dep("x"), path_dep("b")]),
            make_manifest("b", deps=[path_dep("a"), registry_dep("y")]),
        )
        for edge in g.edges:
            assert edge.source in g
            assert edge.target in g


class TestDeduplication:

    def test_identical_declarations_make_one_edge(self) -> None:
        g = graph_of(
            make_manifest("a", deps=[registry_dep("b"), registry_dep("b")]),
            make_manifest("b"),
        )
        assert g.edge_count == 1
        assert g.conflicting_declarations == []

    def test_first_declaration_wins(self) -> None:
        g = graph_of(
            make_manifest("a", deps=[path_dep("b"), registry_dep("b")]),
            make_manifest("b"),
        )
        assert g.edge_count == 1
        assert g.get_edge("a", "b").color is EdgeColor.BLUE

    def test_differing_source_is_recorded(self) -> None:
        g = graph_of(
            make_manifest("a", deps=[path_dep("b"), registry_dep("b")]),
            make_manifest("b"),
        )
        (conflict,) = g.conflicting_declarations
        assert conflict.edge.key == ("a", "b")
        assert conflict.declaration == registry_dep("b")

    def test_repeated_conflict_recorded_once(self) -> None:
        g = graph_of(
            make_manifest("a", deps=[path_dep("b"), registry_dep("b"), registry_dep("b")]),
            make_manifest("b"),
        )
        assert len(g.conflicting_declarations) == 1


class TestIdentity:

    def test_duplicate_manifests_raise(self) -> None:
        with pytest.raises(ConfigurationError):
            build_graph([make_manifest("a", repository="x"), make_manifest("a", repository="y")])

    def test_mismatched_mapping_key_raises(self) -> None:
        with pytest.raises(ConfigurationError):
            build_graph({"a": make_manifest("b")})

    def test_accepts_manifest_store(self) -> None:
        store = ManifestStore.from_records([make_manifest("a")])
        assert build_graph(store).node_count == 1

    def test_accepts_plain_mapping(self) -> None:
        assert build_graph({"a": make_manifest("a")}).node_count == 1
