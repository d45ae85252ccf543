"""Dependency graph data structure: nodes, edges and conflicting declarations.

The graph has a single writer (the builder) and is only read afterwards
by the lint engine and the renderer. Cycles are allowed; dangling edges
are not.
"""

from __future__ import annotations

from dataclasses import dataclass

from repodeps.core.graph.classifier import EdgeColor, NodeColor
from repodeps.core.manifest.models import DependencyDeclaration, ManifestRecord


# ---------------------------------------------------------------------------
# GraphNode / GraphEdge: Vertices and arcs of the graph
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class GraphNode:
    """A package in the graph.

    Attributes:
        name: Package name, the node key.
        color: Classification color.
        manifest: The manifest this node was built from, or None for a
            placeholder standing in for an undeclared dependency target.
    """

    name: str
    color: NodeColor
    manifest: ManifestRecord | None = None

    @property
    def is_placeholder(self) -> bool:
        return self.manifest is None

    @property
    def repository(self) -> str | None:
        return self.manifest.repository if self.manifest else None


@dataclass(frozen=True)
class GraphEdge:
    """A dependency from ``source`` to ``target``, materialized from one declaration."""

    source: str
    target: str
    color: EdgeColor
    declaration: DependencyDeclaration

    @property
    def key(self) -> tuple[str, str]:
        return (self.source, self.target)


@dataclass(frozen=True)
class ConflictingDeclaration:
    """A later declaration of an existing edge with a different source kind.

    Attributes:
        edge: The edge as rendered (first declaration wins).
        declaration: The later declaration that disagrees with it.
    """

    edge: GraphEdge
    declaration: DependencyDeclaration


# ---------------------------------------------------------------------------
# DependencyGraph
# ---------------------------------------------------------------------------


class DependencyGraph:
    """Directed package dependency graph built in one pass.

    Iteration helpers (``nodes``, ``edges``, ``successors``) always return
    sorted lists so every consumer sees the same order.

    Thread safety: This class is NOT thread-safe. It is written once by the
    builder and read-only afterwards.
    """

    def __init__(self) -> None:
        self._nodes: dict[str, GraphNode] = {}
        self._edges: dict[tuple[str, str], GraphEdge] = {}
        self._adjacency: dict[str, set[str]] = {}
        self._conflicts: list[ConflictingDeclaration] = []

    @property
    def node_count(self) -> int:
        return len(self._nodes)

    @property
    def edge_count(self) -> int:
        return len(self._edges)

    @property
    def nodes(self) -> list[GraphNode]:
        """All nodes, sorted by name."""
        return [self._nodes[name] for name in sorted(self._nodes)]

    @property
    def edges(self) -> list[GraphEdge]:
        """All edges, sorted by (source, target)."""
        return [self._edges[key] for key in sorted(self._edges)]

    @property
    def conflicting_declarations(self) -> list[ConflictingDeclaration]:
        """Recorded source-kind disagreements, sorted by edge then source."""
        return sorted(
            self._conflicts,
            key=lambda c: (c.edge.key, str(c.declaration.source)),
        )

    def __contains__(self, name: object) -> bool:
        return name in self._nodes

    def add_node(self, node: GraphNode) -> None:
        """Add a node. Adding a name twice is a builder bug.

        Raises:
            ValueError: If a node with the same name already exists.
        """
        if node.name in self._nodes:
            raise ValueError(f"Node {node.name!r} already exists")
        self._nodes[node.name] = node
        self._adjacency[node.name] = set()

    def get_node(self, name: str) -> GraphNode | None:
        return self._nodes.get(name)

    def add_edge(self, edge: GraphEdge) -> None:
        """Add an edge between two existing nodes.

        Raises:
            ValueError: If an endpoint is missing or the pair already exists.
        """
        for endpoint in (edge.source, edge.target):
            if endpoint not in self._nodes:
                raise ValueError(
                    f"Edge {edge.source!r} -> {edge.target!r} references "
                    f"unknown node {endpoint!r}"
                )
        if edge.key in self._edges:
            raise ValueError(f"Edge {edge.source!r} -> {edge.target!r} already exists")
        self._edges[edge.key] = edge
        self._adjacency[edge.source].add(edge.target)

    def get_edge(self, source: str, target: str) -> GraphEdge | None:
        return self._edges.get((source, target))

    def add_conflict(self, conflict: ConflictingDeclaration) -> None:
        self._conflicts.append(conflict)

    def successors(self, name: str) -> list[str]:
        """Sorted direct dependency names of ``name``. Empty if unknown."""
        return sorted(self._adjacency.get(name, ()))

    def __repr__(self) -> str:
        return f"DependencyGraph(nodes={self.node_count}, edges={self.edge_count})"
