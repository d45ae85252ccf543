"""Package dependency graph, its builder and the color classifier.

All public names are re-exported here::

    from repodeps.core.graph import build_graph, DependencyGraph, NodeColor
"""

from repodeps.core.graph.classifier import EdgeColor, NodeColor, edge_color, node_color
from repodeps.core.graph.model import (
    ConflictingDeclaration,
    DependencyGraph,
    GraphEdge,
    GraphNode,
)
from repodeps.core.graph.builder import build_graph

__all__ = [
    "ConflictingDeclaration",
    "DependencyGraph",
    "EdgeColor",
    "GraphEdge",
    "GraphNode",
    "NodeColor",
    "build_graph",
    "edge_color",
    "node_color",
]
