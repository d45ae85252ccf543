"""Build the unified dependency graph from a manifest store.

Every manifest becomes a node. Every declaration becomes an edge to the
manifest it names, or to a placeholder node when no manifest declares
that package (a dependency from outside the scanned repositories).
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from repodeps.core.graph.classifier import edge_color, node_color
from repodeps.core.graph.model import (
    ConflictingDeclaration,
    DependencyGraph,
    GraphEdge,
    GraphNode,
)
from repodeps.core.manifest.models import ManifestRecord
from repodeps.core.manifest.store import ManifestStore

logger = logging.getLogger(__name__)


def build_graph(
    manifests: Mapping[str, ManifestRecord] | Iterable[ManifestRecord],
    *,
    include_external: bool = True,
) -> DependencyGraph:
    """Build a ``DependencyGraph`` from manifests.

    For a repeated (from, to) pair the first declaration shapes the edge.
    A later declaration with a different source is kept on the graph as a
    ``ConflictingDeclaration`` for the lint engine; an identical one is
    ignored.

    Args:
        manifests: Package name to manifest mapping, or an iterable of
            manifests (checked for duplicate names).
        include_external: Represent undeclared dependency targets as
            placeholder nodes. When False those targets, and the edges
            pointing at them, are left out of the graph.

    Returns:
        The fully built graph.

    Raises:
        ConfigurationError: If two manifests declare the same package name,
            or a mapping key does not match its manifest's name.
    """
    if isinstance(manifests, ManifestStore):
        store = manifests
    elif isinstance(manifests, Mapping):
        store = ManifestStore(manifests)
    else:
        store = ManifestStore.from_records(manifests)

    graph = DependencyGraph()
    for name in sorted(store):
        record = store[name]
        graph.add_node(GraphNode(name=name, color=node_color(record.publish), manifest=record))

    for name in sorted(store):
        for decl in store[name].dependencies:
            if decl.target not in graph:
                if not include_external:
                    logger.debug("Dropping external dependency %s -> %s", name, decl.target)
                    continue
                logger.debug("Adding placeholder node for undeclared package %s", decl.target)
                graph.add_node(GraphNode(name=decl.target, color=node_color(None)))

            existing = graph.get_edge(name, decl.target)
            if existing is None:
                graph.add_edge(GraphEdge(
                    source=name,
                    target=decl.target,
                    color=edge_color(decl.source),
                    declaration=decl,
                ))
            elif existing.declaration.source != decl.source:
                logger.debug(
                    "Conflicting declarations for %s -> %s: %s vs %s",
                    name, decl.target, existing.declaration.source, decl.source,
                )
                conflict = ConflictingDeclaration(edge=existing, declaration=decl)
                if conflict not in graph.conflicting_declarations:
                    graph.add_conflict(conflict)

    logger.debug("Built %r", graph)
    return graph
