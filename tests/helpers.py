"""Factories shared by the repodeps test suite."""

from __future__ import annotations

from repodeps.core.graph import DependencyGraph, build_graph
from repodeps.core.manifest import (
    DependencyDeclaration,
    DependencySource,
    ManifestRecord,
    Publish,
)


def path_dep(target: str) -> DependencyDeclaration:
    return DependencyDeclaration(target=target, source=DependencySource.path_local())


def registry_dep(target: str, registry: str | None = None) -> DependencyDeclaration:
    return DependencyDeclaration(
        target=target, source=DependencySource.registry_source(registry)
    )


def make_manifest(
    name: str,
    publish: Publish | None = None,
    deps: list[DependencyDeclaration] | None = None,
    repository: str = "repo",
    version: str = "0.1.0",
) -> ManifestRecord:
    """Convenience factory for ManifestRecord instances (public by default)."""
    return ManifestRecord(
        name=name,
        version=version,
        publish=publish or Publish.public(),
        dependencies=tuple(deps or []),
        repository=repository,
    )


def graph_of(*records: ManifestRecord, include_external: bool = True) -> DependencyGraph:
    """Build a graph from the given manifests."""
    return build_graph(list(records), include_external=include_external)
