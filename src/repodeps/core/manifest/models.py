"""Typed manifest records: publish status, dependency sources, declarations.

These are the only shapes the graph core ever sees. Parsing raw manifest
text into them is the job of ``repodeps.sources``; nothing downstream of
this module looks at TOML.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


# ---------------------------------------------------------------------------
# Publish: Where a package may be published
# ---------------------------------------------------------------------------


class PublishKind(Enum):
    """The three publish visibilities a manifest can declare."""

    PUBLIC = "public"
    RESTRICTED = "restricted"
    UNPUBLISHED = "unpublished"


@dataclass(frozen=True)
class Publish:
    """Tagged publish status of a package.

    Attributes:
        kind: Which visibility variant this is.
        registries: Registry names the package is restricted to. Only
            non-empty for ``PublishKind.RESTRICTED``.
    """

    kind: PublishKind
    registries: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.kind is PublishKind.RESTRICTED and not self.registries:
            raise ValueError("restricted publish status needs at least one registry")
        if self.kind is not PublishKind.RESTRICTED and self.registries:
            raise ValueError(f"{self.kind.value} publish status takes no registries")

    @classmethod
    def public(cls) -> Publish:
        return cls(PublishKind.PUBLIC)

    @classmethod
    def restricted(cls, *registries: str) -> Publish:
        return cls(PublishKind.RESTRICTED, tuple(registries))

    @classmethod
    def unpublished(cls) -> Publish:
        return cls(PublishKind.UNPUBLISHED)

    def __str__(self) -> str:
        if self.kind is PublishKind.RESTRICTED:
            return f"restricted({', '.join(self.registries)})"
        return self.kind.value


# ---------------------------------------------------------------------------
# DependencySource & DependencyDeclaration: Outgoing edges of a manifest
# ---------------------------------------------------------------------------


class SourceKind(Enum):
    """How a dependency is resolved at build time."""

    PATH_LOCAL = "path"
    REGISTRY = "registry"


@dataclass(frozen=True)
class DependencySource:
    """Tagged source of a dependency declaration.

    Attributes:
        kind: Path-local or registry.
        registry: Named registry for ``SourceKind.REGISTRY``; None means the
            default registry. Always None for path-local sources.
    """

    kind: SourceKind
    registry: str | None = None

    def __post_init__(self) -> None:
        if self.kind is SourceKind.PATH_LOCAL and self.registry is not None:
            raise ValueError("path-local dependency sources take no registry")

    @classmethod
    def path_local(cls) -> DependencySource:
        return cls(SourceKind.PATH_LOCAL)

    @classmethod
    def registry_source(cls, name: str | None = None) -> DependencySource:
        return cls(SourceKind.REGISTRY, name)

    def __str__(self) -> str:
        if self.kind is SourceKind.PATH_LOCAL:
            return "path"
        return f"registry({self.registry})" if self.registry else "registry"


@dataclass(frozen=True)
class DependencyDeclaration:
    """One dependency line of a manifest.

    The target is a package *name*; it is resolved to a graph node only
    when the graph is built.
    """

    target: str
    source: DependencySource


# ---------------------------------------------------------------------------
# ManifestRecord: One parsed package manifest
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ManifestRecord:
    """A parsed package manifest.

    Attributes:
        name: Package name, unique within a run.
        version: Version string, kept opaque.
        publish: Publish visibility.
        dependencies: Declarations in manifest order.
        repository: Name of the repository the manifest was found in.
        source_path: Path of the manifest inside its repository.
    """

    name: str
    version: str
    publish: Publish
    dependencies: tuple[DependencyDeclaration, ...] = field(default_factory=tuple)
    repository: str = ""
    source_path: Path | None = None
