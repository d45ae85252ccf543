"""Cargo.toml parsing into ``ManifestRecord`` instances.

Only the fields the graph needs are extracted: package name, version,
``publish`` and every dependency table (normal, dev, build, and their
``[target.'cfg(..)'.*]`` variants).

Publish mapping::

    publish absent / true   -> Publish.public()
    publish = false / []    -> Publish.unpublished()
    publish = ["a", "b"]    -> Publish.restricted("a", "b")

Dependency mapping::

    foo = "1"                              -> registry (default)
    foo = { path = "../foo" }              -> path-local
    foo = { version = "1", registry = "r"} -> registry "r"
    bar = { package = "foo", ... }         -> target "foo"
    foo = { workspace = true }             -> looked up in [workspace.dependencies]

Fields inherited from the workspace (``version.workspace = true`` and
friends) are resolved against the enclosing workspace root manifest when
one is available.
"""

from __future__ import annotations

import logging
import tomllib
from pathlib import Path
from typing import Any

from repodeps.core.manifest.models import (
    DependencyDeclaration,
    DependencySource,
    ManifestRecord,
    Publish,
)
from repodeps.exceptions import ManifestParseError

logger = logging.getLogger(__name__)

MANIFEST_FILENAME = "Cargo.toml"

_DEPENDENCY_TABLES = ("dependencies", "dev-dependencies", "build-dependencies")


def load_toml(text: str, source: str) -> dict[str, Any]:
    """Parse TOML text, wrapping syntax errors in ``ManifestParseError``."""
    try:
        return tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise ManifestParseError(f"Failed to parse {source} as TOML: {exc}") from exc


def _inherits(value: Any) -> bool:
    return isinstance(value, dict) and value.get("workspace") is True


def _parse_publish(value: Any, source: str) -> Publish:
    if value is None or value is True:
        return Publish.public()
    if value is False:
        return Publish.unpublished()
    if isinstance(value, list) and all(isinstance(r, str) for r in value):
        return Publish.restricted(*value) if value else Publish.unpublished()
    raise ManifestParseError(f"Invalid 'publish' value in {source}: {value!r}")


def _parse_dependency(
    key: str,
    value: Any,
    workspace_deps: dict[str, Any],
    source: str,
) -> DependencyDeclaration:
    if _inherits(value):
        inherited = workspace_deps.get(key)
        if inherited is None:
            logger.debug("%s: %s inherits from a workspace that does not declare it", source, key)
            inherited = {}
        elif isinstance(inherited, str):
            inherited = {"version": inherited}
        value = {**inherited, **{k: v for k, v in value.items() if k != "workspace"}}

    if isinstance(value, str):
        return DependencyDeclaration(target=key, source=DependencySource.registry_source())
    if not isinstance(value, dict):
        raise ManifestParseError(f"Invalid dependency {key!r} in {source}: {value!r}")

    target = value.get("package", key)
    if "path" in value:
        dep_source = DependencySource.path_local()
    else:
        dep_source = DependencySource.registry_source(value.get("registry"))
    return DependencyDeclaration(target=target, source=dep_source)


def _dependency_tables(data: dict[str, Any]) -> list[dict[str, Any]]:
    tables = [data.get(name) or {} for name in _DEPENDENCY_TABLES]
    for platform in (data.get("target") or {}).values():
        tables.extend(platform.get(name) or {} for name in _DEPENDENCY_TABLES)
    return tables


def parse_manifest_data(
    data: dict[str, Any],
    *,
    repository: str,
    source_path: Path | None = None,
    workspace: dict[str, Any] | None = None,
) -> ManifestRecord | None:
    """Build a ``ManifestRecord`` from a parsed Cargo.toml document.

    Args:
        data: Parsed TOML document.
        repository: Repository the manifest belongs to.
        source_path: Manifest path inside the repository.
        workspace: The ``[workspace]`` table of the enclosing workspace
            root, used to resolve inherited fields.

    Returns:
        The record, or None for a virtual (workspace-only) manifest.

    Raises:
        ManifestParseError: If the manifest is malformed.
    """
    source = f"{repository}:{source_path}" if source_path else repository
    package = data.get("package")
    if package is None:
        return None
    if not isinstance(package, dict) or not isinstance(package.get("name"), str):
        raise ManifestParseError(f"Manifest {source} has no package name")

    workspace = workspace or {}
    inherited_package = workspace.get("package") or {}
    workspace_deps = workspace.get("dependencies") or {}

    version = package.get("version", "0.0.0")
    if _inherits(version):
        version = inherited_package.get("version", "0.0.0")

    publish = package.get("publish")
    if _inherits(publish):
        publish = inherited_package.get("publish")

    deps: list[DependencyDeclaration] = []
    for table in _dependency_tables(data):
        if not isinstance(table, dict):
            raise ManifestParseError(f"Invalid dependency table in {source}")
        for key, value in table.items():
            deps.append(_parse_dependency(key, value, workspace_deps, source))

    return ManifestRecord(
        name=package["name"],
        version=str(version),
        publish=_parse_publish(publish, source),
        dependencies=tuple(deps),
        repository=repository,
        source_path=source_path,
    )


def parse_manifest(
    text: str,
    *,
    repository: str,
    source_path: Path | None = None,
    workspace: dict[str, Any] | None = None,
) -> ManifestRecord | None:
    """Parse Cargo.toml text. See ``parse_manifest_data``."""
    data = load_toml(text, f"{repository}:{source_path}" if source_path else repository)
    return parse_manifest_data(
        data, repository=repository, source_path=source_path, workspace=workspace
    )


def parse_manifest_tree(files: dict[Path, str], *, repository: str) -> list[ManifestRecord]:
    """Parse every Cargo.toml of one repository snapshot.

    Each member manifest inherits from the nearest enclosing manifest that
    has a ``[workspace]`` table.

    Args:
        files: Manifest path (relative to the repository root) to text.
        repository: Repository name.

    Returns:
        Package manifests sorted by path; virtual manifests are skipped.
    """
    documents = {
        path: load_toml(text, f"{repository}:{path}") for path, text in files.items()
    }
    workspaces = {
        path.parent: doc["workspace"]
        for path, doc in documents.items()
        if isinstance(doc.get("workspace"), dict)
    }

    def _workspace_for(path: Path) -> dict[str, Any] | None:
        for parent in (path.parent, *path.parent.parents):
            if parent in workspaces:
                return workspaces[parent]
        return None

    records: list[ManifestRecord] = []
    for path in sorted(documents):
        record = parse_manifest_data(
            documents[path],
            repository=repository,
            source_path=path,
            workspace=_workspace_for(path),
        )
        if record is not None:
            records.append(record)
    return records
