"""Run configuration: which repositories to scan and how to report.

A config file is YAML by default::

    token: ghp_xxx            # optional, $REPODEPS_TOKEN takes precedence
    lint: true
    repositories:
      core: https://example.com/core/archive/main.tar.gz
      tools: ../tools         # local checkout

``repositories`` may also be a plain list of locations, in which case each
repository is named after the last component of its location. Files ending
in ``.toml`` are read as TOML, and a ``[tarballs]`` table is accepted in
place of ``repositories``.
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Any
from urllib.parse import urlparse

import yaml

from repodeps.exceptions import ConfigError

TOKEN_ENV_VAR = "REPODEPS_TOKEN"

_ARCHIVE_SUFFIXES = (".tar.gz", ".tgz", ".tar.bz2", ".tar.xz", ".tar")


@dataclass(frozen=True)
class RepositorySpec:
    """A repository to scan.

    Attributes:
        name: Repository name used in lint messages and graph clusters.
        location: HTTP(S) URL of a tarball, a local tarball, or a local
            directory.
    """

    name: str
    location: str

    @property
    def is_remote(self) -> bool:
        return urlparse(self.location).scheme in ("http", "https")


@dataclass
class RunConfig:
    """Options for one run. CLI flags override values loaded from file."""

    repositories: list[RepositorySpec] = field(default_factory=list)
    token: str | None = None
    lint: bool = False
    fail_on_warnings: bool = False
    cluster: bool = False
    use_colors: bool = False
    include_external: bool = True


def repository_name(location: str) -> str:
    """Derive a repository name from its location.

    ``https://host/org/core.tar.gz`` and ``../core/`` both give ``core``.
    """
    path = urlparse(location).path if "://" in location else location
    name = PurePosixPath(path.replace("\\", "/").rstrip("/")).name
    for suffix in _ARCHIVE_SUFFIXES:
        if name.endswith(suffix):
            return name[: -len(suffix)]
    return name


def _parse_repositories(raw: Any, base_dir: Path | None) -> list[RepositorySpec]:
    if isinstance(raw, dict):
        items = [(str(k), v) for k, v in raw.items()]
    elif isinstance(raw, list):
        items = [(None, v) for v in raw]
    else:
        raise ConfigError("'repositories' must be a list or a mapping of name to location")

    specs: list[RepositorySpec] = []
    seen: set[str] = set()
    for name, location in items:
        if not isinstance(location, str) or not location.strip():
            raise ConfigError(f"Invalid repository location: {location!r}")
        location = location.strip()
        if base_dir is not None and "://" not in location and not Path(location).is_absolute():
            location = str(base_dir / location)
        name = name or repository_name(location)
        if not name:
            raise ConfigError(f"Cannot derive a repository name from {location!r}")
        if name in seen:
            raise ConfigError(f"Repository {name!r} is listed more than once")
        seen.add(name)
        specs.append(RepositorySpec(name=name, location=location))
    return specs


def config_from_dict(data: dict[str, Any], *, base_dir: Path | None = None) -> RunConfig:
    """Build a ``RunConfig`` from already-parsed config data.

    Args:
        data: Parsed YAML/TOML document.
        base_dir: Directory relative local paths are resolved against.

    Raises:
        ConfigError: If the document has the wrong shape.
    """
    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a mapping")

    raw_repos = data.get("repositories", data.get("tarballs"))
    if raw_repos is None:
        raise ConfigError("Configuration has no 'repositories'")

    file_token = data.get("token")
    if file_token is not None and not isinstance(file_token, str):
        raise ConfigError("'token' must be a string")
    # Same order as the CLI: --token, then $REPODEPS_TOKEN, then the file.
    token = os.environ.get(TOKEN_ENV_VAR) or file_token or None

    flags: dict[str, bool] = {}
    for key in ("lint", "fail_on_warnings", "cluster", "use_colors", "include_external"):
        if key in data:
            if not isinstance(data[key], bool):
                raise ConfigError(f"'{key}' must be true or false")
            flags[key] = data[key]
    if flags.get("cluster") and flags.get("use_colors"):
        raise ConfigError("'cluster' and 'use_colors' cannot both be enabled")

    return RunConfig(
        repositories=_parse_repositories(raw_repos, base_dir),
        token=token,
        **flags,
    )


def load_config(path: str | Path) -> RunConfig:
    """Load a run configuration from a YAML or TOML file.

    Raises:
        ConfigError: If the file cannot be read or parsed.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read {path}: {exc}") from exc

    try:
        if path.suffix == ".toml":
            data = tomllib.loads(text)
        else:
            data = yaml.safe_load(text)
    except (tomllib.TOMLDecodeError, yaml.YAMLError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc

    return config_from_dict(data or {}, base_dir=path.parent)
