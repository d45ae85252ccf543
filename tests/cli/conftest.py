"""Shared fixtures for CLI tests.

Provides config files pointing at local repository checkouts with various
dependency shapes (clean, cyclic, path into a restricted package,
duplicate package names).
"""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner


def _crate(root: Path, name: str, body: str) -> None:
    crate_dir = root / name
    crate_dir.mkdir(parents=True)
    (crate_dir / "Cargo.toml").write_text(f'[package]\nname = "{name}"\nversion = "0.1.0"\n{body}')


def _config(tmp_path: Path, *repos: str) -> Path:
    config = tmp_path / "repos.yaml"
    config.write_text("repositories:\n" + "".join(f"  {r}: ./{r}\n" for r in repos))
    return config


@pytest.fixture
def runner() -> CliRunner:
    """Create a Click CliRunner for invoking commands."""
    return CliRunner()


@pytest.fixture
def clean_config(tmp_path: Path) -> Path:
    """Two repositories, no cycles, one external dependency."""
    _crate(tmp_path / "core", "core", "[dependencies]\nserde = \"1\"\n")
    _crate(
        tmp_path / "tools", "cli",
        'publish = false\n[dependencies]\ncore = { version = "0.1", registry = "internal" }\n',
    )
    return _config(tmp_path, "core", "tools")


@pytest.fixture
def cyclic_config(tmp_path: Path) -> Path:
    """``a`` (public, repo one) -> ``b`` by registry; ``b`` (unpublished, repo two) -> ``a`` by path."""
    _crate(tmp_path / "one", "a", '[dependencies]\nb = "0.1"\n')
    _crate(tmp_path / "two", "b", 'publish = false\n[dependencies]\na = { path = "../../one/a" }\n')
    return _config(tmp_path, "one", "two")


@pytest.fixture
def mismatch_config(tmp_path: Path) -> Path:
    """``app`` depends by path on ``core``, which is restricted to a private registry."""
    _crate(tmp_path / "core", "core", 'publish = ["internal"]\n')
    _crate(tmp_path / "apps", "app", '[dependencies]\ncore = { path = "../../core/core" }\n')
    return _config(tmp_path, "apps", "core")


@pytest.fixture
def duplicate_config(tmp_path: Path) -> Path:
    """The same package name defined in two repositories."""
    _crate(tmp_path / "one", "shared", "")
    _crate(tmp_path / "two", "shared", "")
    return _config(tmp_path, "one", "two")
