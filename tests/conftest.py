"""Shared fixtures for repodeps tests."""

from __future__ import annotations

import pathlib

import pytest


@pytest.fixture
def workspace_repo(tmp_path: pathlib.Path) -> pathlib.Path:
    """Create a checkout with a virtual workspace root and two member crates.

    ``core`` is published to a restricted registry; ``cli`` is unpublished,
    depends on ``core`` by path and on ``serde`` through the workspace.
    """
    repo = tmp_path / "tools"
    (repo / "crates" / "core").mkdir(parents=True)
    (repo / "crates" / "cli").mkdir(parents=True)
    (repo / "Cargo.toml").write_text(
        "[workspace]\n"
        'members = ["crates/*"]\n\n'
        "[workspace.package]\n"
        'version = "1.4.0"\n\n'
        "[workspace.dependencies]\n"
        'serde = "1"\n'
    )
    (repo / "crates" / "core" / "Cargo.toml").write_text(
        "[package]\n"
        'name = "tools-core"\n'
        "version.workspace = true\n"
        'publish = ["internal"]\n\n'
        "[dependencies]\n"
        "serde = { workspace = true }\n"
    )
    (repo / "crates" / "cli" / "Cargo.toml").write_text(
        "[package]\n"
        'name = "tools-cli"\n'
        'version = "0.2.0"\n'
        "publish = false\n\n"
        "[dependencies]\n"
        'tools-core = { path = "../core" }\n'
    )
    return repo
