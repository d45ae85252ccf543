"""Tests for run configuration loading (YAML and TOML)."""

from __future__ import annotations

from pathlib import Path

import pytest

from repodeps.config import TOKEN_ENV_VAR, RunConfig, load_config, repository_name
from repodeps.exceptions import ConfigError


class TestRepositoryName:

    @pytest.mark.parametrize(
        ("location", "expected"),
        [
            ("https://example.com/org/core.tar.gz", "core"),
            ("https://example.com/org/core.tgz?raw=1", "core"),
            ("../tools/", "tools"),
            ("/srv/archives/util.tar", "util"),
        ],
    )
    def test_derived_names(self, location: str, expected: str) -> None:
        assert repository_name(location) == expected


class TestLoadConfig:

    def test_yaml_mapping(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv(TOKEN_ENV_VAR, raising=False)
        cfg = tmp_path / "repos.yaml"
        cfg.write_text(
            "lint: true\n"
            "repositories:\n"
            "  core: https://example.com/core.tar.gz\n"
            "  tools: ./tools\n"
        )
        config = load_config(cfg)
        assert isinstance(config, RunConfig)
        assert config.lint is True
        assert config.token is None
        assert [r.name for r in config.repositories] == ["core", "tools"]
        assert config.repositories[0].is_remote
        assert config.repositories[1].location == str(tmp_path / "tools")

    def test_yaml_list(self, tmp_path: Path) -> None:
        cfg = tmp_path / "repos.yml"
        cfg.write_text("repositories:\n  - https://example.com/core.tar.gz\n  - /abs/tools\n")
        config = load_config(cfg)
        assert [(r.name, r.location) for r in config.repositories] == [
            ("core", "https://example.com/core.tar.gz"),
            ("tools", "/abs/tools"),
        ]

    def test_toml_tarballs_table(self, tmp_path: Path) -> None:
        cfg = tmp_path / "repos.toml"
        cfg.write_text('[tarballs]\ncore = "https://example.com/core.tar.gz"\n')
        config = load_config(cfg)
        assert [r.name for r in config.repositories] == ["core"]

    def test_token_from_environment(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(TOKEN_ENV_VAR, "from-env")
        cfg = tmp_path / "repos.yaml"
        cfg.write_text("repositories: [/abs/core]\n")
        assert load_config(cfg).token == "from-env"

    def test_environment_overrides_file_token(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv(TOKEN_ENV_VAR, "from-env")
        cfg = tmp_path / "repos.yaml"
        cfg.write_text("token: from-file\nrepositories: [/abs/core]\n")
        assert load_config(cfg).token == "from-env"

    def test_file_token_without_environment(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv(TOKEN_ENV_VAR, raising=False)
        cfg = tmp_path / "repos.yaml"
        cfg.write_text("token: from-file\nrepositories: [/abs/core]\n")
        assert load_config(cfg).token == "from-file"

    def test_use_colors_flag(self, tmp_path: Path) -> None:
        cfg = tmp_path / "repos.yaml"
        cfg.write_text("use_colors: true\nrepositories: [/abs/core]\n")
        assert load_config(cfg).use_colors is True


class TestInvalidConfig:

    @pytest.mark.parametrize(
        "text",
        [
            "",
            "- just\n- a list\n",
            "repositories: 3\n",
            "repositories: [/abs/core, /other/core]\n",
            "repositories: ['']\n",
            "lint: maybe\nrepositories: [/abs/core]\n",
            "token: 12\nrepositories: [/abs/core]\n",
            "cluster: true\nuse_colors: true\nrepositories: [/abs/core]\n",
            "repositories: [unterminated\n",
        ],
    )
    def test_rejected(self, tmp_path: Path, text: str) -> None:
        cfg = tmp_path / "repos.yaml"
        cfg.write_text(text)
        with pytest.raises(ConfigError):
            load_config(cfg)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="Failed to read"):
            load_config(tmp_path / "absent.yaml")
