"""Tests for config loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from lmfix.core.config import LMFixConfig, load_config
from lmfix.core.errors import ConfigError
from lmfix.fix.validate import BuildTarget


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("LMFIX_BASE_URL", raising=False)
    monkeypatch.delenv("LMFIX_MODEL", raising=False)


class TestLoadConfig:
    def test_defaults_when_no_config_file(self, tmp_path: Path):
        """Without an lmfix.toml, load_config should return defaults."""
        config = load_config(tmp_path)

        assert isinstance(config, LMFixConfig)
        assert config.server.base_url == "http://localhost:1234/v1"
        assert config.server.probe_timeout == 5.0
        assert config.server.request_timeout == 120.0
        assert config.validate.enabled is True
        assert "go" in config.validate.targets

    def test_loads_toml_server_section(self, tmp_path: Path):
        toml_content = """\
[server]
base_url = "http://127.0.0.1:8080/v1"
model = "qwen2.5-coder"
request_timeout = 300
temperature = 0.0
"""
        (tmp_path / "lmfix.toml").write_text(toml_content)
        config = load_config(tmp_path)

        assert config.server.base_url == "http://127.0.0.1:8080/v1"
        assert config.server.model == "qwen2.5-coder"
        assert config.server.request_timeout == 300
        assert config.server.temperature == 0.0
        assert config.server.probe_timeout == 5.0

    def test_loads_toml_validate_section(self, tmp_path: Path):
        toml_content = """\
[validate]
enabled = false
timeout = 30

[validate.targets.C]
extensions = [".c", ".H"]
command = ["gcc", "-fsyntax-only", "{file}"]
"""
        (tmp_path / "lmfix.toml").write_text(toml_content)
        config = load_config(tmp_path)

        assert config.validate.enabled is False
        assert config.validate.timeout == 30
        assert config.validate.targets["c"] == BuildTarget(
            extensions=(".c", ".h"),
            command=("gcc", "-fsyntax-only", "{file}"),
        )
        assert "go" in config.validate.targets

    def test_default_targets_not_shared(self, tmp_path: Path):
        (tmp_path / "lmfix.toml").write_text(
            '[validate.targets.rust]\nextensions = [".rs"]\ncommand = ["rustc", "{file}"]\n'
        )
        load_config(tmp_path)

        assert "rust" not in LMFixConfig().validate.targets

    def test_env_overrides_file(self, tmp_path: Path, monkeypatch):
        (tmp_path / "lmfix.toml").write_text('[server]\nbase_url = "http://file:1/v1"\nmodel = "file-model"\n')
        monkeypatch.setenv("LMFIX_BASE_URL", "http://env:2/v1")
        monkeypatch.setenv("LMFIX_MODEL", "env-model")

        config = load_config(tmp_path)

        assert config.server.base_url == "http://env:2/v1"
        assert config.server.model == "env-model"

    def test_empty_env_ignored(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("LMFIX_MODEL", "")
        assert load_config(tmp_path).server.model == "local-model"

    def test_malformed_toml(self, tmp_path: Path):
        (tmp_path / "lmfix.toml").write_text("[server\nmodel=")

        with pytest.raises(ConfigError, match="lmfix.toml"):
            load_config(tmp_path)

    def test_incomplete_build_target(self, tmp_path: Path):
        (tmp_path / "lmfix.toml").write_text('[validate.targets.c]\nextensions = [".c"]\n')

        with pytest.raises(ConfigError, match="command"):
            load_config(tmp_path)
