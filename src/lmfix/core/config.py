"""Configuration management for lmfix (lmfix.toml parsing, env overrides, defaults)."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

try:
    import tomllib
except ImportError:
    import tomli as tomllib  # type: ignore[no-redef]

from lmfix.core.errors import ConfigError
from lmfix.fix.validate import DEFAULT_TARGETS, BuildTarget

CONFIG_FILENAME = "lmfix.toml"
ENV_BASE_URL = "LMFIX_BASE_URL"
ENV_MODEL = "LMFIX_MODEL"


@dataclass
class ServerConfig:
    base_url: str = "http://localhost:1234/v1"
    model: str = "local-model"
    probe_timeout: float = 5.0
    request_timeout: float = 120.0
    temperature: float = 0.1


@dataclass
class ValidateConfig:
    enabled: bool = True
    timeout: float = 120.0
    targets: dict[str, BuildTarget] = field(default_factory=lambda: dict(DEFAULT_TARGETS))


@dataclass
class LMFixConfig:
    """Complete lmfix configuration."""

    server: ServerConfig = field(default_factory=ServerConfig)
    validate: ValidateConfig = field(default_factory=ValidateConfig)


def load_config(project_path: Path | None = None) -> LMFixConfig:
    """Load lmfix.toml if present, then apply environment overrides."""
    config = LMFixConfig()

    if project_path is None:
        project_path = Path.cwd()

    config_file = project_path / CONFIG_FILENAME
    if config_file.exists():
        try:
            with open(config_file, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid {config_file}: {e}") from e
        _apply_file(config, data)

    if os.environ.get(ENV_BASE_URL):
        config.server.base_url = os.environ[ENV_BASE_URL]
    if os.environ.get(ENV_MODEL):
        config.server.model = os.environ[ENV_MODEL]

    return config


def _apply_file(config: LMFixConfig, data: dict) -> None:
    if "server" in data:
        s = data["server"]
        for attr in ("base_url", "model", "probe_timeout", "request_timeout", "temperature"):
            if attr in s:
                setattr(config.server, attr, s[attr])

    if "validate" in data:
        v = data["validate"]
        if "enabled" in v:
            config.validate.enabled = v["enabled"]
        if "timeout" in v:
            config.validate.timeout = v["timeout"]
        for lang, target in v.get("targets", {}).items():
            missing = [key for key in ("extensions", "command") if key not in target]
            if missing:
                raise ConfigError(
                    f"[validate.targets.{lang}] in {CONFIG_FILENAME} is missing: {', '.join(missing)}"
                )
            config.validate.targets[lang.lower()] = BuildTarget(
                extensions=tuple(e.lower() for e in target["extensions"]),
                command=tuple(target["command"]),
            )
