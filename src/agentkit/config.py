"""
Settings — process configuration loaded from YAML and the environment.

Example config (agentkit.yaml):
    log_level: DEBUG
    model: anthropic:claude-sonnet-4-5-20250929
    http_timeout_ms: 10000
    agents:
      code-review:
        max_files_per_review: 5
      deployment:
        allowed_environments: [staging, production]

Environment variables win over the file, the file wins over defaults.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Mapping

import yaml

logger = logging.getLogger(__name__)

ENV_PREFIX = "AGENTKIT_"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    raise ValueError(f"{name} must be a boolean, got {value!r}")


@dataclass
class Settings:
    log_level: str = "INFO"
    model: str | None = None
    http_timeout_ms: int = 30000
    github_api_url: str = "https://api.github.com"
    github_token: str | None = None
    cache_tools: bool = True
    agents: dict[str, dict[str, Any]] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Settings:
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown settings: {unknown}")

        settings = cls(**dict(data))
        settings.validate()
        return settings

    @classmethod
    def from_yaml(cls, path: str | Path) -> Settings:
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ValueError(f"Config must be a YAML mapping, got {type(data).__name__}")

        logger.debug(f"Loaded settings from {path}")
        return cls.from_dict(data)

    @staticmethod
    def env_overrides(environ: Mapping[str, str] | None = None) -> dict[str, Any]:
        """Collect overrides from AGENTKIT_* and GITHUB_* variables."""
        environ = os.environ if environ is None else environ
        overrides: dict[str, Any] = {}

        if f"{ENV_PREFIX}LOG_LEVEL" in environ:
            overrides["log_level"] = environ[f"{ENV_PREFIX}LOG_LEVEL"]
        if f"{ENV_PREFIX}MODEL" in environ:
            overrides["model"] = environ[f"{ENV_PREFIX}MODEL"] or None
        if f"{ENV_PREFIX}HTTP_TIMEOUT_MS" in environ:
            raw = environ[f"{ENV_PREFIX}HTTP_TIMEOUT_MS"]
            try:
                overrides["http_timeout_ms"] = int(raw)
            except ValueError:
                raise ValueError(f"{ENV_PREFIX}HTTP_TIMEOUT_MS must be an integer, got {raw!r}")
        if f"{ENV_PREFIX}CACHE_TOOLS" in environ:
            overrides["cache_tools"] = _parse_bool(
                f"{ENV_PREFIX}CACHE_TOOLS", environ[f"{ENV_PREFIX}CACHE_TOOLS"]
            )
        if "GITHUB_API_URL" in environ:
            overrides["github_api_url"] = environ["GITHUB_API_URL"]
        if "GITHUB_TOKEN" in environ:
            overrides["github_token"] = environ["GITHUB_TOKEN"]

        return overrides

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        return cls.from_dict(cls.env_overrides(environ))

    def validate(self) -> None:
        if self.log_level.upper() not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log_level: {self.log_level}")
        if self.http_timeout_ms <= 0:
            raise ValueError("http_timeout_ms must be positive")
        if not isinstance(self.agents, dict):
            raise ValueError("agents must be a mapping of agent name to options")

    def agent_options(self, name: str) -> dict[str, Any]:
        return dict(self.agents.get(name) or {})


def load_settings(
    path: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """Defaults, then the YAML file (if any), then environment overrides."""
    data: dict[str, Any] = {}
    if path is not None:
        data.update(vars(Settings.from_yaml(path)))
    data.update(Settings.env_overrides(environ))
    return Settings.from_dict(data)
