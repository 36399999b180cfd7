"""Server configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Mapping, Optional

import yaml

from .api_client import DEFAULT_BASE_URL

ENV_PREFIX = "JSON2VIDEO_"


class ConfigError(Exception):
    """Raised for unreadable or invalid configuration."""


@dataclass
class ServerConfig:
    api_key: Optional[str] = None
    base_url: str = DEFAULT_BASE_URL
    timeout: Optional[float] = None
    log_level: str = "INFO"

    def merged(self, **overrides) -> "ServerConfig":
        """Return a copy with every non-None override applied."""
        updates = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **updates)


def _field_names() -> set[str]:
    return {f.name for f in fields(ServerConfig)}


def _coerce_timeout(value, source: str) -> Optional[float]:
    if value is None or value == "":
        return None
    try:
        timeout = float(value)
    except (TypeError, ValueError):
        raise ConfigError(f"Invalid timeout in {source}: {value!r}")
    if timeout <= 0:
        raise ConfigError(f"Timeout must be positive in {source}: {value!r}")
    return timeout


def load_yaml_config(path: Path) -> dict:
    """Read config keys from a YAML mapping file."""
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as exc:
        raise ConfigError(f"Cannot read config file {path}: {exc}")
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}")

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")

    unknown = set(data) - _field_names()
    if unknown:
        raise ConfigError(f"Unknown config keys in {path}: {', '.join(sorted(unknown))}")
    if "timeout" in data:
        data["timeout"] = _coerce_timeout(data["timeout"], str(path))
    return data


def config_from_env(environ: Optional[Mapping[str, str]] = None) -> dict:
    """Read config keys from JSON2VIDEO_* environment variables."""
    environ = os.environ if environ is None else environ
    values = {}
    for name in _field_names():
        raw = environ.get(ENV_PREFIX + name.upper())
        if raw is None or raw == "":
            continue
        values[name] = raw
    if "timeout" in values:
        values["timeout"] = _coerce_timeout(values["timeout"], ENV_PREFIX + "TIMEOUT")
    return values


def load_config(
    path: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
    **overrides,
) -> ServerConfig:
    """Build a ServerConfig: defaults, then YAML file, then environment, then overrides."""
    config = ServerConfig()
    if path is not None:
        config = config.merged(**load_yaml_config(Path(path)))
    config = config.merged(**config_from_env(environ))
    if overrides.get("timeout") is not None:
        overrides["timeout"] = _coerce_timeout(overrides["timeout"], "arguments")
    return config.merged(**overrides)
