"""Layered configuration loading.

Each layer is a plain nested mapping; later layers override earlier ones
key by key:

1. Built-in defaults (``coral.config.models``)
2. Global config (~/.config/coral/config.yaml)
3. Project config (./coral.yaml, or an explicit --config path)
4. Environment variables (CORAL__SECTION__KEY, read by pydantic-settings)
5. Direct kwargs

The merged mapping is validated once, so a bad value reports the dotted
path of the offending field no matter which layer it came from.
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, EnvSettingsSource, SettingsConfigDict

from coral.config.models import AnalyzerConfig, CoralConfig, LoggingConfig, ServerConfig
from coral.core.errors import ConfigError

GLOBAL_CONFIG_PATH = Path("~/.config/coral/config.yaml").expanduser()
PROJECT_CONFIG_NAME = "coral.yaml"


class CoralSettings(BaseSettings):
    """Environment schema. Env vars: CORAL__LOGGING__LEVEL, CORAL__SERVER__PORT, etc."""

    model_config = SettingsConfigDict(
        env_prefix="CORAL__",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    logging: LoggingConfig = LoggingConfig()
    server: ServerConfig = ServerConfig()
    analyzer: AnalyzerConfig = AnalyzerConfig()


def _load_yaml(path: Path) -> dict[str, Any]:
    """Read one YAML layer. A missing file is an empty layer."""
    if not path.exists():
        return {}
    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        raise ConfigError.parse_error(str(path), str(e)) from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError.parse_error(str(path), "top-level value must be a mapping")
    return data


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = _deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def _env_layer() -> dict[str, Any]:
    # Only variables that are actually set; nested keys come back as dicts
    return EnvSettingsSource(CoralSettings)()


def load_config(
    project_dir: Path | None = None,
    config_path: Path | None = None,
    **kwargs: Any,
) -> CoralConfig:
    """Resolve configuration from every layer.

    Args:
        project_dir: Directory searched for coral.yaml. Defaults to cwd.
        config_path: Explicit config file, used instead of coral.yaml. Must exist.
        **kwargs: Section overrides (highest precedence).

    Raises:
        ConfigError: Missing explicit file, unreadable YAML, or an invalid value.
    """
    if config_path is None:
        project_file = (project_dir or Path.cwd()) / PROJECT_CONFIG_NAME
    elif config_path.exists():
        project_file = config_path
    else:
        raise ConfigError.file_not_found(str(config_path))

    layers = [_load_yaml(GLOBAL_CONFIG_PATH), _load_yaml(project_file), _env_layer(), kwargs]
    merged: dict[str, Any] = {}
    for layer in layers:
        merged = _deep_merge(merged, layer)

    try:
        return CoralConfig.model_validate(merged)
    except ValidationError as e:
        err = e.errors()[0]
        field = ".".join(str(loc) for loc in err["loc"])
        raise ConfigError.invalid_value(field, err.get("input"), err["msg"]) from e
