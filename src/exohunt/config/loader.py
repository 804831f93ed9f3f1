"""
Configuration loading utilities.

Values are resolved in three layers, later ones winning:

1. ``base.yaml`` next to the config file (or an explicit base path)
2. the config file itself, with ``${VAR}`` / ``${VAR:default}`` interpolation
3. the ``EXOHUNT_*`` variables listed in ENV_OVERRIDES

Every section is optional; no file at all yields the defaults.
"""

import os
import re
from pathlib import Path
from typing import Any

import yaml

from exohunt.config.settings import AppConfig

# Environment variable -> (section, key)
ENV_OVERRIDES: dict[str, tuple[str, str]] = {
    "EXOHUNT_STORE_URL": ("store", "url"),
    "EXOHUNT_STORE_KEY": ("store", "api_key"),
    "EXOHUNT_STORE_TABLE": ("store", "table"),
    "EXOHUNT_API_BASE": ("training_api", "base_url"),
}

_ENV_REFERENCE = re.compile(r"\$\{([^}:]+)(?::([^}]*))?\}")


def _interpolate(value: Any) -> Any:
    """Expand ${VAR} and ${VAR:default} in every string of a YAML tree."""
    if isinstance(value, str):
        return _ENV_REFERENCE.sub(
            lambda m: os.environ.get(m.group(1), m.group(2) or ""), value
        )
    if isinstance(value, dict):
        return {k: _interpolate(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_interpolate(item) for item in value]
    return value


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge section by section; override wins on conflicts."""
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = _deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def _env_overrides() -> dict[str, Any]:
    """Collect the set EXOHUNT_* variables into a config fragment."""
    overrides: dict[str, Any] = {}
    for var_name, (section, key) in ENV_OVERRIDES.items():
        value = os.environ.get(var_name)
        if value:
            overrides.setdefault(section, {})[key] = value
    return overrides


def load_yaml(path: Path) -> dict[str, Any]:
    """
    Read one YAML config file.

    Raises:
        ValueError: If the document is not a mapping.
    """
    with path.open(encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        msg = f"Config file must contain a mapping, got {type(data).__name__}: {path}"
        raise ValueError(msg)
    return _interpolate(data)


def _base_layer(config_path: Path, base_path: Path | None) -> dict[str, Any]:
    if base_path is not None:
        return load_yaml(base_path)
    sibling = config_path.parent / "base.yaml"
    if sibling.exists() and sibling.resolve() != config_path.resolve():
        return load_yaml(sibling)
    return {}


def load_config(
    config_path: Path | None = None,
    base_path: Path | None = None,
) -> AppConfig:
    """
    Load application configuration.

    Args:
        config_path: Main configuration file; defaults only if omitted.
        base_path: Explicit base file (defaults to a sibling ``base.yaml``).

    Returns:
        Fully validated AppConfig instance.

    Raises:
        ValueError: If a file does not contain a mapping.
        pydantic.ValidationError: If a value fails validation.
    """
    data: dict[str, Any] = {}
    if config_path is not None:
        data = _deep_merge(_base_layer(config_path, base_path), load_yaml(config_path))
    return AppConfig.model_validate(_deep_merge(data, _env_overrides()))
