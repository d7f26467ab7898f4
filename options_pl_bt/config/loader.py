"""
Configuration loader with YAML/JSON support, environment overrides, and CLI overrides.

Precedence (lowest to highest): file, OPBT__* environment variables, --set flags.
Every override pass re-validates the whole RunConfig.
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, List

import yaml

from .schemas import RunConfig

ENV_PREFIX = "OPBT__"
YAML_SUFFIXES = (".yaml", ".yml")


def _read_mapping(path: Path, what: str) -> Dict[str, Any]:
    """Parse a YAML or JSON file into a dict"""
    if not path.exists():
        raise FileNotFoundError(f"{what} not found: {path}")

    suffix = path.suffix.lower()
    with open(path, "r", encoding="utf-8") as f:
        if suffix in YAML_SUFFIXES:
            data = yaml.safe_load(f) or {}
        elif suffix == ".json":
            data = json.load(f)
        else:
            raise ValueError(f"Unsupported {what.lower()} format: {suffix}. Use .yaml, .yml, or .json")

    if not isinstance(data, dict):
        raise ValueError(f"{what} must contain a mapping at the top level: {path}")
    return data


def load_config(path: str) -> RunConfig:
    """
    Load configuration from YAML or JSON file.

    Args:
        path: Path to config file

    Returns:
        RunConfig validated instance

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the format is unsupported or the content is not a mapping
    """
    return RunConfig(**_read_mapping(Path(path), "Config file"))


def load_request_file(path: str) -> Dict[str, Any]:
    """Read a strategy request body (same format rules as config files)"""
    return _read_mapping(Path(path), "Request file")


def _parse_value(value: str) -> Any:
    """JSON first, then true/false/null, numbers, else the raw string"""
    try:
        return json.loads(value)
    except ValueError:
        pass

    literals = {"true": True, "false": False, "null": None}
    if value.lower() in literals:
        return literals[value.lower()]
    try:
        return float(value) if "." in value else int(value)
    except ValueError:
        return value


def _set_nested(overrides: Dict[str, Any], keys: List[str], value: Any) -> None:
    current = overrides
    for key in keys[:-1]:
        current = current.setdefault(key, {})
    current[keys[-1]] = value


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Deep merge two dictionaries"""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _apply(cfg: RunConfig, overrides: Dict[str, Any]) -> RunConfig:
    if not overrides:
        return cfg
    return RunConfig(**_deep_merge(cfg.model_dump(), overrides))


def apply_env_overrides(cfg: RunConfig) -> RunConfig:
    """
    Apply environment variable overrides to configuration.

    Variables follow OPBT__{section}__{key}, with more __ segments for deeper keys.
    Names are matched case-insensitively, e.g. OPBT__SERVER__PORT=9000.
    """
    overrides: Dict[str, Any] = {}

    for key, value in os.environ.items():
        if not key.startswith(ENV_PREFIX):
            continue
        parts = key[len(ENV_PREFIX):].lower().split("__")
        if len(parts) < 2 or not all(parts):
            continue
        _set_nested(overrides, parts, _parse_value(value))

    return _apply(cfg, overrides)


def apply_cli_overrides(cfg: RunConfig, sets: List[str]) -> RunConfig:
    """
    Apply CLI --set key=value overrides to configuration.

    Supports nested keys: server.port=9000 or request.entry_date=2025-01-02

    Raises:
        ValueError: If an entry is not 'section.key=value'
    """
    overrides: Dict[str, Any] = {}

    for set_str in sets or []:
        key_str, sep, value_str = set_str.partition("=")
        if not sep:
            raise ValueError(f"Invalid --set format: {set_str}. Expected 'key=value'")

        key_parts = key_str.strip().split(".")
        if len(key_parts) < 2:
            raise ValueError(f"Invalid --set key format: {key_str}. Expected 'section.key' or 'section.nested.key'")

        _set_nested(overrides, key_parts, _parse_value(value_str))

    return _apply(cfg, overrides)
