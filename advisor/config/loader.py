"""YAML config loader with environment fallback and runtime get/set."""

import json
import os
from pathlib import Path
from typing import Any

import yaml

from advisor.config.defaults import API_KEY_ENV
from advisor.config.schema import AdvisorConfig


def load_config(path: str | Path | None = None) -> AdvisorConfig:
    """Load and validate config from a YAML file.

    A missing or empty file yields defaults. If no API key is configured,
    it is read from the OPENWEATHER_API_KEY environment variable.
    """
    raw: dict = {}
    if path is not None and Path(path).exists():
        with open(path) as f:
            raw = yaml.safe_load(f) or {}

    provider = raw.setdefault("provider", {}) or {}
    raw["provider"] = provider
    if not provider.get("api_key"):
        provider["api_key"] = os.environ.get(API_KEY_ENV, "")

    return AdvisorConfig(**raw)


def get_config_value(config: AdvisorConfig, dotted_key: str) -> Any:
    """Get a config value by dotted key path. E.g. 'provider.record_count'."""
    parts = dotted_key.split(".")
    obj: Any = config
    for part in parts:
        if hasattr(obj, part):
            obj = getattr(obj, part)
        elif isinstance(obj, dict):
            obj = obj[part]
        else:
            raise KeyError(f"Config key not found: {dotted_key}")
    return obj


def set_config_value(config: AdvisorConfig, dotted_key: str, value: Any) -> AdvisorConfig:
    """Set a config value by dotted key path and re-validate.

    Returns a new AdvisorConfig instance.
    """
    data = json.loads(config.model_dump_json())
    parts = dotted_key.split(".")
    target = data
    for part in parts[:-1]:
        target = target[part]
    if parts[-1] not in target:
        raise KeyError(f"Config key not found: {dotted_key}")
    old_value = target[parts[-1]]
    if isinstance(old_value, bool) and isinstance(value, str):
        value = value.strip().lower() in ("1", "true", "yes", "on")
    elif isinstance(old_value, int) and isinstance(value, str):
        value = int(value)
    elif isinstance(old_value, float) and isinstance(value, str):
        value = float(value)
    target[parts[-1]] = value
    return AdvisorConfig(**data)
