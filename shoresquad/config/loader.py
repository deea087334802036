"""YAML config loader with dotted-key lookup."""

from pathlib import Path
from typing import Any

import yaml

from shoresquad.config.schema import ShoreSquadConfig


def load_config(path: str | Path | None = None) -> ShoreSquadConfig:
    """Load and validate config from a YAML file.

    With no path, or an empty file, the built-in defaults are used.
    """
    if path is None:
        return ShoreSquadConfig()
    path = Path(path)
    with open(path) as f:
        raw = yaml.safe_load(f) or {}
    return ShoreSquadConfig(**raw)


def get_config_value(config: ShoreSquadConfig, dotted_key: str) -> Any:
    """Get a config value by dotted key path. E.g. 'api.timeout_ms'."""
    obj: Any = config
    for part in dotted_key.split("."):
        if hasattr(obj, part):
            obj = getattr(obj, part)
        elif isinstance(obj, dict) and part in obj:
            obj = obj[part]
        else:
            raise KeyError(f"Config key not found: {dotted_key}")
    return obj
