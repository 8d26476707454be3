"""YAML config loader with runtime get/set."""

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from skycast.config.schema import SkycastConfig

logger = logging.getLogger(__name__)


def load_config(path: str | Path | None = None) -> SkycastConfig:
    """Load and validate config from a YAML file.

    A missing path or an empty file yields the defaults.
    """
    if path is None:
        return SkycastConfig()
    path = Path(path)
    if not path.exists():
        logger.info("Config file %s not found, using defaults", path)
        return SkycastConfig()
    with open(path) as f:
        raw = yaml.safe_load(f) or {}
    return SkycastConfig(**raw)


def get_config_value(config: SkycastConfig, dotted_key: str) -> Any:
    """Get a config value by dotted key path. E.g. 'extraction.outlook_horizon'."""
    parts = dotted_key.split(".")
    obj: Any = config
    for part in parts:
        if isinstance(obj, dict):
            obj = obj[part]
        elif hasattr(obj, part):
            obj = getattr(obj, part)
        else:
            raise KeyError(f"Config key not found: {dotted_key}")
    return obj


def set_config_value(config: SkycastConfig, dotted_key: str, value: Any) -> SkycastConfig:
    """Set a config value by dotted key path and re-validate.

    Returns a new SkycastConfig instance.
    """
    data = json.loads(config.model_dump_json())
    parts = dotted_key.split(".")
    target = data
    for part in parts[:-1]:
        target = target[part]
    old_value = target.get(parts[-1])
    if isinstance(old_value, bool) and isinstance(value, str):
        value = value.lower() in ("1", "true", "yes", "on")
    elif isinstance(old_value, int) and isinstance(value, str):
        value = int(value)
    elif isinstance(old_value, float) and isinstance(value, str):
        value = float(value)
    target[parts[-1]] = value
    return SkycastConfig(**data)


def save_config(config: SkycastConfig, path: str | Path) -> None:
    """Write ``config`` to a YAML file that load_config reads back."""
    path = Path(path)
    with open(path, "w") as f:
        yaml.safe_dump(json.loads(config.model_dump_json()), f, sort_keys=False)
    logger.info("Config written to %s", path)
