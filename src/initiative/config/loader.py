"""Configuration loading utilities."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from initiative.config.models import Config
from initiative.errors import ConfigurationError

# (section, key) pairs holding filesystem paths
_PATH_KEYS = (("storage", "data_directory"), ("logging", "file"))


def _anchor_paths(data: dict[str, Any], base: Path) -> None:
    """Make relative paths in ``data`` relative to ``base`` instead of the cwd."""
    for section, key in _PATH_KEYS:
        values = data.get(section)
        if not isinstance(values, dict) or not values.get(key):
            continue
        path = Path(values[key])
        if not path.is_absolute() and not str(path).startswith("~"):
            values[key] = base / path


def load_config(config_path: Path | None) -> Config:
    """
    Load a store configuration.

    With no path, settings come from defaults and ``INITIATIVE_*``
    environment variables. Relative ``storage.data_directory`` and
    ``logging.file`` values in a YAML file are taken relative to the
    file's own directory, so a campaign folder can carry its config.

    Raises:
        FileNotFoundError: If config_path doesn't exist.
        ValueError: If the file is not a YAML mapping.
        ConfigurationError: If the values fail validation.
    """
    if config_path is None:
        return Config()

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        data = yaml.safe_load(config_path.read_text()) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in config file: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"YAML root must be a mapping, not {type(data).__name__}")

    _anchor_paths(data, config_path.resolve().parent)

    try:
        return Config(**data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration in {config_path}: {e}") from e
