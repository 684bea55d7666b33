"""Configuration loading utilities.

Handles YAML config file loading and dataclass conversion.
"""

import logging
from pathlib import Path
from typing import Optional, Type, TypeVar

import yaml

from splashkey.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def dict_to_dataclass(cls: Type[T], data: Optional[dict]) -> T:
    """Recursively convert dict to dataclass.

    Args:
        cls: Dataclass type to convert to
        data: Dictionary with field values

    Returns:
        Instance of cls with values from data

    Raises:
        ConfigurationError: If data is not a mapping
    """
    if data is None:
        return cls()
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Expected a mapping for {cls.__name__}, got {type(data).__name__}"
        )

    field_types = {f.name: f.type for f in cls.__dataclass_fields__.values()}
    kwargs = {}

    for key, value in data.items():
        if key not in field_types:
            logger.warning("Ignoring unknown %s option: %s", cls.__name__, key)
            continue
        field_type = field_types[key]
        # Handle nested dataclasses
        if hasattr(field_type, "__dataclass_fields__"):
            kwargs[key] = dict_to_dataclass(field_type, value)
        else:
            kwargs[key] = value

    return cls(**kwargs)


def find_config_path(config_path: Optional[Path] = None) -> Optional[Path]:
    """Find config.yml file.

    Args:
        config_path: Explicit path to config file, or None to search

    Returns:
        Path to config file, or None if not found
    """
    if config_path is not None:
        config_path = Path(config_path)  # Handle both str and Path
        return config_path if config_path.exists() else None

    path = Path("config.yml")
    return path if path.exists() else None


def load_yaml(config_path: Path) -> dict:
    """Load YAML configuration file.

    Args:
        config_path: Path to YAML file

    Returns:
        Dictionary with configuration data

    Raises:
        ConfigurationError: If the file is not valid YAML or not a mapping
    """
    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Top level of {config_path} must be a mapping")
    return data
