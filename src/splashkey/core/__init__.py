"""Core configuration, constants and exception handling."""

from splashkey.core.config import Settings, get_settings, load_config, reload_config
from splashkey.core.exceptions import (
    ConfigurationError,
    DataError,
    DegenerateSpectrumError,
    IndexOverflowError,
    InvalidInputError,
    SplashError,
)

__all__ = [
    "get_settings",
    "Settings",
    "load_config",
    "reload_config",
    "SplashError",
    "InvalidInputError",
    "DegenerateSpectrumError",
    "IndexOverflowError",
    "ConfigurationError",
    "DataError",
]
