"""SPLASHKEY configuration from YAML file.

Load config from config.yml (or custom path via --config flag). The
algorithm constants in splashkey.core.constants are deliberately not part
of this configuration.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, Optional

from splashkey.core.exceptions import ConfigurationError
from splashkey.core.loader import dict_to_dataclass, find_config_path, load_yaml

logger = logging.getLogger(__name__)

INPUT_FORMATS = ("auto", "jsonl", "msp")
OUTPUT_FORMATS = ("tsv", "jsonl")
ERROR_POLICIES = ("raise", "skip")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class InputConfig:
    """Spectrum file input configuration."""

    format: Literal["auto", "jsonl", "msp"] = "auto"


@dataclass
class OutputConfig:
    """Batch result output configuration."""

    format: Literal["tsv", "jsonl"] = "tsv"


@dataclass
class HashingConfig:
    """Batch hashing behaviour."""

    on_error: Literal["raise", "skip"] = "skip"
    min_peaks: int = 1


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"


@dataclass
class Settings:
    """Main configuration container."""

    show_progress: bool = True

    input: InputConfig = field(default_factory=InputConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    hashing: HashingConfig = field(default_factory=HashingConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    # Shortcuts
    @property
    def input_format(self) -> str:
        return self.input.format

    @property
    def output_format(self) -> str:
        return self.output.format

    @property
    def on_error(self) -> str:
        return self.hashing.on_error

    @property
    def log_level(self) -> int:
        return getattr(logging, self.logging.level.upper())

    def validate(self) -> "Settings":
        """Check option values, raising ConfigurationError on the first bad one."""
        if self.input.format not in INPUT_FORMATS:
            raise ConfigurationError(
                f"input.format must be one of {INPUT_FORMATS}, got {self.input.format!r}"
            )
        if self.output.format not in OUTPUT_FORMATS:
            raise ConfigurationError(
                f"output.format must be one of {OUTPUT_FORMATS}, got {self.output.format!r}"
            )
        if self.hashing.on_error not in ERROR_POLICIES:
            raise ConfigurationError(
                f"hashing.on_error must be one of {ERROR_POLICIES}, "
                f"got {self.hashing.on_error!r}"
            )
        min_peaks = self.hashing.min_peaks
        if isinstance(min_peaks, bool) or not isinstance(min_peaks, int) or min_peaks < 1:
            raise ConfigurationError(
                f"hashing.min_peaks must be a positive integer, got {min_peaks!r}"
            )
        if str(self.logging.level).upper() not in LOG_LEVELS:
            raise ConfigurationError(
                f"logging.level must be one of {LOG_LEVELS}, got {self.logging.level!r}"
            )
        if not isinstance(self.show_progress, bool):
            raise ConfigurationError("show_progress must be true or false")
        return self


def load_config(config_path: Optional[Path] = None) -> Settings:
    """Load configuration from YAML file."""
    path = find_config_path(config_path)
    if path is None:
        if config_path is not None:
            raise ConfigurationError(f"Config file not found: {config_path}")
        logger.debug("config.yml not found, using defaults")
        return Settings()

    logger.debug("Loading configuration from %s", path)
    return dict_to_dataclass(Settings, load_yaml(path)).validate()


# Global settings instance, loaded on first use so that importing the
# library never reads the working directory
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the global settings, loading config.yml on first call."""
    global _settings
    if _settings is None:
        _settings = load_config()
    return _settings


def reload_config(config_path: Optional[Path] = None) -> Settings:
    """Reload configuration from file."""
    global _settings
    _settings = load_config(config_path)
    return _settings
