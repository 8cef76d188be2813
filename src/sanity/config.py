"""Configuration management for sanity using Pydantic models."""

import json
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

CONFIG_FILE_NAME = ".sanity.json"


class LengthUnit(str, Enum):
    """How maxlen/minlen measure a string."""
    BYTES = "bytes"
    CHARS = "chars"


class LogLevel(str, Enum):
    """Logging levels."""
    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"


class LoggingConfig(BaseModel):
    """Logging configuration section."""
    level: LogLevel = LogLevel.WARN

    model_config = ConfigDict(use_enum_values=True)


class SanityConfig(BaseModel):
    """Complete sanity configuration model."""
    skip_unannotated: bool = Field(alias="skipUnannotated", default=False)
    report_invalid_rules: bool = Field(alias="reportInvalidRules", default=False)
    length_unit: LengthUnit = Field(alias="lengthUnit", default=LengthUnit.BYTES)
    max_depth: int = Field(alias="maxDepth", default=64)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("max_depth")
    @classmethod
    def validate_max_depth(cls, v):
        if v < 1:
            raise ValueError("max_depth must be >= 1")
        return v

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True, extra="forbid")


def load_config(config_path: str | Path | None = None) -> SanityConfig:
    """Load configuration from file with fallback to defaults.

    Args:
        config_path: Optional path to configuration file. If None, searches
                    current directory and parents for .sanity.json

    Returns:
        SanityConfig: Loaded and validated configuration

    Raises:
        ValueError: If the file is not valid JSON or the configuration is invalid
    """
    if config_path is None:
        config_path = find_config_file()
    else:
        config_path = Path(config_path)

    if config_path and config_path.exists():
        try:
            with open(config_path, encoding="utf-8") as f:
                config_data = json.load(f)
            return SanityConfig(**config_data)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in config file {config_path}: {e}")
        except ValidationError as e:
            raise ValueError(f"Failed to load config from {config_path}: {e}")

    return create_default_config()


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Find .sanity.json configuration file by searching up directory tree.

    Args:
        start_dir: Directory to start search from (default: current directory)

    Returns:
        Path to config file if found, None otherwise
    """
    if start_dir is None:
        start_dir = Path.cwd()

    current = Path(start_dir).resolve()

    while True:
        config_file = current / CONFIG_FILE_NAME
        if config_file.exists():
            return config_file

        parent = current.parent
        if parent == current:  # Reached root directory
            break
        current = parent

    return None


def create_default_config() -> SanityConfig:
    """Create default configuration.

    Defaults reproduce the historical behavior: abandonment on unannotated
    fields, silent malformed parameters and byte-based string lengths.
    """
    return SanityConfig()
