"""Configuration loading and validation module.

This module handles YAML configuration loading and provides a typed
Config dataclass consumed by the command-line entry point.
"""

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, Optional
import yaml


class ConfigError(Exception):
    """Raised when configuration is invalid or cannot be read."""
    pass


@dataclass
class SamplingConfig:
    """Sampling behavior configuration."""
    interval_minutes: int = 5

    @property
    def interval(self) -> timedelta:
        return timedelta(minutes=self.interval_minutes)


@dataclass
class InputConfig:
    """Input configuration. No path means the built-in example data."""
    path: Optional[str] = None


@dataclass
class OutputConfig:
    """Output configuration. No json_path means no JSON file is written."""
    json_path: Optional[str] = None


@dataclass
class Config:
    """Root configuration dataclass."""
    sampling: SamplingConfig = field(default_factory=SamplingConfig)
    input: InputConfig = field(default_factory=InputConfig)
    output: OutputConfig = field(default_factory=OutputConfig)


def default_config() -> Config:
    """Return a Config with every field at its default."""
    return Config()


def _get_nested(data: dict, path: str, default: Any = None) -> Any:
    """Get an optional nested value from a dictionary using dot notation.

    Args:
        data: The dictionary to search
        path: Dot-separated path to the value (e.g., "sampling.interval_minutes")
        default: Value returned when the path is missing

    Returns:
        The value at the path, or default if missing
    """
    keys = path.split(".")
    current = data

    for key in keys:
        if not isinstance(current, dict) or key not in current:
            return default
        current = current[key]

    return current


def _validate_type(value: Any, expected_type: type, field_name: str) -> None:
    """Validate that a value is of the expected type.

    Args:
        value: The value to validate
        expected_type: The expected type
        field_name: Name of the field for error messages

    Raises:
        ConfigError: If value is not of the expected type
    """
    if expected_type is int:
        if not isinstance(value, int) or isinstance(value, bool):
            raise ConfigError(
                f"Field '{field_name}' must be an integer, got {type(value).__name__}"
            )
    elif expected_type is str:
        if not isinstance(value, str):
            raise ConfigError(
                f"Field '{field_name}' must be a string, got {type(value).__name__}"
            )
    elif expected_type is dict:
        if not isinstance(value, dict):
            raise ConfigError(
                f"Section '{field_name}' must be a mapping, got {type(value).__name__}"
            )


def _get_section(data: dict, name: str) -> dict:
    """Get an optional top-level section, treating an empty one as absent."""
    section = _get_nested(data, name, default=None)
    if section is None:
        return {}
    _validate_type(section, dict, name)
    return section


def load_config(path: str) -> Config:
    """Load and validate configuration from a YAML file.

    Args:
        path: Path to the YAML configuration file

    Returns:
        Config: Validated configuration object

    Raises:
        ConfigError: If the file cannot be read or configuration is invalid
    """
    try:
        with open(path, 'r') as f:
            data = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise ConfigError(f"Configuration file not found: {path}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in configuration file: {e}") from e

    # An empty file selects all defaults
    if data is None:
        return default_config()

    if not isinstance(data, dict):
        raise ConfigError("Configuration file must contain a YAML dictionary")

    # Sampling configuration
    sampling_data = _get_section(data, "sampling")
    interval_minutes = _get_nested(sampling_data, "interval_minutes", default=5)
    _validate_type(interval_minutes, int, "sampling.interval_minutes")
    if interval_minutes <= 0:
        raise ConfigError("sampling.interval_minutes must be > 0")

    sampling = SamplingConfig(interval_minutes=interval_minutes)

    # Input configuration
    input_data = _get_section(data, "input")
    input_path = _get_nested(input_data, "path", default=None)
    if input_path is not None:
        _validate_type(input_path, str, "input.path")

    input_config = InputConfig(path=input_path)

    # Output configuration
    output_data = _get_section(data, "output")
    json_path = _get_nested(output_data, "json_path", default=None)
    if json_path is not None:
        _validate_type(json_path, str, "output.json_path")

    output = OutputConfig(json_path=json_path)

    return Config(
        sampling=sampling,
        input=input_config,
        output=output
    )
