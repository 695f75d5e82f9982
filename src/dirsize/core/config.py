"""Configuration system for the dirsize application.

Settings can come from an optional YAML file holding a ``scan`` and a
``logging`` section. Command-line flags take precedence over file values,
which take precedence over the built-in defaults.

Example file::

    scan:
      threads: 8
      unit: MiB
    logging:
      log_level: INFO
"""

from pathlib import Path
from typing import Annotated

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from dirsize.utils.units import DEFAULT_UNIT, ByteUnit


class ScanSettings(BaseModel):
    """Defaults applied to every traversal request."""

    model_config: ConfigDict = ConfigDict(extra="forbid")  # pyright: ignore[reportIncompatibleVariableOverride]

    threads: Annotated[
        int | None,
        Field(gt=0, description="Worker pool size, None for available CPUs"),
    ] = None
    unit: Annotated[
        ByteUnit,
        Field(description="Display unit for the total size"),
    ] = DEFAULT_UNIT
    verbose: Annotated[
        bool,
        Field(description="Print every file with its adjusted size"),
    ] = False

    @field_validator("unit", mode="before")
    @classmethod
    def parse_unit(cls, v: object) -> object:
        """Accept unit names case-insensitively.

        Raises:
            ValueError: If the unit name is unknown
        """
        if isinstance(v, str):
            return ByteUnit.parse(v)
        return v


class LoggingSettings(BaseModel):
    """Configuration for diagnostic logging."""

    model_config: ConfigDict = ConfigDict(extra="forbid")  # pyright: ignore[reportIncompatibleVariableOverride]

    log_level: Annotated[
        str,
        Field(
            description="Logging level",
            pattern=r"^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        ),
    ] = "WARNING"

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: object) -> object:
        if isinstance(v, str):
            return v.strip().upper()
        return v


class DirsizeConfig(BaseModel):
    """Top-level configuration container."""

    model_config: ConfigDict = ConfigDict(extra="forbid")  # pyright: ignore[reportIncompatibleVariableOverride]

    scan: Annotated[ScanSettings, Field(description="Traversal defaults")] = ScanSettings()
    logging: Annotated[LoggingSettings, Field(description="Logging configuration")] = LoggingSettings()


class ConfigurationError(Exception):
    """Exception raised when a settings file cannot be used.

    Messages name the file and say what to change.
    """


def _read_settings_file(config_path: Path) -> dict[str, object]:
    """Parse ``config_path`` into a mapping; an empty file yields ``{}``."""
    try:
        text = config_path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        msg = f"Configuration file not found: {config_path}\nCreate the file or omit --config to use defaults."
        raise ConfigurationError(msg) from e
    except OSError as e:
        msg = f"Failed to read configuration file: {config_path}\nError: {e}"
        raise ConfigurationError(msg) from e

    try:
        raw_data: object = yaml.safe_load(text)  # pyright: ignore[reportAny]  # YAML boundary
    except yaml.YAMLError as e:
        msg = f"Failed to parse YAML configuration file: {config_path}\n{e}"
        raise ConfigurationError(msg) from e

    if raw_data is None:
        return {}
    if not isinstance(raw_data, dict):
        msg = (
            f"Invalid configuration file format: {config_path}\n"
            f"Expected YAML dictionary with 'scan' and 'logging' sections, got: {type(raw_data).__name__}"
        )
        raise ConfigurationError(msg)
    return raw_data  # pyright: ignore[reportUnknownVariableType]  # YAML boundary


def _describe_validation_error(error: ValidationError, config_path: Path) -> str:
    lines = ["Configuration validation failed:"]
    for detail in error.errors():
        field_path = " → ".join(str(loc) for loc in detail["loc"])
        lines.append(f"  {field_path}: {detail['msg']}")
    lines.append(f"Configuration file: {config_path}")
    return "\n".join(lines)


def load_config(config_path: Path | None = None) -> DirsizeConfig:
    """Load and validate settings from a YAML file.

    Args:
        config_path: Path to the YAML file, or None for built-in defaults

    Returns:
        Validated DirsizeConfig instance

    Raises:
        ConfigurationError: If the file cannot be read, parsed or validated
    """
    if config_path is None:
        return DirsizeConfig()

    raw_data = _read_settings_file(config_path)
    try:
        return DirsizeConfig.model_validate(raw_data)
    except ValidationError as e:
        raise ConfigurationError(_describe_validation_error(e, config_path)) from e
