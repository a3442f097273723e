"""Configuration loader with precedence handling.

Configuration is loaded with the following precedence (highest to lowest):
1. CLI arguments (passed directly to functions)
2. Environment variables (UTP_*)
3. Config file (~/.utp/config.toml)
4. Default values

Environment variables:
- UTP_CONFIG_PATH: Path to config file (overrides default location)
- UTP_SCHEMA: Settings schema name (free-text, preset)
- UTP_LOG_LEVEL: Log level (debug, info, warning, error)
- UTP_LOG_FORMAT: Log format (text, json)
- UTP_LOG_FILE: Log file path
"""

from __future__ import annotations

import logging
import tomllib
from dataclasses import fields
from pathlib import Path
from typing import Any

from utp.config.env import EnvReader
from utp.config.models import LoggingConfig, PluginConfig, UTPConfig
from utp.settings.schemas import available_schemas

logger = logging.getLogger(__name__)

# Default config location
DEFAULT_CONFIG_DIR = Path.home() / ".utp"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.toml"


class ConfigError(Exception):
    """Configuration file could not be read or is invalid."""


def get_default_config_path(env_reader: EnvReader | None = None) -> Path:
    """Get the default config file path.

    Can be overridden by UTP_CONFIG_PATH environment variable.

    Returns:
        Path to config file.
    """
    reader = env_reader or EnvReader()
    path = reader.get_path("UTP_CONFIG_PATH")
    return path if path is not None else DEFAULT_CONFIG_FILE


def load_config_file(path: Path | None = None, *, strict: bool = False) -> dict:
    """Load configuration from TOML file.

    Args:
        path: Path to config file. If None, uses default location.
        strict: If True, raise ConfigError on read or parse failures.
                If False (default), log a warning and return empty dict.

    Returns:
        Parsed configuration dict. Empty dict if file doesn't exist.

    Raises:
        ConfigError: When strict=True and the file cannot be read or parsed.
    """
    if path is None:
        path = get_default_config_path()

    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except FileNotFoundError:
        return {}
    except (OSError, tomllib.TOMLDecodeError) as e:
        if strict:
            raise ConfigError(f"Cannot load config file {path}: {e}") from e
        logger.warning("Ignoring unreadable config file %s: %s", path, e)
        return {}


def _section(
    file_config: dict[str, Any], name: str, dataclass_type: type, *, strict: bool
) -> dict[str, Any]:
    """Return the known keys of one config file section."""
    data = file_config.get(name, {})
    if not isinstance(data, dict):
        if strict:
            raise ConfigError(f"Config section [{name}] must be a table")
        logger.warning("Ignoring config section [%s]: not a table", name)
        return {}

    expected = {f.name for f in fields(dataclass_type)}
    unknown = set(data) - expected
    if unknown:
        if strict:
            raise ConfigError(
                f"Unknown keys in [{name}] section: {sorted(unknown)}. "
                f"Valid keys are: {sorted(expected)}"
            )
        logger.warning("Ignoring unknown keys in [%s]: %s", name, sorted(unknown))
    return {k: v for k, v in data.items() if k in expected}


def get_config(
    config_path: Path | None = None,
    # CLI overrides (highest precedence)
    schema: str | None = None,
    # Optional dependency injection for testing
    env_reader: EnvReader | None = None,
    *,
    strict: bool = False,
) -> UTPConfig:
    """Get configuration with full precedence handling.

    Args:
        config_path: Path to config file (overrides UTP_CONFIG_PATH).
        schema: CLI override for the settings schema name.
        env_reader: Optional EnvReader for testing (uses os.environ if None).
        strict: If True, raise ConfigError on invalid config files.
                If False (default), fall back to defaults with a warning.

    Returns:
        UTPConfig with merged configuration.

    Raises:
        ConfigError: When strict=True and the config file is invalid.
    """
    reader = env_reader or EnvReader()
    if config_path is None:
        config_path = get_default_config_path(reader)

    file_config = load_config_file(config_path, strict=strict)

    # Plugin section: file < env < cli
    plugin_values = _section(file_config, "plugin", PluginConfig, strict=strict)
    env_schema = reader.get_str("UTP_SCHEMA")
    if env_schema is not None:
        plugin_values["schema"] = env_schema
    if schema is not None:
        plugin_values["schema"] = schema

    # Logging section: file < env
    logging_values = _section(file_config, "logging", LoggingConfig, strict=strict)
    if isinstance(logging_values.get("file"), str) and logging_values["file"]:
        logging_values["file"] = Path(logging_values["file"]).expanduser()
    env_level = reader.get_str("UTP_LOG_LEVEL")
    if env_level is not None:
        logging_values["level"] = env_level
    env_format = reader.get_str("UTP_LOG_FORMAT")
    if env_format is not None:
        logging_values["format"] = env_format
    env_file = reader.get_path("UTP_LOG_FILE")
    if env_file is not None:
        logging_values["file"] = env_file

    try:
        logging_config = LoggingConfig(**logging_values)
    except (TypeError, ValueError) as e:
        if strict:
            raise ConfigError(f"Invalid logging configuration: {e}") from e
        logger.warning("Invalid logging configuration, using defaults: %s", e)
        logging_config = LoggingConfig()

    try:
        plugin_config = PluginConfig(**plugin_values)
    except ValueError as e:
        if strict:
            raise ConfigError(f"Invalid plugin configuration: {e}") from e
        logger.warning("Invalid plugin configuration, using defaults: %s", e)
        plugin_config = PluginConfig()

    return UTPConfig(plugin=plugin_config, logging=logging_config)


def validate_config(config: UTPConfig) -> list[str]:
    """Validate cross-field configuration constraints.

    Args:
        config: The configuration to validate.

    Returns:
        List of error strings. Empty list means configuration is valid.
    """
    errors: list[str] = []

    if config.plugin.schema not in available_schemas():
        errors.append(
            f"Unknown settings schema '{config.plugin.schema}' "
            f"(available: {', '.join(available_schemas())})"
        )

    if config.logging.file is not None:
        log_dir = Path(config.logging.file).expanduser().parent
        if not log_dir.exists():
            errors.append(f"Log directory does not exist: {log_dir}")

    return errors
