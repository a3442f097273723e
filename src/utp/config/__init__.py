"""Configuration management for the transcoding plugin.

Configuration is loaded with precedence handling:
1. CLI flags (highest priority)
2. Environment variables (UTP_*)
3. Config file (~/.utp/config.toml)
4. Default values (lowest priority)
"""

from utp.config.env import EnvReader
from utp.config.loader import (
    ConfigError,
    get_config,
    get_default_config_path,
    load_config_file,
    validate_config,
)
from utp.config.logging_factory import (
    build_logging_config,
    configure_logging_from_cli,
)
from utp.config.models import (
    LoggingConfig,
    PluginConfig,
    UTPConfig,
)

__all__ = [
    # Models
    "LoggingConfig",
    "PluginConfig",
    "UTPConfig",
    # Loader
    "ConfigError",
    "get_config",
    "get_default_config_path",
    "load_config_file",
    "validate_config",
    # Environment
    "EnvReader",
    # Logging factory
    "build_logging_config",
    "configure_logging_from_cli",
]
