"""Configuration dataclasses."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class LoggingConfig:
    """Configuration for structured logging."""

    # Log level: debug, info, warning, error
    level: str = "info"

    # Log file path (None = stderr only)
    file: Path | None = None

    # Log format: text or json
    format: str = "text"

    # Also log to stderr when file is set
    include_stderr: bool = False

    # Rotation threshold in bytes (default 10MB)
    max_bytes: int = 10_485_760

    # Number of rotated files to keep
    backup_count: int = 5

    def __post_init__(self) -> None:
        """Validate configuration."""
        for name in ("level", "format"):
            value = getattr(self, name)
            if not isinstance(value, str):
                raise ValueError(
                    f"{name} must be a string, got {type(value).__name__} {value!r}"
                )
        if not isinstance(self.include_stderr, bool):
            raise ValueError(
                f"include_stderr must be a boolean, got {self.include_stderr!r}"
            )
        for name in ("max_bytes", "backup_count"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} must be an integer, got {value!r}")
        if self.file is not None and not isinstance(self.file, (str, Path)):
            raise ValueError(f"file must be a path string, got {self.file!r}")
        valid_levels = {"debug", "info", "warning", "error"}
        if self.level.lower() not in valid_levels:
            raise ValueError(f"level must be one of {valid_levels}, got {self.level}")
        valid_formats = {"text", "json"}
        if self.format.lower() not in valid_formats:
            raise ValueError(
                f"format must be one of {valid_formats}, got {self.format}"
            )
        if self.max_bytes < 0:
            raise ValueError(f"max_bytes must be non-negative, got {self.max_bytes}")
        if self.backup_count < 0:
            raise ValueError(
                f"backup_count must be non-negative, got {self.backup_count}"
            )


@dataclass
class PluginConfig:
    """Configuration for the plugin itself."""

    # Settings schema used when the plugin is not given one explicitly
    schema: str = "free-text"

    def __post_init__(self) -> None:
        """Validate configuration."""
        if not isinstance(self.schema, str):
            raise ValueError(f"schema must be a string, got {self.schema!r}")


@dataclass
class UTPConfig:
    """Main configuration."""

    plugin: PluginConfig = field(default_factory=PluginConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
