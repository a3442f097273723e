"""Reader for the UTP_* environment variables.

Every variable the plugin reads is a string or a path, and an empty value
counts as unset so ``UTP_SCHEMA=`` does not override the config file.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path


class EnvReader:
    """Reads UTP_* variables from os.environ or an injected mapping.

    Example:
        reader = EnvReader(env={"UTP_SCHEMA": "preset"})
        reader.get_str("UTP_SCHEMA", "free-text")  # "preset"
    """

    def __init__(self, env: Mapping[str, str] | None = None) -> None:
        """Initialize the reader.

        Args:
            env: Mapping to read instead of os.environ (used by tests).
        """
        self._env: Mapping[str, str] = env if env is not None else os.environ

    def get_str(self, var: str, default: str | None = None) -> str | None:
        """Return the variable's value, or default if unset or empty."""
        return self._env.get(var) or default

    def get_path(self, var: str, default: Path | None = None) -> Path | None:
        """Return the variable as a Path with ~ expanded, or default."""
        value = self._env.get(var)
        if not value:
            return default
        return Path(value).expanduser()
