"""Logging setup for the utp CLI.

configure_logging() only replaces handlers it installed itself, so calling
it inside a host process leaves the host's own handlers alone.
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING

from utp.logging.context import ReconcileContextFilter
from utp.logging.handlers import JSONFormatter

if TYPE_CHECKING:
    from utp.config.models import LoggingConfig

logger = logging.getLogger(__name__)

TEXT_FORMAT = "%(asctime)s - %(reconcile_tag)s%(name)s - %(levelname)s - %(message)s"

# Marks handlers owned by configure_logging()
_OWNED = "_utp_owned"


def installed_handlers(root: logging.Logger | None = None) -> list[logging.Handler]:
    """Handlers on the root logger that configure_logging() installed."""
    root = root or logging.getLogger()
    return [h for h in root.handlers if getattr(h, _OWNED, False)]


def _formatter(config: LoggingConfig) -> logging.Formatter:
    if config.format.casefold() == "json":
        return JSONFormatter()
    return logging.Formatter(TEXT_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S%z")


def _open_log_file(config: LoggingConfig) -> logging.Handler:
    """Open the rotating log file, creating its directory.

    Raises:
        OSError: If the directory or file cannot be created.
    """
    path = Path(config.file).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    return RotatingFileHandler(
        path,
        maxBytes=config.max_bytes,
        backupCount=config.backup_count,
        encoding="utf-8",
    )


def configure_logging(config: LoggingConfig) -> None:
    """Apply a LoggingConfig to the root logger.

    Logs go to config.file when set (and also to stderr with
    include_stderr), otherwise to stderr. A log file that cannot be opened
    is reported as a warning on stderr.
    """
    level = logging.getLevelName(config.level.upper())
    root = logging.getLogger()
    root.setLevel(level)
    for handler in installed_handlers(root):
        root.removeHandler(handler)
        handler.close()

    handlers: list[logging.Handler] = []
    file_error: OSError | None = None
    if config.file:
        try:
            handlers.append(_open_log_file(config))
        except OSError as e:
            file_error = e
    if config.include_stderr or not handlers:
        handlers.append(logging.StreamHandler(sys.stderr))

    formatter = _formatter(config)
    context_filter = ReconcileContextFilter()
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        handler.addFilter(context_filter)
        setattr(handler, _OWNED, True)
        root.addHandler(handler)

    if file_error is not None:
        logger.warning(
            "Could not open log file %s, logging to stderr: %s",
            config.file,
            file_error,
        )
