"""Structured logging for the transcoding plugin.

Provides configurable logging with JSON format support and file rotation,
plus reconciliation-pass context for log records.
"""

import logging

from utp.logging.config import configure_logging
from utp.logging.context import (
    ReconcileContextFilter,
    get_reconcile_context,
    reconcile_context,
)
from utp.logging.handlers import JSONFormatter


def get_logger(plugin_name: str) -> logging.Logger:
    """Get a logger configured for a plugin.

    Loggers are named 'plugin.<plugin_name>' and inherit from the root
    logger configuration.

    Args:
        plugin_name: Plugin identifier (used in log messages).

    Returns:
        Configured Logger instance.
    """
    return logging.getLogger(f"plugin.{plugin_name}")


__all__ = [
    "JSONFormatter",
    "ReconcileContextFilter",
    "configure_logging",
    "get_logger",
    "get_reconcile_context",
    "reconcile_context",
]
