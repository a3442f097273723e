"""Host-facing contracts for the transcoding plugin.

Protocols for the host capabilities the plugin consumes, the activation
context, plugin exceptions, and in-memory host implementations.
"""

from utp.host.exceptions import (
    PluginError,
    PluginStateError,
    SchemaNotFoundError,
)
from utp.host.interfaces import (
    PluginContext,
    PluginLogger,
    ProfileFactory,
    SettingsManager,
    SettingsSnapshot,
    TranscodingManager,
)
from utp.host.memory import (
    InMemorySettingsManager,
    InMemoryTranscodingManager,
    SettingsCollector,
    build_context,
)

__all__ = [
    # Interfaces
    "PluginContext",
    "PluginLogger",
    "ProfileFactory",
    "SettingsManager",
    "SettingsSnapshot",
    "TranscodingManager",
    # Exceptions
    "PluginError",
    "PluginStateError",
    "SchemaNotFoundError",
    # In-memory host
    "InMemorySettingsManager",
    "InMemoryTranscodingManager",
    "SettingsCollector",
    "build_context",
]
