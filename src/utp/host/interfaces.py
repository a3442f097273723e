"""Host interface protocols.

These are the capabilities the host video platform hands to the plugin at
activation. The plugin only ever talks to the host through them; the
host's encoder pipeline, scheduling and priority resolution are out of
reach.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

# Settings snapshot as delivered by the host: setting name -> value
SettingsSnapshot = Mapping[str, Any]

# Zero-argument builder returning {"inputOptions": [...], "outputOptions": [...]}
ProfileFactory = Callable[[], dict[str, list[str]]]

SettingsChangeHandler = Callable[[SettingsSnapshot], Any]

RegisterSetting = Callable[[dict[str, Any]], None]


@runtime_checkable
class TranscodingManager(Protocol):
    """Host transcoding manager scoped to this plugin.

    remove_all_profiles_and_encoder_priorities() only touches what this
    plugin registered and is safe to call when nothing is registered.
    """

    def add_vod_profile(
        self, codec: str, profile_name: str, factory: ProfileFactory
    ) -> None:
        """Register one encoder profile for VOD transcoding."""
        ...

    def add_vod_encoder_priority(self, kind: str, codec: str, priority: int) -> None:
        """Register a preference weight for an encoder ("video" or "audio")."""
        ...

    def remove_all_profiles_and_encoder_priorities(self) -> None:
        """Remove every profile and priority this plugin registered."""
        ...


@runtime_checkable
class SettingsManager(Protocol):
    """Host settings store for this plugin's declared fields."""

    def get_settings(
        self, names: list[str] | None = None
    ) -> Awaitable[SettingsSnapshot]:
        """Read current values for the named fields (all fields if None)."""
        ...

    def on_settings_change(self, handler: SettingsChangeHandler) -> None:
        """Subscribe to administrator edits of the plugin settings."""
        ...


@runtime_checkable
class PluginLogger(Protocol):
    """Subset of logging.Logger the plugin writes to."""

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None: ...

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None: ...

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None: ...


@dataclass
class PluginContext:
    """Everything the host passes to register().

    Attributes:
        register_setting: Declares one settings field with the host.
        settings_manager: Reads and watches settings values.
        transcoding_manager: Receives profile and priority registrations.
        logger: Host-provided logger. If None, the plugin's own
            ``plugin.<name>`` logger is used.
    """

    register_setting: RegisterSetting
    settings_manager: SettingsManager
    transcoding_manager: TranscodingManager
    logger: PluginLogger | None = None
