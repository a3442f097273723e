"""In-memory host implementations.

Stand-ins for the host's transcoding and settings managers, used by the
``utp preview`` command and the test suite. They record every call so a
caller can inspect exactly what the plugin registered.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from utp.host.interfaces import (
    PluginContext,
    PluginLogger,
    ProfileFactory,
    SettingsChangeHandler,
    SettingsSnapshot,
)

logger = logging.getLogger(__name__)


class InMemoryTranscodingManager:
    """Transcoding manager that keeps registrations in dicts.

    Profiles are keyed by (codec, profile_name) and priorities by
    (kind, codec); registering an existing key replaces it.

    Attributes:
        profiles: Registered profile factories.
        priorities: Registered encoder priorities.
        calls: Every call received, as (method_name, args) tuples.
    """

    def __init__(self) -> None:
        self.profiles: dict[tuple[str, str], ProfileFactory] = {}
        self.priorities: dict[tuple[str, str], int] = {}
        self.calls: list[tuple[str, tuple[Any, ...]]] = []

    def add_vod_profile(
        self, codec: str, profile_name: str, factory: ProfileFactory
    ) -> None:
        self.calls.append(("add_vod_profile", (codec, profile_name)))
        self.profiles[(codec, profile_name)] = factory

    def add_vod_encoder_priority(self, kind: str, codec: str, priority: int) -> None:
        self.calls.append(("add_vod_encoder_priority", (kind, codec, priority)))
        self.priorities[(kind, codec)] = priority

    def remove_all_profiles_and_encoder_priorities(self) -> None:
        self.calls.append(("remove_all_profiles_and_encoder_priorities", ()))
        self.profiles.clear()
        self.priorities.clear()

    def resolve_profile(self, codec: str, profile_name: str) -> dict[str, list[str]]:
        """Invoke a registered factory the way the host does at encode time.

        Raises:
            KeyError: If no such profile is registered.
        """
        return self.profiles[(codec, profile_name)]()

    def registered_state(self) -> dict[str, Any]:
        """Comparable snapshot of everything currently registered."""
        return {
            "profiles": {
                key: self.resolve_profile(*key) for key in sorted(self.profiles)
            },
            "priorities": dict(sorted(self.priorities.items())),
        }

    def call_count(self, method: str) -> int:
        """Number of times a manager method was called."""
        return sum(1 for name, _ in self.calls if name == method)


class InMemorySettingsManager:
    """Settings manager backed by a dict.

    update() merges changes and notifies subscribers synchronously, in
    subscription order, the way the host delivers settings-change events.
    """

    def __init__(self, settings: Mapping[str, Any] | None = None) -> None:
        self._settings: dict[str, Any] = dict(settings or {})
        self._handlers: list[SettingsChangeHandler] = []

    async def get_settings(self, names: list[str] | None = None) -> SettingsSnapshot:
        if names is None:
            return dict(self._settings)
        return {name: self._settings.get(name) for name in names}

    def on_settings_change(self, handler: SettingsChangeHandler) -> None:
        self._handlers.append(handler)

    @property
    def handler_count(self) -> int:
        """Number of subscribed settings-change handlers."""
        return len(self._handlers)

    def update(self, changes: Mapping[str, Any]) -> SettingsSnapshot:
        """Merge changes into the stored settings and notify subscribers.

        Returns:
            The new full snapshot delivered to handlers.
        """
        self._settings.update(changes)
        snapshot = dict(self._settings)
        logger.debug(
            "Settings changed (%s), notifying %d handler(s)",
            ", ".join(sorted(changes)),
            len(self._handlers),
        )
        for handler in self._handlers:
            handler(dict(snapshot))
        return snapshot


class SettingsCollector:
    """Callable that records register_setting() descriptors."""

    def __init__(self) -> None:
        self.descriptors: list[dict[str, Any]] = []

    def __call__(self, descriptor: dict[str, Any]) -> None:
        self.descriptors.append(dict(descriptor))

    @property
    def names(self) -> list[str]:
        """Declared setting names in declaration order."""
        return [d["name"] for d in self.descriptors]

    def defaults(self) -> dict[str, Any]:
        """Default value for every declared setting."""
        return {d["name"]: d.get("default") for d in self.descriptors}


def build_context(
    settings: Mapping[str, Any] | None = None,
    logger: PluginLogger | None = None,
) -> PluginContext:
    """Create a PluginContext wired to fresh in-memory host pieces.

    Args:
        settings: Initial settings values.
        logger: Logger to hand to the plugin (None uses the plugin logger).

    Returns:
        PluginContext whose members are InMemoryTranscodingManager,
        InMemorySettingsManager and SettingsCollector instances.
    """
    return PluginContext(
        register_setting=SettingsCollector(),
        settings_manager=InMemorySettingsManager(settings),
        transcoding_manager=InMemoryTranscodingManager(),
        logger=logger,
    )
