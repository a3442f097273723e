"""Universal transcoding plugin lifecycle.

The host activates the plugin with register(context) and deactivates it
with unregister(). Both are methods of one TranscodingProfilePlugin
instance, which owns the transcoding manager handle between the two calls.
The module-level register/unregister names expose the default instance.
"""

from __future__ import annotations

import logging
from enum import Enum

from utp.config import get_config
from utp.host.exceptions import PluginStateError
from utp.host.interfaces import (
    PluginContext,
    PluginLogger,
    SettingsSnapshot,
    TranscodingManager,
)
from utp.logging import get_logger
from utp.models import ProfileRecipe
from utp.reconciler import (
    TRIGGER_MANUAL,
    TRIGGER_SETTINGS_CHANGE,
    TRIGGER_STARTUP,
    ProfileReconciler,
)
from utp.settings.schemas import SettingsSchema, get_schema

logger = logging.getLogger(__name__)


class PluginState(Enum):
    """Lifecycle state of the plugin."""

    UNREGISTERED = "unregistered"
    ACTIVE = "active"


class TranscodingProfilePlugin:
    """Registers encoder profiles derived from admin settings.

    Attributes:
        name: Plugin identifier.
        version: Plugin version.
        description: Human-readable description.
    """

    name: str = "universal-transcoding"
    version: str = "1.0.0"
    description: str = "Registers custom VOD encoder profiles from plugin settings"

    def __init__(self, schema: SettingsSchema | None = None) -> None:
        """Initialize the plugin.

        Args:
            schema: Settings schema to declare and reconcile with. If None,
                the schema named in the configuration is resolved at
                register() time.
        """
        self._schema = schema
        self._state = PluginState.UNREGISTERED
        self._manager: TranscodingManager | None = None
        self._log: PluginLogger | None = None
        self._reconciler: ProfileReconciler | None = None
        self._activation = 0

    @property
    def state(self) -> PluginState:
        """Current lifecycle state."""
        return self._state

    @property
    def is_active(self) -> bool:
        """True between register() and unregister()."""
        return self._state == PluginState.ACTIVE

    @property
    def schema(self) -> SettingsSchema | None:
        """Settings schema in use (None until resolved)."""
        return self._schema

    @property
    def current_recipe(self) -> ProfileRecipe | None:
        """Recipe currently registered with the host, if any."""
        if self._reconciler is None:
            return None
        return self._reconciler.current

    async def register(self, context: PluginContext) -> None:
        """Activate the plugin.

        Declares the schema's settings, subscribes to settings changes and
        runs the first reconciliation with the current settings. The change
        handler is installed before the initial read, but a change that lands
        while the read is in flight may be applied first and then replaced
        by the startup pass with the snapshot the read returned.

        Args:
            context: Host capabilities for this activation.

        Raises:
            PluginStateError: If the plugin is already active.
            SchemaNotFoundError: If the configured schema does not exist.
        """
        if self.is_active:
            raise PluginStateError("register", self._state.value)

        schema = self._resolve_schema()
        log = context.logger if context.logger is not None else get_logger(self.name)

        self._manager = context.transcoding_manager
        self._log = log
        reconciler = ProfileReconciler(context.transcoding_manager, log, schema)
        self._reconciler = reconciler
        self._state = PluginState.ACTIVE
        self._activation += 1
        activation = self._activation

        log.info(
            "Registering %s plugin v%s (schema: %s).",
            self.name,
            self.version,
            schema.name,
        )

        for descriptor in schema.descriptors:
            context.register_setting(descriptor.to_host())

        def handle_settings_change(settings: SettingsSnapshot) -> None:
            self._on_settings_change(activation, settings)

        context.settings_manager.on_settings_change(handle_settings_change)

        initial_settings = await context.settings_manager.get_settings(
            schema.setting_names
        )
        reconciler.reconcile(initial_settings, trigger=TRIGGER_STARTUP)

    async def unregister(self) -> None:
        """Deactivate the plugin, removing everything it registered.

        Safe to call without a prior register(); nothing happens then.
        """
        if self._manager is None:
            logger.debug("unregister() called while not registered, ignoring")
            return

        self._manager.remove_all_profiles_and_encoder_priorities()
        if self._log is not None:
            self._log.info("Removed all profiles and encoder priorities.")

        self._manager = None
        self._log = None
        self._reconciler = None
        self._state = PluginState.UNREGISTERED

    def reload(self, settings: SettingsSnapshot) -> ProfileRecipe | None:
        """Re-run reconciliation with an explicit snapshot.

        Raises:
            PluginStateError: If the plugin is not active.
        """
        if self._reconciler is None:
            raise PluginStateError("reload", self._state.value)
        return self._reconciler.reconcile(settings, trigger=TRIGGER_MANUAL)

    def _on_settings_change(self, activation: int, settings: SettingsSnapshot) -> None:
        # Subscriptions outlive unregister(); only the current activation reacts
        if (
            activation != self._activation
            or self._reconciler is None
            or self._log is None
        ):
            logger.debug("Ignoring settings change from a stale activation")
            return
        self._log.info("Plugin settings changed. Reloading transcoding profiles...")
        self._reconciler.reconcile(settings, trigger=TRIGGER_SETTINGS_CHANGE)

    def _resolve_schema(self) -> SettingsSchema:
        if self._schema is None:
            self._schema = get_schema(get_config().plugin.schema)
        return self._schema


# Default instance whose entry points the host calls
plugin_instance = TranscodingProfilePlugin()

register = plugin_instance.register
unregister = plugin_instance.unregister
