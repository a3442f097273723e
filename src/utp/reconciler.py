"""Profile reconciliation.

A reconciliation pass replaces everything this plugin registered with the
host by the registrations derived from one settings snapshot:

1. Clear all profiles and priorities previously registered.
2. Parse the snapshot with the active settings schema.
3. If a required field is unset, warn and stop (nothing is registered).
4. Register the video and audio profiles, linked by profile name.
5. Register the video and audio encoder priorities.

Every pass is a full, self-contained replacement, so running it twice with
the same snapshot leaves the same state, and running it with a new snapshot
leaves nothing behind from the old one.
"""

from __future__ import annotations

import logging

from utp.host.interfaces import PluginLogger, SettingsSnapshot, TranscodingManager
from utp.logging import reconcile_context
from utp.models import ProfileRecipe
from utp.settings.schemas import DEFAULT_SCHEMA, SettingsSchema, get_schema

logger = logging.getLogger(__name__)

TRIGGER_STARTUP = "startup"
TRIGGER_SETTINGS_CHANGE = "settings-change"
TRIGGER_MANUAL = "manual"


class ProfileReconciler:
    """Applies settings snapshots to a host transcoding manager.

    Host call failures are not caught: they propagate to whoever triggered
    the pass.
    """

    def __init__(
        self,
        manager: TranscodingManager,
        log: PluginLogger,
        schema: SettingsSchema | None = None,
    ) -> None:
        """Initialize the reconciler.

        Args:
            manager: Host transcoding manager receiving registrations.
            log: Host-provided logger for operator-facing messages.
            schema: Settings schema; defaults to the free-text schema.
        """
        self._manager = manager
        self._log = log
        self._schema = schema or get_schema(DEFAULT_SCHEMA)
        self._pass_count = 0
        self._current: ProfileRecipe | None = None

    @property
    def schema(self) -> SettingsSchema:
        """Settings schema used to interpret snapshots."""
        return self._schema

    @property
    def pass_count(self) -> int:
        """Number of reconciliation passes run so far."""
        return self._pass_count

    @property
    def current(self) -> ProfileRecipe | None:
        """Recipe registered by the last pass, or None if it registered nothing."""
        return self._current

    def reconcile(
        self, settings: SettingsSnapshot | None, trigger: str = TRIGGER_MANUAL
    ) -> ProfileRecipe | None:
        """Run one reconciliation pass.

        Args:
            settings: Settings snapshot from the host.
            trigger: What started the pass (used to tag log records).

        Returns:
            The registered recipe, or None if required settings are missing.
        """
        self._pass_count += 1
        with reconcile_context(self._pass_count, trigger):
            return self._run(settings)

    def clear(self) -> None:
        """Remove everything this plugin registered with the host."""
        self._manager.remove_all_profiles_and_encoder_priorities()
        self._current = None

    def _run(self, settings: SettingsSnapshot | None) -> ProfileRecipe | None:
        self.clear()

        parsed = self._schema.parse(settings)
        missing = parsed.missing_required()
        if missing:
            self._log.warning(
                "Required settings are not set (%s). Skipping profile registration.",
                ", ".join(missing),
            )
            return None

        recipe = self._schema.build_recipe(parsed, self._log)
        self._log.info(
            "Updating profile '%s' with video encoder '%s' and audio encoder '%s'.",
            recipe.profile_name,
            recipe.video.codec,
            recipe.audio.codec,
        )

        for profile in recipe.profiles:
            self._manager.add_vod_profile(
                profile.codec, profile.profile_name, profile.factory()
            )
            logger.debug(
                "Registered profile %s/%s: input=%s output=%s",
                profile.codec,
                profile.profile_name,
                profile.options.input_options,
                profile.options.output_options,
                extra={"profile": profile.profile_name, "codec": profile.codec},
            )

        for priority in recipe.priorities:
            self._manager.add_vod_encoder_priority(
                priority.kind.value, priority.codec, priority.priority
            )
            logger.debug(
                "Registered %s encoder priority %s=%d",
                priority.kind.value,
                priority.codec,
                priority.priority,
                extra={"kind": priority.kind.value, "codec": priority.codec},
            )

        self._current = recipe
        return recipe


def reconcile(
    settings: SettingsSnapshot | None,
    manager: TranscodingManager,
    log: PluginLogger,
    schema: SettingsSchema | None = None,
) -> ProfileRecipe | None:
    """Run a single reconciliation pass against a manager.

    Convenience wrapper around ProfileReconciler for one-off use.

    Args:
        settings: Settings snapshot.
        manager: Host transcoding manager.
        log: Logger for operator-facing messages.
        schema: Settings schema; defaults to the free-text schema.

    Returns:
        The registered recipe, or None if required settings are missing.
    """
    return ProfileReconciler(manager, log, schema).reconcile(settings)
