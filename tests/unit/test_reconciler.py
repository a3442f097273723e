"""Unit tests for profile reconciliation."""

import logging
from unittest.mock import MagicMock

import pytest

from utp.host.memory import InMemoryTranscodingManager
from utp.logging import get_reconcile_context
from utp.reconciler import (
    TRIGGER_SETTINGS_CHANGE,
    TRIGGER_STARTUP,
    ProfileReconciler,
    reconcile,
)
from utp.settings.schemas import get_schema

REMOVE_ALL = "remove_all_profiles_and_encoder_priorities"


class TestReconcileRegistration:
    """Tests for what a pass registers."""

    def test_vp9_opus_scenario(
        self, vp9_settings, manager: InMemoryTranscodingManager, mock_log
    ) -> None:
        """Registers both profiles and both priorities in order."""
        recipe = reconcile(vp9_settings, manager, mock_log)

        assert recipe is not None
        assert manager.calls == [
            (REMOVE_ALL, ()),
            ("add_vod_profile", ("libvpx-vp9", "vp9-opt")),
            ("add_vod_profile", ("libopus", "vp9-opt")),
            ("add_vod_encoder_priority", ("video", "libvpx-vp9", 900)),
            ("add_vod_encoder_priority", ("audio", "libopus", 900)),
        ]
        assert manager.resolve_profile("libvpx-vp9", "vp9-opt") == {
            "inputOptions": [],
            "outputOptions": ["-crf", "32", "-b:v", "5M"],
        }
        assert manager.resolve_profile("libopus", "vp9-opt") == {
            "inputOptions": [],
            "outputOptions": ["-b:a", "192k"],
        }

    def test_logs_update_message(self, vp9_settings, manager, mock_log) -> None:
        """An info line names the profile and both encoders."""
        reconcile(vp9_settings, manager, mock_log)

        mock_log.info.assert_called_once_with(
            "Updating profile '%s' with video encoder '%s' and audio encoder '%s'.",
            "vp9-opt",
            "libvpx-vp9",
            "libopus",
        )
        mock_log.warning.assert_not_called()

    @pytest.mark.parametrize("value", [None, "", "abc", "12.5"])
    def test_default_priority(self, vp9_settings, manager, mock_log, value) -> None:
        """Absent or non-integer priority falls back to 1000."""
        vp9_settings["encoder-priority"] = value
        reconcile(vp9_settings, manager, mock_log)

        assert manager.priorities == {
            ("video", "libvpx-vp9"): 1000,
            ("audio", "libopus"): 1000,
        }

    def test_missing_priority_key(self, vp9_settings, manager, mock_log) -> None:
        """A snapshot without encoder-priority uses 1000."""
        del vp9_settings["encoder-priority"]
        recipe = reconcile(vp9_settings, manager, mock_log)

        assert recipe is not None
        assert recipe.priority == 1000

    def test_zero_priority_kept(self, vp9_settings, manager, mock_log) -> None:
        """Zero is a valid integer priority."""
        vp9_settings["encoder-priority"] = "0"
        reconcile(vp9_settings, manager, mock_log)

        assert set(manager.priorities.values()) == {0}

    def test_numeric_priority(self, vp9_settings, manager, mock_log) -> None:
        """Number widgets may deliver an int."""
        vp9_settings["encoder-priority"] = 750
        reconcile(vp9_settings, manager, mock_log)

        assert set(manager.priorities.values()) == {750}

    def test_input_options_parsed(self, vp9_settings, manager, mock_log) -> None:
        """Input option strings are tokenized too."""
        vp9_settings["video-input-options"] = "-thread_queue_size 512"
        reconcile(vp9_settings, manager, mock_log)

        resolved = manager.resolve_profile("libvpx-vp9", "vp9-opt")
        assert resolved["inputOptions"] == ["-thread_queue_size", "512"]

    def test_codec_values_are_stripped(self, vp9_settings, manager, mock_log) -> None:
        """Surrounding whitespace in text settings is ignored."""
        vp9_settings["video-codec-name"] = "  libx264 "
        reconcile(vp9_settings, manager, mock_log)

        assert ("libx264", "vp9-opt") in manager.profiles


class TestReconcileGate:
    """Tests for the required-settings gate."""

    @pytest.mark.parametrize(
        "name", ["video-codec-name", "audio-codec-name", "profile-name"]
    )
    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_missing_required_registers_nothing(
        self, vp9_settings, manager, mock_log, name, value
    ) -> None:
        """A blank required field clears and registers nothing."""
        vp9_settings[name] = value
        result = reconcile(vp9_settings, manager, mock_log)

        assert result is None
        assert manager.calls == [(REMOVE_ALL, ())]
        mock_log.warning.assert_called_once()
        assert name in mock_log.warning.call_args.args[1]

    def test_warning_lists_all_missing(self, manager, mock_log) -> None:
        """The warning names every missing field in declaration order."""
        reconcile({}, manager, mock_log)

        mock_log.warning.assert_called_once_with(
            "Required settings are not set (%s). Skipping profile registration.",
            "video-codec-name, audio-codec-name, profile-name",
        )

    def test_none_snapshot(self, manager, mock_log) -> None:
        """A None snapshot behaves like an empty one."""
        assert reconcile(None, manager, mock_log) is None
        assert manager.profiles == {}

    def test_gate_clears_previous_registration(
        self, vp9_settings, manager, mock_log
    ) -> None:
        """Blanking a required field removes the old profile."""
        reconciler = ProfileReconciler(manager, mock_log)
        reconciler.reconcile(vp9_settings)
        vp9_settings["profile-name"] = ""
        reconciler.reconcile(vp9_settings)

        assert manager.profiles == {}
        assert manager.priorities == {}
        assert reconciler.current is None


class TestReconcileIdempotence:
    """Tests for repeated passes."""

    def test_same_snapshot_same_state(self, vp9_settings, manager, mock_log) -> None:
        """Running twice with one snapshot leaves the same state."""
        reconciler = ProfileReconciler(manager, mock_log)
        reconciler.reconcile(vp9_settings)
        first = manager.registered_state()
        reconciler.reconcile(vp9_settings)

        assert manager.registered_state() == first
        assert manager.call_count(REMOVE_ALL) == 2

    def test_new_snapshot_replaces_old(self, vp9_settings, manager, mock_log) -> None:
        """Nothing from the previous snapshot survives."""
        reconciler = ProfileReconciler(manager, mock_log)
        reconciler.reconcile(vp9_settings)

        changed = dict(vp9_settings)
        changed["video-codec-name"] = "libx264"
        changed["profile-name"] = "h264-opt"
        changed["video-output-options"] = "-crf 23"
        reconciler.reconcile(changed)

        assert set(manager.profiles) == {
            ("libx264", "h264-opt"),
            ("libopus", "h264-opt"),
        }
        assert ("video", "libvpx-vp9") not in manager.priorities
        assert manager.resolve_profile("libx264", "h264-opt")["outputOptions"] == [
            "-crf",
            "23",
        ]

    def test_factory_captures_values(self, vp9_settings, manager, mock_log) -> None:
        """A registered factory ignores later changes to the snapshot."""
        reconcile(vp9_settings, manager, mock_log)
        factory = manager.profiles[("libvpx-vp9", "vp9-opt")]

        vp9_settings["video-output-options"] = "-crf 10"

        assert factory()["outputOptions"] == ["-crf", "32", "-b:v", "5M"]


class TestReconcileErrors:
    """Tests for host failures."""

    def test_host_error_propagates(self, vp9_settings, mock_log) -> None:
        """A failing host call is not swallowed."""
        manager = MagicMock()
        manager.add_vod_profile.side_effect = RuntimeError("host down")

        with pytest.raises(RuntimeError, match="host down"):
            reconcile(vp9_settings, manager, mock_log)

        manager.remove_all_profiles_and_encoder_priorities.assert_called_once_with()
        manager.add_vod_encoder_priority.assert_not_called()


class TestProfileReconciler:
    """Tests for ProfileReconciler bookkeeping."""

    def test_default_schema_is_free_text(self, manager, mock_log) -> None:
        """Without a schema the free-text schema is used."""
        reconciler = ProfileReconciler(manager, mock_log)
        assert reconciler.schema.name == "free-text"

    def test_pass_count_and_current(self, vp9_settings, manager, mock_log) -> None:
        """Passes are counted and the last recipe is kept."""
        reconciler = ProfileReconciler(manager, mock_log)
        assert reconciler.pass_count == 0
        assert reconciler.current is None

        recipe = reconciler.reconcile(vp9_settings)

        assert reconciler.pass_count == 1
        assert reconciler.current == recipe

    def test_clear(self, vp9_settings, manager, mock_log) -> None:
        """clear() removes registrations and forgets the recipe."""
        reconciler = ProfileReconciler(manager, mock_log)
        reconciler.reconcile(vp9_settings)
        reconciler.clear()

        assert manager.profiles == {}
        assert reconciler.current is None

    def test_context_set_during_pass(self, vp9_settings, mock_log) -> None:
        """Host calls run inside the reconcile context."""
        seen = []
        manager = MagicMock()
        manager.remove_all_profiles_and_encoder_priorities.side_effect = (
            lambda: seen.append(get_reconcile_context())
        )
        reconciler = ProfileReconciler(manager, mock_log)

        reconciler.reconcile(vp9_settings, trigger=TRIGGER_STARTUP)
        reconciler.reconcile(vp9_settings, trigger=TRIGGER_SETTINGS_CHANGE)

        assert seen == [(1, "startup"), (2, "settings-change")]
        assert get_reconcile_context() == (None, None)

    def test_debug_logging(self, vp9_settings, manager, mock_log, caplog) -> None:
        """Each registration is logged at debug level."""
        with caplog.at_level(logging.DEBUG, logger="utp.reconciler"):
            reconcile(vp9_settings, manager, mock_log)

        messages = [r.getMessage() for r in caplog.records]
        assert "Registered video encoder priority libvpx-vp9=900" in messages
        assert any(m.startswith("Registered profile libopus/vp9-opt") for m in messages)

    def test_preset_schema(self, manager, mock_log) -> None:
        """The reconciler works with any schema."""
        settings = {
            "video-codec-name": "libvpx-vp9",
            "audio-codec-name": "libopus",
            "profile-name": "preset-vp9",
            "video-crf": "30",
            "video-deadline": "good",
            "video-bitrate": "0",
            "audio-bitrate": "128k",
        }
        reconciler = ProfileReconciler(manager, mock_log, get_schema("preset"))
        reconciler.reconcile(settings)

        assert manager.resolve_profile("libvpx-vp9", "preset-vp9") == {
            "inputOptions": [],
            "outputOptions": ["-crf", "30", "-b:v", "0", "-deadline", "good"],
        }
        assert manager.resolve_profile("libopus", "preset-vp9") == {
            "inputOptions": [],
            "outputOptions": ["-b:a", "128k"],
        }
