"""Unit tests for settings snapshot models."""

import pytest

from utp.settings.models import (
    FreeTextSettings,
    PresetSettings,
    ProfileSettings,
    normalize_setting_value,
    parse_priority,
)


class TestNormalizeSettingValue:
    """Tests for normalize_setting_value()."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (None, None),
            ("", None),
            ("   ", None),
            ("  libopus ", "libopus"),
            (900, "900"),
            (1.5, "1.5"),
        ],
    )
    def test_normalize(self, value, expected) -> None:
        """Values are stripped strings, blanks become None."""
        assert normalize_setting_value(value) == expected


class TestParsePriority:
    """Tests for parse_priority()."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("900", 900),
            (" 42 ", 42),
            (750, 750),
            ("0", 0),
            ("-5", -5),
            (None, 1000),
            ("", 1000),
            ("high", 1000),
            ("12.5", 1000),
            ("900abc", 1000),
            (True, 1000),
        ],
    )
    def test_parse(self, value, expected) -> None:
        """Integers are kept, everything else uses the default."""
        assert parse_priority(value) == expected

    def test_custom_default(self) -> None:
        """The fallback can be overridden."""
        assert parse_priority(None, default=7) == 7


class TestProfileSettings:
    """Tests for ProfileSettings."""

    def test_aliases(self) -> None:
        """Hyphenated setting names map to attributes."""
        settings = ProfileSettings.model_validate(
            {
                "video-codec-name": "libvpx-vp9",
                "audio-codec-name": "libopus",
                "profile-name": "vp9",
                "encoder-priority": "900",
            }
        )

        assert settings.video_codec == "libvpx-vp9"
        assert settings.audio_codec == "libopus"
        assert settings.profile_name == "vp9"
        assert settings.encoder_priority == 900

    def test_unknown_keys_ignored(self) -> None:
        """Settings of other schemas do not fail validation."""
        settings = ProfileSettings.model_validate({"something-else": "x"})
        assert settings.video_codec is None

    def test_missing_required_order(self) -> None:
        """Missing fields are reported by setting name in order."""
        settings = ProfileSettings.model_validate({"audio-codec-name": "aac"})
        assert settings.missing_required() == ["video-codec-name", "profile-name"]

    def test_nothing_missing(self) -> None:
        """A complete snapshot has no missing fields."""
        settings = ProfileSettings.model_validate(
            {
                "video-codec-name": "a",
                "audio-codec-name": "b",
                "profile-name": "c",
            }
        )
        assert settings.missing_required() == []
        assert settings.encoder_priority == 1000

    def test_frozen(self) -> None:
        """Parsed settings are immutable."""
        settings = ProfileSettings()
        with pytest.raises(ValueError):
            settings.video_codec = "x"


class TestSchemaSettings:
    """Tests for the schema-specific models."""

    def test_free_text_options(self) -> None:
        """Option strings are normalized."""
        settings = FreeTextSettings.model_validate(
            {"video-output-options": " -crf 32 ", "audio-input-options": ""}
        )
        assert settings.video_output_options == "-crf 32"
        assert settings.audio_input_options is None

    def test_preset_values_are_strings(self) -> None:
        """Preset selectors are kept as strings for later validation."""
        settings = PresetSettings.model_validate(
            {"video-crf": 30, "video-deadline": " best ", "audio-bitrate": ""}
        )
        assert settings.video_crf == "30"
        assert settings.video_deadline == "best"
        assert settings.audio_bitrate is None
