"""Pydantic models for settings snapshots.

The host delivers a loosely typed mapping of setting name to value. These
models normalize it: hyphenated keys become attributes, blank values become
None, and the encoder priority is coerced to an int. Every field is
optional; deciding what is required is the reconciler's job.
"""

from __future__ import annotations

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

from utp.models import DEFAULT_ENCODER_PRIORITY


def normalize_setting_value(value: Any) -> str | None:
    """Normalize a raw setting value to a stripped string or None.

    Numbers from number widgets are converted with str(). Blank strings
    become None.
    """
    if value is None:
        return None
    if not isinstance(value, str):
        value = str(value)
    value = value.strip()
    return value or None


def parse_priority(value: Any, default: int = DEFAULT_ENCODER_PRIORITY) -> int:
    """Parse an encoder priority, falling back to the default.

    Args:
        value: Raw setting value (string, int, or None).
        default: Priority used when the value is absent or not an integer.

    Returns:
        Parsed integer priority. Zero and negative values are kept.
        Partially numeric strings such as "12.5" or "900abc" give the
        default; no leading-digit parsing is done.
    """
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    text = normalize_setting_value(value)
    if text is None:
        return default
    try:
        return int(text)
    except ValueError:
        return default


class ProfileSettings(BaseModel):
    """Settings shared by every schema: codecs, profile name, priority."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    # Fields that must be set before anything is registered
    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = (
        "video_codec",
        "audio_codec",
        "profile_name",
    )

    video_codec: str | None = Field(default=None, alias="video-codec-name")
    audio_codec: str | None = Field(default=None, alias="audio-codec-name")
    profile_name: str | None = Field(default=None, alias="profile-name")
    encoder_priority: int = Field(
        default=DEFAULT_ENCODER_PRIORITY, alias="encoder-priority"
    )

    @field_validator("video_codec", "audio_codec", "profile_name", mode="before")
    @classmethod
    def _normalize_text(cls, v: Any) -> str | None:
        return normalize_setting_value(v)

    @field_validator("encoder_priority", mode="before")
    @classmethod
    def _parse_priority(cls, v: Any) -> int:
        return parse_priority(v)

    def missing_required(self) -> list[str]:
        """Setting names of required fields that are unset.

        Returns:
            Hyphenated setting names, in declaration order.
        """
        return [
            type(self).model_fields[name].alias or name
            for name in self.REQUIRED_FIELDS
            if getattr(self, name) is None
        ]


class FreeTextSettings(ProfileSettings):
    """Settings for the free-text schema: four raw option strings."""

    video_input_options: str | None = Field(default=None, alias="video-input-options")
    video_output_options: str | None = Field(
        default=None, alias="video-output-options"
    )
    audio_input_options: str | None = Field(default=None, alias="audio-input-options")
    audio_output_options: str | None = Field(
        default=None, alias="audio-output-options"
    )

    @field_validator(
        "video_input_options",
        "video_output_options",
        "audio_input_options",
        "audio_output_options",
        mode="before",
    )
    @classmethod
    def _normalize_options(cls, v: Any) -> str | None:
        return normalize_setting_value(v)


class PresetSettings(ProfileSettings):
    """Settings for the preset schema: fixed quality selectors.

    Values are kept as strings here; the preset schema interprets them and
    warns about the ones it cannot use.
    """

    video_crf: str | None = Field(default=None, alias="video-crf")
    video_deadline: str | None = Field(default=None, alias="video-deadline")
    video_bitrate: str | None = Field(default=None, alias="video-bitrate")
    audio_bitrate: str | None = Field(default=None, alias="audio-bitrate")
    video_extra_options: str | None = Field(default=None, alias="video-extra-options")

    @field_validator(
        "video_crf",
        "video_deadline",
        "video_bitrate",
        "audio_bitrate",
        "video_extra_options",
        mode="before",
    )
    @classmethod
    def _normalize_presets(cls, v: Any) -> str | None:
        return normalize_setting_value(v)
