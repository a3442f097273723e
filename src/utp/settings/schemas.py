"""Settings schemas.

A schema describes which fields the plugin declares with the host and how
a settings snapshot turns into encoder options. The reconciler is
parametric over the schema, so one engine serves both the free-text style
(raw FFmpeg option strings) and the preset style (CRF, deadline and bitrate
selectors).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from utp.host.exceptions import SchemaNotFoundError
from utp.host.interfaces import PluginLogger
from utp.models import EncoderOptions, EncoderProfile, ProfileRecipe
from utp.options import parse_options_string
from utp.settings.descriptors import (
    FieldType,
    SelectOption,
    SettingDescriptor,
)
from utp.settings.models import FreeTextSettings, PresetSettings, ProfileSettings

DEFAULT_SCHEMA = "free-text"

VIDEO_CODEC = SettingDescriptor(
    name="video-codec-name",
    label="Video Codec Name",
    default="libvpx-vp9",
    description_html=(
        "The name of the video encoder "
        "(e.g., <code>libvpx-vp9</code>, <code>libx264</code>)."
    ),
)

AUDIO_CODEC = SettingDescriptor(
    name="audio-codec-name",
    label="Audio Codec Name",
    default="libopus",
    description_html=(
        "The name of the audio encoder (e.g., <code>libopus</code>, <code>aac</code>)."
    ),
)

PROFILE_NAME = SettingDescriptor(
    name="profile-name",
    label="Internal Profile Name",
    default="optional-vp9",
    description_html="A unique internal name to link the video and audio parts.",
)

ENCODER_PRIORITY = SettingDescriptor(
    name="encoder-priority",
    label="Encoder Priority",
    input_type="number",
    default="1000",
    description_html=(
        "A number that tells the platform how much to prefer these encoders. "
        "Higher is better."
    ),
)


class SettingsSchema(ABC):
    """Field declarations plus the snapshot-to-options mapping.

    Subclasses set name, description and settings_model, and implement
    descriptors and build_options().
    """

    name: str
    description: str = ""
    settings_model: type[ProfileSettings] = ProfileSettings

    @property
    @abstractmethod
    def descriptors(self) -> tuple[SettingDescriptor, ...]:
        """Fields declared with the host, in form order."""

    @abstractmethod
    def build_options(
        self, settings: ProfileSettings, log: PluginLogger
    ) -> tuple[EncoderOptions, EncoderOptions]:
        """Build (video, audio) encoder options from parsed settings.

        Args:
            settings: Parsed snapshot (an instance of settings_model).
            log: Logger for warnings about unusable values.
        """

    @property
    def setting_names(self) -> list[str]:
        """Names of all declared settings."""
        return [d.name for d in self.descriptors]

    def defaults(self) -> dict[str, str]:
        """Default value of every declared setting."""
        return {d.name: d.default for d in self.descriptors}

    def parse(self, snapshot: Mapping[str, Any] | None) -> ProfileSettings:
        """Parse a raw settings snapshot into this schema's settings model."""
        return self.settings_model.model_validate(dict(snapshot or {}))

    def build_recipe(
        self, settings: ProfileSettings, log: PluginLogger
    ) -> ProfileRecipe:
        """Build the full registration set for parsed settings.

        Raises:
            ValueError: If a required field is unset.
        """
        missing = settings.missing_required()
        if missing:
            raise ValueError(f"Required settings are not set: {', '.join(missing)}")

        # missing_required() guarantees these are set
        assert settings.video_codec is not None
        assert settings.audio_codec is not None
        assert settings.profile_name is not None

        video_options, audio_options = self.build_options(settings, log)
        return ProfileRecipe(
            profile_name=settings.profile_name,
            video=EncoderProfile(
                settings.video_codec, settings.profile_name, video_options
            ),
            audio=EncoderProfile(
                settings.audio_codec, settings.profile_name, audio_options
            ),
            priority=settings.encoder_priority,
        )


class FreeTextSchema(SettingsSchema):
    """Raw FFmpeg option strings for each input/output of each stream."""

    name = "free-text"
    description = "Free-text FFmpeg input/output options per stream"
    settings_model = FreeTextSettings

    _DESCRIPTORS = (
        VIDEO_CODEC,
        SettingDescriptor(
            name="video-input-options",
            label="Video Input Options (optional)",
            description_html=(
                "FFmpeg input options applied before the input file "
                "(e.g., <code>-thread_queue_size 512</code>)."
            ),
        ),
        SettingDescriptor(
            name="video-output-options",
            label="Video Output Options",
            type=FieldType.TEXTAREA,
            default=(
                "-crf 32 -b:v 5M -deadline good -tile-columns 2 "
                "-frame-parallel 1 -row-mt 1"
            ),
            description_html="FFmpeg output options for the video stream.",
        ),
        AUDIO_CODEC,
        SettingDescriptor(
            name="audio-input-options",
            label="Audio Input Options (optional)",
            description_html="FFmpeg input options for audio (rarely needed).",
        ),
        SettingDescriptor(
            name="audio-output-options",
            label="Audio Output Options",
            type=FieldType.TEXTAREA,
            default="-b:a 192k",
            description_html="FFmpeg output options for the audio stream.",
        ),
        PROFILE_NAME,
        ENCODER_PRIORITY,
    )

    @property
    def descriptors(self) -> tuple[SettingDescriptor, ...]:
        return self._DESCRIPTORS

    def build_options(
        self, settings: ProfileSettings, log: PluginLogger
    ) -> tuple[EncoderOptions, EncoderOptions]:
        assert isinstance(settings, FreeTextSettings)
        video = EncoderOptions.from_lists(
            parse_options_string(settings.video_input_options),
            parse_options_string(settings.video_output_options),
        )
        audio = EncoderOptions.from_lists(
            parse_options_string(settings.audio_input_options),
            parse_options_string(settings.audio_output_options),
        )
        return video, audio


# libvpx CRF range
CRF_RANGE = (0, 63)

VALID_DEADLINES = ("good", "best", "realtime")

AUDIO_BITRATES = ("64k", "96k", "128k", "160k", "192k", "256k", "320k")


def parse_bitrate(bitrate_str: str | None) -> int | None:
    """Parse a bitrate string like '5M' or '192k' to bits per second.

    Returns:
        Bitrate in bits per second, or None if parsing fails.
    """
    if not bitrate_str:
        return None

    bitrate_str = bitrate_str.strip()
    try:
        if bitrate_str[-1].casefold() == "m":
            return int(float(bitrate_str[:-1]) * 1_000_000)
        elif bitrate_str[-1].casefold() == "k":
            return int(float(bitrate_str[:-1]) * 1_000)
        else:
            return int(bitrate_str)
    except (ValueError, IndexError):
        return None


def parse_crf(value: str | None) -> int | None:
    """Parse a CRF value, returning None if it is not an int in CRF_RANGE."""
    if value is None:
        return None
    try:
        crf = int(value)
    except ValueError:
        return None
    if not CRF_RANGE[0] <= crf <= CRF_RANGE[1]:
        return None
    return crf


class PresetSchema(SettingsSchema):
    """Fixed CRF, deadline and bitrate selectors plus extra video options."""

    name = "preset"
    description = "CRF / deadline / bitrate selectors with extra video options"
    settings_model = PresetSettings

    _DESCRIPTORS = (
        VIDEO_CODEC,
        SettingDescriptor(
            name="video-crf",
            label="Video CRF",
            input_type="number",
            default="32",
            description_html=(
                f"Constant rate factor ({CRF_RANGE[0]}-{CRF_RANGE[1]}). "
                "Lower means better quality and larger files."
            ),
        ),
        SettingDescriptor(
            name="video-deadline",
            label="Video Deadline",
            type=FieldType.SELECT,
            default="good",
            options=tuple(SelectOption(d.title(), d) for d in VALID_DEADLINES),
            description_html=(
                "Encoder speed/quality trade-off (<code>-deadline</code>)."
            ),
        ),
        SettingDescriptor(
            name="video-bitrate",
            label="Video Bitrate",
            default="5M",
            description_html=(
                "Target or maximum video bitrate (e.g., <code>5M</code>, "
                "<code>2500k</code>). Use <code>0</code> for constant quality."
            ),
        ),
        SettingDescriptor(
            name="video-extra-options",
            label="Extra Video Output Options (optional)",
            type=FieldType.TEXTAREA,
            default="-tile-columns 2 -frame-parallel 1 -row-mt 1",
            description_html="Additional FFmpeg output options for the video stream.",
        ),
        AUDIO_CODEC,
        SettingDescriptor(
            name="audio-bitrate",
            label="Audio Bitrate",
            type=FieldType.SELECT,
            default="192k",
            options=tuple(SelectOption(b, b) for b in AUDIO_BITRATES),
            description_html="Audio bitrate (<code>-b:a</code>).",
        ),
        PROFILE_NAME,
        ENCODER_PRIORITY,
    )

    @property
    def descriptors(self) -> tuple[SettingDescriptor, ...]:
        return self._DESCRIPTORS

    def build_options(
        self, settings: ProfileSettings, log: PluginLogger
    ) -> tuple[EncoderOptions, EncoderOptions]:
        assert isinstance(settings, PresetSettings)
        video_output: list[str] = []

        if settings.video_crf is not None:
            crf = parse_crf(settings.video_crf)
            if crf is None:
                log.warning(
                    "Ignoring invalid video CRF '%s' (expected %d-%d).",
                    settings.video_crf,
                    *CRF_RANGE,
                )
            else:
                video_output += ["-crf", str(crf)]

        if settings.video_bitrate is not None:
            if parse_bitrate(settings.video_bitrate) is None:
                log.warning(
                    "Ignoring invalid video bitrate '%s'.", settings.video_bitrate
                )
            else:
                video_output += ["-b:v", settings.video_bitrate]

        if settings.video_deadline is not None:
            deadline = settings.video_deadline.casefold()
            if deadline not in VALID_DEADLINES:
                log.warning(
                    "Ignoring unknown video deadline '%s' (expected one of: %s).",
                    settings.video_deadline,
                    ", ".join(VALID_DEADLINES),
                )
            else:
                video_output += ["-deadline", deadline]

        video_output += parse_options_string(settings.video_extra_options)

        audio_output: list[str] = []
        if settings.audio_bitrate is not None:
            if parse_bitrate(settings.audio_bitrate) is None:
                log.warning(
                    "Ignoring invalid audio bitrate '%s'.", settings.audio_bitrate
                )
            else:
                audio_output += ["-b:a", settings.audio_bitrate]

        return (
            EncoderOptions.from_lists([], video_output),
            EncoderOptions.from_lists([], audio_output),
        )


_SCHEMAS: dict[str, SettingsSchema] = {
    schema.name: schema for schema in (FreeTextSchema(), PresetSchema())
}


def available_schemas() -> list[str]:
    """Names of all registered schemas."""
    return sorted(_SCHEMAS)


def get_schema(name: str) -> SettingsSchema:
    """Look up a schema by name.

    Raises:
        SchemaNotFoundError: If no schema has that name.
    """
    try:
        return _SCHEMAS[name]
    except KeyError:
        raise SchemaNotFoundError(name, available_schemas()) from None
