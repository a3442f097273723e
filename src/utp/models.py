"""Value types for encoder profiles and priorities.

All types are frozen: a profile factory handed to the host closes over the
values captured when it was registered, so later settings changes can never
leak into a profile that is still registered.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

# Priority registered when the configured value is absent or not an integer
DEFAULT_ENCODER_PRIORITY = 1000


class MediaKind(Enum):
    """Stream kind an encoder applies to."""

    VIDEO = "video"
    AUDIO = "audio"


@dataclass(frozen=True)
class EncoderOptions:
    """FFmpeg arguments for one half of a profile."""

    input_options: tuple[str, ...] = ()
    output_options: tuple[str, ...] = ()

    @classmethod
    def from_lists(
        cls, input_options: list[str], output_options: list[str]
    ) -> EncoderOptions:
        """Build from token lists (copied into tuples)."""
        return cls(tuple(input_options), tuple(output_options))

    def to_host(self) -> dict[str, list[str]]:
        """Return the dict shape the host's profile factory contract expects.

        Fresh lists are returned on every call so the host may mutate them.
        """
        return {
            "inputOptions": list(self.input_options),
            "outputOptions": list(self.output_options),
        }


@dataclass(frozen=True)
class EncoderProfile:
    """One registered encoder profile, keyed by (codec, profile_name)."""

    codec: str
    profile_name: str
    options: EncoderOptions = field(default_factory=EncoderOptions)

    @property
    def key(self) -> tuple[str, str]:
        """Identity of the profile within the host."""
        return (self.codec, self.profile_name)

    def factory(self) -> Callable[[], dict[str, list[str]]]:
        """Zero-argument builder passed to the host's add_vod_profile()."""
        return self.options.to_host


@dataclass(frozen=True)
class EncoderPriority:
    """Preference weight for one encoder; higher wins."""

    kind: MediaKind
    codec: str
    priority: int = DEFAULT_ENCODER_PRIORITY


@dataclass(frozen=True)
class ProfileRecipe:
    """Everything one settings snapshot registers with the host.

    The video and audio profiles share profile_name, which the host uses to
    link them into one transcoding recipe.
    """

    profile_name: str
    video: EncoderProfile
    audio: EncoderProfile
    priority: int = DEFAULT_ENCODER_PRIORITY

    @property
    def profiles(self) -> tuple[EncoderProfile, EncoderProfile]:
        """Profiles in registration order (video first)."""
        return (self.video, self.audio)

    @property
    def priorities(self) -> tuple[EncoderPriority, EncoderPriority]:
        """Priorities in registration order (video first)."""
        return (
            EncoderPriority(MediaKind.VIDEO, self.video.codec, self.priority),
            EncoderPriority(MediaKind.AUDIO, self.audio.codec, self.priority),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dict (used by the CLI)."""
        return {
            "profile_name": self.profile_name,
            "profiles": [
                {
                    "codec": p.codec,
                    "profile_name": p.profile_name,
                    **p.options.to_host(),
                }
                for p in self.profiles
            ],
            "priorities": [
                {"kind": p.kind.value, "codec": p.codec, "priority": p.priority}
                for p in self.priorities
            ],
        }
