"""Shared test fixtures for the Universal Transcoding Plugin."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from utp.host.memory import (
    InMemorySettingsManager,
    InMemoryTranscodingManager,
    build_context,
)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point configuration at an empty temp location and clear UTP_* vars."""
    for var in (
        "UTP_SCHEMA",
        "UTP_LOG_LEVEL",
        "UTP_LOG_FORMAT",
        "UTP_LOG_FILE",
    ):
        monkeypatch.delenv(var, raising=False)
    config_path = tmp_path / "utp-home" / "config.toml"
    monkeypatch.setenv("UTP_CONFIG_PATH", str(config_path))
    return config_path


@pytest.fixture
def vp9_settings() -> dict[str, str]:
    """Settings snapshot for a VP9/Opus profile at priority 900."""
    return {
        "video-codec-name": "libvpx-vp9",
        "video-input-options": "",
        "video-output-options": "-crf 32 -b:v 5M",
        "audio-codec-name": "libopus",
        "audio-input-options": "",
        "audio-output-options": "-b:a 192k",
        "profile-name": "vp9-opt",
        "encoder-priority": "900",
    }


@pytest.fixture
def mock_log() -> MagicMock:
    """Logger double recording info/warning/debug calls."""
    return MagicMock(spec=["info", "warning", "debug"])


@pytest.fixture
def manager() -> InMemoryTranscodingManager:
    """Fresh in-memory transcoding manager."""
    return InMemoryTranscodingManager()


@pytest.fixture
def context_factory(mock_log: MagicMock):
    """Build a plugin context with in-memory host pieces."""

    def _factory(settings=None, logger=mock_log):
        return build_context(settings, logger=logger)

    return _factory


@pytest.fixture
def settings_manager(vp9_settings: dict[str, str]) -> InMemorySettingsManager:
    """Settings manager preloaded with the VP9 snapshot."""
    return InMemorySettingsManager(vp9_settings)
