"""Locate, load and save the user's settings file."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from .config import AppConfig

logger = logging.getLogger(__name__)


class SettingsStore:
    """The user's pictaging settings file.

    A missing file means every setting keeps its default.
    """

    def __init__(self, path: Path | None = None) -> None:
        self._path = path or default_settings_path()

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> AppConfig:
        """Read the settings, raising ValueError when the file does not validate."""
        if not self._path.exists():
            logger.debug("No settings at %s; using defaults.", self._path)
            return AppConfig()
        return AppConfig.load(self._path)

    def save(self, config: AppConfig) -> None:
        config.save(self._path)

    @staticmethod
    def prepare_directories(config: AppConfig) -> None:
        """Create the data, photo and library directories named by ``config``."""
        for directory in (config.data_directory, config.photos_directory, config.library_directory):
            directory.expanduser().mkdir(parents=True, exist_ok=True)


def default_settings_path() -> Path:
    """Per-user location of ``settings.yaml`` under the platform config directory."""
    if os.name == "nt":
        base = Path(os.getenv("APPDATA", Path.home() / "AppData" / "Roaming"))
    else:
        base = Path(os.getenv("XDG_CONFIG_HOME", Path.home() / ".config"))
    return base.expanduser() / "pictaging" / "settings.yaml"
