"""YAML-backed settings persistence.

A settings file that cannot be parsed is renamed aside to
``settings.yaml.invalid`` and defaults are used instead, so a corrupt file
never blocks a run and is never silently overwritten.
"""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

import yaml
from platformdirs import user_config_path
from pydantic import ValidationError

from ..core.config import Settings
from ..core.errors import ConfigurationError

logger = logging.getLogger(__name__)

APP_NAME = "filesorter"
APP_AUTHOR = "elxreno"
SETTINGS_FILE_NAME = "settings.yaml"


def default_settings_path() -> Path:
    """Per-user settings location, e.g. ~/.config/filesorter/settings.yaml."""
    return user_config_path(APP_NAME, APP_AUTHOR) / SETTINGS_FILE_NAME


class SettingsStore:
    """Loads and saves ``Settings`` as YAML."""

    def __init__(self, path: Optional[Path] = None):
        self._path = path or default_settings_path()

    @property
    def path(self) -> Path:
        return self._path

    @property
    def invalid_path(self) -> Path:
        return self._path.with_name(self._path.name + ".invalid")

    @property
    def backup_path(self) -> Path:
        return self._path.with_name(self._path.name + ".old")

    def exists(self) -> bool:
        return self._path.is_file()

    def load_strict(self) -> Settings:
        """Load settings, raising on a missing or malformed file.

        Raises:
            ConfigurationError: If the file cannot be read, parsed or
                validated.
        """
        try:
            text = self._path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigurationError(f"Cannot read {self._path}: {e}", self._path) from e
        except UnicodeDecodeError as e:
            raise ConfigurationError(f"Settings file {self._path} is not UTF-8: {e}", self._path) from e

        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {self._path}: {e}", self._path) from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Expected a mapping in {self._path}, got {type(data).__name__}", self._path
            )

        try:
            return Settings.model_validate(data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid settings in {self._path}: {e}", self._path) from e

    def load(self) -> Settings:
        """Load settings, falling back to defaults.

        A missing file yields defaults. A malformed file is renamed aside
        and defaults are returned.
        """
        if not self.exists():
            logger.debug("No settings file at %s, using defaults", self._path)
            return Settings()

        try:
            return self.load_strict()
        except ConfigurationError as e:
            logger.warning("Failed to parse settings file, falling back to defaults: %s", e)
            self._set_aside_invalid()
            return Settings()

    def save(self, settings: Settings) -> Path:
        """Write settings to disk.

        Raises:
            ConfigurationError: If the file cannot be written.
        """
        data = settings.model_dump(mode="json")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with self._path.open("w", encoding="utf-8") as f:
                yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
        except OSError as e:
            raise ConfigurationError(f"Failed to save settings: {e}", self._path) from e
        logger.debug("Saved settings to %s", self._path)
        return self._path

    def backup(self) -> Optional[Path]:
        """Move an existing settings file to ``settings.yaml.old``.

        Returns:
            The backup path, or None if there was nothing to back up.

        Raises:
            ConfigurationError: If the rename fails.
        """
        if not self.exists():
            return None
        try:
            os.replace(self._path, self.backup_path)
        except OSError as e:
            raise ConfigurationError(f"Failed to back up {self._path}: {e}", self._path) from e
        logger.info("Moved old settings file to %s", self.backup_path)
        return self.backup_path

    def _set_aside_invalid(self) -> None:
        try:
            os.replace(self._path, self.invalid_path)
        except OSError as e:
            logger.warning("Failed to rename settings file: %s", e)
            return
        logger.warning("Renamed invalid settings file to %s", self.invalid_path)
