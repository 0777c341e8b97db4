"""Settings persistence."""
from .settings_store import SettingsStore, default_settings_path

__all__ = ["SettingsStore", "default_settings_path"]
