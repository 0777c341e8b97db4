"""Tests for YAML settings persistence."""
import pytest
import yaml
from pathlib import Path

from filesorter.core.config import Settings, SortRule
from filesorter.core.errors import ConfigurationError
from filesorter.persistence.settings_store import (
    SettingsStore,
    default_settings_path,
)


class TestSettingsStore:
    """Tests for SettingsStore."""

    @pytest.fixture
    def settings_path(self, tmp_path: Path) -> Path:
        return tmp_path / "config" / "settings.yaml"

    @pytest.fixture
    def store(self, settings_path: Path) -> SettingsStore:
        return SettingsStore(settings_path)

    def test_default_path(self):
        """Default location lives in the per-user config directory."""
        path = default_settings_path()
        assert path.name == "settings.yaml"
        assert "filesorter" in path.parts

    def test_missing_file_gives_defaults(self, store):
        settings = store.load()
        assert settings == Settings()

    def test_save_and_load(self, store, settings_path, tmp_path):
        """Saved settings load back unchanged."""
        settings = Settings(
            sources=[tmp_path / "downloads"],
            destination=tmp_path / "sorted",
            use_date_pattern=True,
            date_pattern="%Y/%m",
            sort_patterns=[
                SortRule(extensions={"iso", "img"}, destination="disks"),
                SortRule(mime_types={"application/x-sharedlib"}, destination="libs"),
            ],
        )

        store.save(settings)

        assert settings_path.is_file()
        assert store.load() == settings

    def test_saved_file_is_plain_yaml(self, store, settings_path, tmp_path):
        """The settings file is readable YAML with string paths."""
        store.save(Settings(destination=tmp_path / "sorted"))

        data = yaml.safe_load(settings_path.read_text())
        assert data["destination"] == str(tmp_path / "sorted")
        assert data["sort_patterns"][0]["destination"] == "archives"
        assert data["sort_patterns"][0]["extensions"] == sorted(data["sort_patterns"][0]["extensions"])

    def test_partial_file_uses_defaults(self, store, settings_path, tmp_path):
        """Missing keys take default values."""
        settings_path.parent.mkdir(parents=True)
        settings_path.write_text(f"destination: {tmp_path / 'out'}\n")

        settings = store.load()

        assert settings.destination == tmp_path / "out"
        assert len(settings.sort_patterns) == 17

    def test_empty_file_gives_defaults(self, store, settings_path):
        settings_path.parent.mkdir(parents=True)
        settings_path.write_text("")

        assert store.load() == Settings()

    def test_corrupt_yaml_renamed_aside(self, store, settings_path):
        """Unparseable settings are moved to .invalid and defaults used."""
        settings_path.parent.mkdir(parents=True)
        settings_path.write_text("sources: [unclosed\n")

        settings = store.load()

        assert settings == Settings()
        assert not settings_path.exists()
        assert store.invalid_path.read_text() == "sources: [unclosed\n"

    def test_non_utf8_renamed_aside(self, store, settings_path):
        """Bytes that are not UTF-8 count as a corrupt file."""
        settings_path.parent.mkdir(parents=True)
        settings_path.write_bytes(b"sources: [\xff\xfe\x00garbage")

        assert store.load() == Settings()
        assert not settings_path.exists()
        assert store.invalid_path.read_bytes() == b"sources: [\xff\xfe\x00garbage"

    def test_load_strict_non_utf8(self, store, settings_path):
        settings_path.parent.mkdir(parents=True)
        settings_path.write_bytes(b"\xff\xfe")

        with pytest.raises(ConfigurationError):
            store.load_strict()
        assert settings_path.exists()

    def test_invalid_rule_renamed_aside(self, store, settings_path):
        """A rule with no matchers invalidates the file."""
        settings_path.parent.mkdir(parents=True)
        settings_path.write_text(
            "sort_patterns:\n"
            "  - extensions: []\n"
            "    mime_types: []\n"
            "    destination: nothing\n"
        )

        assert store.load() == Settings()
        assert store.invalid_path.exists()

    def test_load_strict_raises(self, store, settings_path):
        settings_path.parent.mkdir(parents=True)
        settings_path.write_text("- just\n- a list\n")

        with pytest.raises(ConfigurationError):
            store.load_strict()
        assert settings_path.exists()

    def test_load_strict_missing(self, store):
        with pytest.raises(ConfigurationError):
            store.load_strict()

    def test_backup(self, store, settings_path, tmp_path):
        """Existing settings are moved to .old."""
        store.save(Settings(destination=tmp_path / "first"))

        backup = store.backup()

        assert backup == store.backup_path
        assert backup.name == "settings.yaml.old"
        assert not settings_path.exists()
        assert store.backup() is None

    def test_backup_replaces_previous(self, store, tmp_path):
        store.save(Settings(destination=tmp_path / "first"))
        store.backup()
        store.save(Settings(destination=tmp_path / "second"))
        store.backup()

        data = yaml.safe_load(store.backup_path.read_text())
        assert data["destination"] == str(tmp_path / "second")

    def test_save_failure(self, tmp_path):
        """Write errors surface as ConfigurationError."""
        blocker = tmp_path / "blocker"
        blocker.write_text("file, not dir")
        store = SettingsStore(blocker / "settings.yaml")

        with pytest.raises(ConfigurationError):
            store.save(Settings())
