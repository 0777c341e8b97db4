"""Tests for MIME detection engines."""
import pytest
from pathlib import Path
from unittest.mock import MagicMock, patch

from filesorter.engines import mime
from filesorter.engines.mime import NullMimeDetector, create_mime_detector


class TestNullMimeDetector:
    """Tests for the no-hint detector."""

    def test_never_detects(self, tmp_path: Path):
        detector = NullMimeDetector()
        assert detector.detect(tmp_path / "anything") is None
        assert detector.name == "none"


class TestCreateMimeDetector:
    """Tests for the detector factory."""

    def test_disabled(self):
        """Disabled detection returns the null detector."""
        assert isinstance(create_mime_detector(enabled=False), NullMimeDetector)

    def test_unavailable(self):
        """Without libmagic the factory falls back to no hints."""
        with patch.object(mime, "MAGIC_AVAILABLE", False):
            assert isinstance(create_mime_detector(enabled=True), NullMimeDetector)

    @pytest.mark.skipif(not mime.MAGIC_AVAILABLE, reason="libmagic not installed")
    def test_available(self):
        """With libmagic the magic detector is used."""
        detector = create_mime_detector(enabled=True)
        assert detector.name == "libmagic"


@pytest.mark.skipif(not mime.MAGIC_AVAILABLE, reason="libmagic not installed")
class TestMagicMimeDetector:
    """Tests for the libmagic-backed detector."""

    def test_detects_text(self, tmp_path: Path):
        path = tmp_path / "notes"
        path.write_text("just some plain text\n")

        assert mime.MagicMimeDetector().detect(path) == "text/plain"

    def test_failure_returns_none(self, tmp_path: Path):
        """Detection errors are not fatal."""
        detector = mime.MagicMimeDetector()
        detector._magic = MagicMock()
        detector._magic.from_file.side_effect = OSError("gone")

        assert detector.detect(tmp_path / "missing") is None
