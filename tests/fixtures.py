"""Test fixtures for relocation tests.

Each fixture file knows how to write itself into a source directory and
which category folder it is expected to land in.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional


@dataclass
class SourceFile:
    """A file to place in a source directory."""
    name: str
    content: bytes = b"data"
    modified: Optional[datetime] = None
    expected_label: Optional[str] = None  # None = unmatched

    def create(self, directory: Path) -> Path:
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / self.name
        path.write_bytes(self.content)
        if self.modified is not None:
            set_mtime(path, self.modified)
        return path


def set_mtime(path: Path, when: datetime) -> None:
    """Set a file's access and modification time."""
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)
    ts = when.timestamp()
    os.utime(path, (ts, ts))


class StaticMimeDetector:
    """MIME detector returning canned answers keyed by file name."""

    def __init__(self, hints: Optional[dict[str, str]] = None):
        self.hints = hints or {}
        self.calls: list[Path] = []

    @property
    def name(self) -> str:
        return "static"

    def detect(self, path: Path) -> Optional[str]:
        self.calls.append(path)
        return self.hints.get(path.name)


def create_download_folder(base_path: Path) -> list[SourceFile]:
    """Create a downloads-like folder with a mix of file types."""
    files = [
        SourceFile("photo.jpg", b"\xff\xd8\xff", expected_label="images"),
        SourceFile("archive.zip", b"PK\x03\x04", expected_label="archives"),
        SourceFile("Song.MP3", b"ID3", expected_label="audio"),
        SourceFile("report.pdf", b"%PDF-1.4", expected_label="docs"),
        SourceFile("notes", b"plain text"),
    ]
    for f in files:
        f.create(base_path)
    # Subdirectories are never candidates
    nested = base_path / "nested"
    nested.mkdir()
    (nested / "inner.jpg").write_bytes(b"\xff\xd8\xff")
    return files
