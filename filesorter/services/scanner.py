"""Directory scanning service."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Iterator

from ..core.errors import SourceDirectoryError
from ..core.models import FileCandidate

logger = logging.getLogger(__name__)


class DirectoryScanner:
    """Lists sort candidates in source directories.

    Only direct children that are regular files are candidates;
    subdirectories are never entered.
    """

    def __init__(self, follow_symlinks: bool = False):
        """Initialize the scanner.

        Args:
            follow_symlinks: Whether symbolic links to files are candidates.
        """
        self._follow_symlinks = follow_symlinks

    def enumerate_candidates(self, source_dir: Path) -> list[FileCandidate]:
        """List the files directly inside a directory, sorted by name.

        Raises:
            SourceDirectoryError: If the directory is missing or unreadable.
        """
        if not source_dir.is_dir():
            raise SourceDirectoryError(f"Source is not a directory: {source_dir}", source_dir)

        try:
            entries = sorted(source_dir.iterdir(), key=lambda p: p.name)
        except OSError as e:
            raise SourceDirectoryError(f"Cannot list {source_dir}: {e}", source_dir) from e

        candidates = []
        for entry in entries:
            if entry.is_symlink() and not self._follow_symlinks:
                logger.debug("Skipping symlink %s", entry)
                continue
            if entry.is_file():
                candidates.append(FileCandidate(path=entry.absolute()))

        logger.debug("Found %d candidates in %s", len(candidates), source_dir)
        return candidates

    def scan(self, sources: Iterable[Path]) -> Iterator[FileCandidate]:
        """Yield candidates from every source directory in order."""
        for source in sources:
            yield from self.enumerate_candidates(source)


def enumerate_candidates(source_dir: Path) -> list[FileCandidate]:
    """List the files directly inside ``source_dir`` (non-recursive)."""
    return DirectoryScanner().enumerate_candidates(source_dir)
