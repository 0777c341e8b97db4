"""File operations service."""
from __future__ import annotations

import logging
import os
from pathlib import Path

from ..core.errors import DestinationNotADirectory, MoveError

logger = logging.getLogger(__name__)


class FileManager:
    """Creates destination directories and moves files by rename.

    Moves are plain renames: they either fully succeed or leave the source
    untouched. Existing targets are never overwritten.
    """

    def ensure_directory(self, path: Path) -> None:
        """Ensure a directory exists, creating missing ancestors.

        Calling this on an existing directory is a no-op.

        Args:
            path: Directory to create.

        Raises:
            DestinationNotADirectory: If the path or one of its ancestors
                exists but is not a directory.
            MoveError: If the directory cannot be created for another
                reason (e.g. permissions).
        """
        if path.is_dir():
            return

        blocker = self._find_non_directory(path)
        if blocker is not None:
            raise DestinationNotADirectory(
                f"{blocker} already exists but is not a directory", blocker
            )

        try:
            path.mkdir(parents=True, exist_ok=True)
        except (FileExistsError, NotADirectoryError) as e:
            raise DestinationNotADirectory(
                f"{path} already exists but is not a directory", path
            ) from e
        except OSError as e:
            raise MoveError(f"Cannot create {path}: {e}", path) from e
        logger.info("%s dir created successfully", path)

    def move_file(self, source: Path, target: Path) -> None:
        """Move a file by atomic rename.

        Args:
            source: Source file path.
            target: Target file path.

        Raises:
            MoveError: If the target exists, the paths are on different
                filesystems, or permission is denied.
        """
        if target.exists() or target.is_symlink():
            raise MoveError(f"Destination already exists: {target}", target)

        try:
            os.rename(source, target)
        except OSError as e:
            raise MoveError(f"Cannot move {source} to {target}: {e}", source) from e
        logger.debug("Moved %s -> %s", source, target)

    @staticmethod
    def _find_non_directory(path: Path) -> Path | None:
        """Nearest existing component of ``path`` that is not a directory."""
        for candidate in (path, *path.parents):
            if candidate.exists() or candidate.is_symlink():
                return None if candidate.is_dir() else candidate
        return None
