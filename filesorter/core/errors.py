"""Error taxonomy for classification and relocation."""
from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Optional, Sequence

if TYPE_CHECKING:
    from .models import FileCandidate, RelocationOutcome


class FileSorterError(Exception):
    """Base exception for filesorter errors."""

    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.path = path


class MetadataError(FileSorterError):
    """Raised when a file's modification time cannot be read."""
    pass


class MoveError(FileSorterError):
    """Raised when a rename fails (existing target, cross-device, permissions)."""
    pass


class SourceDirectoryError(FileSorterError):
    """Raised when a source directory cannot be listed."""
    pass


class ConfigurationError(FileSorterError):
    """Raised when persisted settings are malformed or cannot be written."""
    pass


class DestinationNotADirectory(FileSorterError):
    """A component of a destination path exists but is not a directory.

    This is fatal to the whole run. When raised out of a relocation pass,
    ``outcomes`` holds the results gathered before the failure and
    ``source`` is the candidate that was being placed.
    """

    fatal = True

    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message, path)
        self.source: Optional[FileCandidate] = None
        self.outcomes: Sequence[RelocationOutcome] = ()
