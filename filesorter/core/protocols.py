"""Protocol definitions (interfaces) for dependency injection."""
from __future__ import annotations

from abc import abstractmethod
from pathlib import Path
from typing import Optional, Protocol

from .models import RelocationOutcome, SortStats


class MimeDetector(Protocol):
    """Interface for deriving a MIME-type hint from file content.

    Implementations:
    - MagicMimeDetector: libmagic via python-magic
    - NullMimeDetector: never provides a hint
    """

    @abstractmethod
    def detect(self, path: Path) -> Optional[str]:
        """Return the MIME type of a file, or None if unknown."""
        ...

    @property
    @abstractmethod
    def name(self) -> str:
        """Detector name for logging."""
        ...


class FileOperations(Protocol):
    """Interface for the filesystem side effects of a relocation."""

    @abstractmethod
    def ensure_directory(self, path: Path) -> None:
        """Create a directory and its ancestors if missing."""
        ...

    @abstractmethod
    def move_file(self, source: Path, target: Path) -> None:
        """Atomically rename source to target."""
        ...


class ProgressReporter(Protocol):
    """Interface for user-facing output."""

    def start_phase(self, name: str, total: int) -> None: ...

    def advance_phase(self, amount: int = 1) -> None: ...

    def end_phase(self) -> None: ...

    def info(self, message: str) -> None: ...

    def success(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def debug(self, message: str) -> None: ...

    def print_header(self, title: str) -> None: ...

    def print_config(self, config_items: dict) -> None: ...

    def print_outcome(self, outcome: RelocationOutcome) -> None: ...

    def print_stats(self, stats: SortStats) -> None: ...
