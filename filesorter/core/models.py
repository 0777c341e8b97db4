"""Domain models - immutable data classes."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional


class OutcomeKind(Enum):
    """What happened to a candidate during relocation."""
    MOVED = "moved"
    UNMATCHED = "unmatched"
    FAILED = "failed"


def extension_of(name: str) -> str:
    """Lowercased text after the final '.' of a file name, '' if none."""
    _, dot, ext = name.rpartition(".")
    if not dot:
        return ""
    return ext.lower()


@dataclass(frozen=True, slots=True)
class FileCandidate:
    """A regular file found directly inside a source directory."""
    path: Path

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def extension(self) -> str:
        return extension_of(self.path.name)


@dataclass(frozen=True, slots=True)
class RelocationOutcome:
    """Result of relocating a single file."""
    kind: OutcomeKind
    source: Path
    destination: Optional[Path] = None
    error: Optional[Exception] = None

    @classmethod
    def moved(cls, source: Path, destination: Path) -> "RelocationOutcome":
        return cls(OutcomeKind.MOVED, source, destination=destination)

    @classmethod
    def unmatched(cls, source: Path) -> "RelocationOutcome":
        return cls(OutcomeKind.UNMATCHED, source)

    @classmethod
    def failed(cls, source: Path, error: Exception) -> "RelocationOutcome":
        return cls(OutcomeKind.FAILED, source, error=error)

    @property
    def is_success(self) -> bool:
        return self.kind != OutcomeKind.FAILED

    @property
    def cause(self) -> Optional[str]:
        """Name of the error class for failed outcomes."""
        if self.error is None:
            return None
        return type(self.error).__name__


@dataclass(slots=True)
class SortStats:
    """Mutable statistics for a sort run."""
    total: int = 0
    moved: int = 0
    unmatched: int = 0
    failed: int = 0
    elapsed_seconds: float = 0.0

    def record(self, outcome: RelocationOutcome) -> None:
        """Record a relocation outcome."""
        self.total += 1
        match outcome.kind:
            case OutcomeKind.MOVED:
                self.moved += 1
            case OutcomeKind.UNMATCHED:
                self.unmatched += 1
            case OutcomeKind.FAILED:
                self.failed += 1

    def summary(self) -> dict[str, int]:
        return {
            "total": self.total,
            "moved": self.moved,
            "unmatched": self.unmatched,
            "failed": self.failed,
        }
