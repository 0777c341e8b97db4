"""Core domain models, configuration and protocols."""
from .protocols import FileOperations, MimeDetector, ProgressReporter
from .models import FileCandidate, OutcomeKind, RelocationOutcome, SortStats
from .config import DEFAULT_SORT_RULES, Settings, SortConfig, SortRule

__all__ = [
    # Protocols
    "FileOperations",
    "MimeDetector",
    "ProgressReporter",
    # Models
    "FileCandidate",
    "OutcomeKind",
    "RelocationOutcome",
    "SortStats",
    # Config
    "DEFAULT_SORT_RULES",
    "Settings",
    "SortConfig",
    "SortRule",
]
