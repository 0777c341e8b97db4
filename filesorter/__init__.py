"""File sorting by type into category folders.

Classifies files by extension (and optionally MIME type) with an ordered
rule list and moves them under a destination root.
"""

__version__ = "1.0.0"

# Core exports
from .core.config import DEFAULT_SORT_RULES, Settings, SortConfig, SortRule
from .core.errors import (
    ConfigurationError,
    DestinationNotADirectory,
    FileSorterError,
    MetadataError,
    MoveError,
    SourceDirectoryError,
)
from .core.models import FileCandidate, OutcomeKind, RelocationOutcome, SortStats
from .core.protocols import FileOperations, MimeDetector, ProgressReporter

# Engine exports
from .engines.matcher import RuleSet, file_extension, find_match
from .engines.mime import MagicMimeDetector, NullMimeDetector, create_mime_detector

# Service exports
from .services.file_ops import FileManager
from .services.relocator import Relocator, RelocatorDependencies, relocate
from .services.resolver import DestinationResolver, resolve
from .services.scanner import DirectoryScanner, enumerate_candidates

# Persistence exports
from .persistence.settings_store import SettingsStore

__all__ = [
    # Core
    "DEFAULT_SORT_RULES",
    "Settings",
    "SortConfig",
    "SortRule",
    "FileSorterError",
    "ConfigurationError",
    "DestinationNotADirectory",
    "MetadataError",
    "MoveError",
    "SourceDirectoryError",
    "FileCandidate",
    "OutcomeKind",
    "RelocationOutcome",
    "SortStats",
    "FileOperations",
    "MimeDetector",
    "ProgressReporter",
    # Engines
    "RuleSet",
    "file_extension",
    "find_match",
    "MagicMimeDetector",
    "NullMimeDetector",
    "create_mime_detector",
    # Services
    "FileManager",
    "Relocator",
    "RelocatorDependencies",
    "relocate",
    "DestinationResolver",
    "resolve",
    "DirectoryScanner",
    "enumerate_candidates",
    # Persistence
    "SettingsStore",
]
