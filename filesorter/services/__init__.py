"""Service layer: scanning, resolution, file operations, relocation."""
from .scanner import DirectoryScanner, enumerate_candidates
from .resolver import DestinationResolver, resolve
from .file_ops import FileManager
from .relocator import Relocator, RelocatorDependencies, relocate

__all__ = [
    "DirectoryScanner",
    "enumerate_candidates",
    "DestinationResolver",
    "resolve",
    "FileManager",
    "Relocator",
    "RelocatorDependencies",
    "relocate",
]
