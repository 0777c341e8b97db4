"""Rule matching and MIME detection engines."""
from .matcher import RuleSet, file_extension, find_match
from .mime import MagicMimeDetector, NullMimeDetector, create_mime_detector

__all__ = [
    "RuleSet",
    "file_extension",
    "find_match",
    "MagicMimeDetector",
    "NullMimeDetector",
    "create_mime_detector",
]
