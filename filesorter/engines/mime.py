"""MIME-type detection used as a hint for extensionless or ambiguous files."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

# libmagic is a system library; python-magic raises ImportError without it
try:
    import magic
    MAGIC_AVAILABLE = True
except ImportError:
    MAGIC_AVAILABLE = False

logger = logging.getLogger(__name__)


class MagicMimeDetector:
    """Detects MIME types from file content with libmagic."""

    def __init__(self):
        if not MAGIC_AVAILABLE:
            raise RuntimeError("python-magic/libmagic is not available")
        self._magic = magic.Magic(mime=True)

    @property
    def name(self) -> str:
        return "libmagic"

    def detect(self, path: Path) -> Optional[str]:
        try:
            return self._magic.from_file(str(path))
        except (OSError, magic.MagicException) as e:
            logger.debug("MIME detection failed for %s: %s", path, e)
            return None


class NullMimeDetector:
    """Never provides a hint; rules then match on extension only."""

    @property
    def name(self) -> str:
        return "none"

    def detect(self, path: Path) -> Optional[str]:
        return None


def create_mime_detector(enabled: bool = True) -> MagicMimeDetector | NullMimeDetector:
    """Factory function to create the appropriate MIME detector.

    Args:
        enabled: Whether MIME detection was requested.

    Returns:
        The libmagic detector when requested and available, otherwise
        a detector that returns no hints.
    """
    if not enabled:
        return NullMimeDetector()

    if not MAGIC_AVAILABLE:
        logger.warning("libmagic not available; MIME-type rules will not match")
        return NullMimeDetector()

    return MagicMimeDetector()
