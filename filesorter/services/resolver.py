"""Destination directory resolution."""
from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Union

from ..core.config import SortConfig
from ..core.errors import MetadataError
from ..core.models import FileCandidate


def modified_time_utc(path: Path) -> datetime:
    """Last-modified time of a file as an aware UTC datetime.

    Raises:
        MetadataError: If the filesystem cannot provide the timestamp.
    """
    try:
        mtime = path.stat().st_mtime
    except OSError as e:
        raise MetadataError(f"Cannot read modification time of {path}: {e}", path) from e
    return datetime.fromtimestamp(mtime, tz=timezone.utc)


def resolve(
    config: SortConfig,
    matched_label: str,
    file: Union[FileCandidate, Path],
) -> Path:
    """Compute the directory a matched file belongs in.

    Never creates anything on disk.

    Args:
        config: Run configuration.
        matched_label: Destination folder of the matching rule.
        file: The file being placed.

    Returns:
        ``destination_root/label``, or ``destination_root/<date>/label``
        when the date pattern is enabled.

    Raises:
        MetadataError: In date mode, if the modification time is unreadable.
    """
    if not config.use_date_pattern:
        return config.destination_root / matched_label

    path = file.path if isinstance(file, FileCandidate) else file
    date_folder = modified_time_utc(path).strftime(config.date_pattern)
    return config.destination_root / date_folder / matched_label


class DestinationResolver:
    """Resolves destinations against a fixed configuration."""

    def __init__(self, config: SortConfig):
        self._config = config

    @property
    def config(self) -> SortConfig:
        return self._config

    def resolve(self, matched_label: str, file: Union[FileCandidate, Path]) -> Path:
        return resolve(self._config, matched_label, file)
