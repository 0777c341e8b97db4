"""Configuration models with validation.

``Settings`` is the persisted document; ``SortConfig`` is the frozen subset
the classification core reads during a run.
"""
from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, List, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
    model_validator,
)

from .errors import ConfigurationError

if TYPE_CHECKING:
    from ..engines.matcher import RuleSet


DEFAULT_DATE_PATTERN = "%Y-%m-%d"  # 2020-01-01


class SortRule(BaseModel):
    """Maps a set of extensions and MIME types to a destination folder."""
    model_config = ConfigDict(frozen=True)

    extensions: frozenset[str] = Field(
        default_factory=frozenset,
        description="Lowercase extensions without the leading dot",
    )
    mime_types: frozenset[str] = Field(
        default_factory=frozenset,
        description="MIME types matched against the detected hint",
    )
    destination: str = Field(..., description="Folder name under the destination root")

    @field_validator("extensions")
    @classmethod
    def normalize_extensions(cls, value: frozenset[str]) -> frozenset[str]:
        return frozenset(ext.strip().lstrip(".").lower() for ext in value if ext.strip())

    @field_validator("mime_types")
    @classmethod
    def normalize_mime_types(cls, value: frozenset[str]) -> frozenset[str]:
        return frozenset(mime.strip().lower() for mime in value if mime.strip())

    @field_validator("destination")
    @classmethod
    def single_folder(cls, value: str) -> str:
        value = value.strip()
        if not value or value in {".", ".."}:
            raise ValueError("destination must be a folder name")
        if "/" in value or "\\" in value:
            raise ValueError(f"destination must be a single folder name, got {value!r}")
        return value

    @model_validator(mode="after")
    def has_matchers(self) -> "SortRule":
        if not self.extensions and not self.mime_types:
            raise ValueError(
                f"rule for {self.destination!r} has no extensions and no MIME types"
            )
        return self

    @field_serializer("extensions", "mime_types")
    def serialize_sorted(self, value: frozenset[str]) -> list[str]:
        return sorted(value)

    def matches(self, extension: str, mime_hint: Optional[str] = None) -> bool:
        """True if the extension or the MIME hint belongs to this rule."""
        if extension and extension in self.extensions:
            return True
        return mime_hint is not None and mime_hint.lower() in self.mime_types


def _rule(destination: str, *extensions: str, mime_types: tuple[str, ...] = ()) -> SortRule:
    return SortRule(
        extensions=frozenset(extensions),
        mime_types=frozenset(mime_types),
        destination=destination,
    )


DEFAULT_SORT_RULES: tuple[SortRule, ...] = (
    _rule("archives", "7z", "gz", "rar", "tar", "tgz", "xz", "zip", "zst"),
    _rule("audio", "flac", "mp3", "ogg", "opus", "wav"),
    _rule(
        "binary", "exe", "bin",
        mime_types=("application/x-pie-executable", "application/x-sharedlib"),
    ),
    _rule("images", "gif", "jpeg", "jpg", "png", "tif"),
    _rule("videos", "avi", "mkv", "mp4"),
    _rule(
        "docs",
        "csv", "djvu", "doc", "docx", "epub", "odt", "pdf", "ppt", "pptx", "txt",
    ),
    _rule("rpm-packages", "rpm", "spec"),
    _rule("debian-packages", "deb"),
    _rule("apks", "apk", "apkx"),
    _rule("torrents", "torrent"),
    _rule("jars", "jar"),
    _rule("xml", "xml"),
    _rule("raw", "img"),
    _rule("fonts", "eot", "ttf", "woff", "woff2"),
    _rule("openvpn-profiles", "ovpn"),
    _rule("captured-packages", "pcap"),
    _rule("vscode-extensions", "vsix"),
)


class SortConfig(BaseModel):
    """Per-run configuration consumed by the classification core.

    Constructed once and never mutated; passed explicitly to the resolver
    and relocator.
    """
    model_config = ConfigDict(frozen=True)

    destination_root: Path = Field(..., description="Base of every resolved destination")
    use_date_pattern: bool = Field(
        default=False,
        description="Nest destinations under a folder named by the file's mtime",
    )
    date_pattern: str = Field(
        default=DEFAULT_DATE_PATTERN,
        description="strftime pattern applied to the UTC modification time",
    )

    @field_validator("destination_root")
    @classmethod
    def expand_root(cls, value: Path) -> Path:
        return value.expanduser().absolute()

    @model_validator(mode="after")
    def pattern_required(self) -> "SortConfig":
        if not self.use_date_pattern:
            return self
        if not self.date_pattern:
            raise ValueError("date_pattern must be set when use_date_pattern is enabled")
        # Date folders must stay under destination_root
        if self.date_pattern.startswith("/") or ".." in self.date_pattern.split("/"):
            raise ValueError(
                f"date_pattern must be a relative folder pattern: {self.date_pattern!r}"
            )
        return self


class Settings(BaseModel):
    """Persisted settings document.

    Missing keys fall back to their defaults, so an old or partial settings
    file still loads.
    """
    sources: List[Path] = Field(
        default_factory=list,
        description="Directories whose direct children are sorted",
    )
    destination: Optional[Path] = Field(
        default=None,
        description="Destination root for sorted files",
    )
    use_date_pattern: bool = Field(default=False, description="Add a date folder layer")
    date_pattern: str = Field(default=DEFAULT_DATE_PATTERN, description="Date folder pattern")
    sort_patterns: List[SortRule] = Field(
        default_factory=lambda: list(DEFAULT_SORT_RULES),
        description="Ordered rules; the first match wins",
    )

    @field_validator("sources")
    @classmethod
    def expand_sources(cls, value: List[Path]) -> List[Path]:
        return [path.expanduser().resolve() for path in value]

    @field_validator("destination")
    @classmethod
    def expand_destination(cls, value: Optional[Path]) -> Optional[Path]:
        if value is None:
            return None
        return value.expanduser().resolve()

    @field_serializer("sources")
    def serialize_sources(self, value: List[Path]) -> list[str]:
        return [str(path) for path in value]

    @field_serializer("destination")
    def serialize_destination(self, value: Optional[Path]) -> Optional[str]:
        return str(value) if value is not None else None

    def add_source(self, source: Path) -> "Settings":
        return self.model_copy(update={"sources": [*self.sources, source.expanduser().resolve()]})

    def with_destination(self, destination: Path) -> "Settings":
        return self.model_copy(update={"destination": destination.expanduser().resolve()})

    def with_date_pattern(self, use_date_pattern: bool, date_pattern: Optional[str] = None) -> "Settings":
        update: dict = {"use_date_pattern": use_date_pattern}
        if date_pattern is not None:
            update["date_pattern"] = date_pattern
        return self.model_copy(update=update)

    def rule_set(self) -> "RuleSet":
        from ..engines.matcher import RuleSet
        return RuleSet(self.sort_patterns)

    def to_sort_config(self) -> SortConfig:
        """Build the run configuration.

        Raises:
            ConfigurationError: If no destination is configured or the date
                options are inconsistent.
        """
        if self.destination is None:
            raise ConfigurationError("No destination directory configured")
        try:
            return SortConfig(
                destination_root=self.destination,
                use_date_pattern=self.use_date_pattern,
                date_pattern=self.date_pattern,
            )
        except ValueError as e:
            raise ConfigurationError(str(e), self.destination) from e
