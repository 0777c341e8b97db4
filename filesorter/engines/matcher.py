"""Ordered rule matching.

Rules are scanned linearly in list order and the first rule whose extension
set or MIME set matches wins. Users rely on placing a more specific rule
earlier, so the order is never changed here.
"""
from __future__ import annotations

from pathlib import Path
from typing import Iterable, Iterator, Optional, Sequence, Union

from ..core.config import SortRule
from ..core.models import FileCandidate, extension_of


def file_extension(path: Union[Path, str]) -> str:
    """Lowercased extension after the final '.' of the file name."""
    return extension_of(Path(path).name)


def find_match(
    rules: Iterable[SortRule],
    file: Union[FileCandidate, Path],
    mime_hint: Optional[str] = None,
) -> Optional[SortRule]:
    """Return the first rule matching the file, or None.

    Args:
        rules: Rules in priority order.
        file: Candidate (or bare path) being classified.
        mime_hint: Optional MIME type supplied by a detector.

    Returns:
        The first matching rule, or None if no rule applies.
    """
    path = file.path if isinstance(file, FileCandidate) else file
    extension = file_extension(path)
    for rule in rules:
        if rule.matches(extension, mime_hint):
            return rule
    return None


class RuleSet:
    """Read-only, ordered collection of sort rules."""

    def __init__(self, rules: Iterable[SortRule]):
        self._rules: tuple[SortRule, ...] = tuple(rules)

    def __iter__(self) -> Iterator[SortRule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __getitem__(self, index: int) -> SortRule:
        return self._rules[index]

    def __repr__(self) -> str:
        labels = ", ".join(rule.destination for rule in self._rules)
        return f"RuleSet([{labels}])"

    @property
    def rules(self) -> Sequence[SortRule]:
        return self._rules

    @property
    def uses_mime_types(self) -> bool:
        """Whether any rule can match on a MIME hint."""
        return any(rule.mime_types for rule in self._rules)

    @property
    def destinations(self) -> list[str]:
        return [rule.destination for rule in self._rules]

    def find_match(
        self,
        file: Union[FileCandidate, Path],
        mime_hint: Optional[str] = None,
    ) -> Optional[SortRule]:
        return find_match(self._rules, file, mime_hint)
