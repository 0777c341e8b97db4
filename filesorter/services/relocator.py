"""Relocator - orchestrates matching, resolution and moves."""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

from ..core.config import SortConfig, SortRule
from ..core.errors import DestinationNotADirectory, MetadataError, MoveError
from ..core.models import FileCandidate, RelocationOutcome, SortStats
from ..core.protocols import FileOperations, MimeDetector
from ..engines.matcher import RuleSet
from ..engines.mime import NullMimeDetector
from .file_ops import FileManager
from .resolver import DestinationResolver

logger = logging.getLogger(__name__)


@dataclass
class RelocatorDependencies:
    """Collaborators used by the relocator.

    This is explicitly passed in - no globals or singletons.
    """
    mime_detector: MimeDetector = field(default_factory=NullMimeDetector)
    file_manager: FileOperations = field(default_factory=FileManager)


class Relocator:
    """Moves candidates into their category folders one at a time.

    Files are processed in input order. Per-file failures become outcomes;
    only ``DestinationNotADirectory`` aborts the run.
    """

    def __init__(
        self,
        config: SortConfig,
        rules: RuleSet | Sequence[SortRule],
        deps: Optional[RelocatorDependencies] = None,
    ):
        """Initialize relocator with config, rules and dependencies.

        Args:
            config: Run configuration.
            rules: Rules in priority order.
            deps: Collaborators; defaults to no MIME detection and real
                filesystem operations.
        """
        self._config = config
        self._rules = rules if isinstance(rules, RuleSet) else RuleSet(rules)
        self._deps = deps or RelocatorDependencies()
        self._resolver = DestinationResolver(config)
        self._stats = SortStats()

    @property
    def stats(self) -> SortStats:
        return self._stats

    def relocate(self, candidates: Iterable[FileCandidate]) -> list[RelocationOutcome]:
        """Relocate every candidate.

        Returns:
            One outcome per candidate, in input order.

        Raises:
            DestinationNotADirectory: If a destination path is blocked by a
                non-directory. ``outcomes`` on the exception holds the
                results produced before the failure.
        """
        outcomes: list[RelocationOutcome] = []
        start = time.monotonic()
        try:
            for candidate in candidates:
                try:
                    outcome = self.relocate_one(candidate)
                except DestinationNotADirectory as e:
                    e.source = candidate
                    e.outcomes = tuple(outcomes)
                    logger.error("Aborting run: %s", e)
                    raise
                self._stats.record(outcome)
                outcomes.append(outcome)
        finally:
            self._stats.elapsed_seconds += time.monotonic() - start
        return outcomes

    def relocate_one(self, candidate: FileCandidate) -> RelocationOutcome:
        """Match, resolve and move a single file."""
        source = candidate.path
        mime_hint = self._mime_hint(candidate)

        rule = self._rules.find_match(candidate, mime_hint)
        if rule is None:
            logger.debug("No rule matches %s (mime=%s)", source, mime_hint)
            return RelocationOutcome.unmatched(source)

        try:
            target_dir = self._resolver.resolve(rule.destination, candidate)
        except MetadataError as e:
            logger.debug("%s", e)
            return RelocationOutcome.failed(source, e)

        target = target_dir / candidate.name
        try:
            self._deps.file_manager.ensure_directory(target_dir)
            self._deps.file_manager.move_file(source, target)
        except MoveError as e:
            logger.debug("%s", e)
            return RelocationOutcome.failed(source, e)

        logger.debug("Successfully moved %s to %s", source, target_dir)
        return RelocationOutcome.moved(source, target)

    def _mime_hint(self, candidate: FileCandidate) -> Optional[str]:
        # Only rules with MIME matchers can use the hint
        if not self._rules.uses_mime_types:
            return None
        return self._deps.mime_detector.detect(candidate.path)


def relocate(
    config: SortConfig,
    rules: RuleSet | Sequence[SortRule],
    candidates: Iterable[FileCandidate],
    mime_detector: Optional[MimeDetector] = None,
    file_manager: Optional[FileOperations] = None,
) -> list[RelocationOutcome]:
    """Relocate candidates with the given configuration and rules.

    See ``Relocator.relocate``.
    """
    deps = RelocatorDependencies(
        mime_detector=mime_detector or NullMimeDetector(),
        file_manager=file_manager or FileManager(),
    )
    return Relocator(config, rules, deps).relocate(candidates)
