"""CLI with subcommands: init, sort."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Iterable, Iterator, Optional

from .core.config import DEFAULT_DATE_PATTERN, Settings
from .core.errors import ConfigurationError, DestinationNotADirectory, SourceDirectoryError
from .core.models import FileCandidate
from .core.protocols import ProgressReporter
from .logging.rich_logger import QuietProgressReporter, RichProgressReporter, configure_logging

EXIT_OK = 0
EXIT_FAILURES = 1
EXIT_FATAL = 2
EXIT_INTERRUPTED = 130


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="filesorter",
        description="Sort files into category folders by file type.",
    )

    # Global options
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output",
    )
    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Suppress non-essential output",
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        default=None,
        help="Settings file (default: per-user config directory)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # ============ INIT command ============
    init_parser = subparsers.add_parser(
        "init",
        help="(Re)Initialize configuration file",
    )
    init_parser.add_argument(
        "sources",
        nargs="+",
        type=Path,
        metavar="SOURCE",
        help="Source directory (repeatable)",
    )
    init_parser.add_argument(
        "destination",
        type=Path,
        metavar="DESTINATION",
        help="Destination directory",
    )
    init_parser.add_argument(
        "-d", "--use-date-pattern",
        action="store_true",
        help="Use date pattern",
    )
    init_parser.add_argument(
        "-p", "--date-pattern",
        type=str,
        default=DEFAULT_DATE_PATTERN,
        help=f"Date subdir pattern (default: {DEFAULT_DATE_PATTERN.replace('%', '%%')})",
    )

    # ============ SORT command ============
    sort_parser = subparsers.add_parser(
        "sort",
        help="Sort source directories into destination (config file should be initialized first!)",
    )
    sort_parser.add_argument(
        "--no-mime",
        action="store_true",
        help="Match on file extensions only, without MIME-type detection",
    )

    return parser


def _settings_table(settings: Settings, mime_name: Optional[str] = None) -> dict:
    items = {
        "Sources": ", ".join(str(s) for s in settings.sources) or "(none)",
        "Destination": str(settings.destination) if settings.destination else "(none)",
        "Date Pattern": settings.date_pattern if settings.use_date_pattern else "disabled",
        "Rules": len(settings.sort_patterns),
    }
    if mime_name is not None:
        items["MIME Detection"] = mime_name
    return items


def _tracked(
    candidates: Iterable[FileCandidate],
    reporter: ProgressReporter,
) -> Iterator[FileCandidate]:
    for candidate in candidates:
        yield candidate
        reporter.advance_phase()


# ============ Command Handlers ============

def cmd_init(args: argparse.Namespace, reporter: ProgressReporter) -> int:
    """Handle the init command."""
    from .persistence.settings_store import SettingsStore
    from .services.file_ops import FileManager

    store = SettingsStore(args.config)

    settings = Settings(
        sources=list(args.sources),
        destination=args.destination,
        use_date_pattern=args.use_date_pattern,
        date_pattern=args.date_pattern,
    )
    config = settings.to_sort_config()

    for source in settings.sources:
        if not source.is_dir():
            reporter.warning(f"Source directory does not exist yet: {source}")

    FileManager().ensure_directory(config.destination_root)

    backup = store.backup()
    if backup is not None:
        reporter.info(f"Moved old settings file to {backup}")

    path = store.save(settings)

    reporter.print_header("filesorter init")
    reporter.print_config(_settings_table(settings))
    reporter.success(f"Settings saved to {path}")
    return EXIT_OK


def cmd_sort(args: argparse.Namespace, reporter: ProgressReporter) -> int:
    """Handle the sort command."""
    from .engines.mime import create_mime_detector
    from .persistence.settings_store import SettingsStore
    from .services.relocator import Relocator, RelocatorDependencies
    from .services.scanner import DirectoryScanner

    store = SettingsStore(args.config)
    settings = store.load()

    if not settings.sources or settings.destination is None:
        reporter.error(f"No sources or destination configured in {store.path}")
        reporter.info("Run 'filesorter init SOURCE DESTINATION' first.")
        return EXIT_FAILURES

    config = settings.to_sort_config()
    rules = settings.rule_set()
    detector = create_mime_detector(enabled=not args.no_mime and rules.uses_mime_types)

    reporter.print_header("filesorter sort")
    reporter.print_config(_settings_table(settings, detector.name))

    scanner = DirectoryScanner()
    candidates: list[FileCandidate] = []
    source_errors = 0
    for source in settings.sources:
        try:
            found = scanner.enumerate_candidates(source)
        except SourceDirectoryError as e:
            reporter.warning(f"{e}, skipping")
            source_errors += 1
            continue
        reporter.debug(f"{len(found)} files in {source}")
        candidates.extend(found)

    if not candidates:
        reporter.info("No files to sort")
        return EXIT_OK if source_errors == 0 else EXIT_FAILURES

    relocator = Relocator(
        config,
        rules,
        RelocatorDependencies(mime_detector=detector),
    )

    fatal: Optional[DestinationNotADirectory] = None
    reporter.start_phase("Sorting", total=len(candidates))
    try:
        outcomes = relocator.relocate(_tracked(candidates, reporter))
    except DestinationNotADirectory as e:
        fatal = e
    finally:
        reporter.end_phase()

    if fatal is not None:
        for outcome in fatal.outcomes:
            reporter.print_outcome(outcome)
        reporter.error(f"{fatal}, exiting...")
        return EXIT_FATAL

    for outcome in outcomes:
        reporter.print_outcome(outcome)
    reporter.print_stats(relocator.stats)

    if relocator.stats.failed or source_errors:
        return EXIT_FAILURES
    return EXIT_OK


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=args.verbose, quiet=args.quiet)

    if args.quiet:
        reporter: ProgressReporter = QuietProgressReporter()
    else:
        reporter = RichProgressReporter(verbose=args.verbose)

    # No command specified - show help
    if not args.command:
        parser.print_help()
        return EXIT_OK

    try:
        if args.command == "init":
            return cmd_init(args, reporter)
        elif args.command == "sort":
            return cmd_sort(args, reporter)
        else:
            reporter.error(f"Unknown command: {args.command}")
            return EXIT_FAILURES

    except KeyboardInterrupt:
        return EXIT_INTERRUPTED
    except DestinationNotADirectory as e:
        reporter.error(f"{e}, exiting...")
        return EXIT_FATAL
    except ConfigurationError as e:
        reporter.error(f"Configuration error: {e}")
        return EXIT_FAILURES
    except Exception as e:
        reporter.error(f"Error: {e}")
        if args.verbose:
            import traceback
            traceback.print_exc()
        return EXIT_FAILURES


if __name__ == "__main__":
    sys.exit(main())
