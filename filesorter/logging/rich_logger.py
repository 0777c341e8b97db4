"""Rich-based progress reporter implementation."""
from __future__ import annotations

import logging
import sys
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table
from rich.text import Text

from ..core.models import OutcomeKind, RelocationOutcome, SortStats


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Route library logging through Rich on stderr."""
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        show_time=verbose,
    )
    root = logging.getLogger()
    for existing in list(root.handlers):
        if isinstance(existing, RichHandler):
            root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(level)


class RichProgressReporter:
    """Progress reporter using Rich for terminal output.

    Implements the ProgressReporter protocol with Rich console output.
    """

    def __init__(
        self,
        verbose: bool = False,
        quiet: bool = False,
        console: Optional[Console] = None,
    ):
        """Initialize the reporter.

        Args:
            verbose: Enable verbose output.
            quiet: Suppress all non-essential output.
            console: Console to print to (stderr by default).
        """
        self._console = console or Console(stderr=True)
        self._verbose = verbose
        self._quiet = quiet
        self._progress: Optional[Progress] = None
        self._current_task_id: Optional[TaskID] = None

    # --- Phase Management ---

    def start_phase(self, name: str, total: int) -> None:
        """Start a new processing phase with progress bar."""
        if self._quiet:
            return

        self._progress = Progress(
            SpinnerColumn(),
            TextColumn("[bold blue]{task.description}"),
            BarColumn(bar_width=40),
            MofNCompleteColumn(),
            TextColumn("[cyan]•"),
            TimeElapsedColumn(),
            console=self._console,
            transient=True,
        )
        self._progress.start()
        self._current_task_id = self._progress.add_task(name, total=total)

    def advance_phase(self, amount: int = 1) -> None:
        """Advance the current phase by amount."""
        if self._progress and self._current_task_id is not None:
            self._progress.advance(self._current_task_id, amount)

    def end_phase(self) -> None:
        """End the current phase."""
        if self._progress:
            self._progress.stop()
            self._progress = None
            self._current_task_id = None

    # --- Logging Methods ---

    def info(self, message: str) -> None:
        if not self._quiet:
            self._console.print(f"[blue]ℹ[/blue] {escape(message)}")

    def success(self, message: str) -> None:
        if not self._quiet:
            self._console.print(f"[green]✓[/green] {escape(message)}")

    def warning(self, message: str) -> None:
        self._console.print(f"[yellow]⚠[/yellow] {escape(message)}")

    def error(self, message: str) -> None:
        self._console.print(f"[red]✗[/red] {escape(message)}", style="red")

    def debug(self, message: str) -> None:
        """Log a debug message (only in verbose mode)."""
        if self._verbose:
            self._console.print(f"[dim]  {escape(message)}[/dim]")

    # --- Specialized Output ---

    def print_header(self, title: str) -> None:
        if self._quiet:
            return
        self._console.print(Panel(Text(title, style="bold cyan"), border_style="cyan"))

    def print_config(self, config_items: dict) -> None:
        """Print configuration as a table."""
        if self._quiet:
            return

        table = Table(title="Configuration", show_header=True, header_style="bold")
        table.add_column("Setting", style="cyan")
        table.add_column("Value", style="white")

        for key, value in config_items.items():
            table.add_row(key, escape(str(value)))

        self._console.print(table)

    def print_outcome(self, outcome: RelocationOutcome) -> None:
        """Print one line for a relocation outcome."""
        if outcome.kind == OutcomeKind.MOVED:
            self.success(f"Moved {outcome.source} to {outcome.destination}")
        elif outcome.kind == OutcomeKind.UNMATCHED:
            self.info(f"Skipped {outcome.source}: no matching rule")
        else:
            self.error(f"Failed {outcome.source}: {outcome.error}")

    def print_stats(self, stats: SortStats) -> None:
        """Print run statistics."""
        if self._quiet:
            return

        table = Table(title="Sort Complete", show_header=False)
        table.add_column("Metric", style="cyan")
        table.add_column("Count", style="green", justify="right")

        table.add_row("Files Scanned", str(stats.total))
        table.add_row("Files Moved", str(stats.moved))
        table.add_row("Unmatched", str(stats.unmatched))
        table.add_row("Failed", str(stats.failed))

        if stats.elapsed_seconds > 0:
            table.add_row("", "")
            table.add_row("Time Elapsed", f"{stats.elapsed_seconds:.2f}s")

        self._console.print(table)

    # --- Context Managers ---

    def __enter__(self) -> "RichProgressReporter":
        return self

    def __exit__(self, *args) -> None:
        self.end_phase()


class QuietProgressReporter:
    """Minimal progress reporter that only shows problems."""

    def start_phase(self, name: str, total: int) -> None:
        pass

    def advance_phase(self, amount: int = 1) -> None:
        pass

    def end_phase(self) -> None:
        pass

    def info(self, message: str) -> None:
        pass

    def success(self, message: str) -> None:
        pass

    def warning(self, message: str) -> None:
        print(f"WARNING: {message}", file=sys.stderr)

    def error(self, message: str) -> None:
        print(f"ERROR: {message}", file=sys.stderr)

    def debug(self, message: str) -> None:
        pass

    def print_header(self, title: str) -> None:
        pass

    def print_config(self, config_items: dict) -> None:
        pass

    def print_outcome(self, outcome: RelocationOutcome) -> None:
        if outcome.kind == OutcomeKind.FAILED:
            self.error(f"Failed {outcome.source}: {outcome.error}")

    def print_stats(self, stats: SortStats) -> None:
        pass

    def __enter__(self) -> "QuietProgressReporter":
        return self

    def __exit__(self, *args) -> None:
        pass
