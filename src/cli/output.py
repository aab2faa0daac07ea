"""Rich console output for the linear-md command.

OutputHandler prints status lines, a spinner around remote calls, and the
outcome of each pull, push or action listing. Informational lines are gated
by the verbosity level; ``--no-color`` turns off styling.
"""

import logging
from contextlib import contextmanager
from typing import Iterator, List

from rich.console import Console
from rich.live import Live
from rich.spinner import Spinner

from src.sync_engine.models import PullResult, PushResult
from src.sync_engine.sync_actions import SyncAction

LOG_LEVELS = {0: logging.WARNING, 1: logging.INFO}


class OutputHandler:
    """Console front end shared by all CLI operations.

    Attributes:
        verbosity: 0 prints results only, 1 adds hints, 2 and above is debug
        console: Rich Console all output goes through
        logger: "linear-md" logger tuned to the same verbosity

    Example:
        >>> handler = OutputHandler(verbosity=1)
        >>> with handler.spinner("Fetching ABC-12..."):
        ...     issue = api.fetch_issue("ABC-12")
        >>> handler.success("Fetched ABC-12")
    """

    def __init__(self, verbosity: int = 0, no_color: bool = False):
        self.verbosity = verbosity
        self.console = Console(
            force_terminal=not no_color,
            no_color=no_color,
            highlight=False,
        )
        self.logger = self._build_logger()

    def _build_logger(self) -> logging.Logger:
        cli_logger = logging.getLogger("linear-md")
        cli_logger.setLevel(LOG_LEVELS.get(self.verbosity, logging.DEBUG))

        # Replace rather than stack handlers when several handlers are created
        stream = logging.StreamHandler()
        stream.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
        cli_logger.handlers = [stream]
        return cli_logger

    def success(self, message: str) -> None:
        self.console.print(f"[green]✓[/green] {message}")

    def error(self, message: str) -> None:
        self.console.print(f"[red]✗ {message}[/red]")

    def warning(self, message: str) -> None:
        self.console.print(f"[yellow]! {message}[/yellow]")

    def info(self, message: str) -> None:
        """Print only when verbosity is 1 or more."""
        if self.verbosity > 0:
            self.console.print(message)

    @contextmanager
    def spinner(self, message: str) -> Iterator[None]:
        """Show a spinner for the duration of the block."""
        with Live(Spinner("dots", text=message), console=self.console, refresh_per_second=10):
            yield

    def print_pull_result(self, result: PullResult) -> None:
        """Display the outcome of a pull."""
        self.success(
            f"File successfully updated with Linear {result.record_type.value} {result.record_id}"
        )
        self.console.print(f"  [blue]↓[/blue] {result.destination_path}")
        if result.renamed:
            self.console.print(f"  [dim]Removed old file {result.source_path}[/dim]")

    def print_push_result(self, result: PushResult) -> None:
        """Display the outcome of a push."""
        self.success(
            f"Linear {result.record_type.value} {result.record_id} successfully updated"
        )
        self.console.print(f"  [green]↑[/green] Title: {result.title}")
        if result.header_added:
            self.console.print(
                f"  [dim]Added linear-{result.record_type.value}-id frontmatter to the file[/dim]"
            )

    def print_actions(self, file_path: str, actions: List[SyncAction]) -> None:
        """Display the inline sync actions available for a file."""
        if not actions:
            self.console.print(f"[yellow]No sync actions for {file_path}[/yellow]")
            return
        for action in actions:
            self.console.print(f"  • {action.title} ([bold]--{action.command}[/bold])")
