"""Typer entry point for linear-md.

A single command whose flags select the operation: pull, push, action
listing, setting updates or an API key check.
"""

import logging
import os
import sys
from datetime import datetime
from typing import List, Optional

import typer

from src.cli.models import ExitCode
from src.cli.output import OutputHandler
from src.cli.sync_command import SyncCommand
from src.sync_engine.config_store import ConfigStore

__version__ = "0.1.0"

app = typer.Typer(
    name="linear-md",
    help="""Sync local Markdown files with Linear issues and documents.

QUICK START:
  linear-md notes/ABC-12.md --pull          # Linear -> local (Sync Down)
  linear-md notes/ABC-12.md --push          # local -> Linear (Sync Up)
  linear-md --set filename_format='${id}-${title}.md'
  linear-md --check-auth                    # Verify LINEAR_API_KEY""",
    add_completion=False,
    rich_markup_mode=None,
    no_args_is_help=False,
)

logger = logging.getLogger(__name__)

GETTING_STARTED_MESSAGE = """linear-md FILE --pull                 # Linear -> local (Sync Down)
linear-md FILE --push                 # local -> Linear (Sync Up)
linear-md FILE --actions              # Show available sync actions
linear-md --set KEY=VALUE             # Update a setting
linear-md --check-auth                # Verify LINEAR_API_KEY
--help                                # Show all options

Files are bound to Linear by a 'linear-issue-id: ABC-12' (or
'linear-document-id: <id>') frontmatter line, or by an issue key in the file name."""


def _configure_logging(verbosity: int, logdir: Optional[str] = None) -> None:
    """Attach console (and optionally file) handlers to the ``src`` logger.

    Third-party loggers and the root logger keep their own configuration.

    Args:
        verbosity: 0 logs warnings, 1 adds info, 2 or more adds debug
        logdir: Directory that receives a ``linear-md_<timestamp>.log`` file
    """
    level = {0: logging.WARNING, 1: logging.INFO}.get(verbosity, logging.DEBUG)
    timestamp_format = "%H:%M:%S"

    engine_logger = logging.getLogger("src")
    engine_logger.setLevel(level)
    for stale in list(engine_logger.handlers):
        engine_logger.removeHandler(stale)
        stale.close()

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    handlers[0].setFormatter(
        logging.Formatter("%(asctime)s %(levelname)-7s %(message)s", datefmt=timestamp_format)
    )

    log_file = None
    if logdir:
        os.makedirs(logdir, exist_ok=True)
        log_file = os.path.join(logdir, f"linear-md_{datetime.now():%Y%m%d_%H%M%S}.log")
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(name)s %(levelname)s %(message)s")
        )
        handlers.append(file_handler)

    for handler in handlers:
        handler.setLevel(level)
        engine_logger.addHandler(handler)

    if log_file:
        logger.info(f"Writing log to {log_file}")


@app.command()
def main_command(
    file: Optional[str] = typer.Argument(
        None,
        help="Markdown file to sync",
    ),
    pull: bool = typer.Option(
        False,
        "--pull",
        "--sync-down",
        help="Overwrite the file with its Linear issue/document (Linear -> local)",
    ),
    push: bool = typer.Option(
        False,
        "--push",
        "--sync-up",
        help="Update the Linear issue/document from the file (local -> Linear)",
    ),
    actions: bool = typer.Option(
        False,
        "--actions",
        help="Show the sync actions available for the file",
    ),
    settings: Optional[List[str]] = typer.Option(
        None,
        "--set",
        help="Update a setting, e.g. --set date_format=ISO (can be used multiple times)",
        metavar="KEY=VALUE",
    ),
    check_auth: bool = typer.Option(
        False,
        "--check-auth",
        help="Verify LINEAR_API_KEY against the Linear API",
    ),
    config_path: str = typer.Option(
        ConfigStore.DEFAULT_CONFIG_PATH,
        "--config",
        help="Path to the settings file",
        metavar="PATH",
    ),
    logdir: Optional[str] = typer.Option(
        None,
        "--logdir",
        help="Directory for log files (creates timestamped log file)",
    ),
    verbosity: int = typer.Option(
        0,
        "--verbosity",
        "-v",
        help="Verbosity level: 0=summary, 1=info, 2=debug",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable colored output",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
    ),
) -> None:
    """Sync local Markdown files with Linear issues and documents.

    \b
    QUICK START:
      linear-md notes/ABC-12.md --pull          # Linear -> local (Sync Down)
      linear-md notes/ABC-12.md --push          # local -> Linear (Sync Up)
      linear-md notes/ABC-12.md --actions       # Show available sync actions

    \b
    SETTINGS:
      linear-md --set filename_format='${id}-${title}.md'
      linear-md --set create_directory=true --set directory_format=team
      linear-md --set custom_frontmatter_fields='[team.name, state.name]'
    """
    if version:
        typer.echo(f"linear-md version {__version__}")
        raise typer.Exit()

    if pull and push:
        typer.echo("Error: --pull and --push are mutually exclusive", err=True)
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    needs_file = pull or push or actions
    if needs_file and file is None:
        typer.echo("Error: a FILE argument is required with --pull, --push or --actions", err=True)
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    if not needs_file and not settings and not check_auth:
        typer.echo(GETTING_STARTED_MESSAGE)
        raise typer.Exit()

    _configure_logging(verbosity, logdir)
    output = OutputHandler(verbosity=verbosity, no_color=no_color)
    sync_cmd = SyncCommand(config_path=config_path, output_handler=output)

    exit_code = ExitCode.SUCCESS
    if settings:
        exit_code = sync_cmd.apply_settings(settings)
    if exit_code == ExitCode.SUCCESS and check_auth:
        exit_code = sync_cmd.check_auth()
    if exit_code == ExitCode.SUCCESS and file is not None:
        if pull:
            exit_code = sync_cmd.pull(file)
        elif push:
            exit_code = sync_cmd.push(file)
        elif actions:
            exit_code = sync_cmd.show_actions(file)

    raise typer.Exit(exit_code)


def main() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    main()
