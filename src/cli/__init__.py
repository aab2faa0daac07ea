"""Command-line interface for Linear markdown sync.

This package provides the `linear-md` CLI tool that pulls Linear issues and
documents into local Markdown files and pushes local edits back, with
colored output and exit codes that reflect the failure category.
"""

from .sync_command import SyncCommand
from .models import ExitCode
from .errors import CLIError, InvalidSettingError

__all__ = [
    'SyncCommand',
    'ExitCode',
    'CLIError',
    'InvalidSettingError',
]
