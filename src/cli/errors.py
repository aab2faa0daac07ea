"""Typed exception hierarchy for CLI-related errors.

This module defines all custom exceptions used by the CLI.
All exceptions inherit from CLIError base class for easy catching.
"""

from src.linear_client.errors import SyncError


class CLIError(SyncError):
    """Base exception for all CLI-related errors."""
    pass


class InvalidSettingError(CLIError):
    """Raised when a --set argument is not of the form KEY=VALUE."""

    def __init__(self, assignment: str):
        super().__init__(
            f"Invalid setting '{assignment}': expected KEY=VALUE"
        )
        self.assignment = assignment
