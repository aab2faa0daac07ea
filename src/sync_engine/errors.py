"""Typed exception hierarchy for sync engine errors.

This module defines all custom exceptions raised while resolving, merging and
writing markdown files. All exceptions inherit from SyncEngineError and
include descriptive messages with context to help with debugging.
"""

from typing import Optional

from src.linear_client.errors import SyncError


class SyncEngineError(SyncError):
    """Base exception for all sync engine errors."""
    pass


class IdentityNotFoundError(SyncEngineError):
    """Raised when neither the metadata block nor the filename yields a Linear id."""

    def __init__(self, file_path: str):
        super().__init__(
            f"Linear ID not found in {file_path}: add a 'linear-issue-id' or "
            f"'linear-document-id' line to the frontmatter, or rename the file "
            f"to include an issue key such as ABC-123"
        )
        self.file_path = file_path


class HeaderMalformedError(SyncEngineError):
    """Raised when a frontmatter block is opened but cannot be separated from the body."""

    def __init__(self, file_path: str, message: str = "YAML frontmatter not found"):
        super().__init__(f"Frontmatter error in {file_path}: {message}")
        self.file_path = file_path
        self.message = message


class BodyNotFoundError(HeaderMalformedError):
    """Raised when the closing frontmatter marker has no body after it."""

    def __init__(self, file_path: str):
        super().__init__(file_path, "content after YAML frontmatter not found")


class FilesystemError(SyncEngineError):
    """Raised when filesystem operations fail (read, write, delete, mkdir)."""

    def __init__(self, file_path: str, operation: str, reason: Optional[str] = None):
        message = f"Filesystem operation '{operation}' failed for {file_path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.file_path = file_path
        self.operation = operation
        self.reason = reason


class ConfigError(SyncEngineError):
    """Raised when configuration validation fails."""

    def __init__(self, message: str, config_field: Optional[str] = None):
        if config_field:
            full_message = f"Configuration error in field '{config_field}': {message}"
        else:
            full_message = f"Configuration error: {message}"
        super().__init__(full_message)
        self.config_field = config_field
        self.original_message = message
