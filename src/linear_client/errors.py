"""Typed exception hierarchy for Linear-related errors.

This module defines all custom exceptions used by the Linear client library.
All exceptions inherit from LinearError base class for easy catching and
include descriptive messages with context to help with debugging.
"""

from typing import Optional


class SyncError(Exception):
    """Base exception for all linear-md errors.

    Use this to catch any application-level error from the sync tool.
    """
    pass


class LinearError(SyncError):
    """Base exception for all Linear-related errors."""
    pass


class InvalidCredentialsError(LinearError):
    """Raised when the API key is missing, malformed, or rejected by Linear."""

    def __init__(self, reason: str, endpoint: str = "https://api.linear.app/graphql"):
        super().__init__(
            f"API key is invalid ({reason}, endpoint: {endpoint})"
        )
        self.reason = reason
        self.endpoint = endpoint


class RecordNotFoundError(LinearError):
    """Raised when a resolved issue or document does not exist in Linear."""

    def __init__(self, record_type: str, record_id: str):
        super().__init__(f"{record_type.capitalize()} {record_id} not found")
        self.record_type = record_type
        self.record_id = record_id


class APIUnreachableError(LinearError):
    """Raised when the Linear API is not available or unreachable."""

    def __init__(self, endpoint: str):
        super().__init__(f"API is not available at {endpoint}")
        self.endpoint = endpoint


class RemoteUpdateFailedError(LinearError):
    """Raised when an issue or document update is rejected or fails in transit."""

    def __init__(self, record_type: str, record_id: str, reason: Optional[str] = None):
        message = f"Failed to update {record_type} {record_id}"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.record_type = record_type
        self.record_id = record_id
        self.reason = reason


class APIAccessError(LinearError):
    """Raised when a Linear API call fails for a reason other than the above."""

    def __init__(self, message: str = "Linear API failure"):
        super().__init__(message)
