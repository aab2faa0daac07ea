"""Linear client library for markdown sync.

This package provides Python abstractions over the Linear GraphQL API,
exposing issues and documents as records with a dotted-path attribute
accessor.
"""

from .errors import (
    SyncError,
    LinearError,
    InvalidCredentialsError,
    RecordNotFoundError,
    APIUnreachableError,
    APIAccessError,
    RemoteUpdateFailedError,
)
from .models import (
    ABSENT,
    DocumentRecord,
    IssueRecord,
    Record,
    RecordType,
    Value,
)

__all__ = [
    "SyncError",
    "LinearError",
    "InvalidCredentialsError",
    "RecordNotFoundError",
    "APIUnreachableError",
    "APIAccessError",
    "RemoteUpdateFailedError",
    "ABSENT",
    "DocumentRecord",
    "IssueRecord",
    "Record",
    "RecordType",
    "Value",
]
