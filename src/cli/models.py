"""Data models for CLI operations."""

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes for CLI operations.

    - SUCCESS (0): Operation completed successfully
    - GENERAL_ERROR (1): Missing id, malformed frontmatter, config or filesystem failure
    - AUTH_ERROR (3): API key missing, malformed or rejected
    - NETWORK_ERROR (4): Linear API unreachable or failing
    - NOT_FOUND (5): The bound issue or document does not exist
    - UPDATE_FAILED (6): Linear rejected the issue or document update

    Example:
        >>> exit_code = ExitCode.SUCCESS
        >>> sys.exit(exit_code)
    """
    SUCCESS = 0
    GENERAL_ERROR = 1
    AUTH_ERROR = 3
    NETWORK_ERROR = 4
    NOT_FOUND = 5
    UPDATE_FAILED = 6
