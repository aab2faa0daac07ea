"""Unit tests for sync_engine.errors module."""

import pytest

from src.linear_client.errors import SyncError
from src.sync_engine.errors import (
    BodyNotFoundError,
    ConfigError,
    FilesystemError,
    HeaderMalformedError,
    IdentityNotFoundError,
    SyncEngineError,
)


class TestErrorHierarchy:
    """All engine errors share the SyncError root."""

    @pytest.mark.parametrize("error", [
        IdentityNotFoundError("a.md"),
        HeaderMalformedError("a.md"),
        BodyNotFoundError("a.md"),
        FilesystemError("a.md", "write"),
        ConfigError("bad"),
    ])
    def test_inherits_from_sync_engine_error(self, error):
        assert isinstance(error, SyncEngineError)
        assert isinstance(error, SyncError)


class TestMessages:
    """Error messages carry their context."""

    def test_header_malformed_default_message(self):
        error = HeaderMalformedError("notes/a.md")

        assert str(error) == "Frontmatter error in notes/a.md: YAML frontmatter not found"
        assert error.file_path == "notes/a.md"

    def test_body_not_found_message(self):
        assert "content after YAML frontmatter not found" in str(BodyNotFoundError("a.md"))

    def test_filesystem_error_with_reason(self):
        error = FilesystemError("a.md", "delete", "Permission denied")

        assert str(error) == "Filesystem operation 'delete' failed for a.md: Permission denied"
        assert error.operation == "delete"

    def test_filesystem_error_without_reason(self):
        assert str(FilesystemError("a.md", "read")) == "Filesystem operation 'read' failed for a.md"

    def test_config_error_with_field(self):
        error = ConfigError("must be true or false", "skip_frontmatter")

        assert str(error) == "Configuration error in field 'skip_frontmatter': must be true or false"
        assert error.config_field == "skip_frontmatter"
        assert error.original_message == "must be true or false"
