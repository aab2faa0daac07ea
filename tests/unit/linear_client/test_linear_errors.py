"""Unit tests for linear_client.errors module."""

import pytest

from src.linear_client.errors import (
    SyncError,
    LinearError,
    InvalidCredentialsError,
    RecordNotFoundError,
    APIUnreachableError,
    APIAccessError,
    RemoteUpdateFailedError,
)


class TestHierarchy:
    """All Linear errors share the SyncError root."""

    @pytest.mark.parametrize("error_class", [
        InvalidCredentialsError,
        RecordNotFoundError,
        APIUnreachableError,
        APIAccessError,
        RemoteUpdateFailedError,
    ])
    def test_inherits_from_linear_error(self, error_class):
        assert issubclass(error_class, LinearError)
        assert issubclass(error_class, SyncError)


class TestRecordNotFoundError:
    """Test cases for RecordNotFoundError."""

    def test_issue_message(self):
        error = RecordNotFoundError("issue", "ABC-12")
        assert str(error) == "Issue ABC-12 not found"
        assert error.record_type == "issue"
        assert error.record_id == "ABC-12"

    def test_document_message(self):
        error = RecordNotFoundError("document", "d4c2")
        assert str(error) == "Document d4c2 not found"


class TestRemoteUpdateFailedError:
    """Test cases for RemoteUpdateFailedError."""

    def test_message_with_reason(self):
        error = RemoteUpdateFailedError("issue", "uuid-1", "timeout")
        assert str(error) == "Failed to update issue uuid-1: timeout"
        assert error.reason == "timeout"

    def test_message_without_reason(self):
        error = RemoteUpdateFailedError("document", "uuid-2")
        assert str(error) == "Failed to update document uuid-2"


class TestOtherErrors:
    """Message formats of the remaining errors."""

    def test_invalid_credentials_message(self):
        error = InvalidCredentialsError("rejected by Linear")
        assert "API key is invalid" in str(error)
        assert "rejected by Linear" in str(error)
        assert error.endpoint == "https://api.linear.app/graphql"

    def test_api_unreachable_message(self):
        error = APIUnreachableError("https://api.linear.app/graphql")
        assert str(error) == "API is not available at https://api.linear.app/graphql"

    def test_api_access_default_message(self):
        assert str(APIAccessError()) == "Linear API failure"
