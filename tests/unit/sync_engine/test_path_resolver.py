"""Unit tests for sync_engine.path_resolver module."""

import os
from datetime import date
from unittest.mock import patch

import pytest

from src.linear_client.models import RecordType
from src.sync_engine.errors import FilesystemError
from src.sync_engine.models import DateFormat, DirectoryMode, TemplateConfig
from src.sync_engine.path_resolver import UNKNOWN_STATUS, UNKNOWN_TEAM, PathResolver
from tests.fixtures.sample_records import make_document, make_issue


class TestBucketFor:
    """Test cases for PathResolver.bucket_for."""

    def test_none_mode_has_no_bucket(self):
        assert PathResolver.bucket_for(make_issue(), DirectoryMode.NONE) is None

    def test_team_bucket(self):
        assert PathResolver.bucket_for(make_issue(), DirectoryMode.TEAM) == "Platform"

    def test_status_bucket(self):
        assert PathResolver.bucket_for(make_issue(), "status") == "In Progress"

    def test_missing_team_uses_fallback(self):
        assert PathResolver.bucket_for(make_issue(team=None), DirectoryMode.TEAM) == UNKNOWN_TEAM

    def test_document_status_uses_fallback(self):
        assert PathResolver.bucket_for(make_document(), DirectoryMode.STATUS) == UNKNOWN_STATUS

    def test_bucket_name_is_sanitized(self):
        issue = make_issue(team={'id': 't', 'name': 'R/D: Core'})

        assert PathResolver.bucket_for(issue, DirectoryMode.TEAM) == "R-D- Core"


class TestBucketNames:
    """Test cases for PathResolver.bucket_names."""

    def test_none_mode_has_no_buckets(self):
        assert PathResolver.bucket_names(make_issue(), DirectoryMode.NONE) == set()

    def test_status_mode_lists_team_workflow_states(self):
        names = PathResolver.bucket_names(make_issue(), DirectoryMode.STATUS)

        assert names == {"Todo", "In Progress", "Done", UNKNOWN_STATUS}

    def test_team_mode_uses_given_team_names(self):
        names = PathResolver.bucket_names(make_issue(), "team", ["Mobile", "R/D"])

        assert names == {"Platform", "Mobile", "R-D", UNKNOWN_TEAM}

    def test_document_status_mode_only_has_fallback(self):
        assert PathResolver.bucket_names(make_document(), DirectoryMode.STATUS) == {UNKNOWN_STATUS}


class TestDirectoryFor:
    """Test cases for PathResolver.directory_for."""

    def test_none_mode_returns_base_directory(self, tmp_path):
        directory = PathResolver.directory_for(make_issue(), str(tmp_path), DirectoryMode.NONE)

        assert directory == str(tmp_path)

    def test_team_directory_created(self, tmp_path):
        directory = PathResolver.directory_for(make_issue(), str(tmp_path), DirectoryMode.TEAM)

        assert directory == os.path.join(str(tmp_path), "Platform")
        assert os.path.isdir(directory)

    def test_existing_directory_reused(self, tmp_path):
        (tmp_path / "In Progress").mkdir()

        directory = PathResolver.directory_for(make_issue(), str(tmp_path), DirectoryMode.STATUS)

        assert directory == os.path.join(str(tmp_path), "In Progress")

    def test_empty_base_directory_without_bucket(self):
        assert PathResolver.directory_for(make_issue(), "", DirectoryMode.NONE) == ""

    def test_mkdir_failure_raises_filesystem_error(self, tmp_path):
        with patch('src.sync_engine.path_resolver.os.makedirs', side_effect=PermissionError("denied")):
            with pytest.raises(FilesystemError) as exc_info:
                PathResolver.directory_for(make_issue(), str(tmp_path), DirectoryMode.TEAM)

        assert exc_info.value.operation == 'create_directory'


class TestFilenameFor:
    """Test cases for PathResolver.filename_for."""

    def test_default_template(self):
        filename = PathResolver.filename_for(make_issue(), "ABC-12", RecordType.ISSUE, TemplateConfig())

        assert filename == "Fix login.md"

    def test_template_with_date(self):
        config = TemplateConfig(filename_format="${date} ${id}", date_format=DateFormat.SHORT)

        filename = PathResolver.filename_for(
            make_issue(), "ABC-12", RecordType.ISSUE, config, today=date(2023, 4, 28)
        )

        assert filename == "230428 ABC-12.md"

    def test_unsafe_title_sanitized(self):
        issue = make_issue(title="What: why?")

        filename = PathResolver.filename_for(issue, "ABC-12", RecordType.ISSUE, TemplateConfig())

        assert filename == "What- why-.md"
