"""Unit tests for cli.output module."""

import logging
from unittest.mock import Mock

import pytest

from src.cli.output import OutputHandler
from src.linear_client.models import RecordType
from src.sync_engine.models import PullResult, PushResult
from src.sync_engine.sync_actions import SYNC_DOWN, SYNC_UP


def printed(handler):
    """Join everything passed to console.print."""
    return "\n".join(str(c.args[0]) for c in handler.console.print.call_args_list)


@pytest.fixture
def handler():
    output = OutputHandler(verbosity=0, no_color=True)
    output.console = Mock()
    return output


class TestOutputHandlerInit:
    """Test cases for OutputHandler initialization."""

    def test_init_defaults(self):
        output = OutputHandler()

        assert output.verbosity == 0
        assert output.console is not None
        assert output.logger.name == "linear-md"
        assert output.logger.level == logging.WARNING

    @pytest.mark.parametrize("verbosity,level", [(1, logging.INFO), (2, logging.DEBUG)])
    def test_logger_level_follows_verbosity(self, verbosity, level):
        assert OutputHandler(verbosity=verbosity).logger.level == level

    def test_logger_handlers_not_duplicated(self):
        OutputHandler()
        output = OutputHandler()

        assert len(output.logger.handlers) == 1


class TestMessages:
    """Test cases for message methods."""

    def test_success(self, handler):
        handler.success("Done")
        assert "Done" in printed(handler)

    def test_error(self, handler):
        handler.error("Failed")
        assert "Failed" in printed(handler)

    def test_info_hidden_at_verbosity_0(self, handler):
        handler.info("details")
        handler.console.print.assert_not_called()

    def test_info_shown_at_verbosity_1(self, handler):
        handler.verbosity = 1
        handler.info("details")
        assert "details" in printed(handler)

    def test_warning(self, handler):
        handler.warning("Check settings")
        assert "Check settings" in printed(handler)


class TestResults:
    """Test cases for result printers."""

    def test_pull_result(self, handler):
        handler.print_pull_result(PullResult(
            record_type=RecordType.ISSUE,
            record_id="ABC-1",
            source_path="notes/ABC-1.md",
            destination_path="notes/Hello.md",
            renamed=True,
        ))

        output = printed(handler)
        assert "File successfully updated with Linear issue ABC-1" in output
        assert "notes/Hello.md" in output
        assert "Removed old file notes/ABC-1.md" in output

    def test_pull_result_without_rename(self, handler):
        handler.print_pull_result(PullResult(
            record_type=RecordType.DOCUMENT,
            record_id="doc-1",
            source_path="notes/Design.md",
            destination_path="notes/Design.md",
        ))

        assert "Removed old file" not in printed(handler)

    def test_push_result_with_header_added(self, handler):
        handler.print_push_result(PushResult(
            record_type=RecordType.ISSUE,
            record_id="ABC-1",
            title="ABC-1",
            header_added=True,
        ))

        output = printed(handler)
        assert "Linear issue ABC-1 successfully updated" in output
        assert "linear-issue-id" in output

    def test_actions(self, handler):
        handler.print_actions("a.md", [SYNC_UP, SYNC_DOWN])

        output = printed(handler)
        assert "Sync Up" in output
        assert "--pull" in output

    def test_no_actions(self, handler):
        handler.print_actions("a.md", [])

        assert "No sync actions for a.md" in printed(handler)
