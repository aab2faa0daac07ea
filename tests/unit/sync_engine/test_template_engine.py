"""Unit tests for sync_engine.template_engine module."""

from datetime import date, datetime

import pytest

from src.linear_client.models import RecordType
from src.sync_engine.models import DateFormat
from src.sync_engine.template_engine import TemplateEngine
from tests.fixtures.sample_records import make_document, make_issue

APRIL_28 = date(2023, 4, 28)


class TestFormatDate:
    """Test cases for TemplateEngine.format_date."""

    @pytest.mark.parametrize("date_format,expected", [
        (DateFormat.ISO, "2023-04-28"),
        (DateFormat.SHORT, "230428"),
        (DateFormat.YMD, "20230428"),
        (DateFormat.DMY, "28042023"),
        (DateFormat.MDY, "04282023"),
    ])
    def test_formats(self, date_format, expected):
        assert TemplateEngine.format_date(APRIL_28, date_format) == expected

    def test_accepts_string_values(self):
        assert TemplateEngine.format_date(APRIL_28, "Short") == "230428"

    def test_unknown_format_falls_back_to_ymd(self):
        assert TemplateEngine.format_date(APRIL_28, "Julian") == "20230428"

    def test_zero_padding(self):
        assert TemplateEngine.format_date(date(2024, 1, 5), DateFormat.ISO) == "2024-01-05"

    def test_datetime_uses_calendar_fields(self):
        assert TemplateEngine.format_date(datetime(2023, 4, 28, 23, 59), DateFormat.YMD) == "20230428"


class TestExpand:
    """Test cases for TemplateEngine.expand."""

    def test_id_and_title(self):
        issue = make_issue(identifier="ABC-12", title="Fix bug")

        raw = TemplateEngine.expand("${id}-${title}.md", issue, "ABC-12", RecordType.ISSUE)

        assert raw == "ABC-12-Fix bug.md"

    def test_issue_key_preferred_over_resolved_identifier(self):
        issue = make_issue(identifier="ABC-12")

        raw = TemplateEngine.expand("${id}", issue, "2b9c0a4e-issue-uuid", RecordType.ISSUE)

        assert raw == "ABC-12"

    def test_document_uses_resolved_identifier(self):
        document = make_document()

        raw = TemplateEngine.expand("${id} ${ticket}", document, "doc-7f3e", RecordType.DOCUMENT)

        assert raw == "doc-7f3e doc-7f3e"

    def test_type_and_date(self):
        issue = make_issue()

        raw = TemplateEngine.expand(
            "${date}-${type}.md", issue, "ABC-12", RecordType.ISSUE,
            DateFormat.ISO, today=APRIL_28,
        )

        assert raw == "2023-04-28-issue.md"

    def test_missing_title_is_untitled(self):
        issue = make_issue(title=None)

        assert TemplateEngine.expand("${title}", issue, "ABC-12", RecordType.ISSUE) == "Untitled"

    def test_every_occurrence_replaced(self):
        issue = make_issue(title="T")

        assert TemplateEngine.expand("${title}${title}", issue, "ABC-12", RecordType.ISSUE) == "TT"

    def test_unknown_token_left_literal(self):
        issue = make_issue(title="T")

        assert TemplateEngine.expand("${title}-${team}", issue, "ABC-12", RecordType.ISSUE) == "T-${team}"

    def test_tokens_in_title_not_expanded(self):
        issue = make_issue(title="${id}")

        assert TemplateEngine.expand("${title}", issue, "ABC-12", RecordType.ISSUE) == "${id}"


class TestSanitize:
    """Test cases for filesafe conversion."""

    def test_unsafe_characters_become_hyphens(self):
        assert TemplateEngine.sanitize("Bad:Name?.md") == "Bad-Name-.md"

    def test_all_unsafe_characters(self):
        assert TemplateEngine.sanitize_component('a/b\\c?d%e*f:g|h"i<j>k') == "a-b-c-d-e-f-g-h-i-j-k"

    def test_extension_appended(self):
        assert TemplateEngine.sanitize("Notes") == "Notes.md"

    def test_extension_check_is_case_insensitive(self):
        assert TemplateEngine.sanitize("Notes.MD") == "Notes.MD"

    def test_other_extension_gets_md_appended(self):
        assert TemplateEngine.sanitize("notes.txt") == "notes.txt.md"

    def test_spaces_preserved(self):
        assert TemplateEngine.sanitize("Fix login page.md") == "Fix login page.md"
